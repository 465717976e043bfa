"""
BigCommerce Product Metafield CLI

Bulk-creates product metafields from CSV files and bulk-deletes them by key,
namespace or product id.

Usage:
    from bigcommerce_manager import BigCommerceClient, BigCommerceConfig, CreateOptions, MetafieldCreator

    config = BigCommerceConfig.from_env()
    options = CreateOptions(data_dir="csv", dry_run=False)
    options.validate(config)
    summary = MetafieldCreator(options, BigCommerceClient(config)).run()
"""

from .actions import MetafieldCreator, MetafieldDeleter
from .client import BigCommerceAPIError, BigCommerceClient
from .config import BigCommerceConfig, ConfigurationError, CreateOptions, DeleteOptions

__version__ = "1.0.0"
__all__ = [
    "BigCommerceAPIError",
    "BigCommerceClient",
    "BigCommerceConfig",
    "ConfigurationError",
    "CreateOptions",
    "DeleteOptions",
    "MetafieldCreator",
    "MetafieldDeleter",
]
