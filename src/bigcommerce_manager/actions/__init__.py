"""
Metafield actions

- MetafieldCreator: CSV files -> product metafields (create)
- MetafieldDeleter: filter criteria -> batched deletes
"""

from .create_metafields import MetafieldCreator
from .delete_metafields import MetafieldDeleter

__all__ = ["MetafieldCreator", "MetafieldDeleter"]
