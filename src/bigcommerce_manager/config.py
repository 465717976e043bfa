"""
Configuration management for BigCommerce metafield operations
"""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from dotenv import find_dotenv, load_dotenv

DEFAULT_API_URL = "https://api.bigcommerce.com"
DEFAULT_BATCH_SIZE = 50
DEFAULT_DATA_DIR = Path("csv")

FALSE_VALUES = {"false", "0", "no"}
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigurationError(ValueError):
    """Raised when the run is misconfigured, before any I/O happens"""
    pass


class MissingCriteriaError(ConfigurationError):
    """A delete was requested without any filter"""
    pass


def parse_bool_flag(value) -> bool:
    """Interpret a bool-like CLI value; only false/0/no turn a flag off"""
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() not in FALSE_VALUES


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name, str(default))
    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}")
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {value}")
    return value


@dataclass
class BigCommerceConfig:
    """BigCommerce API configuration"""

    store_hash: str = ""
    access_token: str = ""
    api_url: str = DEFAULT_API_URL
    request_timeout: int = 30
    max_retries: int = 3
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, store_hash: Optional[str] = None,
                 access_token: Optional[str] = None) -> "BigCommerceConfig":
        """Create configuration from environment variables (.env aware).

        Explicit ``store_hash`` / ``access_token`` arguments win over the
        environment so CLI flags can override a checked-in .env file.
        """
        load_dotenv(find_dotenv(usecwd=True))

        log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        if log_level not in LOG_LEVELS:
            raise ConfigurationError(
                f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {log_level!r}"
            )

        return cls(
            store_hash=store_hash or os.getenv("BIGCOMMERCE_STORE_HASH", ""),
            access_token=access_token or os.getenv("BIGCOMMERCE_ACCESS_TOKEN", ""),
            api_url=os.getenv("BIGCOMMERCE_API_URL", DEFAULT_API_URL),
            request_timeout=_int_from_env("REQUEST_TIMEOUT", 30),
            max_retries=_int_from_env("MAX_RETRIES", 3),
            log_level=log_level,
        )

    @property
    def has_credentials(self) -> bool:
        return bool(self.store_hash and self.access_token)

    @property
    def base_url(self) -> str:
        return f"{self.api_url.rstrip('/')}/stores/{self.store_hash}/"


@dataclass
class RunOptions:
    """Options shared by the create and delete commands"""

    dry_run: bool = True
    batch_size: int = DEFAULT_BATCH_SIZE
    limit: Optional[int] = None

    def validate(self, config: BigCommerceConfig) -> None:
        if self.batch_size is None or self.batch_size <= 0:
            raise ConfigurationError(
                f"--batch-size must be a positive integer (got {self.batch_size})"
            )
        if self.limit is not None and self.limit < 0:
            raise ConfigurationError(f"--limit cannot be negative (got {self.limit})")
        if not self.dry_run and not config.has_credentials:
            raise ConfigurationError(
                "Both --access-token and --store-hash are required unless using --dry-run mode"
            )


@dataclass
class CreateOptions(RunOptions):
    """Options for creating metafields from a directory of CSV files"""

    data_dir: Path = DEFAULT_DATA_DIR
    skip: int = 0

    def validate(self, config: BigCommerceConfig) -> None:
        super().validate(config)
        if self.skip < 0:
            raise ConfigurationError(f"--skip cannot be negative (got {self.skip})")


@dataclass
class DeleteOptions(RunOptions):
    """Options for deleting metafields matched by key, namespace or product"""

    keys: List[str] = field(default_factory=list)
    namespaces: List[str] = field(default_factory=list)
    product_ids: List[int] = field(default_factory=list)
    delete_all: bool = False

    @property
    def has_criteria(self) -> bool:
        return bool(self.keys or self.namespaces or self.product_ids)

    def validate(self, config: BigCommerceConfig) -> None:
        super().validate(config)
        if not self.has_criteria and not self.delete_all:
            raise MissingCriteriaError(
                "You must specify at least one deletion criteria: "
                "--key, --namespace, --product-id (or --all)"
            )
