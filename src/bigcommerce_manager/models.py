"""
Data models for BigCommerce product metafields and run summaries
"""
from dataclasses import asdict, dataclass
from typing import Any, Dict

RESOURCE_TYPE = "product"
PERMISSION_SET = "write_and_sf_access"


@dataclass(frozen=True)
class Metafield:
    """A product metafield ready to be submitted to BigCommerce"""
    resource_id: int
    namespace: str
    key: str
    value: str
    description: str
    resource_type: str = RESOURCE_TYPE
    permission_set: str = PERMISSION_SET

    @property
    def full_key(self) -> str:
        return f"{self.namespace}.{self.key}"

    def to_payload(self) -> Dict[str, Any]:
        """Request body entry for the bulk-create endpoint"""
        return asdict(self)


@dataclass(frozen=True)
class ProductMetafield:
    """A product metafield as returned by the listing endpoint"""
    id: int
    resource_id: int
    namespace: str
    key: str
    value: str

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "ProductMetafield":
        """Create metafield from an already validated API record"""
        return cls(
            id=data["id"],
            resource_id=data["resource_id"],
            namespace=data["namespace"],
            key=data["key"],
            value=data["value"],
        )

    @property
    def full_key(self) -> str:
        return f"{self.namespace}.{self.key}"


@dataclass
class CreateSummary:
    """Counters for a create run"""
    files_found: int = 0
    files_processed: int = 0
    products: int = 0
    metafields: int = 0
    created: int = 0
    errors: int = 0


@dataclass
class DeleteSummary:
    """Counters for a delete run"""
    found: int = 0
    deleted: int = 0
    failed: int = 0
    batches_failed: int = 0
