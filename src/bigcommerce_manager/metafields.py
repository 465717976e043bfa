"""
CSV row to metafield transformation

A row is a wide CSV record: ``id`` and ``sku`` identify the product and every
``namespace.key`` column holds one metafield value. Blank cells are expected
and simply produce no metafield.
"""
import re
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from .models import Metafield, ProductMetafield

RESERVED_COLUMNS = ("id", "sku")

_PRODUCT_ID_PATTERN = re.compile(r"^\+?\d+$")


def parse_product_id(value: Any) -> Optional[int]:
    """Return the row id as a positive int, or None when it is not one"""
    if value is None:
        return None
    text = str(value).strip()
    if not _PRODUCT_ID_PATTERN.match(text):
        return None
    product_id = int(text)
    return product_id if product_id > 0 else None


def split_column(column: str) -> Optional[Tuple[str, str]]:
    """
    Split a ``namespace.key`` column name on its first dot

    Returns None for reserved columns and for names without a dot.
    """
    if column in RESERVED_COLUMNS or "." not in column:
        return None
    namespace, key = column.split(".", 1)
    return namespace, key


def format_key(key: str) -> str:
    """``short_description_mf`` -> ``Short Description Mf``"""
    words = key.replace("_", " ").split(" ")
    return " ".join(word[:1].upper() + word[1:] for word in words)


def transform_to_metafields(row: Mapping[str, Any], product_id: int) -> List[Metafield]:
    """
    Convert one CSV row into product metafields

    Args:
        row: Column name -> raw cell value
        product_id: Already validated BigCommerce product id

    Returns:
        Metafields in the row's column order, one per non-blank
        ``namespace.key`` cell
    """
    sku = row.get("sku") or f"product_{product_id}"
    metafields = []

    for column, raw_value in row.items():
        parts = split_column(column)
        if parts is None:
            continue

        value = "" if raw_value is None else str(raw_value).strip()
        if not value:
            continue

        namespace, key = parts
        metafields.append(Metafield(
            resource_id=product_id,
            namespace=namespace,
            key=key,
            value=value,
            description=f"{format_key(key)} for {sku}",
        ))

    return metafields


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_product_metafield(record: Any) -> bool:
    """Check that a fetched record has the fields needed to delete it"""
    if not isinstance(record, dict):
        return False
    return (
        _is_number(record.get("id"))
        and _is_number(record.get("resource_id"))
        and isinstance(record.get("key"), str)
        and isinstance(record.get("namespace"), str)
        and isinstance(record.get("value"), str)
    )


def filter_product_metafields(records: Iterable[Dict[str, Any]]) -> List[ProductMetafield]:
    """Keep well-formed records, dropping anything else without raising"""
    return [ProductMetafield.from_api(r) for r in records if is_product_metafield(r)]
