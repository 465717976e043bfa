"""
Shared helpers
"""
from typing import List, Sequence, TypeVar

from .config import ConfigurationError

T = TypeVar("T")


def chunk(items: Sequence[T], size: int) -> List[List[T]]:
    """Split items into consecutive groups of at most ``size`` elements.

    Groups keep the input order and together cover every item exactly once;
    only the last group may be shorter than ``size``.

    Raises:
        ConfigurationError: if ``size`` is not a positive integer
    """
    if size is None or size <= 0:
        raise ConfigurationError(f"Batch size must be a positive integer (got {size})")

    items = list(items)
    return [items[i:i + size] for i in range(0, len(items), size)]


def truncate(value: str, length: int = 50) -> str:
    """Shorten a value for console previews"""
    return value[:length] + ("..." if len(value) > length else "")
