"""Pytest configuration and fixtures."""

import logging
from pathlib import Path
from typing import Any, Dict, List

import pytest

from bigcommerce_manager.client import BigCommerceAPIError

SAMPLE_HEADER = "id,sku,namespace_1.key_1,namespace_1.key_2,namespace_2.key_1"
SAMPLE_ROWS = [
    "123,SKU0001,Value 11,Value 21,Value 31",
    "234,SKU0004,Value 12,,Value32",
]


class FakeClient:
    """Records calls made by the pipelines instead of hitting the API."""

    def __init__(self, records: List[Dict[str, Any]] = None, fail_on_calls=()):
        self.records = list(records or [])
        self.fail_on_calls = set(fail_on_calls)
        self.created: List[List[Dict[str, Any]]] = []
        self.deleted: List[List[int]] = []
        self.queries: List[Dict[str, Any]] = []
        self.calls = 0

    def _maybe_fail(self):
        self.calls += 1
        if self.calls in self.fail_on_calls:
            raise BigCommerceAPIError(f"call {self.calls} failed", status_code=422)

    def get_store_info(self):
        return {"name": "Test Store", "domain": "test.example.com"}

    def create_product_metafields(self, metafields):
        self._maybe_fail()
        self.created.append(list(metafields))
        return list(metafields)

    def delete_product_metafields(self, metafield_ids):
        self._maybe_fail()
        self.deleted.append(list(metafield_ids))

    def iter_product_metafields(self, query=None, page_size=250):
        self.queries.append(query)
        yield from self.records


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep a developer's .env and shell credentials out of the tests."""
    for name in (
        "BIGCOMMERCE_STORE_HASH",
        "BIGCOMMERCE_ACCESS_TOKEN",
        "BIGCOMMERCE_API_URL",
        "REQUEST_TIMEOUT",
        "MAX_RETRIES",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def fake_client():
    return FakeClient()


def write_csv(path: Path, header: str, rows: List[str]) -> Path:
    path.write_text("\n".join([header] + rows) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def csv_dir(tmp_path) -> Path:
    """Directory with two sample CSV files and one file that is not a CSV."""
    data_dir = tmp_path / "csv"
    data_dir.mkdir()
    write_csv(data_dir / "products_01.csv", SAMPLE_HEADER, SAMPLE_ROWS)
    write_csv(
        data_dir / "products_02.csv",
        SAMPLE_HEADER,
        ["345,SKU0005,Value 13,Value 23,", "abc,SKU0006,Value 14,,"],
    )
    (data_dir / "notes.txt").write_text("not a csv", encoding="utf-8")
    return data_dir


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers the CLI attaches so they don't outlive captured streams."""
    yield
    package_logger = logging.getLogger("bigcommerce_manager")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.setLevel(logging.NOTSET)
