"""Tests for the delete pipeline."""

import logging

from bigcommerce_manager.actions import MetafieldDeleter
from bigcommerce_manager.config import DeleteOptions

from conftest import FakeClient


def make_records(count, start=1):
    return [
        {
            "id": i,
            "resource_id": 100 + i,
            "namespace": "custom",
            "key": "short_description_mf",
            "value": f"value {i}",
        }
        for i in range(start, start + count)
    ]


def make_deleter(client, **options):
    return MetafieldDeleter(DeleteOptions(**options), client, show_progress=False)


class TestBuildQuery:
    """Tests for the listing filter."""

    def test_all_criteria(self, fake_client):
        deleter = make_deleter(
            fake_client, keys=["a", "b"], namespaces=["custom"], product_ids=[1, 2]
        )
        assert deleter.build_query() == {
            "key:in": ["a", "b"],
            "namespace:in": ["custom"],
            "resource_id:in": [1, 2],
            "include_fields": ["id", "key", "namespace", "resource_id", "value"],
        }

    def test_only_given_criteria_are_sent(self, fake_client):
        query = make_deleter(fake_client, namespaces=["custom"]).build_query()
        assert "key:in" not in query
        assert "resource_id:in" not in query

    def test_delete_all_sends_no_filter(self, fake_client):
        query = make_deleter(fake_client, delete_all=True).build_query()
        assert set(query) == {"include_fields"}


class TestFetchMetafields:
    """Tests for fetch_metafields."""

    def test_fetches_everything_without_limit(self):
        client = FakeClient(records=make_records(7))
        metafields = make_deleter(client, keys=["k"]).fetch_metafields()
        assert [mf.id for mf in metafields] == list(range(1, 8))

    def test_limit_stops_mid_page(self):
        client = FakeClient(records=make_records(10))
        metafields = make_deleter(client, keys=["k"], limit=4).fetch_metafields()
        assert len(metafields) == 4

    def test_malformed_records_are_dropped(self):
        records = make_records(3) + [{"id": "x", "resource_id": 1}, {"namespace": "custom"}]
        client = FakeClient(records=records)
        metafields = make_deleter(client, keys=["k"]).fetch_metafields()
        assert [mf.id for mf in metafields] == [1, 2, 3]


class TestRun:
    """Tests for the full delete run."""

    def test_dry_run_fetches_but_never_deletes(self, capsys):
        client = FakeClient(records=make_records(8))
        summary = make_deleter(client, keys=["short_description_mf"]).run()
        out = capsys.readouterr().out

        assert summary.found == 8
        assert summary.deleted == 0
        assert client.deleted == []
        assert "Found 8 metafields to delete" in out
        assert "1. Product 101: custom.short_description_mf" in out
        assert "... and 3 more metafields" in out
        assert "--dry-run=false" in out

    def test_live_run_deletes_in_batches(self, capsys):
        client = FakeClient(records=make_records(5))
        summary = make_deleter(client, keys=["k"], dry_run=False, batch_size=2).run()

        assert client.deleted == [[1, 2], [3, 4], [5]]
        assert summary.deleted == 5
        assert summary.failed == 0
        assert "Successfully deleted: 5" in capsys.readouterr().out

    def test_failed_batch_does_not_stop_later_batches(self, caplog, capsys):
        client = FakeClient(records=make_records(5), fail_on_calls={2})

        with caplog.at_level(logging.ERROR, logger="bigcommerce_manager"):
            summary = make_deleter(client, keys=["k"], dry_run=False, batch_size=2).run()

        assert client.deleted == [[1, 2], [5]]
        assert summary.deleted == 3
        assert summary.failed == 2
        assert summary.batches_failed == 1
        assert "Error deleting batch 2" in caplog.text
        assert "Failed to delete: 2" in capsys.readouterr().out

    def test_no_matches(self, fake_client, capsys):
        summary = make_deleter(fake_client, keys=["missing"], dry_run=False).run()

        assert summary.found == 0
        assert fake_client.deleted == []
        assert "No metafields found matching the criteria" in capsys.readouterr().out
