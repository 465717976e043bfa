"""
Delete product metafields matched by key, namespace or product id
"""
import logging
from typing import Any, Dict, List

from tqdm import tqdm

from ..client import BigCommerceAPIError, BigCommerceClient
from ..config import DeleteOptions
from ..metafields import filter_product_metafields
from ..models import DeleteSummary, ProductMetafield
from ..summary import print_delete_preview, print_delete_summary
from ..utils import chunk

logger = logging.getLogger(__name__)

INCLUDE_FIELDS = ["id", "key", "namespace", "resource_id", "value"]


class MetafieldDeleter:
    """Fetches matching metafields and deletes them in batches"""

    def __init__(self, options: DeleteOptions, client: BigCommerceClient,
                 show_progress: bool = True):
        self.options = options
        self.client = client
        self.show_progress = show_progress
        self.summary = DeleteSummary()

    def build_query(self) -> Dict[str, Any]:
        """Listing filter for the configured criteria"""
        query: Dict[str, Any] = {}
        if self.options.keys:
            query["key:in"] = list(self.options.keys)
        if self.options.namespaces:
            query["namespace:in"] = list(self.options.namespaces)
        if self.options.product_ids:
            query["resource_id:in"] = list(self.options.product_ids)
        query["include_fields"] = INCLUDE_FIELDS
        return query

    def fetch_metafields(self) -> List[ProductMetafield]:
        """
        Fetch matching metafields, stopping once the limit is reached

        Records without the expected id/resource_id/key/namespace/value
        shape are dropped.
        """
        limit = self.options.limit or None
        records = []

        with tqdm(desc="Fetching metafields", unit=" metafields",
                  total=limit, disable=not self.show_progress) as progress:
            for record in self.client.iter_product_metafields(self.build_query()):
                records.append(record)
                progress.update(1)
                if limit and len(records) >= limit:
                    break

        logger.info(f"Fetched {len(records)} metafields")
        return filter_product_metafields(records)

    def delete_metafields(self, metafields: List[ProductMetafield]) -> DeleteSummary:
        """Delete in batches; a failed batch is counted and skipped"""
        batches = chunk(metafields, self.options.batch_size)

        for index, batch in enumerate(batches, 1):
            logger.info(f"Deleting batch {index}/{len(batches)} ({len(batch)} metafields)...")
            try:
                self.client.delete_product_metafields([mf.id for mf in batch])
            except BigCommerceAPIError as e:
                self.summary.failed += len(batch)
                self.summary.batches_failed += 1
                logger.error(f"  ✗ Error deleting batch {index}: {e}")
                continue

            self.summary.deleted += len(batch)
            logger.info(f"  ✓ Deleted {len(batch)} metafields")

        return self.summary

    def run(self) -> DeleteSummary:
        """
        Execute the delete pipeline

        In dry-run mode the matching metafields are fetched and sampled but
        no delete request is sent.
        """
        print("\n📊 Fetching metafields...")
        metafields = self.fetch_metafields()
        self.summary.found = len(metafields)

        if not metafields:
            print("\n✅ No metafields found matching the criteria")
            return self.summary

        print(f"\nFound {len(metafields)} metafields to delete")

        if self.options.dry_run:
            print_delete_preview(metafields)
            return self.summary

        print(
            f"\n🗑️  Deleting {len(metafields)} metafields in batches of {self.options.batch_size}..."
        )
        self.delete_metafields(metafields)
        print_delete_summary(self.summary)
        return self.summary
