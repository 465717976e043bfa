"""
Create product metafields from a directory of CSV files

Files are processed in name order, rows in file order. Each row with a valid
product id is turned into metafields and, outside dry-run mode, submitted in
batches. A failed batch is logged and counted; the run carries on.
"""
import logging
from pathlib import Path
from typing import Dict, List, Optional

from ..client import BigCommerceAPIError, BigCommerceClient
from ..config import CreateOptions
from ..csv_loader import load_csv_rows, select_csv_files
from ..metafields import parse_product_id, transform_to_metafields
from ..models import CreateSummary, Metafield
from ..summary import (
    print_create_summary,
    print_file_overview,
    print_first_file_stats,
    print_metafield_preview,
)
from ..utils import chunk

logger = logging.getLogger(__name__)


class MetafieldCreator:
    """Runs the CSV -> metafield -> batched create pipeline"""

    def __init__(self, options: CreateOptions, client: Optional[BigCommerceClient] = None):
        self.options = options
        self.client = client
        self.summary = CreateSummary()
        self.first_row: Optional[Dict[str, str]] = None

    def select_files(self) -> List[Path]:
        """Pick the CSV files for this run and print an overview"""
        all_files, selected = select_csv_files(
            self.options.data_dir, self.options.skip, self.options.limit
        )
        self.summary.files_found = len(all_files)
        print_file_overview(len(all_files), len(selected), self.options)
        return selected

    def run(self) -> CreateSummary:
        """
        Execute the create pipeline

        Returns:
            CreateSummary with product, metafield, created and error counts
        """
        csv_files = self.select_files()

        if csv_files:
            first_rows = load_csv_rows(csv_files[0])
            print_first_file_stats(csv_files[0].name, first_rows)
            if first_rows:
                self.first_row = first_rows[0]

        logger.info(f"Processing {len(csv_files)} CSV files...")

        total = self.options.skip + len(csv_files)
        for index, csv_file in enumerate(csv_files, self.options.skip + 1):
            logger.info(f"[{index}/{total}] Processing {csv_file.name}...")
            self.process_file(csv_file)

        print_create_summary(self.summary, self.options)
        return self.summary

    def preview_first_product(self):
        """Print the metafields the first row of the first file produces"""
        if self.first_row is None:
            return
        product_id = parse_product_id(self.first_row.get("id")) or 1
        metafields = transform_to_metafields(self.first_row, product_id)
        print_metafield_preview(self.first_row.get("sku", ""), product_id, metafields)

    def process_file(self, csv_file: Path):
        rows = load_csv_rows(csv_file)
        for row in rows:
            self.process_row(row)
        self.summary.files_processed += 1

    def process_row(self, row: Dict[str, str]) -> List[Metafield]:
        """Transform a row and submit its metafields; rows without a valid id are skipped"""
        product_id = parse_product_id(row.get("id"))
        if product_id is None:
            return []

        sku = row.get("sku", "")
        metafields = transform_to_metafields(row, product_id)
        self.summary.products += 1
        self.summary.metafields += len(metafields)

        if self.options.dry_run:
            logger.info(
                f"  [DRY RUN] Would create {len(metafields)} metafields for product {product_id} ({sku})"
            )
        elif self.client is not None and metafields:
            self.submit(product_id, sku, metafields)

        return metafields

    def submit(self, product_id: int, sku: str, metafields: List[Metafield]):
        """Create metafields batch by batch, isolating failures per batch"""
        for batch in chunk(metafields, self.options.batch_size):
            try:
                self.client.create_product_metafields([mf.to_payload() for mf in batch])
            except BigCommerceAPIError as e:
                self.summary.errors += 1
                logger.error(f"  ✗ Error for product {product_id} ({sku}): {e}")
                continue

            self.summary.created += len(batch)
            logger.info(f"  ✓ Created {len(batch)} metafields for product {product_id} ({sku})")
