"""
Console reporting for metafield runs

Banners, previews and end-of-run summaries printed to stdout.
"""
from typing import Any, Dict, List, Optional, Sequence

from .config import CreateOptions, DeleteOptions
from .models import CreateSummary, DeleteSummary, Metafield, ProductMetafield
from .utils import truncate

CREATE_PREVIEW_COUNT = 3
DELETE_PREVIEW_COUNT = 5


def print_mode_banner(dry_run: bool):
    if dry_run:
        print("🔍 Running in dry-run mode - no API calls will be made\n")


def print_store_details(store_info: Optional[Dict[str, Any]], store_hash: str):
    """Print store name/URL, or just the hash when the lookup failed"""
    if store_info:
        print("\n🏪 Store Details:")
        print(f"   Name: {store_info.get('name', 'unknown')}")
        print(f"   URL: {store_info.get('domain', 'unknown')}")
        print(f"   Store Hash: {store_hash}")
    elif store_hash:
        print(f"\n🏪 Store Hash: {store_hash}")


def print_file_overview(total_files: int, selected_files: int, options: CreateOptions):
    print(f"Found {total_files} CSV files")

    range_text = []
    if options.skip:
        range_text.append(f"skipping first {options.skip}")
    if options.limit:
        range_text.append(f"limiting to {options.limit}")
    suffix = f" ({', '.join(range_text)})" if range_text else ""

    print(f"Processing {selected_files} files{suffix}")


def print_first_file_stats(file_name: str, rows: List[Dict[str, str]]):
    print(f"\nReading first file: {file_name}")
    if not rows:
        return
    first = rows[0]
    print("\nFirst file statistics:")
    print(f"- Items in file: {len(rows)}")
    print(f"- Columns found: {len(first)}")
    print(f"- SKU: {first.get('sku', '')}")
    print(f"- Product ID: {first.get('id', '')}")


def print_metafield_preview(sku: str, product_id: int, metafields: Sequence[Metafield]):
    """Show the first few metafields generated for a product"""
    print("\n📋 Example metafields from first product:")
    print("-" * 50)
    print(f"Product: {sku} (ID: {product_id})")
    print(f"Total metafields: {len(metafields)}")

    if not metafields:
        return

    print(f"\nFirst {CREATE_PREVIEW_COUNT} metafields:")
    for index, mf in enumerate(metafields[:CREATE_PREVIEW_COUNT], 1):
        print(f"\n{index}. {mf.full_key}")
        print(f"   Value: {truncate(mf.value)}")
        print(f"   Description: {mf.description}")

    if len(metafields) > CREATE_PREVIEW_COUNT:
        print(f"\n... and {len(metafields) - CREATE_PREVIEW_COUNT} more metafields")


def print_create_summary(summary: CreateSummary, options: CreateOptions):
    print("\n=== Summary ===")
    print(f"Total products processed: {summary.products}")
    print(f"Total metafields to create: {summary.metafields}")
    print(f"Batch size: {options.batch_size}")

    if not options.dry_run:
        print(f"Successfully created: {summary.created} metafields")
        print(f"Errors: {summary.errors}")


def print_search_criteria(options: DeleteOptions):
    print("🔎 Search Criteria:")
    if options.keys:
        print(f"   Keys: {', '.join(options.keys)}")
    if options.namespaces:
        print(f"   Namespaces: {', '.join(options.namespaces)}")
    if options.product_ids:
        print(f"   Product IDs: {', '.join(str(p) for p in options.product_ids)}")
    if not options.has_criteria:
        print("   All product metafields (--all)")
    if options.limit:
        print(f"   Limit: {options.limit} metafields")


def print_delete_preview(metafields: Sequence[ProductMetafield]):
    """Show a sample of what a dry-run delete would remove"""
    print("\n📋 Sample of metafields that would be deleted:")
    print("-" * 50)

    for index, mf in enumerate(metafields[:DELETE_PREVIEW_COUNT], 1):
        print(f"\n{index}. Product {mf.resource_id}: {mf.full_key}")
        if mf.value:
            print(f"   Value: {truncate(mf.value)}")

    if len(metafields) > DELETE_PREVIEW_COUNT:
        print(f"\n... and {len(metafields) - DELETE_PREVIEW_COUNT} more metafields")

    print("\n" + "=" * 50)
    print("\n⚠️  This is a dry run. To actually delete, run with --dry-run=false")


def print_delete_summary(summary: DeleteSummary):
    print("\n" + "=" * 50)
    print("\n=== Summary ===")
    print(f"Total metafields found: {summary.found}")
    print(f"Successfully deleted: {summary.deleted}")
    if summary.failed:
        print(f"Failed to delete: {summary.failed}")

    if summary.deleted:
        print("\n✅ Metafields have been deleted from BigCommerce successfully!")
