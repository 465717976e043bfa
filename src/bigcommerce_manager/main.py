#!/usr/bin/env python3
"""
BigCommerce Product Metafield CLI - Main Entry Point

Usage:
    bigcommerce-metafields create [--store-hash HASH --access-token TOKEN] [--dry-run false]
    bigcommerce-metafields delete --key short_description_mf [--dry-run false]

Credentials may also come from BIGCOMMERCE_STORE_HASH / BIGCOMMERCE_ACCESS_TOKEN
in the environment or a .env file.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .actions import MetafieldCreator, MetafieldDeleter
from .client import BigCommerceClient
from .config import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_DATA_DIR,
    LOG_LEVELS,
    BigCommerceConfig,
    ConfigurationError,
    CreateOptions,
    DeleteOptions,
    MissingCriteriaError,
    parse_bool_flag,
)
from .logger import get_command_logger
from .summary import print_mode_banner, print_search_criteria, print_store_details

DELETE_EXAMPLES = """
Examples:
  Delete by key: --key short_description_mf
  Delete by namespace: --namespace custom
  Delete by product: --product-id 123 456
"""


def add_common_arguments(parser: argparse.ArgumentParser, action: str):
    """Options shared by both commands"""
    parser.add_argument(
        '-a', '--access-token',
        help='BigCommerce API access token (default: BIGCOMMERCE_ACCESS_TOKEN)'
    )
    parser.add_argument(
        '-s', '--store-hash',
        help='BigCommerce store hash (default: BIGCOMMERCE_STORE_HASH)'
    )
    parser.add_argument(
        '--dry-run',
        type=parse_bool_flag,
        nargs='?',
        const=True,
        default=True,
        metavar='BOOL',
        help=f'{action} without making API changes; false/0/no disables it (default: true)'
    )
    parser.add_argument(
        '--batch-size',
        type=int,
        default=DEFAULT_BATCH_SIZE,
        help=f'Number of metafields per API call (default: {DEFAULT_BATCH_SIZE})'
    )
    parser.add_argument(
        '--log-level',
        choices=LOG_LEVELS,
        help='Set the logging level (default: LOG_LEVEL or INFO)'
    )
    parser.add_argument(
        '--log-file',
        help='Also write logs to this file'
    )


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        prog='bigcommerce-metafields',
        description='BigCommerce Product Metafield CLI',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Create metafields (dry run)
  bigcommerce-metafields create --store-hash YOUR_HASH --access-token YOUR_TOKEN

  # Create metafields for real
  bigcommerce-metafields create --dry-run false --store-hash YOUR_HASH --access-token YOUR_TOKEN

  # Delete metafields by key
  bigcommerce-metafields delete --key short_description_mf --store-hash YOUR_HASH --access-token YOUR_TOKEN

  # Show detailed help for each command
  bigcommerce-metafields create --help
  bigcommerce-metafields delete --help
        """
    )
    subparsers = parser.add_subparsers(dest='command', metavar='COMMAND')
    subparsers.required = True

    create_parser = subparsers.add_parser(
        'create',
        help='Create metafields from CSV files',
        description='Create metafields in BigCommerce from CSV files'
    )
    add_common_arguments(create_parser, 'Read and process files')
    create_parser.add_argument(
        '--data-dir',
        type=Path,
        default=DEFAULT_DATA_DIR,
        help=f'Directory containing the CSV files (default: ./{DEFAULT_DATA_DIR})'
    )
    create_parser.add_argument(
        '--skip',
        type=int,
        default=0,
        help='Skip this many files before processing'
    )
    create_parser.add_argument(
        '--limit',
        type=int,
        help='Limit number of files to process'
    )

    delete_parser = subparsers.add_parser(
        'delete',
        help='Delete metafields by various criteria',
        description='Delete metafields from BigCommerce by various criteria',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=DELETE_EXAMPLES
    )
    add_common_arguments(delete_parser, 'Preview what would be deleted')
    delete_parser.add_argument(
        '-k', '--key',
        nargs='+',
        action='extend',
        default=[],
        help='Delete metafields by key (can specify multiple)'
    )
    delete_parser.add_argument(
        '-n', '--namespace',
        nargs='+',
        action='extend',
        default=[],
        help='Delete metafields by namespace (can specify multiple)'
    )
    delete_parser.add_argument(
        '-p', '--product-id',
        nargs='+',
        action='extend',
        type=int,
        default=[],
        help='Delete metafields by product ID (can specify multiple)'
    )
    delete_parser.add_argument(
        '--all',
        action='store_true',
        dest='delete_all',
        help='Allow deleting every product metafield when no other criteria is given'
    )
    delete_parser.add_argument(
        '--limit',
        type=int,
        help='Limit number of metafields to fetch (for testing)'
    )

    return parser.parse_args(argv)


def run_create(args: argparse.Namespace, config: BigCommerceConfig,
               logger: logging.Logger) -> int:
    options = CreateOptions(
        dry_run=args.dry_run,
        batch_size=args.batch_size,
        limit=args.limit,
        data_dir=args.data_dir,
        skip=args.skip,
    )
    options.validate(config)

    client = None
    store_info = None
    if config.has_credentials:
        client = BigCommerceClient(config)
        store_info = client.get_store_info()

    print_mode_banner(options.dry_run)
    logger.info(f"Reading CSV files from {options.data_dir}")

    creator = MetafieldCreator(options, client)
    creator.run()

    print("\n" + "=" * 50)
    if config.has_credentials:
        print_store_details(store_info, config.store_hash)

    if options.dry_run:
        creator.preview_first_product()
    elif client is not None:
        print("\n✅ Metafields have been pushed to BigCommerce successfully!")

    return 0


def run_delete(args: argparse.Namespace, config: BigCommerceConfig,
               logger: logging.Logger) -> int:
    options = DeleteOptions(
        dry_run=args.dry_run,
        batch_size=args.batch_size,
        limit=args.limit,
        keys=args.key,
        namespaces=args.namespace,
        product_ids=args.product_id,
        delete_all=args.delete_all,
    )
    options.validate(config)

    print_mode_banner(options.dry_run)

    client = None
    if config.has_credentials:
        client = BigCommerceClient(config)
        store_info = client.get_store_info()
        if store_info:
            print_store_details(store_info, config.store_hash)
            print()

    print_search_criteria(options)

    if client is None:
        raise ConfigurationError("Cannot proceed without BigCommerce credentials")

    deleter = MetafieldDeleter(options, client)
    summary = deleter.run()
    logger.info(f"Delete run finished: {summary}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = parse_arguments(argv)
    logger = logging.getLogger(__name__)

    try:
        config = BigCommerceConfig.from_env(
            store_hash=args.store_hash,
            access_token=args.access_token,
        )
        logger = get_command_logger(
            args.command,
            level=args.log_level or config.log_level,
            log_file=args.log_file,
        )

        if args.command == 'create':
            return run_create(args, config, logger)
        return run_delete(args, config, logger)

    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        if isinstance(e, MissingCriteriaError):
            print(DELETE_EXAMPLES, file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        logger.info("Run interrupted by user")
        print("\nRun interrupted by user")
        return 1

    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        print(f"\nError: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
