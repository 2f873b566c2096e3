#!/usr/bin/env python3
"""
Bulk menu import script

Usage:
    python scripts/import_menu.py products.tsv                     # Import one file
    python scripts/import_menu.py --replace products.tsv           # Replace existing menus
    python scripts/import_menu.py db_files/menus/                  # Every file in a folder
    python scripts/import_menu.py --alias graze=graze-smokehouse products.tsv
"""
import sys
import os

# Add project root to Python path (so `import catalog_import` works)
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import argparse
import logging
from typing import Dict, List

from catalog_import.core.config import Config
from catalog_import.core.exceptions import AppException, InvalidConfigError
from catalog_import.core.logging import setup_logging
from catalog_import.core.types import ImportSummary
from catalog_import.importers import ImportManager
from catalog_import.services.database_service import DatabaseService

logger = logging.getLogger(__name__)

MAX_REPORTED_ERRORS = 5


# ------------------------
# CLI arguments
# ------------------------
def parse_arguments(argv=None):
    parser = argparse.ArgumentParser(
        description="Import restaurant menus from product export files (TSV, CSV or XLSX).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s products.tsv                          # Import one file
  %(prog)s --replace products.tsv                # Delete existing items first
  %(prog)s db_files/menus/                       # Import every file in a folder
  %(prog)s --alias graze=graze-smokehouse f.tsv  # Rename a restaurant key
        """
    )

    parser.add_argument(
        "paths",
        nargs="*",
        help="Files or folders to import (default: IMPORT_DIR)"
    )

    parser.add_argument(
        "--replace",
        action="store_true",
        help="Delete each restaurant's existing menu items before importing"
    )

    parser.add_argument(
        "--alias",
        action="append",
        default=[],
        metavar="OLD=NEW",
        help="Map a restaurant key found in the file to another key (repeatable)"
    )

    parser.add_argument(
        "--database-url",
        default=None,
        help="Database URL (default: DATABASE_URL)"
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Detailed logging"
    )

    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only show errors and the final summaries"
    )

    return parser.parse_args(argv)


def parse_aliases(pairs: List[str]) -> Dict[str, str]:
    """['old=new', ...] -> {'old': 'new', ...}"""
    aliases = {}
    for pair in pairs:
        old, sep, new = pair.partition("=")
        if not sep or not old.strip() or not new.strip():
            raise argparse.ArgumentTypeError(f"Invalid alias '{pair}', expected OLD=NEW")
        aliases[old.strip()] = new.strip()
    return aliases


def print_summary(path, summary: ImportSummary):
    print(f"\n{path}: {summary.message}")
    print(
        f"By type: simple {summary.by_shape.get('simple', 0)}"
        f" | variety {summary.by_shape.get('variety', 0)}"
        f" | builder {summary.by_shape.get('builder', 0)}"
    )
    if summary.errors:
        print(f"Validation skipped: {len(summary.errors)} items")
        for error in summary.errors[:MAX_REPORTED_ERRORS]:
            print(f"  - {error.name}: {'; '.join(error.reasons)}")
        if len(summary.errors) > MAX_REPORTED_ERRORS:
            print(f"  ... and {len(summary.errors) - MAX_REPORTED_ERRORS} more")


def main(argv=None) -> int:
    args = parse_arguments(argv)
    setup_logging(
        verbose=args.verbose or Config.app.VERBOSE or Config.app.LOG_LEVEL == "DEBUG",
        quiet=args.quiet or Config.app.LOG_LEVEL in ("ERROR", "CRITICAL"),
    )

    try:
        if args.paths:
            Config.imports.validate()
        else:
            # Creates the default import directory on first run
            Config.initialize()
        aliases = parse_aliases(args.alias)
    except InvalidConfigError as e:
        logger.error(f"❌ Configuration error: {e.message}")
        return 1
    except argparse.ArgumentTypeError as e:
        logger.error(f"❌ {e}")
        return 1
    logger.debug(Config.summary())

    files = ImportManager.find_import_files(args.paths or [Config.paths.IMPORT_DIR])
    if not files:
        logger.error("❌ No menu files to import")
        return 1

    db = DatabaseService(args.database_url)
    db.init_db()

    exit_code = 0
    for path in files:
        if not path.is_file():
            logger.error(f"❌ File not found: {path}")
            exit_code = 1
            continue

        try:
            with db.get_session() as session:
                summary = ImportManager(session).import_file(
                    path, replace=args.replace, restaurant_aliases=aliases
                )
        except AppException as e:
            logger.error(f"❌ {path.name}: {e.message}")
            exit_code = 1
            continue
        except Exception as e:
            logger.error(f"❌ Import of {path.name} failed: {e}")
            exit_code = 1
            continue

        print_summary(path, summary)

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
