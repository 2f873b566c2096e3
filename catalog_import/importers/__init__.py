# catalog_import/importers/__init__.py

"""
Menu catalog importers.

Reads restaurant product exports (TSV, CSV or XLSX), rebuilds simple,
variety and builder menu items and persists them transactionally.
"""

from .import_manager import ImportManager, parse_buffer_and_import, import_file
from .payload_reader import PayloadReader, buffer_to_lines
from .row_parser import RowParser, parse_lines
from .item_builder import ItemBuilder, build_items
from .menu_importer import MenuImporter, BatchMenuImporter
from .base_importer import BaseImporter

__all__ = [
    "ImportManager",
    "parse_buffer_and_import",
    "import_file",
    "PayloadReader",
    "buffer_to_lines",
    "RowParser",
    "parse_lines",
    "ItemBuilder",
    "build_items",
    "MenuImporter",
    "BatchMenuImporter",
    "BaseImporter",
]
