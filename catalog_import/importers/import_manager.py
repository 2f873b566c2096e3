# catalog_import/importers/import_manager.py

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from catalog_import.core.exceptions import ImportFileNotFoundError
from catalog_import.core.logging import time_operation
from catalog_import.core.types import ImportSummary, ReconstructedItem
from catalog_import.core.utils import read_import_file
from .payload_reader import PayloadReader
from .row_parser import RowParser
from .item_builder import ItemBuilder
from .menu_importer import MenuImporter, BatchMenuImporter

logger = logging.getLogger(__name__)


class ImportManager:
    """
    High-level orchestrator for catalog imports.
    
    Pipeline stages:
    1. Read the payload into tab-joined lines (TSV, CSV or XLSX)
    2. Parse lines into rows, detecting the export dialect
    3. Group rows into products and classify each as simple/variety/builder
    4. Persist the items in one transaction
    """
    
    IMPORT_EXTENSIONS = {".tsv", ".csv", ".txt", ".xlsx"}
    
    def __init__(self, session):
        self.session = session
        self.item_builder = ItemBuilder()
        self.menu_importer = MenuImporter(session)
        self.batch_importer = BatchMenuImporter(session)
    
    def parse_buffer(
        self,
        payload: bytes,
        media_type: str = "",
        filename: str = "",
        override_restaurant_id: Optional[str] = None,
        restaurant_aliases: Optional[Dict[str, str]] = None,
    ) -> List[ReconstructedItem]:
        """Run the read/parse/build stages without touching the database."""
        lines = PayloadReader.to_lines(payload, media_type, filename)
        parsed = RowParser(override_restaurant_id, restaurant_aliases).parse(lines)
        return self.item_builder.build(parsed)
    
    def parse_buffer_and_import(
        self,
        restaurant_id: str,
        payload: bytes,
        media_type: str = "",
        filename: str = "",
        replace: bool = False,
    ) -> ImportSummary:
        """
        Import an uploaded menu file into one existing restaurant.
        
        Every row is attributed to ``restaurant_id`` whatever its restaurant
        column says.
        """
        with time_operation(f"Menu import {filename or 'upload'} -> {restaurant_id}", logger):
            items = self.parse_buffer(
                payload, media_type, filename, override_restaurant_id=restaurant_id
            )
            return self.menu_importer.import_items(restaurant_id, items, replace=replace)
    
    def import_file(
        self,
        path,
        replace: bool = False,
        restaurant_aliases: Optional[Dict[str, str]] = None,
    ) -> ImportSummary:
        """
        Import a bulk catalog file covering any number of restaurants.
        
        Restaurants named in the file but missing from the database are created.
        """
        path = Path(path)
        if not path.is_file():
            raise ImportFileNotFoundError(f"File not found: {path}", details={"path": str(path)})
        
        with time_operation(f"Bulk menu import {path.name}", logger):
            payload = read_import_file(path)
            items = self.parse_buffer(
                payload, filename=path.name, restaurant_aliases=restaurant_aliases
            )
            return self.batch_importer.import_all(items, replace=replace)
    
    @classmethod
    def find_import_files(cls, paths: Iterable) -> List[Path]:
        """Expand directories into their catalog files; files are kept as given."""
        found = []
        for entry in paths:
            entry = Path(entry)
            if entry.is_dir():
                found.extend(
                    sorted(p for p in entry.iterdir() if p.suffix.lower() in cls.IMPORT_EXTENSIONS)
                )
            else:
                found.append(entry)
        return found


def parse_buffer_and_import(
    session,
    restaurant_id: str,
    payload: bytes,
    media_type: str = "",
    filename: str = "",
    replace: bool = False,
) -> ImportSummary:
    """Module-level shortcut for ``ImportManager.parse_buffer_and_import``."""
    return ImportManager(session).parse_buffer_and_import(
        restaurant_id, payload, media_type, filename, replace=replace
    )


def import_file(
    session,
    path,
    replace: bool = False,
    restaurant_aliases: Optional[Dict[str, str]] = None,
) -> ImportSummary:
    """Module-level shortcut for ``ImportManager.import_file``."""
    return ImportManager(session).import_file(
        path, replace=replace, restaurant_aliases=restaurant_aliases
    )
