# catalog_import/core/constants.py

"""
Application-wide constants and enumerations.

Defines item shapes, media types and the fixed column layouts of the two
supported catalog export dialects.
"""

from decimal import Decimal
from enum import Enum
from typing import List


class ItemShape(Enum):
    """Menu item shapes, stored in the ``item_type`` column."""
    SIMPLE = "simple"
    VARIETY = "variety"
    BUILDER = "builder"

    @classmethod
    def values(cls) -> List[str]:
        return [shape.value for shape in cls]


class FileFormat(Enum):
    """Supported payload encodings."""
    TSV = "tsv"
    CSV = "csv"
    XLSX = "xlsx"


class MediaTypes:
    """Declared media types recognized by the payload reader."""
    
    XLSX = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    XLSM = "application/vnd.ms-excel.sheet.macroenabled.12"
    CSV = "text/csv"
    CSV_ALT = "application/csv"
    OCTET_STREAM = "application/octet-stream"
    
    WORKBOOK_TYPES = {XLSX, XLSM}
    CSV_TYPES = {CSV, CSV_ALT}
    UNTYPED = {"", OCTET_STREAM}
    
    WORKBOOK_EXTENSIONS = {".xlsx", ".xlsm"}
    CSV_EXTENSIONS = {".csv"}
    
    # Zip local-file header: every xlsx workbook starts with it
    ZIP_MAGIC = b"PK\x03\x04"


class LongFormatColumns:
    """
    Column positions of the rich product export.
    
    Detected by a header containing both "title" and "product page".
    Option axes occupy (name, value) column pairs starting at OPTION_START.
    """
    
    PRODUCT_ID = 0
    RESTAURANT = 3
    NAME = 5
    DESCRIPTION = 6
    OPTION_START = 8
    OPTION_PAIRS = 6
    PRICE = 20
    CATEGORY = 24
    VISIBLE = 30
    
    MIN_COLUMNS = 25
    
    HEADER_MARKERS = ("title", "product page")


class ShortFormatColumns:
    """Column positions of the legacy export with a single variants column."""
    
    PRODUCT_ID = 0
    PRODUCT_TYPE = 2
    RESTAURANT = 3
    CATEGORY = 4
    NAME = 5
    DESCRIPTION = 6
    PRICE = 7
    VARIANTS = 10
    VISIBLE = 12
    
    MIN_COLUMNS = 8


# Product type marker of the legacy export for products sold in varieties
VARIABLE_PRODUCT_TYPE = "Variable"

# Axis name given to the free-text variants column of the legacy export
VARIETY_AXIS_NAME = "Variety"

DEFAULT_OPTION_VALUE = "Default"

# Positive visibility flag value (case-insensitive)
VISIBLE_FLAG = "yes"

# Largest price the Numeric(10, 2) price column holds
MAX_PRICE = Decimal("99999999.99")
