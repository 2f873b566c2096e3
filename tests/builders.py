# tests/builders.py
"""
Catalog export builders shared by the test modules.
"""

from __future__ import annotations

import io
from typing import List, Optional, Sequence, Tuple

from openpyxl import Workbook


# ---------------------------------------------------------------------------
# Export builders
# ---------------------------------------------------------------------------
LONG_HEADER_CELLS = [
    "ID", "Type", "SKU", "Restaurant", "Published", "Title", "Description", "Short",
    "Option 1 name", "Option 1 value", "Option 2 name", "Option 2 value",
    "Option 3 name", "Option 3 value", "Option 4 name", "Option 4 value",
    "Option 5 name", "Option 5 value", "Option 6 name", "Option 6 value",
    "Price", "Sale price", "Stock", "Weight", "Categories", "Tags", "Image",
    "Product page", "Slug", "Position", "Visible",
]
LONG_HEADER = "\t".join(LONG_HEADER_CELLS)

SHORT_HEADER = "\t".join([
    "ID", "SKU", "Type", "Restaurant", "Category", "Name", "Description",
    "Price", "Stock", "Image", "Variants", "Tags", "Visible",
])


def long_row(
    product_id: str = "",
    restaurant: str = "bagel-barn",
    name: str = "",
    price: str = "",
    description: str = "",
    category: str = "",
    visible: str = "yes",
    options: Sequence[Tuple[str, str]] = (),
) -> str:
    cells = [""] * len(LONG_HEADER_CELLS)
    cells[0] = product_id
    cells[3] = restaurant
    cells[5] = name
    cells[6] = description
    for k, (axis_name, axis_value) in enumerate(options):
        cells[8 + k * 2] = axis_name
        cells[9 + k * 2] = axis_value
    cells[20] = price
    cells[24] = category
    cells[30] = visible
    return "\t".join(cells)


def short_row(
    product_id: str = "",
    restaurant: str = "bagel-barn",
    name: str = "",
    price: str = "",
    category: str = "",
    description: str = "",
    product_type: str = "Simple",
    variants: str = "",
    visible: Optional[str] = None,
) -> str:
    cells = [product_id, "", product_type, restaurant, category, name, description,
             price, "", "", variants, ""]
    if visible is not None:
        cells.append(visible)
    return "\t".join(cells)


def tsv_payload(lines: List[str]) -> bytes:
    return ("\n".join(lines) + "\n").encode("utf-8")


def xlsx_payload(rows: List[list], extra_sheet: Optional[List[list]] = None) -> bytes:
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "Products"
    for row in rows:
        sheet.append(row)
    if extra_sheet is not None:
        other = workbook.create_sheet("Other")
        for row in extra_sheet:
            other.append(row)
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()
