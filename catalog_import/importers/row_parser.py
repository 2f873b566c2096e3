# catalog_import/importers/row_parser.py

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List, Optional, Sequence

from unidecode import unidecode

from catalog_import.core.constants import (
    LongFormatColumns,
    ShortFormatColumns,
    VARIETY_AXIS_NAME,
    DEFAULT_OPTION_VALUE,
    VISIBLE_FLAG,
)
from catalog_import.core.types import OptionPair, ParsedRow, ParseResult
from catalog_import.core.utils import cell, parse_price, strip_html

logger = logging.getLogger(__name__)


@dataclass
class ContinuationState:
    """
    Last named product seen while walking a long-format export.

    Unnamed rows are variant rows of this product. Two consecutive unnamed
    rows are always attributed to the same product, even if the exporter
    meant them for different ones.
    """

    product_key: str = ""
    name: str = ""
    restaurant_key: str = ""
    category: str = ""
    description: str = ""

    def remember(self, row: ParsedRow):
        self.product_key = row.product_key
        self.name = row.name
        self.restaurant_key = row.restaurant_key
        self.category = row.category or ""
        self.description = row.description or ""


def _strip_category(value: str) -> str:
    """'/Bakery' -> 'Bakery'."""
    return value[1:] if value.startswith("/") else value


def _is_visible(value: str) -> bool:
    return value.strip().lower() == VISIBLE_FLAG


def is_long_format_header(header: str) -> bool:
    """True when the header carries both long-format markers."""
    folded = unidecode(header or "").lower()
    return all(marker in folded for marker in LongFormatColumns.HEADER_MARKERS)


class RowParser:
    """
    Parse tab-joined catalog lines into ``ParsedRow`` observations.

    The first line is the header and decides the dialect. Rows that are too
    short or have no derivable name are dropped without being reported.
    """

    def __init__(
        self,
        override_restaurant_id: Optional[str] = None,
        restaurant_aliases: Optional[Dict[str, str]] = None,
    ):
        """
        Args:
            override_restaurant_id: restaurant key forced onto every row
            restaurant_aliases: renames applied to restaurant keys read from the file
        """
        self.override_restaurant_id = (override_restaurant_id or "").strip() or None
        self.restaurant_aliases = restaurant_aliases or {}

    def parse(self, lines: Sequence[str]) -> ParseResult:
        if not lines:
            return ParseResult()

        is_long_format = is_long_format_header(lines[0])
        result = ParseResult(is_long_format=is_long_format)
        state = ContinuationState()
        dropped = 0

        for line_number in range(1, len(lines)):
            parts = lines[line_number].split("\t")
            if is_long_format:
                row = self._parse_long_row(parts, line_number, state)
            else:
                row = self._parse_short_row(parts, line_number)

            if row is None:
                dropped += 1
                continue
            result.rows.append(row)

        dialect = "long" if is_long_format else "short"
        logger.info(
            f"📄 Parsed {len(result.rows)} rows ({dialect} format), dropped {dropped}"
        )
        return result

    def _restaurant_from_column(self, parts: List[str], index: int) -> str:
        value = cell(parts, index)
        return self.restaurant_aliases.get(value, value)

    def _parse_long_row(
        self,
        parts: List[str],
        line_number: int,
        state: ContinuationState,
    ) -> Optional[ParsedRow]:
        cols = LongFormatColumns
        if len(parts) < cols.MIN_COLUMNS:
            return None

        name = cell(parts, cols.NAME)
        is_continuation = not name
        if is_continuation and not state.name:
            logger.debug(f"Line {line_number}: no name and no preceding product, dropped")
            return None

        restaurant_key = self.override_restaurant_id or self._restaurant_from_column(
            parts, cols.RESTAURANT
        )
        if not restaurant_key and is_continuation:
            restaurant_key = state.restaurant_key
        if not restaurant_key:
            return None

        product_id = cell(parts, cols.PRODUCT_ID)
        description = strip_html(cell(parts, cols.DESCRIPTION))
        category = _strip_category(cell(parts, cols.CATEGORY))

        if is_continuation:
            product_key = product_id or state.product_key
            description = description or state.description
            category = category or state.category
            logger.debug(f"Line {line_number}: variant row of '{state.name}'")
        else:
            product_key = product_id or f"row-{line_number}"

        price = parse_price(cell(parts, cols.PRICE))
        row = ParsedRow(
            product_key=product_key,
            restaurant_key=restaurant_key,
            name=name or state.name,
            description=description or None,
            price=price if price is not None else Decimal("0"),
            category=category or None,
            available=_is_visible(cell(parts, cols.VISIBLE)),
            option_pairs=self._long_option_pairs(parts),
            line_number=line_number,
        )

        if not is_continuation:
            state.remember(row)
        return row

    @staticmethod
    def _long_option_pairs(parts: List[str]) -> List[OptionPair]:
        pairs = []
        for k in range(LongFormatColumns.OPTION_PAIRS):
            index = LongFormatColumns.OPTION_START + k * 2
            axis_name = cell(parts, index)
            axis_value = cell(parts, index + 1)
            if axis_name or axis_value:
                pairs.append(OptionPair(
                    axis_name=axis_name or f"Option {k + 1}",
                    axis_value=axis_value or DEFAULT_OPTION_VALUE,
                ))
        return pairs

    def _parse_short_row(self, parts: List[str], line_number: int) -> Optional[ParsedRow]:
        cols = ShortFormatColumns
        if len(parts) < cols.MIN_COLUMNS:
            return None

        restaurant_key = self.override_restaurant_id or self._restaurant_from_column(
            parts, cols.RESTAURANT
        )
        name = cell(parts, cols.NAME)
        if not restaurant_key or not name:
            return None

        # Visibility column is optional in this dialect
        if len(parts) > cols.VISIBLE:
            available = _is_visible(cell(parts, cols.VISIBLE))
        else:
            available = True

        variants = cell(parts, cols.VARIANTS)
        price = parse_price(cell(parts, cols.PRICE))
        return ParsedRow(
            product_key=cell(parts, cols.PRODUCT_ID) or f"row-{line_number}",
            restaurant_key=restaurant_key,
            name=name,
            description=strip_html(cell(parts, cols.DESCRIPTION)) or None,
            price=price if price is not None else Decimal("0"),
            category=_strip_category(cell(parts, cols.CATEGORY)) or None,
            available=available,
            option_pairs=[OptionPair(VARIETY_AXIS_NAME, variants)] if variants else [],
            product_type=cell(parts, cols.PRODUCT_TYPE),
            variants=variants,
            line_number=line_number,
        )


def parse_lines(
    lines: Sequence[str],
    override_restaurant_id: Optional[str] = None,
    restaurant_aliases: Optional[Dict[str, str]] = None,
) -> ParseResult:
    """Parse lines with a one-off ``RowParser``."""
    return RowParser(override_restaurant_id, restaurant_aliases).parse(lines)
