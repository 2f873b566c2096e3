"""
Row parser: tab-joined lines -> ParsedRow observations.

Covers:
  - Dialect detection from the header
  - Long format field extraction, option pair defaults, HTML stripping
  - Forward-fill of unnamed variant rows
  - Unnamed first row, truncated rows and missing restaurants are dropped
  - Short format variants column, optional visibility flag
  - Restaurant override and aliases
"""

from __future__ import annotations

from decimal import Decimal

from catalog_import.core.types import OptionPair
from catalog_import.importers.row_parser import RowParser, is_long_format_header, parse_lines
from tests.builders import LONG_HEADER, SHORT_HEADER, long_row, short_row


# ---------------------------------------------------------------------------
# Dialect detection
# ---------------------------------------------------------------------------
def test_long_format_needs_both_markers():
    assert is_long_format_header("ID\tTITLE\tDescription\tPRODUCT PAGE")
    assert not is_long_format_header("ID\tTitle\tDescription")
    assert not is_long_format_header("ID\tProduct page")
    assert not is_long_format_header("")


def test_header_only_yields_no_rows():
    result = parse_lines([LONG_HEADER])
    assert result.rows == []
    assert result.is_long_format is True


def test_no_lines():
    result = parse_lines([])
    assert result.rows == []
    assert result.is_long_format is False


# ---------------------------------------------------------------------------
# Long format
# ---------------------------------------------------------------------------
def test_long_format_fields():
    lines = [
        LONG_HEADER,
        long_row(
            product_id="P1",
            name="Bagel",
            price="3.00",
            description="<p>Fresh &amp; warm</p>\n<br/>  bread &quot;",
            category="/Bakery",
            visible="Yes",
            options=[("Type", "Plain")],
        ),
    ]
    result = parse_lines(lines)

    assert result.is_long_format
    [row] = result.rows
    assert row.product_key == "P1"
    assert row.restaurant_key == "bagel-barn"
    assert row.name == "Bagel"
    assert row.description == "Fresh & warm bread &quot;"
    assert row.price == Decimal("3.00")
    assert row.category == "Bakery"
    assert row.available is True
    assert row.option_pairs == [OptionPair("Type", "Plain")]


def test_long_format_option_defaults():
    lines = [
        LONG_HEADER,
        long_row(
            product_id="P1",
            name="Pizza",
            price="10",
            options=[("", "Large"), ("Crust", ""), ("", "")],
        ),
    ]
    [row] = parse_lines(lines).rows
    assert row.option_pairs == [
        OptionPair("Option 1", "Large"),
        OptionPair("Crust", "Default"),
    ]


def test_long_format_reads_all_six_option_pairs():
    options = [(f"Axis {k}", f"Value {k}") for k in range(1, 7)]
    lines = [LONG_HEADER, long_row(product_id="P1", name="Combo", price="1", options=options)]
    [row] = parse_lines(lines).rows
    assert [pair.axis_name for pair in row.option_pairs] == [name for name, _ in options]


def test_hidden_and_unparseable_price():
    lines = [LONG_HEADER, long_row(product_id="P1", name="Bagel", price="n/a", visible="no")]
    [row] = parse_lines(lines).rows
    assert row.available is False
    assert row.price == Decimal("0")


def test_continuation_rows_inherit_product():
    lines = [
        LONG_HEADER,
        long_row(product_id="P1", name="Bagel", price="3.00", category="/Bakery",
                 description="Hand rolled", options=[("Type", "Plain")]),
        long_row(product_id="", restaurant="", name="", price="3.50",
                 options=[("Type", "Sesame")]),
    ]
    first, second = parse_lines(lines).rows

    assert second.product_key == "P1"
    assert second.name == "Bagel"
    assert second.restaurant_key == "bagel-barn"
    assert second.category == "Bakery"
    assert second.description == "Hand rolled"
    assert second.price == Decimal("3.50")
    assert second.option_pairs == [OptionPair("Type", "Sesame")]


def test_continuation_keeps_its_own_values():
    lines = [
        LONG_HEADER,
        long_row(product_id="P1", name="Bagel", price="3.00", category="/Bakery"),
        long_row(product_id="P1-b", name="", price="4", category="/Specials"),
    ]
    _, second = parse_lines(lines).rows
    assert second.product_key == "P1-b"
    assert second.category == "Specials"


def test_named_row_without_id_gets_line_key():
    lines = [
        LONG_HEADER,
        long_row(product_id="P1", name="Bagel", price="3.00"),
        long_row(product_id="", name="Muffin", price="2.00"),
        long_row(product_id="", name="", price="2.50", options=[("Size", "Big")]),
    ]
    rows = parse_lines(lines).rows
    assert [row.product_key for row in rows] == ["P1", "row-2", "row-2"]
    assert rows[2].name == "Muffin"


def test_unnamed_first_row_is_dropped():
    lines = [
        LONG_HEADER,
        long_row(product_id="P9", name="", price="3.00", options=[("Type", "Plain")]),
        long_row(product_id="P1", name="Bagel", price="3.00"),
    ]
    rows = parse_lines(lines).rows
    assert [row.name for row in rows] == ["Bagel"]


def test_truncated_long_rows_are_dropped():
    truncated = "\t".join(long_row(product_id="P2", name="Muffin").split("\t")[:24])
    lines = [LONG_HEADER, truncated, long_row(product_id="P1", name="Bagel", price="1")]
    rows = parse_lines(lines).rows
    assert [row.product_key for row in rows] == ["P1"]


def test_row_without_restaurant_is_dropped():
    lines = [LONG_HEADER, long_row(product_id="P1", restaurant="", name="Bagel", price="1")]
    assert parse_lines(lines).rows == []


def test_override_wins_over_column():
    lines = [
        LONG_HEADER,
        long_row(product_id="P1", restaurant="other-place", name="Bagel", price="1"),
        long_row(product_id="P2", restaurant="", name="Muffin", price="1"),
    ]
    rows = parse_lines(lines, override_restaurant_id="bagel-barn").rows
    assert [row.restaurant_key for row in rows] == ["bagel-barn", "bagel-barn"]


def test_aliases_rename_column_restaurants():
    lines = [LONG_HEADER, long_row(product_id="P1", restaurant="graze", name="Brisket", price="20")]
    [row] = parse_lines(lines, restaurant_aliases={"graze": "graze-smokehouse"}).rows
    assert row.restaurant_key == "graze-smokehouse"


# ---------------------------------------------------------------------------
# Short format
# ---------------------------------------------------------------------------
def test_short_format_fields():
    lines = [
        SHORT_HEADER,
        short_row(product_id="S1", name="Latte", price="4.25abc", category="/Drinks",
                  description="<b>Hot</b>", product_type="Variable", variants="Oat milk"),
    ]
    result = parse_lines(lines)

    assert result.is_long_format is False
    [row] = result.rows
    assert row.product_key == "S1"
    assert row.name == "Latte"
    assert row.price == Decimal("4.25")
    assert row.category == "Drinks"
    assert row.description == "Hot"
    assert row.product_type == "Variable"
    assert row.variants == "Oat milk"
    assert row.option_pairs == [OptionPair("Variety", "Oat milk")]
    # No visibility column
    assert row.available is True


def test_short_format_visibility_column():
    lines = [
        SHORT_HEADER,
        short_row(product_id="S1", name="Latte", price="4", visible="no"),
        short_row(product_id="S2", name="Mocha", price="4", visible="YES"),
    ]
    rows = parse_lines(lines).rows
    assert [row.available for row in rows] == [False, True]


def test_short_format_drops_unnamed_and_short_rows():
    lines = [
        SHORT_HEADER,
        short_row(product_id="S1", name="", price="4"),
        "S2\t\tSimple\tbagel-barn\tDrinks\tTea",
        short_row(product_id="", name="Water", price=""),
    ]
    [row] = parse_lines(lines).rows
    assert row.name == "Water"
    assert row.product_key == "row-3"
    assert row.option_pairs == []
    assert row.price == Decimal("0")


def test_short_format_needs_restaurant_or_override():
    lines = [SHORT_HEADER, short_row(product_id="S1", restaurant="", name="Latte", price="4")]
    assert parse_lines(lines).rows == []
    [row] = RowParser(override_restaurant_id="cafe").parse(lines).rows
    assert row.restaurant_key == "cafe"
