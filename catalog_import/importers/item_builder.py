# catalog_import/importers/item_builder.py

import logging
from collections import Counter
from typing import Dict, List, Optional

from catalog_import.core.config import Config
from catalog_import.core.constants import (
    ItemShape,
    VARIABLE_PRODUCT_TYPE,
    DEFAULT_OPTION_VALUE,
)
from catalog_import.core.types import (
    Configuration,
    OptionChoice,
    ParsedRow,
    ParseResult,
    ProductGroup,
    ReconstructedItem,
    Variant,
)
from .price_modifiers import price_modifier

logger = logging.getLogger(__name__)


class ItemBuilder:
    """
    Rebuild menu items from parsed rows.

    Rows are grouped by product identity, then each group is classified by
    how many distinct option axes it uses:

    - two or more axes -> builder (one configuration per axis)
    - one axis, a "Variable" product type or a free-text variants field
      -> variety (one variant per distinct value)
    - otherwise -> simple
    """

    def __init__(self, default_category: str = None):
        self.default_category = default_category or Config.imports.DEFAULT_CATEGORY

    @staticmethod
    def group_key(row: ParsedRow, is_long_format: bool) -> tuple:
        # The legacy export has no product id shared across variant rows
        if is_long_format:
            return (row.restaurant_key, row.product_key)
        return (row.restaurant_key, row.product_key, row.name)

    def group_rows(self, rows: List[ParsedRow], is_long_format: bool) -> List[ProductGroup]:
        groups: Dict[tuple, ProductGroup] = {}
        for row in rows:
            if not row.restaurant_key:
                continue
            key = self.group_key(row, is_long_format)
            if key not in groups:
                groups[key] = ProductGroup(key=key)
            groups[key].rows.append(row)
        return list(groups.values())

    def build(self, parsed: ParseResult) -> List[ReconstructedItem]:
        """Group and classify parsed rows, in first-seen group order."""
        items = []
        for group in self.group_rows(parsed.rows, parsed.is_long_format):
            item = self.build_item(group)
            if item is not None:
                items.append(item)

        shapes = Counter(item.shape.value for item in items)
        logger.info(
            f"🧩 Built {len(items)} items "
            f"(simple {shapes['simple']} | variety {shapes['variety']} | builder {shapes['builder']})"
        )
        return items

    def build_item(self, group: ProductGroup) -> Optional[ReconstructedItem]:
        first = group.first
        name = (first.name or "").strip()
        if not name and first.option_pairs:
            name = (first.option_pairs[0].axis_value or "").strip()
        if not name:
            logger.debug(f"Group {group.key} has no usable name, skipped")
            return None

        item = ReconstructedItem(
            restaurant_key=first.restaurant_key,
            name=name,
            description=first.description,
            price=group.base_price,
            category=(first.category or "").strip() or self.default_category,
            available=first.available is not False,
        )

        axis_names = group.axis_names
        if len(axis_names) >= 2:
            configurations = self.build_configurations(group, axis_names)
            if len(configurations) >= 2:
                item.shape = ItemShape.BUILDER
                item.configurations = configurations
                return item

        has_free_text = bool(first.variants.strip())
        if len(axis_names) == 1 or first.product_type == VARIABLE_PRODUCT_TYPE or has_free_text:
            variants = self.build_variants(group)
            if variants:
                item.shape = ItemShape.VARIETY
                item.variants = variants
                return item

        return item

    @staticmethod
    def build_configurations(group: ProductGroup, axis_names: List[str]) -> List[Configuration]:
        """One required single-choice configuration per axis that has options."""
        configurations = []
        for axis_name in axis_names:
            modifiers = {}
            for row in group.rows:
                for pair in row.option_pairs:
                    if (pair.axis_name or "").strip() != axis_name:
                        continue
                    value = (pair.axis_value or "").strip() or DEFAULT_OPTION_VALUE
                    if value not in modifiers:
                        modifiers[value] = price_modifier(row.price, group.base_price)
            if modifiers:
                configurations.append(Configuration(
                    axis_name=axis_name,
                    options=[OptionChoice(value, modifier) for value, modifier in modifiers.items()],
                    required=True,
                    max_selections=1,
                ))
        return configurations

    @staticmethod
    def build_variants(group: ProductGroup) -> List[Variant]:
        """One variant per distinct value; rows with no derivable value are skipped."""
        fallback = group.first.variants
        variants: Dict[str, Variant] = {}
        for row in group.rows:
            value = row.option_pairs[0].axis_value if row.option_pairs else ""
            value = (value or fallback or "").strip()
            if not value or value in variants:
                continue
            variants[value] = Variant(value, price_modifier(row.price, group.base_price))
        return list(variants.values())


def build_items(parsed: ParseResult, default_category: str = None) -> List[ReconstructedItem]:
    """Build items with a one-off ``ItemBuilder``."""
    return ItemBuilder(default_category).build(parsed)
