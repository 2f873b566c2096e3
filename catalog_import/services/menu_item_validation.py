# catalog_import/services/menu_item_validation.py

"""
Structural validation of menu item payloads.

``validate_menu_item`` is a pure function: it returns the list of problems
found (empty when the payload is valid) and never touches the database.
"""

import math
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional

from catalog_import.core.constants import ItemShape, MAX_PRICE


def _as_number(value: Any) -> Optional[float]:
    """Numeric value of ``value`` or None; numeric strings are accepted."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = Decimal(value.strip())
        except InvalidOperation:
            return None
    if isinstance(value, Decimal) and value.is_nan():
        return None
    if isinstance(value, (int, float, Decimal)):
        number = float(value)
        if math.isnan(number):
            return None
        return number
    return None


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def _validate_variants(options: Any) -> List[str]:
    errors = []
    variants = options.get("variants") if isinstance(options, dict) else None
    if not isinstance(variants, list):
        errors.append("Variants are required for variety items")
    elif not variants:
        errors.append("At least one variant is required for variety items")
    else:
        for index, variant in enumerate(variants, start=1):
            variant = variant if isinstance(variant, dict) else {}
            if _is_blank(variant.get("name")):
                errors.append(f"Variant {index} name is required")
            if _as_number(variant.get("priceModifier")) is None:
                errors.append(f"Variant {index} price modifier must be a number")
    return errors


def _validate_configurations(options: Any) -> List[str]:
    errors = []
    configurations = options.get("configurations") if isinstance(options, dict) else None
    if not isinstance(configurations, list):
        errors.append("Configurations are required for builder items")
        return errors
    if not configurations:
        errors.append("At least one configuration category is required for builder items")
        return errors

    for index, config in enumerate(configurations, start=1):
        config = config if isinstance(config, dict) else {}
        if _is_blank(config.get("category")):
            errors.append(f"Configuration {index} category name is required")
        if not isinstance(config.get("required"), bool):
            errors.append(f"Configuration {index} required field must be boolean")
        max_selections = config.get("maxSelections")
        if isinstance(max_selections, bool) or not isinstance(max_selections, int) or max_selections < 1:
            errors.append(f"Configuration {index} maxSelections must be a positive integer")

        choices = config.get("options")
        if not isinstance(choices, list) or not choices:
            errors.append(f"Configuration {index} must have at least one option")
            continue
        for opt_index, option in enumerate(choices, start=1):
            option = option if isinstance(option, dict) else {}
            if _is_blank(option.get("name")):
                errors.append(f"Configuration {index}, option {opt_index} name is required")
            if _as_number(option.get("priceModifier")) is None:
                errors.append(
                    f"Configuration {index}, option {opt_index} price modifier must be a number"
                )
    return errors


def validate_menu_item(data: Dict[str, Any]) -> List[str]:
    """
    Check a menu item payload against the rules of its shape.
    
    Args:
        data: dict with name, price, category, itemType and options
    
    Returns:
        List of human-readable reasons; empty when the payload is valid
    """
    errors = []

    if _is_blank(data.get("name")):
        errors.append("Item name is required")

    item_type = data.get("itemType")
    if item_type not in ItemShape.values():
        errors.append("Valid item type is required (simple, variety, builder)")

    price = _as_number(data.get("price"))
    if price is None or price < 0 or price > float(MAX_PRICE):
        errors.append("Valid price is required")

    if _is_blank(data.get("category")):
        errors.append("Category is required")

    if item_type == ItemShape.VARIETY.value:
        errors.extend(_validate_variants(data.get("options")))
    elif item_type == ItemShape.BUILDER.value:
        errors.extend(_validate_configurations(data.get("options")))

    return errors


def normalize_menu_item_data(data: Dict[str, Any]) -> Dict[str, Any]:
    """Trim strings, coerce the price and narrow options to the item's shape."""
    def _trimmed(value):
        return value.strip() if isinstance(value, str) else value

    price = data.get("price")
    if isinstance(price, str):
        try:
            price = Decimal(price.strip())
        except InvalidOperation:
            pass

    normalized = {
        "name": _trimmed(data.get("name")),
        "description": _trimmed(data.get("description")) or None,
        "price": price,
        "category": _trimmed(data.get("category")),
        "imageUrl": _trimmed(data.get("imageUrl")) or None,
        "available": data.get("available") is not False,
        "itemType": data.get("itemType"),
        "options": data.get("options") or None,
        "labels": data.get("labels") or [],
    }

    options = normalized["options"]
    if normalized["itemType"] == ItemShape.VARIETY.value and options:
        normalized["options"] = {"variants": options.get("variants") or []}
    elif normalized["itemType"] == ItemShape.BUILDER.value and options:
        normalized["options"] = {"configurations": options.get("configurations") or []}

    return normalized
