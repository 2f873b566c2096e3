# catalog_import/core/types.py

"""
Type definitions and data classes for the application.

Provides structured data types passed between the import stages,
replacing ad-hoc dictionaries with typed objects.
"""

from dataclasses import dataclass, field, asdict
from decimal import Decimal
from typing import Optional, Dict, List, Any

from .constants import ItemShape


@dataclass
class OptionPair:
    """One (axis name, axis value) observation from a catalog row."""
    
    axis_name: str
    axis_value: str
    
    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return asdict(self)


@dataclass
class ParsedRow:
    """
    A single product-row observation produced by the row parser.
    
    Continuation rows carry the inherited product id, name, category and
    description of the named row they follow, but their own price and
    option pairs.
    """
    
    product_key: str
    restaurant_key: str
    name: str
    description: Optional[str] = None
    price: Decimal = Decimal("0")
    category: Optional[str] = None
    available: bool = True
    option_pairs: List[OptionPair] = field(default_factory=list)
    
    # Legacy export only
    product_type: str = ""
    variants: str = ""
    
    line_number: int = 0
    
    def to_dict(self) -> dict:
        """Convert to dictionary."""
        result = asdict(self)
        result["price"] = str(self.price)
        return result


@dataclass
class ParseResult:
    """Rows parsed from one payload plus the detected dialect."""
    
    rows: List[ParsedRow] = field(default_factory=list)
    is_long_format: bool = False
    
    def __len__(self) -> int:
        return len(self.rows)


@dataclass
class Variant:
    """Selectable variety of a single-axis item."""
    
    name: str
    price_modifier: Decimal
    
    def to_dict(self) -> dict:
        return {"name": self.name, "priceModifier": float(self.price_modifier)}


@dataclass
class OptionChoice:
    """One selectable value of a builder configuration axis."""
    
    name: str
    price_modifier: Decimal
    
    def to_dict(self) -> dict:
        return {"name": self.name, "priceModifier": float(self.price_modifier)}


@dataclass
class Configuration:
    """An independent option axis of a builder item."""
    
    axis_name: str
    options: List[OptionChoice] = field(default_factory=list)
    required: bool = True
    max_selections: int = 1
    
    def to_dict(self) -> dict:
        # "category" is the stored key for the axis name
        return {
            "category": self.axis_name,
            "required": self.required,
            "maxSelections": self.max_selections,
            "options": [option.to_dict() for option in self.options],
        }


@dataclass
class ReconstructedItem:
    """Pre-persistence form of a menu item rebuilt from a product group."""
    
    restaurant_key: str
    name: str
    price: Decimal
    category: str
    shape: ItemShape = ItemShape.SIMPLE
    description: Optional[str] = None
    available: bool = True
    variants: List[Variant] = field(default_factory=list)
    configurations: List[Configuration] = field(default_factory=list)
    
    @property
    def options(self) -> Optional[Dict[str, Any]]:
        """JSON option payload stored alongside the item."""
        if self.shape == ItemShape.VARIETY:
            return {"variants": [variant.to_dict() for variant in self.variants]}
        if self.shape == ItemShape.BUILDER:
            return {"configurations": [config.to_dict() for config in self.configurations]}
        return None
    
    def to_payload(self) -> dict:
        """Fields handed to validation and persistence."""
        return {
            "name": self.name,
            "description": self.description,
            "price": self.price,
            "category": self.category,
            "available": self.available,
            "itemType": self.shape.value,
            "options": self.options,
        }


@dataclass
class ItemError:
    """Validation failure for one reconstructed item."""
    
    name: str
    reasons: List[str] = field(default_factory=list)
    
    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return asdict(self)


@dataclass
class ImportSummary:
    """Aggregate outcome of one import call."""
    
    created: int = 0
    skipped: int = 0
    replaced: int = 0
    errors: List[ItemError] = field(default_factory=list)
    by_shape: Dict[str, int] = field(
        default_factory=lambda: {shape.value: 0 for shape in ItemShape}
    )
    
    def record_created(self, shape: ItemShape):
        self.created += 1
        self.by_shape[shape.value] = self.by_shape.get(shape.value, 0) + 1
    
    def merge(self, other: "ImportSummary"):
        """Fold another summary into this one."""
        self.created += other.created
        self.skipped += other.skipped
        self.replaced += other.replaced
        self.errors.extend(other.errors)
        for shape, count in other.by_shape.items():
            self.by_shape[shape] = self.by_shape.get(shape, 0) + count
    
    def to_dict(self) -> dict:
        """Convert to dictionary (JSON-serializable)."""
        return {
            "created": self.created,
            "skipped": self.skipped,
            "replaced": self.replaced,
            "errors": [error.to_dict() for error in self.errors],
            "by_shape": dict(self.by_shape),
        }
    
    @property
    def message(self) -> str:
        text = f"Import complete: {self.created} created, {self.skipped} skipped"
        if self.replaced:
            text += f", {self.replaced} replaced"
        return text + "."


@dataclass
class ProductGroup:
    """All parsed rows sharing one grouping key."""
    
    key: tuple
    rows: List[ParsedRow] = field(default_factory=list)
    
    @property
    def first(self) -> ParsedRow:
        return self.rows[0]
    
    @property
    def base_price(self) -> Decimal:
        return self.first.price
    
    @property
    def axis_names(self) -> List[str]:
        """Distinct option axis names in first-seen order."""
        names = {}
        for row in self.rows:
            for pair in row.option_pairs:
                name = (pair.axis_name or "").strip()
                if name:
                    names.setdefault(name, None)
        return list(names)
