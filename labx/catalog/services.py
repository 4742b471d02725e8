"""Catalog domain objects and the pure filtering helpers behind the catalog screen."""
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Iterable, Optional


def quantize_price(value: Decimal | float | int | str) -> Decimal:
    """Normalize a price to two decimal places."""

    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            amount = Decimal(str(value))
        except (InvalidOperation, TypeError) as exc:
            raise ValueError(f"Invalid price '{value}'") from exc
    if not amount.is_finite():
        raise ValueError(f"Price must be a finite amount, got '{value}'")
    return amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def format_price(value: Decimal) -> str:
    """Format a price for display."""

    return f"${quantize_price(value):,.2f}"


@dataclass(frozen=True)
class Product:
    """Immutable snapshot of a catalog product."""

    id: int
    name: str
    description: str
    category: str
    price: Decimal
    stock: int
    image_ref: str = ""

    def __post_init__(self) -> None:
        if isinstance(self.id, bool) or not isinstance(self.id, int):
            raise ValueError(f"Product id must be an integer, got {self.id!r}")
        if isinstance(self.stock, bool) or not isinstance(self.stock, int):
            raise ValueError(f"Stock must be an integer, got {self.stock!r}")
        if self.stock < 0:
            raise ValueError("Stock cannot be negative.")
        # frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "price", quantize_price(self.price))

    @property
    def has_stock(self) -> bool:
        """Return True when at least one unit can be purchased."""

        return self.stock > 0

    @property
    def price_display(self) -> str:
        return format_price(self.price)

    @property
    def stock_label(self) -> str:
        return f"Stock: {self.stock}" if self.has_stock else "Out of stock"

    def to_dict(self) -> dict[str, object]:
        """Serialize the product for templates and JSON responses."""

        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "price": float(self.price),
            "price_display": self.price_display,
            "stock": self.stock,
            "has_stock": self.has_stock,
            "stock_label": self.stock_label,
            "image_ref": self.image_ref,
        }


@dataclass(frozen=True)
class FilterQuery:
    """Search text plus an optional category selection."""

    text: str = ""
    category: Optional[str] = field(default=None)

    @property
    def is_active(self) -> bool:
        """Flag whether the query narrows the catalog at all."""

        return bool(self.text) or self.category is not None

    def to_dict(self) -> dict[str, object]:
        return {"text": self.text, "category": self.category}


def _matches_text(product: Product, text: str) -> bool:
    if not text.strip():
        return True
    needle = text.casefold()
    return needle in product.name.casefold() or needle in product.description.casefold()


def _matches_category(product: Product, category: Optional[str]) -> bool:
    return category is None or product.category == category


def filter_products(products: Iterable[Product], query: FilterQuery) -> list[Product]:
    """Return the products that satisfy both the text and category conditions.

    Text matching is a case-insensitive substring test on the name or the
    description; a blank text matches everything. Category matching is exact
    equality. The relative order of ``products`` is preserved.
    """

    return [
        product
        for product in products
        if _matches_text(product, query.text) and _matches_category(product, query.category)
    ]


def list_categories(products: Iterable[Product]) -> list[str]:
    """Return the distinct, non-blank categories in ascending order."""

    return sorted({product.category for product in products if product.category.strip()})


def toggle_category(current: Optional[str], clicked: str) -> Optional[str]:
    """Apply a category chip click to the current selection."""

    return None if current == clicked else clicked
