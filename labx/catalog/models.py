"""Database models for the product catalog."""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import CheckConstraint

from ..extensions import db
from .services import Product


class ProductRecord(db.Model):
    """Persisted catalog row; converted to an immutable ``Product`` on read."""

    __tablename__ = "product"
    __table_args__ = (CheckConstraint("stock >= 0", name="ck_product_stock_non_negative"),)

    id: int = db.Column(db.Integer, primary_key=True)
    name: str = db.Column(db.String(120), nullable=False)
    description: str = db.Column(db.Text, nullable=False, default="")
    category: str = db.Column(db.String(64), nullable=False, index=True)
    price: Decimal = db.Column(db.Numeric(12, 2), nullable=False)
    stock: int = db.Column(db.Integer, nullable=False, default=0)
    image_ref: str = db.Column(db.String(255), nullable=False, default="")
    created_at: datetime = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    def to_product(self) -> Product:
        return Product(
            id=self.id,
            name=self.name,
            description=self.description or "",
            category=self.category,
            price=self.price,
            stock=self.stock,
            image_ref=self.image_ref or "",
        )

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<ProductRecord {self.id} {self.name!r}>"
