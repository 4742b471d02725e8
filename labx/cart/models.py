"""Database models for the shopping cart."""
from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint

from ..extensions import db


class CartItem(db.Model):
    """Units of one product waiting in the cart."""

    __tablename__ = "cart_item"
    __table_args__ = (CheckConstraint("quantity > 0", name="ck_cart_item_quantity_positive"),)

    id: int = db.Column(db.Integer, primary_key=True)
    product_id: int = db.Column(
        db.Integer, db.ForeignKey("product.id"), nullable=False, unique=True, index=True
    )
    quantity: int = db.Column(db.Integer, nullable=False, default=1)
    created_at: datetime = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at: datetime = db.Column(
        db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    product = db.relationship("ProductRecord")
