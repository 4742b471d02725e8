"""Cart operations used by the product detail screen."""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from ..catalog.models import ProductRecord
from ..catalog.services import Product, format_price
from ..extensions import db
from ..logging_service import log_manager
from .models import CartItem


@dataclass(frozen=True)
class CartResult:
    """Outcome of an add-to-cart request."""

    success: bool
    message: str
    quantity: int = 0

    def to_dict(self) -> dict[str, object]:
        return {"success": self.success, "message": self.message, "quantity": self.quantity}


class CartService:
    """Persist cart contents, never holding more units than are in stock."""

    def add(self, product: Product) -> CartResult:
        """Add one unit of ``product`` to the cart."""

        try:
            record = db.session.get(ProductRecord, product.id)
            if record is None:
                return self.reject(product, f"{product.name} is no longer available.")
            if record.stock <= 0:
                return self.reject(product, f"{record.name} is out of stock.")

            item = CartItem.query.filter_by(product_id=record.id).first()
            in_cart = item.quantity if item else 0
            if in_cart >= record.stock:
                return self.reject(
                    product,
                    f"Only {record.stock} unit(s) of {record.name} are available.",
                )

            if item is None:
                item = CartItem(product_id=record.id, quantity=1)
            else:
                item.quantity += 1
            db.session.add(item)
            db.session.commit()
        except SQLAlchemyError as exc:
            db.session.rollback()
            log_manager.record(
                component="Cart",
                action="add",
                level="error",
                result="error",
                title="Add to cart failed",
                user_summary="The product could not be added to the cart. Try again shortly.",
                technical_details=f"cart.add raised {exc.__class__.__name__}: {exc}",
                product_id=product.id,
            )
            return CartResult(success=False, message="Unable to update the cart right now.")

        log_manager.record(
            component="Cart",
            action="add",
            level="info",
            result="success",
            title="Product added to cart",
            user_summary=f"{record.name} added to the cart ({item.quantity} in cart).",
            technical_details=f"cart.add stored product_id={record.id} quantity={item.quantity}",
            product_id=record.id,
        )
        return CartResult(success=True, message="Product added to cart", quantity=item.quantity)

    def reject(self, product: Product, message: str) -> CartResult:
        """Log a refused addition and return the failed result."""

        log_manager.record(
            component="Cart",
            action="add",
            level="warn",
            result="rejected",
            title="Add to cart refused",
            user_summary=message,
            technical_details=f"cart.add refused product_id={product.id}",
            product_id=product.id,
        )
        return CartResult(success=False, message=message)

    def items(self) -> list[dict[str, object]]:
        """Return cart lines with their product details and subtotals."""

        lines = []
        for item in CartItem.query.order_by(CartItem.id).all():
            product = item.product.to_product()
            subtotal = product.price * item.quantity
            lines.append(
                {
                    "product": product.to_dict(),
                    "quantity": item.quantity,
                    "subtotal": float(subtotal),
                    "subtotal_display": format_price(subtotal),
                }
            )
        return lines

    def count(self) -> int:
        """Return the number of units in the cart."""

        return int(db.session.query(func.coalesce(func.sum(CartItem.quantity), 0)).scalar())

    def total(self) -> Decimal:
        total = Decimal("0.00")
        for item in CartItem.query.all():
            total += Decimal(item.product.price) * item.quantity
        return total
