"""Routes for the shopping cart page and its JSON API."""
from __future__ import annotations

from flask import current_app, jsonify, render_template, request

from ..catalog.repository import CatalogUnavailableError, ProductRepository
from ..catalog.services import format_price
from ..logging_service import log_manager
from . import bp
from .services import CartService


def _json_error(message: str, *, status: int = 400):
    """Return a consistently formatted JSON error response."""

    response = jsonify({"success": False, "message": message})
    response.status_code = status
    return response


def _cart_summary(cart: CartService) -> dict[str, object]:
    return {
        "items": cart.items(),
        "count": cart.count(),
        "total_display": format_price(cart.total()),
    }


@bp.route("/api/items", methods=["GET"])
def list_items():
    """Return the cart contents."""

    return jsonify({"success": True, **_cart_summary(CartService())})


@bp.route("/api/items", methods=["POST"])
def add_item():
    """Add one unit of a product to the cart."""

    data = request.get_json(silent=True) or {}
    raw_id = data.get("product_id")
    try:
        product_id = int(raw_id)
    except (TypeError, ValueError):
        return _json_error("Provide the id of the product to add.")

    try:
        product = ProductRepository().fetch_by_id(product_id)
    except CatalogUnavailableError as exc:
        log_manager.record(
            component="Cart",
            action="add",
            level="error",
            result="error",
            title="Catalog unavailable",
            user_summary="The product could not be looked up. Try again shortly.",
            technical_details=f"cart.add_item lookup failed: {exc}",
            product_id=product_id,
        )
        return _json_error("The catalog is unavailable right now.", status=503)
    if product is None:
        return _json_error("Product not found.", status=404)

    cart = CartService()
    result = cart.add(product)
    if not result.success:
        return _json_error(result.message, status=409)

    payload = result.to_dict()
    payload["dismiss_after_ms"] = int(current_app.config["CART_CONFIRMATION_SECONDS"] * 1000)
    payload.update(_cart_summary(cart))
    return jsonify(payload)


@bp.app_context_processor
def inject_cart_count() -> dict[str, object]:
    """Expose the number of units in the cart to every template."""

    return {"cart_count": CartService().count()}


@bp.route("/")
def view_cart():
    """Render the cart contents."""

    cart = CartService()
    summary = _cart_summary(cart)
    log_manager.record(
        component="Cart",
        action="view",
        level="info",
        result="success",
        title="Cart opened",
        user_summary=f"Cart displayed with {summary['count']} unit(s).",
        technical_details="cart.view_cart rendered the cart lines.",
    )
    return render_template(
        "cart/cart.html",
        title="LabX — Cart",
        summary=summary,
        active_nav="cart",
    )
