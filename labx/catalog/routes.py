"""Routes for the catalog and product detail screens."""
from __future__ import annotations

from flask import abort, current_app, jsonify, render_template, request, url_for

from ..cart.services import CartService
from ..logging_service import log_manager
from . import bp
from .detail import ProductDetailScreen
from .images import ImageResolver
from .repository import CatalogUnavailableError, ProductRepository
from .services import FilterQuery, toggle_category
from .state import CatalogState, CatalogStore


def _query_from_request() -> FilterQuery:
    text = request.args.get("q", "")
    category = request.args.get("category") or None
    return FilterQuery(text=text, category=category)


def _load_catalog(query: FilterQuery) -> CatalogState:
    """Fetch the catalog and apply ``query``, logging a failed load."""

    store = CatalogStore()
    state = store.load(ProductRepository())
    if state.error is not None:
        log_manager.record(
            component="Catalog",
            action="load",
            level="error",
            result="error",
            title="Catalog load failed",
            user_summary="Products could not be loaded. Use retry to try again.",
            technical_details=f"catalog.load_catalog: {state.error}",
        )
    return store.apply_query(query)


def _chip_links(state: CatalogState) -> list[dict[str, object]]:
    """Build one link per category applying the chip toggle rule."""

    current = state.query.category
    chips = []
    for label in state.categories:
        selection = toggle_category(current, label)
        chips.append(
            {
                "label": label,
                "selected": current == label,
                "url": url_for(
                    "catalog.catalog",
                    q=state.query.text or None,
                    category=selection,
                ),
            }
        )
    return chips


@bp.route("/")
def catalog():
    """Render the catalog with its search box and category chips."""

    query = _query_from_request()
    state = _load_catalog(query)
    resolver = ImageResolver()

    log_manager.record(
        component="Catalog",
        action="view",
        level="info",
        result="success" if state.error is None else "error",
        title="Catalog opened",
        user_summary=f"Catalog displayed with {state.result_count} product(s).",
        technical_details=(
            f"catalog.catalog status={state.status} text={query.text!r}"
            f" category={query.category!r}"
        ),
    )

    return render_template(
        "catalog/catalog.html",
        title="LabX — Products",
        state=state,
        products=[
            {**product.to_dict(), "image_url": resolver.resolve(product.image_ref)}
            for product in state.visible_products
        ],
        chips=_chip_links(state),
        all_url=url_for("catalog.catalog", q=query.text or None),
        clear_search_url=url_for("catalog.catalog", category=query.category),
        active_nav="catalog",
    )


@bp.route("/api/products")
def products_feed():
    """Return the filtered catalog as JSON."""

    state = _load_catalog(_query_from_request())
    if state.error is not None:
        response = jsonify({"success": False, "message": state.error})
        response.status_code = 503
        return response
    return jsonify({"success": True, **state.to_dict()})


@bp.route("/products/<int:product_id>", methods=["GET", "POST"])
def product_detail(product_id: int):
    """Show one product and handle the add-to-cart form."""

    screen = ProductDetailScreen(
        ProductRepository(),
        CartService(),
        confirmation_seconds=current_app.config["CART_CONFIRMATION_SECONDS"],
    )
    try:
        try:
            state = screen.load(product_id)
        except CatalogUnavailableError as exc:
            log_manager.record(
                component="Product",
                action="view",
                level="error",
                result="error",
                title="Product lookup failed",
                user_summary="The product could not be loaded. Try again shortly.",
                technical_details=f"catalog.product_detail: {exc}",
                product_id=product_id,
            )
            abort(503)

        if state.product is None:
            log_manager.record(
                component="Product",
                action="view",
                level="warn",
                result="not-found",
                title="Product not found",
                user_summary=f"No product exists with id {product_id}.",
                technical_details=f"catalog.product_detail missing product_id={product_id}",
                product_id=product_id,
            )
            return (
                render_template(
                    "catalog/detail.html",
                    title="LabX — Product not found",
                    state=state,
                    product=None,
                    active_nav="catalog",
                ),
                404,
            )

        log_manager.record(
            component="Product",
            action="view",
            level="info",
            result="success",
            title="Product detail opened",
            user_summary=f"Showing details for {state.product.name}.",
            technical_details=(
                f"catalog.product_detail rendered product_id={product_id}"
                f" method={request.method}"
            ),
            product_id=product_id,
        )
        if request.method == "POST":
            screen.add_to_cart()
            state = screen.state

        return render_template(
            "catalog/detail.html",
            title=f"LabX — {state.product.name}",
            state=state,
            product={
                **state.product.to_dict(),
                "image_url": ImageResolver().resolve(state.product.image_ref),
            },
            dismiss_after_ms=int(current_app.config["CART_CONFIRMATION_SECONDS"] * 1000),
            active_nav="catalog",
        )
    finally:
        screen.close()
