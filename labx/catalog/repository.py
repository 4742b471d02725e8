"""Catalog retrieval backed by the product table."""
from __future__ import annotations

from decimal import Decimal
from typing import Any, Protocol

from sqlalchemy.exc import SQLAlchemyError

from ..extensions import db
from ..logging_service import log_manager
from .models import ProductRecord
from .services import Product

DEFAULT_PRODUCTS: tuple[dict[str, Any], ...] = (
    {
        "name": "Gaming Mouse",
        "description": "RGB optical mouse with 16000 DPI sensor and six programmable buttons.",
        "category": "Peripherals",
        "price": Decimal("24.99"),
        "stock": 15,
        "image_ref": "mouse_gamer",
    },
    {
        "name": "Mechanical Keyboard",
        "description": "Full-size keyboard with blue switches and per-key lighting.",
        "category": "Peripherals",
        "price": Decimal("59.90"),
        "stock": 8,
        "image_ref": "teclado_mecanico",
    },
    {
        "name": "27\" Monitor",
        "description": "QHD IPS panel at 144 Hz, ideal for gaming and design work.",
        "category": "Displays",
        "price": Decimal("289.00"),
        "stock": 4,
        "image_ref": "monitor_27",
    },
    {
        "name": "Wireless Headset",
        "description": "Over-ear headset with noise cancelling microphone and 30 hour battery.",
        "category": "Audio",
        "price": Decimal("79.50"),
        "stock": 0,
        "image_ref": "audifonos_inalambricos",
    },
    {
        "name": "HD Webcam",
        "description": "1080p camera with stereo microphone for streaming and video calls.",
        "category": "Peripherals",
        "price": Decimal("39.99"),
        "stock": 12,
        "image_ref": "webcam_hd",
    },
)


class CatalogUnavailableError(RuntimeError):
    """Raised when the catalog cannot be read from storage."""


class ProductCatalogService(Protocol):
    """Source of catalog snapshots consumed by the catalog and detail screens."""

    def fetch_all(self) -> list[Product]:
        ...

    def fetch_by_id(self, product_id: int) -> Product | None:
        ...


class ProductRepository:
    """Read products from the database as immutable snapshots."""

    def fetch_all(self) -> list[Product]:
        """Return every product ordered by id."""

        try:
            records = ProductRecord.query.order_by(ProductRecord.id).all()
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise CatalogUnavailableError("The catalog could not be loaded.") from exc
        return [record.to_product() for record in records]

    def fetch_by_id(self, product_id: int) -> Product | None:
        """Return a single product, or None when it does not exist."""

        try:
            record = db.session.get(ProductRecord, product_id)
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise CatalogUnavailableError(f"Product {product_id} could not be loaded.") from exc
        return record.to_product() if record else None


def ensure_catalog_defaults() -> int:
    """Seed the starter catalog when the product table is empty.

    Returns the number of products created.
    """

    if ProductRecord.query.first() is not None:
        return 0

    for values in DEFAULT_PRODUCTS:
        db.session.add(ProductRecord(**values))
    db.session.commit()

    log_manager.record(
        component="Catalog",
        action="seed",
        level="info",
        result="success",
        title="Starter catalog created",
        user_summary=f"Added {len(DEFAULT_PRODUCTS)} starter products to the shop.",
        technical_details="catalog.ensure_catalog_defaults populated an empty product table.",
    )
    return len(DEFAULT_PRODUCTS)
