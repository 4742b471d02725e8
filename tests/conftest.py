from __future__ import annotations

from decimal import Decimal
from pathlib import Path
import sys

import pytest
from sqlalchemy.pool import StaticPool

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from labx import create_app
from labx.catalog.models import ProductRecord
from labx.catalog.services import Product
from labx.config import Config
from labx.extensions import db


class TestingConfig(Config):
    """Configuration tuned for isolated unit tests."""

    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_ENGINE_OPTIONS = {
        "connect_args": {"check_same_thread": False},
        "poolclass": StaticPool,
    }
    SEED_CATALOG = False
    CART_CONFIRMATION_SECONDS = 2.0


SAMPLE_PRODUCTS = (
    {"id": 1, "name": "Mouse", "description": "Optical gaming mouse", "category": "Peripherals",
     "price": Decimal("19.99"), "stock": 5, "image_ref": "mouse_gamer"},
    {"id": 2, "name": "Keyboard", "description": "Mechanical keys", "category": "Peripherals",
     "price": Decimal("49.00"), "stock": 0, "image_ref": "keyboard"},
    {"id": 3, "name": "Monitor", "description": "27 inch QHD display", "category": "Displays",
     "price": Decimal("250.00"), "stock": 2, "image_ref": ""},
)


@pytest.fixture()
def app():
    """Create a Flask app instance backed by an in-memory database."""

    application = create_app(TestingConfig)
    yield application
    with application.app_context():
        db.drop_all()
        db.session.remove()


@pytest.fixture()
def client(app):
    """Provide a Flask test client for request assertions."""

    return app.test_client()


@pytest.fixture()
def seeded(app):
    """Store the three sample products used across the route tests."""

    with app.app_context():
        for values in SAMPLE_PRODUCTS:
            db.session.add(ProductRecord(**values))
        db.session.commit()
    return app


@pytest.fixture()
def sample_catalog() -> list[Product]:
    return [Product(**values) for values in SAMPLE_PRODUCTS]
