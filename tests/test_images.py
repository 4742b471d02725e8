"""Tests for turning product image references into URLs."""

from __future__ import annotations

from labx.catalog.images import ImageResolver


def test_remote_references_pass_through(app):
    with app.test_request_context():
        url = "https://cdn.example.com/mouse.png"

        assert ImageResolver().resolve(url) == url


def test_bundled_image_is_used_when_present(app, tmp_path):
    (tmp_path / "img" / "products").mkdir(parents=True)
    (tmp_path / "img" / "products" / "mouse_gamer.png").write_bytes(b"\x89PNG")

    with app.test_request_context():
        resolver = ImageResolver(tmp_path)

        assert resolver.resolve("mouse_gamer") == "/static/img/products/mouse_gamer.png"
        assert resolver.resolve("keyboard") == "/static/img/placeholder.svg"


def test_unusable_references_fall_back_to_placeholder(app):
    with app.test_request_context():
        resolver = ImageResolver()

        assert resolver.resolve("") == "/static/img/placeholder.svg"
        assert resolver.resolve(None) == "/static/img/placeholder.svg"
        assert resolver.resolve("../secrets") == "/static/img/placeholder.svg"
