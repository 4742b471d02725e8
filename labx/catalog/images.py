"""Resolve product image references to displayable URLs."""
from __future__ import annotations

from pathlib import Path

from flask import current_app, url_for

PLACEHOLDER_IMAGE = "img/placeholder.svg"
PRODUCT_IMAGE_DIR = "img/products"


class ImageResolver:
    """Map an opaque ``image_ref`` to a URL the templates can show.

    Remote references pass through untouched, bare keys resolve to a bundled
    static image when one exists, and everything else falls back to the
    placeholder.
    """

    def __init__(self, static_folder: str | Path | None = None) -> None:
        self._static_folder = Path(static_folder) if static_folder else None

    def _static_root(self) -> Path:
        return self._static_folder or Path(current_app.static_folder)

    def resolve(self, image_ref: str | None) -> str:
        ref = (image_ref or "").strip()
        if ref.startswith(("http://", "https://")):
            return ref
        if ref and "/" not in ref and "\\" not in ref:
            filename = f"{PRODUCT_IMAGE_DIR}/{ref}.png"
            if (self._static_root() / filename).is_file():
                return url_for("static", filename=filename)
        return url_for("static", filename=PLACEHOLDER_IMAGE)
