"""Configuration settings for the LabX shop."""
from __future__ import annotations

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


class Config:
    """Base configuration class."""

    SECRET_KEY = os.environ.get("LABX_SECRET_KEY", "labx-dev-key")
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "LABX_DATABASE_URI", f"sqlite:///{BASE_DIR / 'labx.db'}"
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    ENVIRONMENT = os.environ.get("LABX_ENV", "development")
    LOG_RETENTION = int(os.environ.get("LABX_LOG_RETENTION", 200))
    SEED_CATALOG = _env_flag("LABX_SEED_CATALOG", True)
    CART_CONFIRMATION_SECONDS = float(os.environ.get("LABX_CART_CONFIRMATION_SECONDS", 2))
