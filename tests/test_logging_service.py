"""Tests for structured activity logging."""

from __future__ import annotations

import pytest

from labx.logging_service import log_manager
from labx.models import ActivityLog


def _record(**overrides):
    values = {
        "component": "Catalog",
        "action": "view",
        "title": "Catalog opened",
        "user_summary": "Catalog displayed.",
        "technical_details": "test entry",
    }
    values.update(overrides)
    return log_manager.record(**values)


def test_record_persists_entry_with_environment(app):
    with app.app_context():
        record = _record(product_id=3)

        entry = ActivityLog.query.one()
        assert entry.correlation_id == record.correlation_id
        assert entry.environment == app.config["ENVIRONMENT"]
        assert entry.to_dict()["product_id"] == 3


def test_unknown_level_is_rejected(app):
    with app.app_context():
        with pytest.raises(ValueError):
            _record(level="debug")


def test_retention_keeps_newest_entries(app):
    app.config["LOG_RETENTION"] = 3
    with app.app_context():
        for index in range(5):
            _record(title=f"entry {index}")

        titles = [entry["title"] for entry in log_manager.fetch_logs()]
        assert titles == ["entry 4", "entry 3", "entry 2"]


def test_fetch_logs_filters(app):
    with app.app_context():
        _record(component="Cart", level="warn", title="Add to cart refused", product_id=2)
        _record(component="Catalog", title="Catalog opened")

        assert [e["title"] for e in log_manager.fetch_logs(level="warn")] == ["Add to cart refused"]
        assert [e["component"] for e in log_manager.fetch_logs(component="Catalog")] == ["Catalog"]
        assert len(log_manager.fetch_logs(search="refused")) == 1
        assert len(log_manager.fetch_logs(product_id=2)) == 1


def test_feed_route_returns_logs(client):
    client.get("/catalog/")

    data = client.get("/logs/feed?component=Catalog").get_json()

    assert data["logs"][0]["title"] == "Catalog opened"
    assert data["latest"] is not None
    assert "Cart" in data["components"]


def test_feed_route_clamps_limit_to_at_least_one(client):
    client.get("/catalog/")
    client.get("/catalog/")

    assert len(client.get("/logs/feed?limit=-1").get_json()["logs"]) == 1
    assert len(client.get("/logs/feed?limit=0").get_json()["logs"]) == 2
