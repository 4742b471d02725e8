"""Structured activity logging for the LabX shop."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from uuid import uuid4

from flask import current_app
from sqlalchemy import select

from .extensions import db
from .models import ActivityLog

LOG_LEVELS: tuple[str, ...] = ("info", "warn", "error")


@dataclass(frozen=True)
class LogRecord:
    """What was written for a single ``record`` call."""

    component: str
    action: str
    level: str
    result: str
    title: str
    user_summary: str
    technical_details: str
    product_id: Optional[int]
    correlation_id: str
    environment: str


class LogManager:
    """Persist and query shop activity logs."""

    def __init__(self) -> None:
        self.app = None
        self.available_levels = list(LOG_LEVELS)
        self.available_components: list[str] = []

    def init_app(self, app) -> None:
        """Bind the manager to a Flask app."""
        self.app = app

    def register_component(self, component: str) -> None:
        """Make a component selectable in log filters."""
        if component not in self.available_components:
            self.available_components.append(component)
            self.available_components.sort()

    def _config(self, key: str, default):
        return (self.app or current_app).config.get(key, default)

    def record(
        self,
        *,
        component: str,
        action: str,
        level: str = "info",
        result: str = "success",
        title: str,
        user_summary: str,
        technical_details: str,
        product_id: Optional[int] = None,
        correlation_id: Optional[str] = None,
    ) -> LogRecord:
        """Store a new log entry and enforce the retention window."""
        if level not in self.available_levels:
            raise ValueError(f"Unsupported level '{level}'")

        self.register_component(component)
        record = LogRecord(
            component=component,
            action=action,
            level=level,
            result=result,
            title=title,
            user_summary=user_summary,
            technical_details=technical_details,
            product_id=product_id,
            correlation_id=correlation_id or str(uuid4()),
            environment=self._config("ENVIRONMENT", "development"),
        )
        db.session.add(ActivityLog(**record.__dict__))
        db.session.flush()
        self._enforce_retention(int(self._config("LOG_RETENTION", 200)))
        db.session.commit()
        return record

    def _enforce_retention(self, retention: int) -> None:
        keep = select(ActivityLog.id).order_by(ActivityLog.id.desc()).limit(retention)
        ActivityLog.query.filter(ActivityLog.id.not_in(keep.scalar_subquery())).delete(
            synchronize_session=False
        )

    def fetch_logs(
        self,
        *,
        level: Optional[str] = None,
        component: Optional[str] = None,
        search: Optional[str] = None,
        product_id: Optional[int] = None,
        limit: int = 50,
    ) -> list[dict[str, object]]:
        """Return the newest logs matching the given filters."""
        query = ActivityLog.query.order_by(ActivityLog.id.desc())
        if level in self.available_levels:
            query = query.filter_by(level=level)
        if component:
            query = query.filter_by(component=component)
        if product_id is not None:
            query = query.filter_by(product_id=product_id)
        if search:
            pattern = f"%{search}%"
            query = query.filter(
                ActivityLog.title.ilike(pattern)
                | ActivityLog.user_summary.ilike(pattern)
                | ActivityLog.technical_details.ilike(pattern)
            )
        return [entry.to_dict() for entry in query.limit(limit).all()]

    def latest_timestamp(self) -> Optional[str]:
        """Return the ISO timestamp of the newest entry, if any."""
        newest = ActivityLog.query.order_by(ActivityLog.id.desc()).first()
        return newest.to_dict()["created_at"] if newest else None


log_manager = LogManager()
