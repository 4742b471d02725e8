"""Database models shared across the LabX shop."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from .extensions import db


class ActivityLog(db.Model):
    """A structured record of something the shop did on behalf of a shopper."""

    __tablename__ = "activity_log"

    id: int = db.Column(db.Integer, primary_key=True)
    created_at: datetime = db.Column(db.DateTime, default=datetime.utcnow, index=True)
    component: str = db.Column(db.String(64), nullable=False, index=True)
    action: str = db.Column(db.String(64), nullable=False)
    level: str = db.Column(db.String(16), nullable=False, index=True)
    result: str = db.Column(db.String(32), nullable=False)
    title: str = db.Column(db.String(120), nullable=False)
    user_summary: str = db.Column(db.Text, nullable=False)
    technical_details: str = db.Column(db.Text, nullable=False)
    product_id: Optional[int] = db.Column(db.Integer, index=True)
    correlation_id: Optional[str] = db.Column(db.String(36), index=True)
    environment: str = db.Column(db.String(20), default="development")

    def to_dict(self) -> dict[str, object]:
        """Return the entry in a JSON-friendly shape with a UTC timestamp."""
        created = self.created_at.replace(tzinfo=timezone.utc)
        return {
            "id": self.id,
            "created_at": created.isoformat(timespec="seconds"),
            "component": self.component,
            "action": self.action,
            "level": self.level,
            "result": self.result,
            "title": self.title,
            "user_summary": self.user_summary,
            "technical_details": self.technical_details,
            "product_id": self.product_id,
            "correlation_id": self.correlation_id,
            "environment": self.environment,
        }

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<ActivityLog {self.level} {self.component}:{self.action}>"
