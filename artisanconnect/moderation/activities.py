from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from ..store.config import ACTIVITIES
from ..store.documents import add_document, get_collection


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def record_activity(activity_type: str, description: str, **data: Any) -> str:
    return add_document(ACTIVITIES, {
        "type": activity_type,
        "description": description,
        "timestamp": utc_now_iso(),
        **data,
    })


def get_activities(activity_type: str | None = None) -> list[dict[str, Any]]:
    activities = get_collection(ACTIVITIES)
    if activity_type is not None:
        activities = [a for a in activities if a.get("type") == activity_type]
    return activities


def get_recent_activities(limit: int = 50) -> list[dict[str, Any]]:
    """Newest first; activities logged within the same instant keep reverse log order."""
    activities = list(reversed(get_activities()))
    activities.sort(key=lambda a: a.get("timestamp", ""), reverse=True)
    return activities[:limit]
