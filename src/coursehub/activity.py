"""Platform activity log.

Records notable user actions as structured records on the
``coursehub.activity`` logger. Recording never raises and never blocks
navigation.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from enum import StrEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from coursehub.auth.models import Principal

logger = logging.getLogger("coursehub.activity")

_REDACTED_KEYS = frozenset({"password", "token", "credential"})


class LogAction(StrEnum):
    UPLOAD = "UPLOAD"
    DELETE = "DELETE"
    AI_QUERY = "AI_QUERY"
    LOGIN_EVENT = "LOGIN_EVENT"
    DATABASE_UPDATE = "DATABASE_UPDATE"
    GRADE_ASSIGNMENT = "GRADE_ASSIGNMENT"


def sanitize_metadata(metadata: dict[str, Any] | None) -> dict[str, Any]:
    """Return a copy of ``metadata`` without credential-bearing keys."""
    if not metadata:
        return {}
    return {k: v for k, v in metadata.items() if k not in _REDACTED_KEYS}


def build_activity_record(
    action: LogAction,
    details: str,
    metadata: dict[str, Any] | None = None,
    *,
    identity: Principal | None = None,
) -> dict[str, Any]:
    """Assemble the record written for one activity."""
    return {
        "user_id": (identity.identity_id if identity else None) or "anonymous",
        "user_email": (identity.email if identity else None) or "unknown",
        "action": str(action),
        "details": details,
        "metadata": sanitize_metadata(metadata),
        "created_at": datetime.now(UTC).isoformat(),
    }


def log_activity(
    action: LogAction,
    details: str,
    metadata: dict[str, Any] | None = None,
    *,
    identity: Principal | None = None,
) -> None:
    """Record an activity. Failures are logged at DEBUG and suppressed."""
    try:
        record = build_activity_record(action, details, metadata, identity=identity)
        logger.info("%s %s", record["action"], details, extra={"activity": record})
    except Exception:
        logger.debug("Activity log deferred", exc_info=True)
