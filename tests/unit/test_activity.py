"""Tests for the activity log."""

from __future__ import annotations

import logging
from datetime import datetime

from coursehub.activity import (
    LogAction,
    build_activity_record,
    log_activity,
    sanitize_metadata,
)
from tests.unit.conftest import TEACHER


class TestSanitizeMetadata:
    def test_strips_credential_keys(self) -> None:
        metadata = {
            "file": "notes.pdf",
            "password": "hunter2",
            "token": "abc",
            "credential": "xyz",
        }
        assert sanitize_metadata(metadata) == {"file": "notes.pdf"}
        assert "password" in metadata

    def test_empty(self) -> None:
        assert sanitize_metadata(None) == {}
        assert sanitize_metadata({}) == {}


class TestBuildActivityRecord:
    def test_anonymous_defaults(self) -> None:
        record = build_activity_record(LogAction.AI_QUERY, "asked the tutor")
        assert record["user_id"] == "anonymous"
        assert record["user_email"] == "unknown"
        assert record["action"] == "AI_QUERY"
        assert record["details"] == "asked the tutor"
        assert record["metadata"] == {}

    def test_identity_and_timestamp(self) -> None:
        record = build_activity_record(
            LogAction.GRADE_ASSIGNMENT,
            "graded A1",
            {"score": 87, "token": "secret"},
            identity=TEACHER,
        )
        assert record["user_id"] == TEACHER.identity_id
        assert record["user_email"] == TEACHER.email
        assert record["metadata"] == {"score": 87}
        created = datetime.fromisoformat(record["created_at"])
        assert created.tzinfo is not None


class TestLogActivity:
    def test_writes_to_activity_logger(self, caplog) -> None:
        with caplog.at_level(logging.INFO, logger="coursehub.activity"):
            log_activity(LogAction.UPLOAD, "uploaded syllabus", {"size": 10})

        (record,) = [r for r in caplog.records if r.name == "coursehub.activity"]
        assert record.levelno == logging.INFO
        assert record.activity["action"] == "UPLOAD"
        assert record.activity["metadata"] == {"size": 10}

    def test_never_raises(self, caplog) -> None:
        """Malformed metadata is logged at DEBUG and swallowed."""
        with caplog.at_level(logging.DEBUG, logger="coursehub.activity"):
            bad_metadata: object = ["not", "a", "dict"]
            log_activity(LogAction.DELETE, "bad metadata", bad_metadata)  # type: ignore[arg-type]

        assert any(r.levelno == logging.DEBUG for r in caplog.records)
