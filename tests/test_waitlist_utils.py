"""
Tests for the waiting-list timer and input validators.
"""

import pytest
from datetime import datetime, timedelta, timezone
from fastapi import HTTPException

from app.utils.validators import (
    normalize_client_document,
    validate_visit_status,
    validate_waitlist_transition,
)
from app.utils.waitlist import wait_exceeded
from tests.utils.seating import EntryRecord

NOW = datetime(2026, 10, 19, 15, 0, tzinfo=timezone.utc)


def waiting_since(minutes: int, status: str = "waiting") -> EntryRecord:
    entry = EntryRecord(status=status)
    entry.created_at = NOW - timedelta(minutes=minutes)
    return entry


class TestWaitExceeded:
    def test_recent_entry_is_not_flagged(self):
        assert wait_exceeded(waiting_since(5), now=NOW) is False

    def test_default_limit_is_twenty_minutes(self):
        assert wait_exceeded(waiting_since(20), now=NOW) is False
        assert wait_exceeded(waiting_since(21), now=NOW) is True

    def test_custom_limit(self):
        assert wait_exceeded(waiting_since(6), now=NOW, max_wait_minutes=5) is True

    def test_seated_entry_is_never_flagged(self):
        assert wait_exceeded(waiting_since(90, status="seated"), now=NOW) is False

    def test_naive_timestamps_are_read_as_utc(self):
        entry = waiting_since(30)
        entry.created_at = entry.created_at.replace(tzinfo=None)

        assert wait_exceeded(entry, now=NOW) is True


class TestValidators:
    def test_normalize_client_document(self):
        assert normalize_client_document(None) == "00000000000"
        assert normalize_client_document("   ") == "00000000000"
        assert normalize_client_document(" 12345678901 ") == "12345678901"

    def test_validate_visit_status(self):
        assert validate_visit_status("Finished") == "finished"
        with pytest.raises(HTTPException) as exc_info:
            validate_visit_status("cancelled")
        assert exc_info.value.status_code == 400

    def test_waitlist_transitions(self):
        assert validate_waitlist_transition("waiting", "seated") is True
        with pytest.raises(HTTPException) as exc_info:
            validate_waitlist_transition("seated", "waiting")
        assert exc_info.value.status_code == 409
