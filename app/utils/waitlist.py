# app/utils/waitlist.py
"""
Waiting-list helpers shared by the REST and GraphQL layers.
"""

from typing import Optional
from datetime import datetime, timedelta, timezone

from app.constants.visits import WaitlistStatus
from app.core.config import settings
from app.models.waitlist import WaitlistEntry
from app.schemas.waitlist import WaitlistEntry as WaitlistEntrySchema


def _as_utc(value: datetime) -> datetime:
    # Some drivers (SQLite) hand back naive datetimes; they are stored as UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def wait_exceeded(
    entry: WaitlistEntry,
    now: Optional[datetime] = None,
    max_wait_minutes: Optional[int] = None,
) -> bool:
    """
    True when a client still waiting has been in the queue too long.

    The front desk highlights these clients so a receptionist attends them
    first; seated entries are never flagged.
    """
    if entry.status != WaitlistStatus.WAITING or entry.created_at is None:
        return False
    now = now or datetime.now(timezone.utc)
    if max_wait_minutes is None:
        max_wait_minutes = settings.WAITLIST_MAX_WAIT_MINUTES
    return now - _as_utc(entry.created_at) > timedelta(minutes=max_wait_minutes)


def to_waitlist_response(entry: WaitlistEntry) -> WaitlistEntrySchema:
    response = WaitlistEntrySchema.model_validate(entry)
    response.wait_exceeded = wait_exceeded(entry)
    return response
