# app/utils/validators.py
"""
Input validation utilities for data integrity.
"""

from typing import Optional
from fastapi import HTTPException, status

from app.constants.visits import VisitStatus, WaitlistStatus
from app.core.config import settings


def normalize_client_document(document: Optional[str]) -> str:
    """
    Normalize a client CPF before storing it.

    Receptionists may leave the CPF blank for walk-in clients; those rows get
    the configured placeholder document instead of NULL.
    """
    document = (document or "").strip()
    return document or settings.DEFAULT_CLIENT_DOCUMENT


def validate_visit_status(status_value: str) -> str:
    """
    Validate visit status value.

    Returns:
        The validated status (lowercased)

    Raises:
        HTTPException: If status is invalid
    """
    status_lower = status_value.lower()

    if not VisitStatus.is_valid(status_lower):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid status. Must be one of: {', '.join(VisitStatus.all_values())}"
        )

    return status_lower


def validate_waitlist_transition(current_status: str, new_status: str) -> bool:
    """
    Validate if a waiting-list status transition is allowed.

    Valid transitions:
    - waiting → seated
    - seated → (terminal state, no transitions)

    Raises:
        HTTPException: If transition is invalid
    """
    valid_transitions = {
        WaitlistStatus.WAITING: {WaitlistStatus.SEATED},
        WaitlistStatus.SEATED: set(),  # Terminal state
    }

    allowed = valid_transitions.get(current_status, set())

    if new_status not in allowed:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Invalid status transition: {current_status} → {new_status}"
        )

    return True
