# app/constants/visits.py
"""
Constants for visit and waiting-list status values.

Provides type-safe constants to replace hardcoded strings throughout the codebase.
"""


class VisitStatus:
    """Visit status values. Only ACTIVE visits occupy a table."""
    ACTIVE = "active"
    FINISHED = "finished"

    @classmethod
    def all_values(cls) -> list[str]:
        """Return all valid status values."""
        return [cls.ACTIVE, cls.FINISHED]

    @classmethod
    def is_valid(cls, status: str) -> bool:
        """Check if a status value is valid."""
        return status in cls.all_values()


class WaitlistStatus:
    """Waiting-list entry status values."""
    WAITING = "waiting"
    SEATED = "seated"

    @classmethod
    def all_values(cls) -> list[str]:
        return [cls.WAITING, cls.SEATED]

    @classmethod
    def is_valid(cls, status: str) -> bool:
        return status in cls.all_values()
