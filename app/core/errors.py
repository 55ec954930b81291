# app/core/errors.py
"""
Configuration errors raised by the seating core.

Seat refusals (venue full, table occupied, ...) are not errors: they are
returned as SeatDecision values. The exceptions below mean the caller named a
venue or floor that is not part of the floor plan.
"""
import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class SeatingConfigurationError(Exception):
    """Base class for floor-plan precondition violations."""


class UnknownVenueError(SeatingConfigurationError):
    def __init__(self, venue_id: str):
        self.venue_id = venue_id
        super().__init__(f"Unknown venue: {venue_id!r}")


class UnknownFloorConfigurationError(SeatingConfigurationError):
    def __init__(self, venue_id: str, floor: str):
        self.venue_id = venue_id
        self.floor = floor
        super().__init__(f"Venue {venue_id!r} has no floor {floor!r}")


async def seating_configuration_error_handler(
    request: Request, exc: SeatingConfigurationError
) -> JSONResponse:
    """Reject requests naming a venue or floor outside the floor plan."""
    logger.warning(f"{request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": str(exc)},
    )
