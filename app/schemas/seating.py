# app/schemas/seating.py
from pydantic import BaseModel, Field
from typing import List, Optional

from app.services.seating.allocation import SeatDecision, SeatOutcome


class VenueCapacityResponse(BaseModel):
    venue_id: str
    table_count: int
    has_floors: bool
    floors: List[str] = []


class AvailabilityResponse(BaseModel):
    venue_id: str
    floor: Optional[str] = None
    table_count: int
    free_tables: List[int]
    occupied_tables: List[int]
    is_full: bool


class SeatRequest(BaseModel):
    venue_id: str
    floor: Optional[str] = None
    desired_table_number: Optional[int] = Field(None, ge=1)


class SeatDecisionResponse(BaseModel):
    outcome: SeatOutcome
    venue_id: str
    floor: Optional[str] = None
    table_number: Optional[int] = None
    free_tables: List[int] = []
    message: Optional[str] = None

    @classmethod
    def from_decision(cls, decision: SeatDecision) -> "SeatDecisionResponse":
        return cls(
            outcome=decision.outcome,
            venue_id=decision.venue_id,
            floor=decision.floor,
            table_number=decision.table_number,
            free_tables=decision.free_tables,
            message=decision.message,
        )
