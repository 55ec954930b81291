# app/graphql/types.py
"""
GraphQL types for the front desk.
"""

import strawberry
from typing import Optional, List
from datetime import datetime

from ..services.seating.allocation import SeatDecision, SeatOutcome
from ..utils.waitlist import wait_exceeded

SeatOutcomeType = strawberry.enum(SeatOutcome, name="SeatOutcome")


@strawberry.type
class VenueType:
    venue_id: str
    table_count: int
    has_floors: bool
    floors: List[str]


@strawberry.type
class AvailabilityType:
    venue_id: str
    floor: Optional[str]
    table_count: int
    free_tables: List[int]
    occupied_tables: List[int]
    is_full: bool


@strawberry.type
class VisitType:
    id: str
    venue_id: str
    floor: str
    table_number: int
    status: str
    client_name: str
    client_document: str
    client_phone: Optional[str]
    broker_id: Optional[str]
    broker_name: Optional[str]
    development: Optional[str]
    entry_time: datetime
    exit_time: Optional[datetime]

    @classmethod
    def from_model(cls, visit) -> "VisitType":
        return cls(
            id=visit.id,
            venue_id=visit.venue_id,
            floor=visit.floor,
            table_number=visit.table_number,
            status=visit.status,
            client_name=visit.client_name,
            client_document=visit.client_document,
            client_phone=visit.client_phone,
            broker_id=visit.broker_id,
            broker_name=visit.broker_name,
            development=visit.development,
            entry_time=visit.entry_time,
            exit_time=visit.exit_time,
        )


@strawberry.type
class WaitlistEntryType:
    id: str
    venue_id: str
    client_name: str
    client_document: str
    client_phone: Optional[str]
    broker_id: Optional[str]
    broker_name: Optional[str]
    desired_development: Optional[str]
    status: str
    visit_id: Optional[str]
    created_at: datetime
    seated_at: Optional[datetime]
    wait_exceeded: bool

    @classmethod
    def from_model(cls, entry) -> "WaitlistEntryType":
        return cls(
            id=entry.id,
            venue_id=entry.venue_id,
            client_name=entry.client_name,
            client_document=entry.client_document,
            client_phone=entry.client_phone,
            broker_id=entry.broker_id,
            broker_name=entry.broker_name,
            desired_development=entry.desired_development,
            status=entry.status,
            visit_id=entry.visit_id,
            created_at=entry.created_at,
            seated_at=entry.seated_at,
            wait_exceeded=wait_exceeded(entry),
        )


@strawberry.type
class SeatDecisionType:
    """Outcome of a seating attempt; `visit` is set when a visit was created."""
    outcome: SeatOutcomeType
    venue_id: str
    floor: Optional[str]
    table_number: Optional[int]
    free_tables: List[int]
    message: Optional[str]
    visit: Optional[VisitType] = None

    @classmethod
    def from_decision(cls, decision: SeatDecision, visit=None) -> "SeatDecisionType":
        return cls(
            outcome=decision.outcome,
            venue_id=decision.venue_id,
            floor=decision.floor,
            table_number=decision.table_number,
            free_tables=decision.free_tables,
            message=decision.message,
            visit=VisitType.from_model(visit) if visit is not None else None,
        )
