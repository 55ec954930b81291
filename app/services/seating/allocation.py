# app/services/seating/allocation.py
"""
Seat allocation policy.

Decides whether a client can sit down now, on which table, or whether the
receptionist has to choose something else (another table, a floor, the
waiting list). The policy never writes: it authorises a choice that the
caller persists afterwards.

Outcomes:
- SEATED: `table_number` is free and may be used
- TABLE_OCCUPIED: the requested table is taken (or outside the floor plan)
- VENUE_FULL: no table is free; offer the waiting list
- FLOOR_REQUIRED: the venue is split by floor and none was selected
- ALREADY_SEATED: a waiting-list entry was promoted before
"""
import enum
from dataclasses import dataclass, field
from typing import Iterable, Optional

from app.constants.visits import WaitlistStatus
from app.core.venues import NO_FLOOR, VenueCapacityTable, resolve_floor
from app.services.seating.availability import free_tables


class SeatOutcome(str, enum.Enum):
    SEATED = "seated"
    TABLE_OCCUPIED = "table_occupied"
    VENUE_FULL = "venue_full"
    FLOOR_REQUIRED = "floor_required"
    ALREADY_SEATED = "already_seated"


# What the receptionist is told for each refusal.
OUTCOME_MESSAGES = {
    SeatOutcome.TABLE_OCCUPIED: "This table is already in use. Please pick another table.",
    SeatOutcome.VENUE_FULL: "No tables are free right now. Add the client to the waiting list.",
    SeatOutcome.FLOOR_REQUIRED: "This venue is split by floor. Please select a floor.",
    SeatOutcome.ALREADY_SEATED: "This client has already been seated from the waiting list.",
}


@dataclass(frozen=True)
class SeatDecision:
    outcome: SeatOutcome
    venue_id: str
    floor: Optional[str] = None
    table_number: Optional[int] = None
    free_tables: list[int] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.outcome == SeatOutcome.SEATED

    @property
    def message(self) -> Optional[str]:
        return OUTCOME_MESSAGES.get(self.outcome)

    def as_refusal(self, outcome: SeatOutcome) -> "SeatDecision":
        return SeatDecision(
            outcome=outcome,
            venue_id=self.venue_id,
            floor=self.floor,
            free_tables=[n for n in self.free_tables if n != self.table_number],
        )


class AllocationPolicy:
    def __init__(self, capacities: VenueCapacityTable):
        self.capacities = capacities

    def request_seat(
        self,
        venue_id: str,
        floor: Optional[str],
        active_visits: Iterable,
        desired_table_number: Optional[int] = None,
    ) -> SeatDecision:
        """
        Pick a table for a new visit.

        `active_visits` should be a fresh read of the venue's visits; rows
        that are not active are ignored.

        Raises:
            UnknownVenueError / UnknownFloorConfigurationError on a bad floor plan
        """
        capacity = self.capacities.capacity_of(venue_id)
        resolved = resolve_floor(capacity, floor)
        if capacity.has_floors and resolved is None:
            return SeatDecision(outcome=SeatOutcome.FLOOR_REQUIRED, venue_id=venue_id)

        free = free_tables(capacity, resolved, active_visits)
        floor_out = None if resolved == NO_FLOOR else resolved

        # A full venue is reported as such even for a specific table, so the
        # receptionist is pointed at the waiting list.
        if not free:
            return SeatDecision(
                outcome=SeatOutcome.VENUE_FULL, venue_id=venue_id, floor=floor_out
            )

        if desired_table_number is not None:
            if desired_table_number in free:
                return SeatDecision(
                    outcome=SeatOutcome.SEATED,
                    venue_id=venue_id,
                    floor=floor_out,
                    table_number=desired_table_number,
                    free_tables=free,
                )
            return SeatDecision(
                outcome=SeatOutcome.TABLE_OCCUPIED,
                venue_id=venue_id,
                floor=floor_out,
                free_tables=free,
            )

        return SeatDecision(
            outcome=SeatOutcome.SEATED,
            venue_id=venue_id,
            floor=floor_out,
            table_number=free[0],
            free_tables=free,
        )

    def promote_from_waitlist(
        self,
        entry,
        floor: Optional[str],
        active_visits: Iterable,
        desired_table_number: Optional[int] = None,
        venue_id: Optional[str] = None,
    ) -> SeatDecision:
        """
        Same selection as request_seat, for a waiting-list entry.

        The venue defaults to the one the client queued for; the receptionist
        may seat them elsewhere by passing `venue_id`.
        """
        venue_id = venue_id or entry.venue_id
        if entry.status != WaitlistStatus.WAITING:
            # Validate the venue even when refusing.
            self.capacities.capacity_of(venue_id)
            return SeatDecision(outcome=SeatOutcome.ALREADY_SEATED, venue_id=venue_id)
        return self.request_seat(
            venue_id, floor, active_visits, desired_table_number=desired_table_number
        )
