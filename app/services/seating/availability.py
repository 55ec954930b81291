# app/services/seating/availability.py
"""
Table availability for a venue (and floor).

Occupancy is never stored: a table is taken when an active visit points at
it. These functions derive the free/occupied sets from whatever visit rows
the caller fetched, so they can run against ORM objects or plain records.
"""
from dataclasses import dataclass
from typing import Iterable, Optional

from app.constants.visits import VisitStatus
from app.core.venues import NO_FLOOR, VenueCapacity


@dataclass(frozen=True)
class OccupancySummary:
    venue_id: str
    floor: Optional[str]
    table_count: int
    free_tables: list[int]
    occupied_tables: list[int]

    @property
    def is_full(self) -> bool:
        return not self.free_tables


def _occupies(visit, capacity: VenueCapacity, floor: Optional[str]) -> bool:
    if visit.status != VisitStatus.ACTIVE or visit.venue_id != capacity.venue_id:
        return False
    if capacity.has_floors:
        return visit.floor == floor
    return True


def occupied_tables(
    capacity: VenueCapacity, floor: Optional[str], visits: Iterable
) -> list[int]:
    """Table numbers held by active visits, ascending, limited to the venue's range."""
    if capacity.has_floors and floor is None:
        return []
    taken = {
        v.table_number for v in visits if _occupies(v, capacity, floor)
    }
    return [n for n in capacity.table_numbers if n in taken]


def free_tables(
    capacity: VenueCapacity, floor: Optional[str], visits: Iterable
) -> list[int]:
    """
    Free table numbers in ascending order.

    `floor` must already be resolved (see resolve_floor). For a venue with
    floors and no floor selected the result is empty: nothing can be offered
    until the receptionist picks a floor.
    """
    if capacity.has_floors and floor is None:
        return []
    taken = set(occupied_tables(capacity, floor, visits))
    return [n for n in capacity.table_numbers if n not in taken]


def occupancy_summary(
    capacity: VenueCapacity, floor: Optional[str], visits: Iterable
) -> OccupancySummary:
    visits = list(visits)
    return OccupancySummary(
        venue_id=capacity.venue_id,
        floor=None if floor == NO_FLOOR else floor,
        table_count=capacity.table_count,
        free_tables=free_tables(capacity, floor, visits),
        occupied_tables=occupied_tables(capacity, floor, visits),
    )
