# app/core/venues.py
"""
Static floor plan of the front desk.

Every venue ("loja") has a fixed number of tables ("mesas") numbered from 1.
Venues with floors ("andares") reuse the same numbering range on each floor.
This table is configuration, not data: nothing here is read from the database.
"""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from app.core.errors import UnknownFloorConfigurationError, UnknownVenueError

# Stored in visits.floor for venues that are not split by floor, so the
# occupancy key (venue_id, floor, table_number) never holds NULL.
NO_FLOOR = "N/A"


@dataclass(frozen=True)
class VenueCapacity:
    venue_id: str
    table_count: int
    has_floors: bool = False
    floors: tuple[str, ...] = field(default=())

    def __post_init__(self):
        if self.table_count < 1:
            raise ValueError(f"{self.venue_id}: table_count must be positive")
        if self.has_floors and not self.floors:
            raise ValueError(f"{self.venue_id}: a venue with floors needs floor names")

    @property
    def table_numbers(self) -> range:
        return range(1, self.table_count + 1)


class VenueCapacityTable:
    """Immutable lookup of venue capacities, injected into the seating core."""

    def __init__(self, venues: list[VenueCapacity]):
        self._venues: Mapping[str, VenueCapacity] = MappingProxyType(
            {v.venue_id: v for v in venues}
        )

    def capacity_of(self, venue_id: str) -> VenueCapacity:
        try:
            return self._venues[venue_id]
        except KeyError:
            raise UnknownVenueError(venue_id) from None

    def list_venues(self) -> list[VenueCapacity]:
        return list(self._venues.values())

    def __contains__(self, venue_id: str) -> bool:
        return venue_id in self._venues


def resolve_floor(capacity: VenueCapacity, floor: Optional[str]) -> Optional[str]:
    """
    Normalise a floor selection for a venue.

    - Venues without floors always resolve to NO_FLOOR, whatever was sent.
    - Venues with floors resolve to the given floor, or None when no floor
      was selected yet.

    Raises:
        UnknownFloorConfigurationError: the floor is not one of the venue's floors
    """
    if not capacity.has_floors:
        return NO_FLOOR
    if not floor or floor == NO_FLOOR:
        return None
    if floor not in capacity.floors:
        raise UnknownFloorConfigurationError(capacity.venue_id, floor)
    return floor


VENUE_CAPACITIES = VenueCapacityTable(
    [
        VenueCapacity("Loja 1", table_count=22),
        VenueCapacity(
            "Loja 2", table_count=29, has_floors=True, floors=("Térreo", "Mezanino")
        ),
        VenueCapacity("Loja 3", table_count=10),
        VenueCapacity("Loja Superior 37 andar", table_count=29),
    ]
)
