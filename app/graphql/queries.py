# app/graphql/queries.py
import strawberry
from typing import List, Optional
from strawberry.types import Info
from fastapi import HTTPException

from .. import crud
from ..core.venues import VENUE_CAPACITIES
from ..services.seating.service import seating_service
from .types import AvailabilityType, VenueType, VisitType, WaitlistEntryType


def require_user(info: Info) -> dict:
    user = info.context.user
    if not user:
        raise HTTPException(status_code=401, detail="Authentication required")
    return user


@strawberry.type
class Query:
    @strawberry.field
    def venues(self, info: Info) -> List[VenueType]:
        require_user(info)
        return [
            VenueType(
                venue_id=v.venue_id,
                table_count=v.table_count,
                has_floors=v.has_floors,
                floors=list(v.floors),
            )
            for v in VENUE_CAPACITIES.list_venues()
        ]

    @strawberry.field
    def availability(
        self, venue_id: str, info: Info, floor: Optional[str] = None
    ) -> AvailabilityType:
        require_user(info)
        summary = seating_service.availability(
            info.context.db, venue_id=venue_id, floor=floor
        )
        return AvailabilityType(
            venue_id=summary.venue_id,
            floor=summary.floor,
            table_count=summary.table_count,
            free_tables=summary.free_tables,
            occupied_tables=summary.occupied_tables,
            is_full=summary.is_full,
        )

    @strawberry.field
    def active_visits(self, venue_id: str, info: Info) -> List[VisitType]:
        require_user(info)
        visits = crud.visit.get_active_by_venue(info.context.db, venue_id=venue_id)
        return [VisitType.from_model(v) for v in visits]

    @strawberry.field
    def waitlist(
        self, info: Info, venue_id: Optional[str] = None
    ) -> List[WaitlistEntryType]:
        require_user(info)
        entries = crud.waitlist.get_waiting(info.context.db, venue_id=venue_id)
        return [WaitlistEntryType.from_model(e) for e in entries]
