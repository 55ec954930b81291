# app/api/v1/endpoints/venues.py
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api import deps
from app.core.venues import VENUE_CAPACITIES
from app.db.session import get_db
from app.schemas.seating import (
    AvailabilityResponse,
    SeatDecisionResponse,
    SeatRequest,
    VenueCapacityResponse,
)
from app.schemas.token import TokenPayload
from app.services.seating.service import seating_service

router = APIRouter(tags=["Venues"])


@router.get("/venues", response_model=List[VenueCapacityResponse])
def list_venues(current_user: TokenPayload = Depends(deps.get_current_user)):
    """Floor plan: table count and floors of every venue."""
    return [
        VenueCapacityResponse(
            venue_id=v.venue_id,
            table_count=v.table_count,
            has_floors=v.has_floors,
            floors=list(v.floors),
        )
        for v in VENUE_CAPACITIES.list_venues()
    ]


@router.get("/venues/{venue_id}/availability", response_model=AvailabilityResponse)
def get_availability(
    venue_id: str,
    floor: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """
    Free and occupied tables of a venue.

    For venues split by floor, both lists stay empty until a floor is given.
    """
    summary = seating_service.availability(db, venue_id=venue_id, floor=floor)
    return AvailabilityResponse(
        venue_id=summary.venue_id,
        floor=summary.floor,
        table_count=summary.table_count,
        free_tables=summary.free_tables,
        occupied_tables=summary.occupied_tables,
        is_full=summary.is_full,
    )


@router.post("/seating/check", response_model=SeatDecisionResponse)
def check_seat(
    seat_in: SeatRequest,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """Ask whether a seat can be given, without taking it."""
    decision = seating_service.check_seat(
        db,
        venue_id=seat_in.venue_id,
        floor=seat_in.floor,
        desired_table_number=seat_in.desired_table_number,
    )
    return SeatDecisionResponse.from_decision(decision)
