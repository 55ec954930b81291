# app/api/v1/endpoints/waitlist.py
"""Front-desk waiting list ("lista de espera") endpoints."""
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query, Response
from sqlalchemy.orm import Session

from app.api import deps
from app.api.v1.endpoints.visits import decision_conflict
from app.constants.visits import WaitlistStatus
from app.crud import crud_waitlist
from app.db.session import get_db
from app.schemas.token import TokenPayload
from app.schemas.visit import Visit
from app.schemas.waitlist import (
    WaitlistBrokerUpdate,
    WaitlistEntry,
    WaitlistEntryCreate,
    WaitlistPromoteRequest,
)
from app.core.venues import VENUE_CAPACITIES
from app.services.seating.service import seating_service
from app.utils.waitlist import to_waitlist_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/waitlist", tags=["Waitlist"])


def already_seated_conflict() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail="Waitlist entry was already seated",
    )


def _get_waiting_entry(db: Session, entry_id: str):
    entry = crud_waitlist.waitlist.get(db, id=entry_id)
    if not entry:
        raise HTTPException(status_code=404, detail="Waitlist entry not found")
    if entry.status != WaitlistStatus.WAITING:
        raise already_seated_conflict()
    return entry


@router.post("", response_model=WaitlistEntry, status_code=status.HTTP_201_CREATED)
def add_to_waitlist(
    entry_in: WaitlistEntryCreate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    # Unknown venues are rejected before anything is queued.
    VENUE_CAPACITIES.capacity_of(entry_in.venue_id)
    entry = crud_waitlist.waitlist.create_entry(db, obj_in=entry_in)
    logger.info(f"Waitlist entry {entry.id} created for {entry.venue_id}")
    return to_waitlist_response(entry)


@router.get("", response_model=List[WaitlistEntry])
def list_waitlist(
    venue_id: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """Clients still waiting, oldest first."""
    entries = crud_waitlist.waitlist.get_waiting(db, venue_id=venue_id)
    return [to_waitlist_response(e) for e in entries]


@router.patch("/{entry_id}/broker", response_model=WaitlistEntry)
def change_broker(
    entry_id: str,
    broker_in: WaitlistBrokerUpdate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """Hand a waiting client over to another broker."""
    entry = _get_waiting_entry(db, entry_id)
    entry = crud_waitlist.waitlist.change_broker(db, entry=entry, obj_in=broker_in)
    if entry is None:
        # Seated between the check above and the update
        raise already_seated_conflict()
    return to_waitlist_response(entry)


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_from_waitlist(
    entry_id: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """Remove a client who left without being attended."""
    _get_waiting_entry(db, entry_id)
    if not crud_waitlist.waitlist.remove_waiting(db, id=entry_id):
        raise already_seated_conflict()
    logger.info(f"Waitlist entry {entry_id} removed")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{entry_id}/promote", response_model=Visit, status_code=status.HTTP_201_CREATED)
def promote_from_waitlist(
    entry_id: str,
    promote_in: WaitlistPromoteRequest,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """
    Seat a waiting client.

    Marks the entry as seated and starts the visit in one transaction.
    """
    result = seating_service.promote_from_waitlist(
        db,
        entry_id=entry_id,
        venue_id=promote_in.venue_id,
        floor=promote_in.floor,
        desired_table_number=promote_in.desired_table_number,
    )
    if not result.decision.ok:
        raise decision_conflict(result.decision)
    return result.visit
