# app/api/v1/endpoints/visits.py
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session

from app.api import deps
from app.crud import crud_visit
from app.db.session import get_db
from app.schemas.seating import SeatDecisionResponse
from app.schemas.token import TokenPayload
from app.schemas.visit import Visit, VisitCreate
from app.services.seating.allocation import SeatDecision
from app.services.seating.service import seating_service
from app.utils.validators import validate_visit_status

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/visits", tags=["Visits"])


def decision_conflict(decision: SeatDecision) -> HTTPException:
    """409 carrying the refused decision, so the UI can offer the alternative."""
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail=SeatDecisionResponse.from_decision(decision).model_dump(mode="json"),
    )


@router.post("", response_model=Visit, status_code=status.HTTP_201_CREATED)
def create_visit(
    visit_in: VisitCreate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """
    Seat a client and start the visit.

    Without `table_number` the lowest free table is used.
    """
    result = seating_service.seat_visit(db, visit_in=visit_in)
    if not result.decision.ok:
        raise decision_conflict(result.decision)
    return result.visit


@router.get("", response_model=List[Visit])
def list_visits(
    venue_id: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    broker_id: Optional[str] = Query(None),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """List visits, newest first."""
    if status:
        status = validate_visit_status(status)
    return crud_visit.visit.get_multi_filtered(
        db,
        venue_id=venue_id,
        status=status,
        broker_id=broker_id,
        skip=skip,
        limit=limit,
    )


@router.get("/{visit_id}", response_model=Visit)
def get_visit(
    visit_id: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    visit = crud_visit.visit.get(db, id=visit_id)
    if not visit:
        raise HTTPException(status_code=404, detail="Visit not found")
    return visit


@router.post("/{visit_id}/finalize", response_model=Visit)
def finalize_visit(
    visit_id: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """End the visit and release its table."""
    return seating_service.finalize_visit(db, visit_id=visit_id)
