# app/api/v1/endpoints/check_in.py
"""
Check-in of scheduled clients.

The client gets the lowest free table of the chosen venue (and floor). When
the venue is full they are added to the waiting list and the receptionist
promotes them later.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api import deps
from app.api.v1.endpoints.visits import decision_conflict
from app.db.session import get_db
from app.schemas.seating import SeatDecisionResponse
from app.schemas.token import TokenPayload
from app.schemas.visit import CheckInRequest, Visit
from app.schemas.waitlist import CheckInResponse
from app.services.seating.service import seating_service
from app.utils.waitlist import to_waitlist_response

router = APIRouter(tags=["Check-in"])


@router.post("/check-in", response_model=CheckInResponse, status_code=status.HTTP_201_CREATED)
def check_in(
    check_in_in: CheckInRequest,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    result = seating_service.check_in(db, check_in_in=check_in_in)
    if result.visit is None and result.waitlist_entry is None:
        raise decision_conflict(result.decision)
    return CheckInResponse(
        decision=SeatDecisionResponse.from_decision(result.decision),
        visit=Visit.model_validate(result.visit) if result.visit else None,
        waitlist_entry=(
            to_waitlist_response(result.waitlist_entry) if result.waitlist_entry else None
        ),
    )
