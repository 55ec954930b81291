# app/graphql/mutations.py
import logging
import strawberry
from typing import Optional
from strawberry.types import Info

from ..schemas.visit import VisitCreate
from ..services.seating.service import seating_service
from .queries import require_user
from .types import SeatDecisionType, VisitType

logger = logging.getLogger(__name__)


@strawberry.input
class SeatVisitInput:
    venue_id: str
    client_name: str
    floor: Optional[str] = None
    table_number: Optional[int] = None
    client_document: Optional[str] = None
    client_phone: Optional[str] = None
    broker_id: Optional[str] = None
    broker_name: Optional[str] = None
    development: Optional[str] = None


@strawberry.input
class PromoteInput:
    entry_id: str
    venue_id: Optional[str] = None
    floor: Optional[str] = None
    desired_table_number: Optional[int] = None


@strawberry.type
class Mutation:
    @strawberry.mutation
    def request_seat(
        self,
        venue_id: str,
        info: Info,
        floor: Optional[str] = None,
        desired_table_number: Optional[int] = None,
    ) -> SeatDecisionType:
        """Check a seat without taking it."""
        require_user(info)
        decision = seating_service.check_seat(
            info.context.db,
            venue_id=venue_id,
            floor=floor,
            desired_table_number=desired_table_number,
        )
        return SeatDecisionType.from_decision(decision)

    @strawberry.mutation
    def seat_visit(self, input: SeatVisitInput, info: Info) -> SeatDecisionType:
        require_user(info)
        visit_in = VisitCreate(**strawberry.asdict(input))
        result = seating_service.seat_visit(info.context.db, visit_in=visit_in)
        return SeatDecisionType.from_decision(result.decision, visit=result.visit)

    @strawberry.mutation
    def promote_from_waitlist(self, input: PromoteInput, info: Info) -> SeatDecisionType:
        require_user(info)
        result = seating_service.promote_from_waitlist(
            info.context.db,
            entry_id=input.entry_id,
            venue_id=input.venue_id,
            floor=input.floor,
            desired_table_number=input.desired_table_number,
        )
        return SeatDecisionType.from_decision(result.decision, visit=result.visit)

    @strawberry.mutation
    def finalize_visit(self, visit_id: str, info: Info) -> VisitType:
        require_user(info)
        visit = seating_service.finalize_visit(info.context.db, visit_id=visit_id)
        return VisitType.from_model(visit)
