# app/services/seating/service.py
"""
Seating workflow against the database.

Reads the current active visits, asks the AllocationPolicy for a decision and,
when the decision allows it, performs the writes. The visit insert is a
conditional write: the partial unique index on the occupancy key rejects a
second active visit on the same table, which turns a lost race into a
TABLE_OCCUPIED decision instead of a double-booked table.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app import crud
from app.core.venues import NO_FLOOR, VENUE_CAPACITIES, VenueCapacityTable, resolve_floor
from app.models.visit import Visit
from app.models.waitlist import WaitlistEntry
from app.schemas.visit import CheckInRequest, VisitBase, VisitCreate
from app.schemas.waitlist import WaitlistEntryCreate
from app.services.seating.allocation import AllocationPolicy, SeatDecision, SeatOutcome
from app.services.seating.availability import OccupancySummary, occupancy_summary

logger = logging.getLogger(__name__)


@dataclass
class SeatingResult:
    decision: SeatDecision
    visit: Optional[Visit] = None
    waitlist_entry: Optional[WaitlistEntry] = None


class SeatingService:
    def __init__(self, capacities: VenueCapacityTable):
        self.capacities = capacities
        self.policy = AllocationPolicy(capacities)

    # ------------------------------------------------------------------ #
    # Reads
    # ------------------------------------------------------------------ #

    def availability(
        self, db: Session, *, venue_id: str, floor: Optional[str] = None
    ) -> OccupancySummary:
        capacity = self.capacities.capacity_of(venue_id)
        resolved = resolve_floor(capacity, floor)
        visits = crud.visit.get_active_by_venue(db, venue_id=venue_id)
        return occupancy_summary(capacity, resolved, visits)

    def check_seat(
        self,
        db: Session,
        *,
        venue_id: str,
        floor: Optional[str] = None,
        desired_table_number: Optional[int] = None,
    ) -> SeatDecision:
        """Decide on a seat without writing anything."""
        visits = crud.visit.get_active_by_venue(db, venue_id=venue_id)
        return self.policy.request_seat(
            venue_id, floor, visits, desired_table_number=desired_table_number
        )

    # ------------------------------------------------------------------ #
    # Writes
    # ------------------------------------------------------------------ #

    def _insert_visit(
        self, db: Session, decision: SeatDecision, visit_in: VisitBase
    ) -> SeatingResult:
        try:
            visit = crud.visit.create_active(
                db,
                obj_in=visit_in,
                venue_id=decision.venue_id,
                floor=decision.floor or NO_FLOOR,
                table_number=decision.table_number,
            )
        except IntegrityError:
            db.rollback()
            logger.warning(
                f"Table {decision.table_number} at {decision.venue_id} was taken "
                f"concurrently; seat refused"
            )
            return SeatingResult(decision=decision.as_refusal(SeatOutcome.TABLE_OCCUPIED))
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to create visit at {decision.venue_id}: {e}")
            raise

        logger.info(
            f"Visit {visit.id} seated at {visit.venue_id}/{visit.floor} "
            f"table {visit.table_number}"
        )
        return SeatingResult(decision=decision, visit=visit)

    def seat_visit(self, db: Session, *, visit_in: VisitCreate) -> SeatingResult:
        """Seat a client on the requested table, or on the first free one."""
        decision = self.check_seat(
            db,
            venue_id=visit_in.venue_id,
            floor=visit_in.floor,
            desired_table_number=visit_in.table_number,
        )
        if not decision.ok:
            logger.info(f"Seat refused at {visit_in.venue_id}: {decision.outcome.value}")
            return SeatingResult(decision=decision)
        return self._insert_visit(db, decision, visit_in)

    def check_in(self, db: Session, *, check_in_in: CheckInRequest) -> SeatingResult:
        """
        Check in a scheduled client.

        Takes the lowest free table. When the venue is full the client goes to
        the waiting list instead; the decision still reports VENUE_FULL.
        """
        decision = self.check_seat(
            db, venue_id=check_in_in.venue_id, floor=check_in_in.floor
        )
        if decision.ok:
            return self._insert_visit(db, decision, check_in_in)

        if decision.outcome == SeatOutcome.VENUE_FULL:
            entry = crud.waitlist.create_entry(
                db,
                obj_in=WaitlistEntryCreate(
                    venue_id=check_in_in.venue_id,
                    client_name=check_in_in.client_name,
                    client_document=check_in_in.client_document,
                    client_phone=check_in_in.client_phone,
                    broker_id=check_in_in.broker_id,
                    broker_name=check_in_in.broker_name,
                    desired_development=check_in_in.development,
                ),
            )
            logger.info(
                f"{check_in_in.venue_id} is full; {entry.id} added to the waiting list"
            )
            return SeatingResult(decision=decision, waitlist_entry=entry)

        return SeatingResult(decision=decision)

    def promote_from_waitlist(
        self,
        db: Session,
        *,
        entry_id: str,
        venue_id: Optional[str] = None,
        floor: Optional[str] = None,
        desired_table_number: Optional[int] = None,
    ) -> SeatingResult:
        """
        Seat a waiting client.

        The entry update and the visit insert are committed together; if
        either fails nothing is written. The entry row stays locked while the
        seat is decided, and the status change only applies to a row that is
        still waiting, so concurrent promotions seat a client once.
        """
        entry = crud.waitlist.get_for_update(db, id=entry_id)
        if not entry:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Waitlist entry not found"
            )

        target_venue = venue_id or entry.venue_id
        visits = crud.visit.get_active_by_venue(db, venue_id=target_venue)
        decision = self.policy.promote_from_waitlist(
            entry,
            floor,
            visits,
            desired_table_number=desired_table_number,
            venue_id=target_venue,
        )
        if not decision.ok:
            logger.info(f"Promotion of {entry.id} refused: {decision.outcome.value}")
            # Release the row lock.
            db.rollback()
            return SeatingResult(decision=decision, waitlist_entry=entry)

        visit_in = VisitBase(
            client_name=entry.client_name,
            client_document=entry.client_document,
            client_phone=entry.client_phone,
            broker_id=entry.broker_id,
            broker_name=entry.broker_name,
            development=entry.desired_development,
        )
        try:
            visit = crud.visit.create_active(
                db,
                obj_in=visit_in,
                venue_id=decision.venue_id,
                floor=decision.floor or NO_FLOOR,
                table_number=decision.table_number,
                commit=False,
            )
            seated = crud.waitlist.mark_seated(
                db, entry=entry, visit_id=visit.id, commit=False
            )
            if seated is None:
                db.rollback()
                logger.warning(
                    f"Waitlist entry {entry_id} was seated concurrently; "
                    f"visit at {decision.venue_id} table {decision.table_number} discarded"
                )
                db.refresh(entry)
                return SeatingResult(
                    decision=SeatDecision(
                        outcome=SeatOutcome.ALREADY_SEATED, venue_id=decision.venue_id
                    ),
                    waitlist_entry=entry,
                )
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.warning(
                f"Table {decision.table_number} at {decision.venue_id} was taken "
                f"while promoting {entry_id}"
            )
            db.refresh(entry)
            return SeatingResult(
                decision=decision.as_refusal(SeatOutcome.TABLE_OCCUPIED),
                waitlist_entry=entry,
            )
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to promote waitlist entry {entry_id}: {e}")
            raise

        db.refresh(visit)
        db.refresh(entry)
        logger.info(
            f"Waitlist entry {entry.id} seated as visit {visit.id} "
            f"({visit.venue_id}/{visit.floor} table {visit.table_number})"
        )
        return SeatingResult(decision=decision, visit=visit, waitlist_entry=entry)

    def finalize_visit(self, db: Session, *, visit_id: str) -> Visit:
        """End a visit; its table is free for the next availability read."""
        visit = crud.visit.get(db, id=visit_id)
        if not visit:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Visit not found"
            )
        return crud.visit.finish(db, visit=visit)


# Singleton instance
seating_service = SeatingService(VENUE_CAPACITIES)
