# app/crud/crud_visit.py
import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.orm import Session

from .base import CRUDBase
from app.constants.visits import VisitStatus
from app.models.visit import Visit
from app.schemas.visit import VisitBase, VisitCreate
from app.utils.validators import normalize_client_document

logger = logging.getLogger(__name__)


class CRUDVisit(CRUDBase[Visit, VisitCreate, VisitCreate]):

    def get_active_by_venue(
        self, db: Session, *, venue_id: str, floor: Optional[str] = None
    ) -> List[Visit]:
        """Active visits of a venue, optionally narrowed to one floor."""
        query = db.query(self.model).filter(
            self.model.venue_id == venue_id,
            self.model.status == VisitStatus.ACTIVE,
        )
        if floor is not None:
            query = query.filter(self.model.floor == floor)
        return query.order_by(self.model.table_number.asc()).all()

    def get_multi_filtered(
        self,
        db: Session,
        *,
        venue_id: Optional[str] = None,
        status: Optional[str] = None,
        broker_id: Optional[str] = None,
        skip: int = 0,
        limit: int = 100,
    ) -> List[Visit]:
        query = db.query(self.model)
        if venue_id:
            query = query.filter(self.model.venue_id == venue_id)
        if status:
            query = query.filter(self.model.status == status)
        if broker_id:
            query = query.filter(self.model.broker_id == broker_id)
        return (
            query.order_by(self.model.entry_time.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def create_active(
        self,
        db: Session,
        *,
        obj_in: VisitBase,
        venue_id: str,
        floor: str,
        table_number: int,
        commit: bool = True,
    ) -> Visit:
        """
        Insert an active visit on a table.

        The flush hits the partial unique index on (venue_id, floor,
        table_number), so a table taken since the caller's read raises
        IntegrityError here. With commit=False the caller owns the
        transaction.
        """
        visit = Visit(
            venue_id=venue_id,
            floor=floor,
            table_number=table_number,
            status=VisitStatus.ACTIVE,
            client_name=obj_in.client_name,
            client_document=normalize_client_document(obj_in.client_document),
            client_phone=obj_in.client_phone or None,
            broker_id=obj_in.broker_id,
            broker_name=obj_in.broker_name,
            development=getattr(obj_in, "development", None),
            entry_time=datetime.now(timezone.utc),
        )
        db.add(visit)
        db.flush()
        if commit:
            db.commit()
            db.refresh(visit)
        return visit

    def finish(self, db: Session, *, visit: Visit) -> Visit:
        """Mark a visit finished. Finishing twice keeps the first exit time."""
        if visit.status == VisitStatus.FINISHED:
            return visit
        visit.status = VisitStatus.FINISHED
        visit.exit_time = datetime.now(timezone.utc)
        db.commit()
        db.refresh(visit)
        logger.info(
            f"Visit {visit.id} finished, table {visit.table_number} "
            f"({visit.venue_id}/{visit.floor}) released"
        )
        return visit


visit = CRUDVisit(Visit)
