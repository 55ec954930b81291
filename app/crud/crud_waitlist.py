# app/crud/crud_waitlist.py
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.orm import Session

from .base import CRUDBase
from app.constants.visits import WaitlistStatus
from app.models.waitlist import WaitlistEntry
from app.schemas.waitlist import WaitlistEntryCreate, WaitlistBrokerUpdate
from app.utils.validators import normalize_client_document, validate_waitlist_transition


class CRUDWaitlist(CRUDBase[WaitlistEntry, WaitlistEntryCreate, WaitlistBrokerUpdate]):

    def create_entry(self, db: Session, *, obj_in: WaitlistEntryCreate) -> WaitlistEntry:
        data = obj_in.model_dump()
        data["client_document"] = normalize_client_document(data.get("client_document"))
        now = datetime.now(timezone.utc)
        entry = WaitlistEntry(
            **data,
            status=WaitlistStatus.WAITING,
            created_at=now,
            updated_at=now,
        )
        db.add(entry)
        db.commit()
        db.refresh(entry)
        return entry

    def get_for_update(self, db: Session, *, id: str) -> Optional[WaitlistEntry]:
        """
        Load an entry and lock its row until the transaction ends.
        A copy already held by the session is overwritten with the current row.
        """
        # Use SELECT FOR UPDATE to lock the row
        return (
            db.query(self.model)
            .filter(self.model.id == id)
            .with_for_update()
            .populate_existing()
            .first()
        )

    def _waiting(self, db: Session, entry_id: str):
        return db.query(self.model).filter(
            self.model.id == entry_id,
            self.model.status == WaitlistStatus.WAITING,
        )

    def get_waiting(
        self, db: Session, *, venue_id: Optional[str] = None
    ) -> List[WaitlistEntry]:
        """
        Gets the clients still waiting, first come first listed.
        """
        query = db.query(self.model).filter(self.model.status == WaitlistStatus.WAITING)
        if venue_id:
            query = query.filter(self.model.venue_id == venue_id)
        return query.order_by(self.model.created_at.asc()).all()

    def mark_seated(
        self, db: Session, *, entry: WaitlistEntry, visit_id: str, commit: bool = True
    ) -> Optional[WaitlistEntry]:
        """
        Move a waiting entry to seated.

        The UPDATE only matches a row that is still waiting. Returns None when
        another transaction seated the entry first; nothing is written then.
        """
        validate_waitlist_transition(entry.status, WaitlistStatus.SEATED)
        updated = self._waiting(db, entry.id).update(
            {
                "status": WaitlistStatus.SEATED,
                "visit_id": visit_id,
                "seated_at": datetime.now(timezone.utc),
            },
            synchronize_session=False,
        )
        if not updated:
            return None
        db.expire(entry)
        if commit:
            db.commit()
            db.refresh(entry)
        return entry

    def change_broker(
        self, db: Session, *, entry: WaitlistEntry, obj_in: WaitlistBrokerUpdate
    ) -> Optional[WaitlistEntry]:
        """Reassign the broker of a waiting entry. Returns None once it was seated."""
        updated = self._waiting(db, entry.id).update(
            obj_in.model_dump(), synchronize_session=False
        )
        db.commit()
        if not updated:
            return None
        db.refresh(entry)
        return entry

    def remove_waiting(self, db: Session, *, id: str) -> bool:
        """Delete a waiting entry. Seated entries are kept; returns False for them."""
        deleted = self._waiting(db, id).delete(synchronize_session="fetch")
        db.commit()
        return bool(deleted)


waitlist = CRUDWaitlist(WaitlistEntry)
