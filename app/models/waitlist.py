# app/models/waitlist.py
import uuid
from sqlalchemy import Column, String, ForeignKey, DateTime, Index, CheckConstraint, func
from sqlalchemy.orm import relationship
from app.db.base_class import Base


class WaitlistEntry(Base):
    """
    Client waiting for a table ("lista de espera").

    Status moves waiting -> seated once, when a receptionist promotes the
    entry and a visit is created for the client in the same transaction.
    """
    __tablename__ = "waitlist_entries"

    id = Column(
        String, primary_key=True, default=lambda: f"wle_{uuid.uuid4().hex[:12]}"
    )
    venue_id = Column(String, nullable=False, index=True)

    client_name = Column(String, nullable=False)
    client_document = Column(String, nullable=False)
    client_phone = Column(String, nullable=True)

    broker_id = Column(String, nullable=True)
    broker_name = Column(String, nullable=True)
    desired_development = Column(String, nullable=True)

    status = Column(String(20), nullable=False, server_default="waiting")  # waiting, seated
    visit_id = Column(String, ForeignKey("visits.id"), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
    seated_at = Column(DateTime(timezone=True), nullable=True)

    visit = relationship("Visit")

    __table_args__ = (
        CheckConstraint("status IN ('waiting', 'seated')", name="check_waitlist_status"),
        Index("ix_waitlist_venue_status", "venue_id", "status"),
    )
