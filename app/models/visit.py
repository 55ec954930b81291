# app/models/visit.py
"""
Client visit attended at a table.

A visit with status 'active' holds its table; finishing the visit frees it.
Rows are never deleted so reports can count past visits.
"""

import uuid
from sqlalchemy import Column, String, Integer, DateTime, Index, CheckConstraint, text
from sqlalchemy.sql import func

from app.db.base_class import Base


class Visit(Base):
    __tablename__ = "visits"

    id = Column(String, primary_key=True, default=lambda: f"vis_{uuid.uuid4().hex[:12]}")

    # Occupancy key
    venue_id = Column(String, nullable=False, index=True)  # "loja", see app.core.venues
    floor = Column(String, nullable=False, server_default="N/A")  # "andar", N/A when the venue has none
    table_number = Column(Integer, nullable=False)

    status = Column(String(20), nullable=False, server_default="active")  # active, finished

    # Client
    client_name = Column(String, nullable=False)
    client_document = Column(String, nullable=False)  # CPF
    client_phone = Column(String, nullable=True)

    # Broker ("corretor"); users live in the auth backend, no FK
    broker_id = Column(String, nullable=True, index=True)
    broker_name = Column(String, nullable=True)
    development = Column(String, nullable=True)  # "empreendimento" the client came for

    entry_time = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    exit_time = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        CheckConstraint("table_number >= 1", name="check_visit_table_positive"),
        CheckConstraint("status IN ('active', 'finished')", name="check_visit_status"),
        # At most one active visit per table. Makes the seating insert a
        # conditional write: a concurrent second insert fails here.
        Index(
            "uq_visits_active_table",
            "venue_id",
            "floor",
            "table_number",
            unique=True,
            postgresql_where=text("status = 'active'"),
            sqlite_where=text("status = 'active'"),
        ),
        Index("ix_visits_venue_status", "venue_id", "status"),
    )
