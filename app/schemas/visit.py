# app/schemas/visit.py
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class VisitBase(BaseModel):
    client_name: str = Field(..., min_length=1)
    client_document: Optional[str] = Field(None, description="CPF; blank is stored as the default document")
    client_phone: Optional[str] = None
    broker_id: Optional[str] = None
    broker_name: Optional[str] = None
    development: Optional[str] = None


class VisitCreate(VisitBase):
    venue_id: str
    floor: Optional[str] = None
    table_number: Optional[int] = Field(None, ge=1, description="Omit to take the first free table")


class Visit(VisitBase):
    id: str
    venue_id: str
    floor: str
    table_number: int
    status: str
    entry_time: datetime
    exit_time: Optional[datetime] = None

    model_config = {"from_attributes": True}


class CheckInRequest(VisitBase):
    """Broker check-in of a scheduled client; the table is picked automatically."""
    venue_id: str
    floor: Optional[str] = None
