# app/schemas/waitlist.py
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from app.schemas.seating import SeatDecisionResponse
from app.schemas.visit import Visit


class WaitlistEntryCreate(BaseModel):
    venue_id: str
    client_name: str = Field(..., min_length=1)
    client_document: Optional[str] = None
    client_phone: Optional[str] = None
    broker_id: Optional[str] = None
    broker_name: Optional[str] = None
    desired_development: Optional[str] = None


class WaitlistEntry(BaseModel):
    id: str
    venue_id: str
    client_name: str
    client_document: str
    client_phone: Optional[str] = None
    broker_id: Optional[str] = None
    broker_name: Optional[str] = None
    desired_development: Optional[str] = None
    status: str
    visit_id: Optional[str] = None
    created_at: datetime
    seated_at: Optional[datetime] = None
    wait_exceeded: bool = False

    model_config = {"from_attributes": True}


class WaitlistBrokerUpdate(BaseModel):
    broker_id: Optional[str] = None
    broker_name: Optional[str] = None


class WaitlistPromoteRequest(BaseModel):
    # Defaults to the venue the client queued for
    venue_id: Optional[str] = None
    floor: Optional[str] = None
    desired_table_number: Optional[int] = Field(None, ge=1)


class CheckInResponse(BaseModel):
    decision: SeatDecisionResponse
    visit: Optional[Visit] = None
    waitlist_entry: Optional[WaitlistEntry] = None
