from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional
from gradpass.models.ticket import TicketType


class IssueTicketRequest(BaseModel):
    issuer_name: str = Field(..., min_length=1)
    ticket_type: str
    guest_name: Optional[str] = None
    special_notes: Optional[str] = None


class TicketResponse(BaseModel):
    issuer_name: str
    guest_name: Optional[str]
    ticket_type: TicketType
    code: str
    used: bool
    created_at: datetime
    used_at: Optional[datetime]
    validated_by: Optional[str]
    special_notes: Optional[str]

    class Config:
        from_attributes = True


class TicketStatsResponse(BaseModel):
    total: int
    used: int
    available: int
    by_type: dict[TicketType, int]

    class Config:
        from_attributes = True


class ErrorResponse(BaseModel):
    error_code: str
    detail: str
