from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional
from gradpass.models.ticket import TicketType


class IssuerCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    credential: str = Field(..., min_length=1)
    max_tickets: Optional[int] = Field(None, ge=0)


class IssuerResponse(BaseModel):
    name: str
    tickets_generated: int
    max_tickets: int
    created_at: Optional[datetime]

    class Config:
        from_attributes = True


class IssuerSummaryResponse(BaseModel):
    issuer: IssuerResponse
    counts: dict[TicketType, int]
    remaining: int

    class Config:
        from_attributes = True
