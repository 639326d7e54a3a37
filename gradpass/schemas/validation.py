from pydantic import BaseModel, Field
from typing import Optional
from gradpass.schemas.ticket import TicketResponse
from gradpass.services.validation import ValidationStatus


class ValidateTicketRequest(BaseModel):
    code: str
    validator_id: str = Field(..., min_length=1)


class ValidationResponse(BaseModel):
    status: ValidationStatus
    ticket: Optional[TicketResponse] = None

    class Config:
        from_attributes = True
