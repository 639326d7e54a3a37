from gradpass.schemas.issuer import IssuerCreate, IssuerResponse, IssuerSummaryResponse
from gradpass.schemas.ticket import IssueTicketRequest, TicketResponse, TicketStatsResponse, ErrorResponse
from gradpass.schemas.validation import ValidateTicketRequest, ValidationResponse

__all__ = [
    "IssuerCreate", "IssuerResponse", "IssuerSummaryResponse",
    "IssueTicketRequest", "TicketResponse", "TicketStatsResponse", "ErrorResponse",
    "ValidateTicketRequest", "ValidationResponse"
]
