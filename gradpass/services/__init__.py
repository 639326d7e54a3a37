from gradpass.services.codes import CodeGenerator
from gradpass.services.quota import QuotaPolicy
from gradpass.services.issuance import IssuanceService
from gradpass.services.validation import ValidationService, ValidationResult, ValidationStatus
from gradpass.services.issuers import IssuerService
from gradpass.services.reporting import TicketQueryService

__all__ = [
    "CodeGenerator",
    "QuotaPolicy",
    "IssuanceService",
    "ValidationService",
    "ValidationResult",
    "ValidationStatus",
    "IssuerService",
    "TicketQueryService"
]
