import enum
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from gradpass.models.ticket import Ticket
from gradpass.services.codes import is_valid_code_format, normalize_code
from gradpass.store.base import RedemptionOutcome, TicketStore

logger = logging.getLogger(__name__)


class ValidationStatus(str, enum.Enum):
    ACCEPTED = "accepted"
    ALREADY_USED = "already_used"
    NOT_FOUND = "not_found"


_STATUS_BY_OUTCOME = {
    RedemptionOutcome.VALIDATED: ValidationStatus.ACCEPTED,
    RedemptionOutcome.ALREADY_USED: ValidationStatus.ALREADY_USED,
    RedemptionOutcome.NOT_FOUND: ValidationStatus.NOT_FOUND,
}


@dataclass
class ValidationResult:
    status: ValidationStatus
    ticket: Optional[Ticket] = None

    @property
    def accepted(self) -> bool:
        return self.status == ValidationStatus.ACCEPTED


class ValidationService:
    def __init__(self, store: TicketStore):
        self.store = store

    def validate(self, code: str, validator_id: str) -> ValidationResult:
        """
        Redeem a ticket at the door.
        A ticket that was already redeemed comes back with its original
        used_at and validated_by so the caller can show who let it in.
        """
        if not validator_id or not validator_id.strip():
            raise ValueError("Validator id must not be empty")
        validator_id = validator_id.strip()

        code = normalize_code(code or "")
        if not is_valid_code_format(code):
            logger.info(f"Validator {validator_id} submitted malformed code {code!r}")
            return ValidationResult(ValidationStatus.NOT_FOUND)

        outcome, ticket = self.store.mark_used_if_unused(code, validator_id, datetime.utcnow())
        status = _STATUS_BY_OUTCOME[outcome]

        logger.info(f"Validation of {code} by {validator_id}: {status.value}")
        return ValidationResult(status, ticket)
