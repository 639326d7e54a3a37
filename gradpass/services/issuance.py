import logging
import time
from datetime import datetime
from typing import Optional, Union

from gradpass.config import get_settings
from gradpass.exceptions import (
    CodeCollision,
    CodeCollisionExhausted,
    IssuerNotFound,
    MissingGuestName,
    QuotaExceededByType,
    QuotaExceededGlobal,
    UnknownTicketType,
)
from gradpass.models.ticket import Ticket, TicketType
from gradpass.services.codes import CodeGenerator
from gradpass.services.quota import QuotaPolicy
from gradpass.store.base import TicketStore

logger = logging.getLogger(__name__)


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def parse_ticket_type(value: Union[TicketType, str]) -> TicketType:
    if isinstance(value, TicketType):
        return value
    try:
        return TicketType(str(value).strip().lower())
    except ValueError:
        raise UnknownTicketType(f"Unknown ticket type: {value!r}")


class IssuanceService:
    def __init__(
        self,
        store: TicketStore,
        code_generator: Optional[CodeGenerator] = None,
        max_code_attempts: Optional[int] = None
    ):
        self.store = store
        self.code_generator = code_generator or CodeGenerator()
        if max_code_attempts is None:
            max_code_attempts = get_settings().max_code_attempts
        self.max_code_attempts = max_code_attempts

    @staticmethod
    def _now_millis() -> int:
        return int(time.time() * 1000)

    def issue(
        self,
        issuer_name: str,
        requested_type: Union[TicketType, str],
        guest_name: Optional[str] = None,
        special_notes: Optional[str] = None
    ) -> Ticket:
        """
        Mint a ticket for an issuer.

        Quota is checked against counts recomputed from stored tickets, then
        re-checked by the store inside the insert transaction. Code collisions
        are retried with a fresh timestamp up to max_code_attempts times.
        """
        ticket_type = parse_ticket_type(requested_type)

        issuer = self.store.find_issuer(issuer_name)
        if issuer is None:
            raise IssuerNotFound(f"Issuer '{issuer_name}' not found")
        max_tickets = issuer.max_tickets

        counts = QuotaPolicy.count_by_type(self.store.find_by_issuer(issuer_name))
        try:
            QuotaPolicy.check(counts, ticket_type, max_tickets)
        except (QuotaExceededByType, QuotaExceededGlobal) as e:
            logger.info(f"Rejected {ticket_type.value} ticket for {issuer_name}: {e.__class__.__name__}")
            raise

        guest_name = _clean(guest_name)
        if QuotaPolicy.requires_guest_name(ticket_type) and not guest_name:
            raise MissingGuestName(f"A guest name is required for {ticket_type.value} tickets")
        if ticket_type == TicketType.GRADUATE and not guest_name:
            guest_name = issuer_name
        special_notes = _clean(special_notes)

        def quota_guard(existing: list[Ticket]) -> None:
            QuotaPolicy.check(QuotaPolicy.count_by_type(existing), ticket_type, max_tickets)

        timestamp = self._now_millis()
        for attempt in range(1, self.max_code_attempts + 1):
            code = self.code_generator.generate(issuer_name, timestamp)
            ticket = Ticket(
                issuer_name=issuer_name,
                guest_name=guest_name,
                ticket_type=ticket_type,
                code=code,
                used=False,
                special_notes=special_notes,
                created_at=datetime.utcnow()
            )
            try:
                ticket = self.store.insert_if_code_unique(ticket, guard=quota_guard)
            except CodeCollision:
                logger.warning(
                    f"Code collision for {issuer_name} "
                    f"(attempt {attempt}/{self.max_code_attempts})"
                )
                timestamp = max(self._now_millis(), timestamp + 1)
                continue

            logger.info(f"Issued {ticket_type.value} ticket {ticket.code} for {issuer_name}")
            return ticket

        logger.error(
            f"Giving up issuing a {ticket_type.value} ticket for {issuer_name} "
            f"after {self.max_code_attempts} code collisions"
        )
        raise CodeCollisionExhausted(
            f"No unique code after {self.max_code_attempts} attempts"
        )
