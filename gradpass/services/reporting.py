from dataclasses import dataclass, field
from typing import Optional

from gradpass.exceptions import TicketNotFound
from gradpass.models.ticket import Ticket, TicketType
from gradpass.services.codes import normalize_code
from gradpass.services.quota import QuotaPolicy
from gradpass.store.base import TicketStore

STATUS_FILTERS = {
    "all": None,
    "used": True,
    "available": False,
}


@dataclass
class TicketStats:
    total: int = 0
    used: int = 0
    available: int = 0
    by_type: dict[TicketType, int] = field(default_factory=dict)


class TicketQueryService:
    """Read-only views over issued tickets."""

    def __init__(self, store: TicketStore):
        self.store = store

    def get_by_code(self, code: str) -> Ticket:
        ticket = self.store.find_by_code(normalize_code(code or ""))
        if ticket is None:
            raise TicketNotFound()
        return ticket

    def list_tickets(
        self,
        issuer_name: Optional[str] = None,
        ticket_type: Optional[TicketType] = None,
        status: str = "all",
        search: Optional[str] = None
    ) -> list[Ticket]:
        if status not in STATUS_FILTERS:
            raise ValueError(f"Unknown status filter: {status!r}")
        search = search.strip() if search else None
        return self.store.list_tickets(
            issuer_name=issuer_name,
            ticket_type=ticket_type,
            used=STATUS_FILTERS[status],
            search=search or None
        )

    def stats(self, issuer_name: Optional[str] = None) -> TicketStats:
        tickets = self.store.list_tickets(issuer_name=issuer_name)
        used = sum(1 for t in tickets if t.used)
        return TicketStats(
            total=len(tickets),
            used=used,
            available=len(tickets) - used,
            by_type=QuotaPolicy.count_by_type(tickets)
        )
