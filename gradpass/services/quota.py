from collections import Counter
from typing import Iterable, Mapping, Optional

from gradpass.exceptions import QuotaExceededByType, QuotaExceededGlobal
from gradpass.models.issuer import Issuer
from gradpass.models.ticket import Ticket, TicketType

DEFAULT_MAX_TICKETS = 5

TYPE_CAPS = {
    TicketType.GRADUATE: 1,
    TicketType.SPONSOR: 1,
    TicketType.FAMILY: 3,
}

GUEST_NAME_REQUIRED = {TicketType.SPONSOR, TicketType.FAMILY}


class QuotaPolicy:
    @staticmethod
    def count_by_type(tickets: Iterable[Ticket]) -> dict[TicketType, int]:
        """Group stored tickets into per-type counts, with every type present."""
        counts = Counter(TicketType(t.ticket_type) for t in tickets)
        return {ticket_type: counts.get(ticket_type, 0) for ticket_type in TicketType}

    @staticmethod
    def requires_guest_name(ticket_type: TicketType) -> bool:
        return ticket_type in GUEST_NAME_REQUIRED

    @staticmethod
    def check(
        existing_counts: Mapping[TicketType, int],
        requested_type: TicketType,
        max_tickets: int = DEFAULT_MAX_TICKETS
    ) -> None:
        """
        Raise if a ticket of requested_type may not be minted.
        The per-type cap and the global cap are checked independently;
        the per-type failure is reported when both apply.
        """
        type_count = existing_counts.get(requested_type, 0)
        total = sum(existing_counts.values())

        type_cap_reached = type_count >= TYPE_CAPS[requested_type]
        global_cap_reached = total >= max_tickets

        if type_cap_reached:
            raise QuotaExceededByType(
                f"Maximum of {TYPE_CAPS[requested_type]} {requested_type.value} "
                f"ticket(s) already issued"
            )
        if global_cap_reached:
            raise QuotaExceededGlobal(f"Maximum of {max_tickets} tickets already issued")

    @staticmethod
    def can_issue(
        existing_counts: Mapping[TicketType, int],
        requested_type: TicketType,
        max_tickets: int = DEFAULT_MAX_TICKETS
    ) -> bool:
        try:
            QuotaPolicy.check(existing_counts, requested_type, max_tickets)
        except (QuotaExceededByType, QuotaExceededGlobal):
            return False
        return True

    @staticmethod
    def remaining_cap(
        issuer: Issuer,
        existing_counts: Optional[Mapping[TicketType, int]] = None
    ) -> int:
        """
        Tickets the issuer may still mint overall.
        Live counts win over the cached tickets_generated counter when given.
        """
        if existing_counts is not None:
            issued = sum(existing_counts.values())
        else:
            issued = issuer.tickets_generated or 0
        return max(0, issuer.max_tickets - issued)
