"""
Record storage consumed by the issuance and validation services.

Two operations carry all cross-request correctness and must be atomic in
every implementation:

* ``insert_if_code_unique`` never overwrites an existing code, and runs its
  guard against the issuer's tickets while holding the issuer for writing.
* ``mark_used_if_unused`` checks and sets the used flag in one step.
"""
import enum
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Callable, Optional

from gradpass.models.issuer import Issuer
from gradpass.models.ticket import Ticket, TicketType

InsertGuard = Callable[[list[Ticket]], None]


class RedemptionOutcome(str, enum.Enum):
    VALIDATED = "validated"
    ALREADY_USED = "already_used"
    NOT_FOUND = "not_found"


class TicketStore(ABC):
    @abstractmethod
    def find_by_code(self, code: str) -> Optional[Ticket]:
        ...

    @abstractmethod
    def find_by_issuer(self, issuer_name: str) -> list[Ticket]:
        ...

    @abstractmethod
    def insert_if_code_unique(self, ticket: Ticket, guard: Optional[InsertGuard] = None) -> Ticket:
        """Persist a new ticket, raising CodeCollision rather than overwriting."""

    @abstractmethod
    def mark_used_if_unused(
        self,
        code: str,
        validator_id: str,
        used_at: datetime
    ) -> tuple[RedemptionOutcome, Optional[Ticket]]:
        """Atomically flip used from false to true for the ticket with this code."""

    @abstractmethod
    def find_issuer(self, name: str) -> Optional[Issuer]:
        ...

    @abstractmethod
    def insert_issuer(self, issuer: Issuer) -> Issuer:
        ...

    @abstractmethod
    def list_tickets(
        self,
        issuer_name: Optional[str] = None,
        ticket_type: Optional[TicketType] = None,
        used: Optional[bool] = None,
        search: Optional[str] = None
    ) -> list[Ticket]:
        ...
