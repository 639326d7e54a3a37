import logging
from dataclasses import dataclass
from typing import Optional

import bcrypt

from gradpass.config import get_settings
from gradpass.exceptions import IssuerNotFound
from gradpass.models.issuer import Issuer
from gradpass.models.ticket import TicketType
from gradpass.services.quota import QuotaPolicy
from gradpass.store.base import TicketStore

logger = logging.getLogger(__name__)


@dataclass
class IssuerSummary:
    issuer: Issuer
    counts: dict[TicketType, int]
    remaining: int


class IssuerService:
    def __init__(self, store: TicketStore):
        self.store = store

    @staticmethod
    def hash_credential(credential: str) -> str:
        return bcrypt.hashpw(
            credential.encode('utf-8'),
            bcrypt.gensalt()
        ).decode('utf-8')

    def register(self, name: str, credential: str, max_tickets: Optional[int] = None) -> Issuer:
        """
        Register an issuer. Credentials are stored hashed; checking them is
        left to the caller's identity layer.
        """
        name = (name or "").strip()
        if not name:
            raise ValueError("Issuer name must not be empty")
        if not credential or not credential.strip():
            raise ValueError("Credential must not be empty")
        if max_tickets is None:
            max_tickets = get_settings().default_max_tickets
        if max_tickets < 0:
            raise ValueError("max_tickets must not be negative")

        issuer = Issuer(
            name=name,
            credential_hash=self.hash_credential(credential),
            tickets_generated=0,
            max_tickets=max_tickets
        )
        issuer = self.store.insert_issuer(issuer)
        logger.info(f"Registered issuer {name} (max {max_tickets} tickets)")
        return issuer

    def get(self, name: str) -> Issuer:
        issuer = self.store.find_issuer(name)
        if issuer is None:
            raise IssuerNotFound(f"Issuer '{name}' not found")
        return issuer

    def summary(self, name: str) -> IssuerSummary:
        """Issuer with counts recomputed from its stored tickets."""
        issuer = self.get(name)
        counts = QuotaPolicy.count_by_type(self.store.find_by_issuer(name))
        return IssuerSummary(
            issuer=issuer,
            counts=counts,
            remaining=QuotaPolicy.remaining_cap(issuer, counts)
        )
