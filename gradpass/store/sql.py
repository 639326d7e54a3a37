import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Optional

from fastapi import Depends
from sqlalchemy import or_
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError
from sqlalchemy.orm import Session

from gradpass.database import get_db
from gradpass.exceptions import (
    CodeCollision,
    IssuerAlreadyExists,
    IssuerNotFound,
    StoreUnavailable,
)
from gradpass.models.issuer import Issuer
from gradpass.models.ticket import Ticket, TicketType
from gradpass.store.base import InsertGuard, RedemptionOutcome, TicketStore

logger = logging.getLogger(__name__)


class SQLAlchemyTicketStore(TicketStore):
    """
    TicketStore over a SQLAlchemy session.

    Code uniqueness comes from the unique index on tickets.code. Redemption is
    one conditional UPDATE whose affected row count decides the outcome.
    """

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _store_errors(self):
        try:
            yield
        except OperationalError as e:
            logger.warning(f"Ticket store unavailable: {e}")
            raise StoreUnavailable() from e
        except DBAPIError as e:
            if e.connection_invalidated:
                logger.warning(f"Ticket store connection lost: {e}")
                raise StoreUnavailable() from e
            raise

    def find_by_code(self, code: str) -> Optional[Ticket]:
        with self._store_errors():
            return self.db.query(Ticket).filter(Ticket.code == code).first()

    def find_by_issuer(self, issuer_name: str) -> list[Ticket]:
        with self._store_errors():
            return self.db.query(Ticket).filter(
                Ticket.issuer_name == issuer_name
            ).order_by(Ticket.id).all()

    def insert_if_code_unique(self, ticket: Ticket, guard: Optional[InsertGuard] = None) -> Ticket:
        with self._store_errors():
            try:
                # Bumping the counter first write-locks the issuer row, so the
                # guard below sees every ticket committed by concurrent issuers.
                bumped = self.db.query(Issuer).filter(
                    Issuer.name == ticket.issuer_name
                ).update(
                    {Issuer.tickets_generated: Issuer.tickets_generated + 1},
                    synchronize_session=False
                )
                if not bumped:
                    raise IssuerNotFound(f"Issuer '{ticket.issuer_name}' not found")

                if guard is not None:
                    existing = self.db.query(Ticket).filter(
                        Ticket.issuer_name == ticket.issuer_name
                    ).all()
                    guard(existing)

                self.db.add(ticket)
                self.db.commit()
            except IntegrityError as e:
                self.db.rollback()
                raise CodeCollision(f"Code {ticket.code} is already taken") from e
            except Exception:
                self.db.rollback()
                raise

            self.db.refresh(ticket)
            return ticket

    def mark_used_if_unused(
        self,
        code: str,
        validator_id: str,
        used_at: datetime
    ) -> tuple[RedemptionOutcome, Optional[Ticket]]:
        with self._store_errors():
            try:
                updated = self.db.query(Ticket).filter(
                    Ticket.code == code,
                    Ticket.used.is_(False)
                ).update(
                    {
                        Ticket.used: True,
                        Ticket.used_at: used_at,
                        Ticket.validated_by: validator_id
                    },
                    synchronize_session=False
                )
                self.db.commit()
            except Exception:
                self.db.rollback()
                raise

            ticket = self.find_by_code(code)

        if updated == 1:
            return RedemptionOutcome.VALIDATED, ticket
        if ticket is None:
            return RedemptionOutcome.NOT_FOUND, None
        return RedemptionOutcome.ALREADY_USED, ticket

    def find_issuer(self, name: str) -> Optional[Issuer]:
        with self._store_errors():
            return self.db.query(Issuer).filter(Issuer.name == name).first()

    def insert_issuer(self, issuer: Issuer) -> Issuer:
        with self._store_errors():
            try:
                self.db.add(issuer)
                self.db.commit()
            except IntegrityError as e:
                self.db.rollback()
                raise IssuerAlreadyExists(f"Issuer '{issuer.name}' is already registered") from e
            except Exception:
                self.db.rollback()
                raise

            self.db.refresh(issuer)
            return issuer

    def list_tickets(
        self,
        issuer_name: Optional[str] = None,
        ticket_type: Optional[TicketType] = None,
        used: Optional[bool] = None,
        search: Optional[str] = None
    ) -> list[Ticket]:
        query = self.db.query(Ticket)

        if issuer_name:
            query = query.filter(Ticket.issuer_name == issuer_name)
        if ticket_type is not None:
            query = query.filter(Ticket.ticket_type == ticket_type)
        if used is not None:
            query = query.filter(Ticket.used.is_(used))
        if search:
            pattern = f"%{search}%"
            query = query.filter(
                or_(
                    Ticket.issuer_name.ilike(pattern),
                    Ticket.guest_name.ilike(pattern),
                    Ticket.code.ilike(pattern)
                )
            )

        with self._store_errors():
            return query.order_by(Ticket.created_at.desc(), Ticket.id.desc()).all()


def get_store(db: Session = Depends(get_db)) -> SQLAlchemyTicketStore:
    return SQLAlchemyTicketStore(db)
