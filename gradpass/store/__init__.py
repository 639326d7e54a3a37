from gradpass.store.base import TicketStore, RedemptionOutcome
from gradpass.store.sql import SQLAlchemyTicketStore, get_store

__all__ = ["TicketStore", "RedemptionOutcome", "SQLAlchemyTicketStore", "get_store"]
