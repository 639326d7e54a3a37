from gradpass.models.issuer import Issuer
from gradpass.models.ticket import Ticket, TicketType

__all__ = ["Issuer", "Ticket", "TicketType"]
