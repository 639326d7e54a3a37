from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, Enum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from gradpass.database import Base
import enum


class TicketType(str, enum.Enum):
    GRADUATE = "graduate"
    SPONSOR = "sponsor"
    FAMILY = "family"


class Ticket(Base):
    __tablename__ = "tickets"

    id = Column(Integer, primary_key=True, index=True)
    issuer_name = Column(String(120), ForeignKey("issuers.name"), nullable=False, index=True)
    guest_name = Column(String(200), nullable=True)
    ticket_type = Column(Enum(TicketType), nullable=False)
    code = Column(String(12), unique=True, nullable=False, index=True)
    used = Column(Boolean, nullable=False, default=False)
    used_at = Column(DateTime, nullable=True)
    validated_by = Column(String(120), nullable=True)
    special_notes = Column(String(500), nullable=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())

    issuer = relationship("Issuer", back_populates="tickets")
