from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from gradpass.database import Base


class Issuer(Base):
    __tablename__ = "issuers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(120), unique=True, nullable=False, index=True)
    credential_hash = Column(String(255), nullable=False)
    tickets_generated = Column(Integer, nullable=False, default=0)
    max_tickets = Column(Integer, nullable=False, default=5)
    created_at = Column(DateTime, server_default=func.now())

    tickets = relationship("Ticket", back_populates="issuer", order_by="Ticket.id")
