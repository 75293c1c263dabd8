"""Internet models — equipment data links and their monthly bills."""

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database import Base


class InternetConnection(Base):
    """Data link that serves one piece of equipment, billed monthly."""

    __tablename__ = "internet_connections"

    id = Column(Integer, primary_key=True, autoincrement=True)
    serial_number = Column(String(100), nullable=False)
    provider = Column(String(150), nullable=True)
    plan = Column(String(150), nullable=True)
    contract_id = Column(Integer, ForeignKey("contracts.id"), nullable=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    contract = relationship("Contract", lazy="select")


class InternetBill(Base):
    """Monthly internet bill, optionally tied to a connection."""

    __tablename__ = "internet_bills"

    id = Column(Integer, primary_key=True, autoincrement=True)
    provider = Column(String(150), nullable=False)
    connection_id = Column(Integer, ForeignKey("internet_connections.id"), nullable=True)
    reference_month = Column(Date, nullable=False)
    value = Column(Numeric(15, 2), nullable=True)
    due_date = Column(Date, nullable=True)
    status = Column(String(20), default="pending", nullable=False)
    contract_id = Column(Integer, ForeignKey("contracts.id"), nullable=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)
