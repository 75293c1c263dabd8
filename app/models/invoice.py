"""Invoice model — invoices ("faturas") issued to contract clients."""

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database import Base


class Invoice(Base):
    """Invoice issued against a contract.

    Attributes:
        id: Primary key.
        contract_id: FK to Contract (client name comes from there).
        number: Invoice number.
        issue_date: Emission date.
        due_date: Payment deadline.
        value: Gross amount (BRL).
        discount: Discount granted.
        monthly_value: Contract monthly value the invoice refers to.
        payment_date: When it was paid.
        status: ``"pending"``, ``"paid"``, ``"overdue"``, ``"cancelled"``.
    """

    __tablename__ = "invoices"

    id = Column(Integer, primary_key=True, autoincrement=True)
    contract_id = Column(Integer, ForeignKey("contracts.id"), nullable=True)
    number = Column(String(50), nullable=False)
    issue_date = Column(Date, nullable=False)
    due_date = Column(Date, nullable=True)
    value = Column(Numeric(15, 2), nullable=False)
    discount = Column(Numeric(15, 2), nullable=True)
    monthly_value = Column(Numeric(15, 2), nullable=True)
    payment_date = Column(Date, nullable=True)
    status = Column(String(20), default="pending", nullable=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    contract = relationship("Contract", lazy="select")
