"""Energy models — consumer units and their monthly electricity bills."""

from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database import Base


class EnergyConsumerUnit(Base):
    """Electricity consumer unit ("UC") that is expected to be billed monthly."""

    __tablename__ = "energy_consumer_units"

    id = Column(Integer, primary_key=True, autoincrement=True)
    consumer_unit = Column(String(50), nullable=False)
    address = Column(String(500), nullable=True)
    contract_id = Column(Integer, ForeignKey("contracts.id"), nullable=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    contract = relationship("Contract", lazy="select")


class EnergyBill(Base):
    """Monthly electricity bill of a consumer unit.

    Attributes:
        id: Primary key.
        consumer_unit: Consumer unit code, matched against
            ``EnergyConsumerUnit.consumer_unit``.
        reference_month: First day of the billed month.
        consumption_kwh: Billed consumption.
        value: Amount due (BRL).
        due_date: Payment deadline.
        status: ``"pending"``, ``"paid"`` or ``"overdue"``.
        zero_invoice: Bill issued with zero value.
    """

    __tablename__ = "energy_bills"

    id = Column(Integer, primary_key=True, autoincrement=True)
    consumer_unit = Column(String(50), nullable=False)
    reference_month = Column(Date, nullable=False)
    consumption_kwh = Column(Numeric(12, 2), nullable=True)
    value = Column(Numeric(15, 2), nullable=True)
    due_date = Column(Date, nullable=True)
    status = Column(String(20), default="pending", nullable=False)
    zero_invoice = Column(Boolean, default=False, nullable=False)
    contract_id = Column(Integer, ForeignKey("contracts.id"), nullable=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)
