"""Contract and ContractAmendment models — service contracts and their extensions."""

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database import Base


class Contract(Base):
    """Service contract signed with a client.

    Most operational records (employees, equipment, vehicles, invoices,
    bills) hang off a contract through ``contract_id``.

    Attributes:
        id: Primary key.
        number: Contract number as printed on the signed document.
        client_name: Contracting party.
        description: Object of the contract.
        value: Total contract value (BRL).
        start_date: Start of validity.
        end_date: Original end of validity (amendments may extend it).
        state: Brazilian state (UF).
        city: City where the service is delivered.
        cost_center: Internal cost centre code.
        status: One of ``constants.CONTRACT_STATUS``.
    """

    __tablename__ = "contracts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    number = Column(String(50), nullable=False)
    client_name = Column(String(300), nullable=False)
    description = Column(Text, nullable=True)
    value = Column(Numeric(15, 2), nullable=True)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    state = Column(String(50), nullable=True)
    city = Column(String(150), nullable=True)
    cost_center = Column(String(50), nullable=True)
    status = Column(String(20), default="active", nullable=False)
    # "active", "inactive", "expired", "pending", "cancelled"
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    amendments = relationship(
        "ContractAmendment",
        back_populates="contract",
        order_by="ContractAmendment.amendment_number",
        lazy="select",
        cascade="all, delete-orphan",
    )


class ContractAmendment(Base):
    """Amendment ("aditivo") extending or changing a contract.

    The amendment with the highest ``amendment_number`` defines the
    effective end date of its contract.
    """

    __tablename__ = "contract_amendments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    contract_id = Column(Integer, ForeignKey("contracts.id"), nullable=False)
    amendment_number = Column(Integer, nullable=False)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    value = Column(Numeric(15, 2), nullable=True)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    contract = relationship("Contract", back_populates="amendments", lazy="select")
