"""ServiceCall model — support calls ("atendimentos") opened for a contract."""

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database import Base


class ServiceCall(Base):
    """A call handled by the field team.

    Every reference is optional: calls are often logged before the
    equipment or the technician is known.  ``mob_code`` is the ticket code
    of the client's mobile app, when the call came from there.

    Attributes:
        status: ``"open"``, ``"in_progress"`` or ``"closed"``.
    """

    __tablename__ = "service_calls"

    id = Column(Integer, primary_key=True, autoincrement=True)
    date = Column(Date, nullable=False)
    type = Column(String(100), nullable=True)
    description = Column(Text, nullable=True)
    resolution = Column(Text, nullable=True)
    mob_code = Column(String(50), nullable=True)
    status = Column(String(20), default="open", nullable=False)
    contract_id = Column(Integer, ForeignKey("contracts.id"), nullable=True)
    equipment_id = Column(Integer, ForeignKey("equipment.id"), nullable=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    contract = relationship("Contract", lazy="select")
    equipment = relationship("Equipment", lazy="select")
    employee = relationship("Employee", lazy="select")
