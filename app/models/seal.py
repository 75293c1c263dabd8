"""Seal model — INMETRO security seals ("lacres")."""

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.sql import func

from app.database import Base


class Seal(Base):
    """Security seal received from INMETRO and later installed on equipment.

    Attributes:
        id: Primary key.
        seal_number: Printed seal number.
        seal_type: Seal model / type.
        received_date: When the seal was received.
        installation_date: When it was installed (``None`` while in stock).
        memo_number: Memorandum that delivered the seal.
        service_order: Service order of the installation.
        equipment_id: Equipment the seal was installed on.
        technician_id: Employee who installed it.
        status: ``"available"``, ``"installed"``, ``"damaged"``, ``"lost"``.
    """

    __tablename__ = "seals"

    id = Column(Integer, primary_key=True, autoincrement=True)
    seal_number = Column(String(50), nullable=False)
    seal_type = Column(String(50), nullable=True)
    received_date = Column(Date, nullable=False)
    installation_date = Column(Date, nullable=True)
    memo_number = Column(String(50), nullable=True)
    service_order = Column(String(50), nullable=True)
    equipment_id = Column(Integer, ForeignKey("equipment.id"), nullable=True)
    technician_id = Column(Integer, ForeignKey("employees.id"), nullable=True)
    status = Column(String(20), default="available", nullable=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)
