"""Calibration model — metrological certifications ("aferições") of equipment."""

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database import Base


class Calibration(Base):
    """INMETRO calibration certificate of a piece of equipment.

    A calibration with ``status == "valid"`` and an ``expiration_date`` in
    the future keeps its equipment legally usable.

    Attributes:
        id: Primary key.
        equipment_id: FK to Equipment.
        calibration_date: Date the calibration was performed.
        expiration_date: Date the certificate stops being valid.
        certificate_number: Certificate number.
        inmetro_number: INMETRO registration number.
        status: ``"valid"``, ``"expired"`` or ``"pending"``.
    """

    __tablename__ = "calibrations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    equipment_id = Column(Integer, ForeignKey("equipment.id"), nullable=False)
    calibration_date = Column(Date, nullable=False)
    expiration_date = Column(Date, nullable=False)
    certificate_number = Column(String(100), nullable=True)
    inmetro_number = Column(String(100), nullable=True)
    status = Column(String(20), default="valid", nullable=False)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    equipment = relationship("Equipment", lazy="select")
