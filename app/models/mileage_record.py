"""MileageRecord model — daily odometer log per vehicle."""

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database import Base


class MileageRecord(Base):
    """Distance driven by a vehicle on a given day.

    The monthly sum of ``final_km - initial_km`` per vehicle feeds the
    mileage-limit alert.
    """

    __tablename__ = "mileage_records"

    id = Column(Integer, primary_key=True, autoincrement=True)
    vehicle_id = Column(Integer, ForeignKey("vehicles.id"), nullable=False)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=True)
    date = Column(Date, nullable=False)
    initial_km = Column(Integer, nullable=False)
    final_km = Column(Integer, nullable=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    vehicle = relationship("Vehicle", lazy="select")
