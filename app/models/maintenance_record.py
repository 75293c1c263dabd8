"""MaintenanceRecord model — workshop services performed on vehicles."""

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database import Base


class MaintenanceRecord(Base):
    """Preventive or corrective maintenance of a fleet vehicle.

    Attributes:
        id: Primary key.
        vehicle_id: FK to Vehicle.
        date: Service date.
        type: ``"preventive"``, ``"corrective"`` or free text.
        cost: Amount paid (BRL).
        odometer: Odometer at the time of service.
        workshop: Workshop name ("oficina").
    """

    __tablename__ = "maintenance_records"

    id = Column(Integer, primary_key=True, autoincrement=True)
    vehicle_id = Column(Integer, ForeignKey("vehicles.id"), nullable=False)
    date = Column(Date, nullable=False)
    type = Column(String(50), nullable=False)
    description = Column(Text, nullable=True)
    cost = Column(Numeric(15, 2), nullable=True)
    odometer = Column(Integer, nullable=True)
    workshop = Column(String(200), nullable=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    vehicle = relationship("Vehicle", lazy="select")
