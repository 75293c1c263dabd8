"""FuelRecord model — vehicle refuelling entries."""

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database import Base


class FuelRecord(Base):
    """One refuelling of a fleet vehicle."""

    __tablename__ = "fuel_records"

    id = Column(Integer, primary_key=True, autoincrement=True)
    vehicle_id = Column(Integer, ForeignKey("vehicles.id"), nullable=False)
    date = Column(Date, nullable=False)
    liters = Column(Numeric(10, 2), nullable=False)
    price_per_liter = Column(Numeric(10, 3), nullable=True)
    total_value = Column(Numeric(15, 2), nullable=True)
    odometer = Column(Integer, nullable=True)
    fuel_type = Column(String(30), nullable=True)
    station = Column(String(200), nullable=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    vehicle = relationship("Vehicle", lazy="select")
