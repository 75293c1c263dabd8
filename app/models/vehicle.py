"""Vehicle model — fleet vehicles."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.sql import func

from app.database import Base


class Vehicle(Base):
    """Fleet vehicle identified by its licence plate.

    Attributes:
        id: Primary key.
        plate: Licence plate ("placa"), unique in practice.
        brand: Manufacturer.
        model: Model name.
        year: Model year.
        fuel_card: Fuel card number used at gas stations.
        current_km: Last known odometer reading.
        status: One of ``constants.VEHICLE_STATUS``.
        contract_id: FK to Contract.
    """

    __tablename__ = "vehicles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    plate = Column(String(10), nullable=False)
    brand = Column(String(100), nullable=True)
    model = Column(String(100), nullable=True)
    year = Column(Integer, nullable=True)
    color = Column(String(50), nullable=True)
    renavam = Column(String(20), nullable=True)
    chassis = Column(String(30), nullable=True)
    fuel_card = Column(String(50), nullable=True)
    fuel_type = Column(String(30), nullable=True)
    current_km = Column(Integer, nullable=True)
    status = Column(String(20), default="active", nullable=False)
    # "active", "inactive", "maintenance"
    contract_id = Column(Integer, ForeignKey("contracts.id"), nullable=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)
