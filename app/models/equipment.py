"""Equipment model — installed speed-enforcement devices."""

from sqlalchemy import Column, Date, DateTime, Float, ForeignKey, Integer, String
from sqlalchemy.sql import func

from app.database import Base


class Equipment(Base):
    """Field equipment (radar / speed camera) installed under a contract.

    ``updated_at`` doubles as the "last status change" timestamp used by the
    prolonged-maintenance alert.

    Attributes:
        id: Primary key.
        serial_number: Manufacturer serial number.
        type: Equipment type (fixed radar, mobile radar …).
        latitude: Installation latitude.
        longitude: Installation longitude.
        speed_limit: Enforced speed limit (km/h).
        lanes_qty: Number of monitored lanes.
        status: One of ``constants.EQUIPMENT_STATUS``.
        contract_id: FK to Contract.
    """

    __tablename__ = "equipment"

    id = Column(Integer, primary_key=True, autoincrement=True)
    serial_number = Column(String(100), nullable=False)
    type = Column(String(100), nullable=True)
    brand = Column(String(100), nullable=True)
    model = Column(String(100), nullable=True)
    address = Column(String(500), nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    installation_date = Column(Date, nullable=True)
    speed_limit = Column(Integer, nullable=True)
    lanes_qty = Column(Integer, nullable=True)
    status = Column(String(20), default="active", nullable=False)
    # "active", "inactive", "maintenance", "decommissioned"
    contract_id = Column(Integer, ForeignKey("contracts.id"), nullable=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)
