"""Infraction model — monthly image counts per enforcement lane."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database import Base


class Infraction(Base):
    """Infraction images captured by one lane of an equipment.

    ``datacheck_lane`` is the lane number reported by the Datacheck
    processing system and ``physical_lane`` the lane as painted on the
    road; they differ on sites where the camera is mounted facing traffic.

    Attributes:
        id: Primary key.
        equipment_id: FK to Equipment (required).
        contract_id: Optional FK to Contract.
        date: Timestamp of the capture batch, when the spreadsheet has one.
        month: Month label as written in the source (``"Janeiro"``, ``"01"``).
        year: Four-digit year.
        image_count: Number of infraction images.
    """

    __tablename__ = "infractions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    equipment_id = Column(Integer, ForeignKey("equipment.id"), nullable=False)
    contract_id = Column(Integer, ForeignKey("contracts.id"), nullable=True)
    date = Column(DateTime, nullable=True)
    month = Column(String(20), nullable=True)
    year = Column(Integer, nullable=True)
    datacheck_lane = Column(String(20), nullable=True)
    physical_lane = Column(String(20), nullable=True)
    image_count = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    equipment = relationship("Equipment", lazy="select")
