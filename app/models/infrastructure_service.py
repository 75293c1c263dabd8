"""InfrastructureService model — field service calls on equipment sites."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.sql import func

from app.database import Base


class InfrastructureService(Base):
    """Infrastructure work (civil, electrical, signage) scheduled at a site.

    Attributes:
        id: Primary key.
        serial_number: Serial of the equipment at the site.
        municipality: Municipality of the site.
        date: Scheduled date and time.
        service_type: Kind of work.
        status: ``"scheduled"``, ``"completed"``, ``"unscheduled"``,
            ``"cancelled"``.
    """

    __tablename__ = "infrastructure_services"

    id = Column(Integer, primary_key=True, autoincrement=True)
    serial_number = Column(String(100), nullable=False)
    municipality = Column(String(150), nullable=False)
    date = Column(DateTime, nullable=False)
    service_type = Column(String(100), nullable=False)
    status = Column(String(20), default="scheduled", nullable=False)
    notes = Column(Text, nullable=True)
    contract_id = Column(Integer, ForeignKey("contracts.id"), nullable=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)
