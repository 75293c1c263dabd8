"""ImageMetric model — daily capture utilisation of an equipment."""

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, Numeric
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database import Base


class ImageMetric(Base):
    __tablename__ = "image_metrics"

    id = Column(Integer, primary_key=True, autoincrement=True)
    equipment_id = Column(Integer, ForeignKey("equipment.id"), nullable=False)
    date = Column(Date, nullable=False)
    total_captures = Column(Integer, nullable=True)
    valid_captures = Column(Integer, nullable=True)
    utilization_rate = Column(Numeric(5, 2), nullable=True)  # percent
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    equipment = relationship("Equipment", lazy="select")
