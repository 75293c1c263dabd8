"""SlaMetric model — monthly service-level indicators per contract."""

from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Integer, Numeric
from sqlalchemy.sql import func

from app.database import Base


class SlaMetric(Base):
    """Availability and response times measured for a contract in one month."""

    __tablename__ = "sla_metrics"

    id = Column(Integer, primary_key=True, autoincrement=True)
    contract_id = Column(Integer, ForeignKey("contracts.id"), nullable=True)
    month = Column(Date, nullable=False)
    availability = Column(Numeric(5, 2), nullable=True)
    response_time = Column(Numeric(10, 2), nullable=True)  # hours
    resolution_time = Column(Numeric(10, 2), nullable=True)  # hours
    target_met = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)
