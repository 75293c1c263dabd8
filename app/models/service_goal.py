"""ServiceGoal model — monthly call targets agreed per contract."""

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, Numeric
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database import Base


class ServiceGoal(Base):
    """Target vs. completed service calls of a contract in one month.

    ``month`` is always the first day of the month.  ``percentage`` is
    taken from the spreadsheet as typed, not recomputed.
    """

    __tablename__ = "service_goals"

    id = Column(Integer, primary_key=True, autoincrement=True)
    contract_id = Column(Integer, ForeignKey("contracts.id"), nullable=False)
    month = Column(Date, nullable=False)
    target_calls = Column(Integer, nullable=True)
    completed_calls = Column(Integer, nullable=True)
    percentage = Column(Numeric(6, 2), nullable=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    contract = relationship("Contract", lazy="select")
