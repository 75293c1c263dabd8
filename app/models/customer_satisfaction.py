"""CustomerSatisfaction model — quarterly satisfaction survey results."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.sql import func

from app.database import Base


class CustomerSatisfaction(Base):
    """Satisfaction score given by a contract client for one quarter."""

    __tablename__ = "customer_satisfaction"

    id = Column(Integer, primary_key=True, autoincrement=True)
    contract_id = Column(Integer, ForeignKey("contracts.id"), nullable=True)
    quarter = Column(String(10), nullable=False)  # "Q1".."Q4"
    year = Column(Integer, nullable=False)
    score = Column(Numeric(4, 2), nullable=True)
    feedback = Column(Text, nullable=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)
