"""TollTag model — electronic toll passages."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.sql import func

from app.database import Base


class TollTag(Base):
    """One toll plaza passage billed to an electronic tag."""

    __tablename__ = "toll_tags"

    id = Column(Integer, primary_key=True, autoincrement=True)
    vehicle_id = Column(Integer, ForeignKey("vehicles.id"), nullable=True)
    contract_id = Column(Integer, ForeignKey("contracts.id"), nullable=True)
    tag_number = Column(String(50), nullable=False)
    passage_date = Column(DateTime, nullable=False)
    value = Column(Numeric(10, 2), nullable=False)
    toll_plaza = Column(String(200), nullable=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)
