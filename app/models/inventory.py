"""InventoryItem model — spare-parts stock."""

from sqlalchemy import Column, DateTime, Integer, Numeric, String
from sqlalchemy.sql import func

from app.database import Base


class InventoryItem(Base):
    """Stock position of one component.

    ``min_quantity`` is the reorder point checked by the low-stock alert.
    """

    __tablename__ = "inventory"

    id = Column(Integer, primary_key=True, autoincrement=True)
    component_name = Column(String(300), nullable=False)
    sku = Column(String(50), nullable=True)
    category = Column(String(100), nullable=True)
    quantity = Column(Integer, default=0, nullable=True)
    min_quantity = Column(Integer, nullable=True)
    unit_price = Column(Numeric(15, 2), nullable=True)
    location = Column(String(200), nullable=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)
