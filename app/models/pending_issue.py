"""Kanban models — board columns and the pending issues placed on them."""

from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.sql import func

from app.database import Base


class KanbanColumn(Base):
    """Column of the issue board, identified by a stable ``key``.

    System columns (``is_system``) are seeded on startup and cannot be
    removed through the API.
    """

    __tablename__ = "kanban_columns"

    id = Column(Integer, primary_key=True, autoincrement=True)
    key = Column(String(50), unique=True, nullable=False)
    title = Column(String(100), nullable=False)
    color = Column(String(20), nullable=True)
    order_index = Column(Integer, default=0, nullable=False)
    is_system = Column(Boolean, default=False, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)


class PendingIssue(Base):
    """Open issue ("pendência") tracked on the kanban board.

    Attributes:
        id: Primary key.
        title: Short title.
        priority: ``"low"``, ``"medium"``, ``"high"``, ``"urgent"``.
        status: ``"open"``, ``"in_progress"``, ``"resolved"``, ``"closed"``.
        column_key: Key of the KanbanColumn the card sits in.
        completed_at: Set when the card reaches the ``done`` column.
        contract_id / equipment_id / vehicle_id: Optional subject of the issue.
    """

    __tablename__ = "pending_issues"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(300), nullable=False)
    description = Column(Text, nullable=True)
    type = Column(String(50), nullable=True)
    priority = Column(String(20), default="medium", nullable=False)
    status = Column(String(20), default="open", nullable=False)
    column_key = Column(String(50), default="backlog", nullable=False)
    address = Column(String(500), nullable=True)
    due_date = Column(Date, nullable=True)
    assigned_to = Column(String(200), nullable=True)
    contract_id = Column(Integer, ForeignKey("contracts.id"), nullable=True)
    equipment_id = Column(Integer, ForeignKey("equipment.id"), nullable=True)
    vehicle_id = Column(Integer, ForeignKey("vehicles.id"), nullable=True)
    completed_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)
