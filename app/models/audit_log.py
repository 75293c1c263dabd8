"""AuditLog model — one row per create/update/delete made through the API."""

from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.sql import func

from app.database import Base


class AuditLog(Base):
    """Change history for every business table.

    Attributes:
        id: Primary key.
        action: ``"INSERT"``, ``"UPDATE"`` or ``"DELETE"``.
        table_name: Name of the table that was changed.
        record_id: Primary key of the changed row.
        old_data: JSON snapshot before the change (``None`` for inserts).
        new_data: JSON snapshot after the change (``None`` for deletes).
        user_id: Usuario who performed the change.
        created_at: When the change happened.
    """

    __tablename__ = "audit_log"

    id = Column(Integer, primary_key=True, autoincrement=True)
    action = Column(String(10), nullable=False)
    table_name = Column(String(100), nullable=False)
    record_id = Column(Integer, nullable=True)
    old_data = Column(Text, nullable=True)
    new_data = Column(Text, nullable=True)
    user_id = Column(Integer, nullable=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)
