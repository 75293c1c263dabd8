"""Pydantic v2 schemas for the audit log endpoint."""

import json
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AuditLogResponse(BaseModel):
    """One audit entry; the JSON snapshots are decoded into objects."""

    id: int
    action: str = Field(..., description="INSERT, UPDATE ou DELETE.")
    table_name: str = Field(..., description="Tabela alterada.")
    record_id: int | None = None
    old_data: dict[str, Any] | None = Field(default=None, description="Estado anterior.")
    new_data: dict[str, Any] | None = Field(default=None, description="Estado posterior.")
    user_id: int | None = None
    created_at: datetime

    @field_validator("old_data", "new_data", mode="before")
    @classmethod
    def _decode_json(cls, value: Any) -> Any:
        if isinstance(value, str):
            return json.loads(value) if value else None
        return value

    model_config = ConfigDict(from_attributes=True)


class AuditLogPage(BaseModel):
    total: int = Field(..., ge=0)
    page: int = Field(..., ge=1)
    page_size: int = Field(..., ge=1)
    items: list[AuditLogResponse] = Field(default_factory=list)
