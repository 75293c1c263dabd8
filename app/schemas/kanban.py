"""Pydantic v2 schemas for the kanban board."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.cadastros import PendingIssueResponse


class KanbanIssueCard(PendingIssueResponse):
    """Board card: the pending issue plus its completion time."""

    completed_at: datetime | None = None


class KanbanColumnResponse(BaseModel):
    key: str
    title: str
    color: str | None = None
    order_index: int
    is_system: bool
    total: int = Field(default=0, ge=0, description="Cartões na coluna.")
    issues: list[KanbanIssueCard] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class KanbanBoardResponse(BaseModel):
    """Active columns ordered by ``order_index``, each with its cards."""

    columns: list[KanbanColumnResponse] = Field(default_factory=list)
    total: int = Field(default=0, ge=0)


class MoverIssueRequest(BaseModel):
    column_key: str = Field(..., min_length=1, max_length=50, description="Coluna de destino.")

    model_config = ConfigDict(json_schema_extra={"example": {"column_key": "done"}})


class PurgedIssue(BaseModel):
    id: int
    title: str


class PurgeResponse(BaseModel):
    """Result of removing cards that finished before the retention window."""

    removidas: int = Field(..., ge=0)
    issues: list[PurgedIssue] = Field(default_factory=list)
