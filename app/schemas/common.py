"""List query and page envelope shared by the registry endpoints and exports."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ListFilterParams(BaseModel):
    """What narrows a registry listing.

    ``busca`` is matched case-insensitively against the entity's searchable
    columns.  ``filtros`` only accepts keys from the entity's filterable
    columns; the service rejects anything else with a 422.
    """

    busca: str | None = Field(default=None, max_length=200, description="Texto livre.")
    status: str | None = Field(
        default=None,
        max_length=30,
        description="Status canônico (ex.: 'active', 'pending').",
    )
    filtros: dict[str, Any] = Field(
        default_factory=dict,
        description="Igualdade exata por coluna filtrável.",
    )


class PaginationParams(BaseModel):
    page: int = Field(default=1, ge=1, description="Página, a partir de 1.")
    page_size: int = Field(default=20, ge=1, le=200, description="Linhas por página (até 200).")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


class PaginatedResponse(BaseModel):
    """One page of serialized rows; ``total`` counts every filtered row."""

    total: int = Field(..., ge=0)
    page: int = Field(..., ge=1)
    page_size: int = Field(..., ge=1)
    items: list[dict[str, Any]] = Field(default_factory=list)
