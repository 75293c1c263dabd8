"""
Pydantic v2 schemas for dependency checks before deletes.

Returned by ``GET /api/cadastros/{slug}/{id}/dependencias`` and embedded
in the delete responses so the UI can tell the user what a delete will
leave behind.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class DependencyItem(BaseModel):
    """Rows of one child table that reference the record.

    Attributes:
        table: Child table name.
        count: Number of referencing rows.
        label: Portuguese label of the child table.
    """

    table: str = Field(..., description="Tabela dependente.")
    count: int = Field(..., ge=1, description="Quantidade de registros dependentes.")
    label: str = Field(..., description="Nome amigável da tabela dependente.")


class DependencyResult(BaseModel):
    """Outcome of ``check_dependencies``."""

    has_dependencies: bool = Field(..., description="True se algum registro depende deste.")
    dependencies: list[DependencyItem] = Field(default_factory=list)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "has_dependencies": True,
                "dependencies": [
                    {"table": "employees", "count": 4, "label": "Colaboradores"},
                    {"table": "invoices", "count": 12, "label": "Faturas"},
                ],
            }
        }
    )


class ExclusaoResponse(BaseModel):
    """Result of a single or bulk delete.

    Attributes:
        message: Human-readable summary.
        excluidos: Number of records deleted.
        warning: Set when an admin deleted records that had dependents.
        dependencias: Dependents that were detached or removed.
    """

    message: str
    excluidos: int = Field(..., ge=0)
    warning: str | None = None
    dependencias: list[DependencyItem] = Field(default_factory=list)
