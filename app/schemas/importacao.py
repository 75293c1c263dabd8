"""
Pydantic v2 schemas for the spreadsheet import (Importação) module.

Covers:
- Importable entity catalog for GET /api/importacao/entidades.
- Upload response after file processing.
- Preview and header-check responses.
- Historical record for GET /api/importacao/historico.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Entity catalog
# ---------------------------------------------------------------------------


class EntidadImportacao(BaseModel):
    """One importable entity and the headers its template carries."""

    key: str = Field(..., description="Chave da entidade (ex. 'fuel_records').")
    label: str = Field(..., description="Nome legível (ex. 'Abastecimentos').")
    template_filename: str
    colunas: list[str] = Field(default_factory=list, description="Cabeçalhos do modelo.")
    obrigatorios: list[str] = Field(default_factory=list, description="Cabeçalhos obrigatórios.")


# ---------------------------------------------------------------------------
# Upload result
# ---------------------------------------------------------------------------


class ImportacaoUploadResponse(BaseModel):
    """Summary returned after processing an uploaded spreadsheet."""

    entidade: str = Field(..., description="Chave da entidade importada.")
    arquivo: str = Field(..., description="Nome original do arquivo.")
    total_linhas: int = Field(..., ge=0, description="Linhas de dados lidas da planilha.")
    registros_importados: int = Field(..., ge=0)
    registros_invalidos: int = Field(..., ge=0)
    status: str = Field(..., description="'SUCESSO', 'PARCIAL' ou 'FALHA'.")
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "entidade": "fuel_records",
                "arquivo": "abastecimentos_marco.xlsx",
                "total_linhas": 120,
                "registros_importados": 118,
                "registros_invalidos": 2,
                "status": "PARCIAL",
                "errors": [
                    'Linha 15: Campo "Litros" é obrigatório',
                    'Linha 42: Veículo não encontrado: "ABC1D23"',
                ],
                "warnings": [],
            }
        }
    )


class ImportacaoPreviewResponse(BaseModel):
    """Dry-run result: what would be imported, without writing anything."""

    entidade: str
    cabecalhos: list[str] = Field(default_factory=list)
    total_linhas: int = Field(..., ge=0)
    linhas_validas: int = Field(..., ge=0)
    errors: list[str] = Field(default_factory=list)
    amostra: list[dict[str, Any]] = Field(
        default_factory=list,
        description="Primeiras linhas normalizadas (máximo 20).",
    )


class CabecalhosResponse(BaseModel):
    """Header check of a spreadsheet against the entity mappings."""

    cabecalhos: list[str] = Field(default_factory=list)
    reconhecidos: list[str] = Field(default_factory=list)
    nao_reconhecidos: list[str] = Field(default_factory=list)
    obrigatorios_ausentes: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Import history record
# ---------------------------------------------------------------------------


class HistoricoImportacao(BaseModel):
    """Single row in the import history list."""

    id: int = Field(..., description="PK do registro de histórico.")
    entidade: str
    arquivo_nome: str
    data: datetime
    usuario_username: str
    total_linhas: int = Field(..., ge=0)
    registros_ok: int = Field(..., ge=0)
    registros_erro: int = Field(..., ge=0)
    status: str

    model_config = ConfigDict(from_attributes=True)
