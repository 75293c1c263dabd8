"""
Import (Importação) router.

Mounts under ``/api/importacao`` (prefix set in ``main.py``).

Uploads and previews require a valid JWT token; the entity key in the path
selects the column-mapping configuration from ``import_configs``.

Endpoints
---------
GET  /entidades               — Entities that accept spreadsheet imports.
GET  /historico               — Past imports, most recent first.
GET  /{entidade}/template     — Download the ``.xlsx`` template.
POST /{entidade}              — Import a spreadsheet into the entity table.
POST /{entidade}/preview      — Map a spreadsheet without persisting.
POST /{entidade}/cabecalhos   — Compare the header row with the mappings.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, HTTPException, Path, Query, UploadFile, status
from fastapi.responses import Response
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.usuario import Usuario
from app.schemas.importacao import (
    CabecalhosResponse,
    EntidadImportacao,
    HistoricoImportacao,
    ImportacaoPreviewResponse,
    ImportacaoUploadResponse,
)
from app.services import importacao_service
from app.services.auth_service import get_current_user
from app.services.template_service import build_entity_template

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Importação"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

_ALLOWED_CONTENT_TYPES: frozenset[str] = frozenset(
    {
        XLSX_MEDIA_TYPE,
        "application/vnd.ms-excel",
        "application/octet-stream",
    }
)

_EntidadePath = Annotated[
    str, Path(description="Chave da entidade, ex. 'fuel_records'.", max_length=50)
]


def _validate_excel_file(file: UploadFile) -> None:
    """Log uploads whose MIME type does not look like a workbook.

    Browsers often mislabel ``.xlsx`` files, so the real check is left to
    the parser, which raises ``ValueError`` for unreadable content.
    """
    content_type = file.content_type or ""
    if content_type not in _ALLOWED_CONTENT_TYPES:
        logger.warning(
            "Unexpected content_type='%s' for file='%s', proceeding anyway",
            content_type,
            file.filename,
        )


# ---------------------------------------------------------------------------
# GET /entidades
# ---------------------------------------------------------------------------


@router.get(
    "/entidades",
    response_model=list[EntidadImportacao],
    summary="Entidades importáveis",
    description="Lista as entidades com suporte a importação e as colunas de cada modelo.",
)
def get_entidades(
    _current_user: Annotated[Usuario, Depends(get_current_user)],
) -> list[EntidadImportacao]:
    return importacao_service.list_entidades()


# ---------------------------------------------------------------------------
# GET /historico
# ---------------------------------------------------------------------------


@router.get(
    "/historico",
    response_model=list[HistoricoImportacao],
    summary="Histórico de importações",
    responses={401: {"description": "Token JWT ausente ou inválido."}},
)
def get_historico(
    db: Annotated[Session, Depends(get_db)],
    _current_user: Annotated[Usuario, Depends(get_current_user)],
    entidade: Annotated[
        str | None, Query(description="Filtrar por entidade.", max_length=50)
    ] = None,
    limit: Annotated[int, Query(ge=1, le=500, description="Máximo de registros.")] = 100,
) -> list[HistoricoImportacao]:
    logger.debug("GET /importacao/historico entidade=%s limit=%d", entidade, limit)
    return importacao_service.get_historico(db, entidade=entidade, limit=limit)


# ---------------------------------------------------------------------------
# GET /{entidade}/template
# ---------------------------------------------------------------------------


@router.get(
    "/{entidade}/template",
    summary="Baixar modelo de planilha",
    description=(
        "Gera o arquivo .xlsx com os cabeçalhos esperados pela importação. "
        "Colunas obrigatórias são destacadas."
    ),
    responses={
        200: {"description": "Arquivo .xlsx.", "content": {XLSX_MEDIA_TYPE: {}}},
        404: {"description": "Entidade sem suporte a importação."},
    },
)
def download_template(
    entidade: _EntidadePath,
    _current_user: Annotated[Usuario, Depends(get_current_user)],
) -> Response:
    config = importacao_service.get_config_or_404(entidade)
    filename, content = build_entity_template(config)
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# ---------------------------------------------------------------------------
# POST /{entidade}
# ---------------------------------------------------------------------------


@router.post(
    "/{entidade}",
    response_model=ImportacaoUploadResponse,
    status_code=status.HTTP_200_OK,
    summary="Importar planilha",
    description=(
        "Lê a primeira aba da planilha (.xlsx), mapeia as colunas para os campos da "
        "entidade, resolve referências e insere as linhas válidas em uma única "
        "transação. Linhas inválidas são relatadas em 'errors'."
    ),
    responses={
        200: {"description": "Resumo do processamento com erros e avisos."},
        401: {"description": "Token JWT ausente ou inválido."},
        404: {"description": "Entidade sem suporte a importação."},
        422: {"description": "Arquivo vazio ou ilegível."},
        500: {"description": "Falha ao registrar a importação."},
    },
)
async def upload_planilha(
    entidade: _EntidadePath,
    file: Annotated[UploadFile, File(description="Planilha (.xlsx)")],
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[Usuario, Depends(get_current_user)],
) -> ImportacaoUploadResponse:
    """Import an uploaded spreadsheet.

    Args:
        entidade: Import configuration key.
        file: The spreadsheet submitted as multipart/form-data.
        db: Database session injected by ``get_db``.
        current_user: Authenticated user, recorded in the import history.

    Returns:
        An ``ImportacaoUploadResponse`` with row statistics and messages.

    Raises:
        HTTPException 422: If the file is empty or cannot be parsed.
        HTTPException 500: If the import history row cannot be written.
    """
    _validate_excel_file(file)
    logger.info(
        "upload_planilha: user='%s' entidade='%s' file='%s'",
        current_user.username,
        entidade,
        file.filename,
    )
    try:
        return await importacao_service.process_upload(
            db=db,
            entidade=entidade,
            file=file,
            usuario=current_user,
        )
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        ) from exc
    except RuntimeError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(exc),
        ) from exc


# ---------------------------------------------------------------------------
# POST /{entidade}/preview
# ---------------------------------------------------------------------------


@router.post(
    "/{entidade}/preview",
    response_model=ImportacaoPreviewResponse,
    summary="Pré-visualizar importação",
    description="Executa o mapeamento e a validação sem gravar nada no banco.",
    responses={
        404: {"description": "Entidade sem suporte a importação."},
        422: {"description": "Arquivo vazio ou ilegível."},
    },
)
async def preview_planilha(
    entidade: _EntidadePath,
    file: Annotated[UploadFile, File(description="Planilha (.xlsx)")],
    db: Annotated[Session, Depends(get_db)],
    _current_user: Annotated[Usuario, Depends(get_current_user)],
) -> ImportacaoPreviewResponse:
    _validate_excel_file(file)
    try:
        return await importacao_service.preview_upload(db=db, entidade=entidade, file=file)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        ) from exc


# ---------------------------------------------------------------------------
# POST /{entidade}/cabecalhos
# ---------------------------------------------------------------------------


@router.post(
    "/{entidade}/cabecalhos",
    response_model=CabecalhosResponse,
    summary="Verificar cabeçalhos",
    description=(
        "Compara a linha de cabeçalho da planilha com os mapeamentos da entidade "
        "e aponta colunas desconhecidas e obrigatórias ausentes."
    ),
    responses={
        404: {"description": "Entidade sem suporte a importação."},
        422: {"description": "Arquivo vazio ou ilegível."},
    },
)
async def check_cabecalhos(
    entidade: _EntidadePath,
    file: Annotated[UploadFile, File(description="Planilha (.xlsx)")],
    _current_user: Annotated[Usuario, Depends(get_current_user)],
) -> CabecalhosResponse:
    try:
        return await importacao_service.check_headers(entidade, file)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        ) from exc
