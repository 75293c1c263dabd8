"""
Exportação router.

Mounts under ``/api/exportar`` (prefix set in ``main.py``).

All endpoints require a valid JWT token.  The entity is chosen with
``?entidade=<slug>``; every other query parameter is applied exactly as on
the entity list endpoint (``busca``, ``status`` and column filters).

Endpoints
---------
GET /excel  — ``.xlsx`` workbook.
GET /pdf    — ``.pdf`` document.
GET /csv    — ``;``-separated CSV with UTF-8 BOM.

The ``Content-Disposition`` header uses ``attachment`` so that browsers
download the file instead of displaying it.
"""

import io
import logging
import unicodedata
from typing import Annotated
from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Request, status
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.usuario import Usuario
from app.routers.cadastros import extra_query_filters
from app.schemas.common import ListFilterParams
from app.services import exportacao_service
from app.services.auth_service import get_current_user
from app.services.entidades import get_entity_or_404

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Exportação"])

_RESERVED_PARAMS = frozenset({"entidade", "busca", "status"})


def _export_filter_params(
    request: Request,
    busca: Annotated[str | None, Query(max_length=200, description="Texto de busca.")] = None,
    status_: Annotated[
        str | None, Query(alias="status", max_length=30, description="Status canônico.")
    ] = None,
) -> ListFilterParams:
    return ListFilterParams(
        busca=busca, status=status_, filtros=extra_query_filters(request, _RESERVED_PARAMS)
    )


def _content_disposition(filename: str) -> str:
    """``attachment`` header with an ASCII fallback and the UTF-8 name."""
    ascii_name = (
        unicodedata.normalize("NFKD", filename).encode("ascii", "ignore").decode("ascii")
    )
    return f"attachment; filename=\"{ascii_name}\"; filename*=UTF-8''{quote(filename)}"


@router.get(
    "/{formato}",
    summary="Exportar registros (excel, pdf ou csv)",
    description=(
        "Gera o arquivo da entidade indicada com os mesmos filtros da listagem. "
        "Valores nulos aparecem como '-', booleanos como Sim/Não e datas no "
        "formato DD/MM/AAAA."
    ),
    response_class=StreamingResponse,
    responses={
        200: {
            "description": "Arquivo gerado.",
            "content": {media: {} for media in exportacao_service.MEDIA_TYPES.values()},
        },
        400: {"description": "Formato não suportado."},
        401: {"description": "Token JWT ausente ou inválido."},
        404: {"description": "Entidade não encontrada."},
        422: {"description": "Filtro não permitido para a entidade."},
    },
)
def exportar(
    formato: Annotated[str, Path(description="excel, pdf ou csv.")],
    entidade: Annotated[str, Query(description="Slug da entidade, ex. 'veiculos'.")],
    filters: Annotated[ListFilterParams, Depends(_export_filter_params)],
    db: Annotated[Session, Depends(get_db)],
    _current_user: Annotated[Usuario, Depends(get_current_user)],
) -> StreamingResponse:
    """Generate and stream the export file.

    Args:
        formato: ``excel``, ``pdf`` or ``csv``.
        entidade: Registry slug.
        filters: Search, status and column filters.
        db: Database session.
        _current_user: Authenticated user guard.

    Returns:
        A ``StreamingResponse`` with the file attached.

    Raises:
        HTTPException 400: Unsupported format.
        HTTPException 404: Unknown entity.
    """
    config = get_entity_or_404(entidade)
    logger.info("GET /exportar/%s entidade=%s", formato, entidade)
    try:
        export = exportacao_service.export_entity(db, config, formato.lower(), filters)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    return StreamingResponse(
        io.BytesIO(export.content),
        media_type=export.media_type,
        headers={
            "Content-Disposition": _content_disposition(export.filename),
            "Content-Length": str(len(export.content)),
        },
    )
