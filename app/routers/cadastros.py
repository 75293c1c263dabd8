"""
Registry ("cadastros") routers.

One router per entity in ``entidades.ENTIDADES``, each mounted under
``/api/cadastros/{slug}`` by ``main.py``.  The routers are built by
``build_router`` so every entity exposes the same endpoints with its own
request and response models in the OpenAPI schema.

All endpoints require a valid JWT token.

Endpoints (per entity)
----------------------
GET    /                    — Paginated list (?busca=&status=&page=&page_size=&<coluna>=).
GET    /dashboard           — Counts, sums and distributions.
GET    /{id}                — One record.
GET    /{id}/dependencias   — Records in other tables that reference it.
POST   /                    — Create (201).
PUT    /{id}                — Partial update.
DELETE /{id}                — Delete (409 for non-admins when dependents exist).
POST   /excluir-lote        — Delete several records in one transaction.
"""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Path, Query, Request, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.usuario import Usuario
from app.schemas.cadastros import DashboardResponse, ExclusaoLoteRequest
from app.schemas.common import ListFilterParams, PaginatedResponse, PaginationParams
from app.schemas.dependencia import DependencyResult, ExclusaoResponse
from app.services import cadastro_service
from app.services.auth_service import get_current_user
from app.services.dependencia_service import check_dependencies
from app.services.entidades import ENTIDADES, EntityConfig

logger = logging.getLogger(__name__)

# Query parameters with a fixed meaning; any other key is a column filter.
_RESERVED_PARAMS = frozenset({"busca", "status", "page", "page_size"})


def extra_query_filters(request: Request, reserved: frozenset[str]) -> dict[str, Any]:
    return {
        key: value
        for key, value in request.query_params.items()
        if key not in reserved and value != ""
    }


def list_filter_params(
    request: Request,
    busca: Annotated[
        str | None,
        Query(description="Texto de busca (sem distinção de maiúsculas).", max_length=200),
    ] = None,
    status_: Annotated[
        str | None,
        Query(alias="status", description="Status canônico, ex. 'active'.", max_length=30),
    ] = None,
) -> ListFilterParams:
    """Assemble ``ListFilterParams`` from the query string.

    Extra query parameters become exact-match column filters; the service
    rejects columns the entity does not allow.
    """
    return ListFilterParams(
        busca=busca, status=status_, filtros=extra_query_filters(request, _RESERVED_PARAMS)
    )


def pagination_params(
    page: Annotated[int, Query(ge=1, description="Número da página (base 1).")] = 1,
    page_size: Annotated[
        int, Query(ge=1, le=200, description="Registros por página (máximo 200).")
    ] = 20,
) -> PaginationParams:
    return PaginationParams(page=page, page_size=page_size)


def build_router(config: EntityConfig) -> APIRouter:
    """Create the CRUD + dashboard router for one registry entity.

    Args:
        config: Registry entry of the entity.

    Returns:
        An ``APIRouter`` to be mounted at ``/api/cadastros/{config.slug}``.
    """
    router = APIRouter(tags=[config.title])
    create_schema = config.create_schema
    update_schema = config.update_schema
    response_schema = config.response_schema

    @router.get(
        "/",
        response_model=PaginatedResponse,
        summary=f"Listar {config.title}",
        responses={401: {"description": "Token JWT ausente ou inválido."}},
    )
    def list_records(
        filters: Annotated[ListFilterParams, Depends(list_filter_params)],
        pagination: Annotated[PaginationParams, Depends(pagination_params)],
        db: Annotated[Session, Depends(get_db)],
        _current_user: Annotated[Usuario, Depends(get_current_user)],
    ) -> PaginatedResponse:
        logger.debug("GET /cadastros/%s busca=%s status=%s", config.slug, filters.busca, filters.status)
        return cadastro_service.list_records(db, config, filters, pagination)

    @router.get(
        "/dashboard",
        response_model=DashboardResponse,
        summary=f"Indicadores de {config.title}",
    )
    def get_dashboard(
        filters: Annotated[ListFilterParams, Depends(list_filter_params)],
        db: Annotated[Session, Depends(get_db)],
        _current_user: Annotated[Usuario, Depends(get_current_user)],
    ) -> DashboardResponse:
        return cadastro_service.get_dashboard(db, config, filters)

    @router.post(
        "/excluir-lote",
        response_model=ExclusaoResponse,
        summary=f"Excluir {config.title} em lote",
        responses={
            404: {"description": "Algum ID não existe."},
            409: {"description": "Registros com dependências (somente admin pode excluir)."},
        },
    )
    def delete_batch(
        payload: Annotated[ExclusaoLoteRequest, Body()],
        db: Annotated[Session, Depends(get_db)],
        current_user: Annotated[Usuario, Depends(get_current_user)],
    ) -> ExclusaoResponse:
        return cadastro_service.delete_records(db, config, payload.ids, current_user)

    @router.get(
        "/{record_id}",
        response_model=response_schema,
        summary=f"Detalhe de {config.title}",
        responses={404: {"description": "Registro não encontrado."}},
    )
    def get_record(
        record_id: Annotated[int, Path(ge=1)],
        db: Annotated[Session, Depends(get_db)],
        _current_user: Annotated[Usuario, Depends(get_current_user)],
    ) -> Any:
        return cadastro_service.get_record(db, config, record_id)

    @router.get(
        "/{record_id}/dependencias",
        response_model=DependencyResult,
        summary=f"Dependências de {config.title}",
    )
    def get_dependencies(
        record_id: Annotated[int, Path(ge=1)],
        db: Annotated[Session, Depends(get_db)],
        _current_user: Annotated[Usuario, Depends(get_current_user)],
    ) -> DependencyResult:
        cadastro_service.get_record(db, config, record_id)
        return check_dependencies(db, config.table_name, record_id)

    @router.post(
        "/",
        response_model=response_schema,
        status_code=status.HTTP_201_CREATED,
        summary=f"Cadastrar {config.title}",
        responses={422: {"description": "Dados inválidos ou referência inexistente."}},
    )
    def create_record(
        payload: Annotated[create_schema, Body()],  # type: ignore[valid-type]
        db: Annotated[Session, Depends(get_db)],
        current_user: Annotated[Usuario, Depends(get_current_user)],
    ) -> Any:
        return cadastro_service.create_record(db, config, payload, current_user)

    @router.put(
        "/{record_id}",
        response_model=response_schema,
        summary=f"Atualizar {config.title}",
        responses={404: {"description": "Registro não encontrado."}},
    )
    def update_record(
        record_id: Annotated[int, Path(ge=1)],
        payload: Annotated[update_schema, Body()],  # type: ignore[valid-type]
        db: Annotated[Session, Depends(get_db)],
        current_user: Annotated[Usuario, Depends(get_current_user)],
    ) -> Any:
        return cadastro_service.update_record(db, config, record_id, payload, current_user)

    @router.delete(
        "/{record_id}",
        response_model=ExclusaoResponse,
        summary=f"Excluir {config.title}",
        responses={
            404: {"description": "Registro não encontrado."},
            409: {"description": "Registro com dependências (somente admin pode excluir)."},
        },
    )
    def delete_record(
        record_id: Annotated[int, Path(ge=1)],
        db: Annotated[Session, Depends(get_db)],
        current_user: Annotated[Usuario, Depends(get_current_user)],
    ) -> ExclusaoResponse:
        return cadastro_service.delete_records(db, config, [record_id], current_user)

    return router


ROUTERS: dict[str, APIRouter] = {slug: build_router(config) for slug, config in ENTIDADES.items()}
