"""
User management router.

Mounts under ``/api/usuarios`` (prefix set in ``main.py``).
Every endpoint requires the ``admin`` role.

Endpoints
---------
GET  /       — List user accounts.
POST /       — Create a user account (201).
PUT  /{id}   — Partial update (email, password, name, role, active flag).
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Body, Depends, Path, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.usuario import Usuario
from app.schemas.usuario import UsuarioCreate, UsuarioResponse, UsuarioUpdate
from app.services import usuario_service
from app.services.auth_service import require_role

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Usuários"])

_AdminUser = Annotated[Usuario, Depends(require_role("admin"))]


@router.get(
    "/",
    response_model=list[UsuarioResponse],
    summary="Listar usuários",
    responses={
        401: {"description": "Token JWT ausente ou inválido."},
        403: {"description": "Requer perfil admin."},
    },
)
def list_usuarios(
    db: Annotated[Session, Depends(get_db)],
    _admin: _AdminUser,
) -> list[Usuario]:
    return usuario_service.list_usuarios(db)


@router.post(
    "/",
    response_model=UsuarioResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Cadastrar usuário",
    responses={
        403: {"description": "Requer perfil admin."},
        409: {"description": "Usuário ou e-mail já cadastrado."},
    },
)
def create_usuario(
    payload: Annotated[UsuarioCreate, Body()],
    db: Annotated[Session, Depends(get_db)],
    admin: _AdminUser,
) -> Usuario:
    logger.info("POST /usuarios by '%s': username='%s'", admin.username, payload.username)
    return usuario_service.create_usuario(db, payload)


@router.put(
    "/{usuario_id}",
    response_model=UsuarioResponse,
    summary="Atualizar usuário",
    responses={
        403: {"description": "Requer perfil admin."},
        404: {"description": "Usuário não encontrado."},
        409: {"description": "E-mail já utilizado por outra conta."},
    },
)
def update_usuario(
    usuario_id: Annotated[int, Path(ge=1, description="ID do usuário.")],
    payload: Annotated[UsuarioUpdate, Body()],
    db: Annotated[Session, Depends(get_db)],
    admin: _AdminUser,
) -> Usuario:
    logger.info("PUT /usuarios/%d by '%s'", usuario_id, admin.username)
    return usuario_service.update_usuario(db, usuario_id, payload)
