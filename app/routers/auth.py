"""
Authentication router.

Mounts under ``/api/auth`` (prefix set in ``main.py``).

Endpoints
---------
POST /login    — OAuth2 password form, returns a Bearer token.
POST /refresh  — New token for the holder of a still-valid one.
GET  /me       — Profile of the token holder.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.usuario import Usuario
from app.schemas.auth import TokenResponse, UserResponse
from app.services import auth_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])

_CurrentUser = Annotated[Usuario, Depends(auth_service.get_current_user)]


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Entrar no sistema",
    description=(
        "Recebe usuário e senha no formulário OAuth2 (o botão 'Authorize' do "
        "Swagger funciona direto) e devolve o token de acesso."
    ),
    responses={401: {"description": "Credenciais incorretas ou conta inativa."}},
)
def login(
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
    db: Annotated[Session, Depends(get_db)],
) -> TokenResponse:
    usuario = auth_service.authenticate_user(db, form_data.username, form_data.password)
    if usuario is None:
        logger.warning("Failed login for username='%s'", form_data.username)
        raise auth_service.credentials_error(auth_service.INVALID_CREDENTIALS)
    return auth_service.issue_token(usuario)


@router.post(
    "/refresh",
    response_model=TokenResponse,
    summary="Renovar token",
    responses={401: {"description": "Token inválido ou expirado."}},
)
def refresh(current_user: _CurrentUser) -> TokenResponse:
    logger.debug("Token refreshed for '%s'", current_user.username)
    return auth_service.issue_token(current_user)


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Perfil do usuário autenticado",
    responses={401: {"description": "Token ausente, inválido ou expirado."}},
)
def me(current_user: _CurrentUser) -> Usuario:
    return current_user
