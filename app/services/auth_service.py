"""
Login, token issuing and the request guards shared by every router.

Sistema Splice has two profiles (``constants.ROLES``): ``user`` runs the
day-to-day registries, imports and exports; ``admin`` additionally manages
accounts, reads the audit log and may delete records that still have
dependents.

Guards
------
- ``get_current_user``: any active account holding a valid Bearer token.
- ``require_role("admin")``: same, restricted to the listed profiles.
"""

import logging
from datetime import datetime
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import get_settings
from app.database import get_db
from app.models.usuario import Usuario
from app.schemas.auth import TokenResponse
from app.utils.constants import ROLES
from app.utils.security import create_access_token, verify_password, verify_token

logger = logging.getLogger(__name__)

_settings = get_settings()

oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{_settings.API_PREFIX}/auth/login")

INVALID_CREDENTIALS = "Credenciais incorretas ou conta inativa"
INVALID_TOKEN = "Não foi possível validar as credenciais"


def credentials_error(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _active_user_by_username(db: Session, username: str) -> Usuario | None:
    return (
        db.query(Usuario)
        .filter(Usuario.username == username.strip(), Usuario.ativo.is_(True))
        .first()
    )


def authenticate_user(db: Session, username: str, password: str) -> Usuario | None:
    """Check a username/password pair.

    Unknown accounts, suspended accounts and wrong passwords all return
    ``None`` so the login endpoint answers them identically.  On success
    ``ultimo_acesso`` is stamped; failing to store the stamp does not
    block the login.
    """
    usuario = _active_user_by_username(db, username)
    if usuario is None or not verify_password(password, usuario.password_hash):
        logger.debug("authenticate_user: rejected '%s'", username)
        return None

    usuario.ultimo_acesso = datetime.now()
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.warning("authenticate_user: could not stamp last access of '%s'", username)

    logger.info("authenticate_user: '%s' (%s) logged in", usuario.username, usuario.role)
    return usuario


def issue_token(usuario: Usuario) -> TokenResponse:
    """Sign a fresh access token for *usuario* (login and refresh)."""
    token = create_access_token(
        {"sub": str(usuario.id), "username": usuario.username, "role": usuario.role}
    )
    return TokenResponse(
        access_token=token,
        expires_in=_settings.JWT_EXPIRATION_MINUTES * 60,
    )


def get_current_user(
    token: Annotated[str, Depends(oauth2_scheme)],
    db: Annotated[Session, Depends(get_db)],
) -> Usuario:
    """Resolve the Bearer token to an active ``Usuario``.

    The ``sub`` claim carries the user id as a string.  A bad signature, an
    expired token, a malformed ``sub`` or a suspended account all raise 401.
    """
    try:
        payload = verify_token(token)
        user_id = int(payload["sub"])
    except (ValueError, KeyError, TypeError) as exc:
        raise credentials_error(INVALID_TOKEN) from exc

    usuario = db.get(Usuario, user_id)
    if usuario is None or not usuario.ativo:
        raise credentials_error(INVALID_TOKEN)
    return usuario


def require_role(*roles: str):
    """Dependency factory restricting an endpoint to the given profiles.

    Usage::

        _admin: Annotated[Usuario, Depends(require_role("admin"))]

    Raises:
        ValueError: At import time, for a profile not in ``constants.ROLES``.
    """
    unknown = set(roles) - set(ROLES)
    if unknown:
        raise ValueError(f"Unknown roles: {sorted(unknown)}")
    allowed = frozenset(roles)

    def _guard(usuario: Annotated[Usuario, Depends(get_current_user)]) -> Usuario:
        if usuario.role not in allowed:
            logger.warning(
                "require_role: '%s' (%s) denied, needs %s",
                usuario.username, usuario.role, sorted(allowed),
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Acesso negado. Requer perfil: {', '.join(sorted(allowed))}.",
            )
        return usuario

    return _guard
