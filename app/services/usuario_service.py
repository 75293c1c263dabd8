"""
User management service.

Admin-facing create / update / list operations plus the startup routine
that keeps the bootstrap administrator in sync with the settings.
"""

import logging

from fastapi import HTTPException, status
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config import get_settings
from app.models.usuario import Usuario
from app.schemas.usuario import UsuarioCreate, UsuarioUpdate
from app.utils.security import hash_password, verify_password

logger = logging.getLogger(__name__)


def _conflict(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=detail)


def _ensure_unique(
    db: Session,
    username: str | None,
    email: str | None,
    exclude_id: int | None = None,
) -> None:
    clauses = []
    if username is not None:
        clauses.append(Usuario.username == username)
    if email is not None:
        clauses.append(Usuario.email == email)
    if not clauses:
        return
    q = db.query(Usuario).filter(or_(*clauses))
    if exclude_id is not None:
        q = q.filter(Usuario.id != exclude_id)
    existing = q.first()
    if existing is None:
        return
    if username is not None and existing.username == username:
        raise _conflict(f"O usuário '{username}' já existe.")
    raise _conflict(f"O e-mail '{email}' já está em uso.")


def list_usuarios(db: Session) -> list[Usuario]:
    return db.query(Usuario).order_by(Usuario.username).all()


def get_usuario(db: Session, usuario_id: int) -> Usuario:
    usuario = db.get(Usuario, usuario_id)
    if usuario is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Usuário id={usuario_id} não encontrado.",
        )
    return usuario


def create_usuario(db: Session, data: UsuarioCreate) -> Usuario:
    """Create a user account with a bcrypt-hashed password.

    Raises:
        HTTPException 409: Username or email already taken.
    """
    _ensure_unique(db, data.username, data.email)
    usuario = Usuario(
        username=data.username,
        email=data.email,
        password_hash=hash_password(data.password),
        nome_completo=data.nome_completo,
        role=data.role,
        ativo=True,
    )
    db.add(usuario)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise _conflict("Usuário ou e-mail já cadastrado.") from exc
    db.refresh(usuario)
    logger.info("create_usuario: '%s' role=%s", usuario.username, usuario.role)
    return usuario


def update_usuario(db: Session, usuario_id: int, data: UsuarioUpdate) -> Usuario:
    """Apply a partial update; a new password is re-hashed.

    Raises:
        HTTPException 404: Unknown user.
        HTTPException 409: Email already used by another account.
    """
    usuario = get_usuario(db, usuario_id)
    changes = data.model_dump(exclude_unset=True)
    if "email" in changes:
        _ensure_unique(db, None, changes["email"], exclude_id=usuario_id)

    password = changes.pop("password", None)
    if password:
        usuario.password_hash = hash_password(password)
    for field, value in changes.items():
        if value is None and field in ("email", "role", "ativo"):
            continue
        setattr(usuario, field, value)

    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise _conflict("Usuário ou e-mail já cadastrado.") from exc
    db.refresh(usuario)
    logger.info("update_usuario: '%s' fields=%s", usuario.username, sorted(changes))
    return usuario


def seed_admin(db: Session) -> Usuario:
    """Create the bootstrap admin or refresh its password and role.

    Called from the application lifespan. The account named by
    ``ADMIN_USERNAME`` always ends up active, with role ``admin`` and the
    configured password.
    """
    settings = get_settings()
    admin = db.query(Usuario).filter(Usuario.username == settings.ADMIN_USERNAME).first()
    if admin is None:
        admin = Usuario(
            username=settings.ADMIN_USERNAME,
            email=settings.ADMIN_EMAIL,
            password_hash=hash_password(settings.ADMIN_PASSWORD),
            nome_completo="Administrador",
            role="admin",
            ativo=True,
        )
        db.add(admin)
        logger.info("seed_admin: created '%s'", settings.ADMIN_USERNAME)
    else:
        if not verify_password(settings.ADMIN_PASSWORD, admin.password_hash):
            admin.password_hash = hash_password(settings.ADMIN_PASSWORD)
            logger.info("seed_admin: password refreshed for '%s'", admin.username)
        admin.role = "admin"
        admin.ativo = True
    db.commit()
    db.refresh(admin)
    return admin
