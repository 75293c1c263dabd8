"""Usuario model: login accounts and their access profile."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String
from sqlalchemy.sql import func

from app.database import Base
from app.utils.constants import ROLE_ADMIN, ROLE_USER


class Usuario(Base):
    """Account allowed to use the API.

    ``role`` is ``"admin"`` or ``"user"``.  Admins manage accounts, read the
    audit log and may delete records that other rows still reference.
    Suspended accounts (``ativo`` false) can neither log in nor use tokens
    issued before the suspension.  ``id`` is the ``sub`` claim of the JWT
    and the ``user_id`` stamped on audit rows.
    """

    __tablename__ = "usuario"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(100), unique=True, nullable=False)
    email = Column(String(200), unique=True, nullable=False)
    password_hash = Column(String(200), nullable=False)  # bcrypt
    nome_completo = Column(String(300), nullable=True)
    role = Column(String(20), default=ROLE_USER, nullable=False)
    ativo = Column(Boolean, default=True, nullable=False)
    ultimo_acesso = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    def __repr__(self) -> str:
        return f"<Usuario id={self.id} username={self.username!r} role={self.role}>"
