"""Account management payloads for ``/api/usuarios`` (admin only).

Responses reuse ``UserResponse`` from the auth schemas, which has no
password field.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from app.schemas.auth import UserResponse as UsuarioResponse  # noqa: F401
from app.utils.constants import ROLE_USER, ROLES

_PASSWORD = {"min_length": 8, "max_length": 128}


def _check_role(value: str | None) -> str | None:
    if value is not None and value not in ROLES:
        raise ValueError(f"Perfil inválido. Valores permitidos: {ROLES}")
    return value


class UsuarioCreate(BaseModel):
    """New account.  ``username`` and ``email`` must be unused (409 otherwise)."""

    username: str = Field(
        ...,
        min_length=3,
        max_length=100,
        pattern=r"^[a-zA-Z0-9_.\-]+$",
        description="Login: letras, dígitos, '_', '.' ou '-'.",
    )
    email: EmailStr
    password: str = Field(..., description="Guardada apenas como hash bcrypt.", **_PASSWORD)
    nome_completo: str | None = Field(default=None, max_length=300)
    role: str = Field(default=ROLE_USER, description=f"Um de {ROLES}.")

    @field_validator("role")
    @classmethod
    def _known_role(cls, value: str | None) -> str | None:
        return _check_role(value)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "username": "msouza",
                "email": "m.souza@splice.com.br",
                "password": "Splice2026!",
                "nome_completo": "Mariana Souza",
                "role": "user",
            }
        }
    )


class UsuarioUpdate(BaseModel):
    """Partial update; fields left out keep their stored value.

    ``ativo=False`` suspends the account and invalidates its open tokens.
    """

    email: EmailStr | None = None
    password: str | None = Field(default=None, **_PASSWORD)
    nome_completo: str | None = Field(default=None, max_length=300)
    role: str | None = None
    ativo: bool | None = None

    @field_validator("role")
    @classmethod
    def _known_role(cls, value: str | None) -> str | None:
        return _check_role(value)

    model_config = ConfigDict(json_schema_extra={"example": {"role": "admin", "ativo": True}})
