"""Pydantic v2 schemas for ``/api/auth``: the issued token and the user profile."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class TokenResponse(BaseModel):
    access_token: str = Field(..., description="JWT enviado no cabeçalho 'Authorization: Bearer'.")
    token_type: str = Field(default="bearer")
    expires_in: int | None = Field(default=None, ge=0, description="Validade do token em segundos.")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "access_token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                "token_type": "bearer",
                "expires_in": 28800,
            }
        }
    )


class UserResponse(BaseModel):
    """Account as shown to clients; the password hash never leaves the server.

    Shared by ``GET /api/auth/me`` and the ``/api/usuarios`` endpoints.
    """

    id: int
    username: str
    email: str
    nome_completo: str | None = None
    role: str = Field(..., description="Perfil: 'admin' ou 'user'.")
    ativo: bool
    ultimo_acesso: datetime | None = Field(default=None, description="Último login.")

    model_config = ConfigDict(from_attributes=True)
