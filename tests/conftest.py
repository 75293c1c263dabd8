"""Shared fixtures: in-memory SQLite database, API client and auth tokens.

The environment is configured before ``app`` is imported so the cached
settings point at ``sqlite://`` (one shared in-memory connection) and a
throw-away uploads directory.
"""

import os
import tempfile

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["UPLOADS_DIR"] = tempfile.mkdtemp(prefix="splice-uploads-")
os.environ["DEBUG"] = "false"

import io
from datetime import date

import pytest
from fastapi.testclient import TestClient
from openpyxl import Workbook

from app import models  # noqa: F401
from app.database import Base, SessionLocal, engine
from app.main import app
from app.models import Contract, Equipment, Usuario, Vehicle
from app.utils.security import create_access_token, hash_password


@pytest.fixture()
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def client(db):
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


def _make_user(db, username: str, role: str) -> Usuario:
    user = Usuario(
        username=username,
        email=f"{username}@splice.com.br",
        password_hash=hash_password("Senha12345"),
        nome_completo=username.title(),
        role=role,
        ativo=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def _auth_headers(user: Usuario) -> dict[str, str]:
    token = create_access_token({"sub": str(user.id), "username": user.username, "role": user.role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def admin_user(client, db):
    # The lifespan seeds the configured admin; tests use a separate account.
    return _make_user(db, "gestor", "admin")


@pytest.fixture()
def regular_user(client, db):
    return _make_user(db, "operador", "user")


@pytest.fixture()
def admin_headers(admin_user):
    return _auth_headers(admin_user)


@pytest.fixture()
def user_headers(regular_user):
    return _auth_headers(regular_user)


@pytest.fixture()
def contract(db):
    row = Contract(
        number="CT-001",
        client_name="Prefeitura de Campinas",
        value=150000,
        start_date=date(2025, 1, 1),
        end_date=date(2026, 12, 31),
        state="SP",
        city="Campinas",
        status="active",
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


@pytest.fixture()
def vehicle(db, contract):
    row = Vehicle(plate="ABC1D23", brand="Fiat", model="Strada", status="active", contract_id=contract.id)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


@pytest.fixture()
def equipment(db, contract):
    row = Equipment(serial_number="EQ-100", type="radar", status="active", contract_id=contract.id)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def build_workbook(headers: list[str], rows: list[list]) -> bytes:
    """Single-sheet ``.xlsx`` with *headers* on row 1."""
    wb = Workbook()
    ws = wb.active
    ws.append(headers)
    for row in rows:
        ws.append(row)
    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


@pytest.fixture()
def workbook_factory():
    return build_workbook
