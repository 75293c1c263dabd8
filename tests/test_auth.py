from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from app.config import get_settings
from app.models import Usuario
from app.services.usuario_service import seed_admin
from app.utils.security import create_access_token, hash_password, verify_password, verify_token

settings = get_settings()


class TestSecurity:
    """Password hashing and JWT helpers."""

    def test_password_round_trip(self):
        hashed = hash_password("Senha12345")

        assert hashed != "Senha12345"
        assert verify_password("Senha12345", hashed)
        assert not verify_password("outra-senha", hashed)

    def test_token_carries_claims(self):
        payload = verify_token(create_access_token({"sub": "7", "role": "user"}))

        assert payload["sub"] == "7"
        assert payload["role"] == "user"
        assert "exp" in payload

    def test_expired_token(self):
        expired = jwt.encode(
            {"sub": "1", "exp": datetime.now(timezone.utc) - timedelta(minutes=1)},
            settings.JWT_SECRET,
            algorithm=settings.JWT_ALGORITHM,
        )

        with pytest.raises(ValueError):
            verify_token(expired)

    def test_tampered_token(self):
        token = create_access_token({"sub": "1"})

        with pytest.raises(ValueError):
            verify_token(token[:-4] + "abcd")


class TestLogin:
    def test_login_returns_token(self, client, regular_user):
        response = client.post(
            "/api/auth/login", data={"username": "operador", "password": "Senha12345"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["token_type"] == "bearer"
        assert verify_token(body["access_token"])["sub"] == str(regular_user.id)

    def test_wrong_password(self, client, regular_user):
        response = client.post(
            "/api/auth/login", data={"username": "operador", "password": "errada123"}
        )

        assert response.status_code == 401

    def test_inactive_user_cannot_login(self, client, regular_user, db):
        regular_user.ativo = False
        db.commit()

        response = client.post(
            "/api/auth/login", data={"username": "operador", "password": "Senha12345"}
        )

        assert response.status_code == 401

    def test_seeded_admin_can_login(self, client):
        response = client.post(
            "/api/auth/login",
            data={"username": settings.ADMIN_USERNAME, "password": settings.ADMIN_PASSWORD},
        )

        assert response.status_code == 200

    def test_me_and_refresh(self, client, user_headers):
        me = client.get("/api/auth/me", headers=user_headers)
        refreshed = client.post("/api/auth/refresh", headers=user_headers)

        assert me.status_code == 200
        assert me.json()["username"] == "operador"
        assert "password_hash" not in me.json()
        assert refreshed.status_code == 200
        assert refreshed.json()["access_token"]


class TestSeedAdmin:
    def test_restores_role_and_password(self, db):
        db.add(
            Usuario(
                username=settings.ADMIN_USERNAME,
                email=settings.ADMIN_EMAIL,
                password_hash=hash_password("esquecida"),
                role="user",
                ativo=False,
            )
        )
        db.commit()

        admin = seed_admin(db)

        assert admin.role == "admin"
        assert admin.ativo is True
        assert verify_password(settings.ADMIN_PASSWORD, admin.password_hash)
        assert db.query(Usuario).count() == 1


class TestUsuariosApi:
    """Admin-only user management."""

    def test_regular_user_is_forbidden(self, client, user_headers):
        assert client.get("/api/usuarios/", headers=user_headers).status_code == 403

    def test_create_and_list(self, client, admin_headers):
        response = client.post(
            "/api/usuarios/",
            json={
                "username": "msouza",
                "email": "m.souza@splice.com.br",
                "password": "Splice2026!",
                "nome_completo": "Mariana Souza",
            },
            headers=admin_headers,
        )

        assert response.status_code == 201
        assert response.json()["role"] == "user"
        usernames = [u["username"] for u in client.get("/api/usuarios/", headers=admin_headers).json()]
        assert "msouza" in usernames

    def test_duplicate_username(self, client, admin_headers, regular_user):
        response = client.post(
            "/api/usuarios/",
            json={"username": "operador", "email": "novo@splice.com.br", "password": "Splice2026!"},
            headers=admin_headers,
        )

        assert response.status_code == 409
        assert response.json()["detail"] == "O usuário 'operador' já existe."

    def test_invalid_role(self, client, admin_headers):
        response = client.post(
            "/api/usuarios/",
            json={
                "username": "xpto",
                "email": "xpto@splice.com.br",
                "password": "Splice2026!",
                "role": "superuser",
            },
            headers=admin_headers,
        )

        assert response.status_code == 422

    def test_update_password_and_deactivate(self, client, admin_headers, regular_user, db):
        response = client.put(
            f"/api/usuarios/{regular_user.id}",
            json={"password": "NovaSenha2026", "ativo": False},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json()["ativo"] is False
        db.expire_all()
        assert verify_password("NovaSenha2026", db.get(Usuario, regular_user.id).password_hash)

    def test_deactivated_token_is_rejected(self, client, admin_headers, user_headers, regular_user):
        client.put(f"/api/usuarios/{regular_user.id}", json={"ativo": False}, headers=admin_headers)

        assert client.get("/api/auth/me", headers=user_headers).status_code == 401

    def test_update_missing_user(self, client, admin_headers):
        response = client.put("/api/usuarios/999", json={"nome_completo": "X"}, headers=admin_headers)

        assert response.status_code == 404


class TestAuditoriaApi:
    def test_admin_reads_decoded_snapshots(self, client, admin_headers, user_headers):
        created = client.post(
            "/api/cadastros/estoque/",
            json={"component_name": "Fonte 12V", "quantity": 3},
            headers=user_headers,
        ).json()
        client.put(f"/api/cadastros/estoque/{created['id']}", json={"quantity": 8}, headers=user_headers)

        response = client.get(
            "/api/auditoria/", params={"tabela": "inventory"}, headers=admin_headers
        )

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 2
        update = next(item for item in body["items"] if item["action"] == "UPDATE")
        assert update["old_data"]["quantity"] == 3
        assert update["new_data"]["quantity"] == 8
        assert update["record_id"] == created["id"]

    def test_filter_by_action(self, client, admin_headers, user_headers):
        client.post("/api/cadastros/estoque/", json={"component_name": "Relé"}, headers=user_headers)

        inserts = client.get("/api/auditoria/", params={"acao": "INSERT"}, headers=admin_headers).json()
        deletes = client.get("/api/auditoria/", params={"acao": "DELETE"}, headers=admin_headers).json()

        assert inserts["total"] == 1
        assert deletes["total"] == 0

    def test_invalid_action(self, client, admin_headers):
        response = client.get("/api/auditoria/", params={"acao": "DROP"}, headers=admin_headers)

        assert response.status_code == 422

    def test_regular_user_is_forbidden(self, client, user_headers):
        assert client.get("/api/auditoria/", headers=user_headers).status_code == 403
