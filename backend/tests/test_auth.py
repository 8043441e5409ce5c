"""
Tests for authentication endpoints and account flows.
"""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import select

from rest_api.models import User
from shared.security.auth import sign_access_token, verify_jwt
from shared.security.password import hash_password, needs_rehash, verify_password


NEW_ACCOUNT = {
    "nome": "Maria Confeiteira",
    "email": "Maria@Doces.com",
    "password": "segredo1",
    "company": "Doces da Maria",
}


class TestPasswordHashing:
    """Test password hashing utilities."""

    def test_hash_password_returns_bcrypt_hash(self):
        hashed = hash_password("mypassword")
        assert hashed.startswith("$2b$")

    def test_verify_password(self):
        hashed = hash_password("mypassword")
        assert verify_password("mypassword", hashed) is True
        assert verify_password("wrongpassword", hashed) is False

    def test_plain_text_never_verifies(self):
        assert verify_password("plaintext", "plaintext") is False
        assert needs_rehash("plaintext") is True

    def test_needs_rehash_bcrypt(self):
        assert needs_rehash(hash_password("mypassword")) is False


class TestTokens:
    def test_claims(self):
        claims = verify_jwt(sign_access_token(7, "chef@test.com", False))
        assert claims["sub"] == "7"
        assert claims["email"] == "chef@test.com"
        assert claims["admin"] is False


class TestLogin:
    def test_login_success(self, client, seed_admin_user):
        response = client.post(
            "/api/auth/login",
            json={"email": "ADMIN@test.com", "password": "testpass123"},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["token_type"] == "Bearer"
        assert data["expires_in"] > 0
        assert data["user"]["email"] == "admin@test.com"
        assert data["user"]["admin"] is True
        assert "password" not in data["user"]

    @pytest.mark.parametrize(
        "email, password",
        [("nonexistent@test.com", "testpass123"), ("admin@test.com", "wrongpassword")],
    )
    def test_invalid_credentials(self, client, seed_admin_user, email, password):
        response = client.post("/api/auth/login", json={"email": email, "password": password})
        assert response.status_code == 401
        assert response.json()["detail"] == "Credenciais inválidas"

    def test_inactive_account(self, client, db_session, seed_regular_user):
        seed_regular_user.is_active = False
        db_session.commit()

        response = client.post("/api/auth/login", json={"email": "chef@test.com", "password": "chef123"})
        assert response.status_code == 401
        assert "desativada" in response.json()["detail"]

    def test_me(self, client, user_auth_headers):
        response = client.get("/api/auth/me", headers=user_auth_headers)
        assert response.status_code == 200
        assert response.json()["email"] == "chef@test.com"
        assert response.json()["ativo"] is True

    @pytest.mark.parametrize(
        "headers",
        [{}, {"Authorization": "Token abc"}, {"Authorization": "Bearer nao-e-um-jwt"}],
    )
    def test_me_rejects_bad_credentials(self, client, headers):
        assert client.get("/api/auth/me", headers=headers).status_code == 401

    def test_token_of_deactivated_user(self, client, db_session, seed_regular_user, user_auth_headers):
        seed_regular_user.is_active = False
        db_session.commit()

        assert client.get("/api/auth/me", headers=user_auth_headers).status_code == 401


class TestRegistration:
    def test_register_creates_inactive_account(self, client, mailer):
        response = client.post("/api/auth/register", json=NEW_ACCOUNT)

        assert response.status_code == 201
        user = response.json()["user"]
        assert user["email"] == "maria@doces.com"
        assert user["ativo"] is False
        assert user["email_verificado"] is False
        assert mailer.messages[0].to == "maria@doces.com"
        assert "/confirm-email?token=" in mailer.messages[0].body

    def test_cannot_login_before_confirmation(self, client):
        client.post("/api/auth/register", json=NEW_ACCOUNT)
        response = client.post(
            "/api/auth/login", json={"email": "maria@doces.com", "password": "segredo1"}
        )
        assert response.status_code == 401

    def test_duplicate_email(self, client):
        client.post("/api/auth/register", json=NEW_ACCOUNT)
        response = client.post("/api/auth/register", json={**NEW_ACCOUNT, "email": "maria@DOCES.com"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Usuário já existe com este email"

    def test_email_failure_keeps_account(self, client, mailer):
        mailer.fail = True
        response = client.post("/api/auth/register", json=NEW_ACCOUNT)
        assert response.status_code == 201

    def test_short_password(self, client):
        response = client.post("/api/auth/register", json={**NEW_ACCOUNT, "password": "123"})
        assert response.status_code == 422


class TestEmailConfirmation:
    def test_confirm_activates_account(self, client, mailer):
        client.post("/api/auth/register", json=NEW_ACCOUNT)

        response = client.post("/api/auth/confirm", json={"token": mailer.last_token()})
        assert response.status_code == 200
        assert response.json()["message"] == "Email verificado com sucesso"

        login = client.post("/api/auth/login", json={"email": "maria@doces.com", "password": "segredo1"})
        assert login.status_code == 200
        assert login.json()["user"]["email_verificado"] is True

    def test_token_is_single_use(self, client, mailer):
        client.post("/api/auth/register", json=NEW_ACCOUNT)
        token = mailer.last_token()
        client.post("/api/auth/confirm", json={"token": token})

        response = client.post("/api/auth/confirm", json={"token": token})
        assert response.status_code == 400

    def test_resend_issues_new_token(self, client, mailer):
        client.post("/api/auth/register", json=NEW_ACCOUNT)
        first = mailer.last_token()

        response = client.post("/api/auth/resend-confirmation", json={"email": "maria@doces.com"})
        assert response.status_code == 200
        assert mailer.last_token() != first
        assert client.post("/api/auth/confirm", json={"token": first}).status_code == 400

    def test_resend_for_verified_account(self, client, seed_regular_user):
        response = client.post("/api/auth/resend-confirmation", json={"email": "chef@test.com"})
        assert response.status_code == 400
        assert response.json()["detail"] == "Email já verificado"

    def test_resend_unknown_email(self, client):
        response = client.post("/api/auth/resend-confirmation", json={"email": "ninguem@test.com"})
        assert response.status_code == 404


class TestPasswordReset:
    def test_full_flow(self, client, mailer, seed_regular_user):
        response = client.post("/api/auth/forgot-password", json={"email": "chef@test.com"})
        assert response.status_code == 200
        token = mailer.last_token()
        assert "/reset-password?token=" in mailer.messages[-1].body

        assert client.post("/api/auth/validate-reset-token", json={"token": token}).status_code == 200

        response = client.post("/api/auth/reset-password", json={"token": token, "password": "nova123"})
        assert response.json()["message"] == "Senha redefinida com sucesso"

        login = client.post("/api/auth/login", json={"email": "chef@test.com", "password": "nova123"})
        assert login.status_code == 200
        assert client.post("/api/auth/validate-reset-token", json={"token": token}).status_code == 400

    def test_expired_token(self, client, db_session, mailer, seed_regular_user):
        client.post("/api/auth/forgot-password", json={"email": "chef@test.com"})
        seed_regular_user.token_reset_expira = datetime.now(timezone.utc) - timedelta(minutes=1)
        db_session.commit()

        response = client.post(
            "/api/auth/reset-password", json={"token": mailer.last_token(), "password": "nova123"}
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Token inválido ou expirado"

    def test_email_failure_clears_token(self, client, db_session, mailer, seed_regular_user):
        mailer.fail = True

        response = client.post("/api/auth/forgot-password", json={"email": "chef@test.com"})

        assert response.status_code == 500
        user = db_session.scalar(select(User).where(User.email == "chef@test.com"))
        assert user.token_reset_senha is None
        assert user.token_reset_expira is None

    def test_unknown_email(self, client):
        response = client.post("/api/auth/forgot-password", json={"email": "ninguem@test.com"})
        assert response.status_code == 404
