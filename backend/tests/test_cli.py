"""
Tests for the command-line interface.
"""

import json

import pytest
from sqlalchemy import select
from typer.testing import CliRunner

import cli
from rest_api.models import User
from shared.security.password import verify_password
from tests.conftest import TestingSessionLocal


runner = CliRunner()


@pytest.fixture
def cli_db(db_session, monkeypatch):
    """Point the CLI at the test database."""
    monkeypatch.setattr(cli, "SessionLocal", TestingSessionLocal)
    return db_session


def _write(tmp_path, payload) -> str:
    path = tmp_path / "ficha.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return str(path)


class TestCreateAdmin:
    def test_creates_active_admin(self, cli_db):
        result = runner.invoke(
            cli.app,
            ["create-admin", "Dona@Cozinha.com", "--nome", "Dona"],
            input="segredo1\nsegredo1\n",
        )

        assert result.exit_code == 0, result.output
        user = cli_db.scalar(select(User).where(User.email == "dona@cozinha.com"))
        assert user.admin is True
        assert user.is_active is True
        assert verify_password("segredo1", user.password)

    def test_existing_email(self, cli_db, seed_admin_user):
        result = runner.invoke(
            cli.app, ["create-admin", "admin@test.com"], input="segredo1\nsegredo1\n"
        )
        assert result.exit_code == 1


class TestCalcular:
    def test_prints_costs(self, cli_db, make_ingredient, tmp_path):
        farinha = make_ingredient("Farinha", 5.0)
        path = _write(
            tmp_path,
            {
                "ingredientes": [{"ingrediente_id": farinha.id, "quantidade_usada": 2}],
                "rendimento": 4,
                "margem_lucro": 100,
            },
        )

        result = runner.invoke(cli.app, ["calcular", path])

        assert result.exit_code == 0, result.output
        assert "Farinha" in result.output
        assert "R$ 10.00" in result.output
        assert "R$ 5.00" in result.output

    def test_invalid_yield(self, cli_db, tmp_path):
        result = runner.invoke(cli.app, ["calcular", _write(tmp_path, {"rendimento": 0})])
        assert result.exit_code == 1
        assert "Rendimento" in result.output

    def test_malformed_file(self, cli_db, tmp_path):
        path = tmp_path / "ficha.json"
        path.write_text("{nao e json", encoding="utf-8")

        result = runner.invoke(cli.app, ["calcular", str(path)])
        assert result.exit_code == 1


class TestRecalcular:
    def test_refreshes_sheets(self, cli_db, client, auth_headers, make_ingredient):
        farinha = make_ingredient("Farinha", 5.0)
        client.post(
            "/api/fichas",
            json={
                "nome_receita": "Pão",
                "ingredientes": [{"ingrediente_id": farinha.id, "quantidade_usada": 1}],
                "rendimento": 1,
                "unidade_rendimento": "un",
            },
            headers=auth_headers,
        )
        client.patch(f"/api/ingredientes/{farinha.id}", json={"preco": 6}, headers=auth_headers)

        result = runner.invoke(cli.app, ["recalcular"])

        assert result.exit_code == 0, result.output
        assert "R$ 5.00" in result.output
        assert "R$ 6.00" in result.output


def test_version():
    result = runner.invoke(cli.app, ["version"])
    assert result.exit_code == 0
    assert cli.API_VERSION in result.output
