"""
Tests for the mixes API.
"""

import pytest


@pytest.fixture
def farinha(make_ingredient):
    return make_ingredient("Farinha", 5.0, fator_correcao=1.0)


@pytest.fixture
def acucar(make_ingredient):
    return make_ingredient("Açúcar", 3.0, fator_correcao=1.5)


def _mix_body(*entries, nome="Massa Doce"):
    return {
        "nome": nome,
        "peso_total": "3",
        "unidade": "kg",
        "ingredientes": [
            {"ingrediente_id": ing.id, "quantidade": qty, "unidade": "kg"} for ing, qty in entries
        ],
    }


class TestMixCreate:
    def test_derived_values(self, client, auth_headers, farinha, acucar):
        response = client.post(
            "/api/mixes",
            json=_mix_body((farinha, 2), (acucar, 1)),
            headers=auth_headers,
        )

        assert response.status_code == 201
        data = response.json()
        assert data["preco_total"] == 13
        assert data["fator_correcao"] == 1.25
        assert data["categoria"] == "Mix"
        assert [e["alimento"] for e in data["ingredientes"]] == ["Farinha", "Açúcar"]

    def test_client_derived_values_are_ignored(self, client, auth_headers, farinha):
        body = {**_mix_body((farinha, 1)), "preco_total": 999, "fator_correcao": 9}
        response = client.post("/api/mixes", json=body, headers=auth_headers)

        assert response.status_code == 201
        assert response.json()["preco_total"] == 5
        assert response.json()["fator_correcao"] == 1.0

    def test_missing_ingredient(self, client, auth_headers, farinha):
        body = _mix_body((farinha, 1))
        body["ingredientes"].append({"ingrediente_id": "fantasma", "quantidade": 1, "unidade": "kg"})

        response = client.post("/api/mixes", json=body, headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["detail"] == "Ingrediente com ID fantasma não encontrado"
        assert client.get("/api/mixes", headers=auth_headers).json()["pagination"]["total_items"] == 0

    def test_empty_ingredient_list(self, client, auth_headers):
        response = client.post("/api/mixes", json=_mix_body(), headers=auth_headers)
        assert response.status_code == 422

    def test_weight_text_longer_than_column(self, client, auth_headers, farinha):
        body = {**_mix_body((farinha, 1)), "peso_total": "2" * 51}
        response = client.post("/api/mixes", json=body, headers=auth_headers)
        assert response.status_code == 422

    def test_duplicate_name(self, client, auth_headers, farinha):
        client.post("/api/mixes", json=_mix_body((farinha, 1)), headers=auth_headers)
        response = client.post(
            "/api/mixes",
            json=_mix_body((farinha, 2), nome="MASSA DOCE"),
            headers=auth_headers,
        )
        assert response.status_code == 400


class TestMixUpdate:
    def test_replacing_entries_recomputes(self, client, auth_headers, farinha, acucar):
        mix_id = client.post(
            "/api/mixes", json=_mix_body((farinha, 2)), headers=auth_headers
        ).json()["id"]

        response = client.patch(
            f"/api/mixes/{mix_id}",
            json={"ingredientes": [{"ingrediente_id": acucar.id, "quantidade": 4, "unidade": "kg"}]},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json()["preco_total"] == 12
        assert response.json()["fator_correcao"] == 1.5
        assert len(response.json()["ingredientes"]) == 1

    def test_ingredient_price_change_does_not_touch_mix(self, client, auth_headers, farinha):
        mix_id = client.post(
            "/api/mixes", json=_mix_body((farinha, 2)), headers=auth_headers
        ).json()["id"]

        client.patch(f"/api/ingredientes/{farinha.id}", json={"preco": 50}, headers=auth_headers)

        assert client.get(f"/api/mixes/{mix_id}", headers=auth_headers).json()["preco_total"] == 10

    def test_failed_update_leaves_mix_untouched(self, client, auth_headers, farinha):
        mix_id = client.post(
            "/api/mixes", json=_mix_body((farinha, 2)), headers=auth_headers
        ).json()["id"]

        response = client.patch(
            f"/api/mixes/{mix_id}",
            json={
                "nome": "Outro Nome",
                "ingredientes": [{"ingrediente_id": "fantasma", "quantidade": 1, "unidade": "kg"}],
            },
            headers=auth_headers,
        )

        assert response.status_code == 404
        data = client.get(f"/api/mixes/{mix_id}", headers=auth_headers).json()
        assert data["nome"] == "Massa Doce"
        assert data["preco_total"] == 10

    def test_status(self, client, auth_headers, farinha):
        mix_id = client.post(
            "/api/mixes", json=_mix_body((farinha, 2)), headers=auth_headers
        ).json()["id"]

        response = client.patch(f"/api/mixes/{mix_id}/status", json={"ativo": False}, headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["ativo"] is False
        assert response.json()["preco_total"] == 10
