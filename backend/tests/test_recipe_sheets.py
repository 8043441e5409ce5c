"""
Tests for the recipe sheets API.

Tests cover:
- Cost computation on create with ingredient and mix lines
- Recompute rules on update
- Clone naming and recalculation from current catalog data
- Preview without persistence
"""

import pytest


@pytest.fixture
def cenoura(make_ingredient):
    # (4 / 2) * 1 * 1.5 = 3 per line with quantity 1
    return make_ingredient("Cenoura", 4.0, peso="2", fator_correcao=1.5)


@pytest.fixture
def massa(client, auth_headers, make_ingredient):
    """Mix costing 10 for a purchase weight of 2, factor 1."""
    farinha = make_ingredient("Farinha", 5.0)
    response = client.post(
        "/api/mixes",
        json={
            "nome": "Massa Básica",
            "peso_total": "2",
            "unidade": "kg",
            "ingredientes": [{"ingrediente_id": farinha.id, "quantidade": 2, "unidade": "kg"}],
        },
        headers=auth_headers,
    )
    assert response.status_code == 201
    return response.json()


def _sheet_body(cenoura, massa, **overrides):
    body = {
        "nome_receita": "Bolo de Cenoura",
        "ingredientes": [
            {"ingrediente_id": cenoura.id, "quantidade_usada": 1},
            {"ingrediente_id": massa["id"], "quantidade_usada": 0.5},
        ],
        "rendimento": 4,
        "unidade_rendimento": "porções",
        "gas_energia": 0.5,
        "embalagem": 1,
        "mao_obra": 2,
        "outros": 0,
        "margem_lucro": 100,
    }
    body.update(overrides)
    return body


@pytest.fixture
def sheet(client, auth_headers, cenoura, massa):
    response = client.post("/api/fichas", json=_sheet_body(cenoura, massa), headers=auth_headers)
    assert response.status_code == 201
    return response.json()


class TestCreate:
    def test_costs_are_computed(self, sheet, cenoura, massa):
        assert sheet["custo_total"] == 9
        assert sheet["custo_por_unidade"] == 2.25
        assert sheet["preco_venda_sugerido"] == 4.5

        first, second = sheet["ingredientes"]
        assert (first["tipo"], first["nome"], first["unidade"]) == ("INGREDIENTE", "Cenoura", "kg")
        assert first["custo_calculado"] == 3
        assert first["peso_compra"] == 2
        assert (second["tipo"], second["nome"]) == ("MIX", "Massa Básica")
        assert second["preco_unitario"] == 10
        assert second["custo_calculado"] == 2.5

    def test_line_price_override(self, client, auth_headers, cenoura, massa):
        body = _sheet_body(cenoura, massa)
        body["ingredientes"][0]["preco_unitario"] = 6
        response = client.post("/api/fichas", json=body, headers=auth_headers)

        assert response.status_code == 201
        assert response.json()["ingredientes"][0]["custo_calculado"] == 4.5

    def test_client_costs_are_ignored(self, client, auth_headers, cenoura, massa):
        body = _sheet_body(cenoura, massa, custo_total=1, preco_venda_sugerido=1)
        response = client.post("/api/fichas", json=body, headers=auth_headers)
        assert response.json()["custo_total"] == 9

    def test_duplicate_name(self, client, auth_headers, sheet, cenoura, massa):
        response = client.post(
            "/api/fichas",
            json=_sheet_body(cenoura, massa, nome_receita="BOLO DE CENOURA"),
            headers=auth_headers,
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Ficha técnica com o nome 'BOLO DE CENOURA' já existe"

    def test_empty_lines(self, client, auth_headers, cenoura, massa):
        response = client.post(
            "/api/fichas", json=_sheet_body(cenoura, massa, ingredientes=[]), headers=auth_headers
        )
        assert response.status_code == 400

    @pytest.mark.parametrize("field, value", [("rendimento", 0), ("margem_lucro", -5), ("embalagem", -1)])
    def test_invalid_numbers(self, client, auth_headers, cenoura, massa, field, value):
        response = client.post(
            "/api/fichas", json=_sheet_body(cenoura, massa, **{field: value}), headers=auth_headers
        )
        assert response.status_code == 400

    def test_unknown_line_reference(self, client, auth_headers, cenoura, massa):
        body = _sheet_body(cenoura, massa)
        body["ingredientes"].append({"ingrediente_id": "fantasma", "quantidade_usada": 1})

        response = client.post("/api/fichas", json=body, headers=auth_headers)

        assert response.status_code == 404
        assert client.get("/api/fichas", headers=auth_headers).json()["pagination"]["total_items"] == 0


class TestUpdate:
    def test_name_only_keeps_costs(self, client, auth_headers, sheet):
        response = client.patch(
            f"/api/fichas/{sheet['id']}",
            json={"nome_receita": "Bolo de Cenoura Caseiro", "modo_preparo": "Misture e asse."},
            headers=auth_headers,
        )
        assert response.status_code == 200
        assert response.json()["custo_total"] == 9
        assert response.json()["modo_preparo"] == "Misture e asse."

    def test_own_name_in_other_case(self, client, auth_headers, sheet):
        response = client.patch(
            f"/api/fichas/{sheet['id']}",
            json={"nome_receita": "bolo de cenoura"},
            headers=auth_headers,
        )
        assert response.status_code == 200

    def test_yield_change_recomputes(self, client, auth_headers, sheet):
        response = client.patch(f"/api/fichas/{sheet['id']}", json={"rendimento": 2}, headers=auth_headers)

        data = response.json()
        assert data["custo_total"] == 9
        assert data["custo_por_unidade"] == 4.5
        assert data["preco_venda_sugerido"] == 9

    def test_stored_snapshot_is_used_on_recompute(self, client, auth_headers, sheet, cenoura):
        client.patch(f"/api/ingredientes/{cenoura.id}", json={"preco": 8}, headers=auth_headers)

        response = client.patch(f"/api/fichas/{sheet['id']}", json={"mao_obra": 3}, headers=auth_headers)

        assert response.json()["custo_total"] == 10
        assert response.json()["ingredientes"][0]["preco_unitario"] == 4

    def test_replacing_lines(self, client, auth_headers, sheet, cenoura):
        response = client.patch(
            f"/api/fichas/{sheet['id']}",
            json={"ingredientes": [{"ingrediente_id": cenoura.id, "quantidade_usada": 2}]},
            headers=auth_headers,
        )

        data = response.json()
        assert len(data["ingredientes"]) == 1
        assert data["custo_total"] == 9.5

    def test_replacing_with_empty_lines(self, client, auth_headers, sheet):
        response = client.patch(
            f"/api/fichas/{sheet['id']}", json={"ingredientes": []}, headers=auth_headers
        )
        assert response.status_code == 400

    def test_invalid_update_leaves_sheet_untouched(self, client, auth_headers, sheet):
        response = client.patch(
            f"/api/fichas/{sheet['id']}",
            json={"nome_receita": "Outro", "rendimento": 0},
            headers=auth_headers,
        )
        assert response.status_code == 400

        data = client.get(f"/api/fichas/{sheet['id']}", headers=auth_headers).json()
        assert data["nome_receita"] == "Bolo de Cenoura"
        assert data["rendimento"] == 4


class TestCloneAndRecalculate:
    def test_clone_names(self, client, auth_headers, sheet):
        first = client.post(f"/api/fichas/{sheet['id']}/clonar", headers=auth_headers)
        second = client.post(f"/api/fichas/{sheet['id']}/clonar", headers=auth_headers)

        assert first.status_code == 201
        assert first.json()["nome_receita"] == "Bolo de Cenoura - Cópia"
        assert second.json()["nome_receita"] == "Bolo de Cenoura - Cópia 2"
        assert first.json()["id"] != sheet["id"]
        assert first.json()["custo_total"] == sheet["custo_total"]
        assert len(first.json()["ingredientes"]) == 2

    def test_clone_of_inactive_sheet_is_active(self, client, auth_headers, sheet):
        client.patch(f"/api/fichas/{sheet['id']}/status", json={"ativo": False}, headers=auth_headers)

        response = client.post(f"/api/fichas/{sheet['id']}/clonar", headers=auth_headers)
        assert response.json()["ativo"] is True

    def test_recalculate_uses_current_prices(self, client, auth_headers, sheet, cenoura):
        client.patch(f"/api/ingredientes/{cenoura.id}", json={"preco": 8}, headers=auth_headers)
        assert client.get(f"/api/fichas/{sheet['id']}", headers=auth_headers).json()["custo_total"] == 9

        response = client.post(f"/api/fichas/{sheet['id']}/recalcular", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["ingredientes"][0]["preco_unitario"] == 8
        assert data["custo_total"] == 12
        assert data["custo_por_unidade"] == 3
        assert data["preco_venda_sugerido"] == 6

    def test_recalculate_with_deleted_reference(self, client, auth_headers, sheet, cenoura, db_session):
        db_session.delete(cenoura)
        db_session.commit()

        response = client.post(f"/api/fichas/{sheet['id']}/recalcular", headers=auth_headers)
        assert response.status_code == 404


class TestPreview:
    def test_preview_is_not_saved(self, client, auth_headers, cenoura):
        response = client.post(
            "/api/fichas/calcular",
            json={
                "ingredientes": [{"ingrediente_id": cenoura.id, "quantidade_usada": 2}],
                "rendimento": 3,
                "gas_energia": 1,
                "margem_lucro": 50,
            },
            headers=auth_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["custo_total"] == 7
        assert data["detalhes_custos"]["ingredientes"] == 6
        assert data["detalhes_custos"]["gas_energia"] == 1
        assert data["ingredientes"][0]["custo_calculado"] == 6
        assert client.get("/api/fichas", headers=auth_headers).json()["pagination"]["total_items"] == 0

    def test_preview_without_lines(self, client, auth_headers):
        response = client.post(
            "/api/fichas/calcular",
            json={"rendimento": 2, "mao_obra": 5},
            headers=auth_headers,
        )
        assert response.json()["custo_por_unidade"] == 2.5

    def test_purchasable_lookup(self, client, auth_headers, cenoura, massa):
        response = client.get(f"/api/insumos/{massa['id']}", headers=auth_headers)
        assert response.json()["tipo"] == "MIX"
        assert response.json()["peso_compra"] == 2

        response = client.get(f"/api/insumos/{cenoura.id}", headers=auth_headers)
        assert response.json()["tipo"] == "INGREDIENTE"

        assert client.get("/api/insumos/nada", headers=auth_headers).status_code == 404
