"""
Testes para a API JSON de Pedidos (/api/orders/).

Testa:
- Criação com atribuição de ticket, OAB duplicada (409) e sem tickets (422)
- Listagem com filtros e paginação
- PATCH parcial, DELETE 204
- Validação de uuid e payload
"""

import json
import uuid

import pytest

from tests.helpers import linha_pedido


def _json(response):
    return json.loads(response.content)


def _post(client, body):
    return client.post("/api/orders/", data=json.dumps(body), content_type="application/json")


def _patch(client, pedido_uuid, body):
    return client.patch(
        f"/api/orders/{pedido_uuid}/", data=json.dumps(body), content_type="application/json"
    )


@pytest.mark.usefixtures("container")
class TestCriarPedidoAPI:
    """POST /api/orders/"""

    def test_criar_atribui_ticket(self, client):
        """Deve responder 201 com ticket atribuído e status Aprovado."""
        response = _post(client, {"nome_completo": "João"})

        assert response.status_code == 201
        data = _json(response)["data"]
        assert data["ticket"] == "68637750800"
        assert data["status"] == "Aprovado"
        assert data["nome_completo"] == "João"
        assert uuid.UUID(data["uuid"]).version == 4
        assert data["data_solicitacao"] == data["data_liberacao"]

    def test_segundo_pedido_sem_oab_recebe_outro_ticket(self, client):
        primeiro = _json(_post(client, {"nome_completo": "João"}))["data"]
        segundo = _json(_post(client, {"nome_completo": "João", "numero_oab": ""}))["data"]

        assert primeiro["ticket"] == "68637750800"
        assert segundo["ticket"] == "68637750801"
        assert primeiro["uuid"] != segundo["uuid"]

    def test_oab_duplicada_409_com_pedido_gravado(self, client, sheets):
        """409 traz o pedido recusado e a referência ao anterior."""
        a = _json(_post(client, {"nome_completo": "A", "numero_oab": "123"}))["data"]

        response = _post(client, {"nome_completo": "B", "numero_oab": "123"})

        assert response.status_code == 409
        body = _json(response)
        assert body["success"] is False
        assert body["error"] == "Número OAB já possui pedido"
        assert body["data"]["nome_completo"] == "B"
        assert body["data"]["ticket"] == ""
        assert body["data"]["status"] == "Recusado"
        assert body["existing_ticket"] == a["ticket"]
        assert body["existing_date"] == a["data_solicitacao"]
        assert [r[3] for r in sheets.rows("pedidos")] == ["A", "B"]

    def test_sem_tickets_422(self, client, sheets):
        """Sem ticket livre: 422 e nenhum pedido gravado."""
        _post(client, {"nome_completo": "1"})
        _post(client, {"nome_completo": "2"})

        response = _post(client, {"nome_completo": "X"})

        assert response.status_code == 422
        assert _json(response) == {"success": False, "error": "Nenhum ticket disponível"}
        assert len(sheets.rows("pedidos")) == 2

    def test_nome_obrigatorio(self, client, sheets):
        response = _post(client, {"numero_oab": "123"})

        assert response.status_code == 400
        assert _json(response)["error"] == "nome_completo é obrigatório"
        assert sheets.calls == []

    def test_campos_do_servidor_ignorados(self, client):
        """uuid/ticket/status enviados pelo cliente não são usados."""
        response = _post(client, {
            "nome_completo": "João",
            "uuid": "nao-usar",
            "ticket": "escolhido",
            "status": "Recusado",
        })

        data = _json(response)["data"]
        assert data["uuid"] != "nao-usar"
        assert data["ticket"] == "68637750800"
        assert data["status"] == "Aprovado"


@pytest.fixture
def com_pedidos(sheets):
    ids = [str(uuid.uuid4()) for _ in range(3)]
    sheets.append_row("pedidos", "pedidos!A:I", linha_pedido(ids[0], ticket="T1", numero_oab="111"))
    sheets.append_row("pedidos", "pedidos!A:I", linha_pedido(ids[1], ticket="T2", status="Recusado"))
    sheets.append_row("pedidos", "pedidos!A:I", linha_pedido(ids[2], ticket="T3", numero_oab="333"))
    sheets.calls.clear()
    return ids


@pytest.mark.usefixtures("container")
class TestListarPedidosAPI:
    """GET /api/orders/"""

    def test_envelope_paginado(self, client, com_pedidos):
        response = client.get("/api/orders/")

        body = _json(response)
        assert response.status_code == 200
        assert body["success"] is True
        assert body["count"] == 3
        assert body["total"] == 3
        assert body["limit"] == 50
        assert body["offset"] == 0
        assert [p["uuid"] for p in body["data"]] == com_pedidos

    def test_filtros(self, client, com_pedidos):
        body = _json(client.get("/api/orders/", {"status": "recusado"}))
        assert [p["uuid"] for p in body["data"]] == [com_pedidos[1]]

        body = _json(client.get("/api/orders/", {"oab": " 333 "}))
        assert [p["uuid"] for p in body["data"]] == [com_pedidos[2]]

        body = _json(client.get("/api/orders/", {"ticket": "t1"}))
        assert [p["uuid"] for p in body["data"]] == [com_pedidos[0]]

    def test_paginacao(self, client, com_pedidos):
        body = _json(client.get("/api/orders/", {"limit": 1, "offset": 1}))

        assert body["count"] == 1
        assert body["total"] == 3
        assert body["limit"] == 1
        assert body["offset"] == 1
        assert body["data"][0]["uuid"] == com_pedidos[1]

    @pytest.mark.parametrize("query", [
        {"limit": 0},
        {"limit": 101},
        {"limit": "abc"},
        {"offset": -1},
    ])
    def test_paginacao_invalida_400(self, client, query):
        response = client.get("/api/orders/", query)

        assert response.status_code == 400
        assert _json(response)["success"] is False


@pytest.mark.usefixtures("container")
class TestPedidoDetailAPI:
    """GET/PATCH/DELETE /api/orders/<uuid>/"""

    def test_obter(self, client, com_pedidos):
        response = client.get(f"/api/orders/{com_pedidos[0]}/")

        assert response.status_code == 200
        assert _json(response)["data"]["ticket"] == "T1"

    def test_uuid_em_maiusculas_normalizado(self, client, com_pedidos):
        response = client.get(f"/api/orders/{com_pedidos[0].upper()}/")

        assert response.status_code == 200

    def test_obter_inexistente_404(self, client):
        assert client.get(f"/api/orders/{uuid.uuid4()}/").status_code == 404

    @pytest.mark.parametrize("method", ["get", "delete"])
    def test_uuid_invalido_400(self, client, method):
        response = getattr(client, method)("/api/orders/nao-e-uuid/")

        assert response.status_code == 400
        assert _json(response) == {"success": False, "error": "Formato de UUID inválido"}

    def test_patch_parcial(self, client, sheets, com_pedidos):
        """Só os campos enviados mudam."""
        antes = sheets.rows("pedidos")[0]

        response = _patch(client, com_pedidos[0], {"status": "Cancelado"})

        assert response.status_code == 200
        depois = sheets.rows("pedidos")[0]
        assert depois[7] == "Cancelado"
        assert depois[:7] + depois[8:] == antes[:7] + antes[8:]
        assert _json(response)["data"]["status"] == "Cancelado"

    def test_patch_string_vazia_e_valor(self, client, sheets, com_pedidos):
        response = _patch(client, com_pedidos[0], {"numero_oab": "", "anotacoes": "  obs "})

        data = _json(response)["data"]
        assert data["numero_oab"] == ""
        assert data["anotacoes"] == "  obs "
        assert data["ticket"] == "T1"

    def test_patch_null_conta_como_ausente(self, client, com_pedidos):
        response = _patch(client, com_pedidos[0], {"ticket": None, "subsecao": "Centro"})

        data = _json(response)["data"]
        assert data["ticket"] == "T1"
        assert data["subsecao"] == "Centro"

    def test_patch_nao_altera_uuid(self, client, com_pedidos):
        response = _patch(client, com_pedidos[0], {"uuid": str(uuid.uuid4())})

        assert _json(response)["data"]["uuid"] == com_pedidos[0]

    @pytest.mark.parametrize("campo", ["ticket", "nome_completo"])
    def test_patch_campo_obrigatorio_vazio_400(self, client, sheets, com_pedidos, campo):
        response = _patch(client, com_pedidos[0], {campo: ""})

        assert response.status_code == 400
        assert _json(response)["error"] == f"{campo} não pode ser vazio"
        assert sheets.calls == []

    def test_patch_inexistente_404(self, client):
        assert _patch(client, uuid.uuid4(), {"status": "x"}).status_code == 404

    def test_remover_204(self, client, sheets, com_pedidos):
        response = client.delete(f"/api/orders/{com_pedidos[1]}/")

        assert response.status_code == 204
        assert [r[0] for r in sheets.rows("pedidos")] == [com_pedidos[0], com_pedidos[2]]

    def test_remover_e_atualizar_outro(self, client, sheets, com_pedidos):
        """Depois da remoção, o PATCH deve mirar a linha deslocada."""
        client.delete(f"/api/orders/{com_pedidos[0]}/")

        _patch(client, com_pedidos[2], {"status": "Aprovado final"})

        linhas = {r[0]: r for r in sheets.rows("pedidos")}
        assert linhas[com_pedidos[2]][7] == "Aprovado final"
        assert linhas[com_pedidos[1]][7] == "Recusado"
