"""
Testes para o GoogleSheetsGateway (client da API mockado).

Verifica a tradução das operações em chamadas Sheets v4 e dos erros
de transporte/autenticação em StoreUnavailableError.
"""

import json
import threading
from unittest.mock import MagicMock, Mock, patch

import httplib2
import pytest
from google.auth.exceptions import RefreshError
from googleapiclient.errors import HttpError

from src.adapters.sheets.gateway import (
    SCOPES,
    GoogleSheetsGateway,
    build_sheets_service,
    column_letter,
    load_credentials,
)
from src.core.shared.exceptions import (
    RowIndexInvalidError,
    SheetNotFoundError,
    StoreUnavailableError,
)


@pytest.fixture
def service():
    return MagicMock()


@pytest.fixture
def gw(service):
    return GoogleSheetsGateway(service_factory=lambda: service, spreadsheet_id="sheet-1")


def _http_error(status: int) -> HttpError:
    return HttpError(resp=httplib2.Response({"status": status}), content=b"{}")


class TestColumnLetter:

    @pytest.mark.parametrize("index,letter", [(1, "A"), (2, "B"), (9, "I"), (26, "Z"), (27, "AA")])
    def test_conversao(self, index, letter):
        assert column_letter(index) == letter


class TestLoadCredentials:
    """Ordem de precedência das credenciais."""

    def test_json_tem_precedencia(self):
        info = {"type": "service_account", "client_email": "x@y"}
        with patch("src.adapters.sheets.gateway.service_account.Credentials") as creds:
            load_credentials(credentials_json=json.dumps(info), credentials_file="k.json")

        creds.from_service_account_info.assert_called_once_with(info, scopes=SCOPES)
        creds.from_service_account_file.assert_not_called()

    def test_arquivo(self):
        with patch("src.adapters.sheets.gateway.service_account.Credentials") as creds:
            load_credentials(credentials_file="k.json")

        path = creds.from_service_account_file.call_args[0][0]
        assert path.endswith("k.json")

    def test_json_malformado(self):
        with pytest.raises(StoreUnavailableError):
            load_credentials(credentials_json="{nao e json")

    def test_json_que_nao_e_service_account(self):
        """JSON válido sem client_email/token_uri vira erro de store."""
        with pytest.raises(StoreUnavailableError) as exc_info:
            load_credentials(credentials_json="{}")

        assert exc_info.value.__cause__ is not None

    def test_arquivo_inexistente(self, tmp_path):
        with pytest.raises(StoreUnavailableError) as exc_info:
            load_credentials(credentials_file=str(tmp_path / "nao-existe.json"))

        assert isinstance(exc_info.value.__cause__, OSError)

    def test_sem_credenciais(self):
        with pytest.raises(StoreUnavailableError):
            load_credentials()


class TestGoogleSheetsGateway:
    """Tradução das operações."""

    def test_exige_spreadsheet_id(self, service):
        with pytest.raises(StoreUnavailableError):
            GoogleSheetsGateway(service_factory=lambda: service, spreadsheet_id="")

    def test_read_range(self, gw, service):
        """Deve devolver `values` como strings; ausente = lista vazia."""
        values = service.spreadsheets.return_value.values.return_value
        values.get.return_value.execute.return_value = {
            "values": [["ticket", "status"], ["68637750800"], [123, None]],
        }

        rows = gw.read_range("tickets", "tickets!A:B")

        values.get.assert_called_once_with(spreadsheetId="sheet-1", range="tickets!A:B")
        assert rows == [["ticket", "status"], ["68637750800"], ["123", ""]]

    def test_read_range_aba_vazia(self, gw, service):
        values = service.spreadsheets.return_value.values.return_value
        values.get.return_value.execute.return_value = {}

        assert gw.read_range("pedidos", "pedidos!A:I") == []

    def test_append_row(self, gw, service):
        values = service.spreadsheets.return_value.values.return_value

        gw.append_row("tickets", "tickets!A:B", ["X", ""])

        values.append.assert_called_once_with(
            spreadsheetId="sheet-1",
            range="tickets!A:B",
            valueInputOption="RAW",
            body={"values": [["X", ""]]},
        )

    def test_update_row_monta_intervalo_a1(self, gw, service):
        values = service.spreadsheets.return_value.values.return_value

        gw.update_row("pedidos", 7, ["c"] * 9)

        kwargs = values.update.call_args.kwargs
        assert kwargs["range"] == "pedidos!A7:I7"
        assert kwargs["valueInputOption"] == "RAW"
        assert kwargs["body"] == {"values": [["c"] * 9]}

    def test_update_no_cabecalho_falha_sem_chamar_api(self, gw, service):
        with pytest.raises(RowIndexInvalidError):
            gw.update_row("tickets", 1, ["a", "b"])

        service.spreadsheets.return_value.values.return_value.update.assert_not_called()

    def test_delete_row_usa_sheet_id(self, gw, service):
        """Deve resolver o sheetId e remover [n-1, n)."""
        sheets = service.spreadsheets.return_value
        sheets.get.return_value.execute.return_value = {
            "sheets": [
                {"properties": {"title": "tickets", "sheetId": 0}},
                {"properties": {"title": "pedidos", "sheetId": 987}},
            ]
        }

        gw.delete_row("pedidos", 5)

        body = sheets.batchUpdate.call_args.kwargs["body"]
        assert body["requests"][0]["deleteDimension"]["range"] == {
            "sheetId": 987,
            "dimension": "ROWS",
            "startIndex": 4,
            "endIndex": 5,
        }

    def test_sheet_id_resolvido_uma_vez(self, gw, service):
        sheets = service.spreadsheets.return_value
        sheets.get.return_value.execute.return_value = {
            "sheets": [{"properties": {"title": "tickets", "sheetId": 0}}]
        }

        gw.delete_row("tickets", 2)
        gw.delete_row("tickets", 2)

        assert sheets.get.call_count == 1
        assert sheets.batchUpdate.call_count == 2

    def test_delete_em_aba_inexistente(self, gw, service):
        sheets = service.spreadsheets.return_value
        sheets.get.return_value.execute.return_value = {"sheets": []}

        with pytest.raises(SheetNotFoundError):
            gw.delete_row("pedidos", 2)

        sheets.batchUpdate.assert_not_called()


class TestGoogleSheetsGatewayErros:
    """Erros da API viram StoreUnavailableError."""

    @pytest.mark.parametrize("erro", [
        _http_error(503),
        RefreshError("token expirado"),
        httplib2.HttpLib2Error("conexão"),
        OSError("timeout"),
    ])
    def test_traducao_de_erros(self, gw, service, erro):
        values = service.spreadsheets.return_value.values.return_value
        values.get.return_value.execute.side_effect = erro

        with pytest.raises(StoreUnavailableError) as exc_info:
            gw.read_range("tickets", "tickets!A:B")

        assert exc_info.value.__cause__ is erro

    def test_http_error_inclui_status(self, gw, service):
        values = service.spreadsheets.return_value.values.return_value
        values.append.return_value.execute.side_effect = _http_error(403)

        with pytest.raises(StoreUnavailableError, match="403"):
            gw.append_row("tickets", "tickets!A:B", ["X", ""])


class TestGoogleSheetsGatewayThreads:
    """Um client por thread."""

    def test_service_por_thread(self):
        factory = Mock(side_effect=lambda: MagicMock())
        gw = GoogleSheetsGateway(service_factory=factory, spreadsheet_id="sheet-1")

        gw.read_range("tickets", "tickets!A:B")
        gw.read_range("tickets", "tickets!A:B")
        assert factory.call_count == 1

        thread = threading.Thread(target=gw.read_range, args=("tickets", "tickets!A:B"))
        thread.start()
        thread.join()

        assert factory.call_count == 2


class TestGoogleSheetsGatewayCredenciais:
    """Falhas ao montar o client também viram StoreUnavailableError."""

    def test_credenciais_invalidas_na_primeira_leitura(self):
        gw = GoogleSheetsGateway(
            service_factory=lambda: build_sheets_service(load_credentials(credentials_json="{}")),
            spreadsheet_id="sheet-1",
        )

        with pytest.raises(StoreUnavailableError):
            gw.read_range("tickets", "tickets!A:B")

    @pytest.mark.parametrize("erro", [ValueError("chave"), FileNotFoundError("k.json")])
    def test_factory_falha_e_tenta_de_novo(self, erro):
        service = MagicMock()
        factory = Mock(side_effect=[erro, service])
        gw = GoogleSheetsGateway(service_factory=factory, spreadsheet_id="sheet-1")

        with pytest.raises(StoreUnavailableError):
            gw.append_row("tickets", "tickets!A:B", ["X", ""])

        gw.append_row("tickets", "tickets!A:B", ["X", ""])

        assert factory.call_count == 2
        service.spreadsheets.return_value.values.return_value.append.assert_called_once()
