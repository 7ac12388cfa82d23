"""
Adapter da Google Sheets API v4.

Implementa o SheetsGateway definido no Core. É um DRIVEN ADAPTER:
traduz pedidos de leitura/escrita por aba e intervalo A1 em chamadas
`spreadsheets.values.get/append/update` e `spreadsheets.batchUpdate`.

Responsabilidades:
- Carregar credenciais de service account (JSON em env ou arquivo)
- Traduzir erros de transporte/autenticação em StoreUnavailableError
- Resolver (uma vez por aba) o sheetId numérico usado na remoção

Threads:
    Objetos do googleapiclient não são thread-safe (httplib2). Cada
    thread constrói o seu próprio service a partir da mesma factory.
"""

import json
import logging
import threading
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import httplib2
from google.auth.exceptions import GoogleAuthError
from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from src.core.shared.exceptions import (
    RowIndexInvalidError,
    SheetNotFoundError,
    StoreUnavailableError,
)

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]


def load_credentials(
    credentials_json: Optional[str] = None,
    credentials_file: Optional[str] = None,
) -> service_account.Credentials:
    """
    Carrega credenciais de service account.

    Ordem de precedência:
    1. GOOGLE_CREDENTIALS_JSON (string JSON, ambientes serverless)
    2. GOOGLE_APPLICATION_CREDENTIALS (caminho do arquivo de chave)

    Raises:
        StoreUnavailableError: Se nenhuma das duas estiver definida ou se
            a chave for inválida/inacessível
    """
    try:
        if credentials_json:
            return service_account.Credentials.from_service_account_info(
                json.loads(credentials_json), scopes=SCOPES
            )

        if credentials_file:
            return service_account.Credentials.from_service_account_file(
                str(Path(credentials_file).resolve()), scopes=SCOPES
            )
    except (GoogleAuthError, ValueError, OSError) as e:
        logger.error(f"Credenciais da service account inválidas: {e}")
        raise StoreUnavailableError(
            f"Credenciais da service account inválidas: {e}"
        ) from e

    raise StoreUnavailableError(
        "GOOGLE_APPLICATION_CREDENTIALS ou GOOGLE_CREDENTIALS_JSON devem estar definidos"
    )


def build_sheets_service(credentials: service_account.Credentials) -> Any:
    """Cria um client Sheets v4 (um por thread)."""
    return build("sheets", "v4", credentials=credentials, cache_discovery=False)


def column_letter(index: int) -> str:
    """
    Converte índice 1-based de coluna em letra A1.

    Example:
        column_letter(1) == "A"; column_letter(9) == "I"; column_letter(27) == "AA"
    """
    letters = ""
    while index > 0:
        index, rest = divmod(index - 1, 26)
        letters = chr(ord("A") + rest) + letters
    return letters


class GoogleSheetsGateway:
    """
    SheetsGateway sobre uma planilha Google.

    Attributes:
        spreadsheet_id: ID da planilha alvo

    Example:
        credentials = load_credentials(credentials_file="service-account.json")
        gateway = GoogleSheetsGateway(
            service_factory=lambda: build_sheets_service(credentials),
            spreadsheet_id="1AbC...",
        )
        rows = gateway.read_range("tickets", "tickets!A:B")
    """

    def __init__(self, service_factory: Callable[[], Any], spreadsheet_id: str):
        if not spreadsheet_id:
            raise StoreUnavailableError("SPREADSHEET_ID não está definido")
        self.spreadsheet_id = spreadsheet_id
        self._service_factory = service_factory
        self._local = threading.local()
        self._sheet_ids: Dict[str, int] = {}
        self._sheet_ids_lock = threading.Lock()

    @property
    def _service(self) -> Any:
        service = getattr(self._local, "service", None)
        if service is None:
            try:
                service = self._service_factory()
            except (GoogleAuthError, httplib2.HttpLib2Error, ValueError, OSError) as e:
                logger.error(f"Sheets: falha ao criar o client: {e}")
                raise StoreUnavailableError(
                    f"Falha ao conectar na planilha: {e}"
                ) from e
            self._local.service = service
        return service

    def _execute(self, request: Any, operation: str) -> Dict[str, Any]:
        try:
            return request.execute() or {}
        except HttpError as e:
            logger.error(f"Sheets {operation} falhou: HTTP {e.resp.status}")
            raise StoreUnavailableError(
                f"Falha na planilha ({operation}): HTTP {e.resp.status}"
            ) from e
        except (GoogleAuthError, httplib2.HttpLib2Error, OSError) as e:
            logger.error(f"Sheets {operation} falhou: {e}")
            raise StoreUnavailableError(
                f"Falha na planilha ({operation}): {e}"
            ) from e

    # =========================================================================
    # SheetsGateway
    # =========================================================================

    def read_range(self, sheet_name: str, a1_range: str) -> List[List[str]]:
        logger.debug(f"Sheets get {a1_range}")
        request = self._service.spreadsheets().values().get(
            spreadsheetId=self.spreadsheet_id,
            range=a1_range,
        )
        response = self._execute(request, "get")
        return [
            ["" if cell is None else str(cell) for cell in row]
            for row in response.get("values", [])
        ]

    def append_row(self, sheet_name: str, a1_range: str, row: List[str]) -> None:
        logger.debug(f"Sheets append {a1_range}")
        request = self._service.spreadsheets().values().append(
            spreadsheetId=self.spreadsheet_id,
            range=a1_range,
            valueInputOption="RAW",
            body={"values": [list(row)]},
        )
        self._execute(request, "append")

    def update_row(self, sheet_name: str, row_number: int, row: List[str]) -> None:
        if row_number < 2:
            raise RowIndexInvalidError(sheet_name, row_number)

        a1_range = f"{sheet_name}!A{row_number}:{column_letter(len(row))}{row_number}"
        logger.debug(f"Sheets update {a1_range}")
        request = self._service.spreadsheets().values().update(
            spreadsheetId=self.spreadsheet_id,
            range=a1_range,
            valueInputOption="RAW",
            body={"values": [list(row)]},
        )
        self._execute(request, "update")

    def delete_row(self, sheet_name: str, row_number: int) -> None:
        if row_number < 2:
            raise RowIndexInvalidError(sheet_name, row_number)

        sheet_id = self._sheet_id(sheet_name)
        logger.debug(f"Sheets deleteDimension {sheet_name} linha {row_number}")
        request = self._service.spreadsheets().batchUpdate(
            spreadsheetId=self.spreadsheet_id,
            body={
                "requests": [
                    {
                        "deleteDimension": {
                            "range": {
                                "sheetId": sheet_id,
                                "dimension": "ROWS",
                                "startIndex": row_number - 1,
                                "endIndex": row_number,
                            }
                        }
                    }
                ]
            },
        )
        self._execute(request, "batchUpdate")

    def _sheet_id(self, sheet_name: str) -> int:
        """sheetId numérico da aba; não muda durante a vida da aba."""
        with self._sheet_ids_lock:
            if sheet_name in self._sheet_ids:
                return self._sheet_ids[sheet_name]

        request = self._service.spreadsheets().get(
            spreadsheetId=self.spreadsheet_id,
            fields="sheets.properties",
        )
        response = self._execute(request, "get metadata")

        for sheet in response.get("sheets", []):
            properties = sheet.get("properties", {})
            if properties.get("title") == sheet_name and "sheetId" in properties:
                with self._sheet_ids_lock:
                    self._sheet_ids[sheet_name] = properties["sheetId"]
                return properties["sheetId"]

        raise SheetNotFoundError(sheet_name)
