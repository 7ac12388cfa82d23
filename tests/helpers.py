"""
Helpers compartilhados pelos testes (montagem de planilhas em memória).
"""

import base64
from typing import Iterable, List, Optional, Sequence

from src.adapters.sheets.mappers import PedidoRowMapper, TicketRowMapper
from src.adapters.sheets.repositories import PEDIDOS_SHEET, TICKETS_SHEET
from src.core.shared.interfaces import InMemorySheetsGateway

MOMENTO_FIXO = "2026-01-15 10:00:00"

API_USER = "admin"
API_PASSWORD = "s3cret"


def basic_auth(user: str = API_USER, password: str = API_PASSWORD) -> str:
    """Valor do header Authorization para HTTP Basic."""
    token = base64.b64encode(f"{user}:{password}".encode()).decode()
    return f"Basic {token}"


def planilha(
    tickets: Iterable[Sequence[str]] = (),
    pedidos: Iterable[Sequence[str]] = (),
) -> dict:
    """Abas com cabeçalho + linhas informadas."""
    return {
        TICKETS_SHEET: [list(TicketRowMapper.COLUMNS)] + [list(t) for t in tickets],
        PEDIDOS_SHEET: [list(PedidoRowMapper.COLUMNS)] + [list(p) for p in pedidos],
    }


def linha_pedido(
    uuid: str,
    ticket: str = "",
    numero_oab: str = "",
    nome_completo: str = "Fulano",
    status: str = "Aprovado",
    data: str = MOMENTO_FIXO,
) -> List[str]:
    return [uuid, ticket, numero_oab, nome_completo, "", data, data, status, ""]


def mutacoes(gateway: InMemorySheetsGateway, sheet_name: Optional[str] = None):
    """Journal de mutações, opcionalmente filtrado por aba."""
    return [c for c in gateway.calls if sheet_name is None or c[1] == sheet_name]
