"""
Mappers para conversão entre Entities (Core) e linhas da planilha.

Responsabilidades:
- Converter linha → Entity (leitura)
- Converter Entity → linha (escrita)

Princípios:
- Mappers são stateless
- Não contêm lógica de negócio
- A API omite células vazias no fim da linha: toda leitura completa
  as colunas faltantes com ""
"""

from typing import List, Optional

from src.core.pedidos.entities import PedidoEntity
from src.core.tickets.entities import TicketEntity

Row = List[str]


def _cell(row: Row, index: int) -> str:
    return row[index] if index < len(row) and row[index] is not None else ""


class TicketRowMapper:
    """
    Colunas da aba "tickets": ticket | status
    """

    COLUMNS = ("ticket", "status")

    @staticmethod
    def to_entity(row: Row) -> Optional[TicketEntity]:
        """
        Linha sem valor de ticket é ignorada (retorna None).
        """
        ticket = _cell(row, 0)
        if not ticket:
            return None
        return TicketEntity(ticket=ticket, status=_cell(row, 1))

    @staticmethod
    def to_row(entity: TicketEntity) -> Row:
        return [entity.ticket, entity.status]


class PedidoRowMapper:
    """
    Colunas da aba "pedidos", na ordem da planilha.
    """

    COLUMNS = (
        "uuid",
        "ticket",
        "numero_oab",
        "nome_completo",
        "subsecao",
        "data_solicitacao",
        "data_liberacao",
        "status",
        "anotacoes",
    )

    @classmethod
    def to_entity(cls, row: Row) -> Optional[PedidoEntity]:
        """Linha totalmente vazia é ignorada (retorna None)."""
        if not any(row):
            return None
        return PedidoEntity(
            **{name: _cell(row, i) for i, name in enumerate(cls.COLUMNS)}
        )

    @classmethod
    def to_row(cls, entity: PedidoEntity) -> Row:
        return [getattr(entity, name) for name in cls.COLUMNS]
