"""
Repositórios sobre a planilha para Tickets e Pedidos.

Implementam as interfaces (Ports) definidas no Core.
São DRIVEN ADAPTERS - acionados pelos Use Cases.

Responsabilidades:
- Ler a aba (via cache ou fresca) e decodificar com o Mapper
- Resolver o número da linha a partir de uma leitura fresca
- Repassar escritas ao SheetsGateway

Princípios:
- Repository não contém lógica de negócio
- Invalidação do cache é decidida pelos Use Cases
- Número de linha nunca é guardado entre chamadas
"""

import logging
from typing import Callable, Generic, List, Optional, Tuple, TypeVar

from src.core.pedidos.entities import PedidoEntity
from src.core.shared.cache import SnapshotCache
from src.core.shared.interfaces import SheetsGateway
from src.core.tickets.entities import TicketEntity

from .mappers import PedidoRowMapper, TicketRowMapper

logger = logging.getLogger(__name__)

T = TypeVar("T")

TICKETS_SHEET = "tickets"
TICKETS_RANGE = f"{TICKETS_SHEET}!A:B"
PEDIDOS_SHEET = "pedidos"
PEDIDOS_RANGE = f"{PEDIDOS_SHEET}!A:I"


class SheetRepository(Generic[T]):
    """
    Base para repositórios de uma aba.

    Subclasses definem `sheet_name`, `a1_range`, `to_entity` e `to_row`.

    Attributes:
        gateway: Acesso à planilha
        cache: Snapshot com TTL deste recurso
    """

    sheet_name: str
    a1_range: str
    to_entity: Callable[[List[str]], Optional[T]]
    to_row: Callable[[T], List[str]]

    def __init__(self, gateway: SheetsGateway, cache: SnapshotCache):
        self.gateway = gateway
        self.cache = cache

    def _read_indexed(self) -> List[Tuple[int, T]]:
        """
        Leitura fresca: (número da linha, entidade), sem o cabeçalho.
        """
        rows = self.gateway.read_range(self.sheet_name, self.a1_range)
        indexed = []
        # índice 0 é o cabeçalho (linha 1)
        for index, row in enumerate(rows[1:], start=2):
            entity = self.to_entity(row)
            if entity is not None:
                indexed.append((index, entity))
        return indexed

    def list_all(self) -> List[T]:
        return self.cache.read(self.list_fresh)

    def list_fresh(self) -> List[T]:
        return [entity for _, entity in self._read_indexed()]

    def _find(self, predicate: Callable[[T], bool]) -> Optional[Tuple[int, T]]:
        for row_number, entity in self._read_indexed():
            if predicate(entity):
                return row_number, entity
        return None

    def append(self, entity: T) -> None:
        self.gateway.append_row(self.sheet_name, self.a1_range, self.to_row(entity))

    def update(self, row_number: int, entity: T) -> None:
        self.gateway.update_row(self.sheet_name, row_number, self.to_row(entity))

    def delete(self, row_number: int) -> None:
        self.gateway.delete_row(self.sheet_name, row_number)

    def invalidate(self) -> None:
        self.cache.invalidate()


class SheetsTicketRepository(SheetRepository[TicketEntity]):
    """
    Implementação do TicketRepository sobre a aba "tickets".

    Example:
        repo = SheetsTicketRepository(gateway, SnapshotCache("tickets"))
        repo.find_first_available()
    """

    sheet_name = TICKETS_SHEET
    a1_range = TICKETS_RANGE
    to_entity = staticmethod(TicketRowMapper.to_entity)
    to_row = staticmethod(TicketRowMapper.to_row)

    def find_row(self, ticket: str) -> Optional[Tuple[int, TicketEntity]]:
        return self._find(lambda entity: entity.ticket == ticket)

    def find_first_available(self) -> Optional[Tuple[int, TicketEntity]]:
        return self._find(lambda entity: entity.esta_disponivel)


class SheetsPedidoRepository(SheetRepository[PedidoEntity]):
    """
    Implementação do PedidoRepository sobre a aba "pedidos".
    """

    sheet_name = PEDIDOS_SHEET
    a1_range = PEDIDOS_RANGE
    to_entity = staticmethod(PedidoRowMapper.to_entity)
    to_row = staticmethod(PedidoRowMapper.to_row)

    def find_row(self, uuid: str) -> Optional[Tuple[int, PedidoEntity]]:
        return self._find(lambda entity: entity.uuid == uuid)
