"""
Ports (Interfaces) do Domínio de Pedidos.

Mesma regra de posição do domínio de tickets: `find_row` e
`list_fresh` leem a planilha sem cache, e o número de linha
devolvido só vale até a próxima escrita.
"""

from typing import List, Optional, Protocol, Tuple, runtime_checkable

from .entities import PedidoEntity


@runtime_checkable
class PedidoRepository(Protocol):
    """
    Interface para persistência de Pedidos.

    Implementações:
    - SheetsPedidoRepository (aba "pedidos" via SheetsGateway)
    """

    def list_all(self) -> List[PedidoEntity]:
        """Lista todos os pedidos (leitura via cache)."""
        ...

    def list_fresh(self) -> List[PedidoEntity]:
        """Lista todos os pedidos com leitura fresca."""
        ...

    def find_row(self, uuid: str) -> Optional[Tuple[int, PedidoEntity]]:
        """
        Localiza o pedido pelo uuid com leitura fresca.

        Returns:
            (número da linha, entidade) ou None
        """
        ...

    def append(self, pedido: PedidoEntity) -> None:
        ...

    def update(self, row_number: int, pedido: PedidoEntity) -> None:
        ...

    def delete(self, row_number: int) -> None:
        ...

    def invalidate(self) -> None:
        ...
