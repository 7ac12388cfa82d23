"""
Ports (Interfaces) do Domínio de Tickets.

Define o contrato que o Adapter da planilha deve implementar para
leitura e escrita de tickets.

Princípio:
    Core define interfaces → Adapters implementam
    Dependências sempre apontam para o Core

Regra de posição:
    Os métodos `find_*` fazem SEMPRE leitura fresca (sem cache) e
    devolvem o número da linha junto com a entidade. Esse número só
    vale até a próxima escrita: nunca o reutilize entre duas escritas.
"""

from typing import List, Optional, Protocol, Tuple, runtime_checkable

from .entities import TicketEntity


@runtime_checkable
class TicketRepository(Protocol):
    """
    Interface para persistência de Tickets.

    Implementações:
    - SheetsTicketRepository (aba "tickets" via SheetsGateway)
    """

    def list_all(self) -> List[TicketEntity]:
        """Lista todos os tickets (leitura via cache)."""
        ...

    def find_row(self, ticket: str) -> Optional[Tuple[int, TicketEntity]]:
        """
        Localiza a linha do ticket com leitura fresca.

        Returns:
            (número da linha, entidade) ou None se não existir
        """
        ...

    def find_first_available(self) -> Optional[Tuple[int, TicketEntity]]:
        """
        Primeira linha, em ordem, com ticket preenchido e status vazio.

        Returns:
            (número da linha, entidade) ou None se não houver
        """
        ...

    def append(self, ticket: TicketEntity) -> None:
        """Acrescenta uma linha ao final da aba."""
        ...

    def update(self, row_number: int, ticket: TicketEntity) -> None:
        """Sobrescreve a linha inteira."""
        ...

    def delete(self, row_number: int) -> None:
        """Remove a linha (as seguintes sobem uma posição)."""
        ...

    def invalidate(self) -> None:
        """Descarta o cache de leitura."""
        ...
