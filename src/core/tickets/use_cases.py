"""
Use Cases (Application Services) do Domínio de Tickets.

Use Cases implementados:
- ListarTicketsService: Lista tickets (cache)
- ObterTicketService: Obtém um ticket (cache)
- CriarTicketService: Cadastra ticket
- RenomearTicketService: Troca o valor de um ticket
- RemoverTicketService: Remove ticket

Disciplina de escrita:
- Toda escrita roda dentro do write lock de tickets
- O cache é invalidado antes de calcular e depois de escrever
  (também quando a escrita falha)
- A linha é resolvida com leitura fresca imediatamente antes da escrita
"""

import logging
from typing import List

from src.core.shared.exceptions import ConflictError, EntityNotFoundError
from src.core.shared.write_lock import WriteLock

from .dtos import CriarTicketInputDTO, RenomearTicketInputDTO, TicketOutputDTO
from .entities import TicketEntity
from .ports import TicketRepository

logger = logging.getLogger(__name__)


def _nao_encontrado(ticket: str) -> EntityNotFoundError:
    return EntityNotFoundError(
        f"Ticket {ticket} não encontrado",
        entity_type="Ticket",
        entity_id=ticket,
    )


class ListarTicketsService:
    """
    Use Case: Listar tickets.

    Não usa o write lock pois é operação de leitura.
    """

    def __init__(self, ticket_repo: TicketRepository):
        self.ticket_repo = ticket_repo

    def execute(self) -> List[TicketOutputDTO]:
        return [TicketOutputDTO.from_entity(t) for t in self.ticket_repo.list_all()]


class ObterTicketService:
    """
    Use Case: Obter um ticket pelo valor.
    """

    def __init__(self, ticket_repo: TicketRepository):
        self.ticket_repo = ticket_repo

    def execute(self, ticket: str) -> TicketOutputDTO:
        """
        Raises:
            EntityNotFoundError: Se ticket não existe
        """
        for entity in self.ticket_repo.list_all():
            if entity.ticket == ticket:
                return TicketOutputDTO.from_entity(entity)
        raise _nao_encontrado(ticket)


class CriarTicketService:
    """
    Use Case: Cadastrar um novo ticket.

    Fluxo (dentro do lock):
    1. Invalidar cache
    2. Checar duplicidade com leitura fresca
    3. Acrescentar linha [ticket, ""]
    4. Invalidar cache

    Example:
        service = CriarTicketService(ticket_repo, tickets_lock)
        output = service.execute(CriarTicketInputDTO(ticket="68637750800"))
    """

    def __init__(self, ticket_repo: TicketRepository, write_lock: WriteLock):
        self.ticket_repo = ticket_repo
        self.write_lock = write_lock

    def execute(self, input_dto: CriarTicketInputDTO) -> TicketOutputDTO:
        """
        Raises:
            ConflictError: Se o ticket já existe
            WriteTimeoutError: Se o lock não liberar a tempo
        """
        return self.write_lock.run(lambda: self._criar(input_dto))

    def _criar(self, input_dto: CriarTicketInputDTO) -> TicketOutputDTO:
        self.ticket_repo.invalidate()
        if self.ticket_repo.find_row(input_dto.ticket) is not None:
            raise ConflictError(
                "Ticket já existe", details={"ticket": input_dto.ticket}
            )

        ticket = TicketEntity.criar(input_dto.ticket)
        try:
            self.ticket_repo.append(ticket)
        finally:
            self.ticket_repo.invalidate()

        logger.info(f"Ticket {ticket.ticket} cadastrado")
        return TicketOutputDTO.from_entity(ticket)


class RenomearTicketService:
    """
    Use Case: Trocar o valor de um ticket, mantendo o status.
    """

    def __init__(self, ticket_repo: TicketRepository, write_lock: WriteLock):
        self.ticket_repo = ticket_repo
        self.write_lock = write_lock

    def execute(self, input_dto: RenomearTicketInputDTO) -> TicketOutputDTO:
        """
        Raises:
            EntityNotFoundError: Se o ticket atual não existe
            ConflictError: Se o novo valor já pertence a outro ticket
        """
        return self.write_lock.run(lambda: self._renomear(input_dto))

    def _renomear(self, input_dto: RenomearTicketInputDTO) -> TicketOutputDTO:
        self.ticket_repo.invalidate()
        localizado = self.ticket_repo.find_row(input_dto.ticket_atual)
        if localizado is None:
            raise _nao_encontrado(input_dto.ticket_atual)

        if (
            input_dto.novo_ticket != input_dto.ticket_atual
            and self.ticket_repo.find_row(input_dto.novo_ticket) is not None
        ):
            raise ConflictError(
                "Ticket já existe", details={"ticket": input_dto.novo_ticket}
            )

        row_number, atual = localizado
        renomeado = atual.renomear(input_dto.novo_ticket)
        try:
            self.ticket_repo.update(row_number, renomeado)
        finally:
            self.ticket_repo.invalidate()

        logger.info(f"Ticket {input_dto.ticket_atual} renomeado para {renomeado.ticket}")
        return TicketOutputDTO.from_entity(renomeado)


class RemoverTicketService:
    """
    Use Case: Remover um ticket.
    """

    def __init__(self, ticket_repo: TicketRepository, write_lock: WriteLock):
        self.ticket_repo = ticket_repo
        self.write_lock = write_lock

    def execute(self, ticket: str) -> None:
        """
        Raises:
            EntityNotFoundError: Se o ticket não existe
        """
        self.write_lock.run(lambda: self._remover(ticket))

    def _remover(self, ticket: str) -> None:
        self.ticket_repo.invalidate()
        localizado = self.ticket_repo.find_row(ticket)
        if localizado is None:
            raise _nao_encontrado(ticket)

        row_number, _ = localizado
        try:
            self.ticket_repo.delete(row_number)
        finally:
            self.ticket_repo.invalidate()

        logger.info(f"Ticket {ticket} removido (linha {row_number})")
