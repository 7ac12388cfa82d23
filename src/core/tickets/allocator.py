"""
Atribuidor de Tickets.

Entrega um ticket disponível a exatamente um pedido.

PRÉ-CONDIÇÃO: chamar SOMENTE de dentro do write lock de PEDIDOS.
Como só uma criação de pedido segura esse lock por vez, a sequência
"procurar → marcar" nunca é intercalada com outra atribuição, e o
mesmo ticket nunca sai duas vezes.

Limite aceito: uma alteração direta de ticket (PUT /tickets) passa
pelo lock de tickets, não pelo de pedidos, e não é serializada com
a atribuição.
"""

import logging

from src.core.shared.exceptions import NoTicketsAvailableError

from .ports import TicketRepository

logger = logging.getLogger(__name__)


class AtribuidorDeTickets:
    """
    Procura o primeiro ticket livre e o marca como "Atribuído".

    Example:
        atribuidor = AtribuidorDeTickets(ticket_repo)
        pedidos_lock.run(lambda: atribuidor.atribuir_disponivel())
    """

    def __init__(self, ticket_repo: TicketRepository):
        self.ticket_repo = ticket_repo

    def atribuir_disponivel(self) -> str:
        """
        Marca e retorna o primeiro ticket disponível.

        Returns:
            Valor do ticket atribuído

        Raises:
            NoTicketsAvailableError: Se nenhum ticket estiver livre
        """
        try:
            localizado = self.ticket_repo.find_first_available()
            if localizado is None:
                raise NoTicketsAvailableError()

            row_number, ticket = localizado
            ticket.marcar_atribuido()
            self.ticket_repo.update(row_number, ticket)
        finally:
            self.ticket_repo.invalidate()

        logger.info(f"Ticket {ticket.ticket} atribuído (linha {row_number})")
        return ticket.ticket
