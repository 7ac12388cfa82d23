"""
Entidades do Domínio de Tickets.

Um ticket é uma vaga de certificação identificada por um valor opaco
(ex: número de 11 dígitos). O status é texto livre: vazio significa
"disponível"; qualquer valor não vazio significa "já atribuído".

Regras de Negócio Encapsuladas:
- Ticket disponível = valor preenchido e status vazio
- A atribuição grava o marcador "Atribuído" no status
- A ligação com o pedido é implícita: o valor do ticket fica na linha do pedido
"""

from dataclasses import dataclass

from src.core.shared.exceptions import BusinessRuleViolationError

STATUS_DISPONIVEL = ""
STATUS_ATRIBUIDO = "Atribuído"


@dataclass
class TicketEntity:
    """
    Entidade de Domínio: Ticket.

    Invariantes:
    - `ticket` é único entre todas as linhas (checado na criação)
    - Um ticket atribuído nunca volta a ser entregue pelo atribuidor

    Attributes:
        ticket: Identificador opaco do ticket
        status: Texto livre; vazio = disponível
    """

    ticket: str
    status: str = STATUS_DISPONIVEL

    @classmethod
    def criar(cls, ticket: str) -> "TicketEntity":
        """Novo ticket, sempre disponível."""
        return cls(ticket=ticket, status=STATUS_DISPONIVEL)

    @property
    def esta_disponivel(self) -> bool:
        return bool(self.ticket) and not self.status

    def marcar_atribuido(self) -> None:
        """
        Marca o ticket como entregue a um pedido.

        Raises:
            BusinessRuleViolationError: Se já estava atribuído
        """
        if not self.esta_disponivel:
            raise BusinessRuleViolationError(
                f"Ticket {self.ticket} não está disponível",
                rule="ticket_ja_atribuido",
            )
        self.status = STATUS_ATRIBUIDO

    def renomear(self, novo_ticket: str) -> "TicketEntity":
        """Mesmo status, novo valor."""
        return TicketEntity(ticket=novo_ticket, status=self.status)

    def to_dict(self) -> dict:
        return {"ticket": self.ticket, "status": self.status}
