"""
Data Transfer Objects (DTOs) do Domínio de Tickets.

DTOs são estruturas simples para transportar dados entre camadas,
evitando vazamento das entidades para a camada HTTP.
"""

from dataclasses import dataclass

from .entities import TicketEntity


# =============================================================================
# INPUT DTOs (Entrada)
# =============================================================================

@dataclass(frozen=True)
class CriarTicketInputDTO:
    """
    DTO de entrada para cadastrar ticket.

    Attributes:
        ticket: Valor do novo ticket (já validado pelo form)
    """

    ticket: str


@dataclass(frozen=True)
class RenomearTicketInputDTO:
    """
    DTO de entrada para trocar o valor de um ticket.

    Attributes:
        ticket_atual: Valor atual (identifica a linha)
        novo_ticket: Novo valor
    """

    ticket_atual: str
    novo_ticket: str


# =============================================================================
# OUTPUT DTOs (Saída)
# =============================================================================

@dataclass
class TicketOutputDTO:
    """DTO de saída de um ticket."""

    ticket: str
    status: str

    @classmethod
    def from_entity(cls, entity: TicketEntity) -> "TicketOutputDTO":
        return cls(ticket=entity.ticket, status=entity.status)

    def to_dict(self) -> dict:
        return {"ticket": self.ticket, "status": self.status}
