"""
Domínio de Tickets - Vagas de Certificação.

Este módulo contém a lógica de negócio das vagas disponíveis:
- Entidade (TicketEntity)
- Use Cases (Listar, Obter, Criar, Renomear, Remover)
- Atribuidor (entrega um ticket livre a um pedido)
- DTOs e Ports

Características do Domínio:
- Status vazio = disponível; qualquer texto = atribuído
- Valor do ticket único (checado na criação com leitura fresca)
- Escritas serializadas pelo write lock de tickets
"""

from .entities import TicketEntity, STATUS_ATRIBUIDO
from .dtos import CriarTicketInputDTO, RenomearTicketInputDTO, TicketOutputDTO
from .ports import TicketRepository
from .allocator import AtribuidorDeTickets
from .use_cases import (
    ListarTicketsService,
    ObterTicketService,
    CriarTicketService,
    RenomearTicketService,
    RemoverTicketService,
)

__all__ = [
    "TicketEntity",
    "STATUS_ATRIBUIDO",
    "CriarTicketInputDTO",
    "RenomearTicketInputDTO",
    "TicketOutputDTO",
    "TicketRepository",
    "AtribuidorDeTickets",
    "ListarTicketsService",
    "ObterTicketService",
    "CriarTicketService",
    "RenomearTicketService",
    "RemoverTicketService",
]
