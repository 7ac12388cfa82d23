"""
Domínio de Pedidos - Solicitações de Certificação.

Este módulo contém a lógica de negócio dos pedidos:
- Entidade (PedidoEntity, PedidoStatus)
- Use Cases (Listar, Obter, Criar, Atualizar, Remover)
- DTOs e Ports

Características do Domínio:
- uuid gerado pelo servidor e imutável
- Criação atribui ticket dentro do write lock de pedidos
- OAB repetida gera pedido "Recusado" sinalizado como conflito
"""

from .entities import PedidoEntity, PedidoStatus, agora_br
from .dtos import (
    CriarPedidoInputDTO,
    AtualizarPedidoInputDTO,
    ListarPedidosQueryDTO,
    PedidoOutputDTO,
    CriarPedidoResultDTO,
    ConflitoOabDTO,
    PaginatedPedidosDTO,
)
from .ports import PedidoRepository
from .use_cases import (
    ListarPedidosService,
    ObterPedidoService,
    CriarPedidoService,
    AtualizarPedidoService,
    RemoverPedidoService,
)

__all__ = [
    "PedidoEntity",
    "PedidoStatus",
    "agora_br",
    "CriarPedidoInputDTO",
    "AtualizarPedidoInputDTO",
    "ListarPedidosQueryDTO",
    "PedidoOutputDTO",
    "CriarPedidoResultDTO",
    "ConflitoOabDTO",
    "PaginatedPedidosDTO",
    "PedidoRepository",
    "ListarPedidosService",
    "ObterPedidoService",
    "CriarPedidoService",
    "AtualizarPedidoService",
    "RemoverPedidoService",
]
