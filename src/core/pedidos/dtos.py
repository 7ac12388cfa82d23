"""
Data Transfer Objects (DTOs) do Domínio de Pedidos.

Tipos de DTOs:
- Input DTOs: Dados já validados pelos forms
- Output DTOs: Formatados para a resposta HTTP
- Query DTOs: Filtros e paginação de listagem
"""

from dataclasses import dataclass, field, fields
from typing import Dict, List, Optional

from .entities import PedidoEntity


# =============================================================================
# INPUT DTOs (Entrada)
# =============================================================================

@dataclass(frozen=True)
class CriarPedidoInputDTO:
    """
    DTO de entrada para criar pedido.

    uuid, ticket, datas e status são definidos pelo servidor.
    """

    nome_completo: str
    numero_oab: str = ""
    subsecao: str = ""
    anotacoes: str = ""


@dataclass(frozen=True)
class AtualizarPedidoInputDTO:
    """
    DTO de entrada para alteração parcial.

    None = campo ausente (não será alterado). Não existe campo uuid.
    """

    ticket: Optional[str] = None
    numero_oab: Optional[str] = None
    nome_completo: Optional[str] = None
    subsecao: Optional[str] = None
    data_solicitacao: Optional[str] = None
    data_liberacao: Optional[str] = None
    status: Optional[str] = None
    anotacoes: Optional[str] = None

    def campos_informados(self) -> Dict[str, str]:
        """Somente os campos presentes na requisição."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }


# =============================================================================
# QUERY DTOs (Filtros de Busca)
# =============================================================================

@dataclass(frozen=True)
class ListarPedidosQueryDTO:
    """
    Filtros de listagem.

    Attributes:
        status: Igualdade sem diferenciar maiúsculas
        ticket: Igualdade sem diferenciar maiúsculas
        oab: Igualdade com trim e sem diferenciar maiúsculas
        limit: Tamanho da página (None = sem corte)
        offset: Itens a pular
    """

    status: Optional[str] = None
    ticket: Optional[str] = None
    oab: Optional[str] = None
    limit: Optional[int] = None
    offset: int = 0


# =============================================================================
# OUTPUT DTOs (Saída)
# =============================================================================

@dataclass
class PedidoOutputDTO:
    """DTO de saída com todos os campos do pedido."""

    uuid: str
    ticket: str
    numero_oab: str
    nome_completo: str
    subsecao: str
    data_solicitacao: str
    data_liberacao: str
    status: str
    anotacoes: str

    @classmethod
    def from_entity(cls, entity: PedidoEntity) -> "PedidoOutputDTO":
        return cls(**entity.to_dict())

    def to_dict(self) -> Dict[str, str]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass
class ConflitoOabDTO:
    """Referência ao pedido pré-existente com a mesma OAB."""

    existing_ticket: str
    existing_date: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "existing_ticket": self.existing_ticket,
            "existing_date": self.existing_date,
        }


@dataclass
class CriarPedidoResultDTO:
    """
    Resultado da criação.

    Com `conflito` preenchido, o pedido FOI gravado (recusado) e o
    chamador precisa tratar o caso explicitamente.
    """

    pedido: PedidoOutputDTO
    conflito: Optional[ConflitoOabDTO] = None

    @property
    def tem_conflito(self) -> bool:
        return self.conflito is not None


@dataclass
class PaginatedPedidosDTO:
    """
    Página de pedidos.

    Attributes:
        items: Pedidos da página
        total: Total filtrado, antes da paginação
        limit: Tamanho de página aplicado (None = sem corte)
        offset: Deslocamento aplicado
    """

    items: List[PedidoOutputDTO] = field(default_factory=list)
    total: int = 0
    limit: Optional[int] = None
    offset: int = 0

    def to_dict(self) -> dict:
        return {
            "count": len(self.items),
            "total": self.total,
            "limit": self.limit,
            "offset": self.offset,
            "data": [item.to_dict() for item in self.items],
        }
