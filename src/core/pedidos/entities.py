"""
Entidades do Domínio de Pedidos.

Um pedido é uma solicitação de certificação, opcionalmente ligada a
um ticket. Ocupa exatamente uma linha da aba "pedidos", na ordem:

    uuid | ticket | numero_oab | nome_completo | subsecao |
    data_solicitacao | data_liberacao | status | anotacoes

Regras de Negócio Encapsuladas:
- `uuid` é gerado na criação e nunca muda
- `numero_oab` é normalizado (trim) na criação
- Alteração parcial só toca os campos informados
"""

import uuid as uuid_lib
from dataclasses import dataclass, field, fields, replace
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional
from zoneinfo import ZoneInfo

FUSO_HORARIO = ZoneInfo("America/Sao_Paulo")
FORMATO_DATA = "%Y-%m-%d %H:%M:%S"


class PedidoStatus(Enum):
    """
    Valores de status que o próprio sistema grava.

    O campo continua texto livre: alterações manuais podem gravar
    qualquer valor, e listagens filtram por comparação textual.
    """

    APROVADO = "Aprovado"
    RECUSADO = "Recusado"


def agora_br(agora: Optional[datetime] = None) -> str:
    """
    Data/hora atual no fuso de São Paulo, "YYYY-MM-DD HH:MM:SS".

    Args:
        agora: Instante com timezone (default: agora)
    """
    agora = agora or datetime.now(tz=FUSO_HORARIO)
    return agora.astimezone(FUSO_HORARIO).strftime(FORMATO_DATA)


@dataclass
class PedidoEntity:
    """
    Entidade de Domínio: Pedido.

    Attributes:
        uuid: Identificador único e imutável
        ticket: Ticket atribuído (vazio se recusado/sem ticket)
        numero_oab: Número de inscrição (opcional)
        nome_completo: Nome do solicitante
        subsecao: Subseção (opcional)
        data_solicitacao: Momento da solicitação
        data_liberacao: Momento da liberação
        status: Texto livre ("Aprovado", "Recusado", ...)
        anotacoes: Observações livres
    """

    uuid: str = field(default_factory=lambda: str(uuid_lib.uuid4()))
    ticket: str = ""
    numero_oab: str = ""
    nome_completo: str = ""
    subsecao: str = ""
    data_solicitacao: str = ""
    data_liberacao: str = ""
    status: str = ""
    anotacoes: str = ""

    @classmethod
    def criar(
        cls,
        nome_completo: str,
        ticket: str,
        status: PedidoStatus,
        numero_oab: str = "",
        subsecao: str = "",
        anotacoes: str = "",
        momento: Optional[str] = None,
    ) -> "PedidoEntity":
        """
        Factory method para novo pedido.

        Gera uuid e carimba as duas datas com o mesmo instante.
        """
        momento = momento or agora_br()
        return cls(
            ticket=ticket,
            numero_oab=(numero_oab or "").strip(),
            nome_completo=nome_completo,
            subsecao=subsecao or "",
            data_solicitacao=momento,
            data_liberacao=momento,
            status=status.value,
            anotacoes=anotacoes or "",
        )

    @property
    def oab_normalizada(self) -> str:
        return self.numero_oab.strip()

    def com_alteracoes(self, alteracoes: Dict[str, Any]) -> "PedidoEntity":
        """
        Retorna cópia com os campos informados sobrescritos.

        Campos com valor None são tratados como ausentes;
        `uuid` é ignorado.
        """
        permitidos = {f.name for f in fields(self)} - {"uuid"}
        valores = {
            nome: valor
            for nome, valor in alteracoes.items()
            if nome in permitidos and valor is not None
        }
        return replace(self, **valores)

    def to_dict(self) -> Dict[str, str]:
        return {f.name: getattr(self, f.name) for f in fields(self)}
