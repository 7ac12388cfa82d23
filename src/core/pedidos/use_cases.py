"""
Use Cases (Application Services) do Domínio de Pedidos.

Use Cases implementados:
- ListarPedidosService: Lista com filtros e paginação (cache)
- ObterPedidoService: Obtém pedido pelo uuid (cache)
- CriarPedidoService: Cria pedido e atribui ticket
- AtualizarPedidoService: Alteração parcial
- RemoverPedidoService: Remove pedido

Política de OAB duplicada ("cria mas sinaliza"):
    Se já existe pedido com a mesma OAB (não vazia), o novo pedido é
    gravado mesmo assim, sem ticket e com status "Recusado", e o
    resultado carrega a referência ao pedido anterior. Toda tentativa
    fica registrada; nenhum ticket é consumido.
"""

import logging
from typing import Callable, Optional

from src.core.shared.exceptions import EntityNotFoundError
from src.core.shared.write_lock import WriteLock
from src.core.tickets.allocator import AtribuidorDeTickets

from .dtos import (
    AtualizarPedidoInputDTO,
    ConflitoOabDTO,
    CriarPedidoInputDTO,
    CriarPedidoResultDTO,
    ListarPedidosQueryDTO,
    PaginatedPedidosDTO,
    PedidoOutputDTO,
)
from .entities import PedidoEntity, PedidoStatus, agora_br
from .ports import PedidoRepository

logger = logging.getLogger(__name__)


def _nao_encontrado(uuid: str) -> EntityNotFoundError:
    return EntityNotFoundError(
        f"Pedido {uuid} não encontrado",
        entity_type="Pedido",
        entity_id=uuid,
    )


def _igual_sem_caixa(valor: str, filtro: str) -> bool:
    return valor.lower() == filtro.lower()


class ListarPedidosService:
    """
    Use Case: Listar pedidos com filtros opcionais.

    Filtros são aplicados em memória sobre o snapshot do cache;
    `total` conta os pedidos filtrados antes do corte de página.
    """

    def __init__(self, pedido_repo: PedidoRepository):
        self.pedido_repo = pedido_repo

    def execute(
        self, query: Optional[ListarPedidosQueryDTO] = None
    ) -> PaginatedPedidosDTO:
        query = query or ListarPedidosQueryDTO()
        pedidos = self.pedido_repo.list_all()

        if query.status:
            pedidos = [p for p in pedidos if _igual_sem_caixa(p.status, query.status)]
        if query.ticket:
            pedidos = [p for p in pedidos if _igual_sem_caixa(p.ticket, query.ticket)]
        if query.oab:
            oab = query.oab.strip()
            pedidos = [p for p in pedidos if _igual_sem_caixa(p.oab_normalizada, oab)]

        total = len(pedidos)
        offset = max(query.offset or 0, 0)
        fim = offset + query.limit if query.limit is not None else None
        pagina = pedidos[offset:fim]

        return PaginatedPedidosDTO(
            items=[PedidoOutputDTO.from_entity(p) for p in pagina],
            total=total,
            limit=query.limit,
            offset=offset,
        )


class ObterPedidoService:
    """
    Use Case: Obter pedido pelo uuid.
    """

    def __init__(self, pedido_repo: PedidoRepository):
        self.pedido_repo = pedido_repo

    def execute(self, uuid: str) -> PedidoOutputDTO:
        """
        Raises:
            EntityNotFoundError: Se o pedido não existe
        """
        for pedido in self.pedido_repo.list_all():
            if pedido.uuid == uuid:
                return PedidoOutputDTO.from_entity(pedido)
        raise _nao_encontrado(uuid)


class CriarPedidoService:
    """
    Use Case: Criar pedido com atribuição automática de ticket.

    Fluxo (dentro do lock de pedidos):
    1. Invalidar cache e normalizar a OAB
    2. OAB não vazia: procurar pedido com a mesma OAB (leitura fresca)
    3a. Duplicada: pedido sem ticket, status "Recusado", com conflito
    3b. Nova: atribuir ticket (AtribuidorDeTickets), status "Aprovado"
    4. Acrescentar linha e invalidar cache

    Attributes:
        pedido_repo: Repositório de pedidos
        atribuidor: Atribuidor de tickets (roda dentro deste lock)
        write_lock: Write lock de PEDIDOS
        relogio: Fonte do carimbo de data/hora
    """

    def __init__(
        self,
        pedido_repo: PedidoRepository,
        atribuidor: AtribuidorDeTickets,
        write_lock: WriteLock,
        relogio: Callable[[], str] = agora_br,
    ):
        self.pedido_repo = pedido_repo
        self.atribuidor = atribuidor
        self.write_lock = write_lock
        self.relogio = relogio

    def execute(self, input_dto: CriarPedidoInputDTO) -> CriarPedidoResultDTO:
        """
        Raises:
            NoTicketsAvailableError: Se não há ticket livre (nada é gravado)
            WriteTimeoutError: Se o lock não liberar a tempo
        """
        return self.write_lock.run(lambda: self._criar(input_dto))

    def _criar(self, input_dto: CriarPedidoInputDTO) -> CriarPedidoResultDTO:
        self.pedido_repo.invalidate()
        oab = (input_dto.numero_oab or "").strip()

        existente = self._buscar_por_oab(oab) if oab else None

        if existente is not None:
            ticket = ""
            status = PedidoStatus.RECUSADO
        else:
            ticket = self.atribuidor.atribuir_disponivel()
            status = PedidoStatus.APROVADO

        pedido = PedidoEntity.criar(
            nome_completo=input_dto.nome_completo,
            ticket=ticket,
            status=status,
            numero_oab=oab,
            subsecao=input_dto.subsecao,
            anotacoes=input_dto.anotacoes,
            momento=self.relogio(),
        )

        try:
            self.pedido_repo.append(pedido)
        finally:
            self.pedido_repo.invalidate()

        output = PedidoOutputDTO.from_entity(pedido)
        if existente is not None:
            logger.info(
                f"Pedido {pedido.uuid} recusado: OAB {oab} já possui pedido {existente.uuid}"
            )
            return CriarPedidoResultDTO(
                pedido=output,
                conflito=ConflitoOabDTO(
                    existing_ticket=existente.ticket,
                    existing_date=existente.data_solicitacao,
                ),
            )

        logger.info(f"Pedido {pedido.uuid} aprovado com ticket {ticket}")
        return CriarPedidoResultDTO(pedido=output)

    def _buscar_por_oab(self, oab: str) -> Optional[PedidoEntity]:
        for pedido in self.pedido_repo.list_fresh():
            if pedido.oab_normalizada == oab:
                return pedido
        return None


class AtualizarPedidoService:
    """
    Use Case: Alteração parcial de um pedido.

    Só os campos informados mudam; o uuid nunca muda.
    """

    def __init__(self, pedido_repo: PedidoRepository, write_lock: WriteLock):
        self.pedido_repo = pedido_repo
        self.write_lock = write_lock

    def execute(
        self, uuid: str, input_dto: AtualizarPedidoInputDTO
    ) -> PedidoOutputDTO:
        """
        Raises:
            EntityNotFoundError: Se o pedido não existe
        """
        return self.write_lock.run(lambda: self._atualizar(uuid, input_dto))

    def _atualizar(
        self, uuid: str, input_dto: AtualizarPedidoInputDTO
    ) -> PedidoOutputDTO:
        self.pedido_repo.invalidate()
        localizado = self.pedido_repo.find_row(uuid)
        if localizado is None:
            raise _nao_encontrado(uuid)

        row_number, atual = localizado
        atualizado = atual.com_alteracoes(input_dto.campos_informados())
        try:
            self.pedido_repo.update(row_number, atualizado)
        finally:
            self.pedido_repo.invalidate()

        campos = ", ".join(sorted(input_dto.campos_informados())) or "nenhum campo"
        logger.info(f"Pedido {uuid} atualizado ({campos})")
        return PedidoOutputDTO.from_entity(atualizado)


class RemoverPedidoService:
    """
    Use Case: Remover um pedido.

    O ticket que estava no pedido não é devolvido ao estoque.
    """

    def __init__(self, pedido_repo: PedidoRepository, write_lock: WriteLock):
        self.pedido_repo = pedido_repo
        self.write_lock = write_lock

    def execute(self, uuid: str) -> None:
        """
        Raises:
            EntityNotFoundError: Se o pedido não existe
        """
        self.write_lock.run(lambda: self._remover(uuid))

    def _remover(self, uuid: str) -> None:
        self.pedido_repo.invalidate()
        localizado = self.pedido_repo.find_row(uuid)
        if localizado is None:
            raise _nao_encontrado(uuid)

        row_number, _ = localizado
        try:
            self.pedido_repo.delete(row_number)
        finally:
            self.pedido_repo.invalidate()

        logger.info(f"Pedido {uuid} removido (linha {row_number})")
