"""
Dependency Injection Container.

Configura e gerencia todas as dependências da aplicação.
Usa dependency-injector para lazy-loading e injeção automática.

Estado por recurso (tickets, pedidos):
- Cache de leitura: um snapshot por processo
- Write lock: um worker por processo
- Repositório: um por processo

Padrões:
- ThreadSafeSingleton: Uma instância para toda app (gateway, caches,
  locks, repositórios); requests concorrentes nunca criam duas
- Factory: Nova instância por chamada (use cases)

Garantias de escrita valem por processo: com várias réplicas cada
uma tem o seu próprio lock.
"""

import threading
from typing import Any, Dict, Optional

from dependency_injector import containers, providers

from src.adapters.sheets.gateway import (
    GoogleSheetsGateway,
    build_sheets_service,
    load_credentials,
)
from src.adapters.sheets.repositories import (
    SheetsPedidoRepository,
    SheetsTicketRepository,
)
from src.core.pedidos.use_cases import (
    AtualizarPedidoService,
    CriarPedidoService,
    ListarPedidosService,
    ObterPedidoService,
    RemoverPedidoService,
)
from src.core.shared.cache import SnapshotCache
from src.core.shared.write_lock import WriteLock
from src.core.tickets.allocator import AtribuidorDeTickets
from src.core.tickets.use_cases import (
    CriarTicketService,
    ListarTicketsService,
    ObterTicketService,
    RemoverTicketService,
    RenomearTicketService,
)


class Container(containers.DeclarativeContainer):
    """
    Container principal de Dependency Injection.

    Organização:
    - Configuration: Valores vindos do Django settings
    - Infrastructure: Credenciais, client Sheets, gateway
    - Estado por recurso: caches e write locks
    - Repositories: Persistência na planilha
    - Services: Use Cases

    Example:
        from src.config.container import get_container

        container = get_container()
        service = container.criar_pedido_service()
        result = service.execute(input_dto)
    """

    # =========================================================================
    # Configuration
    # =========================================================================

    config = providers.Configuration()

    # =========================================================================
    # Infrastructure (Lazy - criado sob demanda)
    # =========================================================================

    credentials = providers.ThreadSafeSingleton(
        load_credentials,
        credentials_json=config.google_credentials_json,
        credentials_file=config.google_application_credentials,
    )

    # Um client por thread (ver GoogleSheetsGateway)
    sheets_service = providers.Factory(
        build_sheets_service,
        credentials=credentials,
    )

    sheets_gateway = providers.ThreadSafeSingleton(
        GoogleSheetsGateway,
        service_factory=sheets_service.provider,
        spreadsheet_id=config.spreadsheet_id,
    )

    # =========================================================================
    # Estado por recurso
    # =========================================================================

    tickets_cache = providers.ThreadSafeSingleton(
        SnapshotCache,
        name="tickets",
        ttl=config.cache_ttl_seconds,
    )

    pedidos_cache = providers.ThreadSafeSingleton(
        SnapshotCache,
        name="pedidos",
        ttl=config.cache_ttl_seconds,
    )

    tickets_write_lock = providers.ThreadSafeSingleton(
        WriteLock,
        resource="tickets",
        timeout=config.write_lock_timeout_seconds,
    )

    pedidos_write_lock = providers.ThreadSafeSingleton(
        WriteLock,
        resource="pedidos",
        timeout=config.write_lock_timeout_seconds,
    )

    # =========================================================================
    # Repositories (Singleton - uma instância por app)
    # =========================================================================

    ticket_repository = providers.ThreadSafeSingleton(
        SheetsTicketRepository,
        gateway=sheets_gateway,
        cache=tickets_cache,
    )

    pedido_repository = providers.ThreadSafeSingleton(
        SheetsPedidoRepository,
        gateway=sheets_gateway,
        cache=pedidos_cache,
    )

    atribuidor_de_tickets = providers.Factory(
        AtribuidorDeTickets,
        ticket_repo=ticket_repository,
    )

    # =========================================================================
    # Services / Use Cases - Tickets
    # =========================================================================

    listar_tickets_service = providers.Factory(
        ListarTicketsService,
        ticket_repo=ticket_repository,
    )

    obter_ticket_service = providers.Factory(
        ObterTicketService,
        ticket_repo=ticket_repository,
    )

    criar_ticket_service = providers.Factory(
        CriarTicketService,
        ticket_repo=ticket_repository,
        write_lock=tickets_write_lock,
    )

    renomear_ticket_service = providers.Factory(
        RenomearTicketService,
        ticket_repo=ticket_repository,
        write_lock=tickets_write_lock,
    )

    remover_ticket_service = providers.Factory(
        RemoverTicketService,
        ticket_repo=ticket_repository,
        write_lock=tickets_write_lock,
    )

    # =========================================================================
    # Services / Use Cases - Pedidos
    # =========================================================================

    listar_pedidos_service = providers.Factory(
        ListarPedidosService,
        pedido_repo=pedido_repository,
    )

    obter_pedido_service = providers.Factory(
        ObterPedidoService,
        pedido_repo=pedido_repository,
    )

    # A atribuição de ticket roda dentro do lock de PEDIDOS
    criar_pedido_service = providers.Factory(
        CriarPedidoService,
        pedido_repo=pedido_repository,
        atribuidor=atribuidor_de_tickets,
        write_lock=pedidos_write_lock,
    )

    atualizar_pedido_service = providers.Factory(
        AtualizarPedidoService,
        pedido_repo=pedido_repository,
        write_lock=pedidos_write_lock,
    )

    remover_pedido_service = providers.Factory(
        RemoverPedidoService,
        pedido_repo=pedido_repository,
        write_lock=pedidos_write_lock,
    )


def settings_config() -> Dict[str, Any]:
    """Lê do Django settings os valores usados pelo container."""
    from django.conf import settings

    return {
        "spreadsheet_id": getattr(settings, "SPREADSHEET_ID", ""),
        "google_credentials_json": getattr(settings, "GOOGLE_CREDENTIALS_JSON", ""),
        "google_application_credentials": getattr(
            settings, "GOOGLE_APPLICATION_CREDENTIALS", ""
        ),
        "cache_ttl_seconds": getattr(settings, "SHEETS_CACHE_TTL_SECONDS", 300.0),
        "write_lock_timeout_seconds": getattr(
            settings, "WRITE_LOCK_TIMEOUT_SECONDS", 30.0
        ),
    }


# =============================================================================
# Container Global (Singleton)
# =============================================================================

_container: Optional[Container] = None
_container_lock = threading.Lock()


def get_container() -> Container:
    """
    Retorna instância global do container.

    Cria se não existir (lazy initialization).

    Returns:
        Container configurado
    """
    global _container

    with _container_lock:
        if _container is None:
            _container = Container()
            _container.config.from_dict(settings_config())
        return _container


def reset_container() -> None:
    """
    Reset do container (para testes).

    Encerra os workers dos write locks e descarta caches.
    """
    global _container

    with _container_lock:
        if _container is not None:
            _container.tickets_write_lock().shutdown()
            _container.pedidos_write_lock().shutdown()
        _container = None
