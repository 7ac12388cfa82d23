"""
Configurações globais do Pytest para a Certificação API.

Este arquivo é carregado automaticamente pelo pytest e
fornece fixtures e configurações compartilhadas.
"""

import pytest

from src.adapters.sheets.repositories import (
    SheetsPedidoRepository,
    SheetsTicketRepository,
)
from src.core.shared.cache import SnapshotCache
from src.core.shared.interfaces import InMemorySheetsGateway
from src.core.shared.write_lock import WriteLock

from tests.helpers import API_PASSWORD, API_USER, MOMENTO_FIXO, planilha


def pytest_configure(config):
    """Configura Django antes dos testes (sem banco de dados)."""
    import django
    from django.conf import settings

    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )

    if not settings.configured:
        settings.configure(
            DEBUG=False,
            SECRET_KEY='test-secret-key',
            ALLOWED_HOSTS=['testserver', 'localhost'],
            INSTALLED_APPS=[
                'corsheaders',
                'src.adapters.django_app.tickets',
                'src.adapters.django_app.pedidos',
            ],
            MIDDLEWARE=[
                'corsheaders.middleware.CorsMiddleware',
                'django.middleware.common.CommonMiddleware',
                'src.adapters.django_app.shared.middleware.RateLimitMiddleware',
                'src.adapters.django_app.shared.middleware.BasicAuthMiddleware',
            ],
            ROOT_URLCONF='src.config.urls',
            APPEND_SLASH=False,
            DATABASES={},
            CACHES={
                'default': {
                    'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
                    'LOCATION': 'tests',
                }
            },
            USE_TZ=True,
            TIME_ZONE='America/Sao_Paulo',
            TRUST_PROXY=False,
            TRUST_PROXY_HOPS=1,
            CORS_ALLOW_ALL_ORIGINS=True,
            CORS_EXPOSE_HEADERS=['X-RateLimit-Limit', 'X-RateLimit-Remaining', 'X-RateLimit-Reset'],
            SPREADSHEET_ID='planilha-de-teste',
            GOOGLE_CREDENTIALS_JSON='',
            GOOGLE_APPLICATION_CREDENTIALS='',
            SHEETS_CACHE_TTL_SECONDS=300.0,
            WRITE_LOCK_TIMEOUT_SECONDS=5.0,
            API_USERS=f'{API_USER}:{API_PASSWORD},leitor:outra:senha',
            RATE_LIMIT_REQUESTS=100,
            RATE_LIMIT_WINDOW_SECONDS=60,
            AUTH_MAX_FAILURES=5,
            AUTH_FAILURE_WINDOW_SECONDS=900,
        )
        django.setup()


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def gateway():
    """Planilha em memória com três tickets livres e nenhum pedido."""
    return InMemorySheetsGateway(planilha(
        tickets=[["68637750800", ""], ["68637750801", ""], ["68637750802", ""]],
    ))


@pytest.fixture
def ticket_repo(gateway):
    return SheetsTicketRepository(gateway, SnapshotCache("tickets"))


@pytest.fixture
def pedido_repo(gateway):
    return SheetsPedidoRepository(gateway, SnapshotCache("pedidos"))


@pytest.fixture
def tickets_lock():
    lock = WriteLock("tickets", timeout=5.0)
    yield lock
    lock.shutdown()


@pytest.fixture
def pedidos_lock():
    lock = WriteLock("pedidos", timeout=5.0)
    yield lock
    lock.shutdown()


@pytest.fixture
def relogio():
    """Relógio fixo para carimbar pedidos."""
    return lambda: MOMENTO_FIXO

