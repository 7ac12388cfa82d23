"""
Fixtures para testes da camada HTTP (Django).

O container global é recriado a cada teste e o gateway da planilha é
substituído por um InMemorySheetsGateway.
"""

import pytest
from dependency_injector import providers
from django.core.cache import cache
from django.test import Client, RequestFactory

from src.config.container import get_container, reset_container
from src.core.shared.interfaces import InMemorySheetsGateway

from tests.helpers import basic_auth, planilha


@pytest.fixture(autouse=True)
def limpar_estado():
    """Container e contadores de rate limit limpos entre testes."""
    reset_container()
    cache.clear()
    yield
    reset_container()
    cache.clear()


@pytest.fixture
def sheets():
    return InMemorySheetsGateway(planilha(
        tickets=[["68637750800", ""], ["68637750801", ""]],
    ))


@pytest.fixture
def container(sheets):
    """Container global usando a planilha em memória."""
    container = get_container()
    container.sheets_gateway.override(providers.Object(sheets))
    yield container
    container.sheets_gateway.reset_override()


@pytest.fixture
def rf():
    """Request Factory para criar requests."""
    return RequestFactory()


@pytest.fixture
def client():
    """Django test client com credenciais válidas."""
    return Client(HTTP_AUTHORIZATION=basic_auth())


@pytest.fixture
def anon_client():
    """Django test client sem credenciais."""
    return Client()
