"""
Testes para o SnapshotCache (TTL + invalidação).
"""

import pytest

from src.core.shared.cache import DEFAULT_TTL_SECONDS, SnapshotCache


class FakeClock:
    """Relógio controlado pelo teste."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class CountingLoader:
    def __init__(self, *results):
        self.results = list(results)
        self.calls = 0

    def __call__(self):
        self.calls += 1
        return self.results[min(self.calls, len(self.results)) - 1]


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return SnapshotCache("tickets", ttl=300, clock=clock)


class TestSnapshotCacheTTL:
    """Testes de validade do snapshot."""

    def test_ttl_default_cinco_minutos(self):
        """Deve usar 300 segundos por padrão."""
        assert DEFAULT_TTL_SECONDS == 300
        assert SnapshotCache("x").ttl == 300

    def test_primeira_leitura_chama_loader(self, cache):
        """Sem snapshot, deve carregar."""
        loader = CountingLoader(["a"])

        assert cache.read(loader) == ["a"]
        assert loader.calls == 1

    def test_leitura_dentro_do_ttl_nao_acessa_planilha(self, cache, clock):
        """Dentro do TTL deve devolver o snapshot sem chamar o loader."""
        loader = CountingLoader(["a"], ["b"])
        cache.read(loader)

        clock.advance(299)

        assert cache.read(loader) == ["a"]
        assert loader.calls == 1
        assert cache.is_fresh

    def test_leitura_apos_ttl_recarrega(self, cache, clock):
        """Ao atingir o TTL deve recarregar."""
        loader = CountingLoader(["a"], ["b"])
        cache.read(loader)

        clock.advance(300)

        assert not cache.is_fresh
        assert cache.read(loader) == ["b"]
        assert loader.calls == 2

    def test_retorna_copia_do_snapshot(self, cache):
        """Alterar a lista devolvida não deve afetar o snapshot."""
        cache.read(lambda: ["a"])
        lista = cache.read(lambda: ["nunca"])
        lista.append("intruso")

        assert cache.read(lambda: ["nunca"]) == ["a"]


class TestSnapshotCacheInvalidacao:
    """Testes de invalidação."""

    def test_invalidate_forca_recarga(self, cache):
        """Depois de invalidar, a próxima leitura deve ir à planilha."""
        loader = CountingLoader(["a"], ["b"])
        cache.read(loader)

        cache.invalidate()

        assert cache.read(loader) == ["b"]
        assert loader.calls == 2

    def test_invalidate_idempotente(self, cache):
        """Invalidar sem snapshot não deve falhar."""
        cache.invalidate()
        cache.invalidate()

        assert not cache.is_fresh

    def test_invalidacao_durante_carga_nao_guarda_snapshot_velho(self, cache):
        """Uma carga que cruzou uma invalidação não deve ser guardada."""
        def loader_com_escrita_concorrente():
            cache.invalidate()
            return ["velho"]

        assert cache.read(loader_com_escrita_concorrente) == ["velho"]
        assert not cache.is_fresh
        assert cache.read(lambda: ["novo"]) == ["novo"]
