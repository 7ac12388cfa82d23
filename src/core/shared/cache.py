"""
Cache de leitura por recurso.

Guarda um snapshot de todas as entidades decodificadas de uma aba
por um tempo limitado (TTL). É o único ponto onde dados defasados
são tolerados: toda escrita invalida o snapshot antes de calcular
e de novo depois de tocar a planilha.
"""

import logging
import threading
import time
from typing import Callable, Generic, List, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_TTL_SECONDS = 5 * 60


class SnapshotCache(Generic[T]):
    """
    Snapshot com TTL de uma aba inteira.

    Attributes:
        name: Nome do recurso (para logs)
        ttl: Janela máxima de defasagem, em segundos

    Example:
        cache = SnapshotCache("tickets")
        tickets = cache.read(lambda: repo.decode_all())
        cache.invalidate()
    """

    def __init__(
        self,
        name: str,
        ttl: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.name = name
        self.ttl = ttl
        self._clock = clock
        self._lock = threading.Lock()
        self._snapshot: Optional[List[T]] = None
        self._captured_at: Optional[float] = None
        self._generation = 0

    @property
    def is_fresh(self) -> bool:
        """Se existe snapshot dentro do TTL."""
        with self._lock:
            return self._is_fresh_unlocked()

    def _is_fresh_unlocked(self) -> bool:
        if self._snapshot is None or self._captured_at is None:
            return False
        return self._clock() - self._captured_at < self.ttl

    def read(self, loader: Callable[[], List[T]]) -> List[T]:
        """
        Retorna o snapshot se válido; senão carrega, guarda e retorna.

        Args:
            loader: Função que lê e decodifica a aba inteira

        Returns:
            Lista de entidades (cópia rasa do snapshot)
        """
        with self._lock:
            if self._is_fresh_unlocked():
                return list(self._snapshot)
            generation = self._generation

        entities = loader()
        logger.debug(f"Cache '{self.name}' recarregado ({len(entities)} itens)")

        with self._lock:
            # Uma invalidação durante o carregamento torna esta leitura velha
            if generation == self._generation:
                self._snapshot = list(entities)
                self._captured_at = self._clock()
        return list(entities)

    def invalidate(self) -> None:
        """Descarta o snapshot. Idempotente."""
        with self._lock:
            self._snapshot = None
            self._captured_at = None
            self._generation += 1
