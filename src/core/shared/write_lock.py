"""
Write Lock - Serialização de escritas por recurso.

A planilha não oferece transações, lock de linha nem compare-and-swap.
Toda escrita precisa reler a aba para descobrir a posição da linha, e
duas escritas concorrentes no mesmo recurso poderiam alterar a linha
errada. Este módulo coloca as escritas de um recurso numa fila FIFO
drenada por um único worker.

Garantias:
- Ordem total: tarefas enfileiradas em t1 < t2 executam nessa ordem
- Nunca há duas tarefas do mesmo recurso em execução simultânea
- A falha de uma tarefa chega apenas ao seu chamador; a fila segue
- Recursos diferentes (tickets, pedidos) usam locks diferentes

Timeout:
    O chamador espera no máximo `timeout` segundos e recebe
    WriteTimeoutError. A tarefa NÃO é cancelada: ela mantém seu lugar
    na fila e ainda pode alterar a planilha depois disso.
"""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Callable, TypeVar

from .exceptions import WriteTimeoutError

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_TIMEOUT_SECONDS = 30.0


class WriteLock:
    """
    Fila de escrita de um recurso.

    Attributes:
        resource: Nome do recurso (ex: "tickets", "pedidos")
        timeout: Espera máxima do chamador, em segundos

    Example:
        lock = WriteLock("pedidos")
        pedido = lock.run(lambda: criar_pedido(dados))
    """

    def __init__(self, resource: str, timeout: float = DEFAULT_TIMEOUT_SECONDS):
        self.resource = resource
        self.timeout = timeout
        # Um único worker: a fila interna do executor é a ordem total
        self._executor = ThreadPoolExecutor(
            max_workers=1,
            thread_name_prefix=f"write-lock-{resource}",
        )

    def submit(self, task: Callable[[], T]) -> "Future[T]":
        """Enfileira a tarefa e retorna o Future sem esperar."""
        return self._executor.submit(task)

    def run(self, task: Callable[[], T]) -> T:
        """
        Executa a tarefa com exclusividade sobre o recurso.

        Args:
            task: Função sem argumentos (contexto via closure)

        Returns:
            Resultado da tarefa

        Raises:
            WriteTimeoutError: Se a tarefa não terminar dentro do prazo
            Exception: Qualquer exceção lançada pela própria tarefa
        """
        future = self.submit(task)
        try:
            return future.result(timeout=self.timeout)
        except FutureTimeoutError:
            logger.warning(
                f"Write lock '{self.resource}': chamador desistiu após "
                f"{self.timeout}s; tarefa segue na fila"
            )
            future.add_done_callback(self._log_abandoned)
            raise WriteTimeoutError(self.resource, self.timeout) from None

    def _log_abandoned(self, future: Future) -> None:
        error = future.exception()
        if error is not None:
            logger.error(
                f"Write lock '{self.resource}': tarefa abandonada falhou: {error}"
            )
        else:
            logger.warning(
                f"Write lock '{self.resource}': tarefa abandonada concluiu sem chamador"
            )

    def shutdown(self, wait: bool = True) -> None:
        """Encerra o worker (fim do processo ou dos testes)."""
        self._executor.shutdown(wait=wait)
