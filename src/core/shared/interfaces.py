"""
Interfaces (Ports) - Contratos entre Core e Adapters.

Este módulo define o contrato da planilha externa usada como
armazenamento de registros. É o "Port" dirigido da Arquitetura
Hexagonal: o Core define, os Adapters implementam.

Modelo da planilha:
- Cada aba é uma sequência ordenada de linhas
- A linha 1 é o cabeçalho e nunca é lida/escrita pelo domínio
- A posição da linha NÃO é um identificador estável: qualquer
  remoção desloca as linhas seguintes. Resolva a posição com uma
  leitura fresca imediatamente antes de cada escrita.
"""

import copy
import threading
import time
from typing import Dict, List, Optional, Protocol, Tuple, runtime_checkable

from .exceptions import RowIndexInvalidError, SheetNotFoundError


Row = List[str]


@runtime_checkable
class SheetsGateway(Protocol):
    """
    Interface para a planilha externa.

    Implementações:
    - GoogleSheetsGateway (Google Sheets API v4)
    - InMemorySheetsGateway (para testes)

    Numeração de linhas é 1-based; o cabeçalho ocupa a linha 1.
    """

    def read_range(self, sheet_name: str, a1_range: str) -> List[Row]:
        """
        Lê todas as linhas do intervalo, cabeçalho incluído.

        Raises:
            StoreUnavailableError: Falha de transporte/autenticação
        """
        ...

    def append_row(self, sheet_name: str, a1_range: str, row: Row) -> None:
        """Acrescenta a linha após a última linha preenchida."""
        ...

    def update_row(self, sheet_name: str, row_number: int, row: Row) -> None:
        """
        Sobrescreve a linha inteira na posição informada.

        Raises:
            RowIndexInvalidError: Se row_number aponta para o cabeçalho
        """
        ...

    def delete_row(self, sheet_name: str, row_number: int) -> None:
        """
        Remove a linha, deslocando as seguintes para cima.

        Raises:
            SheetNotFoundError: Se a aba não existe
        """
        ...


class InMemorySheetsGateway:
    """
    Implementação em memória do SheetsGateway.

    Útil para:
    - Testes unitários
    - Desenvolvimento local sem credenciais

    Mantém a mesma semântica de deslocamento de linhas da planilha real
    e registra em `calls` cada mutação, na ordem em que foi aplicada.

    Example:
        gateway = InMemorySheetsGateway({
            "tickets": [["ticket", "status"], ["68637750800", ""]],
        })
        gateway.read_range("tickets", "tickets!A:B")
    """

    def __init__(
        self,
        sheets: Optional[Dict[str, List[Row]]] = None,
        latency: float = 0.0,
    ):
        self._sheets: Dict[str, List[Row]] = copy.deepcopy(sheets or {})
        self._latency = latency
        self._lock = threading.Lock()
        self.calls: List[Tuple] = []

    def _simulate_latency(self) -> None:
        if self._latency:
            time.sleep(self._latency)

    def _rows(self, sheet_name: str) -> List[Row]:
        if sheet_name not in self._sheets:
            raise SheetNotFoundError(sheet_name)
        return self._sheets[sheet_name]

    def read_range(self, sheet_name: str, a1_range: str) -> List[Row]:
        self._simulate_latency()
        with self._lock:
            rows = self._sheets.get(sheet_name, [])
            # A API omite células vazias no fim de cada linha
            result = []
            for row in rows:
                trimmed = list(row)
                while trimmed and trimmed[-1] == "":
                    trimmed.pop()
                result.append(trimmed)
            return result

    def append_row(self, sheet_name: str, a1_range: str, row: Row) -> None:
        self._simulate_latency()
        with self._lock:
            self._sheets.setdefault(sheet_name, []).append(list(row))
            self.calls.append(("append", sheet_name, list(row)))

    def update_row(self, sheet_name: str, row_number: int, row: Row) -> None:
        self._simulate_latency()
        with self._lock:
            rows = self._rows(sheet_name)
            if row_number < 2 or row_number > len(rows):
                raise RowIndexInvalidError(sheet_name, row_number)
            rows[row_number - 1] = list(row)
            self.calls.append(("update", sheet_name, row_number, list(row)))

    def delete_row(self, sheet_name: str, row_number: int) -> None:
        self._simulate_latency()
        with self._lock:
            rows = self._rows(sheet_name)
            if row_number < 2 or row_number > len(rows):
                raise RowIndexInvalidError(sheet_name, row_number)
            removed = rows.pop(row_number - 1)
            self.calls.append(("delete", sheet_name, row_number, removed))

    def rows(self, sheet_name: str) -> List[Row]:
        """Cópia das linhas de dados (sem cabeçalho), útil em asserts."""
        with self._lock:
            return copy.deepcopy(self._sheets.get(sheet_name, [])[1:])
