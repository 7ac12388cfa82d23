"""
Shared Domain Components.

Contém componentes compartilhados entre os domínios (tickets, pedidos):
- Exceções de domínio
- Interface (Port) da planilha externa
- Cache de leitura com TTL
- Write lock por recurso
"""

from .exceptions import (
    DomainException,
    ValidationError,
    EntityNotFoundError,
    ConflictError,
    BusinessRuleViolationError,
    NoTicketsAvailableError,
    WriteTimeoutError,
    StoreError,
)
from .interfaces import SheetsGateway, InMemorySheetsGateway
from .cache import SnapshotCache
from .write_lock import WriteLock

__all__ = [
    "DomainException",
    "ValidationError",
    "EntityNotFoundError",
    "ConflictError",
    "BusinessRuleViolationError",
    "NoTicketsAvailableError",
    "WriteTimeoutError",
    "StoreError",
    "SheetsGateway",
    "InMemorySheetsGateway",
    "SnapshotCache",
    "WriteLock",
]
