"""
Exceções de Domínio da Certificação API.

Este módulo define exceções específicas do domínio que permitem
comunicar erros de forma clara e tipada entre as camadas.

Hierarquia:
    DomainException (base)
    ├── ValidationError (validação de entrada)
    ├── EntityNotFoundError (entidade não existe)
    ├── ConflictError (valor duplicado)
    ├── BusinessRuleViolationError (regra de negócio violada)
    │   └── NoTicketsAvailableError (nenhum ticket livre)
    ├── ConcurrencyError (serialização de escrita)
    │   └── WriteTimeoutError (espera pelo lock excedida)
    └── StoreError (falha na planilha externa)
        ├── StoreUnavailableError
        ├── SheetNotFoundError
        └── RowIndexInvalidError
"""


class DomainException(Exception):
    """
    Exceção base para todos os erros de domínio.

    Todas as exceções específicas do domínio devem herdar desta classe.
    Isso permite capturar qualquer erro de domínio de forma genérica.

    Example:
        try:
            service.execute(input_dto)
        except DomainException as e:
            logger.error(f"Erro de domínio: {e}")
    """

    def __init__(self, message: str, code: str = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict:
        """Serializa exceção para dicionário (útil para APIs)."""
        return {
            "error": self.code,
            "message": self.message,
        }


class ValidationError(DomainException):
    """
    Erro de validação de dados de entrada.

    Lançada pela camada HTTP quando o payload não passa no form.
    O core nunca revalida o formato dos dados recebidos.
    """

    def __init__(self, message: str, field: str = None):
        self.field = field
        code = f"VALIDATION_ERROR_{field.upper()}" if field else "VALIDATION_ERROR"
        super().__init__(message, code)

    def to_dict(self) -> dict:
        result = super().to_dict()
        if self.field:
            result["field"] = self.field
        return result


class EntityNotFoundError(DomainException):
    """
    Entidade não encontrada na planilha.

    Example:
        if localizado is None:
            raise EntityNotFoundError(
                f"Pedido {uuid} não encontrado",
                entity_type="Pedido",
                entity_id=uuid,
            )
    """

    def __init__(self, message: str, entity_type: str = None, entity_id: str = None):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(message, "ENTITY_NOT_FOUND")

    def to_dict(self) -> dict:
        result = super().to_dict()
        if self.entity_type:
            result["entity_type"] = self.entity_type
        if self.entity_id:
            result["entity_id"] = self.entity_id
        return result


class ConflictError(DomainException):
    """
    Valor duplicado (ex: ticket já cadastrado).

    `details` carrega dados extras para a resposta HTTP.
    """

    def __init__(self, message: str, details: dict = None):
        self.details = details or {}
        super().__init__(message, "CONFLICT")

    def to_dict(self) -> dict:
        result = super().to_dict()
        if self.details:
            result["details"] = self.details
        return result


class BusinessRuleViolationError(DomainException):
    """
    Violação de regra de negócio.

    Lançada quando uma operação viola uma regra de negócio
    estabelecida no domínio.
    """

    def __init__(self, message: str, rule: str = None):
        self.rule = rule
        super().__init__(message, "BUSINESS_RULE_VIOLATION")

    def to_dict(self) -> dict:
        result = super().to_dict()
        if self.rule:
            result["rule"] = self.rule
        return result


class NoTicketsAvailableError(BusinessRuleViolationError):
    """Nenhum ticket com status vazio restante na planilha."""

    def __init__(self, message: str = "Nenhum ticket disponível"):
        super().__init__(message, rule="no_tickets_available")


class ConcurrencyError(DomainException):
    """
    Erro de concorrência.

    Lançada quando uma operação não consegue ser serializada
    com as demais escritas do mesmo recurso.
    """

    def __init__(self, message: str, code: str = "CONCURRENCY_ERROR"):
        super().__init__(message, code)


class WriteTimeoutError(ConcurrencyError):
    """
    A escrita não terminou dentro do prazo do lock.

    A tarefa NÃO é cancelada: ela continua na fila e ainda pode
    alterar a planilha depois que o chamador desistiu de esperar.
    """

    def __init__(self, resource: str, timeout: float):
        self.resource = resource
        self.timeout = timeout
        super().__init__(
            f"Escrita em '{resource}' excedeu {timeout:g}s",
            code="WRITE_TIMEOUT",
        )


class StoreError(DomainException):
    """Falha do colaborador externo (planilha)."""

    def __init__(self, message: str, code: str = "STORE_ERROR"):
        super().__init__(message, code)


class StoreUnavailableError(StoreError):
    """Erro de transporte ou autenticação ao acessar a planilha."""

    def __init__(self, message: str):
        super().__init__(message, "STORE_UNAVAILABLE")


class SheetNotFoundError(StoreError):
    """Nome de aba não encontrado na planilha."""

    def __init__(self, sheet_name: str):
        self.sheet_name = sheet_name
        super().__init__(f'Aba "{sheet_name}" não encontrada', "SHEET_NOT_FOUND")


class RowIndexInvalidError(StoreError):
    """Índice de linha fora da área de dados (o cabeçalho ocupa a linha 1)."""

    def __init__(self, sheet_name: str, row_number: int):
        self.sheet_name = sheet_name
        self.row_number = row_number
        super().__init__(
            f"Linha {row_number} inválida na aba \"{sheet_name}\"",
            "ROW_INDEX_INVALID",
        )
