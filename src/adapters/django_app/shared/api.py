"""
Base para as API Views JSON.

Formato:
- Sucesso: {"success": true, "data": ...}
- Lista: {"success": true, "count": n, "data": [...]}
- Erro: {"success": false, "error": "mensagem"}

Mapeamento de exceções → HTTP status:
- ValidationError / JSON inválido → 400
- EntityNotFoundError → 404
- ConflictError → 409
- BusinessRuleViolationError (inclui NoTicketsAvailableError) → 422
- StoreError → 502
- ConcurrencyError (inclui WriteTimeoutError) → 503
- Qualquer outra → 500
"""

import json
import logging
from typing import Any, Dict, List

from django import forms
from django.conf import settings
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from src.config.container import get_container
from src.core.shared.exceptions import (
    BusinessRuleViolationError,
    ConcurrencyError,
    ConflictError,
    DomainException,
    EntityNotFoundError,
    StoreError,
    ValidationError,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Helpers
# =============================================================================

def json_response(success: bool, data: Any = None, error: str = None,
                  status: int = 200, **extra: Any) -> JsonResponse:
    """
    Cria resposta JSON padronizada.

    Args:
        success: Se operação foi bem sucedida
        data: Dados da resposta
        error: Mensagem de erro (se aplicável)
        status: HTTP status code
        **extra: Chaves adicionais no nível raiz (ex: count, total)

    Returns:
        JsonResponse formatada
    """
    response: Dict[str, Any] = {'success': success}
    response.update(extra)

    if data is not None:
        response['data'] = data

    if error is not None:
        response['error'] = error

    return JsonResponse(response, status=status)


def list_response(items: List[Any]) -> JsonResponse:
    """Lista sem paginação: {success, count, data}."""
    return json_response(success=True, data=items, count=len(items))


def no_content() -> HttpResponse:
    """Resposta 204 sem corpo (remoções)."""
    return HttpResponse(status=204)


def parse_json_body(request: HttpRequest) -> Dict:
    """
    Parseia body JSON do request.

    Raises:
        ValidationError: Se o corpo não for um objeto JSON
    """
    if not request.body:
        return {}

    try:
        data = json.loads(request.body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ValidationError(f"JSON inválido: {e}") from e

    if not isinstance(data, dict):
        raise ValidationError("O corpo da requisição deve ser um objeto JSON")
    return data


def validate_form(form: forms.Form) -> Dict[str, Any]:
    """
    Valida o form e devolve cleaned_data.

    Raises:
        ValidationError: Com a primeira mensagem de erro do form
    """
    if form.is_valid():
        return form.cleaned_data

    field, errors = next(iter(form.errors.items()))
    message = errors[0]
    if field == '__all__':
        raise ValidationError(message)
    raise ValidationError(message, field=field)


# =============================================================================
# Base API View
# =============================================================================

@method_decorator(csrf_exempt, name='dispatch')
class BaseAPIView(View):
    """
    View base para APIs JSON.

    Fornece:
    - Parsing de JSON
    - Acesso ao container DI
    - Tratamento de erros padronizado
    """

    def get_container(self):
        """Retorna container de DI."""
        return get_container()

    def get_service(self, service_name: str):
        """Obtém service do container."""
        return getattr(self.get_container(), service_name)()

    def parse_body(self, request: HttpRequest) -> Dict:
        """Parseia body JSON."""
        return parse_json_body(request)

    def http_method_not_allowed(self, request, *args, **kwargs):
        super().http_method_not_allowed(request, *args, **kwargs)
        return json_response(
            success=False,
            error=f"Método {request.method} não permitido",
            status=405,
        )

    def handle_exception(self, e: Exception) -> JsonResponse:
        """
        Trata exceções e retorna resposta apropriada.

        Args:
            e: Exceção capturada

        Returns:
            JsonResponse com erro
        """
        if isinstance(e, ValidationError):
            return json_response(success=False, error=e.message, status=400)

        if isinstance(e, EntityNotFoundError):
            return json_response(success=False, error=e.message, status=404)

        if isinstance(e, ConflictError):
            return json_response(success=False, error=e.message, status=409)

        if isinstance(e, BusinessRuleViolationError):
            return json_response(success=False, error=e.message, status=422)

        if isinstance(e, StoreError):
            logger.error(f"Falha na planilha: {e}")
            return json_response(success=False, error=e.message, status=502)

        if isinstance(e, ConcurrencyError):
            logger.warning(f"Escrita não concluída a tempo: {e}")
            return json_response(success=False, error=e.message, status=503)

        if isinstance(e, DomainException):
            return json_response(success=False, error=e.message, status=400)

        # Erro inesperado
        logger.exception(f"Erro inesperado na API: {e}")
        return json_response(
            success=False,
            error=str(e) if settings.DEBUG else "Erro interno do servidor",
            status=500,
        )
