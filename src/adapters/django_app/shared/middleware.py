"""
Middlewares HTTP da API.

- RateLimitMiddleware: janela fixa por IP para todas as rotas e bloqueio
  de clientes com muitas falhas de autenticação em /api/
- BasicAuthMiddleware: HTTP Basic em /api/, usuários de API_USERS

Contadores ficam no cache do Django (LocMem por processo, Redis quando
REDIS_URL está definido).
"""

import base64
import binascii
import hmac
import logging
import math
import time
from functools import lru_cache
from typing import Dict

from django.conf import settings
from django.core.cache import cache
from django.http import HttpRequest, HttpResponse

from .api import json_response

logger = logging.getLogger(__name__)

API_PREFIX = '/api/'


def get_client_ip(request: HttpRequest) -> str:
    """
    IP do cliente.

    Com TRUST_PROXY, o X-Forwarded-For é lido da direita para a esquerda:
    só as TRUST_PROXY_HOPS últimas entradas vêm dos nossos proxies, as
    anteriores são controladas pelo cliente.
    """
    remote_addr = request.META.get('REMOTE_ADDR') or 'unknown'
    if not getattr(settings, 'TRUST_PROXY', False):
        return remote_addr

    hops = max(int(getattr(settings, 'TRUST_PROXY_HOPS', 1)), 1)
    forwarded = [
        entry.strip()
        for entry in request.META.get('HTTP_X_FORWARDED_FOR', '').split(',')
        if entry.strip()
    ]
    if len(forwarded) < hops:
        return remote_addr
    return forwarded[-hops]


def _incr(key: str, timeout: int) -> int:
    cache.add(key, 0, timeout=timeout)
    try:
        return cache.incr(key)
    except ValueError:
        # chave expirou entre o add e o incr
        cache.set(key, 1, timeout=timeout)
        return 1


def _auth_failures_key(ip: str) -> str:
    return f'auth-failures:{ip}'


def track_auth_failure(request: HttpRequest) -> int:
    """Conta uma falha de autenticação do cliente; retorna o total na janela."""
    ip = get_client_ip(request)
    failures = _incr(_auth_failures_key(ip), settings.AUTH_FAILURE_WINDOW_SECONDS)
    logger.warning(f"Falha de autenticação de {ip} ({failures} na janela)")
    return failures


def is_auth_blocked(request: HttpRequest) -> bool:
    failures = cache.get(_auth_failures_key(get_client_ip(request)), 0)
    return failures >= settings.AUTH_MAX_FAILURES


class RateLimitMiddleware:
    """
    Limite de requisições por IP em janela fixa.

    Toda resposta leva X-RateLimit-Limit, X-RateLimit-Remaining e
    X-RateLimit-Reset (epoch em segundos). Acima do limite: 429 com
    Retry-After.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        limit = settings.RATE_LIMIT_REQUESTS
        window = settings.RATE_LIMIT_WINDOW_SECONDS
        ip = get_client_ip(request)
        now = time.time()

        cache.add(f'ratelimit-start:{ip}', now, timeout=window)
        window_start = cache.get(f'ratelimit-start:{ip}', now)
        count = _incr(f'ratelimit:{ip}', window)
        reset_at = window_start + window

        if count > limit:
            logger.info(f"Rate limit excedido por {ip}")
            response = json_response(
                success=False,
                error="Muitas requisições. Tente novamente mais tarde.",
                status=429,
            )
            response['Retry-After'] = str(max(math.ceil(reset_at - now), 0))
        elif request.path.startswith(API_PREFIX) and is_auth_blocked(request):
            response = json_response(
                success=False,
                error="Muitas tentativas de autenticação falhas. Tente novamente mais tarde.",
                status=429,
            )
        else:
            response = self.get_response(request)

        response['X-RateLimit-Limit'] = str(limit)
        response['X-RateLimit-Remaining'] = str(max(limit - count, 0))
        response['X-RateLimit-Reset'] = str(math.ceil(reset_at))
        return response


@lru_cache(maxsize=8)
def parse_api_users(raw: str) -> Dict[str, str]:
    """
    "usuario:senha,usuario2:senha2" → {"usuario": "senha", ...}

    Pares sem usuário ou sem senha são ignorados.
    """
    if not raw.strip():
        logger.warning("API_USERS está vazio: nenhum usuário configurado")

    users = {}
    for pair in raw.split(','):
        username, _, password = pair.strip().partition(':')
        if username and password:
            users[username] = password
    return users


def _constant_time_equals(expected: str, given: str) -> bool:
    return hmac.compare_digest(expected.encode('utf-8'), given.encode('utf-8'))


class BasicAuthMiddleware:
    """
    HTTP Basic Auth para rotas sob /api/.

    /health/ e rotas fora de /api/ passam sem autenticação. Cada falha
    é contada para o bloqueio do RateLimitMiddleware.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        if not request.path.startswith(API_PREFIX):
            return self.get_response(request)

        header = request.META.get('HTTP_AUTHORIZATION', '')
        if not header.startswith('Basic '):
            return self._unauthorized(request, "Autenticação necessária")

        try:
            decoded = base64.b64decode(header[len('Basic '):], validate=True).decode('utf-8')
        except (binascii.Error, UnicodeDecodeError):
            return self._unauthorized(request, "Formato de credenciais inválido")

        username, sep, password = decoded.partition(':')
        if not sep:
            return self._unauthorized(request, "Formato de credenciais inválido")

        users = parse_api_users(getattr(settings, 'API_USERS', ''))
        expected = users.get(username)
        if expected is None or not _constant_time_equals(expected, password):
            return self._unauthorized(request, "Credenciais inválidas")

        request.api_user = username
        return self.get_response(request)

    def _unauthorized(self, request: HttpRequest, message: str) -> HttpResponse:
        track_auth_failure(request)
        response = json_response(success=False, error=message, status=401)
        response['WWW-Authenticate'] = 'Basic realm="API"'
        return response
