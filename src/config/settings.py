"""
Django Settings para a Certificação API.

Usa variáveis de ambiente para configurações sensíveis.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Carregar variáveis de ambiente
load_dotenv()

# =============================================================================
# Caminhos Base
# =============================================================================

BASE_DIR = Path(__file__).resolve().parent.parent.parent

# =============================================================================
# Segurança
# =============================================================================

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = os.getenv(
    'SECRET_KEY',
    'django-insecure-dev-key-change-in-production-please'
)

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = os.getenv('DEBUG', 'False').lower() in ('true', '1', 'yes')

ALLOWED_HOSTS = os.getenv('ALLOWED_HOSTS', 'localhost,127.0.0.1').split(',')

# Atrás de nginx/load balancer: IP do cliente vem no X-Forwarded-For
TRUST_PROXY = os.getenv('TRUST_PROXY', 'False').lower() in ('true', '1', 'yes')

# Quantos proxies nossos acrescentam entradas ao X-Forwarded-For
TRUST_PROXY_HOPS = int(os.getenv('TRUST_PROXY_HOPS', 1))

# =============================================================================
# Aplicações
# =============================================================================

THIRD_PARTY_APPS = [
    'corsheaders',
]

LOCAL_APPS = [
    'src.adapters.django_app.tickets',
    'src.adapters.django_app.pedidos',
]

INSTALLED_APPS = THIRD_PARTY_APPS + LOCAL_APPS

# =============================================================================
# Middleware
# =============================================================================

MIDDLEWARE = [
    'corsheaders.middleware.CorsMiddleware',
    'django.middleware.security.SecurityMiddleware',
    'django.middleware.common.CommonMiddleware',
    'src.adapters.django_app.shared.middleware.RateLimitMiddleware',
    'src.adapters.django_app.shared.middleware.BasicAuthMiddleware',
]

ROOT_URLCONF = 'src.config.urls'

WSGI_APPLICATION = 'src.config.wsgi.application'

# Rotas aceitam a barra final opcional; sem redirecionar POST/PATCH
APPEND_SLASH = False

# =============================================================================
# CORS (django-cors-headers)
# =============================================================================

# Vazio = qualquer origem; senão "https://a.exemplo,https://b.exemplo"
CORS_ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.getenv('CORS_ALLOWED_ORIGINS', '').split(',')
    if origin.strip()
]
CORS_ALLOW_ALL_ORIGINS = not CORS_ALLOWED_ORIGINS

CORS_EXPOSE_HEADERS = [
    'X-RateLimit-Limit',
    'X-RateLimit-Remaining',
    'X-RateLimit-Reset',
    'Retry-After',
]

# =============================================================================
# Banco de Dados
# =============================================================================

# Os registros vivem na planilha Google; não há banco relacional
DATABASES = {}

# =============================================================================
# Planilha (Google Sheets)
# =============================================================================

SPREADSHEET_ID = os.getenv('SPREADSHEET_ID', '')

# Serverless: JSON da service account numa variável
GOOGLE_CREDENTIALS_JSON = os.getenv('GOOGLE_CREDENTIALS_JSON', '')

# Docker/VPS: caminho do arquivo de chave
GOOGLE_APPLICATION_CREDENTIALS = os.getenv('GOOGLE_APPLICATION_CREDENTIALS', '')

# Defasagem máxima tolerada nas leituras
SHEETS_CACHE_TTL_SECONDS = float(os.getenv('SHEETS_CACHE_TTL_SECONDS', 300))

# Espera máxima do chamador por uma escrita serializada
WRITE_LOCK_TIMEOUT_SECONDS = float(os.getenv('WRITE_LOCK_TIMEOUT_SECONDS', 30))

# =============================================================================
# Autenticação e Rate Limit
# =============================================================================

# Formato: "usuario:senha,usuario2:senha2"
API_USERS = os.getenv('API_USERS', '')

RATE_LIMIT_REQUESTS = int(os.getenv('RATE_LIMIT_REQUESTS', 100))
RATE_LIMIT_WINDOW_SECONDS = int(os.getenv('RATE_LIMIT_WINDOW_SECONDS', 60))
AUTH_MAX_FAILURES = int(os.getenv('AUTH_MAX_FAILURES', 5))
AUTH_FAILURE_WINDOW_SECONDS = int(os.getenv('AUTH_FAILURE_WINDOW_SECONDS', 15 * 60))

# =============================================================================
# Cache (contadores de rate limit)
# =============================================================================

REDIS_URL = os.getenv('REDIS_URL')

if REDIS_URL:
    CACHES = {
        'default': {
            'BACKEND': 'django.core.cache.backends.redis.RedisCache',
            'LOCATION': REDIS_URL,
        }
    }
else:
    CACHES = {
        'default': {
            'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
            'LOCATION': 'unique-snowflake',
        }
    }

# =============================================================================
# Internacionalização
# =============================================================================

LANGUAGE_CODE = 'pt-br'
TIME_ZONE = 'America/Sao_Paulo'
USE_I18N = True
USE_TZ = True

# =============================================================================
# Logging
# =============================================================================

LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '{levelname} {asctime} {module} {process:d} {thread:d} {message}',
            'style': '{',
        },
        'simple': {
            'format': '{levelname} {asctime} {module} {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
        },
        'console_verbose': {
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': LOG_LEVEL,
    },
    'loggers': {
        'django': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': False,
        },
        'src.core': {
            'handlers': ['console_verbose'],
            'level': 'DEBUG',
            'propagate': False,
        },
        'src.adapters': {
            'handlers': ['console'],
            'level': 'DEBUG',
            'propagate': False,
        },
    },
}
