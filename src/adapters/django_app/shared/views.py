"""
Views fora dos domínios: health check, documentação e 404 em JSON.
"""

from datetime import datetime, timezone

from django.http import HttpRequest, HttpResponse, JsonResponse
from django.views.decorators.http import require_GET

from .api import json_response
from .openapi import TITLE, build_schema

SWAGGER_UI_VERSION = '5.17.14'

SWAGGER_UI_HTML = """<!DOCTYPE html>
<html lang="pt-br">
<head>
  <meta charset="utf-8">
  <title>{title}</title>
  <link rel="stylesheet" href="https://unpkg.com/swagger-ui-dist@{version}/swagger-ui.css">
</head>
<body>
  <div id="swagger-ui"></div>
  <script src="https://unpkg.com/swagger-ui-dist@{version}/swagger-ui-bundle.js"></script>
  <script>
    window.ui = SwaggerUIBundle({{url: "{schema_url}", dom_id: "#swagger-ui"}});
  </script>
</body>
</html>
"""


def health(request: HttpRequest) -> JsonResponse:
    """GET /health (sem autenticação)."""
    return JsonResponse({
        'status': 'ok',
        'timestamp': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
    })


@require_GET
def docs_json(request: HttpRequest) -> JsonResponse:
    """GET /docs.json - documento OpenAPI (sem autenticação)."""
    return JsonResponse(build_schema())


@require_GET
def docs(request: HttpRequest) -> HttpResponse:
    """GET /docs - Swagger UI apontando para /docs.json."""
    return HttpResponse(SWAGGER_UI_HTML.format(
        title=TITLE,
        version=SWAGGER_UI_VERSION,
        schema_url='/docs.json',
    ))


def not_found(request: HttpRequest, exception=None) -> JsonResponse:
    """handler404: qualquer rota desconhecida."""
    return json_response(success=False, error="Endpoint não encontrado", status=404)
