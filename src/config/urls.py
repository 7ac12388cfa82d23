"""
URL Configuration para a Certificação API.

Estrutura:
- /health - Health check (sem autenticação)
- /docs, /docs.json - Documentação OpenAPI (sem autenticação)
- /api/tickets - API de Tickets
- /api/orders - API de Pedidos

A barra final é opcional em todas as rotas (APPEND_SLASH está desligado
para não redirecionar POST/PATCH).
"""

from django.urls import include, re_path

from src.adapters.django_app.shared import views as shared_views

urlpatterns = [
    # Health check
    re_path(r'^health/?$', shared_views.health, name='health'),

    # Documentação
    re_path(r'^docs\.json$', shared_views.docs_json, name='docs_json'),
    re_path(r'^docs/?$', shared_views.docs, name='docs'),

    # Tickets App
    re_path(r'^api/tickets', include('src.adapters.django_app.tickets.urls')),

    # Pedidos App
    re_path(r'^api/orders', include('src.adapters.django_app.pedidos.urls')),
]

handler404 = 'src.adapters.django_app.shared.views.not_found'
