"""
URL patterns para o domínio de Tickets.

Montado em /api/tickets por src.config.urls (barra final opcional).

Endpoints API JSON:
- GET /api/tickets - Listar tickets
- POST /api/tickets - Cadastrar ticket
- GET /api/tickets/<ticket> - Obter ticket
- PUT /api/tickets/<ticket> - Trocar valor
- DELETE /api/tickets/<ticket> - Remover ticket
"""

from django.urls import re_path

from . import api_views

app_name = 'tickets'

urlpatterns = [
    # Listagem e cadastro
    re_path(r'^/?$', api_views.TicketAPIListView.as_view(), name='api_list'),

    # Detalhe, troca de valor e remoção
    re_path(
        r'^/(?P<ticket>[^/]+)/?$',
        api_views.TicketAPIDetailView.as_view(),
        name='api_detail',
    ),
]
