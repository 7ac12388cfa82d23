"""
URL patterns para o domínio de Pedidos.

Montado em /api/orders por src.config.urls (barra final opcional). O
uuid é validado na view (formato inválido → 400, não 404).
"""

from django.urls import re_path

from . import api_views

app_name = 'pedidos'

urlpatterns = [
    re_path(r'^/?$', api_views.PedidoAPIListView.as_view(), name='api_list'),
    re_path(
        r'^/(?P<uuid>[^/]+)/?$',
        api_views.PedidoAPIDetailView.as_view(),
        name='api_detail',
    ),
]
