"""
Configuração do Django App para Pedidos.
"""

from django.apps import AppConfig


class PedidosConfig(AppConfig):
    """Configuração do app Pedidos (aba "pedidos")."""

    name = 'src.adapters.django_app.pedidos'
    label = 'pedidos'
    verbose_name = 'Pedidos de Certificação'
