"""
Configuração do Django App para Tickets.
"""

from django.apps import AppConfig


class TicketsConfig(AppConfig):
    """Configuração do app Tickets (estoque na aba "tickets")."""

    name = 'src.adapters.django_app.tickets'
    label = 'tickets'
    verbose_name = 'Estoque de Tickets'
