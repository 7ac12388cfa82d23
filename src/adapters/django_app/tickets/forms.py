"""
Django Forms para validação de entrada de Tickets.

Forms são DRIVING ADAPTERS que validam dados antes de
passar para os Use Cases.

Princípios:
- Forms NÃO contêm lógica de negócio (duplicidade é checada no Use Case)
- Forms são apenas para validação de entrada
"""

from django import forms


class TicketForm(forms.Form):
    """
    Form para cadastro (POST) e troca de valor (PUT) de ticket.

    Body JSON: {"ticket": "string (obrigatório)"}
    """

    ticket = forms.CharField(
        label='Ticket',
        error_messages={
            'required': 'ticket é obrigatório',
        },
    )
