"""
API Views JSON para o domínio de Tickets.

Endpoints:
- GET /api/tickets - Listar tickets
- POST /api/tickets - Cadastrar ticket
- GET /api/tickets/<ticket> - Obter ticket
- PUT /api/tickets/<ticket> - Trocar valor do ticket
- DELETE /api/tickets/<ticket> - Remover ticket

Formato:
- Entrada: JSON
- Saída: JSON com estrutura {success, data/error}

Autenticação:
- HTTP Basic (BasicAuthMiddleware)
"""

import logging

from django.http import HttpRequest, HttpResponse, JsonResponse

from src.adapters.django_app.shared.api import (
    BaseAPIView,
    json_response,
    list_response,
    no_content,
    validate_form,
)
from src.core.tickets.dtos import CriarTicketInputDTO, RenomearTicketInputDTO

from .forms import TicketForm

logger = logging.getLogger(__name__)


class TicketAPIListView(BaseAPIView):
    """
    API para listar e cadastrar tickets.

    GET /api/tickets - Lista tickets
    POST /api/tickets - Cadastra ticket
    """

    def get(self, request: HttpRequest) -> JsonResponse:
        """Lista todos os tickets (leitura via cache)."""
        try:
            listar_service = self.get_service('listar_tickets_service')
            tickets = listar_service.execute()

            return list_response([t.to_dict() for t in tickets])

        except Exception as e:
            return self.handle_exception(e)

    def post(self, request: HttpRequest) -> JsonResponse:
        """
        Cadastra novo ticket com status vazio (disponível).

        Body JSON:
        {
            "ticket": "string (obrigatório)"
        }
        """
        try:
            data = validate_form(TicketForm(self.parse_body(request)))

            criar_service = self.get_service('criar_ticket_service')
            output = criar_service.execute(CriarTicketInputDTO(ticket=data['ticket']))

            logger.info(f"API: Ticket cadastrado: {output.ticket}")

            return json_response(
                success=True,
                data=output.to_dict(),
                status=201
            )

        except Exception as e:
            return self.handle_exception(e)


class TicketAPIDetailView(BaseAPIView):
    """
    API para operações em um ticket específico.

    GET /api/tickets/<ticket> - Obter ticket
    PUT /api/tickets/<ticket> - Trocar valor
    DELETE /api/tickets/<ticket> - Remover
    """

    def get(self, request: HttpRequest, ticket: str) -> JsonResponse:
        """Obtém o ticket."""
        try:
            obter_service = self.get_service('obter_ticket_service')
            output = obter_service.execute(ticket)

            return json_response(success=True, data=output.to_dict())

        except Exception as e:
            return self.handle_exception(e)

    def put(self, request: HttpRequest, ticket: str) -> JsonResponse:
        """
        Troca o valor do ticket, mantendo o status.

        Body JSON:
        {
            "ticket": "string (obrigatório) - novo valor"
        }
        """
        try:
            data = validate_form(TicketForm(self.parse_body(request)))

            renomear_service = self.get_service('renomear_ticket_service')
            output = renomear_service.execute(
                RenomearTicketInputDTO(ticket_atual=ticket, novo_ticket=data['ticket'])
            )

            return json_response(success=True, data=output.to_dict())

        except Exception as e:
            return self.handle_exception(e)

    def delete(self, request: HttpRequest, ticket: str) -> HttpResponse:
        """Remove o ticket (204 sem corpo)."""
        try:
            remover_service = self.get_service('remover_ticket_service')
            remover_service.execute(ticket)

            logger.info(f"API: Ticket {ticket} removido")

            return no_content()

        except Exception as e:
            return self.handle_exception(e)
