"""
API Views JSON para o domínio de Pedidos.

Endpoints:
- GET /api/orders - Listar pedidos (filtros + paginação)
- POST /api/orders - Criar pedido (ticket atribuído pela API)
- GET /api/orders/<uuid> - Obter pedido
- PATCH /api/orders/<uuid> - Atualizar pedido parcial
- DELETE /api/orders/<uuid> - Remover pedido

Respostas especiais:
- 409 na criação com OAB já usada: o pedido FOI gravado como "Recusado"
  e volta em `data`, junto com `existing_ticket` e `existing_date`
- 422 quando não há ticket disponível (nada é gravado)
"""

import logging

from django.http import HttpRequest, HttpResponse, JsonResponse

from src.adapters.django_app.shared.api import (
    BaseAPIView,
    json_response,
    no_content,
    validate_form,
)
from src.core.pedidos.dtos import (
    AtualizarPedidoInputDTO,
    CriarPedidoInputDTO,
    ListarPedidosQueryDTO,
)

from .forms import PedidoCreateForm, PedidoFiltroForm, PedidoUpdateForm, validar_uuid

logger = logging.getLogger(__name__)


class PedidoAPIListView(BaseAPIView):
    """
    API para listar e criar pedidos.

    GET /api/orders - Lista pedidos
    POST /api/orders - Cria pedido
    """

    def get(self, request: HttpRequest) -> JsonResponse:
        """
        Lista pedidos com filtros opcionais.

        Query params:
        - status: Igualdade sem diferenciar maiúsculas
        - ticket: Igualdade sem diferenciar maiúsculas
        - oab: Igualdade com trim, sem diferenciar maiúsculas
        - limit: 1..100 (default: 50)
        - offset: >= 0 (default: 0)
        """
        try:
            filtros = validate_form(PedidoFiltroForm(request.GET))

            listar_service = self.get_service('listar_pedidos_service')
            pagina = listar_service.execute(ListarPedidosQueryDTO(
                status=filtros['status'] or None,
                ticket=filtros['ticket'] or None,
                oab=filtros['oab'] or None,
                limit=filtros['limit'],
                offset=filtros['offset'],
            ))

            body = pagina.to_dict()
            return json_response(
                success=True,
                data=body.pop('data'),
                **body
            )

        except Exception as e:
            return self.handle_exception(e)

    def post(self, request: HttpRequest) -> JsonResponse:
        """
        Cria pedido; uuid, ticket, datas e status são definidos pela API.

        Body JSON:
        {
            "nome_completo": "string (obrigatório)",
            "numero_oab": "string (opcional)",
            "subsecao": "string (opcional)",
            "anotacoes": "string (opcional)"
        }
        """
        try:
            data = validate_form(PedidoCreateForm(self.parse_body(request)))

            criar_service = self.get_service('criar_pedido_service')
            result = criar_service.execute(CriarPedidoInputDTO(**data))

            if result.tem_conflito:
                logger.info(f"API: Pedido {result.pedido.uuid} recusado por OAB duplicada")
                return json_response(
                    success=False,
                    error="Número OAB já possui pedido",
                    data=result.pedido.to_dict(),
                    status=409,
                    **result.conflito.to_dict()
                )

            logger.info(
                f"API: Pedido {result.pedido.uuid} criado com ticket {result.pedido.ticket}"
            )
            return json_response(
                success=True,
                data=result.pedido.to_dict(),
                status=201
            )

        except Exception as e:
            return self.handle_exception(e)


class PedidoAPIDetailView(BaseAPIView):
    """
    API para operações em um pedido específico.

    GET /api/orders/<uuid> - Obter pedido
    PATCH /api/orders/<uuid> - Atualizar pedido
    DELETE /api/orders/<uuid> - Remover pedido
    """

    def get(self, request: HttpRequest, uuid: str) -> JsonResponse:
        """Obtém o pedido."""
        try:
            obter_service = self.get_service('obter_pedido_service')
            pedido = obter_service.execute(validar_uuid(uuid))

            return json_response(success=True, data=pedido.to_dict())

        except Exception as e:
            return self.handle_exception(e)

    def patch(self, request: HttpRequest, uuid: str) -> JsonResponse:
        """
        Atualiza somente os campos enviados.

        Body JSON (todos opcionais):
        {
            "ticket", "numero_oab", "nome_completo", "subsecao",
            "data_solicitacao", "data_liberacao", "status", "anotacoes"
        }
        """
        try:
            uuid = validar_uuid(uuid)
            form = PedidoUpdateForm(self.parse_body(request))
            validate_form(form)

            atualizar_service = self.get_service('atualizar_pedido_service')
            output = atualizar_service.execute(
                uuid, AtualizarPedidoInputDTO(**form.campos_informados())
            )

            return json_response(success=True, data=output.to_dict())

        except Exception as e:
            return self.handle_exception(e)

    def delete(self, request: HttpRequest, uuid: str) -> HttpResponse:
        """Remove o pedido (204 sem corpo). O ticket não volta ao estoque."""
        try:
            remover_service = self.get_service('remover_pedido_service')
            remover_service.execute(validar_uuid(uuid))

            logger.info(f"API: Pedido {uuid} removido")

            return no_content()

        except Exception as e:
            return self.handle_exception(e)
