"""
Documento OpenAPI 3 da API.

Servido em /docs.json e renderizado pelo Swagger UI em /docs.
"""

from typing import Any, Dict

from src.adapters.django_app.pedidos.forms import DEFAULT_LIMIT, MAX_LIMIT

TITLE = "Certificação API"
VERSION = "1.0.0"


def _ref(name: str) -> Dict[str, str]:
    return {"$ref": f"#/components/schemas/{name}"}


def _json_content(schema: Dict[str, Any]) -> Dict[str, Any]:
    return {"application/json": {"schema": schema}}


def _success(data_schema: Dict[str, Any], description: str) -> Dict[str, Any]:
    return {
        "description": description,
        "content": _json_content({
            "allOf": [
                _ref("SuccessResponse"),
                {"properties": {"data": data_schema}},
            ]
        }),
    }


def _error(description: str) -> Dict[str, Any]:
    return {"description": description, "content": _json_content(_ref("ErrorResponse"))}


def _path_param(name: str, **schema: Any) -> Dict[str, Any]:
    return {
        "name": name,
        "in": "path",
        "required": True,
        "schema": {"type": "string", **schema},
    }


def _query_param(name: str, description: str, **schema: Any) -> Dict[str, Any]:
    return {
        "name": name,
        "in": "query",
        "required": False,
        "description": description,
        "schema": schema or {"type": "string"},
    }


def _body(schema_name: str) -> Dict[str, Any]:
    return {"required": True, "content": _json_content(_ref(schema_name))}


ERROS_COMUNS = {
    "401": _error("Credenciais ausentes ou inválidas"),
    "429": _error("Limite de requisições ou de falhas de autenticação excedido"),
    "502": _error("Falha ao acessar a planilha"),
    "503": _error("Escrita não concluída a tempo (write lock)"),
}


def _schemas() -> Dict[str, Any]:
    texto = {"type": "string"}
    return {
        "Ticket": {
            "type": "object",
            "properties": {
                "ticket": {"type": "string", "example": "68637750800"},
                "status": {
                    "type": "string",
                    "example": "",
                    "description": "Vazio = disponível; \"Atribuído\" após a atribuição",
                },
            },
        },
        "TicketInput": {
            "type": "object",
            "required": ["ticket"],
            "properties": {"ticket": {"type": "string", "example": "68637750800"}},
        },
        "Pedido": {
            "type": "object",
            "properties": {
                "uuid": {"type": "string", "format": "uuid"},
                "ticket": {"type": "string", "example": "68637750800"},
                "numero_oab": {"type": "string", "example": "123456"},
                "nome_completo": {"type": "string", "example": "João da Silva"},
                "subsecao": {"type": "string", "example": "São Paulo"},
                "data_solicitacao": {"type": "string", "example": "2026-02-13 10:00:00"},
                "data_liberacao": {"type": "string", "example": "2026-02-13 10:00:00"},
                "status": {"type": "string", "example": "Aprovado"},
                "anotacoes": {"type": "string", "example": "Primeira certificação"},
            },
        },
        "PedidoCreate": {
            "type": "object",
            "required": ["nome_completo"],
            "properties": {
                "nome_completo": {"type": "string", "example": "João da Silva"},
                "numero_oab": texto,
                "subsecao": texto,
                "anotacoes": texto,
            },
        },
        "PedidoUpdate": {
            "type": "object",
            "description": "Só os campos enviados são alterados; null conta como ausente",
            "properties": {
                name: texto
                for name in (
                    "ticket", "numero_oab", "nome_completo", "subsecao",
                    "data_solicitacao", "data_liberacao", "status", "anotacoes",
                )
            },
        },
        "SuccessResponse": {
            "type": "object",
            "properties": {
                "success": {"type": "boolean", "example": True},
                "data": {"type": "object"},
            },
        },
        "ListResponse": {
            "type": "object",
            "properties": {
                "success": {"type": "boolean", "example": True},
                "count": {"type": "integer", "example": 2},
                "data": {"type": "array", "items": {}},
            },
        },
        "PaginatedPedidos": {
            "allOf": [
                _ref("ListResponse"),
                {
                    "properties": {
                        "data": {"type": "array", "items": _ref("Pedido")},
                        "total": {"type": "integer", "example": 120},
                        "limit": {"type": "integer", "example": DEFAULT_LIMIT},
                        "offset": {"type": "integer", "example": 0},
                    }
                },
            ]
        },
        "OabConflict": {
            "type": "object",
            "description": "O pedido FOI gravado como Recusado, sem ticket",
            "properties": {
                "success": {"type": "boolean", "example": False},
                "error": {"type": "string", "example": "Número OAB já possui pedido"},
                "data": _ref("Pedido"),
                "existing_ticket": {"type": "string", "example": "68637750800"},
                "existing_date": {"type": "string", "example": "2026-02-13 10:00:00"},
            },
        },
        "ErrorResponse": {
            "type": "object",
            "properties": {
                "success": {"type": "boolean", "example": False},
                "error": {"type": "string", "example": "Mensagem de erro"},
            },
        },
    }


def _ticket_paths() -> Dict[str, Any]:
    detalhe = [_path_param("ticket")]
    return {
        "/api/tickets": {
            "get": {
                "summary": "Listar tickets",
                "tags": ["Tickets"],
                "responses": {
                    "200": {
                        "description": "Lista de tickets",
                        "content": _json_content({
                            "allOf": [
                                _ref("ListResponse"),
                                {"properties": {"data": {"items": _ref("Ticket")}}},
                            ]
                        }),
                    },
                    **ERROS_COMUNS,
                },
            },
            "post": {
                "summary": "Cadastrar ticket",
                "tags": ["Tickets"],
                "requestBody": _body("TicketInput"),
                "responses": {
                    "201": _success(_ref("Ticket"), "Ticket cadastrado"),
                    "400": _error("Payload inválido"),
                    "409": _error("Ticket já existe"),
                    **ERROS_COMUNS,
                },
            },
        },
        "/api/tickets/{ticket}": {
            "get": {
                "summary": "Obter ticket",
                "tags": ["Tickets"],
                "parameters": detalhe,
                "responses": {
                    "200": _success(_ref("Ticket"), "Ticket"),
                    "404": _error("Ticket não encontrado"),
                    **ERROS_COMUNS,
                },
            },
            "put": {
                "summary": "Trocar o valor do ticket",
                "tags": ["Tickets"],
                "parameters": detalhe,
                "requestBody": _body("TicketInput"),
                "responses": {
                    "200": _success(_ref("Ticket"), "Ticket atualizado"),
                    "400": _error("Payload inválido"),
                    "404": _error("Ticket não encontrado"),
                    "409": _error("Novo valor já existe"),
                    **ERROS_COMUNS,
                },
            },
            "delete": {
                "summary": "Remover ticket",
                "tags": ["Tickets"],
                "parameters": detalhe,
                "responses": {
                    "204": {"description": "Removido"},
                    "404": _error("Ticket não encontrado"),
                    **ERROS_COMUNS,
                },
            },
        },
    }


def _pedido_paths() -> Dict[str, Any]:
    detalhe = [_path_param("uuid", format="uuid")]
    return {
        "/api/orders": {
            "get": {
                "summary": "Listar pedidos",
                "tags": ["Pedidos"],
                "parameters": [
                    _query_param("status", "Igualdade sem diferenciar maiúsculas"),
                    _query_param("ticket", "Igualdade sem diferenciar maiúsculas"),
                    _query_param("oab", "Igualdade com trim, sem diferenciar maiúsculas"),
                    _query_param(
                        "limit", "Tamanho da página",
                        type="integer", minimum=1, maximum=MAX_LIMIT, default=DEFAULT_LIMIT,
                    ),
                    _query_param(
                        "offset", "Deslocamento", type="integer", minimum=0, default=0,
                    ),
                ],
                "responses": {
                    "200": {
                        "description": "Página de pedidos",
                        "content": _json_content(_ref("PaginatedPedidos")),
                    },
                    "400": _error("Parâmetros de paginação inválidos"),
                    **ERROS_COMUNS,
                },
            },
            "post": {
                "summary": "Criar pedido (ticket atribuído automaticamente)",
                "tags": ["Pedidos"],
                "requestBody": _body("PedidoCreate"),
                "responses": {
                    "201": _success(_ref("Pedido"), "Pedido aprovado com ticket"),
                    "400": _error("Payload inválido"),
                    "409": {
                        "description": "OAB já possui pedido; novo pedido gravado como Recusado",
                        "content": _json_content(_ref("OabConflict")),
                    },
                    "422": _error("Nenhum ticket disponível"),
                    **ERROS_COMUNS,
                },
            },
        },
        "/api/orders/{uuid}": {
            "get": {
                "summary": "Obter pedido",
                "tags": ["Pedidos"],
                "parameters": detalhe,
                "responses": {
                    "200": _success(_ref("Pedido"), "Pedido"),
                    "400": _error("Formato de UUID inválido"),
                    "404": _error("Pedido não encontrado"),
                    **ERROS_COMUNS,
                },
            },
            "patch": {
                "summary": "Atualizar pedido (parcial)",
                "tags": ["Pedidos"],
                "parameters": detalhe,
                "requestBody": _body("PedidoUpdate"),
                "responses": {
                    "200": _success(_ref("Pedido"), "Pedido atualizado"),
                    "400": _error("Payload ou UUID inválido"),
                    "404": _error("Pedido não encontrado"),
                    **ERROS_COMUNS,
                },
            },
            "delete": {
                "summary": "Remover pedido",
                "tags": ["Pedidos"],
                "parameters": detalhe,
                "responses": {
                    "204": {"description": "Removido; o ticket não volta ao estoque"},
                    "400": _error("Formato de UUID inválido"),
                    "404": _error("Pedido não encontrado"),
                    **ERROS_COMUNS,
                },
            },
        },
    }


def build_schema() -> Dict[str, Any]:
    """Documento OpenAPI completo (dict pronto para JSON)."""
    return {
        "openapi": "3.0.3",
        "info": {
            "title": TITLE,
            "version": VERSION,
            "description": "Tickets e pedidos de certificação sobre uma planilha Google",
        },
        "security": [{"basicAuth": []}],
        "components": {
            "securitySchemes": {"basicAuth": {"type": "http", "scheme": "basic"}},
            "schemas": _schemas(),
        },
        "paths": {
            "/health": {
                "get": {
                    "summary": "Health check",
                    "tags": ["Sistema"],
                    "security": [],
                    "responses": {"200": {"description": "Serviço no ar"}},
                }
            },
            **_ticket_paths(),
            **_pedido_paths(),
        },
    }
