"""
Django Forms para validação de entrada de Pedidos.

Forms validam apenas o formato do payload. Regras como OAB duplicada
e atribuição de ticket ficam no CriarPedidoService.
"""

import uuid as uuid_lib
from typing import Any, Dict

from django import forms

from src.core.shared.exceptions import ValidationError

DEFAULT_LIMIT = 50
MAX_LIMIT = 100


def validar_uuid(value: str) -> str:
    """
    Forma canônica (minúsculas, com hífens) do uuid da rota.

    Raises:
        ValidationError: Se não for um UUID
    """
    try:
        return str(uuid_lib.UUID(value))
    except (ValueError, AttributeError, TypeError) as e:
        raise ValidationError("Formato de UUID inválido", field='uuid') from e


class PedidoCreateForm(forms.Form):
    """
    Form para criação de pedido.

    uuid, ticket, datas e status são definidos pela API.
    """

    nome_completo = forms.CharField(
        label='Nome completo',
        error_messages={
            'required': 'nome_completo é obrigatório',
        },
    )

    numero_oab = forms.CharField(label='Número OAB', required=False)

    subsecao = forms.CharField(label='Subseção', required=False)

    anotacoes = forms.CharField(label='Anotações', required=False, strip=False)


class PedidoUpdateForm(forms.Form):
    """
    Form para alteração parcial (PATCH).

    Todos os campos são opcionais; `ticket` e `nome_completo`, quando
    enviados, não podem ser vazios. `uuid` não é aceito (é ignorado).
    """

    ticket = forms.CharField(label='Ticket', required=False)
    numero_oab = forms.CharField(label='Número OAB', required=False)
    nome_completo = forms.CharField(label='Nome completo', required=False)
    subsecao = forms.CharField(label='Subseção', required=False)
    data_solicitacao = forms.CharField(label='Data de solicitação', required=False)
    data_liberacao = forms.CharField(label='Data de liberação', required=False)
    status = forms.CharField(label='Status', required=False)
    anotacoes = forms.CharField(label='Anotações', required=False, strip=False)

    NAO_VAZIOS = ('ticket', 'nome_completo')

    def _informado(self, name: str) -> bool:
        return self.data.get(name) is not None

    def clean(self):
        cleaned_data = super().clean()
        for name in self.NAO_VAZIOS:
            if self._informado(name) and not cleaned_data.get(name):
                self.add_error(name, f'{name} não pode ser vazio')
        return cleaned_data

    def campos_informados(self) -> Dict[str, Any]:
        """
        Somente os campos presentes no body (null conta como ausente).

        Deve ser chamado após is_valid().
        """
        return {
            name: value
            for name, value in self.cleaned_data.items()
            if self._informado(name)
        }


class PedidoFiltroForm(forms.Form):
    """
    Query string da listagem.

    limit: 1..100 (padrão 50); offset: >= 0 (padrão 0).
    """

    status = forms.CharField(required=False)
    ticket = forms.CharField(required=False)
    oab = forms.CharField(required=False)

    limit = forms.IntegerField(
        required=False,
        min_value=1,
        max_value=MAX_LIMIT,
        error_messages={
            'invalid': 'limit deve ser um número inteiro',
            'min_value': 'limit deve ser no mínimo 1',
            'max_value': f'limit deve ser no máximo {MAX_LIMIT}',
        },
    )

    offset = forms.IntegerField(
        required=False,
        min_value=0,
        error_messages={
            'invalid': 'offset deve ser um número inteiro',
            'min_value': 'offset deve ser no mínimo 0',
        },
    )

    def clean_limit(self):
        limit = self.cleaned_data.get('limit')
        return DEFAULT_LIMIT if limit is None else limit

    def clean_offset(self):
        return self.cleaned_data.get('offset') or 0
