"""
Testes para o AtribuidorDeTickets.
"""

from unittest.mock import Mock

import pytest

from src.adapters.sheets.repositories import SheetsTicketRepository
from src.core.shared.cache import SnapshotCache
from src.core.shared.exceptions import NoTicketsAvailableError, StoreUnavailableError
from src.core.shared.interfaces import InMemorySheetsGateway
from src.core.tickets.allocator import AtribuidorDeTickets
from src.core.tickets.entities import TicketEntity

from tests.helpers import planilha


class TestAtribuidorDeTickets:
    """Testes de atribuição de ticket."""

    def test_atribui_primeiro_disponivel(self, ticket_repo, gateway):
        """Deve marcar e devolver o primeiro ticket com status vazio."""
        ticket = AtribuidorDeTickets(ticket_repo).atribuir_disponivel()

        assert ticket == "68637750800"
        assert gateway.calls == [("update", "tickets", 2, ["68637750800", "Atribuído"])]

    def test_pula_tickets_ja_atribuidos(self):
        gateway = InMemorySheetsGateway(planilha(tickets=[
            ["A", "Atribuído"], ["", ""], ["B", "Usado"], ["C", ""],
        ]))
        repo = SheetsTicketRepository(gateway, SnapshotCache("tickets"))

        assert AtribuidorDeTickets(repo).atribuir_disponivel() == "C"
        # linha 5: cabeçalho + A + vazia + B
        assert gateway.calls == [("update", "tickets", 5, ["C", "Atribuído"])]

    def test_nunca_repete_ticket(self, ticket_repo):
        """Chamadas sequenciais devem entregar tickets diferentes."""
        atribuidor = AtribuidorDeTickets(ticket_repo)

        entregues = [atribuidor.atribuir_disponivel() for _ in range(3)]

        assert entregues == ["68637750800", "68637750801", "68637750802"]

    def test_sem_tickets_disponiveis(self, ticket_repo, gateway):
        """Deve lançar NoTicketsAvailableError sem escrever nada."""
        atribuidor = AtribuidorDeTickets(ticket_repo)
        for _ in range(3):
            atribuidor.atribuir_disponivel()
        gateway.calls.clear()

        with pytest.raises(NoTicketsAvailableError):
            atribuidor.atribuir_disponivel()

        assert gateway.calls == []

    def test_ignora_cache_velho(self, ticket_repo, gateway):
        """Ticket marcado por fora não deve ser entregue mesmo com cache."""
        ticket_repo.list_all()
        gateway.update_row("tickets", 2, ["68637750800", "Atribuído"])

        assert AtribuidorDeTickets(ticket_repo).atribuir_disponivel() == "68637750801"

    def test_invalida_cache_de_tickets(self, ticket_repo):
        ticket_repo.list_all()

        AtribuidorDeTickets(ticket_repo).atribuir_disponivel()

        assert not ticket_repo.cache.is_fresh

    def test_falha_na_planilha_propaga_e_invalida(self):
        """Erro diferente de falta de ticket deve propagar como ele mesmo."""
        repo = Mock()
        repo.find_first_available.return_value = (2, TicketEntity("A"))
        repo.update.side_effect = StoreUnavailableError("HTTP 500")

        with pytest.raises(StoreUnavailableError):
            AtribuidorDeTickets(repo).atribuir_disponivel()

        repo.invalidate.assert_called_once()
