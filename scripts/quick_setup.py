#!/usr/bin/env python
"""
Setup rápido da planilha para desenvolvimento local.

Este script:
1. Configura Django settings (lê o .env)
2. Verifica acesso à planilha (SPREADSHEET_ID + credenciais)
3. Confere/escreve o cabeçalho das abas "tickets" e "pedidos"
4. Cadastra tickets de exemplo (opcional)

Uso:
    python scripts/quick_setup.py
    python scripts/quick_setup.py --with-sample-data
    python scripts/quick_setup.py --check-only
"""

import os
import sys
import argparse

# Adicionar raiz do projeto ao path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

SAMPLE_TICKETS = [
    '68637750800',
    '68637750801',
    '68637750802',
    '68637750803',
    '68637750804',
]


def setup_django():
    """Configura Django para uso standalone."""
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'src.config.settings')

    import django
    django.setup()


def expected_headers():
    from src.adapters.sheets.mappers import PedidoRowMapper, TicketRowMapper
    from src.adapters.sheets.repositories import PEDIDOS_SHEET, TICKETS_SHEET

    return {
        TICKETS_SHEET: list(TicketRowMapper.COLUMNS),
        PEDIDOS_SHEET: list(PedidoRowMapper.COLUMNS),
    }


def check_connection(gateway):
    """Lê a primeira linha de cada aba."""
    from src.core.shared.exceptions import StoreError

    print("🔍 Verificando acesso à planilha...")

    try:
        for sheet_name in expected_headers():
            gateway.read_range(sheet_name, f"{sheet_name}!1:1")
        print("✅ Conexão OK!")
        return True
    except StoreError as e:
        print(f"❌ Erro de conexão: {e.message}")
        return False


def ensure_headers(gateway):
    """Escreve o cabeçalho nas abas vazias; avisa se um existente difere."""
    print("📋 Conferindo cabeçalhos...")

    for sheet_name, header in expected_headers().items():
        rows = gateway.read_range(sheet_name, f"{sheet_name}!1:1")
        current = rows[0] if rows else []

        if not any(current):
            gateway.append_row(sheet_name, f"{sheet_name}!A1", header)
            print(f"   ✓ {sheet_name}: cabeçalho criado")
        elif current[:len(header)] != header:
            print(f"   ⚠️  {sheet_name}: cabeçalho {current} difere de {header}")
        else:
            print(f"   ✓ {sheet_name}: OK")


def create_sample_data(container):
    """Cadastra tickets de exemplo (pula os que já existem)."""
    from src.core.shared.exceptions import ConflictError
    from src.core.tickets.dtos import CriarTicketInputDTO

    criar_service = container.criar_ticket_service()

    print("📝 Cadastrando tickets de exemplo...")

    criados = 0
    for ticket in SAMPLE_TICKETS:
        try:
            criar_service.execute(CriarTicketInputDTO(ticket=ticket))
        except ConflictError:
            print(f"   - {ticket} já existe")
            continue
        criados += 1
        print(f"   ✓ {ticket}")

    print(f"✅ {criados} tickets criados!")


def show_info():
    """Mostra informações do setup."""
    from django.conf import settings

    print("\n" + "=" * 60)
    print("📊 Informações do Setup")
    print("=" * 60)
    print(f"  Planilha: {settings.SPREADSHEET_ID}")
    print(f"  Cache TTL: {settings.SHEETS_CACHE_TTL_SECONDS:g}s")
    print(f"  Timeout do write lock: {settings.WRITE_LOCK_TIMEOUT_SECONDS:g}s")
    print(f"  Debug Mode: {settings.DEBUG}")
    print("=" * 60)
    print("\n🚀 Próximos passos:")
    print("   1. gunicorn src.config.wsgi:application --threads 8")
    print("   2. curl http://localhost:8000/health/")
    print("   3. curl -u usuario:senha http://localhost:8000/api/tickets/")
    print("\n")


def main():
    parser = argparse.ArgumentParser(description='Setup rápido da planilha')
    parser.add_argument(
        '--with-sample-data',
        action='store_true',
        help='Cadastrar tickets de exemplo'
    )
    parser.add_argument(
        '--check-only',
        action='store_true',
        help='Apenas verificar acesso à planilha'
    )

    args = parser.parse_args()

    print("\n" + "=" * 60)
    print("🔧 Certificação API - Quick Setup")
    print("=" * 60 + "\n")

    # Configurar Django
    setup_django()

    from src.config.container import get_container
    from src.core.shared.exceptions import StoreError

    container = get_container()
    try:
        gateway = container.sheets_gateway()
    except StoreError as e:
        print(f"❌ {e.message}")
        return

    if not check_connection(gateway):
        print("\n⚠️  Confira SPREADSHEET_ID e GOOGLE_APPLICATION_CREDENTIALS no .env")
        print("   e se a planilha foi compartilhada com a service account.")
        return

    if args.check_only:
        return

    ensure_headers(gateway)

    if args.with_sample_data:
        create_sample_data(container)

    show_info()


if __name__ == '__main__':
    main()
