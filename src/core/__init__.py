"""
Core Domain Layer - O Hexágono.

Este pacote contém a lógica de negócio pura da Certificação API:
tickets (vagas de certificação) e pedidos (solicitações).
Características:
- Sem dependências de frameworks (Django, Google API)
- Testável com a planilha em memória
- Agnóstico a infraestrutura
"""
