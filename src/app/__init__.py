"""App: orquestração, casos de uso e infraestrutura do cliente Crypto Pay.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- use_cases/: pipeline de webhook e dispatch de handlers
- infra/: implementações concretas de IO (stores de dedupe)
- protocols/: contratos/interfaces
- observability/: correlation_id e métricas via logs
- constants/: enums e métodos da API

Padrão: app executa; api adapta; config parametriza; utils apoia.
"""
