"""API: camada de borda com o CryptoBot.

Responsabilidades:
- Chamar a API Crypto Pay (transporte HTTP e fachada)
- Construir requests tipados em estágios
- Validar parâmetros contra os limites da API
- Verificar assinatura e parsear updates de webhook
- Expor a rota HTTP do webhook

Subpastas:
- connectors/: transporte, modelos e webhook do Crypto Pay
- payload_builders/: builders de requests por operação
- validators/: motor de validação (constraints, normalizers, regras)
- routes/: endpoints HTTP (webhook, health)

NÃO PODE conter: dispatch de handlers, dedupe, orquestração de use cases.
"""
