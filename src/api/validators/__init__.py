"""Validators: motor de validação de parâmetros de APIs externas.

Estrutura:
- crypto_pay/: limites, constraints e regras cruzadas da API Crypto Pay
"""

__all__: list[str] = []
