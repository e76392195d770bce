"""Configuração do pytest para o cliente Crypto Pay."""

import sys
from pathlib import Path

import pytest

# Adiciona src/ ao PYTHONPATH para permitir imports absolutos
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Limpa caches de settings entre testes (env muda via monkeypatch)."""
    from config.settings import (
        get_base_settings,
        get_crypto_pay_settings,
        get_dedupe_settings,
    )

    yield
    get_base_settings.cache_clear()
    get_crypto_pay_settings.cache_clear()
    get_dedupe_settings.cache_clear()
