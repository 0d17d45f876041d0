# =============================================================================
# CONFTEST - Pytest Fixtures Globais
# =============================================================================
# Ambiente de teste sem chamadas reais ao servico de modelo
# =============================================================================

import os
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

# Adicionar root ao path
sys.path.insert(0, str(Path(__file__).parent))


# =============================================================================
# FIXTURES DE AMBIENTE
# =============================================================================


@pytest.fixture(autouse=True)
def setup_test_env():
    """Configura variaveis de ambiente e recarrega o QuizConfig em cache."""
    from docquiz.config import reload_config

    env_vars = {
        "ANTHROPIC_API_KEY": "test-key-123",
        "GENERATION_MAX_RETRIES": "0",
        "LOG_LEVEL": "ERROR",
    }
    with patch.dict(os.environ, env_vars):
        reload_config()
        yield
    reload_config()
