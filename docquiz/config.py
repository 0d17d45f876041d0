# =============================================================================
# CONFIGURACAO CENTRALIZADA - Document Quiz Engine
# =============================================================================
# Le variaveis de ambiente (e .env) uma vez e expoe um QuizConfig imutavel.
# =============================================================================

from __future__ import annotations

import os
from dataclasses import asdict, dataclass
from typing import Any

from dotenv import load_dotenv

DEFAULT_QUIZ_MODEL = "claude-sonnet-4-5"
DEFAULT_ANALYSIS_MODEL = "claude-sonnet-4-5"


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class QuizConfig:
    """Configuracao do engine.

    Attributes:
        api_key: Credencial do servico de modelo (ANTHROPIC_API_KEY)
        quiz_model: Modelo usado na geracao de quiz
        analysis_model: Modelo usado no relatorio de analise
        max_tokens: Limite de tokens de saida por requisicao
        request_timeout: Timeout (s) de cada chamada ao modelo
        max_retries: Retentativas do RetryPolicy (0 = chamada unica)
        max_upload_mb: Tamanho maximo do documento enviado
        log_level: Nivel de log do servidor
    """

    api_key: str = ""
    quiz_model: str = DEFAULT_QUIZ_MODEL
    analysis_model: str = DEFAULT_ANALYSIS_MODEL
    max_tokens: int = 8192
    request_timeout: float = 120.0
    max_retries: int = 0
    max_upload_mb: int = 20
    log_level: str = "INFO"

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_key)

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024

    @classmethod
    def from_env(cls) -> QuizConfig:
        """Monta configuracao a partir das variaveis de ambiente."""
        return cls(
            api_key=os.getenv("ANTHROPIC_API_KEY", "").strip(),
            quiz_model=os.getenv("QUIZ_MODEL", "").strip() or DEFAULT_QUIZ_MODEL,
            analysis_model=os.getenv("ANALYSIS_MODEL", "").strip() or DEFAULT_ANALYSIS_MODEL,
            max_tokens=_env_int("GENERATION_MAX_TOKENS", 8192),
            request_timeout=_env_float("GENERATION_TIMEOUT", 120.0),
            max_retries=max(0, _env_int("GENERATION_MAX_RETRIES", 0)),
            max_upload_mb=_env_int("MAX_UPLOAD_MB", 20),
            log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO",
        )

    def to_dict(self) -> dict[str, Any]:
        """Representacao segura (sem a credencial) para debug."""
        data = asdict(self)
        data["api_key"] = "***" if self.api_key else ""
        return data


_config: QuizConfig | None = None


def get_config() -> QuizConfig:
    """Retorna a configuracao em cache (carrega .env na primeira chamada)."""
    global _config
    if _config is None:
        load_dotenv()
        _config = QuizConfig.from_env()
    return _config


def reload_config() -> QuizConfig:
    """Descarta o cache e le o ambiente novamente."""
    global _config
    _config = None
    return get_config()
