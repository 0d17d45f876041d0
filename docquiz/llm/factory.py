"""LLM Client Factory - Criacao do cliente Anthropic e selecao de modelo."""

from __future__ import annotations

from anthropic import AsyncAnthropic

from ..config import QuizConfig, get_config
from ..errors import ConfigurationError
from ..models.enums import PayloadShape
from ..prompts import (
    ANALYSIS_REPORT_TOOL,
    ANALYSIS_SYSTEM_PROMPT,
    QUESTION_SET_TOOL,
    QUIZ_SYSTEM_PROMPT,
)


class LLMClientFactory:
    """Factory para criar clientes do servico de modelo.

    Centraliza a criacao do ``AsyncAnthropic`` para o quiz, permitindo:
    - Verificacao da credencial antes de qualquer chamada
    - Selecao de modelo por tipo de payload (quiz ou analise)
    - Tool e system prompt correspondentes a cada shape

    O SDK e criado com ``max_retries=0``: cada geracao e uma unica ida ao
    servico. Retentativas, quando desejadas, ficam no ``RetryPolicy``.

    Example:
        >>> factory = LLMClientFactory(config)
        >>> client = factory.create_client()
        >>> model = factory.model_for(PayloadShape.QUESTION_SET)
    """

    TOOLS = {
        PayloadShape.QUESTION_SET: QUESTION_SET_TOOL,
        PayloadShape.ANALYSIS_REPORT: ANALYSIS_REPORT_TOOL,
    }

    SYSTEM_PROMPTS = {
        PayloadShape.QUESTION_SET: QUIZ_SYSTEM_PROMPT,
        PayloadShape.ANALYSIS_REPORT: ANALYSIS_SYSTEM_PROMPT,
    }

    def __init__(self, config: QuizConfig | None = None):
        self.config = config or get_config()

    def create_client(self) -> AsyncAnthropic:
        """Cria o cliente assincrono.

        Raises:
            ConfigurationError: se ANTHROPIC_API_KEY nao estiver configurada
        """
        if not self.config.has_credentials:
            raise ConfigurationError("API key is not configured")
        return AsyncAnthropic(
            api_key=self.config.api_key,
            timeout=self.config.request_timeout,
            max_retries=0,
        )

    def model_for(self, kind: PayloadShape) -> str:
        if kind is PayloadShape.QUESTION_SET:
            return self.config.quiz_model
        return self.config.analysis_model

    def tool_for(self, kind: PayloadShape) -> dict:
        return self.TOOLS[kind]

    def system_prompt_for(self, kind: PayloadShape) -> str:
        return self.SYSTEM_PROMPTS[kind]
