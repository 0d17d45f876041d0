"""Generation Client - Requisicao estruturada ao modelo + validacao do retorno."""

from __future__ import annotations

import base64
import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import anthropic

from ..config import QuizConfig, get_config
from ..errors import ConfigurationError, MalformedOutput, SchemaViolation, ServiceUnavailable
from ..models.enums import PayloadShape, QuizDifficulty
from ..models.schemas import (
    MAX_OPTIONS,
    MIN_OPTIONS,
    AnalysisReport,
    QuestionReview,
    QuestionSet,
    ScoreSummary,
)
from ..models.validator import validate
from ..prompts import ANALYSIS_PROMPT, DIFFICULTY_GUIDELINES, QUIZ_GENERATION_PROMPT
from .factory import LLMClientFactory

logger = logging.getLogger(__name__)

PDF_MEDIA_TYPE = "application/pdf"
TEXT_MEDIA_TYPE = "text/plain"
SUPPORTED_MEDIA_TYPES = (PDF_MEDIA_TYPE, TEXT_MEDIA_TYPE)


@dataclass(frozen=True)
class QuizGenerationContext:
    """Material de origem para gerar um quiz."""

    document: bytes
    difficulty: QuizDifficulty = QuizDifficulty.MEDIUM
    media_type: str = PDF_MEDIA_TYPE


@dataclass(frozen=True)
class AnalysisContext:
    """Resultado do quiz para gerar o relatorio de analise."""

    question_set: QuestionSet
    reviews: Sequence[QuestionReview]
    summary: ScoreSummary

    @property
    def difficulty(self) -> QuizDifficulty:
        return self.question_set.difficulty


GenerationContext = QuizGenerationContext | AnalysisContext


class GenerationClient:
    """Cliente sem estado para geracao estruturada.

    Cada chamada de ``generate`` faz exatamente uma ida ao servico:
    monta a requisicao (tool forcada com o shape alvo), recebe um candidato,
    passa pelo Schema Validator e devolve a entidade tipada. Nao ha retry
    interno; ver ``RetryPolicy``.

    Example:
        >>> client = GenerationClient()
        >>> qs = await client.generate(
        ...     PayloadShape.QUESTION_SET,
        ...     QuizGenerationContext(document=pdf_bytes, difficulty=QuizDifficulty.HARD),
        ... )
    """

    def __init__(self, config: QuizConfig | None = None, factory: LLMClientFactory | None = None):
        self.config = config or get_config()
        self.factory = factory or LLMClientFactory(self.config)

    async def generate(
        self, kind: PayloadShape, context: GenerationContext
    ) -> QuestionSet | AnalysisReport:
        """Gera e valida um payload do tipo ``kind``.

        Raises:
            ConfigurationError: credencial ausente ou rejeitada
            ServiceUnavailable: falha de rede, timeout ou resposta nao 2xx
            MalformedOutput: candidato reprovado pelo validator (``raw`` anexado)
        """
        if not self.config.has_credentials:
            raise ConfigurationError("API key is not configured")

        request = self.build_request(kind, context)
        logger.info(f"Requisicao de geracao: kind={kind.value} model={request['model']}")

        client = self.factory.create_client()
        try:
            message = await client.messages.create(**request)
        except (anthropic.AuthenticationError, anthropic.PermissionDeniedError) as exc:
            raise ConfigurationError(f"Model service rejected the credentials: {exc}") from exc
        except anthropic.APIStatusError as exc:
            raise ServiceUnavailable(
                f"Model service returned HTTP {exc.status_code}"
            ) from exc
        except anthropic.APIConnectionError as exc:
            raise ServiceUnavailable(f"Could not reach the model service: {exc}") from exc
        finally:
            await client.close()

        candidate = self._extract_candidate(message, self.factory.tool_for(kind)["name"])
        return self._validate_candidate(kind, context, candidate)

    # -------------------------------------------------------------------------
    # Request
    # -------------------------------------------------------------------------

    def build_request(self, kind: PayloadShape, context: GenerationContext) -> dict[str, Any]:
        """Monta os kwargs de ``messages.create`` para o shape alvo."""
        tool = self.factory.tool_for(kind)
        if kind is PayloadShape.QUESTION_SET:
            if not isinstance(context, QuizGenerationContext):
                raise TypeError("QUESTION_SET generation requires a QuizGenerationContext")
            content = self._quiz_content(context, tool["name"])
        else:
            if not isinstance(context, AnalysisContext):
                raise TypeError("ANALYSIS_REPORT generation requires an AnalysisContext")
            content = [{"type": "text", "text": self._analysis_prompt(context, tool["name"])}]

        return {
            "model": self.factory.model_for(kind),
            "max_tokens": self.config.max_tokens,
            "system": self.factory.system_prompt_for(kind),
            "tools": [tool],
            "tool_choice": {"type": "tool", "name": tool["name"]},
            "messages": [{"role": "user", "content": content}],
        }

    def _quiz_content(self, context: QuizGenerationContext, tool_name: str) -> list[dict]:
        if context.media_type not in SUPPORTED_MEDIA_TYPES:
            raise ValueError(f"Unsupported document type: {context.media_type}")

        if context.media_type == PDF_MEDIA_TYPE:
            source = {
                "type": "base64",
                "media_type": PDF_MEDIA_TYPE,
                "data": base64.standard_b64encode(context.document).decode("ascii"),
            }
        else:
            source = {
                "type": "text",
                "media_type": TEXT_MEDIA_TYPE,
                "data": context.document.decode("utf-8", errors="replace"),
            }

        prompt = QUIZ_GENERATION_PROMPT.format(
            difficulty=context.difficulty.value,
            min_options=MIN_OPTIONS,
            max_options=MAX_OPTIONS,
            option_guideline=DIFFICULTY_GUIDELINES[context.difficulty],
            tool_name=tool_name,
        )
        return [{"type": "document", "source": source}, {"type": "text", "text": prompt}]

    def _analysis_prompt(self, context: AnalysisContext, tool_name: str) -> str:
        records = [
            {
                "question": review.question,
                "userAnswer": review.user_answer,
                "correctAnswer": review.correct_answer,
                "isCorrect": review.is_correct,
            }
            for review in context.reviews
        ]
        summary = context.summary
        return ANALYSIS_PROMPT.format(
            total_questions=summary.total_questions,
            difficulty=context.difficulty.value,
            correct_count=summary.correct_count,
            incorrect_count=summary.incorrect_count,
            unanswered_count=summary.unanswered_count,
            score_percent=summary.score_percent,
            question_records=json.dumps(records, indent=2, ensure_ascii=False),
            tool_name=tool_name,
        )

    # -------------------------------------------------------------------------
    # Response
    # -------------------------------------------------------------------------

    @staticmethod
    def _extract_candidate(message: Any, tool_name: str) -> Any:
        """Retorna o input da tool chamada ou falha com o texto recebido."""
        texts = []
        for block in getattr(message, "content", None) or []:
            block_type = getattr(block, "type", None)
            if block_type == "tool_use" and getattr(block, "name", None) == tool_name:
                return block.input
            if block_type == "text":
                texts.append(block.text)

        raw = "\n".join(texts)
        logger.warning(f"Modelo nao chamou a tool '{tool_name}'")
        raise MalformedOutput("Model did not return structured output", raw=raw)

    def _validate_candidate(
        self, kind: PayloadShape, context: GenerationContext, candidate: Any
    ) -> QuestionSet | AnalysisReport:
        payload = candidate
        if kind is PayloadShape.QUESTION_SET and isinstance(candidate, dict):
            # A dificuldade vem do pedido, nao do modelo
            payload = {**candidate, "difficulty": context.difficulty.value}

        try:
            return validate(payload, kind)
        except SchemaViolation as violation:
            logger.warning(f"Saida do modelo rejeitada ({kind.value}): {violation}")
            raise MalformedOutput(
                f"Model output failed validation: {violation}",
                raw=candidate,
                violation=violation,
            ) from violation
