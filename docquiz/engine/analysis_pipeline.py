"""Analysis Pipeline - Pontuacao + relatorio de remediacao gerado pelo modelo."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from ..llm.client import AnalysisContext, GenerationContext
from ..models.enums import PayloadShape
from ..models.schemas import AnalysisReport, QuestionReview, QuestionSet, ScoreSummary
from ..storage.session_store import QuizSessionStore
from .scoring_engine import QuizScoringEngine

logger = logging.getLogger(__name__)


class Generator(Protocol):
    """``GenerationClient`` ou ``RetryPolicy``."""

    async def generate(self, kind: PayloadShape, context: GenerationContext): ...


@dataclass(frozen=True)
class AnalysisOutcome:
    """Relatorio validado junto com a pontuacao que o originou."""

    report: AnalysisReport
    summary: ScoreSummary
    reviews: list[QuestionReview]


class AnalysisPipeline:
    """Compoe Scoring Engine e Generation Client.

    Faz exatamente uma chamada de geracao por analise. Qualquer
    ``GenerationError`` sobe sem alteracao: nao existe relatorio parcial
    nem conteudo de placeholder.
    """

    def __init__(self, generator: Generator, scoring: QuizScoringEngine | None = None):
        self.generator = generator
        self.scoring = scoring or QuizScoringEngine()

    async def analyze(
        self, question_set: QuestionSet, answer_trace: Sequence[int | None]
    ) -> AnalysisOutcome:
        """Pontua o trace e pede o relatorio ao modelo.

        Raises:
            InvalidTrace: trace com tamanho diferente do quiz
            GenerationError: falha da geracao (propagada)
        """
        summary = self.scoring.score(question_set, answer_trace)
        reviews = self.scoring.review(question_set, answer_trace)

        context = AnalysisContext(question_set=question_set, reviews=reviews, summary=summary)
        logger.info(
            f"Analise solicitada: {summary.correct_count}/{summary.total_questions} "
            f"({summary.score_percent}%)"
        )
        report = await self.generator.generate(PayloadShape.ANALYSIS_REPORT, context)
        return AnalysisOutcome(report=report, summary=summary, reviews=reviews)

    async def analyze_session(self, sessions: QuizSessionStore) -> AnalysisOutcome:
        """Mesmo fluxo, lendo quiz e respostas do session store."""
        question_set, answer_trace = sessions.load()
        return await self.analyze(question_set, answer_trace)
