"""Quiz Scoring Engine - Pontuacao e revisao a partir do answer trace."""

from __future__ import annotations

from collections.abc import Sequence

from ..errors import InvalidTrace
from ..models.schemas import Question, QuestionReview, QuestionSet, ScoreSummary
from ..models.state import trace_violation


class QuizScoringEngine:
    """Motor de pontuacao para quizzes.

    Funcoes puras sobre (question set, answer trace): recalcular e sempre
    idempotente e nada e persistido.

    Regras:
        - Acerto: questao respondida e igual a ``correctAnswer``
        - Erro: respondida e diferente de ``correctAnswer``
        - Nao respondida (None) nao conta como acerto nem erro
        - ``scorePercent`` arredonda meio para cima (12.5 -> 13, 62.5 -> 63)

    Example:
        >>> engine = QuizScoringEngine()
        >>> summary = engine.score(question_set, [1, None])
        >>> summary.score_percent
        50
    """

    @staticmethod
    def round_percent(correct: int, total: int) -> int:
        """Percentual inteiro, meio para cima, sem erro de ponto flutuante."""
        if total <= 0:
            return 0
        return (200 * correct + total) // (2 * total)

    @staticmethod
    def is_correct(question: Question, answer: int | None) -> bool:
        return answer is not None and answer == question.correct_answer

    def _check_trace(self, question_set: QuestionSet, answer_trace: Sequence[int | None]) -> None:
        problem = trace_violation(question_set, answer_trace)
        if problem is not None:
            raise InvalidTrace(problem)

    def score(
        self, question_set: QuestionSet, answer_trace: Sequence[int | None]
    ) -> ScoreSummary:
        """Calcula o resumo de pontuacao.

        Args:
            question_set: Quiz da sessao
            answer_trace: Uma resposta (ou None) por questao

        Returns:
            ScoreSummary

        Raises:
            InvalidTrace: tamanhos diferentes ou resposta fora das alternativas
        """
        self._check_trace(question_set, answer_trace)

        total = len(question_set.questions)
        correct = 0
        answered = 0
        for question, answer in zip(question_set.questions, answer_trace, strict=True):
            if answer is None:
                continue
            answered += 1
            if self.is_correct(question, answer):
                correct += 1

        return ScoreSummary(
            total_questions=total,
            correct_count=correct,
            incorrect_count=answered - correct,
            unanswered_count=total - answered,
            score_percent=self.round_percent(correct, total),
        )

    def review(
        self, question_set: QuestionSet, answer_trace: Sequence[int | None]
    ) -> list[QuestionReview]:
        """Registro por questao para a tela de resultados e para a analise."""
        self._check_trace(question_set, answer_trace)
        return [
            QuestionReview(
                index=index,
                question=question.text,
                options=question.options,
                user_answer=answer,
                correct_answer=question.correct_answer,
                is_correct=self.is_correct(question, answer),
                explanation=question.explanation,
            )
            for index, (question, answer) in enumerate(
                zip(question_set.questions, answer_trace, strict=True)
            )
        ]

    def evaluate_answer(self, question: Question, selected_index: int | None) -> dict:
        """Avalia uma resposta individual.

        Returns:
            Dict com is_correct, correct_index, correct_option e explanation
        """
        return {
            "is_correct": self.is_correct(question, selected_index),
            "answered": selected_index is not None,
            "correct_index": question.correct_answer,
            "correct_option": question.options[question.correct_answer],
            "explanation": question.explanation,
        }
