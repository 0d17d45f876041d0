"""Quiz State - Estado de uma sessao de quiz em andamento."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field, replace

from .enums import SessionPhase
from .schemas import QuestionSet

# Resposta de uma questao: indice da alternativa ou None (nao respondida)
AnswerTrace = list[int | None]


def trace_violation(question_set: QuestionSet, answer_trace: Sequence[object]) -> str | None:
    """Primeiro problema do answer trace frente ao quiz, ou None se valido.

    Cada slot deve ser None ou um indice inteiro (bool nao conta) dentro das
    alternativas da questao correspondente.
    """
    questions = question_set.questions
    if len(answer_trace) != len(questions):
        return f"Answer trace has {len(answer_trace)} slots for {len(questions)} questions"
    for index, (question, answer) in enumerate(zip(questions, answer_trace)):
        if answer is None:
            continue
        if isinstance(answer, bool) or not isinstance(answer, int):
            return f"Answer {index} must be an option index or null, got {answer!r}"
        if not 0 <= answer < len(question.options):
            return (
                f"Answer {index} is {answer}, outside [0, {len(question.options) - 1}]"
            )
    return None


@dataclass
class SessionState:
    """Estado completo de uma sessao.

    Attributes:
        question_set: Quiz gerado (imutavel)
        answer_trace: Uma posicao por questao, None = nao respondida
        current_index: Questao exibida (0..len-1)
        remaining_seconds: Tempo restante do countdown
        phase: ACTIVE ou SUBMITTED (terminal)
    """

    question_set: QuestionSet
    answer_trace: list[int | None] = field(default_factory=list)
    current_index: int = 0
    remaining_seconds: int = 0
    phase: SessionPhase = SessionPhase.ACTIVE

    @property
    def total_questions(self) -> int:
        return len(self.question_set.questions)

    @property
    def is_submitted(self) -> bool:
        return self.phase is SessionPhase.SUBMITTED

    @property
    def is_last_question(self) -> bool:
        return self.current_index == self.total_questions - 1

    @property
    def answered_count(self) -> int:
        return sum(1 for answer in self.answer_trace if answer is not None)

    def copy(self) -> SessionState:
        """Copia independente (a lista de respostas nao e compartilhada)."""
        return replace(self, answer_trace=list(self.answer_trace))
