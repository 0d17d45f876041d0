"""Quiz Store - Estado canonico (em memoria) da sessao de quiz."""

from __future__ import annotations

import logging

from ..errors import (
    IndexOutOfRange,
    InvalidQuestionSet,
    InvalidSessionData,
    SessionAlreadySubmitted,
)
from ..models.enums import SessionPhase
from ..models.schemas import QuestionSet
from ..models.state import SessionState, trace_violation

logger = logging.getLogger(__name__)


class QuizStore:
    """Dono exclusivo do question set e do answer trace de uma sessao.

    Somente o Session Controller muta o store. Depois da submissao, toda
    mutacao levanta ``SessionAlreadySubmitted`` e o estado nao muda.

    Example:
        >>> store = QuizStore()
        >>> state = store.create(question_set)
        >>> store.answer(0, 2)
        >>> store.advance(+1)
        >>> store.snapshot().current_index
        1
    """

    def __init__(self):
        self._state: SessionState | None = None

    @property
    def has_session(self) -> bool:
        return self._state is not None

    def create(
        self,
        question_set: QuestionSet,
        remaining_seconds: int | None = None,
        answer_trace: list[int | None] | None = None,
    ) -> SessionState:
        """Cria uma sessao nova, descartando a anterior.

        Args:
            question_set: Quiz validado
            remaining_seconds: Tempo inicial (padrao: orcamento da dificuldade)
            answer_trace: Respostas ja registradas (retomada de sessao)

        Raises:
            InvalidQuestionSet: se o quiz nao tiver questoes
            InvalidSessionData: trace com tamanho diferente ou resposta fora das alternativas
        """
        total = len(question_set.questions)
        if total == 0:
            raise InvalidQuestionSet("Question set has no questions")

        trace = list(answer_trace) if answer_trace is not None else [None] * total
        problem = trace_violation(question_set, trace)
        if problem is not None:
            raise InvalidSessionData(problem)

        if remaining_seconds is None:
            remaining_seconds = question_set.difficulty.time_budget

        self._state = SessionState(
            question_set=question_set,
            answer_trace=trace,
            current_index=0,
            remaining_seconds=max(0, remaining_seconds),
            phase=SessionPhase.ACTIVE,
        )
        logger.debug(f"Sessao criada: {total} questoes, {self._state.remaining_seconds}s")
        return self.snapshot()

    def clear(self) -> None:
        """Descarta a sessao (abandono ou nova geracao)."""
        self._state = None

    def answer(self, index: int, option_index: int) -> None:
        """Registra (ou sobrescreve) a resposta da questao ``index``.

        Raises:
            SessionAlreadySubmitted: se a sessao ja foi submetida
            IndexOutOfRange: se ``index`` ou ``option_index`` estiver fora dos limites
        """
        state = self._active_state()
        if not 0 <= index < state.total_questions:
            raise IndexOutOfRange(
                f"Question index {index} outside [0, {state.total_questions})"
            )
        options = state.question_set.questions[index].options
        if not 0 <= option_index < len(options):
            raise IndexOutOfRange(
                f"Option index {option_index} outside [0, {len(options)}) for question {index}"
            )
        state.answer_trace[index] = option_index

    def advance(self, delta: int) -> int:
        """Move ``current_index`` por ``delta``, limitado a ``[0, len-1]``.

        Returns:
            O novo indice atual
        """
        state = self._active_state()
        target = state.current_index + delta
        state.current_index = min(max(target, 0), state.total_questions - 1)
        return state.current_index

    def tick(self) -> int:
        """Decrementa o countdown em um segundo (nunca abaixo de zero)."""
        state = self._active_state()
        state.remaining_seconds = max(0, state.remaining_seconds - 1)
        return state.remaining_seconds

    def mark_submitted(self) -> bool:
        """Leva a sessao para SUBMITTED.

        Returns:
            True na transicao, False se ja estava submetida (idempotente)
        """
        state = self._require_state()
        if state.is_submitted:
            return False
        state.phase = SessionPhase.SUBMITTED
        return True

    def snapshot(self) -> SessionState:
        """Copia independente do estado atual."""
        return self._require_state().copy()

    def _require_state(self) -> SessionState:
        if self._state is None:
            raise InvalidSessionData("No quiz session. Please start a new quiz.")
        return self._state

    def _active_state(self) -> SessionState:
        state = self._require_state()
        if state.is_submitted:
            raise SessionAlreadySubmitted()
        return state
