"""Session Controller - Maquina de estados temporizada do quiz."""

from __future__ import annotations

import logging
from collections.abc import Callable

from ..errors import MissingSessionData, SessionError
from ..models.enums import SessionPhase
from ..models.schemas import Question, QuestionSet
from ..models.state import SessionState
from ..storage.quiz_store import QuizStore
from ..storage.session_store import QuizSessionStore
from .scheduler import Scheduler, TimerHandle

logger = logging.getLogger(__name__)

SubmitCallback = Callable[[SessionState], None]


def format_seconds(seconds: int) -> str:
    """Formata segundos como ``m:ss``."""
    minutes, secs = divmod(max(0, seconds), 60)
    return f"{minutes}:{secs:02d}"


class SessionController:
    """Conduz uma sessao de ACTIVE ate SUBMITTED.

    Transicoes:
        - ACTIVE -> ACTIVE: ``select_answer``, ``go_next``, ``go_previous`` e
          cada tick enquanto ``remaining_seconds > 0``
        - ACTIVE -> SUBMITTED: ``submit``, acao de submit na ultima questao
          (``next_or_submit``) ou countdown chegando a zero
        - SUBMITTED e terminal; submeter de novo nao faz nada

    O countdown roda em cadencia de um segundo pelo ``Scheduler`` injetado
    e e independente da navegacao. O timer pendente e cancelado uma unica
    vez quando a sessao sai de ACTIVE, e tambem em ``dispose`` ou se
    ``start`` falhar.

    Example:
        >>> with SessionController(question_set, AsyncioScheduler()) as session:
        ...     session.select_answer(1)
        ...     session.go_next()
        ...     session.submit()
    """

    TICK_SECONDS = 1

    def __init__(
        self,
        question_set: QuestionSet,
        scheduler: Scheduler,
        sessions: QuizSessionStore | None = None,
        on_submit: SubmitCallback | None = None,
        store: QuizStore | None = None,
        remaining_seconds: int | None = None,
        answer_trace: list[int | None] | None = None,
    ):
        self.scheduler = scheduler
        self.sessions = sessions
        self.on_submit = on_submit
        self.store = store or QuizStore()
        self.store.create(
            question_set, remaining_seconds=remaining_seconds, answer_trace=answer_trace
        )
        self._timer: TimerHandle | None = None
        self._started = False
        self._closed = False

    @classmethod
    def resume(
        cls,
        sessions: QuizSessionStore,
        scheduler: Scheduler,
        on_submit: SubmitCallback | None = None,
    ) -> SessionController:
        """Reconstroi o controller a partir do session store.

        Respostas e tempo restante sao retomados quando presentes; o quiz em
        si e obrigatorio (``MissingSessionData`` / ``InvalidSessionData``).
        """
        question_set = sessions.load_quiz()
        try:
            trace = sessions.load_answers(question_set)
        except MissingSessionData:
            trace = None
        return cls(
            question_set,
            scheduler,
            sessions=sessions,
            on_submit=on_submit,
            remaining_seconds=sessions.load_remaining(),
            answer_trace=trace,
        )

    # -------------------------------------------------------------------------
    # Ciclo de vida
    # -------------------------------------------------------------------------

    def start(self) -> SessionController:
        """Inicia o countdown. Chamadas repetidas nao fazem nada."""
        if self._started:
            return self
        self._ensure_open()
        self._started = True

        state = self.store.snapshot()
        if state.remaining_seconds <= 0:
            logger.info("Sessao retomada sem tempo restante - submissao automatica")
            self._finalize()
            return self

        self._arm()
        try:
            self._persist(state)
        except BaseException:
            self._release_timer()
            raise
        logger.info(
            f"Sessao iniciada: {state.total_questions} questoes, "
            f"{format_seconds(state.remaining_seconds)} restantes"
        )
        return self

    def dispose(self) -> None:
        """Encerra o controller liberando o timer. Idempotente."""
        self._release_timer()
        self._closed = True

    def __enter__(self) -> SessionController:
        return self.start()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.dispose()

    # -------------------------------------------------------------------------
    # Operacoes do usuario
    # -------------------------------------------------------------------------

    def select_answer(self, option_index: int) -> None:
        """Marca a alternativa da questao atual. Nunca avanca sozinho."""
        self._ensure_open()
        self.store.answer(self.current_index, option_index)
        self._persist_answers()

    def go_next(self) -> int:
        self._ensure_open()
        return self.store.advance(+1)

    def go_previous(self) -> int:
        self._ensure_open()
        return self.store.advance(-1)

    def next_or_submit(self) -> SessionState:
        """Botao principal: avanca, ou submete quando na ultima questao."""
        self._ensure_open()
        if self.store.snapshot().is_last_question:
            return self.submit()
        self.go_next()
        return self.snapshot()

    def submit(self) -> SessionState:
        """Submete a sessao. Em SUBMITTED e um no-op."""
        if self.phase is SessionPhase.SUBMITTED:
            return self.snapshot()
        self._ensure_open()
        return self._finalize()

    # -------------------------------------------------------------------------
    # Leitura
    # -------------------------------------------------------------------------

    def snapshot(self) -> SessionState:
        return self.store.snapshot()

    @property
    def phase(self) -> SessionPhase:
        return self.store.snapshot().phase

    @property
    def current_index(self) -> int:
        return self.store.snapshot().current_index

    @property
    def remaining_seconds(self) -> int:
        return self.store.snapshot().remaining_seconds

    @property
    def current_question(self) -> Question:
        state = self.store.snapshot()
        return state.question_set.questions[state.current_index]

    def format_remaining(self) -> str:
        return format_seconds(self.remaining_seconds)

    # -------------------------------------------------------------------------
    # Timer
    # -------------------------------------------------------------------------

    def _arm(self) -> None:
        self._timer = self.scheduler.after(self.TICK_SECONDS, self._on_tick)

    def _release_timer(self) -> None:
        timer, self._timer = self._timer, None
        if timer is not None:
            timer.cancel()

    def _on_tick(self) -> None:
        # O handle que disparou ja foi consumido
        self._timer = None
        if self._closed or self.phase is SessionPhase.SUBMITTED:
            return

        remaining = self.store.tick()
        if self.sessions is not None:
            self.sessions.save_remaining(remaining)

        if remaining == 0:
            logger.info("Tempo esgotado - submissao automatica")
            self._finalize()
        else:
            self._arm()

    # -------------------------------------------------------------------------
    # Internos
    # -------------------------------------------------------------------------

    def _finalize(self) -> SessionState:
        self._release_timer()
        self.store.mark_submitted()
        state = self.store.snapshot()
        self._persist(state)
        logger.info(
            f"Sessao submetida: {state.answered_count}/{state.total_questions} respondidas"
        )
        if self.on_submit is not None:
            self.on_submit(state)
        return state

    def _ensure_open(self) -> None:
        if self._closed:
            raise SessionError("Quiz session was closed")

    def _persist(self, state: SessionState) -> None:
        if self.sessions is None:
            return
        self.sessions.save_answers(state.answer_trace)
        self.sessions.save_remaining(state.remaining_seconds)

    def _persist_answers(self) -> None:
        if self.sessions is not None:
            self.sessions.save_answers(self.store.snapshot().answer_trace)
