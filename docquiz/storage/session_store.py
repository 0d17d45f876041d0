"""Session Store - Capacidade injetada de armazenamento da sessao do cliente.

Substitui o acesso global ao storage do navegador por um objeto explicito
com ciclo de vida (save / load / clear), o que permite testar sem um store
real.

Estrutura de chaves (texto opaco):
    - quizData -> QuestionSet serializado (JSON camelCase)
    - difficulty -> Dificuldade escolhida
    - userAnswers -> Answer trace (lista JSON, null = nao respondida)
    - remainingSeconds -> Countdown restante (retomada)
"""

from __future__ import annotations

import json
import logging
from typing import Protocol, runtime_checkable

from ..errors import InvalidSessionData, MissingSessionData, SchemaViolation
from ..models.enums import PayloadShape, QuizDifficulty
from ..models.schemas import QuestionSet
from ..models.state import trace_violation
from ..models.validator import validate

logger = logging.getLogger(__name__)


@runtime_checkable
class SessionStore(Protocol):
    """Key-value de texto, no estilo ``sessionStorage``."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class InMemorySessionStore:
    """SessionStore em memoria (um processo, uma sessao)."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)


class QuizSessionStore:
    """Camada tipada sobre um ``SessionStore``.

    Tudo que volta do store e tratado como nao confiavel: o quiz passa de
    novo pelo Schema Validator e o trace e conferido slot a slot.

    Example:
        >>> sessions = QuizSessionStore(InMemorySessionStore())
        >>> sessions.save_quiz(question_set)
        >>> sessions.save_answers([1, None])
        >>> question_set, trace = sessions.load()
    """

    QUIZ_KEY = "quizData"
    DIFFICULTY_KEY = "difficulty"
    ANSWERS_KEY = "userAnswers"
    REMAINING_KEY = "remainingSeconds"

    def __init__(self, store: SessionStore):
        self.store = store

    # -------------------------------------------------------------------------
    # Save
    # -------------------------------------------------------------------------

    def save_quiz(self, question_set: QuestionSet) -> None:
        """Grava um quiz novo e descarta respostas/tempo do anterior."""
        self.store.set(self.QUIZ_KEY, question_set.model_dump_json(by_alias=True))
        self.store.set(self.DIFFICULTY_KEY, question_set.difficulty.value)
        self.store.delete(self.ANSWERS_KEY)
        self.store.delete(self.REMAINING_KEY)
        logger.debug(f"Quiz salvo na sessao: {len(question_set.questions)} questoes")

    def save_answers(self, answer_trace: list[int | None]) -> None:
        self.store.set(self.ANSWERS_KEY, json.dumps(list(answer_trace)))

    def save_remaining(self, remaining_seconds: int) -> None:
        self.store.set(self.REMAINING_KEY, str(int(remaining_seconds)))

    def clear(self) -> None:
        for key in (self.QUIZ_KEY, self.DIFFICULTY_KEY, self.ANSWERS_KEY, self.REMAINING_KEY):
            self.store.delete(key)

    # -------------------------------------------------------------------------
    # Load
    # -------------------------------------------------------------------------

    def load_quiz(self) -> QuestionSet:
        """Le e revalida o quiz da sessao.

        Raises:
            MissingSessionData: chave ``quizData`` ausente
            InvalidSessionData: JSON corrompido ou fora do shape
        """
        payload = self._read_json(self.QUIZ_KEY)
        if isinstance(payload, dict) and "difficulty" not in payload:
            payload["difficulty"] = self.load_difficulty().value
        try:
            return validate(payload, PayloadShape.QUESTION_SET)
        except SchemaViolation as violation:
            raise InvalidSessionData(
                f"Stored quiz data is invalid ({violation}). Please start a new quiz."
            ) from violation

    def load_difficulty(self) -> QuizDifficulty:
        """Dificuldade salva; ``medium`` quando ausente."""
        raw = self.store.get(self.DIFFICULTY_KEY)
        if raw is None:
            return QuizDifficulty.MEDIUM
        try:
            return QuizDifficulty(raw.strip().lower())
        except ValueError as exc:
            raise InvalidSessionData(f"Stored difficulty '{raw}' is invalid") from exc

    def load_answers(self, question_set: QuestionSet | None = None) -> list[int | None]:
        """Le o answer trace.

        Com ``question_set``, cada slot tambem e conferido contra as
        alternativas da questao.

        Raises:
            MissingSessionData: chave ``userAnswers`` ausente
            InvalidSessionData: formato invalido ou incompativel com ``question_set``
        """
        payload = self._read_json(self.ANSWERS_KEY)
        if not isinstance(payload, list):
            raise InvalidSessionData("Stored answers are not a list. Please start a new quiz.")
        for slot in payload:
            if slot is not None and (isinstance(slot, bool) or not isinstance(slot, int)):
                raise InvalidSessionData(f"Stored answer {slot!r} is not an option index")
        if question_set is not None:
            problem = trace_violation(question_set, payload)
            if problem is not None:
                raise InvalidSessionData(f"Stored answers are invalid ({problem})")
        return payload

    def load_remaining(self) -> int | None:
        raw = self.store.get(self.REMAINING_KEY)
        if raw is None:
            return None
        try:
            return max(0, int(raw))
        except ValueError as exc:
            raise InvalidSessionData(f"Stored remaining time '{raw}' is invalid") from exc

    def load(self) -> tuple[QuestionSet, list[int | None]]:
        """Quiz e respostas da sessao, ambos obrigatorios."""
        question_set = self.load_quiz()
        return question_set, self.load_answers(question_set)

    def _read_json(self, key: str):
        raw = self.store.get(key)
        if raw is None:
            raise MissingSessionData(key)
        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            raise InvalidSessionData(
                f"Session data '{key}' is corrupted. Please start a new quiz."
            ) from exc
