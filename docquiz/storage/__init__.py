"""Quiz Storage - Estado da sessao e session store do cliente."""

from .quiz_store import QuizStore
from .session_store import InMemorySessionStore, QuizSessionStore, SessionStore

__all__ = ["QuizStore", "SessionStore", "InMemorySessionStore", "QuizSessionStore"]
