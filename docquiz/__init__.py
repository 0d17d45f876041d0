"""Document Quiz - Quiz cronometrado gerado a partir de documentos.

Arquitetura:
- models/: Enums, Schemas Pydantic, SessionState, Schema Validator
- llm/: GenerationClient, LLMClientFactory, RetryPolicy
- storage/: QuizStore (estado da sessao), QuizSessionStore (session store do cliente)
- engine/: SessionController, Scheduler, QuizScoringEngine, AnalysisPipeline
- prompts/: Templates de prompts e tool schemas
- router.py: FastAPI endpoints
"""

from .engine import AnalysisPipeline, QuizScoringEngine, SessionController
from .llm import GenerationClient, RetryPolicy
from .models import (
    AnalysisReport,
    PayloadShape,
    Question,
    QuestionSet,
    QuizDifficulty,
    ScoreSummary,
    SessionPhase,
    SessionState,
    validate,
)
from .storage import InMemorySessionStore, QuizSessionStore, QuizStore

__all__ = [
    # Models
    "QuizDifficulty",
    "SessionPhase",
    "PayloadShape",
    "Question",
    "QuestionSet",
    "AnalysisReport",
    "ScoreSummary",
    "SessionState",
    "validate",
    # LLM
    "GenerationClient",
    "RetryPolicy",
    # Storage
    "QuizStore",
    "QuizSessionStore",
    "InMemorySessionStore",
    # Engines
    "SessionController",
    "QuizScoringEngine",
    "AnalysisPipeline",
]
