"""Quiz Models - Enums, Schemas e State."""

from .enums import TIME_BUDGET_SECONDS, PayloadShape, QuizDifficulty, SessionPhase
from .schemas import (
    AnalysisEnvelope,
    AnalysisReport,
    AnalyzeResultsRequest,
    AnalyzeResultsResponse,
    GenerateQuizResponse,
    Question,
    QuestionReview,
    QuestionSet,
    ScoreSummary,
)
from .state import AnswerTrace, SessionState, trace_violation
from .validator import SHAPE_MODELS, format_path, validate

__all__ = [
    # Enums
    "QuizDifficulty",
    "SessionPhase",
    "PayloadShape",
    "TIME_BUDGET_SECONDS",
    # Schemas
    "Question",
    "QuestionSet",
    "AnalysisReport",
    "ScoreSummary",
    "QuestionReview",
    "GenerateQuizResponse",
    "AnalysisEnvelope",
    "AnalyzeResultsRequest",
    "AnalyzeResultsResponse",
    # State
    "AnswerTrace",
    "SessionState",
    "trace_violation",
    # Validator
    "SHAPE_MODELS",
    "format_path",
    "validate",
]
