"""Quiz Engines - Logica de negocios."""

from .analysis_pipeline import AnalysisOutcome, AnalysisPipeline
from .request_guard import InFlightGuard
from .scheduler import AsyncioScheduler, ManualScheduler, Scheduler
from .scoring_engine import QuizScoringEngine
from .session_controller import SessionController, format_seconds

__all__ = [
    "AnalysisPipeline",
    "AnalysisOutcome",
    "InFlightGuard",
    "Scheduler",
    "AsyncioScheduler",
    "ManualScheduler",
    "QuizScoringEngine",
    "SessionController",
    "format_seconds",
]
