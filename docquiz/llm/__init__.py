"""Quiz LLM - Cliente de geracao estruturada."""

from .client import AnalysisContext, GenerationClient, GenerationContext, QuizGenerationContext
from .factory import LLMClientFactory
from .retry import RetryPolicy

__all__ = [
    "GenerationClient",
    "GenerationContext",
    "QuizGenerationContext",
    "AnalysisContext",
    "LLMClientFactory",
    "RetryPolicy",
]
