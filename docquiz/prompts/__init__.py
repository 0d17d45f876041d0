"""Quiz Prompts - Templates de prompts e tool schemas."""

from .templates import (
    ANALYSIS_PROMPT,
    ANALYSIS_REPORT_TOOL,
    ANALYSIS_SYSTEM_PROMPT,
    DIFFICULTY_GUIDELINES,
    QUESTION_SET_TOOL,
    QUIZ_GENERATION_PROMPT,
    QUIZ_SYSTEM_PROMPT,
)

__all__ = [
    "QUIZ_SYSTEM_PROMPT",
    "ANALYSIS_SYSTEM_PROMPT",
    "DIFFICULTY_GUIDELINES",
    "QUIZ_GENERATION_PROMPT",
    "ANALYSIS_PROMPT",
    "QUESTION_SET_TOOL",
    "ANALYSIS_REPORT_TOOL",
]
