"""Quiz Enums - Dificuldade, fase da sessao e shapes de payload."""

from enum import Enum


class QuizDifficulty(str, Enum):
    """Niveis de dificuldade do quiz."""

    EASY = "easy"  # 10 min - distratores plausiveis + uma armadilha obvia
    MEDIUM = "medium"  # 7 min - todas as opcoes parecem corretas
    HARD = "hard"  # 5 min - raciocinio em varias etapas

    @property
    def time_budget(self) -> int:
        """Tempo total do quiz em segundos (tabela fixa)."""
        return TIME_BUDGET_SECONDS[self]


TIME_BUDGET_SECONDS = {
    QuizDifficulty.EASY: 600,
    QuizDifficulty.MEDIUM: 420,
    QuizDifficulty.HARD: 300,
}


class SessionPhase(str, Enum):
    """Fases da sessao. SUBMITTED e terminal."""

    ACTIVE = "active"
    SUBMITTED = "submitted"


class PayloadShape(str, Enum):
    """Shapes aceitos pelo Schema Validator / Generation Client."""

    QUESTION_SET = "question_set"
    ANALYSIS_REPORT = "analysis_report"
