"""Quiz Schemas - Modelos Pydantic do dominio e da API.

Os modelos de dominio (Question, QuestionSet, AnalysisReport) sao o shape
estrito que o Schema Validator aplica sobre payloads nao confiaveis. No fio
os nomes sao camelCase; em Python, snake_case.
"""

from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    StrictStr,
    ValidationInfo,
    field_validator,
)
from pydantic.alias_generators import to_camel

from .enums import QuizDifficulty

MIN_OPTIONS = 2
MAX_OPTIONS = 7


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


# =============================================================================
# DOMINIO
# =============================================================================


class Question(_CamelModel):
    """Questao de multipla escolha gerada pelo modelo."""

    text: StrictStr = Field(..., alias="question", min_length=1, description="Enunciado")
    options: tuple[StrictStr, ...] = Field(
        ..., min_length=MIN_OPTIONS, max_length=MAX_OPTIONS, description="2 a 7 alternativas"
    )
    correct_answer: StrictInt = Field(..., description="Indice (base 0) da alternativa correta")
    explanation: StrictStr = Field(..., description="Explicacao da resposta correta")

    @field_validator("options")
    @classmethod
    def _options_unique(cls, options: tuple[str, ...]) -> tuple[str, ...]:
        for option in options:
            if not option.strip():
                raise ValueError("options must not contain blank entries")
        if len(set(options)) != len(options):
            raise ValueError("options must not contain duplicates")
        return options

    @field_validator("correct_answer")
    @classmethod
    def _answer_in_bounds(cls, value: int, info: ValidationInfo) -> int:
        options = info.data.get("options")
        if options is not None and not 0 <= value < len(options):
            raise ValueError(
                f"correctAnswer must be within [0, {len(options) - 1}], got {value}"
            )
        return value


class QuestionSet(_CamelModel):
    """Conteudo imutavel de um quiz (uma sessao)."""

    questions: tuple[Question, ...] = Field(..., min_length=1)
    difficulty: QuizDifficulty = Field(..., description="Dificuldade escolhida na geracao")

    def __len__(self) -> int:
        return len(self.questions)


class AnalysisReport(_CamelModel):
    """Relatorio de remediacao. Conteudo opaco para o engine."""

    overall_understanding: StrictStr = Field(..., min_length=1)
    knowledge_gaps: tuple[StrictStr, ...]
    areas_for_improvement: tuple[StrictStr, ...]
    suggested_study_topics: tuple[StrictStr, ...]
    suggested_resources: tuple[StrictStr, ...]
    next_focus_concepts: tuple[StrictStr, ...]


class ScoreSummary(_CamelModel):
    """Resultado derivado de (question set, answer trace)."""

    total_questions: int
    correct_count: int
    incorrect_count: int
    unanswered_count: int
    score_percent: int


class QuestionReview(_CamelModel):
    """Revisao de uma questao respondida (ou nao) pelo usuario."""

    index: int
    question: str
    options: tuple[str, ...]
    user_answer: int | None
    correct_answer: int
    is_correct: bool
    explanation: str


# =============================================================================
# API (request/response)
# =============================================================================


class GenerateQuizResponse(_CamelModel):
    """Response de /generate-quiz."""

    questions: tuple[Question, ...]
    difficulty: QuizDifficulty


class AnalyzeResultsRequest(_CamelModel):
    """Request de /analyze-results. ``quiz_data`` passa pelo validator."""

    user_answers: list[StrictInt | None] = Field(..., description="Indice escolhido ou null")
    quiz_data: dict[str, Any] = Field(..., description="Quiz retornado por /generate-quiz")
    difficulty: QuizDifficulty | None = None


class AnalysisEnvelope(_CamelModel):
    """Relatorio embrulhado como o cliente le: ``analysis.performanceAnalysis``."""

    performance_analysis: AnalysisReport


class AnalyzeResultsResponse(_CamelModel):
    """Response de /analyze-results."""

    score: int
    correct_count: int
    incorrect_count: int
    total_questions: int
    analysis: AnalysisEnvelope
