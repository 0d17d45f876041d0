"""Quiz Router - Endpoints FastAPI de geracao e analise."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, FastAPI, File, Form, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .config import get_config
from .engine.analysis_pipeline import AnalysisPipeline
from .engine.request_guard import InFlightGuard
from .engine.scoring_engine import QuizScoringEngine
from .errors import InvalidRequest, InvalidSessionData, MalformedOutput, QuizError, SchemaViolation
from .llm.client import PDF_MEDIA_TYPE, SUPPORTED_MEDIA_TYPES, GenerationClient, QuizGenerationContext
from .llm.retry import RetryPolicy
from .models.enums import PayloadShape, QuizDifficulty
from .models.schemas import (
    AnalysisEnvelope,
    AnalyzeResultsRequest,
    AnalyzeResultsResponse,
    GenerateQuizResponse,
)
from .models.validator import validate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Quiz"])

GENERATE_ACTION = "generate-quiz"
ANALYZE_ACTION = "analyze-results"

# Uma sessao logica por processo: um guard compartilhado
_request_guard = InFlightGuard()


# =============================================================================
# DEPENDENCY INJECTION
# =============================================================================


def get_generator() -> RetryPolicy:
    """Generation Client envolto na politica de retry da configuracao."""
    return RetryPolicy.from_config(GenerationClient(get_config()))


def get_request_guard() -> InFlightGuard:
    return _request_guard


def get_scoring_engine() -> QuizScoringEngine:
    return QuizScoringEngine()


def parse_difficulty(raw: str | None) -> QuizDifficulty:
    """Dificuldade do formulario; ``medium`` quando nao informada."""
    if raw is None or not raw.strip():
        return QuizDifficulty.MEDIUM
    try:
        return QuizDifficulty(raw.strip().lower())
    except ValueError as exc:
        raise InvalidRequest(
            f"Unknown difficulty '{raw}'. Use one of: easy, medium, hard"
        ) from exc


# =============================================================================
# ENDPOINTS
# =============================================================================


@router.get("/health")
async def health():
    return {"status": "ok"}


@router.post("/generate-quiz", response_model=GenerateQuizResponse)
async def generate_quiz(
    pdf_file: UploadFile | None = File(None, alias="pdfFile"),
    difficulty: str | None = Form(None),
    generator: RetryPolicy = Depends(get_generator),
    guard: InFlightGuard = Depends(get_request_guard),
):
    """Gera um quiz a partir do documento enviado.

    - Valida arquivo e dificuldade
    - Faz uma unica requisicao estruturada ao modelo
    - Devolve apenas quiz aprovado pelo Schema Validator
    """
    if pdf_file is None:
        raise InvalidRequest("PDF file is required")
    level = parse_difficulty(difficulty)

    media_type = (pdf_file.content_type or PDF_MEDIA_TYPE).split(";")[0].strip()
    if media_type not in SUPPORTED_MEDIA_TYPES:
        raise InvalidRequest(f"Unsupported document type: {media_type}")

    document = await pdf_file.read()
    if not document:
        raise InvalidRequest("Uploaded document is empty")
    max_bytes = get_config().max_upload_bytes
    if len(document) > max_bytes:
        raise InvalidRequest(f"Uploaded document exceeds {max_bytes // (1024 * 1024)} MB")

    async with guard.claim(GENERATE_ACTION):
        question_set = await generator.generate(
            PayloadShape.QUESTION_SET,
            QuizGenerationContext(document=document, difficulty=level, media_type=media_type),
        )

    logger.info(f"Quiz gerado: {len(question_set.questions)} questoes ({level.value})")
    return GenerateQuizResponse(
        questions=question_set.questions, difficulty=question_set.difficulty
    )


@router.post("/analyze-results", response_model=AnalyzeResultsResponse)
async def analyze_results(
    request: AnalyzeResultsRequest,
    generator: RetryPolicy = Depends(get_generator),
    guard: InFlightGuard = Depends(get_request_guard),
    scoring: QuizScoringEngine = Depends(get_scoring_engine),
):
    """Pontua as respostas e gera o relatorio de remediacao.

    ``quizData`` vem do cliente e por isso passa de novo pelo validator.
    """
    stored = request.quiz_data.get("difficulty")
    level = request.difficulty or parse_difficulty(stored if isinstance(stored, str) else None)
    try:
        question_set = validate(
            {**request.quiz_data, "difficulty": level.value}, PayloadShape.QUESTION_SET
        )
    except SchemaViolation as violation:
        raise InvalidSessionData(
            f"Quiz data is invalid ({violation}). Please start a new quiz."
        ) from violation

    pipeline = AnalysisPipeline(generator, scoring=scoring)
    async with guard.claim(ANALYZE_ACTION):
        outcome = await pipeline.analyze(question_set, request.user_answers)

    summary = outcome.summary
    return AnalyzeResultsResponse(
        score=summary.score_percent,
        correct_count=summary.correct_count,
        incorrect_count=summary.incorrect_count,
        total_questions=summary.total_questions,
        analysis=AnalysisEnvelope(performance_analysis=outcome.report),
    )


# =============================================================================
# ERROS -> {"error": ...}
# =============================================================================


async def quiz_error_handler(request: Request, exc: QuizError) -> JSONResponse:
    if isinstance(exc, MalformedOutput):
        logger.error(f"Saida malformada do modelo em {request.url.path}: {exc.raw!r}"[:2000])
    elif exc.status_code >= 500:
        logger.error(f"Falha em {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg', 'invalid value')}" if location else first["msg"]
    return JSONResponse(status_code=400, content={"error": message})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(QuizError, quiz_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
