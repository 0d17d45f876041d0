"""Schema Validator - Portao estrutural entre payload nao confiavel e dominio."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Literal, overload

from pydantic import BaseModel, ValidationError

from ..errors import SchemaViolation
from .enums import PayloadShape
from .schemas import AnalysisReport, QuestionSet

logger = logging.getLogger(__name__)

SHAPE_MODELS: dict[PayloadShape, type[BaseModel]] = {
    PayloadShape.QUESTION_SET: QuestionSet,
    PayloadShape.ANALYSIS_REPORT: AnalysisReport,
}

_VALUE_ERROR_PREFIX = "Value error, "


def format_path(loc: tuple[int | str, ...]) -> str:
    """Converte ``('questions', 0, 'correctAnswer')`` em ``questions[0].correctAnswer``."""
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path


def _first_violation(exc: ValidationError) -> SchemaViolation:
    error = exc.errors()[0]
    reason = error.get("msg", "invalid value")
    if reason.startswith(_VALUE_ERROR_PREFIX):
        reason = reason[len(_VALUE_ERROR_PREFIX):]
    return SchemaViolation(format_path(tuple(error.get("loc", ()))), reason)


@overload
def validate(payload: Any, shape: Literal[PayloadShape.QUESTION_SET]) -> QuestionSet: ...


@overload
def validate(payload: Any, shape: Literal[PayloadShape.ANALYSIS_REPORT]) -> AnalysisReport: ...


def validate(payload: Any, shape: PayloadShape) -> QuestionSet | AnalysisReport:
    """Valida ``payload`` contra ``shape`` e devolve a entidade tipada.

    A validacao e exaustiva e estrita: tipos primitivos exatos (sem coercao
    de ``"1"`` ou ``1.0`` para inteiro), listas nao vazias onde exigido,
    vocabulario fixo de dificuldade e limite cruzado de ``correctAnswer``.
    Nada e ajustado ou truncado.

    Args:
        payload: Dados nao confiaveis (tipicamente um dict vindo do modelo)
        shape: Shape alvo

    Returns:
        QuestionSet ou AnalysisReport validado

    Raises:
        SchemaViolation: com o caminho do primeiro campo violado
    """
    if not isinstance(payload, Mapping):
        raise SchemaViolation("", f"expected an object, got {type(payload).__name__}")

    model = SHAPE_MODELS[shape]
    try:
        return model.model_validate(dict(payload))
    except ValidationError as exc:
        violation = _first_violation(exc)
        logger.debug(f"Payload rejeitado ({shape.value}): {violation}")
        raise violation from exc
