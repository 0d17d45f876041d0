"""Quiz Errors - Hierarquia de excecoes tipadas do engine.

Cada excecao carrega um ``status_code`` usado apenas pela camada HTTP
(router) para montar a resposta ``{"error": ...}``. O engine nunca loga e
descarta uma falha que afete o resultado: sempre propaga.
"""

from __future__ import annotations

from typing import Any


class QuizError(Exception):
    """Base de todas as falhas do engine de quiz."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


# =============================================================================
# GERACAO (Generation Client)
# =============================================================================


class GenerationError(QuizError):
    """Falha terminal de uma requisicao de geracao."""

    status_code = 502


class ConfigurationError(GenerationError):
    """Credencial ausente ou rejeitada. Fatal, nao deve ser repetida."""

    status_code = 500


class ServiceUnavailable(GenerationError):
    """Falha de transporte ou do servico de modelo. Repetivel pelo chamador."""

    status_code = 503


class SchemaViolation(QuizError):
    """Payload nao respeita o shape esperado.

    Attributes:
        path: Caminho do primeiro campo violado (ex: ``questions[0].correctAnswer``)
        reason: Motivo legivel
    """

    status_code = 422

    def __init__(self, path: str, reason: str):
        super().__init__(f"{path}: {reason}" if path else reason)
        self.path = path
        self.reason = reason


class MalformedOutput(GenerationError):
    """Saida do modelo reprovada pelo Schema Validator.

    O candidato bruto fica em ``raw`` para diagnostico.
    """

    status_code = 502

    def __init__(self, message: str, raw: Any, violation: SchemaViolation | None = None):
        super().__init__(message)
        self.raw = raw
        self.violation = violation


# =============================================================================
# SESSAO (Quiz Store / Session Controller / Session Store)
# =============================================================================


class InvalidSessionData(QuizError):
    """Dados da sessao ausentes ou corrompidos - usuario deve iniciar novo quiz."""

    status_code = 400


class MissingSessionData(InvalidSessionData):
    """Chave obrigatoria ausente no session store."""

    def __init__(self, key: str):
        super().__init__(f"Session data '{key}' is missing. Please start a new quiz.")
        self.key = key


class SessionError(QuizError):
    """Operacao invalida sobre o estado da sessao."""

    status_code = 409


class SessionAlreadySubmitted(SessionError):
    """Mutacao rejeitada: a sessao ja foi submetida."""

    def __init__(self):
        super().__init__("Quiz session was already submitted")


class IndexOutOfRange(SessionError):
    """Indice de questao ou alternativa fora dos limites."""

    status_code = 400


class InvalidQuestionSet(SessionError):
    """Question set sem questoes."""

    status_code = 400


class InvalidTrace(QuizError):
    """Answer trace com tamanho diferente do question set."""

    status_code = 400


class InvalidRequest(QuizError):
    """Requisicao HTTP invalida (arquivo ausente, dificuldade desconhecida...)."""

    status_code = 400


class DuplicateRequest(QuizError):
    """Ja existe uma requisicao em andamento para a mesma acao."""

    status_code = 409

    def __init__(self, action: str):
        super().__init__(f"A '{action}' request is already in progress")
        self.action = action
