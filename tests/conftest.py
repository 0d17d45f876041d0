# =============================================================================
# CONFTEST - Fixtures compartilhadas para todos os testes
# =============================================================================
# Quizzes de exemplo, relogio virtual, session store e mocks do Anthropic
# =============================================================================

from types import SimpleNamespace
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest


# =============================================================================
# FIXTURES DE DADOS DE TESTE
# =============================================================================


@pytest.fixture
def question_set_payload() -> dict[str, Any]:
    """Quiz "hard" de duas questoes, no formato camelCase do fio."""
    return {
        "questions": [
            {
                "question": "Qual camada do modelo OSI roteia pacotes?",
                "options": ["Fisica", "Rede", "Transporte", "Aplicacao"],
                "correctAnswer": 1,
                "explanation": "A camada de rede e responsavel pelo roteamento.",
            },
            {
                "question": "TCP garante entrega ordenada?",
                "options": ["Sim", "Nao"],
                "correctAnswer": 0,
                "explanation": "TCP reordena segmentos antes de entregar.",
            },
        ],
        "difficulty": "hard",
    }


@pytest.fixture
def hard_question_set(question_set_payload):
    """QuestionSet validado do payload de exemplo."""
    from docquiz.models import PayloadShape, validate

    return validate(question_set_payload, PayloadShape.QUESTION_SET)


@pytest.fixture
def medium_question_set():
    """Quiz "medium" de tres questoes."""
    from docquiz.models import Question, QuestionSet, QuizDifficulty

    return QuestionSet(
        questions=(
            Question(text="2 + 2 = ?", options=("3", "4", "5"), correct_answer=1, explanation="Soma."),
            Question(text="3 * 3 = ?", options=("6", "9"), correct_answer=1, explanation="Produto."),
            Question(text="10 / 2 = ?", options=("5", "2", "20"), correct_answer=0, explanation="Divisao."),
        ),
        difficulty=QuizDifficulty.MEDIUM,
    )


@pytest.fixture
def analysis_report_payload() -> dict[str, Any]:
    """Relatorio de analise valido (camelCase)."""
    return {
        "overallUnderstanding": "Boa nocao de redes, mas lacunas em transporte.",
        "knowledgeGaps": ["Garantias do TCP"],
        "areasForImprovement": ["Revisar a camada de transporte"],
        "suggestedStudyTopics": ["Controle de fluxo", "Janela deslizante"],
        "suggestedResources": ["RFC 793"],
        "nextFocusConcepts": ["Handshake de tres vias"],
    }


# =============================================================================
# FIXTURES DE SESSAO
# =============================================================================


@pytest.fixture
def manual_scheduler():
    """Relogio virtual para o countdown."""
    from docquiz.engine import ManualScheduler

    return ManualScheduler()


@pytest.fixture
def session_store():
    """Key-value em memoria no lugar do storage do navegador."""
    from docquiz.storage import InMemorySessionStore

    return InMemorySessionStore()


@pytest.fixture
def quiz_sessions(session_store):
    """Camada tipada sobre o session store em memoria."""
    from docquiz.storage import QuizSessionStore

    return QuizSessionStore(session_store)


# =============================================================================
# FIXTURES DE MOCK - ANTHROPIC
# =============================================================================


def tool_message(name: str, payload: Any, text: str | None = None) -> SimpleNamespace:
    """Mensagem no formato do Messages API com um bloco tool_use."""
    content = []
    if text is not None:
        content.append(SimpleNamespace(type="text", text=text))
    content.append(SimpleNamespace(type="tool_use", name=name, input=payload))
    return SimpleNamespace(content=content, stop_reason="tool_use")


@pytest.fixture
def make_tool_message():
    """Factory de mensagens tool_use."""
    return tool_message


@pytest.fixture
def quiz_config():
    """Configuracao com credencial de teste."""
    from docquiz.config import QuizConfig

    return QuizConfig(api_key="test-key-123")


@pytest.fixture
def mock_anthropic_client():
    """Mock do AsyncAnthropic (messages.create e close)."""
    client = MagicMock()
    client.messages.create = AsyncMock()
    client.close = AsyncMock()
    return client


@pytest.fixture
def mock_factory(quiz_config, mock_anthropic_client):
    """LLMClientFactory real com create_client mockado."""
    from docquiz.llm import LLMClientFactory

    factory = LLMClientFactory(quiz_config)
    factory.create_client = MagicMock(return_value=mock_anthropic_client)
    return factory


@pytest.fixture
def generation_client(quiz_config, mock_factory):
    """GenerationClient que nunca sai do processo."""
    from docquiz.llm import GenerationClient

    return GenerationClient(quiz_config, factory=mock_factory)


# =============================================================================
# FIXTURES DO FASTAPI
# =============================================================================


@pytest.fixture
def mock_generator():
    """Generator com ``generate`` assincrono mockado."""
    generator = MagicMock()
    generator.generate = AsyncMock()
    return generator


@pytest.fixture
def client(mock_generator):
    """Cliente de teste FastAPI com generator e guard isolados."""
    from fastapi.testclient import TestClient

    from docquiz.engine import InFlightGuard
    from docquiz.router import get_generator, get_request_guard
    from server import app

    guard = InFlightGuard()
    app.dependency_overrides[get_generator] = lambda: mock_generator
    app.dependency_overrides[get_request_guard] = lambda: guard
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
