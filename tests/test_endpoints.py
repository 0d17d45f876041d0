# =============================================================================
# TESTES DE INTEGRACAO - Endpoints
# =============================================================================
# Testes de integracao usando FastAPI TestClient (sem servidor externo)
# =============================================================================

import pytest

PDF_BYTES = b"%PDF-1.4 documento de teste"


def _upload(content=PDF_BYTES, media_type="application/pdf"):
    return {"pdfFile": ("documento.pdf", content, media_type)}


class TestHealthEndpoints:
    """Testes dos endpoints de health check."""

    def test_root_returns_ok(self, client):
        """GET / - Deve retornar status ok."""
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_api_health(self, client):
        """GET /api/health - Deve retornar status ok."""
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestGenerateQuizEndpoint:
    """Testes de POST /api/generate-quiz."""

    def test_generate_quiz(self, client, mock_generator, hard_question_set):
        """Deve devolver o quiz validado em camelCase."""
        from docquiz.llm import QuizGenerationContext
        from docquiz.models import PayloadShape, QuizDifficulty

        mock_generator.generate.return_value = hard_question_set

        response = client.post("/api/generate-quiz", files=_upload(), data={"difficulty": "hard"})

        assert response.status_code == 200
        data = response.json()
        assert data["difficulty"] == "hard"
        assert data["questions"][0]["correctAnswer"] == 1
        assert data["questions"][1]["options"] == ["Sim", "Nao"]

        kind, context = mock_generator.generate.await_args.args
        assert kind == PayloadShape.QUESTION_SET
        assert isinstance(context, QuizGenerationContext)
        assert context.document == PDF_BYTES
        assert context.difficulty == QuizDifficulty.HARD

    def test_response_questions_are_typed(self, client, mock_generator, hard_question_set):
        """Questoes saem com o shape completo de Question, tambem no OpenAPI."""
        mock_generator.generate.return_value = hard_question_set

        response = client.post("/api/generate-quiz", files=_upload(), data={"difficulty": "hard"})

        assert set(response.json()["questions"][0]) == {
            "question",
            "options",
            "correctAnswer",
            "explanation",
        }
        schemas = client.get("/openapi.json").json()["components"]["schemas"]
        assert any(name.split("-")[0] == "Question" for name in schemas)

    def test_difficulty_defaults_to_medium(self, client, mock_generator, medium_question_set):
        """Sem dificuldade no formulario, usa medium."""
        from docquiz.models import QuizDifficulty

        mock_generator.generate.return_value = medium_question_set

        response = client.post("/api/generate-quiz", files=_upload())

        assert response.status_code == 200
        _, context = mock_generator.generate.await_args.args
        assert context.difficulty == QuizDifficulty.MEDIUM

    def test_missing_file(self, client, mock_generator):
        """Sem arquivo deve retornar 400."""
        response = client.post("/api/generate-quiz", data={"difficulty": "easy"})

        assert response.status_code == 400
        assert response.json() == {"error": "PDF file is required"}
        mock_generator.generate.assert_not_awaited()

    def test_unknown_difficulty(self, client, mock_generator):
        """Dificuldade fora do vocabulario deve retornar 400."""
        response = client.post("/api/generate-quiz", files=_upload(), data={"difficulty": "extreme"})

        assert response.status_code == 400
        assert "difficulty" in response.json()["error"]
        mock_generator.generate.assert_not_awaited()

    def test_unsupported_media_type(self, client, mock_generator):
        """Tipo de documento nao suportado deve retornar 400."""
        response = client.post("/api/generate-quiz", files=_upload(media_type="image/png"))

        assert response.status_code == 400
        mock_generator.generate.assert_not_awaited()

    def test_empty_file(self, client, mock_generator):
        """Arquivo vazio deve retornar 400."""
        response = client.post("/api/generate-quiz", files=_upload(content=b""))

        assert response.status_code == 400
        mock_generator.generate.assert_not_awaited()

    @pytest.mark.parametrize(
        "error_name, status_code",
        [("ConfigurationError", 500), ("ServiceUnavailable", 503), ("MalformedOutput", 502)],
    )
    def test_generation_errors(self, client, mock_generator, error_name, status_code):
        """Falhas de geracao viram {"error": ...} com o status correspondente."""
        from docquiz import errors

        error = (
            errors.MalformedOutput("Model output failed validation", raw={"questions": []})
            if error_name == "MalformedOutput"
            else getattr(errors, error_name)("failure")
        )
        mock_generator.generate.side_effect = error

        response = client.post("/api/generate-quiz", files=_upload())

        assert response.status_code == status_code
        assert response.json() == {"error": error.message}

    def test_duplicate_request_rejected(self, client, mock_generator):
        """Requisicao com a mesma acao em andamento deve retornar 409."""
        from docquiz.engine import InFlightGuard
        from docquiz.router import GENERATE_ACTION, get_request_guard
        from server import app

        busy = InFlightGuard()
        busy._in_flight.add(GENERATE_ACTION)
        app.dependency_overrides[get_request_guard] = lambda: busy

        response = client.post("/api/generate-quiz", files=_upload())

        assert response.status_code == 409
        mock_generator.generate.assert_not_awaited()


class TestAnalyzeResultsEndpoint:
    """Testes de POST /api/analyze-results."""

    def test_analyze_results(self, client, mock_generator, question_set_payload, analysis_report_payload):
        """Deve devolver pontuacao e relatorio."""
        from docquiz.models import PayloadShape, validate

        mock_generator.generate.return_value = validate(
            analysis_report_payload, PayloadShape.ANALYSIS_REPORT
        )

        response = client.post(
            "/api/analyze-results",
            json={"userAnswers": [1, None], "quizData": question_set_payload, "difficulty": "hard"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["score"] == 50
        assert data["correctCount"] == 1
        assert data["incorrectCount"] == 0
        assert data["totalQuestions"] == 2
        report = data["analysis"]["performanceAnalysis"]
        assert list(data["analysis"]) == ["performanceAnalysis"]
        assert report["overallUnderstanding"].startswith("Boa nocao")
        assert report["knowledgeGaps"] == ["Garantias do TCP"]
        mock_generator.generate.assert_awaited_once()

    def test_invalid_quiz_data(self, client, mock_generator, question_set_payload):
        """quizData fora do shape deve retornar 400."""
        question_set_payload["questions"][0]["correctAnswer"] = 7

        response = client.post(
            "/api/analyze-results",
            json={"userAnswers": [1, None], "quizData": question_set_payload},
        )

        assert response.status_code == 400
        assert "correctAnswer" in response.json()["error"]
        mock_generator.generate.assert_not_awaited()

    def test_trace_length_mismatch(self, client, mock_generator, question_set_payload):
        """Trace com tamanho diferente deve retornar 400."""
        response = client.post(
            "/api/analyze-results",
            json={"userAnswers": [1], "quizData": question_set_payload},
        )

        assert response.status_code == 400
        mock_generator.generate.assert_not_awaited()

    def test_boolean_answer_rejected(self, client, mock_generator, question_set_payload):
        """true nao pode virar o indice 1."""
        response = client.post(
            "/api/analyze-results",
            json={"userAnswers": [True, None], "quizData": question_set_payload},
        )

        assert response.status_code == 400
        assert response.json()["error"].startswith("userAnswers")
        mock_generator.generate.assert_not_awaited()

    @pytest.mark.parametrize("answers", [[1, 7], [-5, None], [99, 0]])
    def test_answer_outside_options_rejected(self, client, mock_generator, question_set_payload, answers):
        """Resposta fora das alternativas deve retornar 400 sem chamar o modelo."""
        response = client.post(
            "/api/analyze-results",
            json={"userAnswers": answers, "quizData": question_set_payload},
        )

        assert response.status_code == 400
        assert "outside" in response.json()["error"]
        mock_generator.generate.assert_not_awaited()

    def test_missing_user_answers(self, client, question_set_payload):
        """Body sem userAnswers deve retornar 400 com o campo."""
        response = client.post("/api/analyze-results", json={"quizData": question_set_payload})

        assert response.status_code == 400
        assert response.json()["error"].startswith("userAnswers")

    def test_generation_failure(self, client, mock_generator, question_set_payload):
        """Falha do modelo na analise deve retornar 503."""
        from docquiz.errors import ServiceUnavailable

        mock_generator.generate.side_effect = ServiceUnavailable("Model service returned HTTP 529")

        response = client.post(
            "/api/analyze-results",
            json={"userAnswers": [None, None], "quizData": question_set_payload},
        )

        assert response.status_code == 503
        assert response.json() == {"error": "Model service returned HTTP 529"}
