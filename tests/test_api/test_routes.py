import asyncio

import pytest
from fastapi.testclient import TestClient

from api import create_app
from api.routes import sse_body
from errors import ERROR_MESSAGES, ConfigurationError, ErrorKind
from streaming import relay

CREDENTIALS = {"apiKey": "user-key", "model": "gemini-1.5-flash"}


@pytest.fixture
def client(gateway, document_pipeline) -> TestClient:
    app = create_app(config={}, gateway=gateway, document_pipeline=document_pipeline)
    return TestClient(app)


class TestHealth:
    def test_health(self, client) -> None:
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestProcessPdf:
    def test_returns_text_chunks_and_metadata(self, client, pdf_bytes) -> None:
        response = client.post(
            "/api/process-pdf",
            files={"file": ("paper.pdf", pdf_bytes, "application/pdf")},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "paper.pdf"
        assert body["size"] == len(pdf_bytes)
        assert body["text"] == "Some extracted text."
        assert body["chunks"] == ["Some extracted text."]
        assert body["metadata"] == {"pages": 1, "info": {"Title": "Test"}}

    def test_non_pdf_is_rejected(self, client) -> None:
        response = client.post(
            "/api/process-pdf",
            files={"file": ("notes.txt", b"plain text", "text/plain")},
        )
        assert response.status_code == 400
        assert response.json()["code"] == "invalid_file_format"

    def test_missing_file_is_invalid_input(self, client) -> None:
        response = client.post("/api/process-pdf")
        assert response.status_code == 400
        assert response.json()["code"] == "invalid_input"


class TestChat:
    def test_json_response(self, client, mock_llm) -> None:
        response = client.post(
            "/api/gemini/chat",
            json={**CREDENTIALS, "query": "what?", "chunks": ["one", "two"]},
        )
        assert response.status_code == 200
        assert response.json() == {"response": "Mock response", "relevantChunks": 2}
        assert mock_llm.api_key == "user-key"
        assert mock_llm.model == "gemini-1.5-flash"

    def test_stream_frames(self, client) -> None:
        response = client.post(
            "/api/gemini/chat",
            json={**CREDENTIALS, "query": "hi", "chunks": ["hello"], "stream": True},
        )
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/event-stream")
        assert response.headers["cache-control"] == "no-cache"
        assert response.text == (
            'data: {"content": "Hel"}\n\n'
            'data: {"content": "lo"}\n\n'
            "data: [DONE]\n\n"
        )

    def test_stream_failure_ends_with_error_frame(self, client, mock_llm) -> None:
        mock_llm.error = RuntimeError("quota exhausted")
        mock_llm.fail_after = 1
        response = client.post(
            "/api/gemini/chat",
            json={**CREDENTIALS, "query": "hi", "chunks": ["hello"], "stream": True},
        )
        assert response.status_code == 200
        frames = [frame for frame in response.text.split("\n\n") if frame]
        assert frames[0] == 'data: {"content": "Hel"}'
        assert frames[-1].startswith('data: {"error": ')
        assert '"code": "rate_limited"' in frames[-1]
        assert "[DONE]" not in response.text

    def test_stream_validates_before_streaming(self, client) -> None:
        response = client.post(
            "/api/gemini/chat",
            json={**CREDENTIALS, "query": "hi", "chunks": [], "stream": True},
        )
        assert response.status_code == 400
        assert response.json() == {
            "error": "Chunks must be a non-empty array",
            "code": "invalid_input",
        }

    def test_missing_fields(self, client) -> None:
        response = client.post("/api/gemini/chat", json={"query": "hi", "chunks": ["a"]})
        assert response.status_code == 400
        assert response.json()["code"] == "invalid_input"

    def test_chunks_must_be_array(self, client) -> None:
        response = client.post(
            "/api/gemini/chat",
            json={**CREDENTIALS, "query": "hi", "chunks": "not-a-list"},
        )
        assert response.status_code == 400
        assert response.json()["code"] == "invalid_input"
        assert "chunks" in response.json()["error"]

    @pytest.mark.parametrize(
        "message,status,kind",
        [
            ("API key not valid", 401, ErrorKind.INVALID_CREDENTIAL),
            ("Rate limit exceeded", 429, ErrorKind.RATE_LIMITED),
            ("model gemini-9 not found", 400, ErrorKind.INVALID_MODEL),
            ("content too long", 400, ErrorKind.PAYLOAD_TOO_LARGE),
            ("connection reset", 500, ErrorKind.PROVIDER_FAILURE),
        ],
    )
    def test_provider_errors(self, client, mock_llm, message, status, kind) -> None:
        mock_llm.error = RuntimeError(message)
        response = client.post(
            "/api/gemini/chat",
            json={**CREDENTIALS, "query": "hi", "chunks": ["a"]},
        )
        assert response.status_code == status
        assert response.json() == {"error": ERROR_MESSAGES[kind], "code": kind.value}

    def test_get_not_allowed(self, client) -> None:
        assert client.get("/api/gemini/chat").status_code == 405


class TestSummarize:
    def test_summary_lengths(self, client, mock_llm) -> None:
        mock_llm.response = "Short."
        response = client.post(
            "/api/gemini/summarize", json={**CREDENTIALS, "content": "x" * 50}
        )
        assert response.status_code == 200
        assert response.json() == {
            "summary": "Short.",
            "originalLength": 50,
            "summaryLength": 6,
        }

    def test_missing_content(self, client) -> None:
        response = client.post("/api/gemini/summarize", json=CREDENTIALS)
        assert response.status_code == 400
        assert response.json()["code"] == "invalid_input"


class TestTranslate:
    def test_translation(self, client, mock_llm) -> None:
        mock_llm.response = "Hola"
        response = client.post(
            "/api/gemini/translate",
            json={**CREDENTIALS, "content": "Hello", "targetLanguage": "Spanish"},
        )
        assert response.status_code == 200
        assert response.json() == {
            "translation": "Hola",
            "targetLanguage": "Spanish",
            "originalLength": 5,
        }

    def test_unsupported_language(self, client) -> None:
        response = client.post(
            "/api/gemini/translate",
            json={**CREDENTIALS, "content": "Hello", "targetLanguage": "Klingon"},
        )
        assert response.status_code == 400
        assert response.json()["code"] == "invalid_input"


class TestGenerateQuestions:
    def test_questions(self, client, mock_llm) -> None:
        mock_llm.response = "1. First?\n2. Second?\n3. Third?"
        response = client.post(
            "/api/gemini/generate-questions",
            json={**CREDENTIALS, "content": "text", "questionCount": 2},
        )
        assert response.status_code == 200
        assert response.json() == {
            "questions": ["First?", "Second?"],
            "totalGenerated": 3,
            "requested": 2,
            "contentLength": 4,
        }

    def test_count_out_of_range(self, client) -> None:
        response = client.post(
            "/api/gemini/generate-questions",
            json={**CREDENTIALS, "content": "text", "questionCount": 21},
        )
        assert response.status_code == 400
        assert response.json()["code"] == "invalid_input"


class TestCreateApp:
    def test_bad_chunking_config_fails_at_startup(self) -> None:
        config = {"chunking": {"chunk_size": 100, "chunk_overlap": 100}}
        with pytest.raises(ConfigurationError):
            create_app(config=config)

    def test_builds_from_config_file(self, temp_config) -> None:
        app = create_app(config_path=temp_config)
        assert app.state.gateway.settings.top_k == 3
        assert app.state.document_pipeline.splitter.chunk_size == 1000


class TestSseBody:
    def test_closing_body_closes_provider_stream(self) -> None:
        closed = []

        def fragments():
            try:
                yield "Hel"
                yield "lo"
            finally:
                closed.append(True)

        body = sse_body(relay(fragments()))

        async def read_one_then_disconnect() -> str:
            first = await body.__anext__()
            await body.aclose()
            return first

        first = asyncio.run(read_one_then_disconnect())

        assert first == 'data: {"content": "Hel"}\n\n'
        assert closed == [True]

    def test_exhausted_body_ends_with_done(self) -> None:
        async def read_all() -> list[str]:
            return [frame async for frame in sse_body(relay(["only"]))]

        frames = asyncio.run(read_all())
        assert frames == ['data: {"content": "only"}\n\n', "data: [DONE]\n\n"]
