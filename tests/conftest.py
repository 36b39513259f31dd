from typing import Any, Iterator, Optional

import pytest

from adapters.base import BaseLLM
from config import ProcessingSettings
from loaders import BaseDocumentLoader, ExtractedDocument
from pipelines import DocumentPipeline, GenerationGateway


class MockLLM(BaseLLM):
    """Mock LLM for testing.

    ``error`` is raised by ``generate`` and, for streams, after
    ``fail_after`` fragments have been yielded.
    """

    def __init__(
        self,
        model: str = "mock-llm",
        response: str = "Mock response",
        fragments: Optional[list[str]] = None,
        error: Optional[Exception] = None,
        fail_after: int = 0,
        **kwargs: Any,
    ):
        super().__init__(model, **kwargs)
        self.response = response
        self.fragments = fragments if fragments is not None else ["Hel", "lo"]
        self.error = error
        self.fail_after = fail_after
        self.api_key: Optional[str] = None
        self.prompts: list[str] = []

    @property
    def supports_streaming(self) -> bool:
        return True

    def generate(self, prompt: str, **kwargs: Any) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.response

    def generate_stream(self, prompt: str, **kwargs: Any) -> Iterator[str]:
        self.prompts.append(prompt)
        for i, fragment in enumerate(self.fragments):
            if self.error is not None and i == self.fail_after:
                raise self.error
            yield fragment
        if self.error is not None and self.fail_after >= len(self.fragments):
            raise self.error


class FakeLoader(BaseDocumentLoader):
    """Loader returning fixed text instead of parsing the PDF bytes."""

    def __init__(self, text: str = "Some extracted text.", page_count: int = 1):
        self.text = text
        self.page_count = page_count

    def extract(self, data: bytes) -> ExtractedDocument:
        return ExtractedDocument(
            text=self.text,
            page_count=self.page_count,
            metadata={"Title": "Test"},
        )


@pytest.fixture
def settings() -> ProcessingSettings:
    return ProcessingSettings()


@pytest.fixture
def mock_llm() -> MockLLM:
    return MockLLM()


@pytest.fixture
def gateway(mock_llm: MockLLM, settings: ProcessingSettings) -> GenerationGateway:
    def factory(model: str, api_key: str) -> BaseLLM:
        mock_llm.model = model
        mock_llm.api_key = api_key
        return mock_llm

    return GenerationGateway(settings=settings, llm_factory=factory)


@pytest.fixture
def fake_loader() -> FakeLoader:
    return FakeLoader()


@pytest.fixture
def document_pipeline(fake_loader: FakeLoader, settings: ProcessingSettings) -> DocumentPipeline:
    return DocumentPipeline(settings=settings, loader=fake_loader)


@pytest.fixture
def pdf_bytes() -> bytes:
    return b"%PDF-1.4\ntest content\n%%EOF"


@pytest.fixture
def temp_config(tmp_path) -> Any:
    config_content = """
[llm]
provider = "gemini"
model = "gemini-1.5-pro"
api_key = "${TEST_GEMINI_KEY:-fallback-key}"

[chunking]
chunk_size = 1000
chunk_overlap = 100

[retrieval]
top_k = 3

[questions]
default_count = 8

[upload]
max_size_mb = 5

[settings]
path = "storage/settings.json"
"""
    config_path = tmp_path / "config.toml"
    config_path.write_text(config_content)
    return config_path
