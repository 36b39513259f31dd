import logging
from typing import Any, Optional

from config import ProcessingSettings, load_settings
from errors import DocumentError, ErrorKind, InvalidInputError
from loaders import BaseDocumentLoader, PDFLoader
from models import ProcessedDocument
from splitters import BaseTextSplitter, SentenceTextSplitter

logger = logging.getLogger(__name__)

PDF_MAGIC_BYTES = b"%PDF-"


class DocumentPipeline:
    """Pipeline for turning an uploaded PDF into text and chunks.

    Supports dependency injection for the loader and splitter.
    """

    def __init__(
        self,
        settings: Optional[ProcessingSettings] = None,
        loader: Optional[BaseDocumentLoader] = None,
        splitter: Optional[BaseTextSplitter] = None,
    ):
        self.settings = settings or ProcessingSettings()
        self.loader = loader or PDFLoader()
        self.splitter = splitter or SentenceTextSplitter.from_settings(self.settings)

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "DocumentPipeline":
        """Create pipeline from configuration dictionary."""
        return cls(settings=load_settings(config))

    def validate(self, data: bytes, filename: str = "document.pdf") -> None:
        if not data:
            raise InvalidInputError("No file provided")
        if len(data) > self.settings.max_upload_bytes:
            raise InvalidInputError(
                f"File size must be less than {self.settings.max_upload_mb}MB"
            )
        if not data.startswith(PDF_MAGIC_BYTES):
            raise DocumentError(
                f"{filename} is not a PDF file (missing PDF header)",
                kind=ErrorKind.INVALID_FILE_FORMAT,
            )

    def process(self, data: bytes, filename: str = "document.pdf") -> ProcessedDocument:
        """Validate, extract and chunk a PDF upload.

        Raises:
            InvalidInputError: Empty or oversized upload, or no extractable text.
            DocumentError: Not a readable PDF, or password protected.
        """
        self.validate(data, filename)

        logger.info(f"Extracting text from {filename} ({len(data)} bytes)")
        extracted = self.loader.extract(data)
        if not extracted.text.strip():
            raise InvalidInputError("No text content found in PDF")

        chunks = self.splitter.split(extracted.text)
        logger.info(
            f"Processed {filename}: {extracted.page_count} pages, "
            f"{len(extracted.text)} characters, {len(chunks)} chunks"
        )
        return ProcessedDocument(
            name=filename,
            size=len(data),
            text=extracted.text,
            chunks=chunks,
            page_count=extracted.page_count,
            metadata=extracted.metadata,
        )
