import io
import logging
from typing import Any

from pypdf import PasswordType, PdfReader
from pypdf.errors import FileNotDecryptedError, PdfReadError

from errors import DocumentError, ErrorKind
from .base import BaseDocumentLoader, ExtractedDocument

logger = logging.getLogger(__name__)


class PDFLoader(BaseDocumentLoader):
    """Document loader for in-memory PDF files using pypdf."""

    def extract(self, data: bytes) -> ExtractedDocument:
        try:
            reader = PdfReader(io.BytesIO(data))
            if reader.is_encrypted and reader.decrypt("") == PasswordType.NOT_DECRYPTED:
                raise DocumentError(kind=ErrorKind.PASSWORD_PROTECTED_FILE)

            pages = []
            for page in reader.pages:
                page_text = page.extract_text()
                if page_text:
                    pages.append(page_text)

            return ExtractedDocument(
                text="\n".join(pages),
                page_count=len(reader.pages),
                metadata=self._read_metadata(reader),
            )
        except FileNotDecryptedError as e:
            raise DocumentError(kind=ErrorKind.PASSWORD_PROTECTED_FILE) from e
        except PdfReadError as e:
            logger.warning(f"Failed to read PDF: {e}")
            raise DocumentError(kind=ErrorKind.INVALID_FILE_FORMAT) from e

    def _read_metadata(self, reader: PdfReader) -> dict[str, Any]:
        info = reader.metadata or {}
        return {str(key).lstrip("/"): str(value) for key, value in info.items()}
