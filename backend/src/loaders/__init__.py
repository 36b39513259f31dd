from .base import BaseDocumentLoader, ExtractedDocument
from .pdf import PDFLoader

DocumentLoader = PDFLoader

__all__ = ["BaseDocumentLoader", "DocumentLoader", "ExtractedDocument", "PDFLoader"]
