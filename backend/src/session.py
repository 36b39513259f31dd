import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional

from adapters.gemini import DEFAULT_MODEL
from models import ProcessedDocument

logger = logging.getLogger(__name__)

GEMINI_API_KEY = "gemini_api_key"
SELECTED_MODEL = "selected_gemini_model"


class SettingsStore:
    """JSON-file key-value store for user settings.

    Reads and writes never raise: failures are logged and reported as
    ``None`` from ``get`` and ``False`` from ``set``.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.error(f"Error reading settings from {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, key: str) -> Optional[str]:
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> bool:
        data = self._read()
        data[key] = value
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w") as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            logger.error(f"Error writing settings to {self.path}: {e}")
            return False
        return True


@dataclass
class ChatMessage:
    role: str
    content: str
    timestamp: datetime = field(default_factory=datetime.now)


@dataclass
class Session:
    """State of one user's working session.

    Passed explicitly to whatever needs it; nothing here is global.
    """

    api_key: str = ""
    model: str = DEFAULT_MODEL
    document: Optional[ProcessedDocument] = None
    messages: list[ChatMessage] = field(default_factory=list)
    summary: Optional[str] = None
    translation: Optional[str] = None
    translation_language: Optional[str] = None
    questions: Optional[list[str]] = None

    @classmethod
    def from_store(cls, store: SettingsStore, default_model: str = DEFAULT_MODEL) -> "Session":
        return cls(
            api_key=store.get(GEMINI_API_KEY) or "",
            model=store.get(SELECTED_MODEL) or default_model,
        )

    def save_settings(self, store: SettingsStore) -> bool:
        saved_key = store.set(GEMINI_API_KEY, self.api_key.strip())
        saved_model = store.set(SELECTED_MODEL, self.model)
        return saved_key and saved_model

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key.strip())

    def set_document(self, document: ProcessedDocument) -> None:
        """Replace the active document and drop results tied to the old one."""
        self.document = document
        self.messages.clear()
        self.clear_tool_results()

    def clear_document(self) -> None:
        self.document = None
        self.messages.clear()
        self.clear_tool_results()

    def clear_chat(self) -> None:
        self.messages.clear()

    def add_message(self, role: str, content: str) -> ChatMessage:
        message = ChatMessage(role=role, content=content)
        self.messages.append(message)
        return message

    def clear_tool_results(self) -> None:
        self.summary = None
        self.translation = None
        self.translation_language = None
        self.questions = None

    def export_name(self, suffix: str) -> str:
        """File name for a downloaded result, e.g. ``report_summary.txt``."""
        name = self.document.name if self.document is not None else "document"
        stem = name[:-4] if name.lower().endswith(".pdf") else name
        return f"{stem}_{suffix}.txt"

    def questions_text(self) -> str:
        return "\n\n".join(
            f"{i}. {question}" for i, question in enumerate(self.questions or [], start=1)
        )
