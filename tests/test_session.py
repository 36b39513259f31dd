import json

from models import Chunk, ProcessedDocument
from session import GEMINI_API_KEY, SELECTED_MODEL, Session, SettingsStore


def make_document(name: str = "paper.pdf") -> ProcessedDocument:
    return ProcessedDocument(
        name=name,
        size=10,
        text="Some text.",
        chunks=[Chunk(text="Some text.", index=0, start=0, end=10)],
        page_count=1,
    )


class TestSettingsStore:
    def test_round_trip(self, tmp_path) -> None:
        store = SettingsStore(tmp_path / "nested" / "settings.json")
        assert store.set(GEMINI_API_KEY, "secret") is True
        assert store.get(GEMINI_API_KEY) == "secret"
        assert json.loads((tmp_path / "nested" / "settings.json").read_text()) == {
            GEMINI_API_KEY: "secret"
        }

    def test_set_keeps_other_keys(self, tmp_path) -> None:
        store = SettingsStore(tmp_path / "settings.json")
        store.set(GEMINI_API_KEY, "secret")
        store.set(SELECTED_MODEL, "gemini-1.5-pro")
        assert store.get(GEMINI_API_KEY) == "secret"
        assert store.get(SELECTED_MODEL) == "gemini-1.5-pro"

    def test_missing_file_returns_none(self, tmp_path) -> None:
        assert SettingsStore(tmp_path / "absent.json").get(GEMINI_API_KEY) is None

    def test_corrupt_file_returns_none(self, tmp_path) -> None:
        path = tmp_path / "settings.json"
        path.write_text("{not json")
        assert SettingsStore(path).get(GEMINI_API_KEY) is None

    def test_unwritable_path_reports_failure(self, tmp_path) -> None:
        # A directory where the file should be makes the write fail.
        path = tmp_path / "settings.json"
        path.mkdir()
        assert SettingsStore(path).set(GEMINI_API_KEY, "secret") is False


class TestSession:
    def test_defaults_when_store_is_empty(self, tmp_path) -> None:
        session = Session.from_store(SettingsStore(tmp_path / "s.json"), "gemini-1.5-pro")
        assert session.api_key == ""
        assert session.model == "gemini-1.5-pro"
        assert not session.has_api_key

    def test_save_and_restore(self, tmp_path) -> None:
        store = SettingsStore(tmp_path / "s.json")
        session = Session(api_key="  key  ", model="gemini-1.0-pro")
        assert session.save_settings(store) is True

        restored = Session.from_store(store)
        assert restored.api_key == "key"
        assert restored.model == "gemini-1.0-pro"

    def test_blank_key_is_not_a_key(self) -> None:
        assert not Session(api_key="   ").has_api_key

    def test_set_document_resets_conversation(self) -> None:
        session = Session(api_key="key")
        session.set_document(make_document("first.pdf"))
        session.add_message("user", "hello")
        session.summary = "A summary."
        session.questions = ["Why?"]

        session.set_document(make_document("second.pdf"))

        assert session.document.name == "second.pdf"
        assert session.messages == []
        assert session.summary is None
        assert session.questions is None

    def test_clear_document(self) -> None:
        session = Session()
        session.set_document(make_document())
        session.add_message("assistant", "hi")
        session.translation = "Hola"

        session.clear_document()

        assert session.document is None
        assert session.messages == []
        assert session.translation is None

    def test_add_message(self) -> None:
        session = Session()
        message = session.add_message("user", "hello")
        assert message.role == "user"
        assert session.messages == [message]

    def test_clear_chat_keeps_document_and_results(self) -> None:
        session = Session()
        session.set_document(make_document())
        session.add_message("user", "hello")
        session.summary = "A summary."

        session.clear_chat()

        assert session.messages == []
        assert session.document is not None
        assert session.summary == "A summary."

    def test_clear_document_drops_translation_language(self) -> None:
        session = Session()
        session.set_document(make_document())
        session.translation = "Hola"
        session.translation_language = "Spanish"

        session.clear_document()

        assert session.translation_language is None

    def test_export_name_strips_pdf_extension(self) -> None:
        session = Session()
        session.set_document(make_document("Annual Report.PDF"))
        assert session.export_name("summary") == "Annual Report_summary.txt"
        assert session.export_name("Spanish") == "Annual Report_Spanish.txt"

    def test_export_name_without_document(self) -> None:
        assert Session().export_name("questions") == "document_questions.txt"

    def test_questions_text_is_numbered(self) -> None:
        session = Session(questions=["What is X?", "Why Y?"])
        assert session.questions_text() == "1. What is X?\n\n2. Why Y?"

    def test_questions_text_empty(self) -> None:
        assert Session().questions_text() == ""
