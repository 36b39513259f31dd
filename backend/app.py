import logging
import sys
from pathlib import Path
from typing import Iterator

sys.path.insert(0, str(Path(__file__).parent / "src"))

import streamlit as st

from adapters import GEMINI_MODELS
from config import find_config_path, get_settings_path, load_config
from errors import AssistantError
from pipelines import SUPPORTED_LANGUAGES, DocumentPipeline, GenerationGateway, get_llm_defaults
from session import Session, SettingsStore
from streaming import DataEvent, ErrorEvent, StreamEvent

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

NO_API_KEY = "Please set your Gemini API key in the sidebar first."

st.set_page_config(page_title="PDF Assistant", page_icon="📄")

st.title("📄 PDF Assistant")

CONFIG_PATH = find_config_path()
CONFIG = load_config(CONFIG_PATH)
LLM_DEFAULTS = get_llm_defaults(CONFIG)


@st.cache_resource
def get_gateway() -> GenerationGateway:
    return GenerationGateway.from_config(CONFIG)


@st.cache_resource
def get_document_pipeline() -> DocumentPipeline:
    return DocumentPipeline.from_config(CONFIG)


def get_settings_store() -> SettingsStore:
    return SettingsStore(get_settings_path(CONFIG, CONFIG_PATH))


def get_session() -> Session:
    if "session" not in st.session_state:
        session = Session.from_store(get_settings_store(), LLM_DEFAULTS["model"])
        if not session.has_api_key:
            session.api_key = LLM_DEFAULTS["api_key"]
        st.session_state.session = session
    return st.session_state.session


def stream_text(events: Iterator[StreamEvent], errors: list[str]) -> Iterator[str]:
    """Yield data fragments for display, collecting a terminal error message."""
    for event in events:
        if isinstance(event, DataEvent):
            yield event.content
        elif isinstance(event, ErrorEvent):
            errors.append(event.message)


def show_export(text: str, file_name: str, key: str) -> None:
    """Offer a result as a download and as copyable text."""
    st.download_button(
        "Download", text, file_name=file_name, mime="text/plain", key=f"download_{key}"
    )
    with st.expander("Copy text"):
        st.code(text, language=None)


session = get_session()
gateway = get_gateway()

with st.sidebar:
    st.header("Settings")
    api_key = st.text_input("Gemini API key", value=session.api_key, type="password")
    model_ids = [m["id"] for m in GEMINI_MODELS]
    model = st.selectbox(
        "Model",
        model_ids,
        index=model_ids.index(session.model) if session.model in model_ids else 0,
        format_func=lambda mid: next(m["name"] for m in GEMINI_MODELS if m["id"] == mid),
    )
    if st.button("Save settings"):
        session.api_key = api_key.strip()
        session.model = model
        if session.save_settings(get_settings_store()):
            st.success("✅ Settings saved")
        else:
            st.warning("⚠️ Settings apply to this session only (could not be saved)")

uploaded_file = st.file_uploader("Upload a PDF", type=["pdf"])

if uploaded_file is None and session.document is not None:
    session.clear_document()
elif uploaded_file is not None and (
    session.document is None or session.document.name != uploaded_file.name
):
    with st.spinner("Processing your PDF..."):
        try:
            document = get_document_pipeline().process(
                uploaded_file.getvalue(), uploaded_file.name
            )
            session.set_document(document)
        except AssistantError as e:
            st.error(f"❌ {uploaded_file.name}: {e.message}")

document = session.document

if document is None:
    st.info("Upload a PDF to start chatting with it.")
elif not session.has_api_key:
    st.warning(f"⚠️ {NO_API_KEY}")
else:
    st.caption(
        f"{document.name}: {document.page_count} pages, "
        f"{len(document.text):,} characters, {len(document.chunks)} chunks"
    )
    tab_chat, tab_summary, tab_translate, tab_questions = st.tabs(
        ["Chat", "Summary", "Translate", "Questions"]
    )

    with tab_chat:
        if session.messages and st.button("Clear chat"):
            session.clear_chat()

        for message in session.messages:
            with st.chat_message(message.role):
                st.markdown(message.content)

        if prompt := st.chat_input("Ask something about the PDF..."):
            session.add_message("user", prompt)
            with st.chat_message("user"):
                st.markdown(prompt)

            with st.chat_message("assistant"):
                stream_errors: list[str] = []
                try:
                    events = gateway.stream_chat(
                        session.api_key, session.model, prompt, document.chunks
                    )
                    answer = st.write_stream(stream_text(events, stream_errors))
                except AssistantError as e:
                    answer = ""
                    stream_errors.append(e.message)

                if stream_errors:
                    st.error(f"❌ {stream_errors[0]}")
                if answer:
                    session.add_message("assistant", answer)

    with tab_summary:
        if st.button("Summarize document"):
            with st.spinner("Summarizing..."):
                try:
                    result = gateway.summarize(session.api_key, session.model, document.text)
                    session.summary = result.summary
                except AssistantError as e:
                    st.error(f"❌ {e.message}")
        if session.summary:
            st.markdown(session.summary)
            show_export(session.summary, session.export_name("summary"), "summary")

    with tab_translate:
        language = st.selectbox(
            "Target language", [entry["name"] for entry in SUPPORTED_LANGUAGES]
        )
        if st.button("Translate document"):
            with st.spinner(f"Translating to {language}..."):
                try:
                    result = gateway.translate(
                        session.api_key, session.model, document.text, language
                    )
                    session.translation = result.translation
                    session.translation_language = result.target_language
                except AssistantError as e:
                    st.error(f"❌ {e.message}")
        if session.translation:
            st.markdown(session.translation)
            show_export(
                session.translation,
                session.export_name(session.translation_language or language),
                "translation",
            )

    with tab_questions:
        count = st.slider(
            "Number of questions", 1, 20, gateway.settings.question_count
        )
        if st.button("Generate questions"):
            with st.spinner("Generating questions..."):
                try:
                    result = gateway.generate_questions(
                        session.api_key, session.model, document.text, count
                    )
                    session.questions = result.questions
                except AssistantError as e:
                    st.error(f"❌ {e.message}")
        if session.questions:
            for i, question in enumerate(session.questions, start=1):
                st.write(f"{i}. {question}")
            show_export(session.questions_text(), session.export_name("questions"), "questions")
