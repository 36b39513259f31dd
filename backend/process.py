import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent / "src"))

from config import find_config_path, load_config, load_settings
from errors import AssistantError, ConfigurationError
from pipelines import DocumentPipeline
from rankers import KeywordRanker

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

PREVIEW_CHARS = 120


def main():
    parser = argparse.ArgumentParser(
        description="Extract and chunk a PDF, optionally ranking chunks for a query"
    )
    parser.add_argument("pdf", type=Path, help="PDF file to process")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: config.toml in project root)",
    )
    parser.add_argument("--query", default=None, help="Rank chunks against this query")
    parser.add_argument("--top-k", type=int, default=None, help="Chunks to show for --query")

    args = parser.parse_args()
    if args.top_k is not None and args.top_k < 1:
        parser.error("--top-k must be at least 1")

    try:
        config = load_config(find_config_path(args.config))
        settings = load_settings(config)
        pipeline = DocumentPipeline(settings=settings)
        document = pipeline.process(args.pdf.read_bytes(), args.pdf.name)
    except (AssistantError, ConfigurationError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print("\n=== Document Processed ===")
    print(f"Pages: {document.page_count}")
    print(f"Characters: {len(document.text)}")
    print(f"Chunks: {len(document.chunks)}")

    chunks = document.chunks
    if args.query:
        ranker = KeywordRanker(top_k=settings.top_k)
        chunks = ranker.rank(args.query, chunks, args.top_k)
        print(f"\n=== Top {len(chunks)} chunks for {args.query!r} ===")

    for chunk in chunks:
        preview = " ".join(chunk.text.split())[:PREVIEW_CHARS]
        print(f"[{chunk.index}] {chunk.start}-{chunk.end}: {preview}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
