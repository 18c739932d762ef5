import argparse
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, List, Optional, Sequence, TextIO, Tuple

from dotenv import load_dotenv

from config.loader import CREDENTIAL_ENV, load_embedding_settings, load_user_config
from inspector_cli import prompt_loop
from rag.embedding_retriever import EmbeddingRetriever
from rag.embeddings import create_embedding_provider
from rag.errors import ConfigError, ProviderError
from rag.similarity import cosine_similarity
from rag.vector_store import VectorStore
from utils.tracer import RunTracer
from utils.ui import BaseUI, get_ui

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_PROVIDER_ERROR = 2

DEFAULT_SENTENCES = [
    "The canine barked loudly.",
    "The dog made a noise.",
    "The electron spins rapidly.",
]

OBSERVATIONS = """📊 Observations:
- Each embedding is just an array of floating-point numbers
- Sentences 1 and 2 (about dogs) will have similar values in many dimensions
- Sentence 3 (about electrons) will differ significantly from sentences 1 and 2

This demonstrates that 'AI embeddings' are simply numerical vectors,
not magic: they represent semantic meaning as coordinates in high-dimensional space."""


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Embedding Inspector")
    parser.add_argument(
        "--config",
        default=None,
        help="Path to user config JSON (defaults to config/user_config.json, then the example)",
    )
    parser.add_argument(
        "--top-k",
        type=int,
        default=None,
        help="Number of results per search (overrides search.top_k)",
    )
    parser.add_argument(
        "--no-demo",
        action="store_true",
        help="Skip the pairwise similarity report and example search",
    )
    return parser.parse_args(argv)


def pairwise_similarities(store: VectorStore) -> List[Tuple[int, int, float]]:
    """Cosine similarity of every stored document with the next one, wrapping around."""
    count = store.size()
    rows = []
    for current in range(count):
        nxt = (current + 1) % count
        rows.append((current, nxt, cosine_similarity(store.get_vector(current), store.get_vector(nxt))))
    return rows


def report_config_error(ui: BaseUI, exc: ConfigError) -> None:
    ui.error(str(exc))
    if CREDENTIAL_ENV not in str(exc):
        return
    ui.info("Please create a .env file with your GitHub token:")
    ui.info(f"{CREDENTIAL_ENV}=your-github-token-here")
    ui.info("\nGet your token from: https://github.com/settings/tokens")
    ui.info("Or use GitHub Models: https://github.com/marketplace/models")


def run_demo(
    retriever: EmbeddingRetriever,
    ui: BaseUI,
    sentences: Sequence[str],
    example_query: Optional[str],
    top_k: int,
    show_report: bool = True,
) -> None:
    ui.title("Embedding Inspector Lab")
    ui.info("Generating embeddings for the demo sentences...\n")
    result = retriever.embed_documents(sentences, source="demo")
    if not result.ok:
        ui.error(f"Sentence {result.failed_index + 1} was not stored: {result.error}")
    ui.info(f"✅ Successfully stored {result.committed} sentences in the vector store.")
    ui.documents(retriever.vector_store)

    if not show_report:
        return

    ui.title("Embedding Vectors")
    ui.similarities(pairwise_similarities(retriever.vector_store))
    ui.info()
    ui.info(OBSERVATIONS)

    if example_query:
        ui.title("Example Search")
        ui.info(f"Query: {example_query}")
        ui.results(retriever.retrieve(example_query, top_k=top_k))


def main(
    argv: Optional[Sequence[str]] = None,
    input_fn: Callable[[str], str] = input,
    out: Optional[TextIO] = None,
) -> int:
    args = parse_args(argv)
    load_dotenv()  # GITHUB_TOKEN, EMBEDDING_BASE_URL, EMBEDDING_MODEL, EMBEDDING_BACKEND

    # --- Load Config ---
    try:
        cfg = load_user_config(args.config)
    except ConfigError as exc:
        report_config_error(BaseUI(out), exc)
        return EXIT_CONFIG_ERROR
    ui = get_ui(cfg.get("tui", {}).get("enabled", False), out)
    try:
        settings = load_embedding_settings(cfg)
    except ConfigError as exc:
        report_config_error(ui, exc)
        return EXIT_CONFIG_ERROR

    search_cfg = cfg.get("search", {})
    demo_cfg = cfg.get("demo", {})
    tracing_cfg = cfg.get("tracing", {"enabled": False})
    try:
        top_k = args.top_k if args.top_k is not None else int(search_cfg.get("top_k", 3))
    except (TypeError, ValueError):
        report_config_error(ui, ConfigError(f"search.top_k must be an integer, got {search_cfg.get('top_k')!r}"))
        return EXIT_CONFIG_ERROR
    sentences = demo_cfg.get("sentences") or DEFAULT_SENTENCES
    example_query = demo_cfg.get("example_query", DEFAULT_SENTENCES[1])

    # --- Tracer Directory ---
    tracer = None
    if tracing_cfg.get("enabled", False):
        run_id = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
        tracer = RunTracer(Path(tracing_cfg.get("log_dir", "logs")) / run_id)
        tracer.info("run_start", {"model": settings.model, "backend": settings.backend})

    # --- Embedding provider & store ---
    try:
        provider = create_embedding_provider(
            settings.backend,
            settings.model,
            settings.base_url,
            api_key=settings.api_key,
            timeout=settings.timeout,
        )
    except ConfigError as exc:
        report_config_error(ui, exc)
        return EXIT_CONFIG_ERROR
    store = VectorStore()
    retriever = EmbeddingRetriever(provider, store, tracer=tracer)

    try:
        run_demo(retriever, ui, sentences, example_query, top_k, show_report=not args.no_demo)
    except ProviderError as exc:
        if tracer:
            tracer.info("provider_error", {"stage": "demo", "error": str(exc)})
        ui.error(f"Embedding request failed: {exc}")
        return EXIT_PROVIDER_ERROR

    ui.title("Semantic Search")
    searches = prompt_loop(retriever, ui, top_k=top_k, input_fn=input_fn, tracer=tracer)
    if tracer:
        tracer.info("run_end", {"searches": searches, "documents": store.size()})
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
