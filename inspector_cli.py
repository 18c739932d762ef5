#!/usr/bin/env python3
"""
Embedding Inspector CLI entrypoint.

Behavior:
- Shows a brief intro.
- Runs the demo ingestion, then a search prompt: any text is a query,
  `quit`/`exit` (or end of input) leaves.
"""
import sys
from typing import Callable, Optional

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from rag.embedding_retriever import EmbeddingRetriever
from rag.errors import DimensionMismatch, ProviderError
from utils.tracer import RunTracer
from utils.ui import BaseUI

PROMPT = "Enter a search query (or 'quit' to exit): "
QUIT_COMMANDS = ("quit", "exit")


def render_intro(console: Optional[Console] = None) -> None:
    console = console or Console()
    console.rule("[bold cyan]Embedding Inspector[/bold cyan]")
    console.print(Align.center(Text("Text in, vectors out, cosine in between.", style="bold cyan")))
    info = Table.grid(padding=(0, 1))
    info.add_row("Description", "In-memory vector store with exact cosine search")
    info.add_row("Command", "type a query to search; 'quit' or 'exit' to leave")
    console.print(Align.center(Panel(info, title="Info", expand=False, border_style="green")))


def prompt_loop(
    retriever: EmbeddingRetriever,
    ui: BaseUI,
    top_k: int = 3,
    input_fn: Callable[[str], str] = input,
    tracer: Optional[RunTracer] = None,
) -> int:
    """
    Read queries until quit/exit or end of input. Returns the number of
    searches that ran.
    """
    searches = 0
    while True:
        try:
            query = input_fn(PROMPT).strip()
        except (EOFError, KeyboardInterrupt):
            ui.info("\nGoodbye!")
            return searches

        if query.lower() in QUIT_COMMANDS:
            ui.info("Goodbye!")
            return searches
        if not query:
            ui.info("Please enter a valid query.\n")
            continue

        try:
            results = retriever.retrieve(query, top_k=top_k)
        except ProviderError as exc:
            if tracer:
                tracer.info("provider_error", {"query": query, "error": str(exc)})
            ui.error(f"Embedding request failed: {exc}")
            continue
        except DimensionMismatch as exc:
            # the provider changed model between ingestion and query
            ui.error(str(exc))
            continue
        searches += 1
        ui.results(results)


def cli() -> None:
    render_intro()
    from main import main as run_main
    sys.exit(run_main())


if __name__ == "__main__":
    cli()
