"""
Console rendering for the embedding inspector. RichUI draws tables with rich;
BaseUI prints plain lines with the same methods.
"""

import sys
from typing import Iterable, List, Optional, TextIO, Tuple

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from rag.types import Document, ScoredResult
from utils import log_title


class BaseUI:
    enabled = False

    def __init__(self, out: Optional[TextIO] = None) -> None:
        self.out = out or sys.stdout

    def title(self, message: str) -> None:
        log_title(message, self.out)

    def info(self, message: str = "") -> None:
        self.out.write(f"{message}\n")

    def error(self, message: str) -> None:
        self.out.write(f"Error: {message}\n")

    def documents(self, documents: Iterable[Document]) -> None:
        for doc in documents:
            self.info(f"Sentence {doc.id + 1}: {doc.text}")

    def similarities(self, rows: List[Tuple[int, int, float]]) -> None:
        for current, nxt, score in rows:
            self.info(f"Cosine similarity between Sentence {current + 1} and Sentence {nxt + 1}: {score:.4f}")

    def results(self, results: List[ScoredResult]) -> None:
        self.title("SEARCH RESULTS")
        if not results:
            self.info("No documents stored yet.")
            return
        for rank, result in enumerate(results, start=1):
            self.info(
                f"Rank {rank}:\n"
                f"  Similarity Score: {result.score:.4f}\n"
                f"  Sentence: {result.document.text}\n"
            )


class RichUI(BaseUI):
    enabled = True

    def __init__(self, out: Optional[TextIO] = None) -> None:
        super().__init__(out)
        self.console = Console(file=self.out, highlight=False)

    def title(self, message: str) -> None:
        self.console.rule(f"[bold cyan]{message}[/bold cyan]")

    def info(self, message: str = "") -> None:
        self.console.print(message, markup=False)

    def error(self, message: str) -> None:
        self.console.print(Panel(message, title="Error", border_style="red"))

    def documents(self, documents: Iterable[Document]) -> None:
        table = Table(show_header=True, header_style="bold", expand=False)
        table.add_column("#", justify="right")
        table.add_column("Sentence")
        table.add_column("Created", style="dim")
        for doc in documents:
            created = doc.metadata.created_at.isoformat() if doc.metadata.created_at else ""
            table.add_row(str(doc.id + 1), doc.text, created)
        self.console.print(table)

    def similarities(self, rows: List[Tuple[int, int, float]]) -> None:
        table = Table(show_header=True, header_style="bold", expand=False)
        table.add_column("Pair")
        table.add_column("Cosine similarity", justify="right")
        for current, nxt, score in rows:
            table.add_row(f"Sentence {current + 1} ↔ Sentence {nxt + 1}", f"{score:.4f}")
        self.console.print(table)

    def results(self, results: List[ScoredResult]) -> None:
        self.title("Search Results")
        if not results:
            self.info("No documents stored yet.")
            return
        table = Table(show_header=True, header_style="bold", expand=False)
        table.add_column("Rank", justify="right")
        table.add_column("Score", justify="right", style="green")
        table.add_column("Sentence")
        for rank, result in enumerate(results, start=1):
            table.add_row(str(rank), f"{result.score:.4f}", result.document.text)
        self.console.print(table)


def get_ui(enabled: bool, out: Optional[TextIO] = None) -> BaseUI:
    if enabled:
        return RichUI(out)
    return BaseUI(out)
