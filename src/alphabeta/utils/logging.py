"""
Logging utilities with rich formatting.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from rich.console import Console
from rich.table import Table
from rich.progress import (
    Progress,
    SpinnerColumn,
    TextColumn,
    BarColumn,
    MofNCompleteColumn,
    TimeElapsedColumn,
)
from rich.panel import Panel

from ..search import SearchResult


console = Console()


@dataclass
class MoveEvent:
    """One engine decision, as written to the event log."""

    game: str
    move: str
    score: Optional[int]
    principal_variation: list[str]
    tactical: bool
    nodes: int
    cutoffs: int
    elapsed: float
    timestamp: str = ""

    def __post_init__(self):
        if not self.timestamp:
            self.timestamp = datetime.now().isoformat()

    @classmethod
    def from_result(cls, game: str, result: SearchResult) -> MoveEvent:
        return cls(
            game=game,
            move=str(result.move),
            score=result.score,
            principal_variation=[str(m) for m in result.principal_variation],
            tactical=result.tactical,
            nodes=result.stats.nodes,
            cutoffs=result.stats.cutoffs,
            elapsed=result.stats.elapsed,
        )


class Logger:
    """
    Console logger with rich output and optional JSON-lines logging.

    Args:
        log_dir: Directory for the event log (None disables it)
        verbose: Whether to print to console
    """

    def __init__(self, log_dir: Optional[str] = None, verbose: bool = True):
        self.verbose = verbose
        self.log_file: Optional[Path] = None

        if log_dir:
            path = Path(log_dir)
            path.mkdir(parents=True, exist_ok=True)
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            self.log_file = path / f"moves_{timestamp}.jsonl"

        self.history: list[MoveEvent] = []

    def log_search(self, game: str, result: SearchResult) -> None:
        """Record an engine decision and print its summary."""
        event = MoveEvent.from_result(game, result)
        self.history.append(event)

        if self.log_file:
            with open(self.log_file, "a") as f:
                f.write(json.dumps(asdict(event)) + "\n")

        if self.verbose:
            print_search(result)

    def log_message(self, message: str, style: str = "white") -> None:
        """Log a message."""
        if self.verbose:
            console.print(f"[{style}]{message}[/]")

    def log_info(self, message: str) -> None:
        """Log info message."""
        self.log_message(message, "blue")


def print_search(result: SearchResult) -> None:
    """Print a search summary table."""
    table = Table(show_header=False, box=None)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("Move", str(result.move))
    if result.tactical:
        table.add_row("Source", "tactical shortcut")
    else:
        table.add_row("Score", str(result.score))
        table.add_row("Line", " -> ".join(f"({m})" for m in result.principal_variation))
        table.add_row("Nodes", str(result.stats.nodes))
        table.add_row("Cutoffs", str(result.stats.cutoffs))
        table.add_row("Time", f"{result.stats.elapsed * 1000:.1f} ms")

    console.print(table)


def create_progress() -> Progress:
    """Create a rich progress bar with elapsed time."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=False,
    )


def print_config(config: Any) -> None:
    """Print configuration in a nice format."""
    table = Table(title="Configuration", show_header=True)
    table.add_column("Parameter", style="cyan")
    table.add_column("Value", style="white")

    def add_dict(d: dict, prefix: str = "") -> None:
        for k, v in d.items():
            key = f"{prefix}{k}" if prefix else k
            if isinstance(v, dict):
                add_dict(v, f"{key}.")
            else:
                table.add_row(key, str(v))

    add_dict(asdict(config))
    console.print(table)


def print_board(board_str: str, title: str = "Board") -> None:
    """Print a game board in a panel."""
    console.print(Panel(board_str, title=title, border_style="blue", expand=False))
