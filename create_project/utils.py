"""Shared utility functions for create-project.

Provides JSON and JSONC file I/O and the Rich-based console reporting used
across the scaffolder and the CLI.
"""

from __future__ import annotations

import asyncio
import json
import re
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.rule import Rule
from rich.table import Table

console = Console()


# ---------------------------------------------------------------------------
# JSON I/O
# ---------------------------------------------------------------------------


def load_json(path: str | Path) -> Any:
    """Load and parse a JSON file.

    Args:
        path: Path to the JSON file.

    Returns:
        The parsed value.  Callers check the top-level type they expect.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
    """
    return json.loads(Path(path).read_text(encoding="utf-8"))


# Matches a JSON string literal (kept) or a comment / trailing comma (dropped).
_JSONC_TOKEN = re.compile(
    r'("(?:\\.|[^"\\])*")|//[^\n]*|/\*.*?\*/|,(?=\s*[}\]])',
    re.DOTALL,
)


def strip_jsonc_comments(content: str) -> str:
    """Strip comments and trailing commas from JSONC content.

    String literals are left untouched, so glob patterns such as
    ``"src/**/*.ts"`` survive.
    """
    return _JSONC_TOKEN.sub(lambda match: match.group(1) or "", content)


def load_jsonc(path: str | Path) -> Any:
    """Load a JSON-with-comments file such as ``tsconfig.json``.

    Comments are discarded; they are not written back by ``save_json``.
    """
    raw = Path(path).read_text(encoding="utf-8")
    return json.loads(strip_jsonc_comments(raw))


def dump_json(data: dict[str, Any] | list[Any]) -> str:
    """Serialise *data* the way npm writes ``package.json``: two-space indent, final newline."""
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


async def save_json(data: dict[str, Any] | list[Any], path: str | Path) -> None:
    """Save data as pretty-printed JSON.

    Parent directories are created automatically.  The write itself is
    performed in a worker thread so the event loop is not blocked.

    Args:
        data: Serialisable data (dict or list).
        path: Destination file path.
    """
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    content = dump_json(data)
    await asyncio.to_thread(file_path.write_text, content, "utf-8")


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_header(title: str, style: str = "bright_blue") -> None:
    """Print a full-width rule with *title*."""
    console.print()
    console.print(Rule(f"[bold {style}] {title} [/bold {style}]", style=style))
    console.print()


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_step(message: str) -> None:
    """Print a progress step."""
    console.print(f"  [green]+[/green] {message}")


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")
