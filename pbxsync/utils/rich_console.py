from collections.abc import Iterable
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

_console: Console | None = None


def get_console() -> Console:
    """Shared console for tables, panels and the log handler."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def print_error(message: str, title: str = "Error"):
    """Print ``message`` in a red panel."""
    get_console().print(Panel(message, title=title, style="bold red", border_style="red"))


def print_table(
    headers: list[str],
    rows: Iterable[Iterable[Any]],
    title: str | None = None,
    styles: dict[str, str] | None = None,
):
    """Print rows under ``headers``.

    Args:
        headers: Column names.
        rows: Cells are converted with ``str``.
        title: Caption above the table.
        styles: Per-column rich styles, keyed by header.
    """
    styles = styles or {}
    table = Table(title=title)
    for header in headers:
        table.add_column(header, style=styles.get(header))
    for row in rows:
        table.add_row(*(str(cell) for cell in row))
    get_console().print(table)


def print_tree(tree: Tree):
    get_console().print(tree)
