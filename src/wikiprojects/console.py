"""Rich console output for wikiprojects.

Messages go to stderr; stdout carries only results (text, JSON or tables).
"""

from rich.console import Console
from rich.markup import escape

# Console instance for messages
console = Console(stderr=True)

# Console for tabular data on stdout
stdout = Console()


def _say(icon: str, msg: str) -> None:
    # URLs and regexes may contain [brackets] that rich would read as markup
    console.print(f"{icon} {escape(msg)}")


def info(msg: str) -> None:
    """Print an informational message."""
    _say("[blue]ℹ[/blue]", msg)


def success(msg: str) -> None:
    """Print a success message."""
    _say("[green]✓[/green]", msg)


def warning(msg: str) -> None:
    """Print a warning message."""
    _say("[yellow]⚠[/yellow]", msg)


def error(msg: str) -> None:
    """Print an error message."""
    _say("[red]✗[/red]", msg)
