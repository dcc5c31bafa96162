"""Rich console output for crawlopts.

Messages often quote user input (header entries, cookie lines, file paths),
so message text is escaped and only the status icons carry rich markup.
"""

from rich.console import Console
from rich.markup import escape

# Console instance writing to stderr (stdout reserved for parsed options)
console = Console(stderr=True)


def _emit(icon: str, msg: str) -> None:
    console.print(f"{icon} {escape(msg)}")


def info(msg: str) -> None:
    """Print an informational message."""
    _emit("[blue]\u2139[/blue]", msg)


def success(msg: str) -> None:
    """Print a success message."""
    _emit("[green]\u2713[/green]", msg)


def warning(msg: str) -> None:
    """Print a warning message."""
    _emit("[yellow]\u26a0[/yellow]", msg)


def error(msg: str) -> None:
    """Print an error message."""
    _emit("[red]\u2717[/red]", msg)
