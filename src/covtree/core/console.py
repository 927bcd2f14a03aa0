"""User-facing console output for CLI operations.

Usage::

    from covtree.core.console import status

    status("Tracefile written", style="success")  # ✓ Tracefile written
    status("Coverage below minimum", style="error")  # ✗ Coverage below minimum
"""

from __future__ import annotations

from rich.console import Console

from covtree.core.logging import get_logger

# Status lines go to stderr so stdout stays parseable (--json)
_console = Console(stderr=True)
_out_console = Console()

# Style prefixes
_STYLES = {
    "success": "[green]✓[/green] ",
    "error": "[red]✗[/red] ",
    "warning": "[yellow]![/yellow] ",
    "info": "  ",
    "none": "",
}


def get_console(*, stderr: bool = True) -> Console:
    """Get the shared Rich console instance for stderr (default) or stdout."""
    return _console if stderr else _out_console


def status(message: str, *, style: str = "info", indent: int = 0) -> None:
    """Print a styled status message to stderr."""
    prefix = _STYLES.get(style, "")
    padding = " " * indent
    _console.print(f"{padding}{prefix}{message}", highlight=False)

    get_logger("console").debug("status", message=message, style=style)


def pluralize(count: int, singular: str, plural: str | None = None) -> str:
    """Return "1 file" / "3 files" style counts."""
    if plural is None:
        plural = singular + "s"
    word = singular if count == 1 else plural
    return f"{count} {word}"
