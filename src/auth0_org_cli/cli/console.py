"""Shared Rich console for operator-facing output.

Status lines go to stderr so that stdout stays free for anything a
caller might pipe.  Markup in user-supplied values must be escaped with
:func:`escape` before printing.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

__all__: list[str] = ["console", "escape", "make_console"]


def make_console(**kwargs: object) -> Console:
    """Create a Rich console targeting stderr unless told otherwise."""
    options: dict[str, object] = {"stderr": True, "highlight": False}
    options.update(kwargs)
    return Console(**options)  # type: ignore[arg-type]


console: Console = make_console()
