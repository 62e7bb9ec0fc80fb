"""
Load, validate, audit and edit `.pre-commit-config.yaml` files.

The models live in `pcconf.models`; `pcconf.cli` is the `pcconf` command.
This package never runs hooks; that stays the job of `pre-commit` itself.
"""

from __future__ import annotations

import warnings

from beartype.claw import beartype_this_package
from rich.console import Console
from rich.markup import escape

console = Console()
err_console = Console(stderr=True)


def _rich_warning(message, category, filename, lineno, file=None, line=None):  # type: ignore[no-untyped-def]
    err_console.print(f"[bold yellow]{category.__name__}[/bold yellow]: {escape(str(message))}")


warnings.showwarning = _rich_warning


beartype_this_package()
