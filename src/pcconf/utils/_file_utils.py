from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class HasWrite(Protocol):
    """Proto for files or buffer"""

    def write(self, s: str, /) -> int: ...


def write_(f: HasWrite, s: str) -> None:
    """Write wrapper to placate pyright"""
    f.write(s)  # pyright: ignore[reportUnusedCallResult]


def write_atomic(path: Path, new_content: str) -> None:
    """Write to tmp first, then replace."""
    tmp = path.with_suffix(path.suffix + ".tmp")
    with tmp.open("w", encoding="utf-8", newline="\n") as f:
        write_(f, new_content)
    _ = tmp.replace(path)
    logger.debug("wrote %s", path)


def write_if_changed(path: Path, content: str) -> bool:
    """Write a file only if its content changed"""
    old = path.read_text(encoding="utf-8") if path.exists() else None
    if old == content:
        return False
    write_atomic(path, content)
    return True
