from __future__ import annotations

from typing_extensions import override


class PreCommitYamlValidationError(Exception):
    """Raise when parsing a YAML goes wrong"""

    def __init__(self, *errors: str, path: str | None = None) -> None:
        self.errors: list[str] = list(errors)
        self.path = path
        super().__init__(*errors)

    @override
    def __str__(self) -> str:
        where = f"{self.path}: " if self.path else ""
        if not self.errors:
            return f"{where}invalid pre-commit yaml"
        return where + "; ".join(self.errors)
