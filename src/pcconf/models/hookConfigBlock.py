"""Model for an entry under the `hooks` block in a `.pre-commit-config.yaml`"""

from __future__ import annotations

import logging
from typing import Any

import attr

logger = logging.getLogger(__name__)


@attr.define
class HookConfigBlock:
    """A `hook` level entry (under `hooks` in the yaml).

    Only `id` is required. Every other field is an override of the hook's
    manifest and is omitted from dumped yaml when unset. `entry` and
    `language` only make sense for hooks of a `local` repo; they are also
    what a `.pre-commit-hooks.yaml` manifest declares.
    """

    id: str = attr.field()
    alias: str | None = attr.field(default=None)
    name: str | None = attr.field(default=None)
    description: str | None = attr.field(default=None)
    entry: str | None = attr.field(default=None)
    language: str | None = attr.field(default=None)
    language_version: str | None = attr.field(default=None)
    files: str | None = attr.field(default=None)
    exclude: str | None = attr.field(default=None)
    types: tuple[str, ...] | None = attr.field(default=None)
    types_or: tuple[str, ...] | None = attr.field(default=None)
    exclude_types: tuple[str, ...] | None = attr.field(default=None)
    args: tuple[str, ...] | None = attr.field(default=None)
    additional_dependencies: tuple[str, ...] | None = attr.field(default=None)
    stages: tuple[str, ...] | None = attr.field(default=None)
    always_run: bool | None = attr.field(default=None)
    pass_filenames: bool | None = attr.field(default=None)
    require_serial: bool | None = attr.field(default=None)
    verbose: bool | None = attr.field(default=None)
    log_file: str | None = attr.field(default=None)

    def overrides(self) -> dict[str, Any]:
        """Fields that were set, excluding `id`"""
        return {
            a.name: v
            for a in attr.fields(HookConfigBlock)
            if a.name != "id" and (v := getattr(self, a.name)) is not None
        }


FIELD_NAMES: frozenset[str] = frozenset(a.name for a in attr.fields(HookConfigBlock))
