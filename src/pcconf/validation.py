"""Schema checks the hook runner applies to a `.pre-commit-config.yaml`

Type errors are caught while structuring (see `models.converters`). This
module adds the checks that need more than one field at a time, or that
the runner only warns about (unexpected keys, deprecated stage names).
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Any

import attr
from typing_extensions import override

from ._exceptions import PreCommitYamlValidationError
from ._types import (
    DEPRECATED_STAGES,
    META_HOOK_IDS,
    STAGES,
    HookType,
    iter_literal,
)
from .models import PreCommitConfigYaml, read_yaml, structure_config
from .models.converters import MANIFEST_REQUIRED
from .models.hookConfigBlock import FIELD_NAMES as HOOK_KEYS
from .models.hookConfigBlock import HookConfigBlock

logger = logging.getLogger(__name__)

TOP_LEVEL_KEYS: frozenset[str] = frozenset(
    a.name for a in attr.fields(PreCommitConfigYaml)
)
REPO_KEYS: frozenset[str] = frozenset(("repo", "rev", "hooks"))
HOOK_TYPES: frozenset[str] = frozenset(iter_literal(HookType))

_VERSION_RE = re.compile(r"^\d+(\.\d+)*$")


@attr.frozen
class Issue:
    location: str
    message: str

    @override
    def __str__(self) -> str:
        return f"{self.message} @ {self.location}"


@attr.define
class ValidationReport:
    path: str | None = None
    errors: list[Issue] = attr.field(factory=list)
    warnings: list[Issue] = attr.field(factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def error(self, location: str, message: str) -> None:
        self.errors.append(Issue(location, message))

    def warn(self, location: str, message: str) -> None:
        self.warnings.append(Issue(location, message))


def _split_location(msg: str) -> Issue:
    """Turn a cattrs `message @ $.path` string back into an Issue"""
    message, sep, location = msg.rpartition(" @ ")
    if not sep:
        return Issue("$", msg)
    return Issue(location, message)


def _unexpected(raw: Any, allowed: frozenset[str]) -> list[str]:
    if not isinstance(raw, dict):
        return []
    return sorted(str(k) for k in raw if k not in allowed)


def _iter_unexpected_keys(raw: Any) -> Iterator[tuple[str, str]]:
    for k in _unexpected(raw, TOP_LEVEL_KEYS):
        yield "$", k
    repos = raw.get("repos") if isinstance(raw, dict) else None
    if not isinstance(repos, list):
        return
    for n, repo in enumerate(repos):
        for k in _unexpected(repo, REPO_KEYS):
            yield f"$.repos[{n}]", k
        hooks = repo.get("hooks") if isinstance(repo, dict) else None
        if not isinstance(hooks, list):
            continue
        for m, hook in enumerate(hooks):
            for k in _unexpected(hook, HOOK_KEYS):
                yield f"$.repos[{n}].hooks[{m}]", k


def _iter_missing_hooks(raw: Any) -> Iterator[str]:
    repos = raw.get("repos") if isinstance(raw, dict) else None
    if not isinstance(repos, list):
        return
    for n, repo in enumerate(repos):
        if isinstance(repo, dict) and "hooks" not in repo:
            yield f"$.repos[{n}].hooks"


def _check_regex(report: ValidationReport, location: str, pattern: str | None) -> None:
    if pattern is None:
        return
    try:
        re.compile(pattern)
    except re.error as e:
        report.error(location, f"invalid regular expression {pattern!r}: {e}")


def _check_stages(
    report: ValidationReport, location: str, stages: Iterable[str] | None
) -> None:
    for stage in stages or ():
        if stage in DEPRECATED_STAGES:
            report.warn(
                location,
                f"stage {stage!r} is deprecated, use 'pre-{stage}' instead",
            )
        elif stage not in STAGES:
            report.error(location, f"unknown stage {stage!r}")


def _check_hook(
    report: ValidationReport, location: str, hook: HookConfigBlock, kind: str
) -> None:
    if not hook.id.strip():
        report.error(f"{location}.id", "hook id must not be empty")
    if kind == "local":
        for k in MANIFEST_REQUIRED:
            if getattr(hook, k) is None:
                report.error(f"{location}.{k}", "required field missing for a local hook")
    elif kind == "meta" and hook.id not in META_HOOK_IDS:
        report.error(
            f"{location}.id",
            f"unknown meta hook {hook.id!r}, expected one of {sorted(META_HOOK_IDS)}",
        )
    _check_regex(report, f"{location}.files", hook.files)
    _check_regex(report, f"{location}.exclude", hook.exclude)
    _check_stages(report, f"{location}.stages", hook.stages)


def validate_config(
    config: PreCommitConfigYaml, raw: Any = None, path: str | None = None
) -> ValidationReport:
    """Check a structured config. Pass the raw document to also catch unexpected keys."""
    report = ValidationReport(path=path)

    if raw is not None:
        for location, key in _iter_unexpected_keys(raw):
            report.warn(location, f"unexpected key {key!r}")
        for location in _iter_missing_hooks(raw):
            report.error(location, "required field missing")

    if config.minimum_pre_commit_version is not None and not _VERSION_RE.match(
        config.minimum_pre_commit_version
    ):
        report.error(
            "$.minimum_pre_commit_version",
            f"{config.minimum_pre_commit_version!r} is not a dotted numeric version",
        )
    _check_regex(report, "$.files", config.files)
    _check_regex(report, "$.exclude", config.exclude)
    _check_stages(report, "$.default_stages", config.default_stages)
    for hook_type in config.default_install_hook_types or ():
        if hook_type not in HOOK_TYPES:
            report.error(
                "$.default_install_hook_types", f"unknown hook type {hook_type!r}"
            )

    for n, repo in enumerate(config.repos):
        loc = f"$.repos[{n}]"
        if not repo.repo.strip():
            report.error(f"{loc}.repo", "repo must not be empty")
        if repo.is_remote and repo.rev is None:
            report.error(f"{loc}.rev", f"required field missing for {repo.repo}")
        if not repo.is_remote and repo.rev is not None:
            report.warn(f"{loc}.rev", f"rev is ignored for {repo.repo} repos")

        kind = "local" if repo.is_local else "meta" if repo.is_meta else "remote"
        seen: list[HookConfigBlock] = []
        for m, hook in enumerate(repo.hooks):
            hloc = f"{loc}.hooks[{m}]"
            _check_hook(report, hloc, hook, kind)
            if hook in seen:
                report.warn(hloc, f"hook {hook.id!r} is listed twice with the same settings")
            seen.append(hook)

    logger.debug(
        "validated %s: %d errors, %d warnings",
        path or "<config>",
        len(report.errors),
        len(report.warnings),
    )
    return report


def validate_file(path: Path) -> ValidationReport:
    """Load and validate; loader errors land in the report instead of raising"""
    try:
        raw = read_yaml(path)
    except PreCommitYamlValidationError as e:
        report = ValidationReport(path=str(path))
        report.errors.extend(_split_location(m) for m in e.errors)
        return report

    try:
        config = structure_config(raw, str(path))
    except PreCommitYamlValidationError as e:
        report = ValidationReport(path=str(path))
        report.errors.extend(_split_location(m) for m in e.errors)
        for location, key in _iter_unexpected_keys(raw):
            report.warn(location, f"unexpected key {key!r}")
        return report

    return validate_config(config, raw=raw, path=str(path))
