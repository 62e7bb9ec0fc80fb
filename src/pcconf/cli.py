"""Command line interface: `pcconf validate | audit | list | set-rev | add-hook | format`"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click
from rich.table import Table

from . import console
from ._exceptions import PreCommitYamlValidationError
from .audit import Severity, audit_config, filter_findings
from .editing import add_hooks, format_config, set_rev
from .models import PreCommitConfigYaml, conv, load_config
from .utils._click_utils import (
    DEFAULT_CONFIG,
    READ_FILE_TYPE,
    WRITE_FILE_TYPE,
    InvalidConfigException,
    NoChangesException,
    configure_logging,
    echo_updated,
)
from .validation import validate_file

logger = logging.getLogger(__name__)

_SEVERITY_CHOICES = tuple(str(s) for s in Severity)


def _default_files(files: tuple[Path, ...]) -> tuple[Path, ...]:
    if files:
        return files
    if not DEFAULT_CONFIG.is_file():
        raise click.UsageError(f"No files given and {DEFAULT_CONFIG} not found.")
    return (DEFAULT_CONFIG,)


def _load_or_raise(path: Path) -> PreCommitConfigYaml:
    try:
        return load_config(path)
    except PreCommitYamlValidationError as e:
        raise InvalidConfigException(e) from e


@click.group
@click.option("-v", "--verbose", is_flag=True, help="Log debug output.")
def main(verbose: bool = False) -> None:
    """Validate, audit and edit `.pre-commit-config.yaml` files."""
    configure_logging(verbose)


@main.command
@click.argument("files", nargs=-1, type=READ_FILE_TYPE)
@click.option(
    "--strict", is_flag=True, help="Treat warnings (e.g. unexpected keys) as errors."
)
def validate(files: tuple[Path, ...] = (), strict: bool = False) -> None:
    """Check each config against the schema the hook runner expects."""
    failed = False
    for path in _default_files(files):
        report = validate_file(path)
        for issue in report.errors:
            click.echo(f"{path}: {click.style('error', fg='red')}: {issue}")
        for issue in report.warnings:
            click.echo(f"{path}: {click.style('warning', fg='yellow')}: {issue}")
        if not report.ok or (strict and report.warnings):
            failed = True
    if failed:
        sys.exit(1)


@main.command
@click.argument("config_path", type=READ_FILE_TYPE, required=False)
@click.option(
    "--min-severity",
    type=click.Choice(_SEVERITY_CHOICES),
    default="info",
    show_default=True,
    help="Hide findings below this severity.",
)
@click.option(
    "--fail-on",
    type=click.Choice(_SEVERITY_CHOICES),
    default="high",
    show_default=True,
    help="Exit 1 if any finding is at or above this severity.",
)
@click.option(
    "--ignore",
    "ignore",
    multiple=True,
    help="Rule id to skip (e.g. PC005). Can be invoked multiple times.",
)
@click.option("--json", "as_json", is_flag=True, help="Print findings as JSON.")
def audit(
    config_path: Path | None = None,
    min_severity: str = "info",
    fail_on: str = "high",
    ignore: tuple[str, ...] = (),
    as_json: bool = False,
) -> None:
    """Report how each hook repository's revision is pinned."""
    (path,) = _default_files((config_path,) if config_path else ())
    config = _load_or_raise(path)
    findings = filter_findings(
        audit_config(config, ignore=ignore), Severity.parse(min_severity)
    )

    if as_json:
        payload = [
            {**conv.unstructure(f), "severity": str(f.severity), "rule": f.rule.name}
            for f in findings
        ]
        click.echo(json.dumps(payload, indent=2))
    elif findings:
        table = Table(title=f"{path}: {len(findings)} finding(s)")
        for col in ("rule", "severity", "repo", "rev", "message"):
            table.add_column(col)
        for f in findings:
            table.add_row(
                f"{f.rule_id} {f.rule.name}",
                str(f.severity),
                f.repo,
                f.rev or "",
                f.message,
            )
        console.print(table)
    else:
        click.echo(f"{path}: no findings")

    threshold = Severity.parse(fail_on)
    if any(f.severity >= threshold for f in findings):
        sys.exit(1)


@main.command("list")
@click.argument("config_path", type=READ_FILE_TYPE, required=False)
def list_(config_path: Path | None = None) -> None:
    """List each repository with its revision and hook ids."""
    (path,) = _default_files((config_path,) if config_path else ())
    config = _load_or_raise(path)
    table = Table(title=str(path))
    for col in ("repo", "rev", "hooks"):
        table.add_column(col)
    for r in config.repos:
        table.add_row(r.repo, r.rev or "", ", ".join(r.hook_ids()))
    console.print(table)


@main.command("set-rev")
@click.argument("config_path", type=READ_FILE_TYPE)
@click.argument("repo")
@click.argument("rev")
def set_rev_(config_path: Path, repo: str, rev: str) -> None:
    """Pin REPO to REV, keeping comments and layout."""
    try:
        result = set_rev(config_path, repo, rev)
    except PreCommitYamlValidationError as e:
        raise InvalidConfigException(e) from e
    if not result:
        raise NoChangesException(
            "set-rev", f"no repo {repo} pinned to something other than {rev}"
        )
    echo_updated("set-rev", config_path)


@main.command("add-hook")
@click.argument("config_path", type=WRITE_FILE_TYPE, default=DEFAULT_CONFIG)
@click.option("--repo", required=True, help="Repository url, or `local` / `meta`.")
@click.option("--rev", default=None, help="Revision to pin when the repo is new.")
@click.option(
    "-k",
    "hook_ids",
    multiple=True,
    required=True,
    help="Hook id to add. Can be invoked multiple times.",
)
def add_hook(
    config_path: Path,
    repo: str,
    rev: str | None = None,
    hook_ids: tuple[str, ...] = (),
) -> None:
    """Add hooks to a repository block, creating the block or the file if needed."""
    try:
        result = add_hooks(config_path, repo, rev, *hook_ids)
    except PreCommitYamlValidationError as e:
        raise InvalidConfigException(e) from e
    if not result:
        raise NoChangesException("add-hook", "hook ids already present in config")
    click.echo(f"Wrote {', '.join(hook_ids)} to {config_path}")


@main.command("format")
@click.argument("files", nargs=-1, type=READ_FILE_TYPE)
@click.option("--check", is_flag=True, help="Only report files that would change.")
def format_(files: tuple[Path, ...] = (), check: bool = False) -> None:
    """Rewrite configs with canonical indentation, keeping comments."""
    changed = []
    for path in _default_files(files):
        try:
            if format_config(path, check=check):
                changed.append(path)
        except PreCommitYamlValidationError as e:
            raise InvalidConfigException(e) from e
    for path in changed:
        if check:
            click.echo(f"would reformat {path}")
        else:
            echo_updated("format", path)
    if check and changed:
        sys.exit(1)


if __name__ == "__main__":
    main()
