from __future__ import annotations

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler

from .._exceptions import PreCommitYamlValidationError

DEFAULT_CONFIG = Path(".pre-commit-config.yaml")


class InvalidConfigException(click.ClickException):
    def __init__(self, error: PreCommitYamlValidationError) -> None:
        super().__init__(f"Invalid pre-commit config: {error}")


class NoChangesException(click.ClickException):
    exit_code = 1

    def __init__(self, command_name: str, reason: str) -> None:
        super().__init__(f"`{command_name}` made no changes: {reason}.")


READ_FILE_TYPE = click.Path(
    exists=True, file_okay=True, dir_okay=False, path_type=Path, readable=True
)
WRITE_FILE_TYPE = click.Path(
    exists=False, file_okay=True, dir_okay=False, path_type=Path, writable=True
)


def echo_updated(command_name: str, path: Path | str) -> None:
    click.echo(f"[{command_name}] Updated: {path}")


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[
            RichHandler(
                console=Console(stderr=True), rich_tracebacks=True, show_path=verbose
            )
        ],
        force=True,
    )
