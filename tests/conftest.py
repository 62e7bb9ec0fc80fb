from __future__ import annotations

import shutil
import textwrap
from collections.abc import Callable
from pathlib import Path
from typing import Any, NamedTuple

import pytest
from ruamel.yaml import YAML

yaml = YAML()

SAMPLE_CONFIG = Path(__file__).parent / ".test.pre-commit-config.yaml"
HOOKS_MANIFEST = Path(__file__).parent.parent / ".pre-commit-hooks.yaml"


class YamlFile(NamedTuple):
    path: Path
    data: Any


@pytest.fixture(scope="session")
def sample_yaml() -> YamlFile:
    """A real-world config: Rust formatting, codespell, markdownlint, prettier, gitlint"""
    with SAMPLE_CONFIG.open("r") as file:
        data = yaml.load(file)
    return YamlFile(SAMPLE_CONFIG, data)


@pytest.fixture
def sample_copy(tmp_path: Path) -> Path:
    """Writable copy of the sample config"""
    dest = tmp_path / ".pre-commit-config.yaml"
    shutil.copyfile(SAMPLE_CONFIG, dest)
    return dest


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[str], Path]:
    def _write(text: str, name: str = ".pre-commit-config.yaml") -> Path:
        path = tmp_path / name
        path.write_text(textwrap.dedent(text).lstrip(), encoding="utf-8")
        return path

    return _write
