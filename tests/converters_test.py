from __future__ import annotations

import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest
from ruamel.yaml import YAML

from pcconf._exceptions import PreCommitYamlValidationError
from pcconf.models import (
    HookConfigBlock,
    PreCommitConfigYaml,
    RepoConfigBlock,
    conv,
    dump_config,
    load_config,
    load_hooks,
    loads_config,
)
from tests.conftest import HOOKS_MANIFEST, YamlFile


def _errors(text: str) -> list[str]:
    with pytest.raises(PreCommitYamlValidationError) as exc_info:
        loads_config(text)
    return exc_info.value.errors


def test_dump_then_load_matches(sample_yaml: YamlFile, tmp_path: Path):
    config = load_config(sample_yaml.path)
    out = tmp_path / "dumped.yaml"
    dump_config(config, out, hooks_only=False)

    text = out.read_text()
    assert "null" not in text
    assert "alias" not in text
    assert load_config(out) == config


def test_dump_hooks_only(tmp_path: Path):
    config = PreCommitConfigYaml(
        repos=[
            RepoConfigBlock(
                "local",
                hooks=[
                    HookConfigBlock(
                        id="pytest", name="pytest", entry="pytest", language="system"
                    )
                ],
            )
        ]
    )
    out = tmp_path / ".pre-commit-hooks.yaml"
    dump_config(config, out, hooks_only=True)
    data = YAML(typ="safe").load(out.read_text())
    assert data == [
        {"id": "pytest", "name": "pytest", "entry": "pytest", "language": "system"}
    ]


def test_unstructure_omits_unset_fields():
    d = conv.unstructure(RepoConfigBlock("local", hooks=[HookConfigBlock(id="x")]))
    assert d == {"repo": "local", "hooks": [{"id": "x"}]}


@pytest.mark.parametrize(
    ("text", "location"),
    (
        (
            """
            repos:
              - repo: https://example.com/r
                rev: 1.0
                hooks: [{id: a}]
            """,
            "$.repos[0].rev",
        ),
        (
            """
            repos:
              - repo: https://example.com/r
                rev: v1
                hooks:
                  - id: a
                    args: [--max-line-length, 88]
            """,
            "$.repos[0].hooks[0].args",
        ),
        (
            """
            repos:
              - repo: https://example.com/r
                rev: v1
                hooks:
                  - id: a
                    args: --fix
            """,
            "$.repos[0].hooks[0].args",
        ),
        (
            """
            repos:
              - repo: https://example.com/r
                rev: v1
                hooks:
                  - id: a
                    always_run: "yes"
            """,
            "$.repos[0].hooks[0].always_run",
        ),
        (
            """
            fail_fast: 1
            repos: []
            """,
            "$.fail_fast",
        ),
        (
            "default_language_version: {python: 3}\nrepos: []\n",
            "$.default_language_version",
        ),
    ),
)
def test_strict_scalars(text: str, location: str):
    errors = _errors(textwrap.dedent(text))
    assert any(location in e for e in errors), errors


def test_missing_repos():
    errors = _errors("exclude: foo\n")
    assert any("$.repos" in e and "required field missing" in e for e in errors)


def test_missing_hook_id():
    errors = _errors("repos:\n  - repo: local\n    hooks:\n      - name: x\n")
    assert any("$.repos[0].hooks[0].id" in e for e in errors), errors


@pytest.mark.parametrize("text", ("- repo: local\n", "", "just a string\n"))
def test_top_level_must_be_mapping(text: str):
    errors = _errors(text)
    assert errors == [errors[0]]
    assert "top level must be a mapping" in errors[0]


def test_unparsable_yaml(write_config: Callable[..., Path]):
    path = write_config("repos: [\n")
    with pytest.raises(PreCommitYamlValidationError, match="could not parse yaml") as e:
        load_config(path)
    assert e.value.path == str(path)


def test_booleans_and_lists_structure():
    config = loads_config(
        "fail_fast: true\n"
        "default_stages: [pre-commit, pre-push]\n"
        "repos:\n"
        "  - repo: https://example.com/r\n"
        "    rev: v1\n"
        "    hooks:\n"
        "      - id: a\n"
        "        pass_filenames: false\n"
        "        types_or: [python, pyi]\n"
    )
    assert config.fail_fast is True
    assert config.default_stages == ("pre-commit", "pre-push")
    hook = config.repos[0].hooks[0]
    assert hook.pass_filenames is False
    assert hook.types_or == ("python", "pyi")


def test_load_package_hooks_manifest():
    hooks = load_hooks(HOOKS_MANIFEST)
    assert [h.id for h in hooks] == [
        "validate-pre-commit-config",
        "audit-pre-commit-config",
    ]
    assert all(h.language == "python" for h in hooks)


def test_load_hooks_requires_manifest_fields(write_config: Callable[..., Path]):
    path = write_config("- id: x\n  name: x\n", name=".pre-commit-hooks.yaml")
    with pytest.raises(PreCommitYamlValidationError) as e:
        load_hooks(path)
    assert e.value.errors == [
        "required field missing @ $[0].entry",
        "required field missing @ $[0].language",
    ]


def test_load_hooks_rejects_mapping(write_config: Callable[..., Path]):
    path = write_config("id: x\n", name=".pre-commit-hooks.yaml")
    with pytest.raises(PreCommitYamlValidationError, match="must be a list"):
        load_hooks(path)
