"""Destructure/restructure models, including file i/o"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

import cattrs
from cattrs.converters import Converter
from cattrs.gen import make_dict_structure_fn, make_dict_unstructure_fn
from ruamel.yaml.error import YAMLError
from ruamel.yaml.scalarbool import ScalarBoolean

from .._exceptions import PreCommitYamlValidationError
from ..utils._file_utils import write_atomic
from ..utils._nobeartype import nobeartype
from ..utils._yaml import dumps, yaml
from .hookConfigBlock import HookConfigBlock
from .preCommitConfigYaml import PreCommitConfigYaml
from .repoConfigBlock import RepoConfigBlock

logger = logging.getLogger(__name__)

MANIFEST_REQUIRED = ("name", "entry", "language")


def _omit_unstructurer(
    cls: type,
    conv: cattrs.Converter,
) -> Callable[..., dict[str, Any]]:
    """Leave unset (default) fields out of the dumped yaml"""
    fn: Callable[[Any], dict[str, Any]] = make_dict_unstructure_fn(
        cls,
        conv,
        _cattrs_omit_if_default=True,
    )
    return fn


## The runner rejects `rev: 1.0` or `always_run: "yes"`; cattrs would coerce both
@nobeartype
def _structure_str(v: Any, _: type) -> str:
    if not isinstance(v, str):
        raise ValueError(f"expected a string, got {type(v).__name__}: {v!r}")
    return str(v)


@nobeartype
def _structure_bool(v: Any, _: type) -> bool:
    if not isinstance(v, (bool, ScalarBoolean)):
        raise ValueError(f"expected a boolean, got {type(v).__name__}: {v!r}")
    return bool(v)


def _register_hooks(conv: cattrs.Converter) -> None:
    conv.register_unstructure_hook(tuple, list)
    conv.register_unstructure_hook(set, list)

    conv.register_structure_hook(str, _structure_str)
    conv.register_structure_hook(bool, _structure_bool)

    @nobeartype
    def _structure_str_tuple(v: Any, _: type) -> tuple[str, ...]:
        if isinstance(v, (str, bytes)) or not isinstance(v, (list, tuple)):
            raise ValueError(f"expected a list of strings, got {type(v).__name__}")
        return tuple(_structure_str(x, str) for x in v)

    conv.register_structure_hook_func(
        lambda t: t == tuple[str, ...], _structure_str_tuple
    )

    for cls in (HookConfigBlock, RepoConfigBlock, PreCommitConfigYaml):
        conv.register_unstructure_hook(cls, _omit_unstructurer(cls, conv))
        conv.register_structure_hook(cls, make_dict_structure_fn(cls, conv))


def _get_converter() -> Converter:
    conv = cattrs.Converter()
    _register_hooks(conv)
    return conv


conv = _get_converter()


def _messages(e: cattrs.BaseValidationError, root: str) -> list[str]:
    return list(cattrs.transform_error(e, path=root))


def read_yaml(path: Path) -> Any:
    """Round-trip load; comments and key order stay attached to the result"""
    try:
        with path.open("r", encoding="utf-8") as file:
            return yaml.load(file)
    except YAMLError as e:
        raise PreCommitYamlValidationError(
            f"could not parse yaml: {e}", path=str(path)
        ) from e


def structure_config(raw: Any, path: str | None = None) -> PreCommitConfigYaml:
    """Structure an already parsed yaml document"""
    if not isinstance(raw, dict):
        raise PreCommitYamlValidationError(
            f"top level must be a mapping, got {type(raw).__name__} @ $",
            path=path,
        )
    try:
        config: PreCommitConfigYaml = conv.structure(raw, PreCommitConfigYaml)
    except cattrs.BaseValidationError as e:
        raise PreCommitYamlValidationError(*_messages(e, "$"), path=path) from e
    logger.debug("structured config with %d repos", len(config.repos))
    return config


def load_config(path: Path) -> PreCommitConfigYaml:
    """Load a .pre-commit-config.yaml into a structured object"""
    return structure_config(read_yaml(path), str(path))


def loads_config(text: str) -> PreCommitConfigYaml:
    """Load a config from a yaml string"""
    try:
        raw = yaml.load(text)
    except YAMLError as e:
        raise PreCommitYamlValidationError(f"could not parse yaml: {e}") from e
    return structure_config(raw)


def load_hooks(path: Path) -> list[HookConfigBlock]:
    """Load a .pre-commit-hooks.yaml as a list of hooks"""
    raw = read_yaml(path)
    if not isinstance(raw, list):
        raise PreCommitYamlValidationError(
            "a hooks manifest must be a list @ $", path=str(path)
        )
    try:
        hooks: list[HookConfigBlock] = conv.structure(raw, list[HookConfigBlock])
    except cattrs.BaseValidationError as e:
        raise PreCommitYamlValidationError(*_messages(e, "$"), path=str(path)) from e

    missing = [
        f"required field missing @ $[{n}].{k}"
        for n, h in enumerate(hooks)
        for k in MANIFEST_REQUIRED
        if getattr(h, k) is None
    ]
    if missing:
        raise PreCommitYamlValidationError(*missing, path=str(path))
    return hooks


def unstructure_config(config: PreCommitConfigYaml) -> dict[str, Any]:
    des: dict[str, Any] = conv.unstructure(config)
    return des


def dump_config(config: PreCommitConfigYaml, path: Path, hooks_only: bool) -> None:
    """Dump to yaml"""
    des = unstructure_config(config)
    d = des["repos"][0]["hooks"] if hooks_only else des
    write_atomic(path, dumps(d))
    logger.debug("dumped %s (hooks_only=%s)", path, hooks_only)
