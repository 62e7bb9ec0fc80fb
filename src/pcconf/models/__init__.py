"""Models representing the `.pre-commit-config.yaml` file and the blocks contained in it."""

from __future__ import annotations

from .converters import (
    conv,
    dump_config,
    load_config,
    load_hooks,
    loads_config,
    read_yaml,
    structure_config,
    unstructure_config,
)
from .hookConfigBlock import HookConfigBlock
from .preCommitConfigYaml import PreCommitConfigYaml
from .repoConfigBlock import RepoConfigBlock, normalize_repo_url

__all__ = [
    "HookConfigBlock",
    "PreCommitConfigYaml",
    "RepoConfigBlock",
    "conv",
    "dump_config",
    "load_config",
    "load_hooks",
    "loads_config",
    "normalize_repo_url",
    "read_yaml",
    "structure_config",
    "unstructure_config",
]
