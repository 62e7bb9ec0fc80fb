"""In-place edits of a `.pre-commit-config.yaml` that keep comments and key order"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from ruamel.yaml.comments import CommentedSeq

from ._exceptions import PreCommitYamlValidationError
from ._types import FAILED_OP, FINISH_OP, OpSentinel
from .models import (
    HookConfigBlock,
    PreCommitConfigYaml,
    RepoConfigBlock,
    conv,
    dump_config,
    normalize_repo_url,
    read_yaml,
    structure_config,
)
from .utils._file_utils import write_if_changed
from .utils._yaml import dumps

logger = logging.getLogger(__name__)


def _repos_of(doc: Any, path: Path) -> list[Any]:
    repos = doc.get("repos") if isinstance(doc, dict) else None
    if not isinstance(repos, list):
        raise PreCommitYamlValidationError("repos must be a list @ $.repos", path=str(path))
    return repos


def set_rev(path: Path, repo: str, rev: str) -> OpSentinel:
    """Re-pin every repo block matching `repo` to `rev`"""
    doc = read_yaml(path)
    target = normalize_repo_url(repo)
    changed = 0
    for block in _repos_of(doc, path):
        if not isinstance(block, dict) or not isinstance(block.get("repo"), str):
            continue
        if normalize_repo_url(block["repo"]) != target:
            continue
        if block.get("rev") == rev:
            continue
        logger.debug("%s: %s -> %s", block["repo"], block.get("rev"), rev)
        block["rev"] = rev
        changed += 1

    if not changed:
        return FAILED_OP
    write_if_changed(path, dumps(doc))
    return FINISH_OP


def format_config(path: Path, check: bool = False) -> bool:
    """Rewrite with the canonical indentation. Returns whether the file was (or would be) changed."""
    original = path.read_text(encoding="utf-8")
    doc = read_yaml(path)
    formatted = dumps(doc)
    if formatted == original:
        return False
    if not check:
        write_if_changed(path, formatted)
    return True


def _check_new_block(block: RepoConfigBlock, path: Path) -> None:
    if block.is_remote and block.rev is None:
        raise PreCommitYamlValidationError(
            f"a new remote repo needs a rev: {block.repo}", path=str(path)
        )


def add_hooks(path: Path, repo: str, rev: str | None, *hook_ids: str) -> OpSentinel:
    """Append hooks to the matching repo block (or a new one), creating the file if needed"""
    block = RepoConfigBlock(repo, rev, [HookConfigBlock(id=i) for i in hook_ids])

    if not path.exists():
        if not hook_ids:
            return FAILED_OP
        _check_new_block(block, path)
        dump_config(PreCommitConfigYaml(repos=[block]), path, hooks_only=False)
        return FINISH_OP

    doc = read_yaml(path)
    config = structure_config(doc, str(path))
    existing = config.find_repo(repo)
    if existing is None and hook_ids:
        _check_new_block(block, path)
    n_before = len(existing.hooks) if existing is not None else 0
    if not config.extend(block):
        return FAILED_OP

    ## Apply the merge to the round-trip document so comments survive
    repos = _repos_of(doc, path)
    if existing is None:
        repos.append(conv.unstructure(block))
    else:
        idx = next(n for n, r in enumerate(config.repos) if r is existing)
        hooks = repos[idx].setdefault("hooks", CommentedSeq())
        hooks.extend(conv.unstructure(h) for h in existing.hooks[n_before:])
    write_if_changed(path, dumps(doc))
    return FINISH_OP
