"""Schema for `.pre-commit-config.yaml` file"""

from __future__ import annotations

import logging
import warnings
from collections.abc import Iterator
from typing import Any

import attr
from typing_extensions import override

from .._types import (
    FAILED_OP,
    FINISH_OP,
    OpSentinel,
)
from .hookConfigBlock import HookConfigBlock
from .repoConfigBlock import RepoConfigBlock

logger = logging.getLogger(__name__)


@attr.define
class PreCommitConfigYaml:
    """Schema for `.pre-commit-config.yaml` file"""

    repos: list[RepoConfigBlock]
    minimum_pre_commit_version: str | None = attr.field(default=None)
    default_install_hook_types: tuple[str, ...] | None = attr.field(default=None)
    default_language_version: dict[str, str] | None = attr.field(default=None)
    default_stages: tuple[str, ...] | None = attr.field(default=None)
    files: str | None = attr.field(default=None)
    exclude: str | None = attr.field(default=None)
    fail_fast: bool | None = attr.field(default=None)
    ci: dict[str, Any] | None = attr.field(default=None)

    def find_repo(self, repo_name: str) -> RepoConfigBlock | None:
        return next((r for r in self.repos if r.matches(repo_name)), None)

    def iter_hooks(self) -> Iterator[tuple[RepoConfigBlock, HookConfigBlock]]:
        for r in self.repos:
            for h in r.hooks:
                yield r, h

    def extend(self, repo_block: RepoConfigBlock) -> OpSentinel:
        """Search for repo name in the config yaml and append the given hooks

        - If the same name exists, adds to it
        - Else, adds as a new repo block at the end of the yaml
        """
        existing = self.find_repo(repo_block.repo)
        if existing is None:
            if not repo_block.hooks:
                return FAILED_OP
            self.repos.append(repo_block)
            logger.debug("added repo block %s", repo_block.repo)
            return FINISH_OP

        if repo_block.rev is not None and existing.rev != repo_block.rev:
            warnings.warn(
                f"{existing.repo} is pinned at {existing.rev}, not {repo_block.rev}. Keeping {existing.rev}.",
                stacklevel=2,
            )

        n_before = len(existing.hooks)
        dups = []
        for h in repo_block.hooks:
            if existing.has_hook(h):
                dups.append(h.id)
                continue
            existing.add_hook(h)
        if dups:
            lines = "\n- ".join(dups)
            warnings.warn(
                f"Provided yaml already has hooks:\n- {lines}.",
                stacklevel=2,
            )

        if n_before == len(existing.hooks):
            return FAILED_OP
        else:
            return FINISH_OP

    def append_hooks(
        self, repo_name: str, *hooks: HookConfigBlock, rev: str | None = None
    ) -> OpSentinel:
        """Search for repo name in the config yaml and append the given hooks

        - If the same name exists, adds to it
        - Else, adds another block at the end of the yaml
        """
        return self.extend(RepoConfigBlock(repo_name, rev, list(hooks)))

    @override
    def __eq__(self, o: object) -> bool:
        """Compares only repo blocks in each yaml file, ignoring sort order"""
        if not isinstance(o, PreCommitConfigYaml) or not len(o.repos) == len(
            self.repos
        ):
            return False
        _s = sorted(self.repos, key=lambda r: (r.repo, r.rev or ""))
        _o = sorted(o.repos, key=lambda r: (r.repo, r.rev or ""))
        return all(s == o for s, o in zip(_s, _o, strict=False))
