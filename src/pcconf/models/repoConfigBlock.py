"""Model for an entry under the `repos` block in a `.pre-commit-config.yaml`"""

from __future__ import annotations

import logging

import attr
from typing_extensions import override

from .._types import LOCAL, META
from .hookConfigBlock import HookConfigBlock

logger = logging.getLogger(__name__)


def normalize_repo_url(url: str) -> str:
    """Case-folded url without surrounding whitespace, trailing `/` or `.git`"""
    u = url.strip().lower().rstrip("/")
    return u.removesuffix(".git")


@attr.define
class RepoConfigBlock:
    """Repo entry in .pre-commit-config.yaml."""

    repo: str
    rev: str | None = attr.field(default=None)
    hooks: list[HookConfigBlock] = attr.field(factory=list)

    @property
    def is_local(self) -> bool:
        return self.repo == LOCAL

    @property
    def is_meta(self) -> bool:
        return self.repo == META

    @property
    def is_remote(self) -> bool:
        return not (self.is_local or self.is_meta)

    def matches(self, repo: str) -> bool:
        return normalize_repo_url(self.repo) == normalize_repo_url(repo)

    def add_hook(self, hook: HookConfigBlock, guard: bool = False) -> None:
        """Append a hook to the end of the hook list"""
        if guard and self.has_hook(hook):
            return
        self.hooks.append(hook)

    def has_hook(self, hook: HookConfigBlock) -> bool:
        """Checks if a hook of the same id is already in the hook list"""
        has_ = any(h.id == hook.id for h in self.hooks)
        logger.debug(msg=tuple(h.id for h in self.hooks))
        return has_

    def hook_ids(self) -> tuple[str, ...]:
        return tuple(h.id for h in self.hooks)

    @override
    def __eq__(self, o: object, /) -> bool:
        """Same repo and rev, same hooks in any order"""
        if (
            not isinstance(o, RepoConfigBlock)
            or not len(o.hooks) == len(self.hooks)
            or (self.repo, self.rev) != (o.repo, o.rev)
        ):
            return False
        _s = sorted(self.hooks, key=lambda h: h.id)
        _o = sorted(o.hooks, key=lambda h: h.id)
        return all(s == o for s, o in zip(_s, _o, strict=False))
