from __future__ import annotations

import typing
from collections.abc import Iterable
from typing import (
    Literal,
    TypeAlias,
)

from typing_extensions import Sentinel

_DeprecatedStages: TypeAlias = Literal["commit", "push", "merge-commit"]
GitStage = Literal[
    "commit-msg",
    "manual",
    "post-checkout",
    "post-commit",
    "post-merge",
    "post-rewrite",
    "pre-commit",
    "pre-merge-commit",
    "pre-push",
    "pre-rebase",
    "prepare-commit-msg",
]
HookType = Literal[
    "commit-msg",
    "post-checkout",
    "post-commit",
    "post-merge",
    "post-rewrite",
    "pre-commit",
    "pre-merge-commit",
    "pre-push",
    "pre-rebase",
    "prepare-commit-msg",
]
MetaHookId = Literal["check-hooks-apply", "check-useless-excludes", "identity"]

LOCAL: Literal["local"] = "local"
META: Literal["meta"] = "meta"


def iter_literal(lit: object) -> Iterable[str]:
    yield from typing.get_args(lit)


STAGES: frozenset[str] = frozenset(iter_literal(GitStage))
DEPRECATED_STAGES: frozenset[str] = frozenset(iter_literal(_DeprecatedStages))
META_HOOK_IDS: frozenset[str] = frozenset(iter_literal(MetaHookId))


class FalseySentinel(Sentinel):
    def __bool__(self) -> Literal[False]:
        return False


class TruthySentinel(Sentinel):
    def __bool__(self) -> Literal[True]:
        return True


class FailedOpSentinel(FalseySentinel):
    pass


class CompletedOpSentinel(TruthySentinel):
    pass


FAILED_OP = FailedOpSentinel("FAILED_OP")
FINISH_OP = CompletedOpSentinel("FINISH_OP")


OpSentinel: TypeAlias = CompletedOpSentinel | FailedOpSentinel
