"""Audit how the hook repositories in a config are pinned"""

from __future__ import annotations

import enum
import logging
import re
from collections.abc import Collection, Iterable, Iterator

import attr
from typing_extensions import override

from .models import PreCommitConfigYaml, RepoConfigBlock

logger = logging.getLogger(__name__)


class Severity(enum.IntEnum):
    INFO = 0
    LOW = 1
    MEDIUM = 2
    HIGH = 3
    CRITICAL = 4

    @classmethod
    def parse(cls, name: str) -> Severity:
        return cls[name.strip().upper()]

    @override
    def __str__(self) -> str:
        return self.name.lower()


@attr.frozen
class Rule:
    id: str
    name: str
    severity: Severity
    description: str


RULES: dict[str, Rule] = {
    r.id: r
    for r in (
        Rule("PC001", "missing-rev", Severity.HIGH, "Remote repo has no pinned rev"),
        Rule(
            "PC002",
            "mutable-rev",
            Severity.HIGH,
            "Rev is a branch name, so the hook code can change under you",
        ),
        Rule(
            "PC003",
            "prerelease-rev",
            Severity.MEDIUM,
            "Rev points at an alpha, beta, rc or dev release",
        ),
        Rule(
            "PC004",
            "insecure-url",
            Severity.HIGH,
            "Repo is fetched over an unauthenticated transport (http://, git://)",
        ),
        Rule(
            "PC005",
            "tag-rev",
            Severity.INFO,
            "Rev is a tag rather than a full commit SHA; tags can be moved",
        ),
        Rule(
            "PC006",
            "short-sha-rev",
            Severity.LOW,
            "Rev is an abbreviated commit SHA",
        ),
    )
}

FULL_SHA_RE = re.compile(r"^[0-9a-f]{40}$", re.IGNORECASE)
SHORT_SHA_RE = re.compile(r"^[0-9a-f]{7,39}$", re.IGNORECASE)
MUTABLE_REVS: frozenset[str] = frozenset(
    ("head", "main", "master", "develop", "development", "trunk", "latest", "stable")
)
# v3.0.0-alpha.4, v0.19.0dev, 1.2rc1, 2.0.0b3, 24.1a1, 1.0-pre, 1.0.0.dev3
# The marker must follow a version number or separator and end the segment
PRERELEASE_RE = re.compile(
    r"(?:\d(?:a|b|rc)\d*"
    r"|(?:\d|[-._])(?:alpha|beta|rc|dev|pre|preview|snapshot)(?:[-._]?\d+)*)"
    r"(?:[-._+]|$)",
    re.IGNORECASE,
)
INSECURE_URL_RE = re.compile(r"^(http|git)://", re.IGNORECASE)


@attr.frozen
class Finding:
    rule_id: str
    severity: Severity
    message: str
    repo: str
    rev: str | None = None
    index: int = 0

    @property
    def rule(self) -> Rule:
        return RULES[self.rule_id]


def classify_rev(rev: str) -> str | None:
    """Id of the pin rule a rev trips, if any (PC001 and PC004 aside)"""
    r = rev.strip()
    if FULL_SHA_RE.match(r):
        return None
    if SHORT_SHA_RE.match(r):
        return "PC006"
    if r.lower() in MUTABLE_REVS:
        return "PC002"
    if PRERELEASE_RE.search(r):
        return "PC003"
    return "PC005"


def _finding(rule_id: str, repo: RepoConfigBlock, index: int, message: str) -> Finding:
    return Finding(
        rule_id=rule_id,
        severity=RULES[rule_id].severity,
        message=message,
        repo=repo.repo,
        rev=repo.rev,
        index=index,
    )


def _audit_repo(repo: RepoConfigBlock, index: int) -> Iterator[Finding]:
    if not repo.is_remote:
        return
    if INSECURE_URL_RE.match(repo.repo.strip()):
        msg = f"{repo.repo} is not fetched over https or ssh"
        yield _finding("PC004", repo, index, msg)
    if repo.rev is None or not repo.rev.strip():
        yield _finding("PC001", repo, index, f"{repo.repo} has no rev")
        return

    rule_id = classify_rev(repo.rev)
    match rule_id:
        case None:
            return
        case "PC002":
            msg = f"{repo.rev!r} is a branch; pin a tag or commit SHA"
        case "PC003":
            msg = f"{repo.rev!r} is a pre-release"
        case "PC006":
            msg = f"{repo.rev!r} is an abbreviated SHA; use all 40 characters"
        case _:
            msg = f"{repo.rev!r} is a tag, not a commit SHA"
    yield _finding(rule_id, repo, index, msg)


def audit_config(
    config: PreCommitConfigYaml, ignore: Collection[str] = ()
) -> list[Finding]:
    """Findings for every repo, highest severity first, then in file order"""
    ignored = {i.strip().upper() for i in ignore}
    findings = [
        f
        for n, repo in enumerate(config.repos)
        for f in _audit_repo(repo, n)
        if f.rule_id not in ignored
    ]
    findings.sort(key=lambda f: (-f.severity, f.index))
    logger.debug("audit produced %d findings", len(findings))
    return findings


def filter_findings(
    findings: Iterable[Finding], min_severity: Severity = Severity.INFO
) -> list[Finding]:
    return [f for f in findings if f.severity >= min_severity]
