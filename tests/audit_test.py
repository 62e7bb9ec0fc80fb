from __future__ import annotations

import pytest
from hypothesis import given

from pcconf.audit import (
    RULES,
    Severity,
    audit_config,
    classify_rev,
    filter_findings,
)
from pcconf.models import (
    HookConfigBlock,
    PreCommitConfigYaml,
    RepoConfigBlock,
    load_config,
)
from tests.conftest import YamlFile
from tests.strategies import (
    branch_rev_strat,
    full_sha_strat,
    semver_tag_strat,
    short_sha_strat,
)


def _config(*repos: tuple[str, str | None]) -> PreCommitConfigYaml:
    return PreCommitConfigYaml(
        repos=[
            RepoConfigBlock(url, rev, [HookConfigBlock(id="h")]) for url, rev in repos
        ]
    )


def test_sample_findings(sample_yaml: YamlFile):
    findings = audit_config(load_config(sample_yaml.path))
    assert [(f.rule_id, f.rev) for f in findings] == [
        ("PC003", "v3.0.0-alpha.4"),
        ("PC003", "v0.19.0dev"),
        ("PC005", "v4.4.0"),
        ("PC005", "v2.2.2"),
        ("PC005", "v1.0"),
        ("PC005", "v0.6.0"),
    ]
    assert findings[0].repo == "https://github.com/pre-commit/mirrors-prettier"
    assert findings[0].severity is Severity.MEDIUM
    assert findings[0].rule.name == "prerelease-rev"


@pytest.mark.parametrize(
    ("rev", "expected"),
    (
        ("main", "PC002"),
        ("HEAD", "PC002"),
        ("Develop", "PC002"),
        ("v3.0.0-alpha.4", "PC003"),
        ("v0.19.0dev", "PC003"),
        ("1.2.3rc1", "PC003"),
        ("2.0.0b3", "PC003"),
        ("v1.0.0-beta", "PC003"),
        ("v4.4.0", "PC005"),
        ("v1.0", "PC005"),
        ("v2.0.0-rc.1", "PC003"),
        ("1.0.0.dev3", "PC003"),
        ("1.0-SNAPSHOT", "PC003"),
        ("devtools-1.2", "PC005"),
        ("v1.0-prefix", "PC005"),
        ("beta-channel", "PC005"),
        ("abc1234", "PC006"),
        ("ABC1234", "PC006"),
        ("3f2a9c1d0b7e6a5f4c3b2a1d0e9f8c7b6a5d4e3f", None),
        ("ABCDEF0123456789ABCDEF0123456789ABCDEF01", None),
    ),
)
def test_classify_rev(rev: str, expected: str | None):
    assert classify_rev(rev) == expected


@given(rev=full_sha_strat())
def test_full_sha_is_never_flagged(rev: str):
    assert classify_rev(rev) is None
    assert audit_config(_config(("https://github.com/a/b", rev))) == []


@given(rev=short_sha_strat())
def test_short_sha(rev: str):
    assert classify_rev(rev) == "PC006"


@given(rev=semver_tag_strat())
def test_plain_tags_are_info(rev: str):
    (finding,) = audit_config(_config(("https://github.com/a/b", rev)))
    assert finding.rule_id == "PC005"
    assert finding.severity is Severity.INFO


@given(rev=branch_rev_strat())
def test_branches_are_mutable(rev: str):
    assert classify_rev(rev) == "PC002"


def test_missing_rev_and_insecure_url():
    findings = audit_config(
        _config(
            ("https://github.com/a/b", "v1.0.0"),
            ("http://example.com/hooks.git", None),
        )
    )
    assert [(f.rule_id, f.index) for f in findings] == [
        ("PC004", 1),
        ("PC001", 1),
        ("PC005", 0),
    ]


def test_local_and_meta_are_skipped():
    assert audit_config(_config(("local", None), ("meta", None))) == []


def test_ignore_and_filter(sample_yaml: YamlFile):
    config = load_config(sample_yaml.path)
    findings = audit_config(config, ignore=("pc005",))
    assert {f.rule_id for f in findings} == {"PC003"}

    all_findings = audit_config(config)
    assert len(filter_findings(all_findings, Severity.MEDIUM)) == 2
    assert filter_findings(all_findings, Severity.HIGH) == []
    assert len(filter_findings(all_findings)) == 6


def test_severity_parse():
    assert Severity.parse(" High ") is Severity.HIGH
    assert str(Severity.CRITICAL) == "critical"
    assert all(r.severity in Severity for r in RULES.values())
