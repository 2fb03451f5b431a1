"""Tests for scoring, prioritization and dataset aggregation."""

import pytest

from i18n_audit.aggregation import (
    AggregationEngine,
    Priority,
    estimate_effort,
    impact_score,
    priority_bucket,
    round_half_up,
)
from i18n_audit.candidate import (
    Candidate,
    CandidateKind,
    FileScanResult,
    ScanStatus,
    ScanWarning,
    Severity,
    SourceKind,
    SourceLocation,
)

ROLES = ("ADMINISTRATOR", "CITIZEN", "GUEST")


def candidate(path, line, severity=Severity.HIGH, kind=CandidateKind.MARKUP_TEXT,
              roles=("CITIZEN",), owner="Page", source_kind=SourceKind.UI):
    return Candidate(
        content=f"Text on line {line}",
        kind=kind,
        location=SourceLocation(path, line, 0),
        context="markup:p",
        severity=severity,
        suggested_key=f"ui.text_on_line_{line}",
        source_kind=source_kind,
        owner_name=owner,
        roles=frozenset(roles),
    )


def result(path, *candidates, owner="Page", source_kind=SourceKind.UI):
    return FileScanResult(path, source_kind, owner, tuple(candidates))


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(0.5) == 1
    assert round_half_up(7.8) == 8
    assert round_half_up(7.4) == 7


def test_effort():
    assert estimate_effort(3, SourceKind.UI, 1, False) == 6
    assert estimate_effort(3, SourceKind.BACKEND, 1, False) == 8
    assert estimate_effort(3, SourceKind.UI, 3, True) == 8
    assert estimate_effort(100, SourceKind.UI, 1, False) == 60
    assert estimate_effort(100, SourceKind.BACKEND, 3, True) == 102


def test_effort_is_monotonic_in_candidate_count():
    for kind in SourceKind:
        efforts = [estimate_effort(n, kind, 3, True) for n in range(0, 40)]
        assert efforts == sorted(efforts)


def test_impact():
    assert impact_score(1, 0, 1, 1, "Page") == 10
    assert impact_score(1, 0, 1, 4, "Page") == 20
    assert impact_score(1, 0, 1, 1, "CitizenDashboard") == 15
    assert impact_score(0, 1, 3, 0, "Page") == 7
    assert impact_score(0, 1, 3, 0, "LoginModal") == 11


@pytest.mark.parametrize(
    "critical,high,total,expected",
    [
        (1, 0, 1, Priority.HIGH),
        (0, 6, 6, Priority.HIGH),
        (0, 5, 8, Priority.MEDIUM),
        (0, 0, 11, Priority.MEDIUM),
        (0, 0, 10, Priority.LOW),
        (0, 0, 3, Priority.LOW),
    ],
)
def test_priority_buckets(critical, high, total, expected):
    assert priority_bucket(critical, high, total) is expected


def sample_results():
    return [
        result("client/A.tsx", candidate("client/A.tsx", 1, Severity.CRITICAL)),
        result(
            "client/B.tsx",
            candidate("client/B.tsx", 1, Severity.CRITICAL),
            candidate("client/B.tsx", 2, Severity.CRITICAL, roles=("CITIZEN", "GUEST")),
        ),
        result("client/C.tsx", candidate("client/C.tsx", 4, Severity.LOW, kind=CandidateKind.TEMPLATE_FRAGMENT)),
        result("client/Orphan.tsx", candidate("client/Orphan.tsx", 1, Severity.HIGH, roles=(), owner="Orphan"),
               owner="Orphan"),
        result("client/Empty.tsx"),
        FileScanResult(
            "client/Broken.tsx", SourceKind.UI, "Broken",
            status=ScanStatus.SKIPPED,
            warnings=(ScanWarning("client/Broken.tsx", "parse", "Could not parse"),),
        ),
        result(
            "server/auth.js",
            candidate("server/auth.js", 3, Severity.CRITICAL, kind=CandidateKind.RESPONSE_PAYLOAD,
                      roles=("ADMINISTRATOR", "CITIZEN"), owner="auth.js", source_kind=SourceKind.BACKEND),
            owner="auth.js", source_kind=SourceKind.BACKEND,
        ),
    ]


def test_aggregation_is_order_independent():
    engine = AggregationEngine(ROLES)
    forward = engine.aggregate(sample_results()).as_dict()
    backward = engine.aggregate(list(reversed(sample_results()))).as_dict()
    assert forward == backward


def test_summary_counts():
    summary = AggregationEngine(ROLES).aggregate(sample_results()).summary

    assert summary["total_files"] == 7
    assert summary["skipped_files"] == 1
    assert summary["zero_candidate_files"] == 1
    assert summary["files_with_candidates"] == 5
    assert summary["ui_files"] == 5
    assert summary["backend_files"] == 1
    assert summary["total_candidates"] == 6
    assert summary["client_candidates"] == 5
    assert summary["backend_candidates"] == 1
    assert summary["candidates_by_severity"] == {"CRITICAL": 4, "HIGH": 1, "MEDIUM": 0, "LOW": 1}
    assert summary["candidates_by_role"] == {"ADMINISTRATOR": 1, "CITIZEN": 5, "GUEST": 1}
    assert summary["unmapped_candidates"] == 1
    assert summary["unmapped_owners"] == ["Orphan"]
    assert summary["warning_count"] == 1


def test_conversion_plan_ordering():
    dataset = AggregationEngine(ROLES).aggregate(sample_results())
    high = [task.file_path for task in dataset.conversion_plan[Priority.HIGH]]
    # B has two critical; A and auth.js tie on counts and fall back to path order
    assert high == ["client/B.tsx", "client/A.tsx", "server/auth.js"]
    assert [t.file_path for t in dataset.conversion_plan[Priority.MEDIUM]] == ["client/Orphan.tsx"]
    assert [t.file_path for t in dataset.conversion_plan[Priority.LOW]] == ["client/C.tsx"]

    exported = dataset.as_dict()["conversion_plan"]
    assert set(exported) == {"high", "medium", "low"}


def test_task_scores_and_dependencies():
    dataset = AggregationEngine(ROLES).aggregate(sample_results())
    tasks = {task.file_path: task for task in dataset.tasks()}

    b = tasks["client/B.tsx"]
    assert b.roles == {"CITIZEN", "GUEST"}
    assert b.impact_score == 20
    assert b.estimated_effort_minutes == 4
    assert "Add translation hook import" in b.dependencies

    c = tasks["client/C.tsx"]
    assert c.estimated_effort_minutes == 2
    assert "Refactor template fragments into interpolated messages" in c.dependencies

    auth = tasks["server/auth.js"]
    assert auth.estimated_effort_minutes == 3
    assert "Implement server-side i18n middleware" in auth.dependencies
    assert all(t.dependencies[0].startswith("Update translation files") for t in tasks.values())


def test_every_role_has_a_summary():
    dataset = AggregationEngine(ROLES).aggregate(sample_results())
    roles = dataset.role_associations

    assert list(roles) == list(ROLES)
    assert roles["GUEST"].total == 1
    assert roles["CITIZEN"].total == 5
    assert roles["CITIZEN"].ui_count == 4
    assert roles["CITIZEN"].backend_count == 1
    assert roles["CITIZEN"].owners == ("Page", "auth.js")
    assert roles["CITIZEN"].priority_histogram == {"HIGH": 3, "MEDIUM": 0, "LOW": 1}
    assert roles["ADMINISTRATOR"].by_kind == {"response_payload": 1}


def test_empty_input():
    dataset = AggregationEngine(ROLES).aggregate([])
    assert dataset.summary["total_files"] == 0
    assert dataset.tasks() == []
    assert all(summary.total == 0 for summary in dataset.role_associations.values())
