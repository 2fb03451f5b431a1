"""
Aggregation: folds per-file scan results into the audit dataset.

The fold is order-independent. Results are sorted by path before anything is
counted, and every list in the output has an explicit sort key.
"""

import math
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Sequence, Tuple

from .candidate import Candidate, CandidateKind, FileScanResult, ScanWarning, Severity, SourceKind

MINUTES_PER_CANDIDATE = 2
MAX_BASE_EFFORT_MINUTES = 60
HIGH_VALUE_OWNER_FRAGMENTS = ("Dashboard", "Form", "Modal")
HIGH_VALUE_OWNER_BONUS = 1.5


class Priority(Enum):
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


def round_half_up(value: float) -> int:
    """Round .5 away from zero for non-negative values."""
    return int(math.floor(value + 0.5))


def estimate_effort(
    candidate_count: int,
    source_kind: SourceKind,
    role_count: int,
    has_template_fragment: bool,
) -> int:
    """Minutes to convert a file: two per string, capped, scaled by complexity."""
    base = min(candidate_count * MINUTES_PER_CANDIDATE, MAX_BASE_EFFORT_MINUTES)
    # Multiplier kept in tenths so the arithmetic stays exact
    multiplier_tenths = 10
    if source_kind is SourceKind.BACKEND:
        multiplier_tenths += 3
    if role_count > 2:
        multiplier_tenths += 2
    if has_template_fragment:
        multiplier_tenths += 2
    return round_half_up(base * multiplier_tenths / 10)


def is_high_value_owner(owner_name: str) -> bool:
    return any(fragment in (owner_name or "") for fragment in HIGH_VALUE_OWNER_FRAGMENTS)


def impact_score(critical: int, high: int, total: int, role_count: int, owner_name: str) -> int:
    """Severity-weighted string count, scaled by audience size and owner importance."""
    impact = critical * 10 + high * 5 + (total - critical - high)
    impact *= max(1.0, role_count * 0.5)
    if is_high_value_owner(owner_name):
        impact *= HIGH_VALUE_OWNER_BONUS
    return round_half_up(impact)


def priority_bucket(critical: int, high: int, total: int) -> Priority:
    if critical > 0 or high > 5:
        return Priority.HIGH
    if high > 0 or total > 10:
        return Priority.MEDIUM
    return Priority.LOW


def conversion_dependencies(source_kind: SourceKind, kinds: FrozenSet[CandidateKind]) -> Tuple[str, ...]:
    """Follow-up work a conversion task implies."""
    deps = ["Update translation files for every supported language"]
    if source_kind is SourceKind.UI:
        deps.append("Add translation hook import")
        if CandidateKind.ATTRIBUTE_VALUE in kinds:
            deps.append("Update markup attribute bindings")
        if CandidateKind.TEMPLATE_FRAGMENT in kinds:
            deps.append("Refactor template fragments into interpolated messages")
    else:
        deps.append("Implement server-side i18n middleware")
        if CandidateKind.EMAIL_TEXT in kinds:
            deps.append("Update email template system")
        if CandidateKind.VALIDATION_MESSAGE in kinds:
            deps.append("Update validation error handling")
    return tuple(deps)


# --- Dataset records ---


@dataclass(frozen=True)
class ConversionTask:
    """Planned remediation of one file."""
    file_path: str
    source_kind: SourceKind
    owner_name: str
    candidates: Tuple[Candidate, ...]
    roles: FrozenSet[str]
    critical_count: int
    high_count: int
    total: int
    estimated_effort_minutes: int
    impact_score: int
    priority: Priority
    dependencies: Tuple[str, ...] = ()

    def sort_key(self) -> Tuple[int, int, int, str]:
        return (-self.critical_count, -self.high_count, -self.total, self.file_path)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "file_path": self.file_path,
            "source_kind": self.source_kind.value,
            "owner_name": self.owner_name,
            "roles": sorted(self.roles),
            "total": self.total,
            "critical_count": self.critical_count,
            "high_count": self.high_count,
            "estimated_effort_minutes": self.estimated_effort_minutes,
            "impact_score": self.impact_score,
            "priority": self.priority.value,
            "dependencies": list(self.dependencies),
            "candidates": [c.as_dict() for c in self.candidates],
        }


@dataclass(frozen=True)
class RoleSummary:
    """Everything a single role is exposed to."""
    role: str
    total: int = 0
    ui_count: int = 0
    backend_count: int = 0
    by_severity: Mapping[str, int] = field(default_factory=dict)
    by_kind: Mapping[str, int] = field(default_factory=dict)
    owners: Tuple[str, ...] = ()
    files: Tuple[str, ...] = ()
    priority_histogram: Mapping[str, int] = field(default_factory=dict)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "role": self.role,
            "total": self.total,
            "ui_count": self.ui_count,
            "backend_count": self.backend_count,
            "by_severity": dict(self.by_severity),
            "by_kind": dict(self.by_kind),
            "owners": list(self.owners),
            "files": list(self.files),
            "priority_histogram": dict(self.priority_histogram),
        }


@dataclass(frozen=True)
class AuditDataset:
    """The structured output consumed by report writers."""
    summary: Mapping[str, Any]
    client_candidates: Tuple[Candidate, ...]
    backend_candidates: Tuple[Candidate, ...]
    role_associations: Mapping[str, RoleSummary]
    conversion_plan: Mapping[Priority, Tuple[ConversionTask, ...]]
    warnings: Tuple[ScanWarning, ...] = ()
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def tasks(self) -> List[ConversionTask]:
        return [task for bucket in Priority for task in self.conversion_plan.get(bucket, ())]

    def as_dict(self) -> Dict[str, Any]:
        return {
            "metadata": dict(self.metadata),
            "summary": dict(self.summary),
            "client_candidates": [c.as_dict() for c in self.client_candidates],
            "backend_candidates": [c.as_dict() for c in self.backend_candidates],
            "role_associations": {role: s.as_dict() for role, s in self.role_associations.items()},
            "conversion_plan": {
                bucket.value.lower(): [t.as_dict() for t in self.conversion_plan.get(bucket, ())]
                for bucket in Priority
            },
            "warnings": [w.as_dict() for w in self.warnings],
        }


# --- Engine ---


def _zero_counts(keys: Iterable[str]) -> Dict[str, int]:
    return {key: 0 for key in keys}


def build_task(result: FileScanResult) -> Optional[ConversionTask]:
    """Conversion task for a file, or None when it has no candidates."""
    candidates = result.candidates
    if not candidates:
        return None
    roles = frozenset().union(*(c.roles for c in candidates))
    critical = sum(1 for c in candidates if c.severity is Severity.CRITICAL)
    high = sum(1 for c in candidates if c.severity is Severity.HIGH)
    total = len(candidates)
    kinds = frozenset(c.kind for c in candidates)
    return ConversionTask(
        file_path=result.file_path,
        source_kind=result.source_kind,
        owner_name=result.owner_name,
        candidates=candidates,
        roles=roles,
        critical_count=critical,
        high_count=high,
        total=total,
        estimated_effort_minutes=estimate_effort(
            total, result.source_kind, len(roles), CandidateKind.TEMPLATE_FRAGMENT in kinds
        ),
        impact_score=impact_score(critical, high, total, len(roles), result.owner_name),
        priority=priority_bucket(critical, high, total),
        dependencies=conversion_dependencies(result.source_kind, kinds),
    )


class AggregationEngine:
    """Builds summary counts, role summaries and the conversion plan."""

    def __init__(self, roles: Sequence[str]):
        self.roles = tuple(roles)

    def aggregate(
        self,
        results: Iterable[FileScanResult],
        warnings: Iterable[ScanWarning] = (),
        metadata: Optional[Mapping[str, Any]] = None,
    ) -> AuditDataset:
        ordered = sorted(results, key=lambda r: (r.file_path, r.source_kind.value))
        all_warnings = list(warnings)
        for result in ordered:
            all_warnings.extend(result.warnings)

        candidates = sorted((c for r in ordered for c in r.candidates), key=Candidate.sort_key)
        tasks = [task for task in (build_task(r) for r in ordered) if task is not None]

        plan: Dict[Priority, List[ConversionTask]] = {bucket: [] for bucket in Priority}
        for task in tasks:
            plan[task.priority].append(task)

        return AuditDataset(
            summary=self._summary(ordered, candidates, tasks, all_warnings),
            client_candidates=tuple(c for c in candidates if c.source_kind is SourceKind.UI),
            backend_candidates=tuple(c for c in candidates if c.source_kind is SourceKind.BACKEND),
            role_associations=self._role_summaries(candidates, tasks),
            conversion_plan={bucket: tuple(sorted(plan[bucket], key=ConversionTask.sort_key)) for bucket in Priority},
            warnings=tuple(sorted(set(all_warnings), key=lambda w: (w.path, w.category, w.message))),
            metadata=dict(metadata or {}),
        )

    def _summary(
        self,
        results: List[FileScanResult],
        candidates: List[Candidate],
        tasks: List[ConversionTask],
        warnings: List[ScanWarning],
    ) -> Dict[str, Any]:
        scanned = [r for r in results if not r.skipped]
        by_severity = _zero_counts(s.value for s in Severity)
        by_kind = _zero_counts(k.value for k in CandidateKind)
        by_role = _zero_counts(self.roles)
        unmapped_owners = set()
        unmapped = 0
        for c in candidates:
            by_severity[c.severity.value] += 1
            by_kind[c.kind.value] += 1
            if c.unmapped:
                unmapped += 1
                unmapped_owners.add(c.owner_name)
            for role in c.roles:
                by_role[role] = by_role.get(role, 0) + 1
        by_priority = Counter(task.priority.value for task in tasks)

        return {
            "total_files": len(results),
            "scanned_files": len(scanned),
            "skipped_files": len(results) - len(scanned),
            "zero_candidate_files": sum(1 for r in scanned if not r.candidates),
            "files_with_candidates": len(tasks),
            "ui_files": sum(1 for r in scanned if r.source_kind is SourceKind.UI),
            "backend_files": sum(1 for r in scanned if r.source_kind is SourceKind.BACKEND),
            "total_candidates": len(candidates),
            "client_candidates": sum(1 for c in candidates if c.source_kind is SourceKind.UI),
            "backend_candidates": sum(1 for c in candidates if c.source_kind is SourceKind.BACKEND),
            "candidates_by_severity": by_severity,
            "candidates_by_kind": by_kind,
            "candidates_by_role": by_role,
            "unmapped_candidates": unmapped,
            "unmapped_owners": sorted(unmapped_owners),
            "files_with_existing_localization": sum(
                1 for r in scanned if r.metadata.has_existing_localization
            ),
            "existing_translation_keys": sum(len(r.metadata.existing_keys) for r in scanned),
            "tasks_by_priority": {bucket.value: by_priority.get(bucket.value, 0) for bucket in Priority},
            "estimated_total_minutes": sum(task.estimated_effort_minutes for task in tasks),
            "warning_count": len(set(warnings)),
        }

    def _role_summaries(
        self,
        candidates: List[Candidate],
        tasks: List[ConversionTask],
    ) -> Dict[str, RoleSummary]:
        roles = list(self.roles)
        for c in candidates:
            for role in sorted(c.roles):
                if role not in roles:
                    roles.append(role)

        summaries = {}
        for role in roles:
            mine = [c for c in candidates if role in c.roles]
            by_severity = _zero_counts(s.value for s in Severity)
            by_kind: Dict[str, int] = {}
            for c in mine:
                by_severity[c.severity.value] += 1
                by_kind[c.kind.value] = by_kind.get(c.kind.value, 0) + 1
            histogram = _zero_counts(bucket.value for bucket in Priority)
            for task in tasks:
                if role in task.roles:
                    histogram[task.priority.value] += 1
            summaries[role] = RoleSummary(
                role=role,
                total=len(mine),
                ui_count=sum(1 for c in mine if c.source_kind is SourceKind.UI),
                backend_count=sum(1 for c in mine if c.source_kind is SourceKind.BACKEND),
                by_severity=by_severity,
                by_kind=dict(sorted(by_kind.items())),
                owners=tuple(sorted({c.owner_name for c in mine})),
                files=tuple(sorted({c.location.file_path for c in mine})),
                priority_histogram=histogram,
            )
        return summaries
