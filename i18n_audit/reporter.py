"""
Report generation for the hardcoded-text audit.
"""

from deps import Dict, List, Path, Union, json

from .aggregation import AuditDataset, Priority
from .candidate import Candidate, Severity


class ReportGenerator:
    """Generate reports from an audit dataset."""

    @staticmethod
    def to_json(dataset: AuditDataset, indent: int = 2) -> str:
        """Deterministic JSON export: sorted keys, fixed indentation."""
        return json.dumps(dataset.as_dict(), indent=indent, sort_keys=True, ensure_ascii=False)

    @staticmethod
    def write_json(dataset: AuditDataset, output: Union[str, Path]) -> Path:
        path = Path(output)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(ReportGenerator.to_json(dataset) + "\n", encoding="utf-8")
        return path

    @staticmethod
    def generate_text_report(dataset: AuditDataset, top: int = 10) -> str:
        """Short console summary of the audit."""
        summary = dataset.summary
        report = [f"\n{'='*80}"]
        report.append("Hardcoded Text Audit")
        report.append(f"{'='*80}\n")

        report.append(
            f"Files: {summary['total_files']} total, {summary['files_with_candidates']} with candidates, "
            f"{summary['zero_candidate_files']} clean, {summary['skipped_files']} skipped"
        )
        report.append(
            f"Candidates: {summary['total_candidates']} "
            f"({summary['client_candidates']} client, {summary['backend_candidates']} backend)"
        )
        by_severity = summary["candidates_by_severity"]
        report.append("Severity: " + ", ".join(f"{s.value} {by_severity[s.value]}" for s in Severity))
        report.append(f"Unmapped candidates: {summary['unmapped_candidates']}")
        report.append(f"Estimated effort: {summary['estimated_total_minutes']} minutes\n")

        report.append("By role:")
        report.append("-" * 80)
        for role, role_summary in dataset.role_associations.items():
            report.append(
                f"  {role}: {role_summary.total} "
                f"(ui {role_summary.ui_count}, backend {role_summary.backend_count})"
            )

        for bucket in Priority:
            tasks = dataset.conversion_plan.get(bucket, ())
            if not tasks:
                continue
            report.append(f"\n{bucket.value} PRIORITY ({len(tasks)}):")
            report.append("-" * 80)
            for task in tasks[:top]:
                report.append(
                    f"  {task.file_path}: {task.total} strings, impact {task.impact_score}, "
                    f"~{task.estimated_effort_minutes} min"
                )
            if len(tasks) > top:
                report.append(f"  ... {len(tasks) - top} more")

        if dataset.warnings:
            report.append(f"\nWARNINGS ({len(dataset.warnings)}):")
            report.append("-" * 80)
            for warning in dataset.warnings:
                report.append(f"  [{warning.category}] {warning.path}: {warning.message}")

        report.append("=" * 80)
        return "\n".join(report)

    @staticmethod
    def generate_summary(candidates: List[Candidate]) -> Dict[str, int]:
        """Generate a summary count by context family."""
        summary: Dict[str, int] = {}
        for candidate in candidates:
            family = candidate.context.split(":", 1)[0]
            summary[family] = summary.get(family, 0) + 1
        return summary

