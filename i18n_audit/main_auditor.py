"""
Main auditor class that coordinates walking, extraction, role association and aggregation.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, List, Optional, Tuple, Union

from .aggregation import AggregationEngine, AuditDataset
from .candidate import FileScanResult, ScanWarning
from .classifier import CandidateClassifier
from .extractor_base import BaseExtractor
from .extractors import MarkupExtractor, PatternExtractor
from .roles import RoleAssociator, RoleTable, load_role_table
from .utils import relative_posix
from .walker import DEFAULT_MAX_DEPTH, SourceWalker

logger = logging.getLogger(__name__)

UI_EXTENSIONS = (".tsx", ".jsx", ".ts", ".js")
UI_EXCLUSIONS = ("node_modules", "__tests__", ".test.", ".spec.", "dist", "build")
BACKEND_EXTENSIONS = (".js", ".ts")
BACKEND_EXCLUSIONS = ("node_modules", "__tests__", "uploads", "logs")


@dataclass
class AuditOptions:
    """Scan settings. Directories are relative to the project root."""
    ui_dirs: Tuple[str, ...] = ("client",)
    backend_dirs: Tuple[str, ...] = ("server",)
    ui_extensions: Tuple[str, ...] = UI_EXTENSIONS
    ui_exclusions: Tuple[str, ...] = UI_EXCLUSIONS
    backend_extensions: Tuple[str, ...] = BACKEND_EXTENSIONS
    backend_exclusions: Tuple[str, ...] = BACKEND_EXCLUSIONS
    max_depth: int = DEFAULT_MAX_DEPTH
    workers: int = 1
    include_timestamp: bool = True


class HardcodedTextAuditor:
    """Runs the full audit over a project tree."""

    def __init__(
        self,
        role_table: Optional[RoleTable] = None,
        options: Optional[AuditOptions] = None,
        classifier: Optional[CandidateClassifier] = None,
    ):
        # Loading validates the table; a bad table fails here, before any scanning.
        self.role_table = role_table or load_role_table()
        self.options = options or AuditOptions()
        self.classifier = classifier or CandidateClassifier()
        self.associator = RoleAssociator(self.role_table)
        self.engine = AggregationEngine(self.role_table.roles)

    @classmethod
    def from_role_file(
        cls,
        role_file: Optional[Union[str, Path]] = None,
        options: Optional[AuditOptions] = None,
    ) -> "HardcodedTextAuditor":
        return cls(load_role_table(role_file), options)

    def audit(self, project_root: Union[str, Path]) -> AuditDataset:
        """Scan the UI and backend trees under project_root and aggregate."""
        root = Path(project_root).absolute()
        opts = self.options
        logger.info("Auditing %s", root)

        warnings: List[ScanWarning] = []
        tasks: List[Tuple[Path, Callable[[], BaseExtractor]]] = []
        for dirs, extensions, exclusions, factory in (
            (opts.ui_dirs, opts.ui_extensions, opts.ui_exclusions, self._markup_extractor),
            (opts.backend_dirs, opts.backend_extensions, opts.backend_exclusions, self._pattern_extractor),
        ):
            for sub in dirs:
                walker = SourceWalker(extensions, exclusions, opts.max_depth)
                tasks.extend((path, factory) for path in walker.walk(root / sub))
                warnings.extend(self._relativize(w, root) for w in walker.warnings)

        results = self._extract_all(tasks, root)
        results = [self.associator.associate_result(r) for r in results]

        metadata = {
            "project_root": root.as_posix(),
            "ui_dirs": list(opts.ui_dirs),
            "backend_dirs": list(opts.backend_dirs),
            "roles": list(self.role_table.roles),
        }
        if opts.include_timestamp:
            metadata["generated_at"] = datetime.now(timezone.utc).isoformat()

        dataset = self.engine.aggregate(results, warnings, metadata)
        logger.info(
            "Audit finished: %d files, %d candidates",
            dataset.summary["total_files"],
            dataset.summary["total_candidates"],
        )
        return dataset

    def audit_file(self, file_path: Path, root: Optional[Path] = None, backend: bool = False) -> FileScanResult:
        """Scan a single file and attach its roles."""
        extractor = self._pattern_extractor() if backend else self._markup_extractor()
        return self.associator.associate_result(extractor.extract(Path(file_path), root))

    def _extract_all(self, tasks: List[Tuple[Path, Callable[[], BaseExtractor]]], root: Path) -> List[FileScanResult]:
        # A fresh extractor per file; extractors carry per-file state.
        def run(task: Tuple[Path, Callable[[], BaseExtractor]]) -> FileScanResult:
            path, factory = task
            return factory().extract(path, root)

        if self.options.workers > 1 and len(tasks) > 1:
            with ThreadPoolExecutor(max_workers=self.options.workers) as pool:
                return list(pool.map(run, tasks))
        return [run(task) for task in tasks]

    def _markup_extractor(self) -> BaseExtractor:
        return MarkupExtractor(self.classifier)

    def _pattern_extractor(self) -> BaseExtractor:
        return PatternExtractor(self.classifier)

    @staticmethod
    def _relativize(warning: ScanWarning, root: Path) -> ScanWarning:
        return ScanWarning(relative_posix(Path(warning.path), root), warning.category, warning.message)
