"""
Base extractor class for hardcoded-text candidates.
"""

import logging
from pathlib import Path
from typing import List, Optional

from .candidate import (
    Candidate,
    CandidateKind,
    ExistingKey,
    FileMetadata,
    FileScanResult,
    ScanStatus,
    ScanWarning,
    SourceKind,
    SourceLocation,
)
from .classifier import CandidateClassifier
from .errors import IOFailure, ParseFailure
from .utils import owner_name_for, relative_posix

logger = logging.getLogger(__name__)


class BaseExtractor:
    """Base class for all extractors.

    Subclasses implement ``_run_extraction`` and report hits through
    ``_add_candidate``; the base class owns file reading, classification and
    the conversion of per-file failures into skipped results.
    """

    source_kind: SourceKind = SourceKind.UI

    def __init__(self, classifier: Optional[CandidateClassifier] = None):
        self.classifier = classifier or CandidateClassifier()
        self.file_path: Optional[Path] = None
        self.display_path: str = ""
        self.owner_name: str = ""
        self.content: str = ""
        self.candidates: List[Candidate] = []
        self.existing_keys: List[ExistingKey] = []
        self.total_considered = 0

    def extract(self, file_path: Path, root: Optional[Path] = None) -> FileScanResult:
        """Scan one file. Never raises for parse or read problems."""
        self.file_path = file_path
        self.display_path = relative_posix(file_path, root) if root else file_path.as_posix()
        self.owner_name = self._owner_name(file_path)
        self.candidates = []
        self.existing_keys = []
        self.total_considered = 0

        try:
            self.content = self._read(file_path)
            self._run_extraction()
        except ParseFailure as e:
            return self._skipped("parse", str(e))
        except IOFailure as e:
            return self._skipped("io", str(e))
        except ValueError as e:
            # Undecodable literal or escape in an otherwise parsed file
            return self._skipped("parse", f"Could not decode {self.display_path}: {e}")

        return FileScanResult(
            file_path=self.display_path,
            source_kind=self.source_kind,
            owner_name=self.owner_name,
            candidates=tuple(sorted(self.candidates, key=Candidate.sort_key)),
            metadata=self._metadata(),
        )

    def _run_extraction(self):
        """Override in subclasses to implement specific extraction."""
        pass

    def _owner_name(self, file_path: Path) -> str:
        return owner_name_for(file_path, keep_extension=self.source_kind is SourceKind.BACKEND)

    def _metadata(self) -> FileMetadata:
        return FileMetadata(
            has_existing_localization=bool(self.existing_keys),
            total_considered=self.total_considered,
            existing_keys=tuple(self.existing_keys),
        )

    def _read(self, file_path: Path) -> str:
        try:
            with open(file_path, "r", encoding="utf-8", errors="replace") as f:
                return f.read()
        except OSError as e:
            raise IOFailure(file_path, e) from e

    def _skipped(self, category: str, message: str) -> FileScanResult:
        logger.warning("Skipping %s: %s", self.display_path, message)
        return FileScanResult(
            file_path=self.display_path,
            source_kind=self.source_kind,
            owner_name=self.owner_name,
            status=ScanStatus.SKIPPED,
            warnings=(ScanWarning(self.display_path, category, message),),
        )

    def _add_candidate(
        self,
        raw_text: str,
        kind: CandidateKind,
        context: str,
        line_num: int,
        col: int,
    ) -> Optional[Candidate]:
        """Classify a raw hit and keep it if it is user-facing text."""
        self.total_considered += 1
        location = SourceLocation(self.display_path, line_num, col)
        candidate = self.classifier.classify(
            raw_text, kind, context, location, self.source_kind, self.owner_name
        )
        if candidate is not None:
            self.candidates.append(candidate)
        return candidate

    def _add_existing_key(self, key: str, line_num: int, col: int):
        self.existing_keys.append(ExistingKey(key, line_num, col))
