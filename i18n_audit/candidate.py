"""
Candidate data models for the hardcoded-text audit.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Tuple


class Severity(Enum):
    """How directly a string reaches an end user."""
    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class CandidateKind(Enum):
    """Where a candidate was found."""
    MARKUP_TEXT = "markup_text"
    ATTRIBUTE_VALUE = "attribute_value"
    OBJECT_PROPERTY = "object_property"
    TEMPLATE_FRAGMENT = "template_fragment"
    RESPONSE_PAYLOAD = "response_payload"
    VALIDATION_MESSAGE = "validation_message"
    EMAIL_TEXT = "email_text"
    LOG_TEXT = "log_text"
    PERSISTENCE_ERROR = "persistence_error"
    AUTH_TEXT = "auth_text"


class SourceKind(Enum):
    UI = "ui"
    BACKEND = "backend"


class ScanStatus(Enum):
    SCANNED = "scanned"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class SourceLocation:
    """Line is 1-based, column is 0-based."""
    file_path: str
    line: int
    column: int


@dataclass(frozen=True)
class Candidate:
    """One detected text occurrence that should be localized."""
    content: str
    kind: CandidateKind
    location: SourceLocation
    context: str
    severity: Severity
    suggested_key: str
    source_kind: SourceKind
    owner_name: str
    roles: FrozenSet[str] = frozenset()

    @property
    def unmapped(self) -> bool:
        return not self.roles

    def sort_key(self) -> Tuple[str, int, int, str, str]:
        return (
            self.location.file_path,
            self.location.line,
            self.location.column,
            self.kind.value,
            self.content,
        )

    def as_dict(self) -> Dict[str, Any]:
        return {
            "content": self.content,
            "kind": self.kind.value,
            "location": {
                "file_path": self.location.file_path,
                "line": self.location.line,
                "column": self.location.column,
            },
            "context": self.context,
            "severity": self.severity.value,
            "suggested_key": self.suggested_key,
            "source_kind": self.source_kind.value,
            "owner_name": self.owner_name,
            "roles": sorted(self.roles),
            "unmapped": self.unmapped,
        }


@dataclass(frozen=True)
class ExistingKey:
    """A translation key already looked up through the translation function."""
    key: str
    line: int
    column: int


@dataclass(frozen=True)
class ScanWarning:
    """A recoverable problem recorded in the run log."""
    path: str
    category: str
    message: str

    def as_dict(self) -> Dict[str, str]:
        return {"path": self.path, "category": self.category, "message": self.message}


@dataclass(frozen=True)
class FileMetadata:
    has_existing_localization: bool = False
    total_considered: int = 0
    existing_keys: Tuple[ExistingKey, ...] = ()
    server_file_type: str = ""


@dataclass(frozen=True)
class FileScanResult:
    """Everything one extractor pass found in one file."""
    file_path: str
    source_kind: SourceKind
    owner_name: str
    candidates: Tuple[Candidate, ...] = ()
    metadata: FileMetadata = field(default_factory=FileMetadata)
    status: ScanStatus = ScanStatus.SCANNED
    warnings: Tuple[ScanWarning, ...] = ()

    @property
    def skipped(self) -> bool:
        return self.status is ScanStatus.SKIPPED
