"""
Hardcoded-text audit: finds user-facing strings that bypass localization,
attributes them to application roles and plans their conversion.
"""

from .aggregation import AggregationEngine, AuditDataset, ConversionTask, Priority, RoleSummary
from .candidate import Candidate, CandidateKind, FileScanResult, ScanWarning, Severity, SourceKind
from .classifier import CandidateClassifier
from .errors import AuditError, ConfigurationError, IOFailure, ParseFailure
from .main_auditor import AuditOptions, HardcodedTextAuditor
from .reporter import ReportGenerator
from .roles import RoleAssociator, RoleTable, load_role_table
from .walker import SourceWalker

__version__ = "0.1.0"

__all__ = [
    "AggregationEngine",
    "AuditDataset",
    "AuditError",
    "AuditOptions",
    "Candidate",
    "CandidateClassifier",
    "CandidateKind",
    "ConfigurationError",
    "ConversionTask",
    "FileScanResult",
    "HardcodedTextAuditor",
    "IOFailure",
    "ParseFailure",
    "Priority",
    "ReportGenerator",
    "RoleAssociator",
    "RoleSummary",
    "RoleTable",
    "ScanWarning",
    "Severity",
    "SourceKind",
    "SourceWalker",
    "load_role_table",
]
