"""Startup validation and configuration checks."""

from deps import Path

from i18n_audit.errors import ConfigurationError

from .config import get_project_root, get_role_table_path
from .services import AuditService


def validate_config() -> None:
    """Validate config at startup and warn about anything the audit would trip on."""
    if not Path(".env").exists():
        print("⚠️  WARNING: .env file not found. Using defaults and the bundled role table.")
    root = get_project_root()
    if root is None:
        print("⚠️  WARNING: AUDIT_PROJECT_ROOT not set. POST /audit must name project_root.")
    elif not root.is_dir():
        print(f"⚠️  WARNING: AUDIT_PROJECT_ROOT does not exist: {root}")
    try:
        AuditService(get_role_table_path()).role_table()
    except ConfigurationError as e:
        print(f"⚠️  WARNING: role table is invalid: {e}")
        print("   GET /roles and POST /audit will fail until AUDIT_ROLE_TABLE is fixed.")
