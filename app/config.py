"""Configuration from environment."""

from deps import Optional, Path, load_dotenv, os

load_dotenv()


def get_project_root() -> Optional[Path]:
    """Default project to audit when a request names none."""
    value = os.environ.get("AUDIT_PROJECT_ROOT", "").strip()
    return Path(value) if value else None


def get_role_table_path() -> Optional[Path]:
    """Role table JSON. Empty means the bundled table."""
    value = os.environ.get("AUDIT_ROLE_TABLE", "").strip()
    return Path(value) if value else None


def get_max_depth() -> int:
    try:
        return int(os.environ.get("AUDIT_MAX_DEPTH", "10"))
    except ValueError:
        return 10


def get_workers() -> int:
    try:
        return max(1, int(os.environ.get("AUDIT_WORKERS", "1")))
    except ValueError:
        return 1


def get_host() -> str:
    return os.environ.get("HOST", "0.0.0.0").strip()


def get_port() -> int:
    try:
        return int(os.environ.get("PORT", "8000"))
    except ValueError:
        return 8000
