"""Utility functions for the API."""

from deps import HTTPException, Path

from i18n_audit.errors import ConfigurationError

from .config import get_project_root
from .schemas import AuditRequest, AuditResponse, RolesResponse
from .services import AuditService

audit_svc = AuditService()


def resolve_root(req: AuditRequest) -> Path:
    """Project root from the request or the environment; 400/404 when unusable."""
    if req.project_root:
        root = Path(req.project_root)
    else:
        root = get_project_root()
        if root is None:
            raise HTTPException(400, "Provide project_root or set AUDIT_PROJECT_ROOT.")
    if not root.is_absolute():
        raise HTTPException(400, "project_root must be absolute")
    if not root.is_dir():
        raise HTTPException(404, f"Project root not found: {root}")
    return root


def run_audit(req: AuditRequest) -> AuditResponse:
    """Run the audit for a request."""
    root = resolve_root(req)
    try:
        return audit_svc.audit(root, req)
    except ConfigurationError as e:
        raise HTTPException(500, f"Role table is invalid: {e}") from e


def get_roles() -> RolesResponse:
    try:
        return audit_svc.roles()
    except ConfigurationError as e:
        raise HTTPException(500, f"Role table is invalid: {e}") from e
