"""Audit route."""

from deps import APIRouter

from ..schemas import AuditRequest, AuditResponse
from ..utils import run_audit

router = APIRouter()


@router.post("/audit", response_model=AuditResponse)
def audit(req: AuditRequest) -> AuditResponse:
    """Scan a project tree on the server and return the audit dataset."""
    return run_audit(req)
