"""Audit service: wraps i18n_audit and maps to API models."""

from deps import Any, Dict, Optional, Path

from i18n_audit.main_auditor import AuditOptions, HardcodedTextAuditor
from i18n_audit.roles import RoleTable, load_role_table

from ..config import get_max_depth, get_role_table_path, get_workers
from ..schemas import AuditRequest, AuditResponse, RolesResponse


class AuditService:
    """Wraps HardcodedTextAuditor for use by the API."""

    def __init__(self, role_table_path: Optional[Path] = None):
        self.role_table_path = role_table_path

    def role_table(self) -> RoleTable:
        """Load and validate the configured role table. Raises ConfigurationError."""
        return load_role_table(self.role_table_path or get_role_table_path())

    def roles(self) -> RolesResponse:
        return RolesResponse.model_validate(self.role_table().as_dict())

    def options_for(self, req: AuditRequest) -> AuditOptions:
        options = AuditOptions(
            max_depth=req.max_depth if req.max_depth is not None else get_max_depth(),
            workers=get_workers(),
            include_timestamp=req.include_timestamp,
        )
        if req.ui_dirs:
            options.ui_dirs = tuple(req.ui_dirs)
        if req.backend_dirs:
            options.backend_dirs = tuple(req.backend_dirs)
        return options

    def audit(self, root: Path, req: AuditRequest) -> AuditResponse:
        auditor = HardcodedTextAuditor(self.role_table(), self.options_for(req))
        data: Dict[str, Any] = auditor.audit(root).as_dict()
        return AuditResponse.model_validate(data)
