"""Pydantic request/response models."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


# --- Request ---


class AuditRequest(BaseModel):
    """Request body for POST /audit."""

    project_root: Optional[str] = Field(
        default=None, description="Absolute path to the project on the server (default: AUDIT_PROJECT_ROOT)"
    )
    ui_dirs: Optional[List[str]] = Field(default=None, description="UI directories relative to the root")
    backend_dirs: Optional[List[str]] = Field(default=None, description="Backend directories relative to the root")
    max_depth: Optional[int] = Field(default=None, ge=0, description="Maximum directory depth")
    include_timestamp: bool = Field(default=False, description="Add generated_at to the metadata")

    model_config = {"extra": "forbid"}


# --- Candidate (response) ---


class LocationOut(BaseModel):
    file_path: str
    line: int
    column: int


class CandidateOut(BaseModel):
    """Single hardcoded-text candidate."""

    content: str
    kind: str
    location: LocationOut
    context: str
    severity: str = Field(..., description="CRITICAL, HIGH, MEDIUM, or LOW")
    suggested_key: str
    source_kind: str = Field(..., description="ui or backend")
    owner_name: str
    roles: List[str] = Field(default_factory=list)
    unmapped: bool = False


class ConversionTaskOut(BaseModel):
    """Planned conversion of one file."""

    file_path: str
    source_kind: str
    owner_name: str
    roles: List[str] = Field(default_factory=list)
    total: int
    critical_count: int
    high_count: int
    estimated_effort_minutes: int
    impact_score: int
    priority: str
    dependencies: List[str] = Field(default_factory=list)
    candidates: List[CandidateOut] = Field(default_factory=list)


class ConversionPlanOut(BaseModel):
    high: List[ConversionTaskOut] = Field(default_factory=list)
    medium: List[ConversionTaskOut] = Field(default_factory=list)
    low: List[ConversionTaskOut] = Field(default_factory=list)


class RoleSummaryOut(BaseModel):
    role: str
    total: int
    ui_count: int
    backend_count: int
    by_severity: Dict[str, int] = Field(default_factory=dict)
    by_kind: Dict[str, int] = Field(default_factory=dict)
    owners: List[str] = Field(default_factory=list)
    files: List[str] = Field(default_factory=list)
    priority_histogram: Dict[str, int] = Field(default_factory=dict)


class WarningOut(BaseModel):
    path: str
    category: str
    message: str


# --- Responses ---


class AuditResponse(BaseModel):
    """Response for POST /audit: the full dataset."""

    metadata: Dict[str, Any] = Field(default_factory=dict)
    summary: Dict[str, Any] = Field(default_factory=dict)
    client_candidates: List[CandidateOut] = Field(default_factory=list)
    backend_candidates: List[CandidateOut] = Field(default_factory=list)
    role_associations: Dict[str, RoleSummaryOut] = Field(default_factory=dict)
    conversion_plan: ConversionPlanOut = Field(default_factory=ConversionPlanOut)
    warnings: List[WarningOut] = Field(default_factory=list)


class RoleOut(BaseModel):
    access_level: str
    routes: List[str] = Field(default_factory=list)
    components: List[str] = Field(default_factory=list)


class RolesResponse(BaseModel):
    """Response for GET /roles: the validated role table."""

    roles: Dict[str, RoleOut] = Field(default_factory=dict)
    shared_components: List[str] = Field(default_factory=list)
    backend_audiences: Dict[str, List[str]] = Field(default_factory=dict)
    total_roles: int = 0
    total_unique_components: int = 0

