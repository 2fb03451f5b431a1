"""
Role table (static configuration) and role association.

The role table maps each application role to the routes it can reach and the
components rendered on those routes. It is loaded from JSON, checked with
pydantic, and cross-checked before any scanning starts.
"""

import json
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, Field, ValidationError

from .candidate import FileScanResult, SourceKind
from .errors import ConfigurationError
from .extractors.pattern_extractor import FAMILY_BY_KIND

DEFAULT_ROLE_TABLE = Path(__file__).parent / "data" / "role_table.json"

# Pattern family -> backend audience name.
FAMILY_AUDIENCE = {
    "response": "end_user",
    "validation": "end_user",
    "email": "end_user",
    "auth": "end_user",
    "persistence": "administrative",
    "logging": "administrative",
}
# Server file types whose messages reach a different audience than their family says.
FILE_TYPE_AUDIENCE = {
    "middleware": "end_user",
    "config": "administrative",
    "seed": "administrative",
}


# --- Schema ---


class RoleSpec(BaseModel):
    """One role: its access level and route -> component names."""

    access_level: str = Field(default="", description="Free-form access scope label")
    routes: Dict[str, List[str]] = Field(..., description="Route path -> components rendered there")

    model_config = {"extra": "forbid"}


class BackendAudiences(BaseModel):
    """Roles that see backend messages, by audience."""

    end_user: List[str] = Field(..., description="Roles shown user-facing server messages")
    administrative: List[str] = Field(..., description="Roles shown logs and persistence errors")

    model_config = {"extra": "forbid"}


class RoleTableSpec(BaseModel):
    """On-disk shape of the role table."""

    components: List[str] = Field(..., description="Catalog of every known component name")
    roles: Dict[str, RoleSpec]
    shared_components: List[str] = Field(default_factory=list)
    backend_audiences: BackendAudiences

    model_config = {"extra": "forbid"}


# --- Table ---


@dataclass(frozen=True)
class RoleTable:
    """Validated, read-only role table."""

    roles: Tuple[str, ...]
    routes: Mapping[str, Mapping[str, Tuple[str, ...]]]
    access_levels: Mapping[str, str]
    shared_components: FrozenSet[str]
    components: FrozenSet[str]
    audiences: Mapping[str, FrozenSet[str]]

    @classmethod
    def from_spec(cls, spec: RoleTableSpec) -> "RoleTable":
        _check_references(spec)
        return cls(
            roles=tuple(spec.roles),
            routes={
                role: {route: tuple(names) for route, names in role_spec.routes.items()}
                for role, role_spec in spec.roles.items()
            },
            access_levels={role: role_spec.access_level for role, role_spec in spec.roles.items()},
            shared_components=frozenset(spec.shared_components),
            components=frozenset(spec.components),
            audiences={
                "end_user": frozenset(spec.backend_audiences.end_user),
                "administrative": frozenset(spec.backend_audiences.administrative),
            },
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RoleTable":
        try:
            spec = RoleTableSpec.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(f"Malformed role table: {e}") from e
        return cls.from_spec(spec)

    def routes_for_role(self, role: str) -> List[str]:
        return list(self.routes.get(role, {}))

    def components_for_role(self, role: str) -> List[str]:
        """Components reachable by a role, shared components included."""
        names: List[str] = []
        for route_components in self.routes.get(role, {}).values():
            for name in route_components:
                if name not in names:
                    names.append(name)
        return names + sorted(n for n in self.shared_components if n not in names)

    def roles_for_route(self, route: str) -> FrozenSet[str]:
        return frozenset(role for role in self.roles if route in self.routes[role])

    def roles_for_component(self, component: str) -> FrozenSet[str]:
        if component in self.shared_components:
            return frozenset(self.roles)
        return frozenset(
            role
            for role in self.roles
            if any(component in names for names in self.routes[role].values())
        )

    def as_dict(self) -> Dict[str, Any]:
        """Role -> routes/components matrix for export."""
        return {
            "roles": {
                role: {
                    "access_level": self.access_levels[role],
                    "routes": self.routes_for_role(role),
                    "components": self.components_for_role(role),
                }
                for role in self.roles
            },
            "shared_components": sorted(self.shared_components),
            "backend_audiences": {name: sorted(roles) for name, roles in self.audiences.items()},
            "total_roles": len(self.roles),
            "total_unique_components": len(self.components),
        }


def _check_references(spec: RoleTableSpec) -> None:
    """Cross-reference checks pydantic cannot express."""
    if not spec.roles:
        raise ConfigurationError("Role table defines no roles")
    catalog = set(spec.components)
    for role, role_spec in spec.roles.items():
        if not role_spec.routes:
            raise ConfigurationError(f"Role '{role}' has no routes")
        for route, names in role_spec.routes.items():
            for name in names:
                if name not in catalog:
                    raise ConfigurationError(
                        f"Role '{role}' route '{route}' references undefined component '{name}'"
                    )
    for name in spec.shared_components:
        if name not in catalog:
            raise ConfigurationError(f"Shared component '{name}' is not in the component catalog")
    for audience, roles in (
        ("end_user", spec.backend_audiences.end_user),
        ("administrative", spec.backend_audiences.administrative),
    ):
        if not roles:
            raise ConfigurationError(f"Backend audience '{audience}' is empty")
        for role in roles:
            if role not in spec.roles:
                raise ConfigurationError(f"Backend audience '{audience}' references undefined role '{role}'")


def load_role_table(path: Optional[Union[str, Path]] = None) -> RoleTable:
    """Load and validate a role table; the bundled table when no path is given."""
    path = Path(path) if path else DEFAULT_ROLE_TABLE
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise ConfigurationError(f"Could not read role table {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Role table {path} is not valid JSON: {e}") from e
    return RoleTable.from_dict(data)


# --- Association ---


class RoleAssociator:
    """Works out which roles can see a file's candidates."""

    def __init__(self, role_table: RoleTable):
        self.role_table = role_table

    def associate(
        self,
        owner_name: Optional[str],
        source_kind: SourceKind,
        family: Optional[str] = None,
        server_file_type: Optional[str] = None,
    ) -> FrozenSet[str]:
        if source_kind is SourceKind.UI:
            if not owner_name:
                return frozenset()
            return self.role_table.roles_for_component(owner_name)
        audience = FILE_TYPE_AUDIENCE.get(server_file_type or "")
        if audience is None:
            audience = FAMILY_AUDIENCE.get(family or "", "administrative")
        return self.role_table.audiences[audience]

    def associate_result(self, result: FileScanResult) -> FileScanResult:
        """Copy of the result whose candidates carry their role sets."""
        if not result.candidates:
            return result
        candidates = tuple(
            replace(
                candidate,
                roles=self.associate(
                    result.owner_name,
                    result.source_kind,
                    FAMILY_BY_KIND.get(candidate.kind),
                    result.metadata.server_file_type,
                ),
            )
            for candidate in result.candidates
        )
        return replace(result, candidates=candidates)
