"""Route handlers."""

from .audit import router as audit_router
from .health import router as health_router
from .roles import router as roles_router
from .root import router as root_router

__all__ = ["root_router", "health_router", "roles_router", "audit_router"]
