"""Services for audit integration."""

from .auditor import AuditService

__all__ = ["AuditService"]
