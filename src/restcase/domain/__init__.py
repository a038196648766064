"""Domain entities for administrator authentication."""

from .models import AccessGrant, AdminRecord, AdminSession

__all__ = ["AccessGrant", "AdminRecord", "AdminSession"]
