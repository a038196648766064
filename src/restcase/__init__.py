"""Administrator authentication for the case service.

Admins register with a username and password, log in to receive a short-lived
HS256 session token, and present it as ``Bearer <token>`` on later requests.
"""

from .auth import AdminAuthService
from .domain import AccessGrant, AdminRecord, AdminSession

__all__ = ["AccessGrant", "AdminAuthService", "AdminRecord", "AdminSession"]
