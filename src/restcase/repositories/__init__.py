"""Admin store contract and its SQLAlchemy implementation."""

from .admin_repository import SQLAlchemyAdminRepository
from .interfaces import AdminRepository

__all__ = ["AdminRepository", "SQLAlchemyAdminRepository"]
