"""Database models and utilities for admin accounts."""

from .db_init import init_db
from .db_models import AdminModel, AdminSessionModel, Base

__all__ = ["AdminModel", "AdminSessionModel", "Base", "init_db"]
