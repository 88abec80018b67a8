"""
Repository layer for database operations.
"""

from .report import ReportRepository
from .admin import AdminRepository

__all__ = [
    "ReportRepository",
    "AdminRepository",
]
