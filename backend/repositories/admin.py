"""
Admin repository implementation.
"""

from typing import Optional

from pymongo.database import Database

from models.admin import Admin
from repositories.base import BaseRepository


class AdminRepository(BaseRepository[Admin]):
    """Repository for Admin entities."""

    def __init__(self, database: Database):
        super().__init__(database, "admins", Admin)

    async def find_active_by_username(self, username: str) -> Optional[Admin]:
        """
        Find an active admin by username.

        Args:
            username: Login name

        Returns:
            Admin if found and active, None otherwise
        """
        return await self.find_one({"username": username.strip().lower(), "is_active": True})
