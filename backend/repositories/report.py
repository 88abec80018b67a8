"""
Report repository implementation.
"""

from typing import Dict, List, Optional

from bson import ObjectId
from pymongo.database import Database

from models.report import Report, utcnow
from repositories.base import BaseRepository


class ReportRepository(BaseRepository[Report]):
    """Repository for Report entities."""

    def __init__(self, database: Database):
        super().__init__(database, "reports", Report)

    @staticmethod
    def build_filter(category: Optional[str] = None, status: Optional[str] = None) -> dict:
        """
        Build a MongoDB filter from the admin list query.

        Args:
            category: Analysis category to match
            status: Workflow status to match

        Returns:
            Filter dict with only the provided criteria
        """
        filter_query = {}
        if category:
            filter_query["analysis.category"] = category
        if status:
            filter_query["status"] = status
        return filter_query

    async def find_filtered(
        self,
        category: Optional[str] = None,
        status: Optional[str] = None,
        skip: int = 0,
        limit: int = 20,
    ) -> List[Report]:
        """
        Find reports by category and/or status.

        Args:
            category: Analysis category filter
            status: Status filter
            skip: Number to skip
            limit: Maximum results

        Returns:
            List of reports sorted by creation time (newest first)
        """
        return await self.find_many(
            self.build_filter(category, status),
            skip=skip,
            limit=limit,
            sort=[("created_at", -1)],
        )

    async def update_triage(
        self,
        report_id: str | ObjectId,
        status: Optional[str] = None,
        admin_notes: Optional[str] = None,
    ) -> Optional[Report]:
        """
        Update status and/or admin notes of a report.

        Args:
            report_id: Report ID
            status: New status, unchanged if None
            admin_notes: New notes, unchanged if None

        Returns:
            Updated report, or None if not found
        """
        update = {"updated_at": utcnow()}
        if status is not None:
            update["status"] = status
        if admin_notes is not None:
            update["admin_notes"] = admin_notes
        return await self.update(report_id, update)

    async def count_by(self, field: str) -> Dict[str, int]:
        """
        Count reports grouped by a field.

        Args:
            field: Dotted document path, e.g. "analysis.category"

        Returns:
            Mapping of field value to report count
        """
        pipeline = [{"$group": {"_id": f"${field}", "count": {"$sum": 1}}}]
        results = await self.aggregate(pipeline)
        return {str(item["_id"]): item["count"] for item in results}
