"""
Admin API request/response schemas.
"""

from datetime import datetime
from typing import Annotated, Dict, List, Optional

from pydantic import BaseModel, Field, StringConstraints

from models.analysis import Category, Severity, Suggestion
from models.report import Report, ReporterCategory, ReportStatus


class LoginRequest(BaseModel):
    """Admin credentials."""

    username: Annotated[
        str, StringConstraints(strip_whitespace=True, to_lower=True, min_length=3, max_length=50)
    ]
    # No min length beyond non-empty, so login errors don't leak the password policy
    password: Annotated[str, StringConstraints(min_length=1)]


class AdminInfo(BaseModel):
    username: str
    display_name: str


class LoginResponse(BaseModel):
    success: bool = True
    message: str = "Login successful"
    token: str
    admin: AdminInfo


class ReportListItem(BaseModel):
    """Report row for the dashboard list. Omits the full description."""

    id: str
    category: Category
    severity: Severity
    summary: str
    status: ReportStatus
    created_at: datetime
    ai_analyzed: bool

    @classmethod
    def from_report(cls, report: Report) -> "ReportListItem":
        return cls(
            id=report.id,
            category=report.analysis.category,
            severity=report.analysis.severity,
            summary=report.analysis.summary,
            status=report.status,
            created_at=report.created_at,
            ai_analyzed=report.analysis.analyzed,
        )


class Pagination(BaseModel):
    current_page: int
    total_pages: int
    total_count: int
    has_next_page: bool
    has_prev_page: bool

    @classmethod
    def build(cls, page: int, limit: int, total_count: int) -> "Pagination":
        total_pages = -(-total_count // limit)  # ceil
        return cls(
            current_page=page,
            total_pages=total_pages,
            total_count=total_count,
            has_next_page=page < total_pages,
            has_prev_page=page > 1,
        )


class ListReportsResponse(BaseModel):
    """Response for listing reports with pagination."""

    reports: List[ReportListItem]
    pagination: Pagination


class ReportDetail(BaseModel):
    """Full report for the detail view."""

    id: str
    description: str
    user_selected_category: Optional[ReporterCategory]
    category: Category
    severity: Severity
    summary: str
    suggestions: List[Suggestion]
    status: ReportStatus
    admin_notes: str
    created_at: datetime
    updated_at: datetime
    ai_analyzed: bool

    @classmethod
    def from_report(cls, report: Report) -> "ReportDetail":
        return cls(
            id=report.id,
            description=report.description,
            user_selected_category=report.user_selected_category,
            category=report.analysis.category,
            severity=report.analysis.severity,
            summary=report.analysis.summary,
            suggestions=report.analysis.suggestions,
            status=report.status,
            admin_notes=report.admin_notes,
            created_at=report.created_at,
            updated_at=report.updated_at,
            ai_analyzed=report.analysis.analyzed,
        )


class UpdateReportRequest(BaseModel):
    """Request to update report status and/or notes."""

    status: Optional[ReportStatus] = Field(default=None, description="New workflow status")
    admin_notes: Optional[str] = Field(default=None, description="Replacement admin notes")


class UpdatedReport(BaseModel):
    id: str
    status: ReportStatus
    admin_notes: str


class UpdateReportResponse(BaseModel):
    success: bool = True
    message: str = "Report updated successfully"
    data: UpdatedReport


class ReportStatsResponse(BaseModel):
    """Dashboard statistics for reports."""

    total_reports: int = Field(..., description="Total number of reports")
    new_reports: int = Field(..., description="Reports not yet reviewed")
    by_category: Dict[str, int] = Field(default_factory=dict)
    by_severity: Dict[str, int] = Field(default_factory=dict)
    by_status: Dict[str, int] = Field(default_factory=dict)

    class Config:
        json_schema_extra = {
            "example": {
                "total_reports": 42,
                "new_reports": 7,
                "by_category": {"harassment": 15, "corruption": 9, "unknown": 3},
                "by_severity": {"high": 10, "medium": 20, "low": 9, "unknown": 3},
                "by_status": {"new": 7, "reviewing": 5, "resolved": 30},
            }
        }
