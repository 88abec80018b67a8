"""
Admin API router - login and report triage.
"""

import logging
from typing import Optional

from bson import ObjectId
from fastapi import APIRouter, Depends, HTTPException, Query

from api.admin.schemas import (
    AdminInfo,
    ListReportsResponse,
    LoginRequest,
    LoginResponse,
    Pagination,
    ReportDetail,
    ReportListItem,
    ReportStatsResponse,
    UpdatedReport,
    UpdateReportRequest,
    UpdateReportResponse,
)
from api.dependencies import get_admin_repository, get_report_repository, require_admin
from models.admin import Admin
from models.analysis import Category
from models.report import ReportStatus
from repositories.admin import AdminRepository
from repositories.report import ReportRepository
from services.auth import authenticate_admin, create_access_token

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/admin",
    tags=["admin"],
)


@router.post("/login", response_model=LoginResponse)
async def login(
    request: LoginRequest,
    admin_repo: AdminRepository = Depends(get_admin_repository),
):
    """
    Authenticate an admin and return a bearer token.

    Unknown username and wrong password get the same 401 so the response
    doesn't reveal which usernames exist.
    """
    admin = await authenticate_admin(admin_repo, request.username, request.password)
    if not admin:
        raise HTTPException(status_code=401, detail="Invalid username or password")

    return LoginResponse(
        token=create_access_token(admin),
        admin=AdminInfo(username=admin.username, display_name=admin.display_name),
    )


@router.get("/reports", response_model=ListReportsResponse)
async def list_reports(
    category: Optional[Category] = Query(None, description="Filter by AI category"),
    status: Optional[ReportStatus] = Query(None, description="Filter by status"),
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(20, ge=1, le=100, description="Reports per page"),
    report_repo: ReportRepository = Depends(get_report_repository),
    _admin: Admin = Depends(require_admin),
):
    """
    List reports with filtering and pagination.

    Results are sorted by creation time (newest first).
    """
    reports = await report_repo.find_filtered(
        category=category, status=status, skip=(page - 1) * limit, limit=limit
    )
    total = await report_repo.count(report_repo.build_filter(category, status))

    return ListReportsResponse(
        reports=[ReportListItem.from_report(report) for report in reports],
        pagination=Pagination.build(page=page, limit=limit, total_count=total),
    )


@router.get("/reports/{report_id}", response_model=ReportDetail)
async def get_report(
    report_id: str,
    report_repo: ReportRepository = Depends(get_report_repository),
    _admin: Admin = Depends(require_admin),
):
    """
    Get a single report by ID.

    Returns 404 if report not found.
    """
    if not ObjectId.is_valid(report_id):
        raise HTTPException(status_code=400, detail="Invalid report ID format")

    report = await report_repo.find_by_id(report_id)
    if not report:
        raise HTTPException(status_code=404, detail="Report not found")

    return ReportDetail.from_report(report)


@router.patch("/reports/{report_id}", response_model=UpdateReportResponse)
async def update_report(
    report_id: str,
    request: UpdateReportRequest,
    report_repo: ReportRepository = Depends(get_report_repository),
    admin: Admin = Depends(require_admin),
):
    """
    Update a report's status and/or admin notes.
    """
    if not ObjectId.is_valid(report_id):
        raise HTTPException(status_code=400, detail="Invalid report ID format")

    if request.status is None and request.admin_notes is None:
        raise HTTPException(
            status_code=400, detail="Please provide status or admin_notes to update"
        )

    report = await report_repo.update_triage(
        report_id, status=request.status, admin_notes=request.admin_notes
    )
    if not report:
        raise HTTPException(status_code=404, detail="Report not found")

    logger.info("Report %s updated by %s", report.id, admin.username)

    return UpdateReportResponse(
        data=UpdatedReport(id=report.id, status=report.status, admin_notes=report.admin_notes)
    )


@router.get("/stats", response_model=ReportStatsResponse)
async def get_report_stats(
    report_repo: ReportRepository = Depends(get_report_repository),
    _admin: Admin = Depends(require_admin),
):
    """
    Get dashboard statistics.

    Returns total and new counts plus breakdowns by category, severity and status.
    """
    total_reports = await report_repo.count()
    new_reports = await report_repo.count({"status": "new"})

    return ReportStatsResponse(
        total_reports=total_reports,
        new_reports=new_reports,
        by_category=await report_repo.count_by("analysis.category"),
        by_severity=await report_repo.count_by("analysis.severity"),
        by_status=await report_repo.count_by("status"),
    )
