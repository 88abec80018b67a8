"""
Public report submission API router. No authentication: reports are anonymous.
"""

import logging

from fastapi import APIRouter, Depends

from api.dependencies import get_report_analyzer, get_report_repository
from api.reports.schemas import SubmitReportRequest, SubmitReportResponse, SubmittedReport
from models.report import Report
from repositories.report import ReportRepository
from services.report_analyzer import ReportAnalyzer

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/report",
    tags=["reports"],
)

SUBMITTED_MESSAGE = "Your report has been submitted successfully. Thank you for speaking up."


@router.post("", response_model=SubmitReportResponse, status_code=201)
async def submit_report(
    request: SubmitReportRequest,
    analyzer: ReportAnalyzer = Depends(get_report_analyzer),
    report_repo: ReportRepository = Depends(get_report_repository),
):
    """
    Submit an anonymous incident report.

    The report is analyzed (or given the fallback analysis) and stored.
    Analysis failures never fail the submission.
    """
    logger.info("New report received (length: %d chars)", len(request.description))

    analysis = await analyzer.analyze(request.description)

    report = await report_repo.create(
        Report(
            description=request.description,
            user_selected_category=request.category,
            analysis=analysis,
        )
    )
    logger.info("Report saved with ID: %s", report.id)

    return SubmitReportResponse(
        message=SUBMITTED_MESSAGE,
        report=SubmittedReport(
            id=report.id,
            category=report.analysis.category,
            severity=report.analysis.severity,
            summary=report.analysis.summary,
            suggestions=report.analysis.suggestions,
            analyzed_by_ai=report.analysis.analyzed,
        ),
    )
