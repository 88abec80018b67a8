"""
Report submission request/response schemas.
"""

from typing import Annotated, List, Optional

from pydantic import BaseModel, Field, StringConstraints

from models.analysis import Category, Severity, Suggestion
from models.report import DESCRIPTION_MAX_LENGTH, DESCRIPTION_MIN_LENGTH, ReporterCategory

Description = Annotated[
    str,
    StringConstraints(
        strip_whitespace=True,
        min_length=DESCRIPTION_MIN_LENGTH,
        max_length=DESCRIPTION_MAX_LENGTH,
    ),
]


class SubmitReportRequest(BaseModel):
    """Anonymous report submission."""

    description: Description = Field(..., description="What happened (10-5000 characters)")
    category: Optional[ReporterCategory] = Field(
        default=None, description="Optional category chosen by the reporter"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "description": "A city official asked me for cash to approve my permit.",
                "category": "corruption",
            }
        }


class SubmittedReport(BaseModel):
    """What the reporter sees after submitting."""

    id: str
    category: Category
    severity: Severity
    summary: str
    suggestions: List[Suggestion]
    analyzed_by_ai: bool


class SubmitReportResponse(BaseModel):
    success: bool = True
    message: str
    report: SubmittedReport
