"""
Report model - anonymous incident reports.

Reports never carry reporter-identifying data (name, email, IP, device).
"""

from datetime import datetime, timezone
from typing import Annotated, Literal, Optional

from pydantic import BaseModel, BeforeValidator, Field

from .analysis import AnalysisResult

# ObjectIds are kept as strings on the models; repositories convert back.
PyObjectId = Annotated[str, BeforeValidator(str)]

ReportStatus = Literal["new", "reviewing", "resolved", "archived"]
ReporterCategory = Literal["harassment", "corruption", "abuse", "discrimination", "other"]

DESCRIPTION_MIN_LENGTH = 10
DESCRIPTION_MAX_LENGTH = 5000


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Report(BaseModel):
    """An incident report together with its analysis and triage state."""

    id: Optional[PyObjectId] = Field(default=None, alias="_id")
    description: str = Field(
        ...,
        min_length=DESCRIPTION_MIN_LENGTH,
        max_length=DESCRIPTION_MAX_LENGTH,
        description="Incident description provided by the reporter",
    )
    user_selected_category: Optional[ReporterCategory] = Field(
        default=None, description="Category picked by the reporter, if any"
    )
    analysis: AnalysisResult = Field(default_factory=AnalysisResult)

    status: ReportStatus = Field(default="new", description="Admin workflow status")
    admin_notes: str = Field(default="", description="Internal notes, never shown to reporters")

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "description": "My manager has been threatening to fire me unless I ...",
                "user_selected_category": "harassment",
                "analysis": {
                    "analyzed": True,
                    "category": "harassment",
                    "severity": "high",
                    "summary": "Workplace intimidation with threats of dismissal.",
                    "suggestions": [],
                },
                "status": "new",
                "admin_notes": "",
                "created_at": "2024-01-10T12:00:00Z",
                "updated_at": "2024-01-10T12:00:00Z",
            }
        }
