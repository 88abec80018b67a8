"""
Analysis block produced by the report analyzer and embedded in every report.
"""

from typing import Literal

from pydantic import BaseModel, Field

Category = Literal["harassment", "corruption", "abuse", "discrimination", "other", "unknown"]
Severity = Literal["low", "medium", "high", "critical", "unknown"]
SuggestionType = Literal["ngo", "legal", "hotline", "journalist", "government", "other"]

# Values the model is allowed to emit; "unknown" is reserved for the fallback.
MODEL_CATEGORIES = ("harassment", "corruption", "abuse", "discrimination", "other")
MODEL_SEVERITIES = ("low", "medium", "high", "critical")
MODEL_SUGGESTION_TYPES = ("ngo", "legal", "hotline", "journalist", "government")

SUMMARY_MAX_LENGTH = 500


class Suggestion(BaseModel):
    """One recommended resource returned alongside an analysis."""

    type: SuggestionType = Field(default="other", description="Kind of resource")
    name: str = Field(default="Resource", description="Organization or resource name")
    description: str = Field(default="", description="How the resource can help")
    contact: str = Field(default="", description="Phone, URL or email")


class AnalysisResult(BaseModel):
    """
    Structured analysis of a report.

    analyzed=False means the fixed fallback payload was used, in which case
    category and severity are always "unknown".
    """

    analyzed: bool = Field(default=False, description="True if produced by the AI model")
    category: Category = Field(default="unknown")
    severity: Severity = Field(default="unknown")
    summary: str = Field(default="", max_length=SUMMARY_MAX_LENGTH)
    suggestions: list[Suggestion] = Field(default_factory=list)

    class Config:
        json_schema_extra = {
            "example": {
                "analyzed": True,
                "category": "harassment",
                "severity": "high",
                "summary": "Repeated intimidation by a supervisor at work.",
                "suggestions": [
                    {
                        "type": "legal",
                        "name": "Employment Rights Clinic",
                        "description": "Free advice on workplace harassment claims",
                        "contact": "https://example.org/clinic",
                    }
                ],
            }
        }
