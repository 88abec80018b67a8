"""
Data models for SafeSpeak.
"""

from .analysis import AnalysisResult, Suggestion
from .report import Report
from .admin import Admin

__all__ = [
    "AnalysisResult",
    "Suggestion",
    "Report",
    "Admin",
]
