"""
Services layer for SafeSpeak.
"""

from .model_client import GenerativeModelClient, GeminiModelClient
from .report_analyzer import (
    AnalyzerStatus,
    ReportAnalyzer,
    create_report_analyzer,
    fallback_analysis,
)
from .auth import (
    InvalidTokenError,
    TokenExpiredError,
    authenticate_admin,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)

__all__ = [
    "GenerativeModelClient",
    "GeminiModelClient",
    "AnalyzerStatus",
    "ReportAnalyzer",
    "create_report_analyzer",
    "fallback_analysis",
    "InvalidTokenError",
    "TokenExpiredError",
    "authenticate_admin",
    "create_access_token",
    "decode_access_token",
    "hash_password",
    "verify_password",
]
