"""
Report Analyzer - categorizes and summarizes incident reports with a
generative model, falling back to a fixed payload whenever the model is
unavailable or its answer cannot be trusted.
"""

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from models.analysis import (
    MODEL_CATEGORIES,
    MODEL_SEVERITIES,
    MODEL_SUGGESTION_TYPES,
    SUMMARY_MAX_LENGTH,
    AnalysisResult,
    Suggestion,
)
from services.model_client import GeminiModelClient, GenerativeModelClient

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
DEFAULT_SUMMARY = "Analysis completed"

ANALYSIS_PROMPT = """You are a compassionate safety analyst helping anonymous reporters.
Analyze the following incident report and provide structured guidance.

IMPORTANT RULES:
- Be supportive and non-judgmental
- Focus on actionable next steps
- Suggest relevant resources (NGOs, legal aid, hotlines)
- Keep suggestions practical and accessible

Respond ONLY with valid JSON in this exact format:
{
  "category": "harassment" | "corruption" | "abuse" | "discrimination" | "other",
  "severity": "low" | "medium" | "high" | "critical",
  "summary": "Brief 1-2 sentence summary of the incident",
  "suggestions": [
    {
      "type": "ngo" | "legal" | "hotline" | "journalist" | "government",
      "name": "Organization or resource name",
      "description": "Brief description of how they can help",
      "contact": "Website, phone, or email"
    }
  ]
}

CATEGORY GUIDELINES:
- harassment: Workplace bullying, sexual harassment, intimidation
- corruption: Bribery, fraud, misuse of power, financial crimes
- abuse: Physical, emotional, or psychological harm
- discrimination: Bias based on race, gender, religion, disability, etc.
- other: Doesn't fit above categories

SEVERITY GUIDELINES:
- low: Minor issues, no immediate danger
- medium: Significant concern, should be addressed soon
- high: Serious situation, needs prompt attention
- critical: Immediate danger or ongoing harm

INCIDENT REPORT:
"""

FALLBACK_SUMMARY = (
    "Your report has been received. Our automated analysis is temporarily "
    "unavailable, but your report will be reviewed by our team."
)

FALLBACK_SUGGESTIONS = (
    {
        "type": "hotline",
        "name": "National Human Rights Helpline",
        "description": "General support for human rights issues",
        "contact": "1800-XXX-XXXX (toll-free)",
    },
    {
        "type": "ngo",
        "name": "Local Support Services",
        "description": "Connect with local NGOs that can provide guidance",
        "contact": "Visit your local community center",
    },
    {
        "type": "legal",
        "name": "Free Legal Aid",
        "description": "Many areas offer free legal consultation",
        "contact": 'Search "free legal aid" + your location',
    },
)


class MalformedResponseError(ValueError):
    """The model reply could not be turned into a trusted analysis."""


@dataclass(frozen=True)
class AnalyzerStatus:
    """Health-check view of the analyzer."""

    configured: bool
    provider: str
    model: str


def fallback_analysis() -> AnalysisResult:
    """Build a fresh copy of the fixed fallback payload."""
    return AnalysisResult(
        analyzed=False,
        category="unknown",
        severity="unknown",
        summary=FALLBACK_SUMMARY,
        suggestions=[Suggestion(**s) for s in FALLBACK_SUGGESTIONS],
    )


def extract_json_object(text: str) -> Dict[str, Any]:
    """
    Pull the JSON object out of a model reply that may be wrapped in prose
    or a markdown fence.

    Args:
        text: Raw model reply

    Returns:
        Parsed JSON object

    Raises:
        MalformedResponseError: no object found or it does not parse
    """
    if not isinstance(text, str):
        raise MalformedResponseError("Response is not text")

    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end < start:
        raise MalformedResponseError("No JSON found in response")

    try:
        parsed = json.loads(text[start : end + 1])
    except (ValueError, RecursionError) as e:
        # ValueError covers JSONDecodeError and over-long integers, RecursionError deep nesting
        raise MalformedResponseError(f"Invalid JSON in response: {type(e).__name__}") from e

    if not isinstance(parsed, dict):
        raise MalformedResponseError("Response JSON is not an object")
    return parsed


def parse_analysis(text: str) -> AnalysisResult:
    """
    Turn a raw model reply into an AnalysisResult.

    Every check is all-or-nothing: a single missing or out-of-range field
    rejects the whole reply.

    Args:
        text: Raw model reply

    Returns:
        AnalysisResult with analyzed=True

    Raises:
        MalformedResponseError: reply failed any check
    """
    data = extract_json_object(text)

    missing = [key for key in ("category", "severity", "suggestions") if not _present(data.get(key))]
    if missing:
        raise MalformedResponseError(f"Missing required fields: {', '.join(missing)}")

    category = data["category"]
    severity = data["severity"]
    if category not in MODEL_CATEGORIES:
        raise MalformedResponseError(f"Unexpected category: {category!r}")
    if severity not in MODEL_SEVERITIES:
        raise MalformedResponseError(f"Unexpected severity: {severity!r}")

    raw_suggestions = data["suggestions"]
    if not isinstance(raw_suggestions, list):
        raise MalformedResponseError("suggestions is not a list")

    suggestions = []
    for raw in raw_suggestions:
        if not isinstance(raw, dict):
            raise MalformedResponseError(f"Suggestion is not an object: {raw!r}")
        suggestion_type = raw.get("type")
        suggestions.append(
            Suggestion(
                type=suggestion_type if suggestion_type in MODEL_SUGGESTION_TYPES else "other",
                name=_text(raw.get("name")) or "Resource",
                description=_text(raw.get("description")),
                contact=_text(raw.get("contact")),
            )
        )

    summary = _text(data.get("summary")) or DEFAULT_SUMMARY

    return AnalysisResult(
        analyzed=True,
        category=category,
        severity=severity,
        summary=summary[:SUMMARY_MAX_LENGTH],
        suggestions=suggestions,
    )


def _present(value: Any) -> bool:
    # Empty list is a valid "no suggestions" answer
    return value is not None and value != ""


def _text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


class ReportAnalyzer:
    """
    Analyzes incident reports.

    analyze() never raises and never waits longer than the configured
    timeout. Holds only read-only configuration, so one instance can serve
    concurrent requests.
    """

    def __init__(
        self,
        client: Optional[GenerativeModelClient] = None,
        timeout: float = DEFAULT_TIMEOUT,
        provider_name: str = GeminiModelClient.provider_name,
        model_id: str = "gemini-2.5-flash",
    ):
        """
        Initialize the analyzer.

        Args:
            client: Model client, or None to always use the fallback
            timeout: Seconds to wait for the model before falling back
            provider_name: Reported by get_status() when no client is set
            model_id: Reported by get_status() when no client is set
        """
        self.client = client
        self.timeout = timeout
        self.provider_name = client.provider_name if client else provider_name
        self.model_id = client.model_id if client else model_id

    @property
    def configured(self) -> bool:
        return self.client is not None

    def get_status(self) -> AnalyzerStatus:
        """Report configuration without calling the model."""
        return AnalyzerStatus(
            configured=self.configured,
            provider=self.provider_name,
            model=self.model_id,
        )

    def build_prompt(self, text: str) -> str:
        return ANALYSIS_PROMPT + text

    async def analyze(self, text: str) -> AnalysisResult:
        """
        Analyze a report.

        Args:
            text: Report description

        Returns:
            Model analysis, or the fallback payload on any failure
        """
        if self.client is None:
            logger.info("AI not configured, using fallback analysis")
            return fallback_analysis()

        logger.info("Sending report to %s for analysis (length: %d chars)", self.provider_name, len(text))

        try:
            # wait_for cancels the model call if the deadline wins
            response_text = await asyncio.wait_for(
                self.client.generate(self.build_prompt(text)), timeout=self.timeout
            )
        except asyncio.TimeoutError:
            logger.warning("AI analysis timed out after %.1fs, using fallback", self.timeout)
            return fallback_analysis()
        except Exception as e:
            logger.warning("AI request failed, using fallback: %s", e)
            return fallback_analysis()

        try:
            result = parse_analysis(response_text)
        except MalformedResponseError as e:
            logger.warning("Failed to parse AI response: %s", e)
            logger.debug("Raw response: %s", str(response_text)[:200])
            return fallback_analysis()
        except ValueError as e:
            # pydantic validation of normalized fields
            logger.warning("AI response failed validation: %s", e)
            return fallback_analysis()

        logger.info("AI analysis completed (category=%s, severity=%s)", result.category, result.severity)
        return result


def create_report_analyzer(
    api_key: Optional[str],
    model_id: str = "gemini-2.5-flash",
    timeout: float = DEFAULT_TIMEOUT,
) -> ReportAnalyzer:
    """
    Build the analyzer for application startup.

    Args:
        api_key: Gemini API key; empty or None means fallback-only mode
        model_id: Gemini model identifier
        timeout: Seconds to wait for the model

    Returns:
        Configured ReportAnalyzer
    """
    if not api_key:
        logger.warning("GEMINI_API_KEY not set - reports will use fallback analysis")
        return ReportAnalyzer(client=None, timeout=timeout, model_id=model_id)

    client = GeminiModelClient(api_key=api_key, model_id=model_id)
    logger.info("Gemini AI service initialized (model=%s)", model_id)
    return ReportAnalyzer(client=client, timeout=timeout)
