import asyncio
import time

import pytest

from fakes import WELL_FORMED_RESPONSE, FailingModelClient, FakeModelClient, HangingModelClient
from services.report_analyzer import (
    ANALYSIS_PROMPT,
    DEFAULT_SUMMARY,
    FALLBACK_SUMMARY,
    MalformedResponseError,
    ReportAnalyzer,
    create_report_analyzer,
    extract_json_object,
    fallback_analysis,
    parse_analysis,
)

REPORT_TEXT = "My supervisor keeps threatening to fire me if I don't work unpaid overtime."


def analyze(analyzer: ReportAnalyzer, text: str = REPORT_TEXT):
    return asyncio.run(analyzer.analyze(text))


def test_fallback_payload_shape():
    """The fallback is unanalyzed, unknown/unknown, with the three canned resources."""
    result = fallback_analysis()

    assert result.analyzed is False
    assert result.category == "unknown"
    assert result.severity == "unknown"
    assert result.summary == FALLBACK_SUMMARY
    assert [s.type for s in result.suggestions] == ["hotline", "ngo", "legal"]
    assert result.suggestions[0].name == "National Human Rights Helpline"


def test_fallback_payload_is_a_fresh_copy():
    first = fallback_analysis()
    first.suggestions.clear()

    assert len(fallback_analysis().suggestions) == 3


def test_unconfigured_analyzer_never_calls_model():
    analyzer = ReportAnalyzer(client=None)

    result = analyze(analyzer)

    assert result == fallback_analysis()


def test_get_status_without_credential():
    analyzer = create_report_analyzer(api_key="")

    status = analyzer.get_status()

    assert status.configured is False
    assert status.provider == "Google Gemini"
    assert status.model == "gemini-2.5-flash"


def test_get_status_makes_no_model_call():
    client = FakeModelClient()
    analyzer = ReportAnalyzer(client=client)

    status = analyzer.get_status()

    assert status.configured is True
    assert status.provider == "Fake Provider"
    assert client.call_count == 0


def test_well_formed_response():
    client = FakeModelClient(WELL_FORMED_RESPONSE)
    analyzer = ReportAnalyzer(client=client)

    result = analyze(analyzer)

    assert result.analyzed is True
    assert result.category == "harassment"
    assert result.severity == "high"
    assert len(result.suggestions) == 1
    suggestion = result.suggestions[0]
    assert (suggestion.type, suggestion.name, suggestion.description, suggestion.contact) == (
        "legal",
        "X",
        "Y",
        "Z",
    )
    assert client.call_count == 1


def test_prompt_is_template_followed_by_report():
    client = FakeModelClient()
    analyzer = ReportAnalyzer(client=client)

    analyze(analyzer)

    assert client.prompts == [ANALYSIS_PROMPT + REPORT_TEXT]


def test_prompt_restricts_categories_and_severities():
    for value in ("harassment", "corruption", "abuse", "discrimination", "other"):
        assert f'"{value}"' in ANALYSIS_PROMPT
    for value in ("low", "medium", "high", "critical"):
        assert f'"{value}"' in ANALYSIS_PROMPT
    assert "Respond ONLY with valid JSON" in ANALYSIS_PROMPT


def test_missing_severity_returns_exact_fallback():
    reply = '{"category":"abuse","summary":"s","suggestions":[]}'
    analyzer = ReportAnalyzer(client=FakeModelClient(reply))

    assert analyze(analyzer) == fallback_analysis()


def test_prose_wrapped_json_is_extracted():
    reply = 'Here you go: {"category":"abuse","severity":"low","suggestions":[]}'
    analyzer = ReportAnalyzer(client=FakeModelClient(reply))

    result = analyze(analyzer)

    assert result.analyzed is True
    assert result.category == "abuse"
    assert result.severity == "low"
    assert result.suggestions == []
    assert result.summary == DEFAULT_SUMMARY


def test_markdown_fenced_json_is_extracted():
    reply = '```json\n{"category":"corruption","severity":"medium","summary":"Bribe.","suggestions":[]}\n```'
    analyzer = ReportAnalyzer(client=FakeModelClient(reply))

    result = analyze(analyzer)

    assert result.category == "corruption"
    assert result.summary == "Bribe."


@pytest.mark.parametrize(
    "reply",
    [
        "I cannot help with that.",
        "{not json at all}",
        '["category", "abuse"]',
        '{"category":"abuse","severity":"low"}',
        '{"category":"","severity":"low","suggestions":[]}',
        '{"category":"abuse","severity":"low","suggestions":"call someone"}',
        '{"category":"abuse","severity":"low","suggestions":["a hotline"]}',
        pytest.param(
            '{"category":"abuse","severity":"low","suggestions":' + "[" * 100000 + "]" * 100000 + "}",
            id="deeply-nested",
        ),
        pytest.param(
            '{"category":' + "9" * 5000 + ',"severity":"low","suggestions":[]}',
            id="oversized-integer",
        ),
    ],
)
def test_malformed_responses_fall_back(reply):
    analyzer = ReportAnalyzer(client=FakeModelClient(reply))

    assert analyze(analyzer) == fallback_analysis()


@pytest.mark.parametrize(
    "reply",
    [
        '{"category":"terrorism","severity":"low","suggestions":[]}',
        '{"category":"unknown","severity":"low","suggestions":[]}',
        '{"category":"abuse","severity":"extreme","suggestions":[]}',
    ],
)
def test_out_of_enumeration_values_fall_back(reply):
    analyzer = ReportAnalyzer(client=FakeModelClient(reply))

    assert analyze(analyzer) == fallback_analysis()


def test_suggestion_defaults_are_applied():
    reply = (
        '{"category":"discrimination","severity":"critical","summary":"s",'
        '"suggestions":[{"name":"Equality Office"},{"type":"charity"}]}'
    )

    result = parse_analysis(reply)

    first, second = result.suggestions
    assert (first.type, first.name, first.description, first.contact) == (
        "other",
        "Equality Office",
        "",
        "",
    )
    assert second.type == "other"
    assert second.name == "Resource"


def test_long_summary_is_truncated():
    reply = '{"category":"other","severity":"low","summary":"%s","suggestions":[]}' % ("x" * 800)

    result = parse_analysis(reply)

    assert len(result.summary) == 500


def test_extract_json_object_without_braces():
    with pytest.raises(MalformedResponseError):
        extract_json_object("no json here")


def test_transport_failure_falls_back():
    client = FailingModelClient()
    analyzer = ReportAnalyzer(client=client)

    assert analyze(analyzer) == fallback_analysis()
    assert client.call_count == 1


def test_hanging_model_times_out_with_fallback():
    client = HangingModelClient()
    analyzer = ReportAnalyzer(client=client, timeout=0.3)

    started = time.monotonic()
    result = analyze(analyzer)
    elapsed = time.monotonic() - started

    assert result == fallback_analysis()
    assert elapsed >= 0.3
    assert elapsed < 2.0
    assert client.cancelled is True


def test_concurrent_calls_are_independent():
    analyzer = ReportAnalyzer(client=FakeModelClient())

    async def run_many():
        return await asyncio.gather(*(analyzer.analyze(f"{REPORT_TEXT} #{i}") for i in range(5)))

    results = asyncio.run(run_many())

    assert all(r.category == "harassment" for r in results)
    assert analyzer.client.call_count == 5


def test_extract_json_object_rejects_deep_nesting():
    text = '{"suggestions":' + "[" * 100000 + "]" * 100000 + "}"

    with pytest.raises(MalformedResponseError):
        extract_json_object(text)
