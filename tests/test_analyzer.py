"""Tests for the analyzer module."""

import json
from unittest.mock import AsyncMock, patch

import pytest

from appstore_compliance.analyzer import (
    EMPTY_MESSAGE_ERROR,
    GENERIC_ERROR,
    UNEXPECTED_FORMAT_ERROR,
    Analyzer,
    classify_response,
    is_structured_result,
    normalize_result,
)
from appstore_compliance.history import HistoryStore
from appstore_compliance.models import CheckStatus, ReadinessStatus


def envelope(result, message=None):
    response = {"result": result}
    if message is not None:
        response["message"] = message
    return {"success": True, "response": response}


REPORT = {
    "compliance_score": 72,
    "risk_summary": {"high": 1, "medium": 0, "low": 2},
    "categories": [
        {
            "category_name": "Privacy",
            "violations": [{"title": "No ATT", "severity": "HIGH"}],
        }
    ],
}


def make_analyzer(response=None, side_effect=None, history=None):
    transport = AsyncMock()
    transport.call = AsyncMock(return_value=response, side_effect=side_effect)
    return Analyzer(transport, "agent-1", history=history), transport


class TestNormalizeResult:
    def test_fills_defaults(self):
        result = normalize_result({"compliance_score": 40})
        assert result.compliance_score == 40
        assert result.categories == []
        assert result.priority_fixes == []
        assert result.risk_summary.high == 0
        assert result.readiness_checklist is None
        assert result.overall_assessment == ""

    def test_readiness_derived_from_score(self):
        assert normalize_result({"compliance_score": 90}).readiness_status == ReadinessStatus.ready
        assert normalize_result({"compliance_score": 60}).readiness_status == ReadinessStatus.needs_fixes
        assert normalize_result({"compliance_score": 10}).readiness_status == ReadinessStatus.high_risk

    def test_agent_readiness_kept(self):
        result = normalize_result({"compliance_score": 10, "readiness_status": "ready"})
        assert result.readiness_status == ReadinessStatus.ready

    def test_score_clamped_and_coerced(self):
        assert normalize_result({"compliance_score": "150"}).compliance_score == 100
        assert normalize_result({"compliance_score": -3}).compliance_score == 0
        assert normalize_result({"compliance_score": None}).compliance_score == 0

    @pytest.mark.parametrize(
        "value",
        ["1e999", "Infinity", "-inf", "nan", float("inf"), float("-inf"), float("nan"), [1], {}],
    )
    def test_non_finite_numbers_become_zero(self, value):
        result = normalize_result({
            "compliance_score": value,
            "risk_summary": {"high": value},
            "priority_fixes": [{"priority": value}],
        })
        assert result.compliance_score == 0
        assert result.risk_summary.high == 0
        assert result.priority_fixes[0].priority == 0

    def test_null_and_wrong_typed_fields(self):
        result = normalize_result({
            "compliance_score": 50,
            "categories": [{"category_name": None, "violations": None}, "junk"],
            "risk_summary": "high",
            "priority_fixes": None,
        })
        assert [c.category_name for c in result.categories] == ["", ""]
        assert result.categories[0].violations == []
        assert result.risk_summary.low == 0

    def test_severity_lowercased(self):
        result = normalize_result(REPORT)
        assert result.categories[0].violations[0].severity == "high"

    def test_unknown_checklist_status(self):
        result = normalize_result({
            "compliance_score": 50,
            "readiness_checklist": [{"item": "Icon", "status": "maybe"}, {"item": "Name", "status": "PASS"}],
        })
        assert [i.status for i in result.readiness_checklist] == [
            CheckStatus.not_applicable,
            CheckStatus.passed,
        ]


class TestClassifyResponse:
    def test_structured_dict(self):
        outcome = classify_response(envelope(REPORT))
        assert outcome.ok
        assert outcome.result.compliance_score == 72

    def test_json_string_result(self):
        outcome = classify_response(envelope(json.dumps(REPORT)))
        assert outcome.ok
        assert outcome.result.compliance_score == 72

    def test_empty_object_is_unexpected(self):
        outcome = classify_response(envelope({}))
        assert outcome.error == UNEXPECTED_FORMAT_ERROR

    def test_text_response_truncated(self):
        text = "I cannot analyze this. " * 50
        outcome = classify_response(envelope("not json at all", message=text))
        assert not outcome.ok
        assert outcome.error.startswith(
            "Received text response instead of structured data. The agent responded: "
        )
        assert outcome.error.endswith(text[:500])

    def test_plain_text_result(self):
        outcome = classify_response(envelope("Sorry, no."))
        assert outcome.error.endswith("The agent responded: Sorry, no.")

    def test_failed_envelope_uses_error(self):
        outcome = classify_response({"success": False, "error": "quota exceeded"})
        assert outcome.error == "quota exceeded"

    def test_failed_envelope_without_error(self):
        assert classify_response({"success": False}).error == "Analysis failed"

    def test_non_dict_envelope(self):
        assert classify_response(None).error == "Analysis failed"

    def test_is_structured_result(self):
        assert is_structured_result({"categories": []})
        assert not is_structured_result({"text": "hi"})
        assert not is_structured_result([1, 2])


class TestAnalyzer:
    @pytest.mark.asyncio
    async def test_empty_message(self):
        analyzer, transport = make_analyzer()
        outcome = await analyzer.analyze("   ", "App")
        assert outcome.error == EMPTY_MESSAGE_ERROR
        transport.call.assert_not_called()

    @pytest.mark.asyncio
    async def test_success_records_history(self, tmp_path):
        store = HistoryStore(tmp_path / "history.json")
        analyzer, transport = make_analyzer(envelope(REPORT), history=store)
        outcome = await analyzer.analyze("## App Description\nHi", "PhotoSync")

        assert outcome.ok
        assert outcome.entry.app_name == "PhotoSync"
        assert outcome.entry.high_count == 1
        assert store.entries[0].id == outcome.entry.id
        transport.call.assert_awaited_once_with("## App Description\nHi", "agent-1")

    @pytest.mark.asyncio
    async def test_transport_exception_is_generic_error(self, tmp_path):
        store = HistoryStore(tmp_path / "history.json")
        analyzer, _ = make_analyzer(side_effect=RuntimeError("boom"), history=store)
        outcome = await analyzer.analyze("msg", "App")
        assert outcome.error == GENERIC_ERROR
        assert store.entries == []

    @pytest.mark.asyncio
    async def test_failure_not_recorded(self, tmp_path):
        store = HistoryStore(tmp_path / "history.json")
        analyzer, _ = make_analyzer({"success": False, "error": "nope"}, history=store)
        outcome = await analyzer.analyze("msg", "App")
        assert outcome.error == "nope"
        assert store.entries == []

    @pytest.mark.asyncio
    async def test_nan_score_in_json_text(self, tmp_path):
        store = HistoryStore(tmp_path / "history.json")
        analyzer, _ = make_analyzer(
            envelope('{"compliance_score": NaN, "risk_summary": {"high": Infinity}}'),
            history=store,
        )
        outcome = await analyzer.analyze("msg", "App")

        assert outcome.ok
        assert outcome.result.compliance_score == 0
        assert outcome.result.risk_summary.high == 0

    @pytest.mark.asyncio
    async def test_classification_failure_is_generic_error(self):
        analyzer, _ = make_analyzer(envelope(REPORT))
        with patch(
            "appstore_compliance.analyzer.classify_response", side_effect=RuntimeError("bad")
        ):
            outcome = await analyzer.analyze("msg", "App")
        assert outcome.error == GENERIC_ERROR

    @pytest.mark.asyncio
    async def test_history_newest_first(self, tmp_path):
        path = tmp_path / "history.json"
        store = HistoryStore(path)
        for name in ("First", "Second", "Third"):
            analyzer, _ = make_analyzer(envelope(REPORT), history=store)
            await analyzer.analyze("msg", name)
        assert [e.app_name for e in store.entries] == ["Third", "Second", "First"]

        reloaded = HistoryStore(path).load()
        assert len(reloaded) == 3
        assert [e.app_name for e in reloaded] == ["Third", "Second", "First"]
        assert all(e.result.compliance_score == 72 for e in reloaded)

    @pytest.mark.asyncio
    async def test_status_callback(self):
        messages: list[str] = []
        transport = AsyncMock()
        transport.call = AsyncMock(return_value=envelope(REPORT))
        analyzer = Analyzer(transport, "agent-1", on_status=messages.append)
        await analyzer.analyze("msg", "App")
        assert messages[-1] == "Analysis complete!"
