"""Analysis client — sends the prompt to the agent and normalizes its answer.

The agent's output is untrusted: any field may be missing, null or of the
wrong type. :func:`normalize_result` is the one place that deals with that;
everything downstream works on a fully defaulted :class:`AnalysisResult`.
"""

import json
import logging
import math
from typing import Any, Callable, Optional

from pydantic import BaseModel

from appstore_compliance.agent import AgentTransport
from appstore_compliance.analysis.report import readiness_from_score
from appstore_compliance.history import HistoryStore, new_history_entry
from appstore_compliance.models import (
    AnalysisResult,
    Category,
    CheckStatus,
    HistoryEntry,
    PriorityFix,
    ReadinessCheckItem,
    ReadinessStatus,
    RiskSummary,
    Violation,
)

logger = logging.getLogger(__name__)

RESULT_MARKER_KEYS = ("compliance_score", "categories", "risk_summary")
MAX_TEXT_EXCERPT = 500

EMPTY_MESSAGE_ERROR = (
    "Please provide at least one field (code snippet, description, or metadata) to analyze."
)
GENERIC_ERROR = "An error occurred during analysis. Please try again."
UNEXPECTED_FORMAT_ERROR = "Unexpected response format from agent"


class AnalysisOutcome(BaseModel):
    """Either a normalized result or a user-facing error."""

    result: Optional[AnalysisResult] = None
    error: str = ""
    entry: Optional[HistoryEntry] = None

    @property
    def ok(self) -> bool:
        return self.result is not None


# ── Normalization ─────────────────────────────────────────────────────────

def _str(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _int(value: Any) -> int:
    if isinstance(value, (bool, int)):
        return int(value)
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return 0
    if isinstance(value, float) and math.isfinite(value):
        return int(value)
    # NaN, ±inf and anything that is not a number
    return 0


def _dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _list(value: Any) -> list:
    return value if isinstance(value, list) else []


def _violation(raw: Any) -> Violation:
    d = _dict(raw)
    return Violation(
        title=_str(d.get("title")),
        severity=_str(d.get("severity")).strip().lower(),
        guideline_reference=_str(d.get("guideline_reference")),
        description=_str(d.get("description")),
        affected_code=_str(d.get("affected_code")),
        suggested_fix=_str(d.get("suggested_fix")),
    )


def _category(raw: Any) -> Category:
    d = _dict(raw)
    return Category(
        category_name=_str(d.get("category_name")),
        category_summary=_str(d.get("category_summary")),
        violations=[_violation(v) for v in _list(d.get("violations"))],
    )


def _check_status(value: Any) -> CheckStatus:
    try:
        return CheckStatus(_str(value).strip().lower())
    except ValueError:
        return CheckStatus.not_applicable


def _check_item(raw: Any) -> ReadinessCheckItem:
    d = _dict(raw)
    return ReadinessCheckItem(
        item=_str(d.get("item")),
        status=_check_status(d.get("status")),
        details=_str(d.get("details")),
    )


def _priority_fix(raw: Any) -> PriorityFix:
    d = _dict(raw)
    return PriorityFix(
        priority=_int(d.get("priority")),
        title=_str(d.get("title")),
        category=_str(d.get("category")),
        action=_str(d.get("action")),
    )


def normalize_result(payload: dict) -> AnalysisResult:
    """Map a raw agent payload onto a fully defaulted AnalysisResult."""
    score = max(0, min(100, _int(payload.get("compliance_score"))))
    try:
        status = ReadinessStatus(_str(payload.get("readiness_status")).strip().lower())
    except ValueError:
        status = readiness_from_score(score)

    risk = _dict(payload.get("risk_summary"))
    checklist_raw = payload.get("readiness_checklist")
    checklist = (
        [_check_item(i) for i in checklist_raw]
        if isinstance(checklist_raw, list)
        else None
    )
    return AnalysisResult(
        compliance_score=score,
        readiness_status=status,
        risk_summary=RiskSummary(
            high=_int(risk.get("high")),
            medium=_int(risk.get("medium")),
            low=_int(risk.get("low")),
        ),
        readiness_checklist=checklist,
        categories=[_category(c) for c in _list(payload.get("categories"))],
        overall_assessment=_str(payload.get("overall_assessment")),
        priority_fixes=[_priority_fix(f) for f in _list(payload.get("priority_fixes"))],
    )


def is_structured_result(data: Any) -> bool:
    return isinstance(data, dict) and any(k in data for k in RESULT_MARKER_KEYS)


def _text_excerpt(response: dict) -> str:
    """Free text the agent sent instead of a report, if any."""
    message = response.get("message")
    if isinstance(message, str) and message:
        return message
    result = response.get("result")
    if isinstance(result, dict) and isinstance(result.get("text"), str):
        return result["text"]
    if isinstance(result, str):
        return result
    return ""


def classify_response(envelope: Any) -> AnalysisOutcome:
    """Turn an agent envelope into a result or a user-facing error."""
    envelope = _dict(envelope)
    if not envelope.get("success"):
        return AnalysisOutcome(error=_str(envelope.get("error")) or "Analysis failed")

    response = _dict(envelope.get("response"))
    data = response.get("result")
    if isinstance(data, str):
        try:
            data = json.loads(data)
        except ValueError:
            # Not JSON: treat the whole response as unstructured text.
            data = response

    if is_structured_result(data):
        return AnalysisOutcome(result=normalize_result(data))

    text = _text_excerpt(response)
    if text:
        return AnalysisOutcome(
            error=(
                "Received text response instead of structured data. "
                f"The agent responded: {text[:MAX_TEXT_EXCERPT]}"
            )
        )
    return AnalysisOutcome(error=UNEXPECTED_FORMAT_ERROR)


# ── Client ────────────────────────────────────────────────────────────────

class Analyzer:
    """Runs one analysis per call and records successes in history."""

    def __init__(
        self,
        transport: AgentTransport,
        agent_id: str,
        history: Optional[HistoryStore] = None,
        on_status: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.transport = transport
        self.agent_id = agent_id
        self.history = history
        self._on_status = on_status or (lambda _: None)

    def _status(self, msg: str) -> None:
        self._on_status(msg)

    async def analyze(self, message: str, app_name: str) -> AnalysisOutcome:
        """Send ``message`` to the agent; never raises."""
        if not message.strip():
            return AnalysisOutcome(error=EMPTY_MESSAGE_ERROR)

        self._status("Analyzing compliance across guideline categories …")
        try:
            envelope = await self.transport.call(message, self.agent_id)
        except Exception:
            logger.exception("Agent call failed")
            return AnalysisOutcome(error=GENERIC_ERROR)

        try:
            outcome = classify_response(envelope)
        except Exception:
            logger.exception("Could not interpret agent response")
            return AnalysisOutcome(error=GENERIC_ERROR)
        if not outcome.ok:
            logger.info("Agent returned no structured report: %s", outcome.error)
            return outcome

        entry = new_history_entry(outcome.result, app_name)  # type: ignore[arg-type]
        if self.history is not None:
            self.history.add(entry)
        self._status("Analysis complete!")
        return outcome.model_copy(update={"entry": entry})

    async def close(self) -> None:
        await self.transport.close()
