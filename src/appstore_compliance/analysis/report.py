"""Derived views over an AnalysisResult: readiness, checklist totals, filters."""

from pydantic import BaseModel

from appstore_compliance.models import (
    AnalysisResult,
    Category,
    CheckStatus,
    HistoryEntry,
    ReadinessCheckItem,
    ReadinessStatus,
)

READY_THRESHOLD = 85
NEEDS_FIXES_THRESHOLD = 60

ALL = "all"


def readiness_from_score(score: int) -> ReadinessStatus:
    if score >= READY_THRESHOLD:
        return ReadinessStatus.ready
    if score >= NEEDS_FIXES_THRESHOLD:
        return ReadinessStatus.needs_fixes
    return ReadinessStatus.high_risk


def readiness_status(result: AnalysisResult) -> ReadinessStatus:
    """Agent-supplied status, or one derived from the score."""
    if result.readiness_status is not None:
        return result.readiness_status
    return readiness_from_score(result.compliance_score)


def readiness_label(status: ReadinessStatus) -> str:
    labels = {
        ReadinessStatus.ready: "Ready for Submission",
        ReadinessStatus.needs_fixes: "Needs Fixes",
        ReadinessStatus.high_risk: "High Rejection Risk",
    }
    return labels[status]


def score_label(score: int) -> str:
    if score >= 80:
        return "Pass"
    if score >= 50:
        return "Warning"
    return "Fail"


class ChecklistCounts(BaseModel):
    """Checklist totals per status; they always add up to the item count."""

    passed: int = 0
    failed: int = 0
    warning: int = 0
    not_applicable: int = 0

    @property
    def total(self) -> int:
        return self.passed + self.failed + self.warning + self.not_applicable


def checklist_counts(items: list[ReadinessCheckItem]) -> ChecklistCounts:
    counts = ChecklistCounts()
    for item in items:
        if item.status == CheckStatus.passed:
            counts.passed += 1
        elif item.status == CheckStatus.fail:
            counts.failed += 1
        elif item.status == CheckStatus.warning:
            counts.warning += 1
        else:
            counts.not_applicable += 1
    return counts


def filter_categories(
    categories: list[Category],
    severity: str = ALL,
    category: str = ALL,
) -> list[Category]:
    """Apply the severity and category filters.

    Violations are kept when their severity matches. A category whose
    violations were all filtered out still shows while the category filter
    is ``all``.
    """
    filtered: list[Category] = []
    for cat in categories:
        if category != ALL and cat.category_name != category:
            continue
        violations = [
            v for v in cat.violations if severity == ALL or v.severity == severity
        ]
        if violations or category == ALL:
            filtered.append(cat.model_copy(update={"violations": violations}))
    return filtered


def filter_history(entries: list[HistoryEntry], query: str) -> list[HistoryEntry]:
    """Case-insensitive match on app name or date."""
    q = query.strip().lower()
    if not q:
        return list(entries)
    return [
        e for e in entries
        if q in e.app_name.lower() or q in e.date.lower()
    ]
