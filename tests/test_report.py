"""Tests for derived report views."""

import pytest

from appstore_compliance import samples
from appstore_compliance.analysis.report import (
    checklist_counts,
    filter_categories,
    filter_history,
    readiness_from_score,
    readiness_label,
    readiness_status,
    score_label,
)
from appstore_compliance.models import (
    AnalysisResult,
    Category,
    CheckStatus,
    ReadinessCheckItem,
    ReadinessStatus,
    Violation,
)


class TestReadiness:
    @pytest.mark.parametrize(
        "score,expected",
        [
            (100, ReadinessStatus.ready),
            (85, ReadinessStatus.ready),
            (84, ReadinessStatus.needs_fixes),
            (60, ReadinessStatus.needs_fixes),
            (59, ReadinessStatus.high_risk),
            (0, ReadinessStatus.high_risk),
        ],
    )
    def test_thresholds(self, score, expected):
        assert readiness_from_score(score) == expected

    def test_explicit_status_wins(self):
        result = AnalysisResult(compliance_score=10, readiness_status=ReadinessStatus.ready)
        assert readiness_status(result) == ReadinessStatus.ready

    def test_labels(self):
        assert readiness_label(ReadinessStatus.high_risk) == "High Rejection Risk"
        assert score_label(80) == "Pass"
        assert score_label(79) == "Warning"
        assert score_label(49) == "Fail"


class TestChecklistCounts:
    def test_counts_add_up(self):
        counts = checklist_counts(samples.SAMPLE_RESULT.readiness_checklist)
        assert (counts.passed, counts.failed, counts.warning, counts.not_applicable) == (1, 2, 1, 1)
        assert counts.total == 5

    def test_empty(self):
        assert checklist_counts([]).total == 0

    def test_default_status(self):
        assert checklist_counts([ReadinessCheckItem(item="x")]).not_applicable == 1
        assert ReadinessCheckItem().status == CheckStatus.not_applicable


class TestFilterCategories:
    @pytest.fixture
    def categories(self):
        return [
            Category(
                category_name="Privacy",
                violations=[Violation(title="a", severity="high"), Violation(title="b", severity="low")],
            ),
            Category(category_name="Design", violations=[Violation(title="c", severity="medium")]),
        ]

    def test_no_filter(self, categories):
        assert filter_categories(categories) == categories

    def test_severity_keeps_empty_categories(self, categories):
        filtered = filter_categories(categories, severity="high")
        assert [c.category_name for c in filtered] == ["Privacy", "Design"]
        assert [v.title for v in filtered[0].violations] == ["a"]
        assert filtered[1].violations == []

    def test_category_filter(self, categories):
        filtered = filter_categories(categories, category="Design")
        assert [c.category_name for c in filtered] == ["Design"]

    def test_category_and_severity_without_match(self, categories):
        assert filter_categories(categories, severity="low", category="Design") == []

    def test_does_not_mutate_input(self, categories):
        filter_categories(categories, severity="high")
        assert len(categories[0].violations) == 2


class TestFilterHistory:
    def test_matches_name_case_insensitively(self):
        result = filter_history(list(samples.SAMPLE_HISTORY), "  fittrack ")
        assert [e.id for e in result] == ["hist-002"]

    def test_matches_date(self):
        result = filter_history(list(samples.SAMPLE_HISTORY), "2025-02-1")
        assert [e.id for e in result] == ["hist-001", "hist-002", "hist-003"]

    def test_blank_query(self):
        assert len(filter_history(list(samples.SAMPLE_HISTORY), "")) == 3
