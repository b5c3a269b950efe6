"""Pytest configuration and fixtures."""

import pytest

from appstore_compliance.models import (
    AnalysisResult,
    Category,
    CheckStatus,
    ReadinessCheckItem,
    RepoFile,
    RiskSummary,
    Violation,
)


@pytest.fixture(scope="session")
def anyio_backend():
    """Configure anyio backend for async tests."""
    return "asyncio"


@pytest.fixture
def repo_files():
    """Two decoded files as they come out of ingestion."""
    return [
        RepoFile(path="App/AppDelegate.swift", content="import UIKit\nclass AppDelegate {}", size=35),
        RepoFile(path="App/Info.plist", content="<plist></plist>", size=15),
    ]


@pytest.fixture
def analysis_result():
    """A small report with one category and mixed severities."""
    return AnalysisResult(
        compliance_score=64,
        risk_summary=RiskSummary(high=1, medium=1, low=0),
        readiness_checklist=[
            ReadinessCheckItem(item="Privacy policy URL", status=CheckStatus.fail, details="Missing"),
            ReadinessCheckItem(item="App icon", status=CheckStatus.passed),
        ],
        categories=[
            Category(
                category_name="Privacy",
                category_summary="Tracking without consent.",
                violations=[
                    Violation(
                        title="No ATT prompt",
                        severity="high",
                        guideline_reference="5.1.2",
                        description="IDFA is read before consent.",
                        affected_code="ASIdentifierManager.shared()",
                        suggested_fix="Request tracking authorization first.",
                    ),
                    Violation(title="Vague purpose string", severity="medium"),
                ],
            )
        ],
        overall_assessment="## Summary\nMostly fine.",
    )
