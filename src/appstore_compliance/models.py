"""Data models for appstore-compliance."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# ── Repository ingestion ──────────────────────────────────────────────────

class RepoRef(BaseModel):
    """A parsed GitHub repository URL."""

    model_config = ConfigDict(frozen=True)

    owner: str
    repo: str
    branch: str = "main"
    subpath: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"


class RepoFile(BaseModel):
    """One decoded source file fetched from a repository."""

    path: str
    content: str
    size: int = 0


# ── Agent report ──────────────────────────────────────────────────────────

class SeverityLevel(str, Enum):
    """Severity of a guideline violation."""

    high = "high"
    medium = "medium"
    low = "low"


class ReadinessStatus(str, Enum):
    """Submission readiness derived from the compliance score."""

    ready = "ready"
    needs_fixes = "needs_fixes"
    high_risk = "high_risk"


class CheckStatus(str, Enum):
    """Outcome of one readiness checklist item."""

    passed = "pass"
    fail = "fail"
    warning = "warning"
    not_applicable = "not_applicable"


class Violation(BaseModel):
    """A single guideline violation reported by the agent.

    ``severity`` stays a plain string: the agent may answer with a value
    outside :class:`SeverityLevel`, which is kept and ranked last.
    """

    title: str = ""
    severity: str = ""
    guideline_reference: str = ""
    description: str = ""
    affected_code: str = ""
    suggested_fix: str = ""


class Category(BaseModel):
    """Agent-defined grouping of violations, in display order."""

    category_name: str = ""
    category_summary: str = ""
    violations: list[Violation] = Field(default_factory=list)


class ReadinessCheckItem(BaseModel):
    """One row of the submission readiness checklist."""

    item: str = ""
    status: CheckStatus = CheckStatus.not_applicable
    details: str = ""


class PriorityFix(BaseModel):
    """An ordered remediation step suggested by the agent."""

    priority: int = 0
    title: str = ""
    category: str = ""
    action: str = ""


class RiskSummary(BaseModel):
    """Violation counts per severity, as reported by the agent."""

    high: int = 0
    medium: int = 0
    low: int = 0


class AnalysisResult(BaseModel):
    """Root artifact of one analysis run."""

    compliance_score: int = 0
    readiness_status: Optional[ReadinessStatus] = None
    risk_summary: RiskSummary = Field(default_factory=RiskSummary)
    # None means the agent sent no checklist at all
    readiness_checklist: Optional[list[ReadinessCheckItem]] = None
    categories: list[Category] = Field(default_factory=list)
    overall_assessment: str = ""
    priority_fixes: list[PriorityFix] = Field(default_factory=list)

    @property
    def violation_count(self) -> int:
        return sum(len(c.violations) for c in self.categories)


# ── History ───────────────────────────────────────────────────────────────

class HistoryEntry(BaseModel):
    """A completed analysis, persisted with the camelCase storage layout."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    date: str
    app_name: str = Field(default="", alias="appName")
    compliance_score: int = Field(default=0, alias="complianceScore")
    high_count: int = Field(default=0, alias="highCount")
    medium_count: int = Field(default=0, alias="mediumCount")
    low_count: int = Field(default=0, alias="lowCount")
    result: AnalysisResult = Field(default_factory=AnalysisResult)


# ── Static catalogs ───────────────────────────────────────────────────────

class EnvCategory(str, Enum):
    """Kind of development environment a fix prompt targets."""

    ide = "ide"
    nocode = "nocode"
    lowcode = "lowcode"


class DevEnvironment(BaseModel):
    """A development environment profile for tailored fix prompts."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    name: str
    category: EnvCategory
    prompt_prefix: str = Field(default="", alias="promptPrefix")
    context_note: str = Field(default="", alias="contextNote")


class FocusCategory(BaseModel):
    """One toggle of the focus-area selector."""

    id: str
    name: str
    checked: bool = False


DEFAULT_FOCUS_CATEGORIES: tuple[FocusCategory, ...] = (
    FocusCategory(id="privacy", name="Privacy & Data"),
    FocusCategory(id="uiux", name="UI/UX & Technical"),
    FocusCategory(id="content", name="Content & Monetization"),
    FocusCategory(id="metadata", name="Metadata & Marketing"),
)
