"""Markdown export of a compliance report."""

from datetime import date, datetime
from pathlib import Path
from typing import Optional

from appstore_compliance.analysis.report import readiness_label, readiness_status
from appstore_compliance.models import AnalysisResult, CheckStatus

STATUS_TOKENS = {
    CheckStatus.passed: "PASS",
    CheckStatus.fail: "FAIL",
    CheckStatus.warning: "WARN",
    CheckStatus.not_applicable: "N-A",
}


def report_filename(today: date) -> str:
    return f"compliance-report-{today:%Y-%m-%d}.md"


def render_report_markdown(result: AnalysisResult, generated_at: datetime) -> str:
    """Render the full report. Pipes inside table cells are not escaped."""
    lines: list[str] = [
        "# App Store Compliance Report",
        "",
        f"**Compliance Score:** {result.compliance_score}/100",
        f"**Readiness:** {readiness_label(readiness_status(result))}",
        f"**Generated:** {generated_at:%Y-%m-%d %H:%M:%S}",
        "",
        "## Risk Summary",
        f"- High: {result.risk_summary.high}",
        f"- Medium: {result.risk_summary.medium}",
        f"- Low: {result.risk_summary.low}",
        "",
    ]

    if result.readiness_checklist:
        lines += [
            "## Readiness Checklist",
            "",
            "| Status | Item | Details |",
            "|--------|------|---------|",
        ]
        for item in result.readiness_checklist:
            lines.append(
                f"| {STATUS_TOKENS[item.status]} | {item.item or 'N/A'} | {item.details} |"
            )
        lines.append("")

    if result.overall_assessment:
        lines += ["## Overall Assessment", result.overall_assessment, ""]

    lines += ["## Violations by Category", ""]
    for cat in result.categories:
        lines.append(f"### {cat.category_name or 'Category'}")
        lines.append(cat.category_summary)
        lines.append("")
        for v in cat.violations:
            lines += [
                f"#### [{(v.severity or 'unknown').upper()}] {v.title or 'Violation'}",
                f"- **Guideline:** {v.guideline_reference or 'N/A'}",
                f"- **Description:** {v.description}",
                f"- **Affected Code:** `{v.affected_code or 'N/A'}`",
                f"- **Suggested Fix:** {v.suggested_fix}",
                "",
            ]

    lines += ["## Priority Fixes", ""]
    for fix in result.priority_fixes:
        lines.append(f"{fix.priority or '-'}. **{fix.title or 'Fix'}** ({fix.category})")
        lines.append(f"   {fix.action}")
        lines.append("")

    return "\n".join(lines)


def export_report(
    result: AnalysisResult,
    directory: Path,
    now: Optional[datetime] = None,
) -> Path:
    """Write ``compliance-report-YYYY-MM-DD.md`` into ``directory``."""
    now = now or datetime.now()
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / report_filename(now.date())
    path.write_text(render_report_markdown(result, now), encoding="utf-8")
    return path
