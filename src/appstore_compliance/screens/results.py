"""Results screen — score, readiness, checklist and filterable violations."""

from rich.markup import escape
from rich.text import Text
from textual import on
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.screen import Screen
from textual.widgets import (
    Button,
    DataTable,
    Footer,
    Header,
    Label,
    Markdown,
    Select,
    Static,
)

from appstore_compliance.analysis.exporter import STATUS_TOKENS, export_report
from appstore_compliance.analysis.markdown import to_rich_markup
from appstore_compliance.analysis.report import (
    ALL,
    checklist_counts,
    filter_categories,
    readiness_label,
    readiness_status,
    score_label,
)
from appstore_compliance.models import (
    AnalysisResult,
    Category,
    ReadinessStatus,
    SeverityLevel,
    Violation,
)
from appstore_compliance.state import set_filters

SEVERITY_ICONS = {"high": "🔴", "medium": "🟠", "low": "🔵"}
READINESS_ICONS = {
    ReadinessStatus.ready: "✅",
    ReadinessStatus.needs_fixes: "⚠️",
    ReadinessStatus.high_risk: "⛔",
}


def violation_markdown(v: Violation) -> str:
    icon = SEVERITY_ICONS.get(v.severity, "⚪")
    md = f"{icon} **{v.title or 'Violation'}**  `{v.severity or 'unknown'}`"
    if v.guideline_reference:
        md += f"\n\n📖 {v.guideline_reference}"
    if v.description:
        md += f"\n\n{v.description}"
    if v.affected_code:
        md += f"\n\n```\n{v.affected_code}\n```"
    if v.suggested_fix:
        md += f"\n\n✅ **Fix:** {v.suggested_fix}"
    return md


class ResultsScreen(Screen):
    """Full report for one analysis result."""

    CSS = """
    ResultsScreen {
        layout: vertical;
    }
    #results-header {
        height: 3;
        background: $primary;
        color: $text;
        text-align: center;
        padding: 1 2;
        text-style: bold;
    }
    .section-title {
        text-style: bold;
        margin: 1 0;
        color: $secondary;
    }
    #checklist-table {
        height: auto;
        max-height: 16;
        margin: 1 0;
    }
    #filter-row {
        height: auto;
        margin: 1 0;
    }
    #filter-row Select {
        width: 1fr;
    }
    #violations {
        height: auto;
    }
    .category-card {
        border: round $primary-lighten-2;
        padding: 1 2;
        margin: 1 0;
        background: $surface;
        height: auto;
    }
    .finding-card {
        border: round $warning;
        padding: 0 1;
        margin: 1 0 0 0;
        height: auto;
    }
    .finding-card.high {
        border: round $error;
    }
    .fix-btn {
        margin: 0 0 1 0;
    }
    """

    BINDINGS = [
        ("b", "go_back", "Back"),
        ("e", "export", "Export"),
        ("f", "fix_all", "Fix Prompts"),
        ("n", "new_analysis", "New Analysis"),
    ]

    def __init__(self, result: AnalysisResult, title: str = "", **kwargs) -> None:  # type: ignore[no-untyped-def]
        super().__init__(**kwargs)
        self.result = result
        self.report_title = title
        self._visible: list[Category] = []

    def compose(self) -> ComposeResult:
        r = self.result
        status = readiness_status(r)
        heading = f"  🛡  {escape(self.report_title)}  ·  " if self.report_title else "  🛡  "
        yield Header(show_clock=True)
        yield Static(
            f"{heading}Score {r.compliance_score}/100 ({score_label(r.compliance_score)})"
            f"  ·  {READINESS_ICONS[status]} {readiness_label(status)}"
            f"  ·  {r.violation_count} violation{'s' if r.violation_count != 1 else ''}  ",
            id="results-header",
        )

        with VerticalScroll():
            yield Static("RISK SUMMARY", classes="section-title")
            yield Label(
                f"🔴 High: {r.risk_summary.high}  ·  "
                f"🟠 Medium: {r.risk_summary.medium}  ·  "
                f"🔵 Low: {r.risk_summary.low}"
            )

            if r.readiness_checklist:
                counts = checklist_counts(r.readiness_checklist)
                yield Static("READINESS CHECKLIST", classes="section-title")
                yield Label(
                    f"Passed: {counts.passed}  ·  Failed: {counts.failed}  ·  "
                    f"Warnings: {counts.warning}  ·  N/A: {counts.not_applicable}"
                )
                table = DataTable(id="checklist-table")
                table.add_columns("Status", "Item", "Details")
                for item in r.readiness_checklist:
                    table.add_row(STATUS_TOKENS[item.status], Text(item.item), Text(item.details))
                yield table

            if r.overall_assessment:
                yield Static("OVERALL ASSESSMENT", classes="section-title")
                yield Static(to_rich_markup(r.overall_assessment))

            yield Static("VIOLATIONS", classes="section-title")
            with Horizontal(id="filter-row"):
                yield Select(
                    [("All Severity", ALL)]
                    + [(level.value.title(), level.value) for level in SeverityLevel],
                    value=ALL,
                    allow_blank=False,
                    id="severity-select",
                )
                yield Select(
                    [("All Categories", ALL)]
                    + [(Text(c.category_name or "Unknown"), c.category_name) for c in r.categories],
                    value=ALL,
                    allow_blank=False,
                    id="category-select",
                )
            yield Vertical(id="violations")

            if r.priority_fixes:
                yield Static("PRIORITY FIXES", classes="section-title")
                yield Markdown(
                    "\n".join(
                        f"{fix.priority or '-'}. **{fix.title or 'Fix'}** ({fix.category})  \n"
                        f"   {fix.action}"
                        for fix in r.priority_fixes
                    )
                )

        yield Footer()

    async def on_mount(self) -> None:
        await self._render_violations(ALL, ALL)

    async def _render_violations(self, severity: str, category: str) -> None:
        container = self.query_one("#violations", Vertical)
        await container.remove_children()
        self._visible = filter_categories(self.result.categories, severity, category)
        cards = []
        for ci, cat in enumerate(self._visible):
            children = [
                Static(
                    f"[b]{escape(cat.category_name or 'Category')}[/b]  "
                    f"({len(cat.violations)} issue{'s' if len(cat.violations) != 1 else ''})"
                ),
            ]
            if cat.category_summary:
                children.append(Label(escape(cat.category_summary)))
            if not cat.violations:
                children.append(Label("✔ No violations in this category match the current filter."))
            for vi, v in enumerate(cat.violations):
                classes = "finding-card high" if v.severity == "high" else "finding-card"
                children.append(Vertical(Markdown(violation_markdown(v)), classes=classes))
                children.append(
                    Button("🛠  Fix prompt", name=f"{ci}:{vi}", classes="fix-btn")
                )
            cards.append(Vertical(*children, classes="category-card"))
        if not cards:
            cards.append(Label("No categories match the current filter."))
        await container.mount(*cards)

    def _current_filters(self) -> tuple[str, str]:
        severity = self.query_one("#severity-select", Select).value
        category = self.query_one("#category-select", Select).value
        return str(severity), str(category)

    @on(Select.Changed, "#severity-select")
    @on(Select.Changed, "#category-select")
    async def apply_filters(self) -> None:
        severity, category = self._current_filters()
        app = self.app
        if hasattr(app, "state"):
            app.state = set_filters(app.state, severity=severity, category=category)  # type: ignore[attr-defined]
        await self._render_violations(severity, category)

    # ── Actions ───────────────────────────────────────────────────────────

    def action_go_back(self) -> None:
        self.app.pop_screen()

    def action_new_analysis(self) -> None:
        self.app.new_analysis()  # type: ignore[attr-defined]

    def action_export(self) -> None:
        export_dir = self.app.settings.export_dir  # type: ignore[attr-defined]
        try:
            path = export_report(self.result, export_dir)
        except OSError as e:
            self.notify(f"Export failed: {e}", severity="error")
            return
        self.notify(f"Report saved to {path}")

    def action_fix_all(self) -> None:
        from appstore_compliance.screens.fix_prompt import FixPromptScreen

        self.app.push_screen(FixPromptScreen(self.result))

    @on(Button.Pressed, ".fix-btn")
    def open_fix_prompt(self, event: Button.Pressed) -> None:
        from appstore_compliance.screens.fix_prompt import FixPromptScreen

        ci, vi = (int(x) for x in (event.button.name or "0:0").split(":"))
        cat = self._visible[ci]
        self.app.push_screen(
            FixPromptScreen(self.result, violation=cat.violations[vi], category_name=cat.category_name)
        )
