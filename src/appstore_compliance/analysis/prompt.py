"""Builds the single text message sent to the analysis agent."""

from appstore_compliance import samples
from appstore_compliance.state import AppState

DEEP_SCAN_DIRECTIVE = (
    "## Analysis Mode: DEEP SCAN\n"
    "Perform an exhaustive review of every file and metadata field below. "
    "Report every potential guideline violation including low-severity ones, "
    "quote the affected code for each, and cite the exact guideline number. "
    "Include a complete readiness_checklist with a pass/fail/warning/not_applicable "
    "status for each submission requirement.\n\n"
)


def _value(state: AppState, field: str, sample: str) -> str:
    """Form value, or the canned sample value when sample mode fills a blank."""
    value: str = getattr(state, field)
    if state.sample_mode and not value.strip():
        return sample
    return value


def build_analysis_message(state: AppState) -> str:
    """Assemble the prompt from the form; empty string means nothing to analyze."""
    code = _value(state, "code_snippet", samples.SAMPLE_CODE)
    desc = _value(state, "app_description", samples.SAMPLE_DESCRIPTION)
    name = _value(state, "app_name", samples.SAMPLE_APP_NAME)
    sub = _value(state, "subtitle", samples.SAMPLE_SUBTITLE)
    kw = _value(state, "keywords", samples.SAMPLE_KEYWORDS)
    age = _value(state, "age_rating", samples.SAMPLE_AGE_RATING)

    message = ""
    if state.deep_scan:
        message += DEEP_SCAN_DIRECTIVE

    ref = state.effective_repo_ref
    if state.repo_files and ref is not None:
        paths = ", ".join(f.path for f in state.repo_files)
        message += (
            "## Source: GitHub Repository\n"
            f"Repository: {ref.full_name} (branch: {ref.branch})\n"
            f"Files analyzed: {paths}\n\n"
        )

    if code.strip():
        message += f"## Code Snippets\n```\n{code}\n```\n\n"
    if desc.strip():
        message += f"## App Description\n{desc}\n\n"

    metadata = [
        ("App Name", name),
        ("Subtitle", sub),
        ("Keywords", kw),
        ("Age Rating", age),
    ]
    lines = [f"- {label}: {value}\n" for label, value in metadata if value.strip()]
    if lines:
        message += "## App Metadata\n" + "".join(lines)

    selected = state.selected_focus
    if 0 < len(selected) < len(state.focus_categories):
        names = ", ".join(c.name for c in selected)
        message += f"\n## Focus Areas\nPlease focus the analysis on: {names}\n"

    return message
