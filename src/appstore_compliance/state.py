"""Application state and the pure transitions applied to it.

Every function here takes an :class:`AppState` and returns a new one; the
TUI owns the current instance and swaps it on each transition. History is
not part of this state: :class:`~appstore_compliance.history.HistoryStore`
owns it behind its own load/save boundary.
"""

from typing import Optional

from pydantic import BaseModel, Field

from appstore_compliance import samples
from appstore_compliance.analysis.code_buffer import (
    append_block,
    remove_file_block,
    render_code_block,
)
from appstore_compliance.analysis.product_name import resolve_app_name
from appstore_compliance.analysis.urls import parse_github_url
from appstore_compliance.models import (
    DEFAULT_FOCUS_CATEGORIES,
    AnalysisResult,
    FocusCategory,
    HistoryEntry,
    RepoFile,
    RepoRef,
)

FORM_FIELDS = (
    "code_snippet",
    "app_description",
    "app_name",
    "subtitle",
    "keywords",
    "age_rating",
    "repo_url",
)


def _default_focus() -> list[FocusCategory]:
    return [c.model_copy() for c in DEFAULT_FOCUS_CATEGORIES]


class AppState(BaseModel):
    """Everything the dashboard shows, apart from persisted history."""

    # Bumped by every reset so in-flight work can tell it is stale.
    generation: int = 0

    # Form
    code_snippet: str = ""
    app_description: str = ""
    app_name: str = ""
    subtitle: str = ""
    keywords: str = ""
    age_rating: str = ""
    focus_categories: list[FocusCategory] = Field(default_factory=_default_focus)
    deep_scan: bool = False
    sample_mode: bool = False

    # Repository
    repo_url: str = ""
    repo_ref: Optional[RepoRef] = None
    repo_files: list[RepoFile] = Field(default_factory=list)
    repo_error: str = ""

    # Results
    result: Optional[AnalysisResult] = None
    show_results: bool = False
    error_message: str = ""
    severity_filter: str = "all"
    category_filter: str = "all"

    @property
    def effective_repo_ref(self) -> Optional[RepoRef]:
        return self.repo_ref or parse_github_url(self.repo_url)

    @property
    def selected_focus(self) -> list[FocusCategory]:
        return [c for c in self.focus_categories if c.checked]


def is_stale(state: AppState, generation: int) -> bool:
    """True if a reset happened since ``generation`` was captured."""
    return state.generation != generation


# ── Form ──────────────────────────────────────────────────────────────────

def set_field(state: AppState, name: str, value: str) -> AppState:
    if name not in FORM_FIELDS:
        raise KeyError(name)
    return state.model_copy(update={name: value})


def toggle_category(state: AppState, category_id: str) -> AppState:
    focus = [
        c.model_copy(update={"checked": not c.checked}) if c.id == category_id else c
        for c in state.focus_categories
    ]
    return state.model_copy(update={"focus_categories": focus})


def set_deep_scan(state: AppState, enabled: bool) -> AppState:
    return state.model_copy(update={"deep_scan": enabled})


def clear_form(state: AppState) -> AppState:
    """Blank the form and repository; results and modes are kept."""
    return state.model_copy(update={
        "generation": state.generation + 1,
        "code_snippet": "",
        "app_description": "",
        "app_name": "",
        "subtitle": "",
        "keywords": "",
        "age_rating": "",
        "focus_categories": _default_focus(),
        "repo_url": "",
        "repo_ref": None,
        "repo_files": [],
        "repo_error": "",
        "error_message": "",
    })


def history_app_name(state: AppState) -> str:
    """Name recorded in history for the current form."""
    name = state.app_name.strip()
    if state.sample_mode and not name:
        return samples.SAMPLE_APP_NAME
    return name or "Unnamed App"


# ── Repository ────────────────────────────────────────────────────────────

def apply_ingestion_result(
    state: AppState,
    files: list[RepoFile],
    ref: Optional[RepoRef] = None,
    error: str = "",
) -> AppState:
    """Merge a finished ingestion run into the form."""
    if error:
        return state.model_copy(update={"repo_error": error, "repo_files": []})

    update: dict[str, object] = {
        "repo_files": list(files),
        "repo_ref": ref,
        "repo_error": "",
        "code_snippet": append_block(state.code_snippet, render_code_block(files)),
    }
    if not state.app_name.strip() and ref is not None:
        update["app_name"] = resolve_app_name(files, ref.repo)
    return state.model_copy(update=update)


def remove_repo_file(state: AppState, path: str) -> AppState:
    return state.model_copy(update={
        "repo_files": [f for f in state.repo_files if f.path != path],
        "code_snippet": remove_file_block(state.code_snippet, path),
    })


def clear_repo_files(state: AppState) -> AppState:
    return state.model_copy(update={
        "generation": state.generation + 1,
        "repo_files": [],
        "repo_ref": None,
        "repo_url": "",
        "repo_error": "",
        "code_snippet": "",
    })


# ── Results ───────────────────────────────────────────────────────────────

def apply_analysis_result(state: AppState, result: AnalysisResult) -> AppState:
    return state.model_copy(update={
        "result": result,
        "show_results": True,
        "error_message": "",
        "severity_filter": "all",
        "category_filter": "all",
    })


def apply_analysis_error(state: AppState, message: str) -> AppState:
    return state.model_copy(update={"error_message": message})


def show_history_entry(state: AppState, entry: HistoryEntry) -> AppState:
    return apply_analysis_result(state, entry.result)


def close_results(state: AppState) -> AppState:
    return state.model_copy(update={
        "generation": state.generation + 1,
        "show_results": False,
        "result": None,
    })


def set_filters(
    state: AppState,
    severity: Optional[str] = None,
    category: Optional[str] = None,
) -> AppState:
    update: dict[str, object] = {}
    if severity is not None:
        update["severity_filter"] = severity
    if category is not None:
        update["category_filter"] = category
    return state.model_copy(update=update)


# ── Sample mode ───────────────────────────────────────────────────────────

def apply_sample_mode(state: AppState, enabled: bool) -> AppState:
    """Turn sample mode on (fill empty fields) or off (reset everything)."""
    if not enabled:
        return AppState(
            generation=state.generation + 1,
            focus_categories=state.focus_categories,
            deep_scan=state.deep_scan,
        )

    canned = {
        "code_snippet": samples.SAMPLE_CODE,
        "app_description": samples.SAMPLE_DESCRIPTION,
        "app_name": samples.SAMPLE_APP_NAME,
        "subtitle": samples.SAMPLE_SUBTITLE,
        "keywords": samples.SAMPLE_KEYWORDS,
        "age_rating": samples.SAMPLE_AGE_RATING,
    }
    update: dict[str, object] = {"sample_mode": True}
    for name, value in canned.items():
        if not getattr(state, name).strip():
            update[name] = value
    if state.result is None and not state.show_results:
        update["result"] = samples.SAMPLE_RESULT
        update["show_results"] = True
    return state.model_copy(update=update)


def visible_history(state: AppState, entries: list[HistoryEntry]) -> list[HistoryEntry]:
    """Stored history, or the sample history while sample mode hides an empty one."""
    if state.sample_mode and not entries:
        return list(samples.SAMPLE_HISTORY)
    return entries
