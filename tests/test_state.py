"""Tests for application state transitions."""

import pytest

from appstore_compliance import samples
from appstore_compliance.analysis.code_buffer import render_code_block
from appstore_compliance.models import AnalysisResult, RepoFile, RepoRef
from appstore_compliance.state import (
    AppState,
    apply_analysis_error,
    apply_analysis_result,
    apply_ingestion_result,
    apply_sample_mode,
    clear_form,
    clear_repo_files,
    close_results,
    history_app_name,
    is_stale,
    remove_repo_file,
    set_field,
    set_filters,
    toggle_category,
    visible_history,
)


@pytest.fixture
def ref():
    return RepoRef(owner="acme", repo="photo-sync")


class TestForm:
    def test_set_field(self):
        state = set_field(AppState(), "app_name", "Snapper")
        assert state.app_name == "Snapper"

    def test_set_unknown_field(self):
        with pytest.raises(KeyError):
            set_field(AppState(), "generation", "1")

    def test_toggle_category(self):
        state = toggle_category(AppState(), "privacy")
        assert [c.id for c in state.selected_focus] == ["privacy"]
        state = toggle_category(state, "privacy")
        assert state.selected_focus == []

    def test_toggle_does_not_share_defaults(self):
        toggle_category(AppState(), "privacy")
        assert AppState().selected_focus == []

    def test_clear_form_bumps_generation(self, ref, repo_files):
        state = apply_ingestion_result(AppState(app_name="X"), repo_files, ref)
        state = apply_analysis_result(state, AnalysisResult(compliance_score=90))
        cleared = clear_form(state)

        assert cleared.generation == state.generation + 1
        assert cleared.app_name == ""
        assert cleared.repo_files == []
        assert cleared.code_snippet == ""
        assert cleared.result is not None

    def test_history_app_name(self):
        assert history_app_name(AppState()) == "Unnamed App"
        assert history_app_name(AppState(app_name=" Snap ")) == "Snap"
        assert history_app_name(AppState(sample_mode=True)) == samples.SAMPLE_APP_NAME


class TestRepository:
    def test_ingestion_appends_code_and_names_app(self, ref, repo_files):
        state = apply_ingestion_result(AppState(code_snippet="// notes"), repo_files, ref)
        assert state.code_snippet == "// notes\n\n" + render_code_block(repo_files)
        assert state.app_name == "Photo Sync"
        assert state.repo_ref == ref

    def test_ingestion_keeps_existing_app_name(self, ref, repo_files):
        state = apply_ingestion_result(AppState(app_name="Mine"), repo_files, ref)
        assert state.app_name == "Mine"

    def test_ingestion_error(self, repo_files):
        state = AppState(repo_files=repo_files)
        state = apply_ingestion_result(state, [], error="No iOS-relevant files found in this repository")
        assert state.repo_files == []
        assert state.repo_error == "No iOS-relevant files found in this repository"

    def test_remove_repo_file(self, ref, repo_files):
        state = apply_ingestion_result(AppState(), repo_files, ref)
        state = remove_repo_file(state, "App/AppDelegate.swift")
        assert [f.path for f in state.repo_files] == ["App/Info.plist"]
        assert state.code_snippet == "// === App/Info.plist ===\n<plist></plist>"

    def test_clear_repo_files(self, ref, repo_files):
        state = apply_ingestion_result(AppState(), repo_files, ref)
        cleared = clear_repo_files(state)
        assert cleared.repo_files == []
        assert cleared.code_snippet == ""
        assert cleared.repo_ref is None
        assert is_stale(cleared, state.generation)

    def test_effective_repo_ref_from_url(self):
        state = AppState(repo_url="https://github.com/o/r/tree/dev")
        assert state.effective_repo_ref.branch == "dev"


class TestResults:
    def test_apply_result_resets_filters(self):
        state = set_filters(AppState(), severity="high", category="Privacy")
        state = apply_analysis_error(state, "old error")
        state = apply_analysis_result(state, AnalysisResult(compliance_score=50))
        assert state.show_results
        assert state.error_message == ""
        assert (state.severity_filter, state.category_filter) == ("all", "all")

    def test_close_results_invalidates_in_flight_work(self):
        state = apply_analysis_result(AppState(), AnalysisResult())
        generation = state.generation
        closed = close_results(state)
        assert closed.result is None
        assert not closed.show_results
        assert is_stale(closed, generation)

    def test_set_filters_partial(self):
        state = set_filters(AppState(), category="Privacy")
        assert state.severity_filter == "all"
        assert state.category_filter == "Privacy"


class TestSampleMode:
    def test_enable_fills_blank_fields_only(self):
        state = apply_sample_mode(AppState(app_name="Mine"), True)
        assert state.sample_mode
        assert state.app_name == "Mine"
        assert state.app_description == samples.SAMPLE_DESCRIPTION
        assert state.age_rating == samples.SAMPLE_AGE_RATING
        assert state.result == samples.SAMPLE_RESULT
        assert state.show_results

    def test_enable_keeps_existing_result(self):
        own = AnalysisResult(compliance_score=99)
        state = apply_analysis_result(AppState(), own)
        assert apply_sample_mode(state, True).result == own

    def test_disable_resets_everything(self):
        state = apply_sample_mode(AppState(deep_scan=True), True)
        off = apply_sample_mode(state, False)
        assert not off.sample_mode
        assert off.app_name == ""
        assert off.result is None
        assert off.deep_scan
        assert is_stale(off, state.generation)

    def test_visible_history(self):
        sample_state = AppState(sample_mode=True)
        assert visible_history(sample_state, []) == list(samples.SAMPLE_HISTORY)
        assert visible_history(AppState(), []) == []
        real = [samples.SAMPLE_HISTORY[1]]
        assert visible_history(sample_state, real) == real
