"""Tests for the analysis message builder."""

from appstore_compliance import samples
from appstore_compliance.analysis.prompt import DEEP_SCAN_DIRECTIVE, build_analysis_message
from appstore_compliance.models import RepoFile, RepoRef
from appstore_compliance.state import AppState, toggle_category


class TestBuildAnalysisMessage:
    def test_empty_form(self):
        assert build_analysis_message(AppState()) == ""

    def test_code_only(self):
        message = build_analysis_message(AppState(code_snippet="let a = 1"))
        assert message == "## Code Snippets\n```\nlet a = 1\n```\n\n"

    def test_section_order(self):
        state = AppState(
            code_snippet="code",
            app_description="desc",
            app_name="Snap",
            keywords="photo",
        )
        message = build_analysis_message(state)
        assert message.index("## Code Snippets") < message.index("## App Description")
        assert message.index("## App Description") < message.index("## App Metadata")
        assert "- App Name: Snap\n" in message
        assert "- Keywords: photo\n" in message
        assert "Subtitle" not in message

    def test_repository_section(self):
        state = AppState(
            repo_ref=RepoRef(owner="acme", repo="snap", branch="dev"),
            repo_files=[RepoFile(path="A.swift", content="a"), RepoFile(path="B.swift", content="b")],
            code_snippet="x",
        )
        message = build_analysis_message(state)
        assert message.startswith("## Source: GitHub Repository\n")
        assert "Repository: acme/snap (branch: dev)" in message
        assert "Files analyzed: A.swift, B.swift" in message

    def test_focus_areas_only_for_partial_selection(self):
        state = toggle_category(AppState(app_name="Snap"), "privacy")
        message = build_analysis_message(state)
        assert message.endswith("\n## Focus Areas\nPlease focus the analysis on: Privacy & Data\n")

        for cat in ("uiux", "content", "metadata"):
            state = toggle_category(state, cat)
        assert "Focus Areas" not in build_analysis_message(state)

    def test_deep_scan_prefix(self):
        message = build_analysis_message(AppState(app_name="Snap", deep_scan=True))
        assert message.startswith(DEEP_SCAN_DIRECTIVE)

    def test_deep_scan_alone_is_not_empty(self):
        assert build_analysis_message(AppState(deep_scan=True)) == DEEP_SCAN_DIRECTIVE

    def test_sample_mode_fills_blanks(self):
        message = build_analysis_message(AppState(sample_mode=True, app_name="Mine"))
        assert "- App Name: Mine\n" in message
        assert samples.SAMPLE_DESCRIPTION in message
