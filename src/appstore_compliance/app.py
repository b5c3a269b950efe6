"""Main Textual TUI application for appstore-compliance."""

import logging
from typing import Optional

from textual.app import App

from appstore_compliance.agent import build_transport
from appstore_compliance.analysis.prompt import build_analysis_message
from appstore_compliance.analyzer import EMPTY_MESSAGE_ERROR, Analyzer
from appstore_compliance.config import Settings
from appstore_compliance.fetcher import GitHubFetcher
from appstore_compliance.history import HistoryStore
from appstore_compliance.ingestion import RepoIngestion
from appstore_compliance.models import AnalysisResult, HistoryEntry
from appstore_compliance.screens.guidelines import GuidelinesScreen
from appstore_compliance.screens.history import HistoryScreen
from appstore_compliance.screens.home import HomeScreen
from appstore_compliance.screens.loading import LoadingScreen
from appstore_compliance.screens.results import ResultsScreen
from appstore_compliance.state import (
    AppState,
    apply_analysis_error,
    apply_analysis_result,
    apply_ingestion_result,
    close_results,
    history_app_name,
    is_stale,
    set_field,
    show_history_entry,
    visible_history,
)

logger = logging.getLogger(__name__)


class ComplianceApp(App):
    """TUI dashboard for App Store submission compliance checks."""

    TITLE = "App Store Compliance"
    SUB_TITLE = "Analysis · History · Guidelines"

    CSS = """
    Screen {
        background: $background;
    }
    """

    BINDINGS = [
        ("q", "quit", "Quit"),
        ("h", "show_history", "History"),
        ("g", "show_guidelines", "Guidelines"),
        ("r", "show_results", "Results"),
    ]

    def __init__(self, settings: Optional[Settings] = None) -> None:
        super().__init__()
        self.settings = settings or Settings.from_env()
        self.state = AppState()
        self.history = HistoryStore(self.settings.history_path)
        self._fetcher = GitHubFetcher(token=self.settings.github_token)
        self._transport = build_transport(self.settings)
        self._fetching = False

    def on_mount(self) -> None:
        self.history.load()
        self.push_screen(HomeScreen())

    async def on_unmount(self) -> None:
        await self._fetcher.close()
        await self._transport.close()

    # ── State ─────────────────────────────────────────────────────────────

    def set_state(self, state: AppState) -> None:
        self.state = state

    @property
    def home(self) -> Optional[HomeScreen]:
        for screen in self.screen_stack:
            if isinstance(screen, HomeScreen):
                return screen
        return None

    def visible_history(self) -> list[HistoryEntry]:
        return visible_history(self.state, self.history.entries)

    # ── Repository ingestion ──────────────────────────────────────────────

    def fetch_repository(self, url: str) -> None:
        """Kick off repository ingestion — called from HomeScreen.

        Only one ingestion runs at a time; a request made while one is in
        flight is ignored.
        """
        if self._fetching:
            logger.info("Ignoring fetch of %s, an ingestion is already running", url)
            return
        self._set_fetching(True)
        self.state = set_field(self.state, "repo_url", url)
        generation = self.state.generation

        def on_status(msg: str) -> None:
            if self.home is not None:
                self.home.set_repo_status(msg)

        async def _do_fetch() -> None:
            try:
                result = await RepoIngestion(self._fetcher, on_status=on_status).run(url)
            finally:
                self._set_fetching(False)
            if is_stale(self.state, generation):
                logger.info("Discarding stale ingestion result for %s", url)
                return
            self.state = apply_ingestion_result(
                self.state, result.files, result.ref, result.error
            )
            if result.ok and self._fetcher.is_unauthenticated:
                self.notify(
                    "Organization SAML enforcement blocked your token; "
                    "the repository was read anonymously.",
                    severity="warning",
                )
            if self.home is not None:
                self.home.set_repo_status(result.summary if result.ok else "")
                self.home.refresh_from_state()

        self.run_worker(_do_fetch(), group="ingestion")

    def _set_fetching(self, busy: bool) -> None:
        self._fetching = busy
        if self.home is not None:
            self.home.set_fetching(busy)

    # ── Analysis ──────────────────────────────────────────────────────────

    def run_analysis(self) -> None:
        """Build the prompt and send it to the agent — called from HomeScreen."""
        message = build_analysis_message(self.state)
        if not message.strip():
            self.state = apply_analysis_error(self.state, EMPTY_MESSAGE_ERROR)
            if self.home is not None:
                self.home.refresh_from_state()
            return

        generation = self.state.generation
        app_name = history_app_name(self.state)
        loading = LoadingScreen()
        self.push_screen(loading)
        analyzer = Analyzer(
            self._transport,
            self.settings.agent_id,
            history=self.history,
            on_status=lambda msg: loading.update_status(msg, None),
        )

        async def _do_work() -> None:
            outcome = await analyzer.analyze(message, app_name)
            if is_stale(self.state, generation):
                logger.info("Discarding stale analysis result")
                return
            if outcome.result is None:
                self.state = apply_analysis_error(self.state, outcome.error)
                loading.update_status(f"❌ {outcome.error}", None)
                loading.set_phase("Press [b]  b  [/b] to go back and try again.")
                return
            self.state = apply_analysis_result(self.state, outcome.result)
            loading.update_status("Complete!", 100)
            self._show_results(outcome.result)

        self.run_worker(_do_work(), group="analysis")

    def _show_results(self, result: AnalysisResult) -> None:
        """Replace loading screen with results."""
        if isinstance(self.screen, LoadingScreen):
            self.pop_screen()
        self.push_screen(ResultsScreen(result))

    def open_history_entry(self, entry: HistoryEntry) -> None:
        self.state = show_history_entry(self.state, entry)
        self.push_screen(ResultsScreen(entry.result, title=entry.app_name))

    def new_analysis(self) -> None:
        """Drop the displayed result and return to the form."""
        self.state = close_results(self.state)
        while len(self.screen_stack) > 1 and not isinstance(self.screen, HomeScreen):
            self.pop_screen()
        if self.home is not None:
            self.home.refresh_from_state()

    # ── Navigation ────────────────────────────────────────────────────────

    def action_show_history(self) -> None:
        if not isinstance(self.screen, HistoryScreen):
            self.push_screen(HistoryScreen())

    def action_show_guidelines(self) -> None:
        if not isinstance(self.screen, GuidelinesScreen):
            self.push_screen(GuidelinesScreen())

    def action_show_results(self) -> None:
        if self.state.result is None:
            self.notify("No analysis results yet.", severity="warning")
            return
        if not isinstance(self.screen, ResultsScreen):
            self.push_screen(ResultsScreen(self.state.result))
