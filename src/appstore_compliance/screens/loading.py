"""Loading screen — shown while the agent works on a submission."""

from rich.markup import escape
from textual.app import ComposeResult
from textual.containers import Center, Vertical
from textual.screen import Screen
from textual.widgets import Footer, Header, Label, ProgressBar, Static


class LoadingScreen(Screen):
    """Indeterminate progress while waiting on the analysis agent.

    The agent call cannot be cancelled; going back only hides this screen.
    """

    BINDINGS = [
        ("b", "go_back", "Back"),
    ]

    CSS = """
    LoadingScreen {
        align: center middle;
    }
    #loading-container {
        width: 76;
        height: auto;
        padding: 2 4;
        border: round $primary;
        background: $surface;
    }
    #loading-title {
        text-align: center;
        text-style: bold;
        margin-bottom: 2;
    }
    #status-label {
        text-align: center;
        margin-bottom: 1;
    }
    #progress-bar {
        margin: 1 0;
    }
    #phase-label {
        text-align: center;
        color: $text-muted;
    }
    """

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Center():
            with Vertical(id="loading-container"):
                yield Static("🛡  Checking App Store Compliance …", id="loading-title")
                yield Label("Sending submission to the analysis agent …", id="status-label")
                yield ProgressBar(total=None, show_eta=False, id="progress-bar")
                yield Label("This can take a minute.", id="phase-label")
        yield Footer()

    def update_status(self, message: str, progress: int | None = None) -> None:
        """Update the status line; a progress value switches to a determinate bar."""
        try:
            self.query_one("#status-label", Label).update(escape(message))
            if progress is not None:
                self.query_one("#progress-bar", ProgressBar).update(
                    total=100, progress=progress
                )
        except Exception:
            pass

    def set_phase(self, phase: str) -> None:
        try:
            self.query_one("#phase-label", Label).update(phase)
        except Exception:
            pass

    def action_go_back(self) -> None:
        self.app.pop_screen()
