"""Guidelines screen — quick reference of the App Store Review Guidelines."""

from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.screen import Screen
from textual.widgets import Footer, Header, Markdown

from appstore_compliance.analysis.guidelines import guidelines_markdown


class GuidelinesScreen(Screen):
    BINDINGS = [
        ("b", "go_back", "Back"),
    ]

    CSS = """
    #guidelines-scroll {
        padding: 1 2;
    }
    """

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with VerticalScroll(id="guidelines-scroll"):
            yield Markdown(guidelines_markdown())
        yield Footer()

    def action_go_back(self) -> None:
        self.app.pop_screen()
