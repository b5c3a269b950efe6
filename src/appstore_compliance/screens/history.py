"""History screen — past analyses, searchable by app name."""

from rich.markup import escape
from rich.text import Text
from textual import on
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.screen import Screen
from textual.widgets import Button, DataTable, Footer, Header, Input, Label, Static

from appstore_compliance.analysis.report import filter_history, score_label
from appstore_compliance.models import HistoryEntry


class HistoryScreen(Screen):
    """Lists stored analyses; selecting a row reopens its report."""

    BINDINGS = [
        ("b", "go_back", "Back"),
        ("/", "focus_search", "Search"),
    ]

    CSS = """
    #history-container {
        padding: 1 2;
    }
    .section-title {
        text-style: bold;
        color: $secondary;
        margin-bottom: 1;
    }
    #search-row {
        height: auto;
    }
    #search-input {
        width: 1fr;
    }
    #history-table {
        height: 1fr;
        margin-top: 1;
    }
    #empty-label {
        color: $text-muted;
        margin-top: 1;
    }
    """

    def __init__(self, **kwargs) -> None:  # type: ignore[no-untyped-def]
        super().__init__(**kwargs)
        self._rows: list[HistoryEntry] = []

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="history-container"):
            yield Static("ANALYSIS HISTORY", classes="section-title")
            with Horizontal(id="search-row"):
                yield Input(placeholder="Search by app name …", id="search-input")
                yield Button("Clear History", id="clear-history-btn", variant="error")
            yield Label("", id="empty-label")
            yield DataTable(id="history-table", cursor_type="row", zebra_stripes=True)
        yield Footer()

    def on_mount(self) -> None:
        table = self.query_one("#history-table", DataTable)
        table.add_columns("App", "Date", "Score", "High", "Medium", "Low")
        self.refresh_rows()

    def refresh_rows(self) -> None:
        query = self.query_one("#search-input", Input).value
        entries = self.app.visible_history()  # type: ignore[attr-defined]
        self._rows = filter_history(entries, query)

        table = self.query_one("#history-table", DataTable)
        table.clear()
        for entry in self._rows:
            table.add_row(
                Text(entry.app_name or "Unnamed App"),
                entry.date[:10],
                f"{entry.compliance_score} ({score_label(entry.compliance_score)})",
                str(entry.high_count),
                str(entry.medium_count),
                str(entry.low_count),
            )

        empty = self.query_one("#empty-label", Label)
        if not entries:
            empty.update("No analyses yet. Run one from the home screen.")
        elif not self._rows:
            empty.update(f"No analyses match “{escape(query.strip())}”.")
        else:
            empty.update("")

    @on(Input.Changed, "#search-input")
    def search(self) -> None:
        self.refresh_rows()

    @on(DataTable.RowSelected, "#history-table")
    def open_entry(self, event: DataTable.RowSelected) -> None:
        if 0 <= event.cursor_row < len(self._rows):
            self.app.open_history_entry(self._rows[event.cursor_row])  # type: ignore[attr-defined]

    @on(Button.Pressed, "#clear-history-btn")
    def clear_history(self) -> None:
        self.app.history.clear()  # type: ignore[attr-defined]
        self.refresh_rows()
        self.notify("History cleared.")

    def action_focus_search(self) -> None:
        self.query_one("#search-input", Input).focus()

    def action_go_back(self) -> None:
        self.app.pop_screen()
