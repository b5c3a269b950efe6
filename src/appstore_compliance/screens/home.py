"""Home screen — repository import and submission form."""

from rich.markup import escape
from textual import on
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.screen import Screen
from textual.widgets import (
    Button,
    Checkbox,
    Footer,
    Header,
    Input,
    Label,
    Select,
    Static,
    Switch,
    TextArea,
)

from appstore_compliance.samples import AGE_RATINGS
from appstore_compliance.state import (
    AppState,
    apply_sample_mode,
    clear_form,
    clear_repo_files,
    remove_repo_file,
    set_deep_scan,
    set_field,
    toggle_category,
)

# widget id → AppState field
INPUT_FIELDS = {
    "repo-input": "repo_url",
    "app-name-input": "app_name",
    "subtitle-input": "subtitle",
    "keywords-input": "keywords",
}
TEXT_FIELDS = {
    "code-input": "code_snippet",
    "description-input": "app_description",
}


class HomeScreen(Screen):
    """Collects code, metadata and focus areas for an analysis run."""

    BINDINGS = [
        ("ctrl+r", "analyze", "Analyze"),
        ("ctrl+l", "clear_form", "Clear"),
    ]

    CSS = """
    #home-container {
        padding: 1 2;
    }
    .section {
        height: auto;
        padding: 1 2;
        margin-bottom: 1;
        border: round $primary;
        background: $surface;
    }
    .section-title {
        text-style: bold;
        color: $secondary;
        margin-bottom: 1;
    }
    .field-label {
        margin-top: 1;
        color: $text;
    }
    .row {
        height: auto;
    }
    #repo-input {
        width: 1fr;
    }
    #code-input {
        height: 14;
    }
    #description-input {
        height: 6;
    }
    .file-row {
        height: 3;
    }
    .file-path {
        width: 1fr;
        padding: 1 1 0 0;
    }
    .toggle-label {
        padding: 1 1 0 1;
    }
    #repo-status {
        color: $text-muted;
    }
    #repo-error, #error-label {
        color: $error;
    }
    #analyze-btn {
        margin-top: 1;
        width: 100%;
    }
    """

    @property
    def state(self) -> AppState:
        return self.app.state  # type: ignore[attr-defined]

    def _set_state(self, state: AppState) -> None:
        self.app.set_state(state)  # type: ignore[attr-defined]

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with VerticalScroll(id="home-container"):
            with Horizontal(classes="row"):
                yield Label("Sample Data", classes="toggle-label")
                yield Switch(value=False, id="sample-switch")
                yield Label("Deep Scan", classes="toggle-label")
                yield Switch(value=False, id="deep-scan-switch")

            with Vertical(classes="section"):
                yield Static("GITHUB REPOSITORY", classes="section-title")
                with Horizontal(classes="row"):
                    yield Input(
                        placeholder="https://github.com/owner/repo",
                        id="repo-input",
                    )
                    yield Button("Fetch", id="fetch-repo-btn", variant="primary")
                    yield Button("Clear", id="clear-repo-btn")
                yield Label("", id="repo-status")
                yield Label("", id="repo-error")
                yield Vertical(id="repo-files", classes="row")

            with Vertical(classes="section"):
                yield Static("CODE SNIPPETS", classes="section-title")
                yield TextArea(id="code-input")

            with Vertical(classes="section"):
                yield Static("APP DESCRIPTION", classes="section-title")
                yield TextArea(id="description-input")

            with Vertical(classes="section"):
                yield Static("APP METADATA", classes="section-title")
                yield Label("App Name", classes="field-label")
                yield Input(id="app-name-input")
                yield Label("Subtitle", classes="field-label")
                yield Input(id="subtitle-input")
                yield Label("Keywords", classes="field-label")
                yield Input(placeholder="comma, separated", id="keywords-input")
                yield Label("Age Rating", classes="field-label")
                yield Select([(r, r) for r in AGE_RATINGS], id="age-select")

            with Vertical(classes="section"):
                yield Static("FOCUS AREAS", classes="section-title")
                for cat in self.state.focus_categories:
                    yield Checkbox(cat.name, value=cat.checked, id=f"focus-{cat.id}")

            yield Label("", id="error-label")
            yield Button("▶  Analyze Compliance", id="analyze-btn", variant="success")
        yield Footer()

    def on_mount(self) -> None:
        self.refresh_from_state()
        self.query_one("#repo-input", Input).focus()

    # ── State → widgets ───────────────────────────────────────────────────

    def refresh_from_state(self) -> None:
        """Push the current AppState into every form widget."""
        state = self.state
        for widget_id, field in INPUT_FIELDS.items():
            widget = self.query_one(f"#{widget_id}", Input)
            if widget.value != getattr(state, field):
                widget.value = getattr(state, field)
        for widget_id, field in TEXT_FIELDS.items():
            area = self.query_one(f"#{widget_id}", TextArea)
            if area.text != getattr(state, field):
                area.load_text(getattr(state, field))

        age = self.query_one("#age-select", Select)
        if state.age_rating in AGE_RATINGS:
            age.value = state.age_rating
        else:
            age.clear()

        for cat in state.focus_categories:
            self.query_one(f"#focus-{cat.id}", Checkbox).value = cat.checked
        self.query_one("#sample-switch", Switch).value = state.sample_mode
        self.query_one("#deep-scan-switch", Switch).value = state.deep_scan

        self.query_one("#repo-error", Label).update(
            f"⚠  {escape(state.repo_error)}" if state.repo_error else ""
        )
        self.query_one("#error-label", Label).update(
            f"⚠  {escape(state.error_message)}" if state.error_message else ""
        )
        self._render_repo_files()

    def _render_repo_files(self) -> None:
        container = self.query_one("#repo-files", Vertical)
        container.remove_children()
        rows = []
        for f in self.state.repo_files:
            rows.append(
                Horizontal(
                    Label(f"📄 {escape(f.path)}  ({f.size:,} B)", classes="file-path"),
                    Button("✕", name=f.path, variant="error"),
                    classes="file-row",
                )
            )
        if rows:
            container.mount(*rows)

    def set_fetching(self, busy: bool) -> None:
        self.query_one("#fetch-repo-btn", Button).disabled = busy

    def set_repo_status(self, message: str) -> None:
        try:
            self.query_one("#repo-status", Label).update(escape(message))
        except Exception:
            pass

    # ── Widgets → state ───────────────────────────────────────────────────

    @on(Input.Changed)
    def sync_input(self, event: Input.Changed) -> None:
        field = INPUT_FIELDS.get(event.input.id or "")
        if field and getattr(self.state, field) != event.value:
            self._set_state(set_field(self.state, field, event.value))

    @on(TextArea.Changed)
    def sync_text(self, event: TextArea.Changed) -> None:
        field = TEXT_FIELDS.get(event.text_area.id or "")
        text = event.text_area.text
        if field and getattr(self.state, field) != text:
            self._set_state(set_field(self.state, field, text))

    @on(Select.Changed, "#age-select")
    def sync_age(self, event: Select.Changed) -> None:
        value = "" if event.value is Select.BLANK else str(event.value)
        if value != self.state.age_rating:
            self._set_state(set_field(self.state, "age_rating", value))

    @on(Checkbox.Changed)
    def sync_focus(self, event: Checkbox.Changed) -> None:
        cat_id = (event.checkbox.id or "").removeprefix("focus-")
        current = next((c for c in self.state.focus_categories if c.id == cat_id), None)
        if current is not None and current.checked != event.value:
            self._set_state(toggle_category(self.state, cat_id))

    @on(Switch.Changed, "#deep-scan-switch")
    def sync_deep_scan(self, event: Switch.Changed) -> None:
        if event.value != self.state.deep_scan:
            self._set_state(set_deep_scan(self.state, event.value))

    @on(Switch.Changed, "#sample-switch")
    def toggle_sample(self, event: Switch.Changed) -> None:
        if event.value == self.state.sample_mode:
            return
        self._set_state(apply_sample_mode(self.state, event.value))
        if not event.value:
            self.app.history.load()  # type: ignore[attr-defined]
        self.refresh_from_state()
        if event.value and self.state.show_results:
            self.notify("Sample report loaded. Press r to view it.")

    # ── Actions ───────────────────────────────────────────────────────────

    @on(Button.Pressed, "#fetch-repo-btn")
    @on(Input.Submitted, "#repo-input")
    def start_fetch(self) -> None:
        url = self.query_one("#repo-input", Input).value
        self._set_state(
            self.state.model_copy(update={"repo_error": ""})
        )
        self.query_one("#repo-error", Label).update("")
        self.app.fetch_repository(url)  # type: ignore[attr-defined]

    @on(Button.Pressed, "#clear-repo-btn")
    def clear_repo(self) -> None:
        self._set_state(clear_repo_files(self.state))
        self.set_repo_status("")
        self.refresh_from_state()

    @on(Button.Pressed, ".file-row Button")
    def remove_file(self, event: Button.Pressed) -> None:
        if event.button.name:
            self._set_state(remove_repo_file(self.state, event.button.name))
            self.refresh_from_state()

    @on(Button.Pressed, "#analyze-btn")
    def action_analyze(self) -> None:
        self.query_one("#error-label", Label).update("")
        self.app.run_analysis()  # type: ignore[attr-defined]

    def action_clear_form(self) -> None:
        self._set_state(clear_form(self.state))
        self.set_repo_status("")
        self.refresh_from_state()
