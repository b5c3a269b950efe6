"""Fix-prompt screen — copyable remediation prompt for a chosen environment."""

from typing import Optional

from rich.markup import escape
from textual import on
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.screen import Screen
from textual.widgets import Button, Footer, Header, Select, Static, TextArea

from appstore_compliance.analysis.fix_prompts import (
    DEV_ENVIRONMENTS,
    batch_fix_prompt,
    fix_prompt,
    get_environment,
)
from appstore_compliance.models import AnalysisResult, Violation


class FixPromptScreen(Screen):
    """Shows a fix prompt for one violation, or for every violation when none is given."""

    BINDINGS = [
        ("b", "go_back", "Back"),
        ("c", "copy", "Copy"),
    ]

    CSS = """
    #fix-container {
        padding: 1 2;
    }
    .section-title {
        text-style: bold;
        color: $secondary;
        margin-bottom: 1;
    }
    #env-row {
        height: auto;
    }
    #env-select {
        width: 1fr;
    }
    #prompt-text {
        height: 1fr;
        margin-top: 1;
    }
    """

    def __init__(
        self,
        result: AnalysisResult,
        violation: Optional[Violation] = None,
        category_name: str = "",
        **kwargs,  # type: ignore[no-untyped-def]
    ) -> None:
        super().__init__(**kwargs)
        self.result = result
        self.violation = violation
        self.category_name = category_name

    def compose(self) -> ComposeResult:
        title = (
            f"FIX PROMPT · {self.violation.title or 'Violation'}"
            if self.violation is not None
            else "FIX PROMPT · ALL VIOLATIONS"
        )
        yield Header(show_clock=True)
        with Vertical(id="fix-container"):
            yield Static(escape(title), classes="section-title")
            with Horizontal(id="env-row"):
                yield Select(
                    [(f"{e.name} ({e.category.value})", e.id) for e in DEV_ENVIRONMENTS],
                    value=DEV_ENVIRONMENTS[0].id,
                    allow_blank=False,
                    id="env-select",
                )
                yield Button("Copy", id="copy-btn", variant="primary")
            yield TextArea(read_only=True, id="prompt-text")
        yield Footer()

    def on_mount(self) -> None:
        self._render_prompt(DEV_ENVIRONMENTS[0].id)

    def build_prompt(self, env_id: str) -> str:
        env = get_environment(env_id) or DEV_ENVIRONMENTS[0]
        if self.violation is not None:
            return fix_prompt(env, self.violation, self.category_name)
        return batch_fix_prompt(env, self.result)

    def _render_prompt(self, env_id: str) -> None:
        self.query_one("#prompt-text", TextArea).load_text(self.build_prompt(env_id))

    @on(Select.Changed, "#env-select")
    def change_environment(self, event: Select.Changed) -> None:
        self._render_prompt(str(event.value))

    @on(Button.Pressed, "#copy-btn")
    def action_copy(self) -> None:
        self.app.copy_to_clipboard(self.query_one("#prompt-text", TextArea).text)
        self.notify("Prompt copied to clipboard.")

    def action_go_back(self) -> None:
        self.app.pop_screen()
