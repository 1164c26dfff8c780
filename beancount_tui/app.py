"""Textual front end of the editor.

The screen does no editing of its own: every key press is normalised into a
``KeyEvent``, handed to ``EditorSession.handle_key`` and the view is redrawn
from the session state.
"""

from __future__ import annotations

from rich.console import RenderableType
from textual import events
from textual.app import App, ComposeResult
from textual.screen import Screen
from textual.widget import Widget
from textual.widgets import Static

from beancount_tui.keymap import KeyBindingError, parse_key
from beancount_tui.record import TransactionRecord
from beancount_tui.render import (
    render_instructions,
    render_prompt,
    render_title,
    render_transaction,
)
from beancount_tui.session import EditorSession


class TransactionView(Widget):
    """Metadata row and postings of the current transaction."""

    def __init__(self, session: EditorSession, **kwargs) -> None:
        super().__init__(**kwargs)
        self.session = session

    def render(self) -> RenderableType:
        return render_transaction(self.session)


class EditorScreen(Screen):
    DEFAULT_CSS = """
    EditorScreen {
        layers: base overlay;
    }
    #title {
        height: 1;
        content-align: center middle;
    }
    #transaction {
        height: 1fr;
    }
    #instructions {
        dock: bottom;
        height: 1;
    }
    #prompt {
        layer: overlay;
        dock: top;
        margin: 6 10;
        height: auto;
        display: none;
    }
    """

    def __init__(self, session: EditorSession) -> None:
        super().__init__()
        self.session = session

    def compose(self) -> ComposeResult:
        yield Static(id="title")
        yield TransactionView(self.session, id="transaction")
        yield Static(render_instructions(self.session.keymap), id="instructions")
        yield Static(id="prompt")

    def on_mount(self) -> None:
        self.refresh_view()

    def on_key(self, event: events.Key) -> None:
        # keep textual's own bindings (tab focus cycling) out of the way
        event.stop()
        event.prevent_default()
        try:
            key_event = parse_key(event.key, event.character)
        except KeyBindingError:
            # modifiers such as super or meta are not supported
            return
        changed = self.session.handle_key(key_event)
        if self.session.exit_requested:
            self.app.exit(self.session.records)
            return
        if changed:
            self.refresh_view()

    def refresh_view(self) -> None:
        self.query_one("#title", Static).update(render_title(self.session))
        self.query_one("#transaction", TransactionView).refresh()
        prompt = self.query_one("#prompt", Static)
        prompt.display = self.session.prompt.active
        if self.session.prompt.active:
            prompt.update(render_prompt(self.session.prompt))


class EditorApp(App[list[TransactionRecord]]):
    """Interactive editor, returns the edited records on confirmed exit."""

    TITLE = "beancount-tui"
    # ctrl+p is bound to previous transaction
    ENABLE_COMMAND_PALETTE = False

    def __init__(self, session: EditorSession) -> None:
        super().__init__()
        self.session = session

    def get_default_screen(self) -> Screen:
        return EditorScreen(self.session)
