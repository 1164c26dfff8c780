import dataclasses

from beancount_tui.data_types import KeyEvent, PromptOutcome

CONFIRM_KEY = KeyEvent("enter")
CANCEL_KEY = KeyEvent("escape")


@dataclasses.dataclass
class ModalPrompt:
    """Confirmation overlay which consumes every key event while active."""

    active: bool = False
    message: str = ""

    def show(self, message: str):
        self.active = True
        self.message = message

    def hide(self):
        self.active = False

    def handle_key(self, event: KeyEvent) -> PromptOutcome:
        if not self.active:
            return PromptOutcome.IGNORED
        if event == CONFIRM_KEY:
            self.hide()
            return PromptOutcome.CONFIRMED
        elif event == CANCEL_KEY:
            self.hide()
            return PromptOutcome.CANCELLED
        return PromptOutcome.IGNORED
