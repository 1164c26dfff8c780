import logging

from beancount_tui.data_types import (
    Command,
    EditorConfig,
    KeyEvent,
    Modifier,
    PostingFocus,
    PromptOutcome,
)
from beancount_tui.focus import FocusController
from beancount_tui.keymap import BACKSPACE_KEY, CURSOR_KEYS, DELETE_KEY, KeyMap
from beancount_tui.ledger import LedgerModel
from beancount_tui.modal import ModalPrompt
from beancount_tui.record import TransactionRecord
from beancount_tui.text_field import TextField


class EditorSession:
    """All mutable editor state, changed only by ``handle_key``.

    Key events go to the prompt exclusively while it is shown. Otherwise a key
    bound in the key map runs its command and anything else edits the field
    focused in the current transaction.
    """

    logger: logging.Logger = logging.getLogger("beancount_tui")

    def __init__(
        self,
        ledger: LedgerModel,
        config: EditorConfig | None = None,
        keymap: KeyMap | None = None,
    ):
        self.ledger = ledger
        self.config = config if config is not None else EditorConfig()
        self.keymap = keymap if keymap is not None else KeyMap.from_config(self.config.keymap)
        self.focus = FocusController()
        self.prompt = ModalPrompt()
        self.exit_requested = False

    @property
    def current(self) -> TransactionRecord:
        return self.ledger.current

    @property
    def active_field(self) -> TextField:
        return self.focus.active_field(self.current)

    @property
    def records(self) -> list[TransactionRecord]:
        return self.ledger.transactions

    def handle_key(self, event: KeyEvent) -> bool:
        if self.prompt.active:
            outcome = self.prompt.handle_key(event)
            if outcome == PromptOutcome.CONFIRMED:
                self.exit()
            return outcome != PromptOutcome.IGNORED
        command = self.keymap.lookup(event)
        if command is not None:
            return self.run_command(command)
        return self.edit(event)

    def run_command(self, command: Command) -> bool:
        record = self.current
        posting_count = len(record.postings)
        self.logger.debug("Running command %s at %s", command.value, self.focus.location)
        if command == Command.QUIT:
            if self.config.confirm_exit:
                self.prompt.show(self.config.exit_message)
            else:
                self.exit()
            return True
        elif command == Command.NEXT_TRANSACTION:
            return self.focus.switch_transaction(self.ledger, forward=True)
        elif command == Command.PREV_TRANSACTION:
            return self.focus.switch_transaction(self.ledger, forward=False)
        elif command == Command.NEXT_FIELD:
            if self.focus.in_postings:
                return self.focus.next_posting_field()
            return self.focus.next_metadata_field()
        elif command == Command.PREV_FIELD:
            if self.focus.in_postings:
                return self.focus.prev_posting_field()
            return self.focus.prev_metadata_field()
        elif command == Command.FIELD_DOWN:
            if self.focus.in_postings:
                return self.focus.move_posting(True, posting_count)
            return self.focus.enter_postings(True, posting_count)
        elif command == Command.FIELD_UP:
            if self.focus.in_postings:
                return self.focus.move_posting(False, posting_count)
            return self.focus.enter_postings(False, posting_count)
        elif command == Command.ADD_POSTING:
            record.add_posting()
            self.focus.focus_posting(len(record.postings) - 1, len(record.postings))
            return True
        elif command == Command.REMOVE_POSTING:
            location = self.focus.location
            if not isinstance(location, PostingFocus):
                return False
            record.remove_posting(location.index)
            self.focus.clamp(len(record.postings))
            return True
        else:
            raise ValueError(f"Unexpected command {command}")

    def edit(self, event: KeyEvent) -> bool:
        field = self.active_field
        move = CURSOR_KEYS.get(event)
        if move is not None:
            field.move_cursor(move)
            return True
        if event == BACKSPACE_KEY:
            return field.delete_backward()
        if event == DELETE_KEY:
            return field.delete_forward()
        if (
            event.character is not None
            and event.character.isprintable()
            and Modifier.CTRL not in event.modifiers
            and Modifier.ALT not in event.modifiers
        ):
            field.insert(event.character)
            return True
        return False

    def exit(self):
        self.exit_requested = True
        self.logger.debug("Exit requested with %s transactions", len(self.records))
