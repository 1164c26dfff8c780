from rich import box
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from beancount_tui.constants import APP_TITLE
from beancount_tui.data_types import Command, MetadataField, PostingField
from beancount_tui.focus import FocusController
from beancount_tui.keymap import KeyMap
from beancount_tui.modal import ModalPrompt
from beancount_tui.record import TransactionRecord
from beancount_tui.session import EditorSession
from beancount_tui.text_field import TextField

FIELD_BORDER_STYLE = "bright_black"
FOCUSED_BORDER_STYLE = "yellow"
CURSOR_STYLE = "reverse"
KEY_STYLE = "blue bold"
PROMPT_BORDER_STYLE = "red"
INSTRUCTIONS = (
    (Command.PREV_TRANSACTION, "Prev Transaction"),
    (Command.NEXT_TRANSACTION, "Next Transaction"),
    (Command.NEXT_FIELD, "Next Field"),
    (Command.ADD_POSTING, "Add Posting"),
    (Command.REMOVE_POSTING, "Remove Posting"),
    (Command.QUIT, "Quit"),
)


def field_text(field: TextField, focused: bool) -> Text:
    text = Text(no_wrap=field.single_line, overflow="ellipsis")
    for row, line in enumerate(field.lines):
        if row:
            text.append("\n")
        if not focused or row != field.cursor_row:
            text.append(line)
            continue
        col = field.cursor_col
        text.append(line[:col])
        # the cursor past the end of line is drawn on a blank cell
        text.append(line[col : col + 1] or " ", style=CURSOR_STYLE)
        text.append(line[col + 1 :])
    return text


def render_field(field: TextField, focused: bool) -> Panel:
    return Panel(
        field_text(field, focused),
        title=Text(field.label or ""),
        title_align="left",
        box=box.HEAVY if focused else box.ROUNDED,
        border_style=FOCUSED_BORDER_STYLE if focused else FIELD_BORDER_STYLE,
    )


def render_metadata(record: TransactionRecord, focus: FocusController) -> Table:
    table = Table.grid(expand=True)
    # a panel title needs its label length plus four cells
    table.add_column(width=16)
    table.add_column(width=10)
    table.add_column(ratio=1, min_width=12)
    table.add_column(ratio=2, min_width=15)
    table.add_row(
        *(
            render_field(record.field(kind), focus.is_focused(kind))
            for kind in MetadataField
        )
    )
    return table


def render_postings(record: TransactionRecord, focus: FocusController) -> RenderableType:
    if not record.postings:
        return Text("No postings", style="dim")
    table = Table.grid(expand=True)
    table.add_column(ratio=3, min_width=14)
    table.add_column(ratio=1, min_width=12)
    table.add_column(width=14)
    for index, posting in enumerate(record.postings):
        table.add_row(
            *(
                render_field(posting.field(kind), focus.is_focused(kind, index))
                for kind in PostingField
            )
        )
    return table


def render_title(session: EditorSession) -> Text:
    title = Text(
        f"{APP_TITLE} ({session.ledger.current_index + 1}/{len(session.ledger)})",
        style="bold",
    )
    lineno = session.current.lineno
    if lineno is not None:
        title.append(f"  line {lineno}", style="dim")
    if session.current.is_modified:
        title.append("  [modified]", style="yellow")
    return title


def render_transaction(session: EditorSession) -> Group:
    return Group(
        render_metadata(session.current, session.focus),
        render_postings(session.current, session.focus),
    )


def render_instructions(keymap: KeyMap) -> Text:
    text = Text()
    for command, label in INSTRUCTIONS:
        keys = keymap.keys_for(command)
        if not keys:
            continue
        text.append(f" {label} ")
        text.append(f"<{keys[0]}>", style=KEY_STYLE)
    return text


def render_prompt(prompt: ModalPrompt) -> Panel:
    text = Text(prompt.message)
    text.append("\n\n")
    text.append("<enter>", style=KEY_STYLE)
    text.append(" Confirm  ")
    text.append("<escape>", style=KEY_STYLE)
    text.append(" Cancel")
    return Panel(
        text,
        title=Text("Confirm", style="bold"),
        box=box.HEAVY,
        border_style=PROMPT_BORDER_STYLE,
    )
