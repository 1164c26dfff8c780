import dataclasses
import datetime
import decimal
import enum

import pydantic
from beancount_parser.data_types import EntryType
from pydantic import BaseModel

from beancount_tui.constants import DEFAULT_EXIT_MESSAGE


@dataclasses.dataclass(frozen=True)
class Amount:
    number: decimal.Decimal
    # ISO 4217 code or commodity symbol
    currency: str | None = None


@dataclasses.dataclass(frozen=True)
class MetadataItem:
    key: str
    value: str | None = None


@dataclasses.dataclass(frozen=True)
class ParsedPosting:
    account: str
    flag: str | None = None
    amount: Amount | None = None
    # raw cost spec, e.g. "{100.00 USD}"
    cost: str | None = None
    price: Amount | None = None
    metadata: tuple[MetadataItem, ...] = ()


@dataclasses.dataclass(frozen=True)
class ParsedTransaction:
    flag: str | None = None
    payee: str | None = None
    narration: str | None = None
    tags: tuple[str, ...] = ()
    links: tuple[str, ...] = ()
    metadata: tuple[MetadataItem, ...] = ()
    postings: tuple[ParsedPosting, ...] = ()


@dataclasses.dataclass(frozen=True)
class Directive:
    type: EntryType
    # the line number of the directive in the source text
    lineno: int
    date: datetime.date | None = None
    # only set for EntryType.TXN
    transaction: ParsedTransaction | None = None
    # raw argument tokens of every other directive kind
    args: tuple[str, ...] = ()
    metadata: tuple[MetadataItem, ...] = ()


class MetadataField(enum.IntEnum):
    DATE = 0
    FLAG = 1
    PAYEE = 2
    NARRATION = 3


class PostingField(enum.IntEnum):
    ACCOUNT = 0
    AMOUNT = 1
    CURRENCY = 2


@dataclasses.dataclass(frozen=True)
class MetadataFocus:
    field: MetadataField


@dataclasses.dataclass(frozen=True)
class PostingFocus:
    index: int
    field: PostingField = PostingField.ACCOUNT


FocusLocation = MetadataFocus | PostingFocus


@enum.unique
class CursorMove(enum.Enum):
    FORWARD = "forward"
    BACK = "back"
    UP = "up"
    DOWN = "down"
    HEAD = "head"
    END = "end"
    TOP = "top"
    BOTTOM = "bottom"


@enum.unique
class Modifier(enum.Enum):
    CTRL = "ctrl"
    SHIFT = "shift"
    ALT = "alt"


@dataclasses.dataclass(frozen=True)
class KeyEvent:
    key: str
    modifiers: frozenset[Modifier] = frozenset()
    # the printable character produced by the key press, if any
    character: str | None = dataclasses.field(default=None, compare=False)


@enum.unique
class Command(enum.Enum):
    QUIT = "quit"
    NEXT_TRANSACTION = "next_transaction"
    PREV_TRANSACTION = "prev_transaction"
    NEXT_FIELD = "next_field"
    PREV_FIELD = "prev_field"
    FIELD_DOWN = "field_down"
    FIELD_UP = "field_up"
    ADD_POSTING = "add_posting"
    REMOVE_POSTING = "remove_posting"


@enum.unique
class PromptOutcome(enum.Enum):
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    IGNORED = "ignored"


class EditorBaseModel(BaseModel):
    model_config = pydantic.ConfigDict(extra="forbid")


class KeyMapConfig(EditorBaseModel):
    """
    Key bindings of the editor commands, each command accepts a list of keys:

    ```YAML
    keymap:
      next_transaction:
        - ctrl+n
        - pagedown
    ```
    """

    quit: list[str] = ["escape"]
    next_transaction: list[str] = ["ctrl+d", "ctrl+f", "ctrl+n", "ctrl+l"]
    prev_transaction: list[str] = ["ctrl+u", "ctrl+b", "ctrl+p", "ctrl+h"]
    next_field: list[str] = ["tab"]
    prev_field: list[str] = ["shift+tab"]
    field_down: list[str] = ["down"]
    field_up: list[str] = ["up"]
    add_posting: list[str] = ["ctrl+a"]
    remove_posting: list[str] = ["ctrl+x"]


class EditorConfig(EditorBaseModel):
    keymap: KeyMapConfig = pydantic.Field(default_factory=KeyMapConfig)
    """Key bindings of the editor commands"""
    confirm_exit: bool = True
    """Ask for confirmation before handing off the edited transactions"""
    exit_message: str = DEFAULT_EXIT_MESSAGE
    """Message shown by the exit confirmation prompt"""
