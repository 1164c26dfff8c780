import pytest

from beancount_tui.data_types import Command
from beancount_tui.data_types import KeyEvent
from beancount_tui.data_types import KeyMapConfig
from beancount_tui.data_types import Modifier
from beancount_tui.keymap import KeyBindingError
from beancount_tui.keymap import KeyMap
from beancount_tui.keymap import key_name
from beancount_tui.keymap import parse_key


@pytest.mark.parametrize(
    "value, expected",
    [
        ("escape", KeyEvent("escape")),
        ("ctrl+n", KeyEvent("n", frozenset({Modifier.CTRL}))),
        ("shift+tab", KeyEvent("tab", frozenset({Modifier.SHIFT}))),
        ("ctrl+shift+x", KeyEvent("x", frozenset({Modifier.CTRL, Modifier.SHIFT}))),
        ("Ctrl+a", KeyEvent("a", frozenset({Modifier.CTRL}))),
    ],
)
def test_parse_key(value: str, expected: KeyEvent):
    assert parse_key(value) == expected


@pytest.mark.parametrize("value", ["super+a", "ctrl+", ""])
def test_parse_key_invalid(value: str):
    with pytest.raises(KeyBindingError):
        parse_key(value)


def test_parse_key_character_is_not_compared():
    assert parse_key("a", "a") == parse_key("a")
    assert parse_key("a", "a").character == "a"


@pytest.mark.parametrize("value", ["escape", "ctrl+n", "shift+tab", "ctrl+shift+x"])
def test_key_name(value: str):
    assert key_name(parse_key(value)) == value


@pytest.mark.parametrize(
    "key, command",
    [
        ("escape", Command.QUIT),
        ("ctrl+n", Command.NEXT_TRANSACTION),
        ("ctrl+d", Command.NEXT_TRANSACTION),
        ("ctrl+p", Command.PREV_TRANSACTION),
        ("ctrl+u", Command.PREV_TRANSACTION),
        ("tab", Command.NEXT_FIELD),
        ("shift+tab", Command.PREV_FIELD),
        ("down", Command.FIELD_DOWN),
        ("up", Command.FIELD_UP),
        ("ctrl+a", Command.ADD_POSTING),
        ("ctrl+x", Command.REMOVE_POSTING),
        ("a", None),
        ("left", None),
    ],
)
def test_default_keymap(key: str, command: Command | None):
    keymap = KeyMap.from_config()
    assert keymap.lookup(parse_key(key)) == command


def test_custom_keymap():
    keymap = KeyMap.from_config(
        KeyMapConfig(next_transaction=["pagedown"], prev_transaction=["pageup"])
    )
    assert keymap.lookup(parse_key("pagedown")) == Command.NEXT_TRANSACTION
    assert keymap.lookup(parse_key("ctrl+n")) is None
    assert keymap.keys_for(Command.PREV_TRANSACTION) == ["pageup"]
    assert dict(keymap)[parse_key("tab")] == Command.NEXT_FIELD


@pytest.mark.parametrize(
    "config",
    [
        KeyMapConfig(add_posting=["tab"]),
        KeyMapConfig(quit=["left"]),
        KeyMapConfig(remove_posting=["backspace"]),
        KeyMapConfig(quit=["hyper+q"]),
    ],
)
def test_invalid_keymap(config: KeyMapConfig):
    with pytest.raises(KeyBindingError):
        KeyMap.from_config(config)
