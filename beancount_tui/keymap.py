import typing

from beancount_tui.data_types import (
    Command,
    CursorMove,
    KeyEvent,
    KeyMapConfig,
    Modifier,
)

CURSOR_KEY_NAMES = {
    "left": CursorMove.BACK,
    "right": CursorMove.FORWARD,
    "home": CursorMove.HEAD,
    "end": CursorMove.END,
    "ctrl+home": CursorMove.TOP,
    "ctrl+end": CursorMove.BOTTOM,
}
BACKSPACE_KEY = KeyEvent("backspace")
DELETE_KEY = KeyEvent("delete")


class KeyBindingError(ValueError):
    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason

    def __str__(self):
        return f"Invalid key binding {self.key!r}: {self.reason}"


def parse_key(value: str, character: str | None = None) -> KeyEvent:
    """Parse a key name such as ``ctrl+n`` or ``shift+tab`` into a key event"""
    *modifier_names, key = value.split("+")
    if not key:
        raise KeyBindingError(value, "missing key")
    try:
        modifiers = frozenset(Modifier(name.lower()) for name in modifier_names)
    except ValueError:
        raise KeyBindingError(value, "unknown modifier")
    return KeyEvent(key=key, modifiers=modifiers, character=character)


def key_name(event: KeyEvent) -> str:
    modifiers = [
        modifier.value for modifier in Modifier if modifier in event.modifiers
    ]
    return "+".join([*modifiers, event.key])


CURSOR_KEYS = {parse_key(name): move for name, move in CURSOR_KEY_NAMES.items()}


class KeyMap:
    def __init__(self, bindings: dict[KeyEvent, Command]):
        self.bindings = bindings

    @classmethod
    def from_config(cls, config: KeyMapConfig | None = None) -> "KeyMap":
        config = config if config is not None else KeyMapConfig()
        bindings: dict[KeyEvent, Command] = {}
        for command in Command:
            keys: list[str] = getattr(config, command.value)
            for key in keys:
                event = parse_key(key)
                bound = bindings.get(event)
                if bound is not None and bound != command:
                    raise KeyBindingError(
                        key, f"bound to both {bound.value} and {command.value}"
                    )
                if event in CURSOR_KEYS or event in (BACKSPACE_KEY, DELETE_KEY):
                    raise KeyBindingError(key, "reserved for text editing")
                bindings[event] = command
        return cls(bindings)

    def lookup(self, event: KeyEvent) -> Command | None:
        return self.bindings.get(event)

    def keys_for(self, command: Command) -> list[str]:
        return [key_name(event) for event, bound in self.bindings.items() if bound == command]

    def __iter__(self) -> typing.Iterator[tuple[KeyEvent, Command]]:
        return iter(self.bindings.items())
