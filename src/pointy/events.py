"""Input events delivered to the state machine."""

import enum
from dataclasses import dataclass
from typing import Union


class Key(enum.Enum):
    CHAR = "char"
    ENTER = "enter"
    BACKSPACE = "backspace"
    UP = "up"
    DOWN = "down"
    DELETE = "delete"
    ESC = "esc"


@dataclass(frozen=True)
class KeyPress:
    """A single key. `char` is set only for Key.CHAR."""

    key: Key
    char: str = ""
    ctrl: bool = False

    @property
    def is_interrupt(self) -> bool:
        return self.ctrl and self.key is Key.CHAR and self.char.lower() == "c"


@dataclass(frozen=True)
class Paste:
    """Text pasted in one go (bracketed paste)."""

    text: str


@dataclass(frozen=True)
class Resize:
    """The terminal changed size."""


Event = Union[KeyPress, Paste, Resize]


def char(c: str, ctrl: bool = False) -> KeyPress:
    return KeyPress(Key.CHAR, c, ctrl)


def key(k: Key) -> KeyPress:
    return KeyPress(k)
