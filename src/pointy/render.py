"""Turn (ledger, state) into a screen frame.

Frames are plain data so they can be checked without a terminal; the
curses layer in tui.py only paints them.
"""

import enum
import unicodedata
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from .models import Ledger
from .states import (
    MAIN_ENTRIES,
    STEP_AMOUNT,
    STEP_TITLE,
    Main,
    NewReward,
    NewTask,
    SolveTask,
    State,
    TakeReward,
)


class Style(enum.Enum):
    DEFAULT = "default"
    HIGHLIGHT = "highlight"
    LABEL = "label"
    MUTED = "muted"


Segment = Tuple[str, Style]
Line = Tuple[Segment, ...]


@dataclass(frozen=True)
class Frame:
    """A full screen: styled lines, a footer hint and the cursor.

    `cursor` is (row, col) when the cursor should be shown, None to hide it.
    """

    lines: Tuple[Line, ...]
    footer: str = ""
    cursor: Optional[Tuple[int, int]] = None

    def text(self) -> str:
        """Plain text of the body, one line per row."""
        return "\n".join("".join(t for t, _ in line) for line in self.lines)


HINTS = {
    Main: "up/down: select | Enter: open | Esc: quit",
    SolveTask: "up/down: select | Enter: solve | Del: delete | Esc: back",
    TakeReward: "up/down: select | Enter: take | Del: delete | Esc: back",
}
WIZARD_HINTS = {
    STEP_TITLE: "Enter: next | Backspace: erase | Esc: cancel",
    STEP_AMOUNT: "digits only | Enter: next | Backspace: erase | Esc: cancel",
}
CONFIRM_HINT = "y/Enter: create | n: discard | Esc: cancel"


def _flat(text: str) -> str:
    # pasted text may carry line breaks or control bytes; show each as a space
    return "".join(c if c.isprintable() else " " for c in text.replace("\r\n", "\n"))


def cell_width(text: str) -> int:
    """Terminal columns taken by `text`: wide CJK/emoji count 2, combining marks 0."""
    width = 0
    for c in text:
        if unicodedata.combining(c):
            continue
        width += 2 if unicodedata.east_asian_width(c) in ("W", "F") else 1
    return width


def clip(text: str, cells: int) -> str:
    """Longest prefix of `text` that fits in `cells` columns."""
    width = 0
    for i, c in enumerate(text):
        width += cell_width(c)
        if width > cells:
            return text[:i]
    return text


def _plain(text: str) -> Line:
    return ((text, Style.DEFAULT),)


def _row(text: str, selected: bool, muted: bool = False) -> Line:
    if muted:
        return ((text, Style.MUTED),)
    return ((text, Style.HIGHLIGHT if selected else Style.DEFAULT),)


def _main(ledger: Ledger, state: Main) -> Frame:
    lines: List[Line] = [_plain(f"Welcome to pointy! You have {ledger.points} points."), ()]
    for index, entry in enumerate(MAIN_ENTRIES):
        lines.append(_row(f"[+] {entry}", index == state.selected))
    return Frame(tuple(lines), HINTS[Main])


def _wizard(state: Any, noun: str, amount_label: str) -> Frame:
    title = _flat(state.title)
    if state.step == STEP_TITLE:
        lines = [_plain(f"New {noun}"), (), (("Title: ", Style.LABEL), (title, Style.DEFAULT))]
    elif state.step == STEP_AMOUNT:
        lines = [
            _plain(f"{noun.capitalize()} {title}"),
            (),
            ((f"{amount_label}: ", Style.LABEL), (state.amount, Style.DEFAULT)),
        ]
    else:
        lines = [
            _plain("Almost done"),
            (),
            (("Title: ", Style.LABEL), (title, Style.DEFAULT)),
            ((f"{amount_label}: ", Style.LABEL), (state.amount, Style.DEFAULT)),
            _plain("Create? [y/n] "),
        ]
    last = lines[-1]
    cursor = (len(lines) - 1, sum(cell_width(t) for t, _ in last))
    return Frame(tuple(lines), WIZARD_HINTS.get(state.step, CONFIRM_HINT), cursor)


def _solve_task(ledger: Ledger, state: SolveTask) -> Frame:
    lines: List[Line] = [_plain(f"Currently you have {len(ledger.tasks)} tasks."), ()]
    for index, task in enumerate(ledger.tasks):
        lines.append(_row(f"[{task.reward}] {_flat(task.title)}", index == state.selected))
    return Frame(tuple(lines), HINTS[SolveTask])


def _take_reward(ledger: Ledger, state: TakeReward) -> Frame:
    lines: List[Line] = [_plain(f"Currently you have {len(ledger.rewards)} rewards."), ()]
    for index, reward in enumerate(ledger.rewards):
        lines.append(
            _row(
                f"[{reward.price}] {_flat(reward.title)}",
                index == state.selected,
                muted=reward.price > ledger.points,
            )
        )
    return Frame(tuple(lines), HINTS[TakeReward])


def compose(ledger: Ledger, state: State) -> Frame:
    """Build the frame for `state`; a pure function of its arguments."""
    if isinstance(state, Main):
        return _main(ledger, state)
    if isinstance(state, NewTask):
        return _wizard(state, "task", "Reward")
    if isinstance(state, NewReward):
        return _wizard(state, "reward", "Price")
    if isinstance(state, SolveTask):
        return _solve_task(ledger, state)
    if isinstance(state, TakeReward):
        return _take_reward(ledger, state)
    raise TypeError(f"unknown state: {state!r}")


class Renderer:
    """Composes frames, skipping any (ledger, state) pair already shown.

    The fingerprint is the exact ledger snapshot plus the (immutable) state,
    compared by equality, so every visible change produces a new frame.
    """

    def __init__(self) -> None:
        self._last: Optional[Tuple] = None

    def invalidate(self) -> None:
        """Force the next render to produce a frame (e.g. after a resize)."""
        self._last = None

    def render(self, ledger: Ledger, state: State) -> Optional[Frame]:
        fingerprint = (ledger.snapshot(), state)
        if fingerprint == self._last:
            return None
        self._last = fingerprint
        return compose(ledger, state)
