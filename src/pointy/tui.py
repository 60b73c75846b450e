"""pointy curses-based terminal user interface."""

import curses
import logging
import os
import sys
from collections import deque
from typing import Callable, Deque, Dict, List, Optional

from .events import Event, Key, Paste, Resize, char, key
from .machine import Machine
from .render import Frame, Renderer, Style, cell_width, clip
from .storage import load_ledger

logger = logging.getLogger(__name__)

PASTE_START = "[200~"
PASTE_END = "\x1b[201~"
BRACKETED_PASTE_ON = "\x1b[?2004h"
BRACKETED_PASTE_OFF = "\x1b[?2004l"
# CSI and SS3 sequences (arrows, function keys) start with these after Esc
ESCAPE_INTRODUCERS = ("[", "O")

SPECIAL_KEYS = {
    curses.KEY_UP: Key.UP,
    curses.KEY_DOWN: Key.DOWN,
    curses.KEY_DC: Key.DELETE,
    curses.KEY_BACKSPACE: Key.BACKSPACE,
    curses.KEY_ENTER: Key.ENTER,
}
CONTROL_KEYS = {
    "\r": Key.ENTER,
    "\n": Key.ENTER,
    "\x7f": Key.BACKSPACE,
    "\b": Key.BACKSPACE,
}


class KeyReader:
    """Reads curses input and turns it into pointy events."""

    def __init__(self, win):
        self.win = win
        self._buffer: Deque = deque()

    def _next(self):
        if self._buffer:
            return self._buffer.popleft()
        return self.win.get_wch()

    def read(self) -> Optional[Event]:
        """Block for the next event; None for input pointy does not use."""
        ch = self._next()
        if isinstance(ch, int):
            if ch == curses.KEY_RESIZE:
                return Resize()
            code = SPECIAL_KEYS.get(ch)
            return key(code) if code else None
        if ch == "\x1b":
            return self._escape()
        if ch in CONTROL_KEYS:
            return key(CONTROL_KEYS[ch])
        if 1 <= ord(ch) <= 26:
            # raw mode delivers Ctrl+<letter> as a control byte
            return char(chr(ord(ch) + 96), ctrl=True)
        if not ch.isprintable():
            return None
        return char(ch)

    def _pending(self, limit: int) -> List:
        chars: List = []
        while self._buffer and len(chars) < limit:
            chars.append(self._buffer.popleft())
        if len(chars) == limit:
            return chars
        self.win.nodelay(True)
        try:
            while len(chars) < limit:
                try:
                    chars.append(self.win.get_wch())
                except curses.error:
                    break
        finally:
            self.win.nodelay(False)
        return chars

    def _escape(self) -> Optional[Event]:
        seq = self._pending(len(PASTE_START))
        if not seq:
            return key(Key.ESC)
        if seq == list(PASTE_START):
            return self._paste()
        if seq[0] in ESCAPE_INTRODUCERS:
            logger.debug("Ignoring escape sequence %r", seq)
            return None
        # a bare Esc followed quickly by ordinary keys
        self._buffer.extendleft(reversed(seq))
        return key(Key.ESC)

    def _paste(self) -> Paste:
        buf = ""
        while not buf.endswith(PASTE_END):
            ch = self._next()
            if isinstance(ch, str):
                buf += ch
        text = buf[: -len(PASTE_END)]
        return Paste(text.replace("\r\n", "\n").replace("\r", "\n"))


def curses_styles() -> Dict[Style, int]:
    """Attributes for each frame style, with a fallback for monochrome."""
    if curses.has_colors():
        curses.start_color()
        try:
            curses.use_default_colors()
            background = -1
        except curses.error:
            background = curses.COLOR_BLACK
        curses.init_pair(1, curses.COLOR_BLUE, background)
        blue = curses.color_pair(1)
        return {
            Style.DEFAULT: curses.A_NORMAL,
            Style.HIGHLIGHT: blue | curses.A_BOLD,
            Style.LABEL: blue,
            Style.MUTED: curses.A_DIM,
        }
    return {
        Style.DEFAULT: curses.A_NORMAL,
        Style.HIGHLIGHT: curses.A_REVERSE,
        Style.LABEL: curses.A_BOLD,
        Style.MUTED: curses.A_DIM,
    }


def _curs_set(visibility: int) -> None:
    try:
        curses.curs_set(visibility)
    except curses.error:
        # some terminals cannot hide the cursor
        pass


class Screen:
    """Paints frames onto a curses window."""

    def __init__(
        self,
        stdscr,
        styles: Optional[Dict[Style, int]] = None,
        set_cursor: Callable[[int], None] = _curs_set,
    ):
        self.stdscr = stdscr
        self.styles = styles if styles is not None else curses_styles()
        self.set_cursor = set_cursor

    def paint(self, frame: Frame) -> None:
        """Clear the window and draw the whole frame from the top left."""
        self.stdscr.erase()
        height, width = self.stdscr.getmaxyx()
        body_h = height - 1
        for y, line in enumerate(frame.lines[:body_h]):
            x = 0
            for text, style in line:
                if x >= width - 1:
                    break
                shown = clip(text, width - 1 - x)
                if shown:
                    self.stdscr.addnstr(y, x, shown, len(shown), self.styles[style])
                x += cell_width(text)
        if frame.footer and height > 1:
            footer = clip(frame.footer, width - 1)
            self.stdscr.addnstr(height - 1, 0, footer, len(footer), self.styles[Style.MUTED])

        if frame.cursor is not None and frame.cursor[0] < body_h:
            row, col = frame.cursor
            self.set_cursor(1)
            self.stdscr.move(row, min(col, width - 1))
        else:
            self.set_cursor(0)
        self.stdscr.refresh()


class TUI:
    """Event loop: read, handle, render, repeat."""

    def __init__(self, machine: Machine, reader: KeyReader, screen: Screen):
        self.machine = machine
        self.reader = reader
        self.screen = screen
        self.renderer = Renderer()

    def draw(self) -> None:
        frame = self.renderer.render(self.machine.ledger, self.machine.state)
        if frame is not None:
            self.screen.paint(frame)

    def run(self) -> None:
        """Main event loop."""
        self.draw()
        while True:
            event = self.reader.read()
            if event is None:
                continue
            if isinstance(event, Resize):
                self.renderer.invalidate()
            if not self.machine.handle(event):
                break
            self.draw()


def start_curses(path: str) -> None:
    """Take over the terminal, run the TUI, and always hand it back.

    curses.wrapper restores the cursor and cooked mode on every exit,
    including exceptions, which it re-raises.
    """
    os.environ.setdefault("ESCDELAY", "25")

    def _main(stdscr):
        curses.raw()
        stdscr.keypad(True)
        sys.stdout.write(BRACKETED_PASTE_ON)
        sys.stdout.flush()
        try:
            machine = Machine(load_ledger(path), path)
            TUI(machine, KeyReader(stdscr), Screen(stdscr)).run()
        finally:
            sys.stdout.write(BRACKETED_PASTE_OFF)
            sys.stdout.flush()

    curses.wrapper(_main)


def main(path: str) -> None:
    """TUI entry point."""
    logger.info("Starting session on %s", path)
    start_curses(path)
    logger.info("Session ended")
