"""
Terminal backends for the selection list.

The selection list only needs four things from a terminal: its size, a way to
draw a frame, a blocking read of the next key, and a scoped session that puts
the terminal in raw mode and restores it afterwards. The real backend decodes
keys with prompt_toolkit's input layer and draws with a rich Console.
"""

from __future__ import annotations

import logging
import select
import sys
from abc import ABC, abstractmethod
from collections import deque
from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager
from dataclasses import dataclass, field

from prompt_toolkit.input import Input, create_input
from prompt_toolkit.key_binding import KeyPress
from prompt_toolkit.keys import Keys
from rich.console import Console
from rich.text import Text

from agskills.exceptions import NotATerminalError

logger = logging.getLogger(__name__)

# Key names handed to the selection session
KEY_UP = "up"
KEY_DOWN = "down"
KEY_ENTER = "enter"
KEY_ESCAPE = "escape"
KEY_CTRL_C = "ctrl-c"
KEY_SPACE = " "

_SPECIAL_KEYS = {
    Keys.Up: KEY_UP,
    Keys.Down: KEY_DOWN,
    Keys.ControlM: KEY_ENTER,
    Keys.ControlJ: KEY_ENTER,
    Keys.Escape: KEY_ESCAPE,
    Keys.ControlC: KEY_CTRL_C,
}


@dataclass
class FrameLine:
    """One line of a rendered frame."""

    text: str
    highlighted: bool = False


@dataclass
class Frame:
    """A full screen of the selection list."""

    lines: list[FrameLine] = field(default_factory=list)
    top: int = 0
    visible_rows: int = 1

    @property
    def text(self) -> list[str]:
        """Plain text of every line."""
        return [line.text for line in self.lines]


def key_name(key_press: KeyPress) -> str | None:
    """Translate a prompt_toolkit key press into a selection key name.

    Returns:
        A KEY_* name, a single printable character, or None for keys the
        selection list does not care about.
    """
    if isinstance(key_press.key, Keys):
        return _SPECIAL_KEYS.get(key_press.key)
    if len(key_press.key) == 1:
        return key_press.key
    return None


class Terminal(ABC):
    """What the selection list needs from a terminal."""

    @abstractmethod
    def check(self) -> None:
        """Verify the terminal is interactive.

        Raises:
            NotATerminalError: If input or output is not a TTY.
        """
        ...

    @abstractmethod
    def size(self) -> tuple[int, int]:
        """Current (width, height) in cells."""
        ...

    @abstractmethod
    def draw(self, frame: Frame) -> None:
        """Replace the screen contents with frame."""
        ...

    @abstractmethod
    def read_key(self) -> str:
        """Block until the next key press and return its name."""
        ...

    @abstractmethod
    def session(self) -> AbstractContextManager[None]:
        """Raw-mode scope; the terminal is restored and cleared on exit."""
        ...


class PromptToolkitTerminal(Terminal):
    """Raw TTY backed by prompt_toolkit input and rich output."""

    def __init__(self, console: Console | None = None, escape_timeout: float = 0.05):
        """Initialize the terminal.

        Args:
            console: Console to draw on (stdout by default).
            escape_timeout: Seconds to wait after a lone ESC for the rest of
                an escape sequence before reporting the Escape key.
        """
        self.console = console or Console(highlight=False)
        self.escape_timeout = escape_timeout
        self._input: Input | None = None
        self._pending: deque[str] = deque()

    def check(self) -> None:
        if not (sys.stdin.isatty() and sys.stdout.isatty()):
            raise NotATerminalError()

    def size(self) -> tuple[int, int]:
        width, height = self.console.size
        return width, height

    def draw(self, frame: Frame) -> None:
        self.console.clear()
        for line in frame.lines:
            self.console.print(
                Text(line.text, style="reverse" if line.highlighted else ""),
                no_wrap=True,
                overflow="crop",
                soft_wrap=False,
            )

    def read_key(self) -> str:
        if self._input is None:
            raise RuntimeError("read_key() called outside of a terminal session")

        while not self._pending:
            if self._input.closed:
                # stdin went away; behave like Ctrl-C so the session ends
                return KEY_CTRL_C

            select.select([self._input.fileno()], [], [])
            presses = self._input.read_keys()
            if not presses:
                # A lone ESC stays buffered until we know no sequence follows
                ready, _, _ = select.select([self._input.fileno()], [], [], self.escape_timeout)
                if not ready:
                    presses = self._input.flush_keys()

            for press in presses:
                name = key_name(press)
                if name is not None:
                    self._pending.append(name)

        return self._pending.popleft()

    @contextmanager
    def session(self) -> Iterator[None]:
        self._input = create_input(always_prefer_tty=True)
        self._pending.clear()
        try:
            with self._input.raw_mode():
                self.console.show_cursor(False)
                try:
                    yield
                finally:
                    self.console.show_cursor(True)
                    self.console.clear()
        finally:
            self._input.close()
            self._input = None
            logger.debug("Terminal session closed")
