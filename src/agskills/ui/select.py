"""
Interactive selection list.

A full-screen list with a highlighted cursor row, a scrolling viewport and a
footer describing the focused item. Used in two modes:

- single: exactly one item is selected; Enter confirms it.
- multi: Space toggles items; Enter confirms the whole selection.

Esc, Ctrl-C or q cancel the session. The session is a plain loop over
explicit state (cursor, top, selected): draw, read one key, apply it.
"""

import logging
import textwrap
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum

from agskills.ui.terminal import (
    KEY_CTRL_C,
    KEY_DOWN,
    KEY_ENTER,
    KEY_ESCAPE,
    KEY_SPACE,
    KEY_UP,
    Frame,
    FrameLine,
    PromptToolkitTerminal,
    Terminal,
)

logger = logging.getLogger(__name__)

# Title, subtitle, blank line
HEADER_ROWS = 3
# Separator, selected item, two description lines, status line, trailing newline
FOOTER_ROWS = 6
DESCRIPTION_PREFIX = "Description: "
# Columns reserved for the description prefix and margin
DESCRIPTION_MARGIN = 14
MIN_DESCRIPTION_WIDTH = 20

CANCEL_KEYS = frozenset({KEY_ESCAPE, KEY_CTRL_C, "q"})
UP_KEYS = frozenset({KEY_UP, "k"})
DOWN_KEYS = frozenset({KEY_DOWN, "j"})


class SelectMode(str, Enum):
    """Selection mode."""

    SINGLE = "single"
    MULTI = "multi"


@dataclass
class SelectionResult:
    """Outcome of a selection session.

    A cancelled result never carries a selection; callers must check
    `cancelled` before using `selected`.
    """

    cancelled: bool
    selected: list[str] = field(default_factory=list)

    @property
    def first(self) -> str | None:
        """The chosen item of a single-mode session."""
        if self.cancelled or not self.selected:
            return None
        return self.selected[0]


def visible_rows_for(height: int) -> int:
    """Number of list rows that fit between header and footer."""
    return max(1, height - HEADER_ROWS - FOOTER_ROWS)


class SelectionSession:
    """State machine behind the selection list."""

    def __init__(
        self,
        items: Sequence[str],
        mode: SelectMode = SelectMode.MULTI,
        initial_selected: Iterable[str] | None = None,
        get_description: Callable[[str], str | None] | None = None,
        title: str = "",
        subtitle: str = "",
        status_label: str = "Selected",
    ):
        if not items:
            raise ValueError("SelectionSession needs at least one item")

        self.items = list(items)
        self.mode = SelectMode(mode)
        self.get_description = get_description
        self.title = title
        self.subtitle = subtitle
        self.status_label = status_label

        self.cursor = 0
        self.top = 0
        self.done = False
        self.cancelled = False

        wanted = set(initial_selected or [])
        self.selected = {item for item in self.items if item in wanted}
        if self.mode is SelectMode.SINGLE:
            chosen = [item for item in self.items if item in self.selected]
            self.selected = {chosen[0] if chosen else self.items[0]}

    @property
    def focused(self) -> str:
        return self.items[self.cursor]

    def scroll_to_cursor(self, visible_rows: int) -> None:
        """Move the viewport just enough to keep the cursor row visible."""
        if self.cursor < self.top:
            self.top = self.cursor
        if self.cursor >= self.top + visible_rows:
            self.top = self.cursor - visible_rows + 1
        self.top = max(0, min(self.top, len(self.items) - 1))

    def _marker(self, item: str) -> str:
        selected = item in self.selected
        if self.mode is SelectMode.MULTI:
            return "[x]" if selected else "[ ]"
        return "(*)" if selected else "( )"

    def _description_lines(self, width: int) -> list[str]:
        description = ""
        if self.get_description is not None:
            description = str(self.get_description(self.focused) or "")

        wrap_width = max(MIN_DESCRIPTION_WIDTH, width - DESCRIPTION_MARGIN)
        wrapped = textwrap.wrap(
            description,
            width=wrap_width,
            break_long_words=False,
            break_on_hyphens=False,
        )
        if not wrapped:
            return [f"{DESCRIPTION_PREFIX}-"]

        lines = [f"{DESCRIPTION_PREFIX}{wrapped[0][:wrap_width]}"]
        if len(wrapped) > 1:
            lines.append(" " * len(DESCRIPTION_PREFIX) + wrapped[1][:wrap_width])
        return lines

    def render(self, width: int, height: int) -> Frame:
        """Build the frame for a terminal of the given size.

        Recomputes the viewport from the current size, so a resized terminal
        is picked up on the next render.
        """
        visible_rows = visible_rows_for(height)
        self.scroll_to_cursor(visible_rows)
        limit = max(0, width - 1)

        lines = [FrameLine(self.title[:limit]), FrameLine(self.subtitle[:limit]), FrameLine("")]
        for index in range(self.top, min(len(self.items), self.top + visible_rows)):
            item = self.items[index]
            text = f"{self._marker(item)} {item}"
            lines.append(FrameLine(text[:limit], highlighted=index == self.cursor))

        lines.append(FrameLine("-" * max(1, width - 1)))
        lines.append(FrameLine(f"Selected item: {self.focused}"[:limit]))
        lines.extend(FrameLine(text[:limit]) for text in self._description_lines(width))
        lines.append(FrameLine(f"{self.status_label}: {len(self.selected)}"[:limit]))

        return Frame(lines=lines, top=self.top, visible_rows=visible_rows)

    def handle_key(self, key: str) -> bool:
        """Apply one key press.

        Returns:
            True while the session continues, False once it has ended.
        """
        if self.done:
            return False

        if key in CANCEL_KEYS:
            self.cancelled = True
            self.done = True
        elif key in UP_KEYS:
            self.cursor = max(0, self.cursor - 1)
        elif key in DOWN_KEYS:
            self.cursor = min(len(self.items) - 1, self.cursor + 1)
        elif self.mode is SelectMode.MULTI:
            if key == KEY_SPACE:
                self.selected ^= {self.focused}
            elif key == KEY_ENTER:
                self.done = True
        elif key in (KEY_SPACE, KEY_ENTER):
            self.selected = {self.focused}
            if key == KEY_ENTER:
                self.done = True

        return not self.done

    def result(self) -> SelectionResult:
        """Selection in original item order, or a cancelled result."""
        if self.cancelled:
            return SelectionResult(cancelled=True)
        return SelectionResult(
            cancelled=False,
            selected=[item for item in self.items if item in self.selected],
        )


def select_items(
    items: Sequence[str],
    *,
    mode: SelectMode = SelectMode.MULTI,
    initial_selected: Iterable[str] | None = None,
    get_description: Callable[[str], str | None] | None = None,
    title: str = "",
    subtitle: str = "",
    status_label: str = "Selected",
    terminal: Terminal | None = None,
) -> SelectionResult:
    """Run an interactive selection session.

    Args:
        items: Candidate items in display order.
        mode: Single or multi selection.
        initial_selected: Items selected when the session starts.
        get_description: Returns the description of the focused item.
        title: First header line.
        subtitle: Second header line (key help).
        status_label: Label of the selected-count line.
        terminal: Terminal to run on (a raw TTY by default).

    Returns:
        The selection result.

    Raises:
        NotATerminalError: If stdin or stdout is not a TTY.
    """
    terminal = terminal or PromptToolkitTerminal()
    terminal.check()

    if not items:
        return SelectionResult(cancelled=False, selected=[])

    session = SelectionSession(
        items,
        mode=mode,
        initial_selected=initial_selected,
        get_description=get_description,
        title=title,
        subtitle=subtitle,
        status_label=status_label,
    )

    with terminal.session():
        running = True
        while running:
            width, height = terminal.size()
            terminal.draw(session.render(width, height))
            running = session.handle_key(terminal.read_key())

    result = session.result()
    logger.debug(f"Selection '{title}' finished: cancelled={result.cancelled}")
    return result
