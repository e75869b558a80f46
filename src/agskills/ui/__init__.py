"""Terminal UI for agskills."""

from agskills.ui.select import (
    SelectionResult,
    SelectionSession,
    SelectMode,
    select_items,
    visible_rows_for,
)
from agskills.ui.terminal import (
    Frame,
    FrameLine,
    PromptToolkitTerminal,
    Terminal,
    key_name,
)

__all__ = [
    "Frame",
    "FrameLine",
    "PromptToolkitTerminal",
    "SelectMode",
    "SelectionResult",
    "SelectionSession",
    "Terminal",
    "key_name",
    "select_items",
    "visible_rows_for",
]
