"""Key binding help screen."""

from typing import TYPE_CHECKING

from .constants import PagerConstants
from .formatter import wrap_text

if TYPE_CHECKING:
    from .formatter import PageFormatter
    from .keyboard import KeyboardHandler
    from .terminal import TerminalInterface


HELP_TITLE = "MANUAL PAGER CONTROLS"

KEY_BINDINGS = (
    ("NAVIGATION", (
        ("j, ↓", "Scroll down one line"),
        ("k, ↑", "Scroll up one line"),
        ("Space, PgDn", "Page down"),
        ("b, PgUp", "Page up"),
        ("g, Home", "Go to top"),
        ("G, End", "Go to bottom"),
    )),
    ("SEARCH", (
        ("/", "Search forward"),
        ("n", "Next search result"),
        ("N", "Previous search result"),
    )),
    ("OTHER", (
        ("h, ?", "Show this help"),
        ("q", "Quit pager"),
    )),
)

KEY_COLUMN = 13


class HelpOverlay:
    """Static help screen dismissed by any single keypress."""

    def __init__(self, terminal: 'TerminalInterface', keyboard: 'KeyboardHandler',
                 formatter: 'PageFormatter'):
        self.terminal = terminal
        self.keyboard = keyboard
        self.formatter = formatter

    def help_lines(self, width: int) -> list[str]:
        """Lines of the help screen for a terminal ``width`` columns wide."""
        f = self.formatter
        p = f.palette
        budget = f.budget(width)
        lines = [f.border('top', budget)]
        lines.extend(f.centered(HELP_TITLE, budget, p.header))
        lines.append(f.border('middle', budget))
        lines.append("")
        for title, bindings in KEY_BINDINGS:
            lines.extend(f.heading(title, budget))
            lines.append("")
            for keys, description in bindings:
                lines.extend(f.columns(keys, description, budget, max(len(keys), KEY_COLUMN)))
            lines.append("")
        lines.extend(p.dim_red(row) for row in wrap_text(PagerConstants.HELP_DISMISS_MESSAGE, budget))
        lines.append(f.border('bottom', budget))
        return lines

    def show(self, width: int, height: int):
        """Draw the help screen and wait for exactly one keypress, which is discarded."""
        self.terminal.draw_frame(self.help_lines(width)[:height], height=height)
        while self.keyboard.get_key_event() is None:
            pass
