"""Terminal interface using Blessed for display and Curtsies for input."""

import contextlib
import logging
import select
import sys
from typing import Callable, Iterator, Optional, Sequence

import blessed

from .constants import PagerConstants
from .errors import TerminalSetupError, TerminalSizeError

logger = logging.getLogger(__name__)


def _curtsies_input():
    from curtsies import Input  # type: ignore
    return Input(keynames='curtsies')


class TerminalInterface:
    """Handles terminal I/O for one pager session.

    Fullscreen, the hidden cursor and raw keypress mode are acquired by
    ``setup`` and released by ``cleanup``; ``cleanup`` restores each of
    them exactly once no matter how often it is called.
    """

    def __init__(self, terminal: Optional[blessed.Terminal] = None,
                 input_factory: Optional[Callable[[], object]] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._input_factory = input_factory or _curtsies_input
        self._curtsies_input: Optional[object] = None

    def size(self) -> tuple[int, int]:
        """Return ``(width, height)`` of the terminal.

        Raises:
            TerminalSizeError: If output is not a terminal, the size cannot
                be read, or the terminal is too small to lay out a page.
        """
        if not self.term.is_a_tty:
            raise TerminalSizeError(PagerConstants.NOT_A_TERMINAL_MESSAGE)
        try:
            width, height = int(self.term.width), int(self.term.height)
        except (OSError, TypeError, ValueError) as e:
            raise TerminalSizeError(f"Could not read terminal size: {e}") from e
        if width < PagerConstants.MIN_TERMINAL_WIDTH or height < PagerConstants.MIN_TERMINAL_HEIGHT:
            raise TerminalSizeError(PagerConstants.TERMINAL_TOO_SMALL_MESSAGE.format(
                PagerConstants.MIN_TERMINAL_WIDTH, PagerConstants.MIN_TERMINAL_HEIGHT, width, height))
        return width, height

    def setup(self):
        """Enter fullscreen mode, hide the cursor and enable raw keypress input.

        Raises:
            TerminalSetupError: If raw input cannot be enabled. The screen
                is restored before the error propagates.
        """
        print(self.term.enter_fullscreen, end='')
        print(self.term.hide_cursor, end='')
        print(self.term.clear, end='', flush=True)
        self.is_fullscreen = True
        if self._curtsies_input is None:
            try:
                curtsies_input = self._input_factory()
                curtsies_input.__enter__()  # type: ignore[attr-defined]
            except Exception as e:
                self.cleanup()
                raise TerminalSetupError(f"Could not enable raw keypress mode: {e}") from e
            self._curtsies_input = curtsies_input
        logger.debug("terminal session started")

    def cleanup(self):
        """Exit fullscreen mode, show the cursor and leave raw mode."""
        curtsies_input, self._curtsies_input = self._curtsies_input, None
        try:
            if curtsies_input is not None:
                curtsies_input.__exit__(None, None, None)  # type: ignore[attr-defined]
        finally:
            if self.is_fullscreen:
                self.is_fullscreen = False
                print(self.term.exit_fullscreen, end='')
                print(self.term.normal_cursor, end='', flush=True)
                logger.debug("terminal session ended")

    @contextlib.contextmanager
    def session(self) -> Iterator['TerminalInterface']:
        """Scope ``setup``/``cleanup`` around a block."""
        self.setup()
        try:
            yield self
        finally:
            self.cleanup()

    def draw_frame(self, rows: Sequence[str], footer: Sequence[str] = (), height: Optional[int] = None):
        """Clear the screen, draw ``rows`` from the top and ``footer`` at the bottom.

        ``height`` is the screen height captured at session start; it
        defaults to the current terminal height.
        """
        print(self.term.home + self.term.clear, end='')
        for y, row in enumerate(rows):
            print(self.term.move(y, 0) + row, end='')
        bottom = (self.term.height if height is None else height) - len(footer)
        for i, row in enumerate(footer):
            print(self.term.move(bottom + i, 0) + row, end='')
        print(self.term.hide_cursor, end='', flush=True)

    def draw_prompt(self, label: str, text: str, row: Optional[int] = None):
        """Draw an input prompt on ``row`` (default: last row) with the cursor after ``text``."""
        row = self.term.height - 1 if row is None else row
        print(self.term.move(row, 0) + self.term.clear_eol, end='')
        print(label + text + self.term.normal_cursor, end='', flush=True)

    def get_key(self, timeout=None):
        """Get a single keypress from the user.

        Args:
            timeout: Timeout in seconds (None for blocking, 0 for non-blocking)

        Returns:
            The curtsies token as a string, or None if nothing arrived.
        """
        if self._curtsies_input is None:
            return None
        if timeout is None:
            return str(next(self._curtsies_input))  # type: ignore[call-overload]
        r, _, _ = select.select([sys.stdin], [], [], float(timeout))
        if not r:
            return None
        return str(next(self._curtsies_input))  # type: ignore[call-overload]

    @property
    def width(self):
        """Terminal width in columns."""
        return self.term.width

    @property
    def height(self):
        """Terminal height in rows."""
        return self.term.height
