"""Main pager controller."""

import logging
from typing import Optional

from .commands import CommandRegistry, Mode
from .constants import PagerConstants
from .formatter import PageFormatter, border_text
from .help import HelpOverlay
from .keyboard import KeyboardHandler, KeyEvent, KeyType
from .page import Page
from .search import SearchEngine
from .settings import PagerSettings
from .styles import Palette, make_terminal
from .terminal import TerminalInterface
from .ticker import AnimationTicker
from .viewport import Viewport

logger = logging.getLogger(__name__)


class ManualPager:
    """Full-screen, keystroke-driven viewer for one manual page at a time.

    ``display`` is the only entry point. Session state (lines, viewport,
    search, mode) lives on the instance for the duration of the call.
    """

    def __init__(self, terminal: Optional[TerminalInterface] = None,
                 keyboard: Optional[KeyboardHandler] = None,
                 settings: Optional[PagerSettings] = None,
                 ticker: Optional[AnimationTicker] = None):
        self.settings = settings or PagerSettings()
        self.terminal = terminal or TerminalInterface(make_terminal(self.settings.color))
        self.keyboard = keyboard or KeyboardHandler(self.terminal)
        self.palette = Palette(self.terminal.term)
        self.formatter = PageFormatter(self.palette, margin=self.settings.margin,
                                       name_column=self.settings.name_column)
        self.commands = CommandRegistry()
        self.help = HelpOverlay(self.terminal, self.keyboard, self.formatter)
        self.ticker = ticker or AnimationTicker(self.settings.tick_interval)
        self.search = SearchEngine()
        self.viewport = Viewport(1)
        self.mode = Mode.NORMAL
        self.lines: list[str] = []
        self.plain_lines: list[str] = []
        self.width = 0
        self.height = 0

    def display(self, page: Page):
        """Show ``page`` and block until the user quits.

        Raises:
            TerminalSizeError: If the terminal size cannot be read; raised
                before the screen is touched.
            TerminalSetupError: If raw keypress mode cannot be enabled.
        """
        self.width, self.height = self.terminal.size()
        self.viewport = Viewport(max(1, self.height - PagerConstants.STATUS_ROWS))
        self.load(page)
        logger.info("displaying '%s' (%d lines, %dx%d)",
                    page.command, len(self.lines), self.width, self.height)

        with self.terminal.session():
            self.ticker.start()
            try:
                self._run()
            finally:
                self.ticker.stop()

    def load(self, page: Page):
        """Render ``page`` at the session width and reset scroll and search."""
        self.lines = self.formatter.render(page, self.width)
        self.plain_lines = [self.palette.strip(line) for line in self.lines]
        self.viewport.reset(len(self.lines))
        self.search = SearchEngine()
        self.mode = Mode.NORMAL

    def _run(self):
        while self.mode is not Mode.EXIT:
            self._draw()
            key_event = self.keyboard.get_key_event()
            if key_event is None:
                continue
            self.handle_key(key_event)

    def handle_key(self, key_event: KeyEvent):
        """Apply one key event in NORMAL mode and run any modal state it enters."""
        if self.mode is not Mode.NORMAL:
            return
        self.mode = self.commands.execute(self, key_event)
        if self.mode is Mode.SEARCHING:
            query = self._read_search_query()
            if query is not None:
                self.run_search(query)
            self.mode = Mode.NORMAL
        elif self.mode is Mode.HELP:
            self.help.show(self.width, self.height)
            self.mode = Mode.NORMAL

    def run_search(self, query: str) -> list[int]:
        """Search the page and jump to the first match; an empty query clears the search."""
        matches = self.search.search(self.plain_lines, query)
        if matches:
            self.viewport.jump_to(matches[0])
        logger.debug("search %r: %d matches", query, len(matches))
        return matches

    def _read_search_query(self) -> Optional[str]:
        """Read a query on the status row.

        Returns the submitted text, or None if the prompt was cancelled
        with Escape.
        """
        query = ""
        label = self.palette.crimson(PagerConstants.SEARCH_PROMPT)
        while True:
            self.terminal.draw_prompt(label, query, row=self.height - 1)
            key_event = self.keyboard.get_key_event()
            if key_event is None:
                continue
            if key_event.key_type == KeyType.SPECIAL:
                if key_event.value == 'enter':
                    return query
                if key_event.value == 'escape':
                    return None
                if key_event.value == 'backspace':
                    query = query[:-1]
            elif key_event.is_printable:
                query += key_event.value

    # Rendering

    def visible_rows(self) -> list[str]:
        """Rows for the page area: highlighted slice padded with filler."""
        rows = [self.search.highlight(line, self.terminal.term, self.palette)
                for line in self.lines[self.viewport.visible_slice()]]
        filler = self.palette.dim_red(PagerConstants.FILLER)
        rows.extend(filler for _ in range(self.viewport.height - len(rows)))
        return rows

    def status_line(self) -> str:
        """Status bar: title, key legend, position and active search."""
        p = self.palette
        first, last = self.viewport.visible_range()
        position = f"Lines {first}-{last}/{len(self.lines)} ({self.viewport.percent()}%)"
        if self.search.term:
            position += f' | Search: "{self.search.term}" ({len(self.search.matches)} matches)'

        title = PagerConstants.STATUS_TITLE
        legend = PagerConstants.STATUS_LEGEND
        if len(title) + len(legend) + len(position) + 4 > self.width:
            # Drop the legend first, then shorten the position text
            legend = ""
            position = position[:max(0, self.width - len(title) - 2)]
        parts = [p.neon_red(title)]
        if legend:
            parts.append(p.dim_red(legend))
        parts.append(p.highlight(position))
        return "  ".join(parts)

    def bottom_border(self) -> str:
        budget = self.formatter.budget(self.width)
        return self.palette.pulse(border_text('bottom', budget), self.ticker.frame)

    def _draw(self):
        self.terminal.draw_frame(self.visible_rows(),
                                 [self.bottom_border(), self.status_line()],
                                 height=self.height)
