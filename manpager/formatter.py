"""Render manual pages into decorated terminal lines."""

import re
from typing import Callable, Optional

from .constants import PagerConstants
from .page import Page, Section
from .styles import Palette

# A run of two or more spaces separates a name from its description
_COLUMN_SPLIT = re.compile(r" {2,}")

_BORDER_CHARS = {
    'top': ("╔", "═", "╗"),
    'middle': ("╠", "═", "╣"),
    'bottom': ("╚", "═", "╝"),
    'thin': ("─", "─", "─"),
}


def wrap_text(text: str, budget: int) -> list[str]:
    """Greedily pack the words of ``text`` into rows of at most ``budget`` columns.

    Words are never split unless a single word is longer than the whole
    budget; such a word is broken at the budget so no row overflows.
    An empty (or all-space) ``text`` yields a single empty row.
    """
    budget = max(1, budget)
    rows: list[str] = []
    current = ""
    for word in text.split():
        while len(word) > budget:
            if current:
                rows.append(current)
                current = ""
            rows.append(word[:budget])
            word = word[budget:]
        if not current:
            current = word
        elif len(current) + 1 + len(word) <= budget:
            current += " " + word
        else:
            rows.append(current)
            current = word
    if current or not rows:
        rows.append(current)
    return rows


def border_text(kind: str, width: int) -> str:
    """Return an undecorated border of ``width`` columns.

    ``kind`` is one of ``top``, ``middle``, ``bottom`` or ``thin``.
    """
    left, mid, right = _BORDER_CHARS[kind]
    if kind == 'thin' or width < 2:
        return mid * width
    return left + mid * (width - 2) + right


def center_text(text: str, width: int,
                decorate: Optional[Callable[[str], str]] = None) -> str:
    """Left-pad ``text`` so it sits centered in ``width`` columns.

    Only the text is passed through ``decorate``, never the padding.
    """
    padding = max(0, (width - len(text)) // 2)
    return " " * padding + (decorate(text) if decorate else text)


def split_columns(line: str) -> Optional[tuple[str, str]]:
    """Split a content line at its first run of two or more spaces.

    Returns ``(name, description)`` or None when the line has no such run.
    The name is empty for lines that start with indentation.
    """
    match = _COLUMN_SPLIT.search(line)
    if match is None:
        return None
    return line[:match.start()], line[match.end():].strip()


class PageFormatter:
    """Turns a ``Page`` into the rendered line buffer.

    Rendering is pure: the same page and width always produce the same
    lines. Every line's visible length is at most ``width - margin``.

    Raises:
        ValueError: If ``margin`` would leave less than ``MIN_BUDGET``
            columns on the narrowest supported terminal.
    """

    def __init__(self, palette: Palette, margin: int = PagerConstants.MARGIN,
                 name_column: int = PagerConstants.NAME_COLUMN):
        if not 0 <= margin <= PagerConstants.MAX_MARGIN:
            raise ValueError(f"Margin must be between 0 and {PagerConstants.MAX_MARGIN}, got {margin}")
        self.palette = palette
        self.margin = margin
        self.name_column = name_column
        self.indent = " " * PagerConstants.INDENT

    def budget(self, width: int) -> int:
        """Maximum visible line length for a terminal ``width`` columns wide.

        Never less than ``MIN_BUDGET``; below the minimum terminal width
        that floor wins over the margin.
        """
        return max(PagerConstants.MIN_BUDGET, width - self.margin)

    def render(self, page: Page, width: int) -> list[str]:
        """Render ``page`` for a terminal ``width`` columns wide."""
        p = self.palette
        budget = self.budget(width)
        lines: list[str] = []

        lines.append(self.border('top', budget))
        lines.extend(self.centered(PagerConstants.TITLE_PREFIX + page.command.upper(), budget, p.header))
        lines.extend(self.centered(page.synopsis, budget, p.subheader))
        lines.append(self.border('middle', budget))
        lines.append("")

        if page.philosophy:
            lines.extend(self.heading("PHILOSOPHY", budget, p.ember))
            lines.append("")
            for text in page.philosophy:
                lines.extend(self.prose(text, budget, p.dim_red))
            lines.append("")
            lines.append(self.border('thin', budget))
            lines.append("")

        lines.extend(self.heading("DESCRIPTION", budget))
        lines.append("")
        for text in page.description:
            lines.extend(self.prose(text, budget))
        lines.append("")

        for section in page.sections:
            lines.extend(self._section(section, budget))

        if page.see_also:
            lines.append(self.border('thin', budget))
            lines.append("")
            lines.extend(self.heading("SEE ALSO", budget))
            lines.append("")
            lines.extend(self.prose(", ".join(page.see_also), budget, p.command))
            lines.append("")

        if page.author or page.version:
            lines.append(self.border('thin', budget))
            lines.append("")
            if page.author:
                lines.extend(p.dim_red(row) for row in wrap_text(f"Author: {page.author}", budget))
            if page.version:
                lines.extend(p.dim_red(row) for row in wrap_text(f"Version: {page.version}", budget))

        return lines

    def _section(self, section: Section, budget: int) -> list[str]:
        lines = [self.border('thin', budget), ""]
        lines.extend(self.heading(section.title, budget))
        lines.append("")
        for text in section.content:
            lines.extend(self.content_line(text, budget))
        # Deeper levels are flattened under a plain subheading
        for sub in section.walk():
            lines.append("")
            lines.extend(self.prose(sub.title, budget, self.palette.subheader))
            for text in sub.content:
                lines.extend(self.content_line(text, budget))
        lines.append("")
        return lines

    # Primitives shared with the help overlay

    def border(self, kind: str, budget: int) -> str:
        return self.palette.border(border_text(kind, budget))

    def centered(self, text: str, budget: int,
                 decorate: Optional[Callable[[str], str]] = None) -> list[str]:
        decorate = decorate or self.palette.plain
        return [center_text(row, budget, decorate) for row in wrap_text(text, budget)]

    def heading(self, title: str, budget: int,
                decorate: Optional[Callable[[str], str]] = None) -> list[str]:
        decorate = decorate or self.palette.crimson
        return [decorate(row) for row in wrap_text(f"◆ {title} ◆", budget)]

    def prose(self, text: str, budget: int,
              decorate: Optional[Callable[[str], str]] = None) -> list[str]:
        """Indent and word-wrap a paragraph line; blank text stays blank."""
        decorate = decorate or self.palette.plain
        rows = wrap_text(text, budget - len(self.indent))
        return [self.indent + decorate(row) if row else "" for row in rows]

    def content_line(self, text: str, budget: int) -> list[str]:
        """Render one section content line as a two-column pair or as prose."""
        p = self.palette
        columns = split_columns(text)
        if columns is None:
            return self.prose(text, budget)
        name, description = columns
        if not description:
            return self.prose(text.strip(), budget, p.option)
        return self.columns(name, description, budget,
                            max(len(name), self.name_column), p.command)

    def columns(self, name: str, description: str, budget: int, width: int,
                decorate: Optional[Callable[[str], str]] = None) -> list[str]:
        """Lay out ``name`` padded to ``width`` with ``description`` wrapped beside it.

        When fewer than ``MIN_DESCRIPTION_WIDTH`` columns would remain for
        the description it is stacked under the name instead.
        """
        p = self.palette
        decorate = decorate or p.plain
        desc_col = len(self.indent) + width + 1
        if budget - desc_col < PagerConstants.MIN_DESCRIPTION_WIDTH:
            # Too narrow for side by side: stack the description under the name
            lines = self.prose(name, budget, decorate) if name else []
            nested = self.indent * 2
            lines.extend(nested + p.dim_red(row)
                         for row in wrap_text(description, budget - len(nested)))
            return lines

        rows = wrap_text(description, budget - desc_col)
        lines = [self.indent + decorate(name.ljust(width)) + " " + p.dim_red(rows[0])]
        lines.extend(" " * desc_col + p.dim_red(row) for row in rows[1:])
        return lines
