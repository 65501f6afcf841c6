"""Case-insensitive search over the rendered line buffer."""

import re
from typing import Optional, Sequence

import blessed

from .styles import Palette


def find_matches(lines: Sequence[str], query: str) -> list[int]:
    """Return indices of lines containing ``query``, ignoring case.

    An empty query matches nothing.
    """
    if not query:
        return []
    needle = query.lower()
    return [i for i, line in enumerate(lines) if needle in line.lower()]


class SearchEngine:
    """Holds the active search term, its matches and the current match.

    Navigation is cyclic; with no matches ``next`` and ``prev`` do nothing
    and return None.
    """

    def __init__(self):
        self.term = ""
        self.matches: list[int] = []
        self.current_index = 0

    def search(self, lines: Sequence[str], query: str) -> list[int]:
        """Run a new search; an empty query clears the active search."""
        self.term = query
        self.matches = find_matches(lines, query)
        self.current_index = 0
        return self.matches

    def clear(self) -> None:
        self.search((), "")

    @property
    def current_line(self) -> Optional[int]:
        """Line index of the current match, or None without matches."""
        if not self.matches:
            return None
        return self.matches[self.current_index]

    def next(self) -> Optional[int]:
        if not self.matches:
            return None
        self.current_index = (self.current_index + 1) % len(self.matches)
        return self.current_line

    def prev(self) -> Optional[int]:
        if not self.matches:
            return None
        self.current_index = (self.current_index - 1 + len(self.matches)) % len(self.matches)
        return self.current_line

    def highlight(self, line: str, term: blessed.Terminal, palette: Palette) -> str:
        """Wrap every occurrence of the search term in ``line`` with the highlight colour.

        Occurrences are found in the text with escape sequences removed, so
        one may span several decorated segments; each of its pieces is
        highlighted on its own and escape codes are never matched. After
        each highlighted piece the decoration that was active at that point
        of the line is re-applied.
        """
        if not self.term:
            return line
        pieces = term.split_seqs(line)
        plain = ''.join(piece for piece in pieces if not piece.startswith('\x1b'))
        marked = [False] * len(plain)
        for match in re.finditer(re.escape(self.term), plain, re.IGNORECASE):
            marked[match.start():match.end()] = [True] * (match.end() - match.start())

        out: list[str] = []
        active: list[str] = []
        run: list[str] = []
        pos = 0
        resets = {term.normal, '\x1b[m', '\x1b[0m'}

        def flush():
            nonlocal pos
            text = ''.join(run)
            run.clear()
            restore = ''.join(active)
            start = 0
            while start < len(text):
                lit = marked[pos + start]
                end = start + 1
                while end < len(text) and marked[pos + end] == lit:
                    end += 1
                chunk = text[start:end]
                out.append(palette.highlight(chunk) + restore if lit else chunk)
                start = end
            pos += len(text)

        for piece in pieces:
            if piece.startswith('\x1b'):
                flush()
                out.append(piece)
                if piece in resets:
                    active.clear()
                else:
                    active.append(piece)
            else:
                run.append(piece)
        flush()
        return ''.join(out)
