"""Tests for searching the rendered line buffer."""

import re

import blessed
import pytest

from manpager.formatter import PageFormatter
from manpager.search import SearchEngine, find_matches
from manpager.styles import Palette


@pytest.fixture
def lines():
    lines = [f"line {i}" for i in range(15)]
    lines[4] = "The Unix way"
    lines[9] = "more UNIX here"
    return lines


def test_find_matches_is_case_insensitive(lines):
    assert find_matches(lines, "unix") == [4, 9]


def test_find_matches_equals_reference_scan(lines):
    for query in ("line", "LINE 1", "x", "e", "nothing"):
        expected = [i for i in range(len(lines)) if query.lower() in lines[i].lower()]
        assert find_matches(lines, query) == expected


def test_empty_query_matches_nothing(lines):
    assert find_matches(lines, "") == []


def test_search_stores_term_and_resets_index(lines):
    engine = SearchEngine()
    engine.search(lines, "unix")
    engine.next()
    engine.search(lines, "unix")
    assert engine.term == "unix"
    assert engine.matches == [4, 9]
    assert engine.current_index == 0
    assert engine.current_line == 4


def test_empty_search_clears(lines):
    engine = SearchEngine()
    engine.search(lines, "unix")
    assert engine.search(lines, "") == []
    assert engine.term == ""
    assert engine.current_line is None


def test_next_cycles_back_to_start(lines):
    engine = SearchEngine()
    engine.search(lines, "line")
    start = engine.current_index
    for _ in range(len(engine.matches)):
        engine.next()
    assert engine.current_index == start


def test_next_then_prev_is_identity(lines):
    engine = SearchEngine()
    engine.search(lines, "line")
    engine.next()
    engine.next()
    before = engine.current_index
    engine.next()
    engine.prev()
    assert engine.current_index == before


def test_prev_wraps_to_last(lines):
    engine = SearchEngine()
    engine.search(lines, "unix")
    assert engine.prev() == 9
    assert engine.prev() == 4


def test_navigation_without_matches_is_a_no_op(lines):
    engine = SearchEngine()
    assert engine.next() is None
    assert engine.prev() is None
    assert engine.current_index == 0
    engine.search(lines, "absent")
    assert engine.next() is None
    assert engine.prev() is None
    assert engine.current_index == 0


class SeqTerminal:
    """Minimal terminal that knows one kind of SGR sequence."""
    normal = '\x1b[m'

    def split_seqs(self, text):
        return re.findall(r'\x1b\[[0-9;]*m|.', text, re.S)


class BracketPalette:
    def highlight(self, text):
        return f"[{text}]"


def test_highlight_plain_line():
    engine = SearchEngine()
    engine.search(["Unix and unix"], "unix")
    line = engine.highlight("Unix and unix", SeqTerminal(), BracketPalette())
    assert line == "[Unix] and [unix]"


def test_highlight_reapplies_active_style_and_skips_sequences():
    engine = SearchEngine()
    engine.search(["x"], "31")
    styled = '\x1b[31mred 31\x1b[m 31'
    line = engine.highlight(styled, SeqTerminal(), BracketPalette())
    assert line == '\x1b[31mred [31]\x1b[31m\x1b[m [31]'


def test_highlight_escapes_regex_characters():
    engine = SearchEngine()
    engine.search(["a.b axb"], "a.b")
    assert engine.highlight("a.b axb", SeqTerminal(), BracketPalette()) == "[a.b] axb"


def test_highlight_without_search_returns_line_unchanged():
    term = blessed.Terminal(force_styling=None)
    engine = SearchEngine()
    assert engine.highlight("anything", term, Palette(term)) == "anything"


def test_highlight_spans_decorated_segments():
    engine = SearchEngine()
    engine.search(["--fast Go fast"], "fast go")
    styled = '\x1b[1m--fast\x1b[m \x1b[31mGo fast\x1b[m'
    line = engine.highlight(styled, SeqTerminal(), BracketPalette())
    assert line == '\x1b[1m--[fast]\x1b[1m\x1b[m[ ]\x1b[31m[Go]\x1b[31m fast\x1b[m'


class SgrPalette(Palette):
    """Palette that emits real SGR sequences whatever the terminal."""

    def _rgb(self, text, value):
        return f'\x1b[38;5;{value % 256}m{text}\x1b[m'


def test_highlight_across_two_column_boundary():
    formatter = PageFormatter(SgrPalette(blessed.Terminal(force_styling=None)))
    line = formatter.content_line("--fast      Go fast", 78)[0]
    plain = re.sub(r'\x1b\[[0-9;]*m', '', line)
    query = "fast" + " " * 15 + "go"

    engine = SearchEngine()
    assert engine.search([plain], query) == [0]
    highlighted = engine.highlight(line, SeqTerminal(), BracketPalette())

    assert highlighted != line
    assert re.sub(r'\x1b\[[0-9;]*m', '', highlighted) == "  --[fast" + " " * 14 + "][ ][Go] fast"
