"""Tests for terminal session setup, teardown and drawing."""

from unittest.mock import MagicMock, patch

import pytest

from manpager.errors import TerminalSetupError, TerminalSizeError
from manpager.terminal import TerminalInterface


def make_term(width=80, height=24, tty=True):
    term = MagicMock()
    term.is_a_tty = tty
    term.width = width
    term.height = height
    term.enter_fullscreen = '[ENTER_FS]'
    term.exit_fullscreen = '[EXIT_FS]'
    term.hide_cursor = '[HIDE]'
    term.normal_cursor = '[SHOW]'
    term.clear = '[CLEAR]'
    term.home = '[HOME]'
    term.clear_eol = '[EOL]'
    term.move = lambda y, x: f'[MOVE:{y},{x}]'
    return term


def printed(mock_print):
    return [c.args[0] for c in mock_print.call_args_list if c.args]


def test_size_returns_width_and_height():
    assert TerminalInterface(make_term(100, 30)).size() == (100, 30)


@pytest.mark.parametrize("term", [
    make_term(tty=False),
    make_term(width=39),
    make_term(height=4),
])
def test_size_rejects_unusable_terminals(term):
    with pytest.raises(TerminalSizeError):
        TerminalInterface(term).size()


def test_size_error_when_dimensions_unreadable():
    term = make_term()
    term.width = None
    with pytest.raises(TerminalSizeError):
        TerminalInterface(term).size()


def test_session_restores_terminal_exactly_once():
    raw_input = MagicMock()
    terminal = TerminalInterface(make_term(), input_factory=lambda: raw_input)
    with patch('builtins.print') as mock_print:
        with terminal.session():
            assert terminal.is_fullscreen
            raw_input.__enter__.assert_called_once()
        terminal.cleanup()
        terminal.cleanup()

    raw_input.__exit__.assert_called_once()
    output = printed(mock_print)
    assert output.count('[ENTER_FS]') == 1
    assert output.count('[EXIT_FS]') == 1
    assert output.count('[SHOW]') == 1
    assert not terminal.is_fullscreen


def test_session_restores_terminal_on_error():
    raw_input = MagicMock()
    terminal = TerminalInterface(make_term(), input_factory=lambda: raw_input)
    with patch('builtins.print') as mock_print:
        with pytest.raises(RuntimeError):
            with terminal.session():
                raise RuntimeError("boom")
    raw_input.__exit__.assert_called_once()
    assert printed(mock_print).count('[EXIT_FS]') == 1


def test_setup_failure_restores_screen():
    def broken_input():
        raise OSError("no tty")

    terminal = TerminalInterface(make_term(), input_factory=broken_input)
    with patch('builtins.print') as mock_print:
        with pytest.raises(TerminalSetupError):
            terminal.setup()
    output = printed(mock_print)
    assert '[EXIT_FS]' in output
    assert '[SHOW]' in output
    assert not terminal.is_fullscreen


def test_draw_frame_places_footer_at_bottom():
    terminal = TerminalInterface(make_term())
    with patch('builtins.print') as mock_print:
        terminal.draw_frame(["row0", "row1"], ["border", "status"], height=10)
    output = printed(mock_print)
    assert '[HOME][CLEAR]' in output
    assert '[MOVE:0,0]row0' in output
    assert '[MOVE:1,0]row1' in output
    assert '[MOVE:8,0]border' in output
    assert '[MOVE:9,0]status' in output


def test_draw_prompt_shows_cursor_after_text():
    terminal = TerminalInterface(make_term())
    with patch('builtins.print') as mock_print:
        terminal.draw_prompt("Search: ", "uni", row=23)
    output = printed(mock_print)
    assert output[0] == '[MOVE:23,0][EOL]'
    assert output[1] == 'Search: uni[SHOW]'


def test_get_key_without_session_returns_none():
    assert TerminalInterface(make_term()).get_key(timeout=0) is None


class ScriptedInput:
    """Stand-in for a curtsies Input yielding fixed tokens."""

    def __init__(self, tokens):
        self._tokens = iter(tokens)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def __next__(self):
        return next(self._tokens)


def test_get_key_blocking_reads_next_token():
    terminal = TerminalInterface(make_term(), input_factory=lambda: ScriptedInput(["<DOWN>", "q"]))
    with patch("builtins.print"):
        with terminal.session():
            assert terminal.get_key() == "<DOWN>"
            assert terminal.get_key() == "q"
