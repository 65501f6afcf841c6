"""Test help screen functionality."""

from unittest.mock import MagicMock

import blessed
import pytest

from manpager.constants import PagerConstants
from manpager.formatter import PageFormatter
from manpager.help import HELP_TITLE, KEY_BINDINGS, HelpOverlay
from manpager.keyboard import KeyEvent, KeyType
from manpager.styles import Palette


def make_overlay(keys=()):
    terminal = MagicMock()
    keyboard = MagicMock()
    keyboard.get_key_event.side_effect = list(keys)
    formatter = PageFormatter(Palette(blessed.Terminal(force_styling=None)))
    return HelpOverlay(terminal, keyboard, formatter), terminal, keyboard


def test_help_lines_list_every_binding():
    overlay, _, _ = make_overlay()
    text = "\n".join(overlay.help_lines(80))
    assert HELP_TITLE in text
    for title, bindings in KEY_BINDINGS:
        assert f"◆ {title} ◆" in text
        for keys, description in bindings:
            assert keys in text
            assert description in text
    assert "Press any key to continue..." in text


def test_help_lines_are_framed_and_fit():
    overlay, _, _ = make_overlay()
    lines = overlay.help_lines(60)
    assert lines[0].startswith("╔") and lines[0].endswith("╗")
    assert lines[-1].startswith("╚") and lines[-1].endswith("╝")
    assert all(len(line) <= 58 for line in lines)


def test_show_draws_once_and_waits_for_one_key():
    key = KeyEvent(key_type=KeyType.REGULAR, value='x', raw='x')
    overlay, terminal, keyboard = make_overlay([None, None, key])

    overlay.show(80, 24)

    terminal.draw_frame.assert_called_once()
    rows = terminal.draw_frame.call_args[0][0]
    assert rows == overlay.help_lines(80)[:24]
    assert terminal.draw_frame.call_args[1]['height'] == 24
    assert keyboard.get_key_event.call_count == 3


def test_show_clips_to_screen_height():
    overlay, terminal, _ = make_overlay([KeyEvent(key_type=KeyType.REGULAR, value='q', raw='q')])
    overlay.show(80, 10)
    assert len(terminal.draw_frame.call_args[0][0]) == 10


@pytest.mark.parametrize("margin", [2, 10, PagerConstants.MAX_MARGIN])
def test_help_lines_wrap_to_budget(margin):
    formatter = PageFormatter(Palette(blessed.Terminal(force_styling=None)), margin=margin)
    overlay = HelpOverlay(MagicMock(), MagicMock(), formatter)
    width = PagerConstants.MIN_TERMINAL_WIDTH
    lines = overlay.help_lines(width)
    assert all(len(line) <= width - margin for line in lines)


def test_help_descriptions_wrap_beside_keys():
    formatter = PageFormatter(Palette(blessed.Terminal(force_styling=None)), margin=10)
    lines = HelpOverlay(MagicMock(), MagicMock(), formatter).help_lines(40)
    assert "  " + "j, ↓".ljust(13) + " Scroll down" in lines
    assert " " * 16 + "one line" in lines
    assert "Press any key to continue..." in lines


def test_help_rows_align_descriptions():
    overlay, _, _ = make_overlay()
    lines = overlay.help_lines(80)
    assert "  " + "j, ↓".ljust(13) + " Scroll down one line" in lines
