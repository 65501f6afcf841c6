"""Text decorations for the dark red manual theme.

Every decoration is a pure ``str -> str`` function bound to a blessed
``Terminal``. When the terminal does not do styling (pipes, tests with
``force_styling=None``) every decoration returns its input unchanged.
"""

import math

import blessed

from .constants import PagerConstants


def pulse_red(frame: int) -> int:
    """Red channel for the pulsing border at animation frame ``frame``.

    Follows a sine wave between ``PULSE_MIN_RED`` and ``PULSE_MAX_RED``.
    """
    intensity = math.sin(frame * PagerConstants.PULSE_SPEED) * 0.5 + 0.5
    span = PagerConstants.PULSE_MAX_RED - PagerConstants.PULSE_MIN_RED
    return int(PagerConstants.PULSE_MIN_RED + intensity * span)


class Palette:
    """Stateless set of decorations for one terminal."""

    def __init__(self, term: blessed.Terminal):
        self.term = term

    def _rgb(self, text: str, value: int) -> str:
        r, g, b = (value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF
        return self.term.color_rgb(r, g, b)(text)

    # Primary palette
    def dark_red(self, text: str) -> str:
        return self._rgb(text, 0x8B0000)

    def crimson(self, text: str) -> str:
        return self._rgb(text, 0xDC143C)

    def blood_red(self, text: str) -> str:
        return self._rgb(text, 0x660000)

    # Accents
    def neon_red(self, text: str) -> str:
        return self.term.bold(self.term.bright_red(text))

    def ember(self, text: str) -> str:
        return self._rgb(text, 0xFF4500)

    # UI elements
    def border(self, text: str) -> str:
        return self._rgb(text, 0x4A0000)

    def highlight(self, text: str) -> str:
        return self._rgb(text, 0xFF6B6B)

    def dim_red(self, text: str) -> str:
        return self._rgb(text, 0x400000)

    # Text variations
    def header(self, text: str) -> str:
        return self.term.bold(self._rgb(text, 0xFF0000))

    def subheader(self, text: str) -> str:
        return self.term.italic(self._rgb(text, 0xCD5C5C))

    def command(self, text: str) -> str:
        return self.term.bold(self._rgb(text, 0xFFB6C1))

    def option(self, text: str) -> str:
        return self._rgb(text, 0xF08080)

    def plain(self, text: str) -> str:
        return text

    def pulse(self, text: str, frame: int) -> str:
        """Colour ``text`` with the red intensity for ``frame``."""
        return self.term.color_rgb(pulse_red(frame), 0, 0)(text)

    def strip(self, text: str) -> str:
        """Return ``text`` without any terminal sequences."""
        return self.term.strip_seqs(text)


def make_terminal(color: str = "auto") -> blessed.Terminal:
    """Create a blessed terminal honouring the ``color`` setting.

    ``"always"`` forces styling even when output is not a TTY, ``"never"``
    disables it, ``"auto"`` lets blessed decide.
    """
    if color == "always":
        return blessed.Terminal(force_styling=True)
    if color == "never":
        return blessed.Terminal(force_styling=None)
    return blessed.Terminal()
