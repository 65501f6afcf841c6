"""Exceptions raised by the manual pager."""


class ManpagerError(Exception):
    """Base class for all pager errors."""


class TerminalSizeError(ManpagerError):
    """The terminal size could not be read or is too small to lay out a page."""


class TerminalSetupError(ManpagerError):
    """Raw keypress mode could not be enabled."""


class PageFormatError(ManpagerError):
    """A manual page document is missing fields or has fields of the wrong type."""
