"""Constants and configuration for the manual pager."""


class PagerConstants:
    """Central configuration constants for the pager."""

    # Page layout
    MARGIN = 2  # Columns kept free on the right of every rendered line
    INDENT = 2  # Columns of indentation for body text
    NAME_COLUMN = 20  # Width of the name column in two-column content lines
    MIN_DESCRIPTION_WIDTH = 10  # Narrowest description column before stacking
    MIN_BUDGET = 2 * INDENT + 1  # Room for a nested description row of one column
    TITLE_PREFIX = "GENESIS MANUAL - "

    # Screen layout
    STATUS_ROWS = 2  # Bottom border + status line
    FILLER = "~"  # Drawn on rows past the end of the page

    # Terminal requirements
    MIN_TERMINAL_WIDTH = 40
    MIN_TERMINAL_HEIGHT = 5
    MAX_MARGIN = MIN_TERMINAL_WIDTH - MIN_BUDGET

    # Animation
    TICK_INTERVAL = 0.1  # Seconds between animation frames
    PULSE_SPEED = 0.1  # Radians of the pulse wave per frame
    PULSE_MIN_RED = 0x8B
    PULSE_MAX_RED = 0xFF

    # Status bar
    STATUS_TITLE = "▓▓▓ GENESIS MANUAL ▓▓▓"
    STATUS_LEGEND = "[q:quit j/k:scroll /:search ?:help]"
    SEARCH_PROMPT = "Search: "
    HELP_DISMISS_MESSAGE = "Press any key to continue..."

    # Error messages
    NOT_A_TERMINAL_MESSAGE = "Standard output is not a terminal."
    TERMINAL_TOO_SMALL_MESSAGE = "Terminal too small! Need at least {}x{}, got {}x{}."
