"""Scroll position over the rendered line buffer."""


class Viewport:
    """Owns the scroll offset for a window of ``height`` rows.

    The offset always satisfies ``0 <= offset <= max(0, total - height)``.
    Moves past either end are clamped, so they are silent no-ops at the
    boundary.
    """

    def __init__(self, height: int, total: int = 0):
        if height < 1:
            raise ValueError(f"Viewport height must be positive, got {height}")
        self.height = height
        self.total = total
        self.offset = 0

    @property
    def max_offset(self) -> int:
        return max(0, self.total - self.height)

    def reset(self, total: int) -> None:
        """Point the viewport at a new buffer of ``total`` lines, at the top."""
        self.total = total
        self.offset = 0

    def jump_to(self, index: int) -> None:
        """Put line ``index`` at the top of the window (clamped, never centered)."""
        self.offset = min(max(0, index), self.max_offset)

    def line_down(self):
        self.jump_to(self.offset + 1)

    def line_up(self):
        self.jump_to(self.offset - 1)

    def page_down(self):
        self.jump_to(self.offset + self.height)

    def page_up(self):
        self.jump_to(self.offset - self.height)

    def home(self):
        self.offset = 0

    def end(self):
        self.offset = self.max_offset

    def visible_slice(self) -> slice:
        return slice(self.offset, self.offset + self.height)

    def visible_range(self) -> tuple[int, int]:
        """Return 1-based ``(first, last)`` line numbers shown in the window."""
        if self.total == 0:
            return (0, 0)
        return (self.offset + 1, min(self.offset + self.height, self.total))

    def percent(self) -> int:
        """Percentage of the buffer that lies at or above the window's bottom edge."""
        if self.total == 0:
            return 100
        return min(100, (self.offset + self.height) * 100 // self.total)
