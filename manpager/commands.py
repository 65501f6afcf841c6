"""Command pattern implementation for pager actions.

The registry is the transition table of the pager's NORMAL mode: each
key maps to a command, and each command returns the mode the pager
moves to next.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, Optional, Tuple, TYPE_CHECKING

from .keyboard import KeyType

if TYPE_CHECKING:
    from .keyboard import KeyEvent
    from .pager import ManualPager
    from .viewport import Viewport


class Mode(Enum):
    """Pager session modes."""
    NORMAL = "normal"
    SEARCHING = "searching"
    HELP = "help"
    EXIT = "exit"


class PagerCommand(ABC):
    """Base class for pager commands."""

    @abstractmethod
    def execute(self, pager: 'ManualPager', key_event: 'KeyEvent') -> Mode:
        """Execute the command.

        Args:
            pager: Pager instance
            key_event: The key event that triggered this command

        Returns:
            The mode the pager should be in afterwards
        """
        pass


class ScrollCommand(PagerCommand):
    """Base class for viewport movement commands."""

    def execute(self, pager: 'ManualPager', key_event: 'KeyEvent') -> Mode:
        self._move(pager.viewport)
        return Mode.NORMAL

    @abstractmethod
    def _move(self, viewport: 'Viewport'):
        """Perform the movement."""
        pass


class LineDownCommand(ScrollCommand):
    def _move(self, viewport):
        viewport.line_down()


class LineUpCommand(ScrollCommand):
    def _move(self, viewport):
        viewport.line_up()


class PageDownCommand(ScrollCommand):
    def _move(self, viewport):
        viewport.page_down()


class PageUpCommand(ScrollCommand):
    def _move(self, viewport):
        viewport.page_up()


class HomeCommand(ScrollCommand):
    def _move(self, viewport):
        viewport.home()


class EndCommand(ScrollCommand):
    def _move(self, viewport):
        viewport.end()


class NextMatchCommand(PagerCommand):
    def execute(self, pager, key_event):
        line = pager.search.next()
        if line is not None:
            pager.viewport.jump_to(line)
        return Mode.NORMAL


class PrevMatchCommand(PagerCommand):
    def execute(self, pager, key_event):
        line = pager.search.prev()
        if line is not None:
            pager.viewport.jump_to(line)
        return Mode.NORMAL


class StartSearchCommand(PagerCommand):
    def execute(self, pager, key_event):
        return Mode.SEARCHING


class HelpCommand(PagerCommand):
    def execute(self, pager, key_event):
        return Mode.HELP


class QuitCommand(PagerCommand):
    def execute(self, pager, key_event):
        return Mode.EXIT


class CommandRegistry:
    """Registry mapping key combinations to commands."""

    def __init__(self):
        self._commands: Dict[Tuple[KeyType, str], PagerCommand] = {}
        self._register_default_commands()

    def _register_default_commands(self):
        # Quit
        self.register((KeyType.REGULAR, 'q'), QuitCommand())
        self.register((KeyType.REGULAR, 'Q'), QuitCommand())

        # Line movement
        self.register((KeyType.REGULAR, 'j'), LineDownCommand())
        self.register((KeyType.SPECIAL, 'down'), LineDownCommand())
        self.register((KeyType.REGULAR, 'k'), LineUpCommand())
        self.register((KeyType.SPECIAL, 'up'), LineUpCommand())

        # Paging
        self.register((KeyType.REGULAR, ' '), PageDownCommand())
        self.register((KeyType.SPECIAL, 'page_down'), PageDownCommand())
        self.register((KeyType.REGULAR, 'b'), PageUpCommand())
        self.register((KeyType.SPECIAL, 'page_up'), PageUpCommand())

        # Top and bottom
        self.register((KeyType.REGULAR, 'g'), HomeCommand())
        self.register((KeyType.SPECIAL, 'home'), HomeCommand())
        self.register((KeyType.REGULAR, 'G'), EndCommand())
        self.register((KeyType.SPECIAL, 'end'), EndCommand())

        # Search
        self.register((KeyType.REGULAR, '/'), StartSearchCommand())
        self.register((KeyType.REGULAR, 'n'), NextMatchCommand())
        self.register((KeyType.REGULAR, 'N'), PrevMatchCommand())

        # Help
        self.register((KeyType.REGULAR, 'h'), HelpCommand())
        self.register((KeyType.REGULAR, '?'), HelpCommand())

    def register(self, key: Tuple[KeyType, str], command: PagerCommand):
        """Register a command for a key combination."""
        self._commands[key] = command

    def get_command(self, key_type: KeyType, value: str) -> Optional[PagerCommand]:
        """Get the command for a key combination."""
        return self._commands.get((key_type, value))

    def execute(self, pager: 'ManualPager', key_event: 'KeyEvent') -> Mode:
        """Execute the command bound to ``key_event``.

        Unbound keys leave the pager in NORMAL mode without any effect.
        """
        command = self.get_command(key_event.key_type, key_event.value)
        if command is None:
            return Mode.NORMAL
        return command.execute(pager, key_event)
