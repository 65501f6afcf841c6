"""Manpager CLI entry point.

Allows running via `python -m manpager` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from .catalog import Catalog
from .errors import ManpagerError
from .settings import PagerSettings, SettingsLoader, default_pages_dir
from .styles import Palette, make_terminal
from .version import get_version_string

logger = logging.getLogger(__name__)

DEFAULT_TOPIC = "genesis"


def _escape_bytes(s: str) -> str:
    """Return a printable representation of raw key string."""
    return s.encode('unicode_escape').decode('ascii')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="manpager", add_help=False)
    parser.add_argument("topic", nargs="?")
    parser.add_argument("-h", "--help", action="store_true")
    parser.add_argument("-l", "--list", action="store_true")
    parser.add_argument("-v", "--version", action="store_true")
    parser.add_argument("--pages-dir", action="append", default=[])
    parser.add_argument("--config")
    parser.add_argument("--log-file")
    parser.add_argument("--keytest", "--keyboard-test", action="store_true")
    return parser


def print_help(palette: Palette) -> None:
    print(palette.header("◆ GENESIS MANUAL SYSTEM ◆"))
    print("")
    print(palette.crimson("Usage:"))
    print("  manpager <command>        View manual for command")
    print("  manpager --list           List all available manuals")
    print("  manpager --help           Show this help")
    print("  manpager --version        Show version")
    print("")
    print(palette.crimson("Options:"))
    print("  --pages-dir DIR           Also load JSON manual pages from DIR")
    print("  --config FILE             Read settings from FILE")
    print("  --log-file FILE           Write debug log to FILE")
    print("  --keytest                 Show parsed key events (ESC quits)")
    print("")
    print(palette.crimson("Pager Controls:"))
    print("  j/k or arrows  Navigate line by line")
    print("  space/b        Page down/up")
    print("  /              Search")
    print("  q              Quit")


def list_topics(catalog: Catalog, palette: Palette) -> None:
    print(palette.header("◆ GENESIS MANUAL SYSTEM ◆"))
    print("")
    print(palette.crimson("Available manual pages:"))
    print("")
    topics = catalog.topics()
    max_width = max((len(t) for t in topics), default=0)
    for topic, page in catalog:
        padding = " " * (max_width - len(topic) + 4)
        print(f"  {palette.command(topic)}{padding}{palette.dim_red(page.summary)}")
    print("")
    print(palette.dim_red("Usage: manpager <command>"))
    print(palette.dim_red("   or: python -m manpager <command>"))


def show_manual(topic: str, catalog: Catalog, settings: PagerSettings, palette: Palette) -> int:
    """Display the manual for ``topic``.

    Returns:
        Exit status: 0 after the pager closes, 1 if the topic is unknown
        or the terminal cannot host the pager.
    """
    page = catalog.lookup(topic)
    if page is None:
        print(palette.neon_red("◆ ERROR ◆"))
        print(palette.crimson(f"No manual entry for '{topic}'"))
        print("")
        print(palette.dim_red("Available manual pages:"))
        for name in catalog.topics():
            print(f"  {palette.command(name)}")
        return 1

    from .pager import ManualPager
    try:
        ManualPager(settings=settings).display(page)
    except ManpagerError as e:
        logger.error("pager failed for '%s': %s", topic, e)
        print(palette.neon_red(f"Error: {e}"), file=sys.stderr)
        return 1
    return 0


def run_keyboard_test() -> None:
    """Run an interactive keyboard test using the pager's input stack.

    Quit with ESC.
    """
    from .terminal import TerminalInterface
    from .keyboard import KeyboardHandler, KeyEvent, KeyType

    print("Keyboard test mode - press keys to see parsed events.")
    print("Quit with ESC.")

    term = TerminalInterface()
    kb = KeyboardHandler(term)
    with term.session():
        print(term.term.normal_cursor, end='', flush=True)
        while True:
            ev: KeyEvent | None = kb.get_key_event(timeout=None)
            if not ev:
                continue
            if ev.key_type == KeyType.SPECIAL and ev.value == 'escape':
                break
            parts = [f"type={ev.key_type.value}", f"value={ev.value}", f"raw='{_escape_bytes(ev.raw)}'"]
            flags = [name for name, on in (('alt', ev.is_alt), ('ctrl', ev.is_ctrl)) if on]
            if flags:
                parts.append(f"flags={'+'.join(flags)}")
            print(' '.join(parts) + "\r\n", end='', flush=True)
    print("Exiting keyboard test.")


def _configure_logging(log_file: Optional[str]) -> None:
    if not log_file:
        return
    logging.basicConfig(
        filename=log_file,
        level=logging.DEBUG,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging(args.log_file)

    settings = SettingsLoader(args.config).load()
    palette = Palette(make_terminal(settings.color))

    if args.version:
        print(palette.header(get_version_string()))
        print(palette.dim_red("Built with Unix Philosophy and Python"))
        return 0
    if args.help:
        print_help(palette)
        return 0
    if args.keytest:
        run_keyboard_test()
        return 0

    directories = [settings.pages_dir or default_pages_dir(), *args.pages_dir]
    catalog = Catalog.with_directories(directories)

    if args.list or not args.topic:
        list_topics(catalog, palette)
        return 0
    return show_manual(args.topic, catalog, settings, palette)


def man_command(args: Sequence[str]) -> int:
    """Show a manual from another CLI; ``args[0]`` is the topic (default ``genesis``).

    Returns the exit status instead of exiting.
    """
    settings = SettingsLoader().load()
    palette = Palette(make_terminal(settings.color))
    catalog = Catalog.with_directories([settings.pages_dir or default_pages_dir()])
    topic = args[0] if args else DEFAULT_TOPIC
    return show_manual(topic, catalog, settings, palette)


def cli() -> None:
    sys.exit(main())


if __name__ == "__main__":  # pragma: no cover
    cli()
