"""Manual content store: built-in pages plus user pages from JSON files."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Iterable, Iterator, Optional, Union

from .errors import PageFormatError
from .page import Page

logger = logging.getLogger(__name__)


BUILTIN_PAGES = {
    "genesis": {
        "command": "genesis",
        "synopsis": "genesis <command> [options]",
        "description": [
            "The Deno Genesis CLI - where Unix Philosophy meets Modern Runtime.",
            "",
            "A revolutionary framework proving that timeless principles + modern",
            "technology = unprecedented developer empowerment.",
        ],
        "philosophy": [
            '"Make each program do one thing well." - Doug McIlroy',
            "",
            "Genesis embodies this principle: One framework, one runtime,",
            "infinite possibilities. No webpack. No npm. No complexity.",
            "Just pure, composable TypeScript that runs everywhere.",
        ],
        "sections": [
            {
                "title": "CORE COMMANDS",
                "content": [
                    "init       Initialize new Genesis project with hub-and-spoke architecture",
                    "dev        Start development server with hot reload and file watching",
                    "deploy     Generate nginx and systemd configs for production deployment",
                    "db         Setup MariaDB with multi-tenant architecture",
                    "new        Generate industry-specific frontend from business info",
                    "man        Display this manual system (you are here)",
                ],
            },
            {
                "title": "UNIX PHILOSOPHY IMPLEMENTATION",
                "content": [
                    "• Do One Thing Well",
                    "  Each command has a single, focused responsibility",
                    "",
                    "• Text Streams as Universal Interface",
                    "  All output is parseable, pipeable, scriptable",
                    "",
                    "• Composability Over Monoliths",
                    "  Commands work together through standard interfaces",
                    "",
                    "• Explicit Over Implicit",
                    "  Every permission, every dependency, every action is visible",
                ],
            },
            {
                "title": "SECURITY MODEL",
                "content": [
                    "Deno's permission system ensures complete security:",
                    "",
                    "--allow-read      File system read access",
                    "--allow-write     File system write access",
                    "--allow-net       Network access",
                    "--allow-env       Environment variable access",
                    "--allow-run       Subprocess execution",
                    "",
                    "No permission is ever granted implicitly.",
                ],
            },
        ],
        "seeAlso": ["init", "dev", "deploy", "db", "new"],
        "author": "Pedro M. Dominguez, Dominguez Tech Solutions LLC",
        "version": "2.0.0",
    },
    "init": {
        "command": "genesis init",
        "synopsis": "genesis init [project-name] [--template=basic|full|enterprise]",
        "description": [
            "Initialize a new Genesis project with hub-and-spoke architecture.",
            "",
            "Creates the foundational structure where a centralized core framework",
            "serves multiple isolated sites, each with its own configuration.",
        ],
        "philosophy": [
            '"Write programs that do one thing and do it well."',
            "",
            "The init command creates structure, nothing more.",
            "It doesn't install packages, compile code, or configure services.",
            "It creates directories and symbolic links. Pure. Simple. Unix.",
        ],
        "sections": [
            {
                "title": "ARCHITECTURE CREATED",
                "content": [
                    "project-root/",
                    "├── core/              # Centralized framework (single source)",
                    "├── sites/             # Individual site directories",
                    "├── shared/            # Shared resources across sites",
                    "├── config/            # Global configuration",
                    "├── logs/              # Centralized logging",
                    "└── docs/              # Framework documentation",
                ],
            },
            {
                "title": "OPTIONS",
                "content": [
                    "--template=basic       Minimal setup for simple projects",
                    "--template=full        Complete setup with all features",
                    "--template=enterprise  Enterprise features and monitoring",
                    "",
                    "--verbose              Show detailed initialization steps",
                    "--dry-run              Preview without creating files",
                ],
            },
            {
                "title": "SYMBOLIC LINKING",
                "content": [
                    "Sites use symbolic links to the core framework:",
                    "",
                    "sites/example/",
                    "├── utils -> ../../core/utils",
                    "├── middleware -> ../../core/middleware",
                    "└── main.ts -> ../../core/main.ts",
                    "",
                    "Benefits:",
                    "• Single source of truth",
                    "• Instant framework updates",
                    "• Zero duplication",
                    "• Reduced disk usage",
                ],
            },
        ],
        "seeAlso": ["new", "dev", "deploy"],
        "version": "2.0.0",
    },
    "dev": {
        "command": "genesis dev",
        "synopsis": "genesis dev [--port=3000] [--host=localhost] [--watch]",
        "description": [
            "Start the development server with hot reload capabilities.",
            "",
            "Monitors file changes, automatically restarts on modifications,",
            "and provides real-time feedback for rapid development cycles.",
        ],
        "philosophy": [
            '"Design and build software, even operating systems,',
            'to be tried early, ideally within weeks."',
            "",
            "The dev command enables immediate feedback. No build step.",
            "No compilation wait. Change code, see results. Instantly.",
        ],
        "sections": [
            {
                "title": "FEATURES",
                "content": [
                    "• Hot Module Reload    Changes apply without restart",
                    "• File Watching        Automatic detection of modifications",
                    "• Error Recovery       Graceful handling of syntax errors",
                    "• Performance Monitor  Real-time metrics display",
                    "• Request Logging      Structured, parseable log output",
                ],
            },
            {
                "title": "OPTIONS",
                "content": [
                    "--port=NUMBER         Set development server port (default: 3000)",
                    "--host=ADDRESS        Set host address (default: localhost)",
                    "--watch=PATHS         Additional paths to watch",
                    "--no-clear            Don't clear terminal on restart",
                    "--open                Open browser on start",
                ],
            },
            {
                "title": "KEYBOARD SHORTCUTS",
                "content": [
                    "r    Restart server manually",
                    "c    Clear console",
                    "q    Quit development server",
                    "h    Show help",
                    "m    Display memory usage",
                ],
            },
        ],
        "seeAlso": ["deploy", "init"],
        "version": "2.0.0",
    },
}


class Catalog:
    """Lookup from topic name to ``Page``.

    Topics are case-insensitive. Pages loaded from a directory override
    built-in pages with the same topic.
    """

    def __init__(self, pages: Optional[Dict[str, Page]] = None):
        if pages is None:
            pages = {topic: Page.from_dict(data) for topic, data in BUILTIN_PAGES.items()}
        self._pages = {topic.lower(): page for topic, page in pages.items()}

    @classmethod
    def with_directories(cls, directories: Iterable[Union[str, Path]]) -> 'Catalog':
        catalog = cls()
        for directory in directories:
            catalog.load_directory(directory)
        return catalog

    def load_directory(self, directory: Union[str, Path]) -> int:
        """Add every ``*.json`` page in ``directory``; the topic is the file stem.

        Files that cannot be read or parsed are logged and skipped.

        Returns:
            Number of pages loaded.
        """
        path = Path(directory)
        if not path.is_dir():
            logger.debug(f"Manual page directory {path} does not exist, skipping")
            return 0
        loaded = 0
        for page_file in sorted(path.glob("*.json")):
            try:
                with open(page_file, 'r', encoding='utf-8') as f:
                    page = Page.from_dict(json.load(f))
            except (json.JSONDecodeError, OSError, PageFormatError) as e:
                logger.warning(f"Could not load manual page {page_file}: {e}")
                continue
            self._pages[page_file.stem.lower()] = page
            loaded += 1
        logger.debug(f"Loaded {loaded} manual pages from {path}")
        return loaded

    def lookup(self, topic: str) -> Optional[Page]:
        """Return the page for ``topic``, or None if there is no such manual entry."""
        return self._pages.get(topic.lower())

    def topics(self) -> list[str]:
        return list(self._pages)

    def __contains__(self, topic: str) -> bool:
        return topic.lower() in self._pages

    def __iter__(self) -> Iterator[tuple[str, Page]]:
        return iter(self._pages.items())

    def __len__(self) -> int:
        return len(self._pages)
