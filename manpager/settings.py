"""User settings for the pager.

Settings are read from a JSON file in the user's config directory (or
from the path in ``MANPAGER_CONFIG``). They are never written back:
the pager keeps no state between sessions.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .constants import PagerConstants

logger = logging.getLogger(__name__)

APP_NAME = "manpager"
APP_AUTHOR = "genesis"
CONFIG_ENV_VAR = "MANPAGER_CONFIG"
COLOR_CHOICES = ("auto", "always", "never")


@dataclass(frozen=True)
class PagerSettings:
    """Pager configuration.

    Attributes:
        tick_interval: Seconds between animation frames of the pulsing border
        margin: Columns kept free on the right of every line
        name_column: Width of the name column in two-column content lines
        color: ``auto``, ``always`` or ``never``
        pages_dir: Directory of extra JSON manual pages; None for the default
    """
    tick_interval: float = PagerConstants.TICK_INTERVAL
    margin: int = PagerConstants.MARGIN
    name_column: int = PagerConstants.NAME_COLUMN
    color: str = "auto"
    pages_dir: Optional[str] = None


def default_pages_dir() -> Path:
    """Directory searched for user manual pages when none is configured."""
    return Path(platformdirs.user_data_dir(APP_NAME, APP_AUTHOR)) / "pages"


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _valid(name: str, value: Any) -> bool:
    if name == 'tick_interval':
        return isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0
    if name == 'margin':
        return _is_int(value) and 0 <= value <= PagerConstants.MAX_MARGIN
    if name == 'name_column':
        return _is_int(value) and 0 <= value <= PagerConstants.MIN_TERMINAL_WIDTH
    if name == 'color':
        return value in COLOR_CHOICES
    if name == 'pages_dir':
        return value is None or isinstance(value, str)
    return False


class SettingsLoader:
    """Loads ``PagerSettings`` from disk, falling back to defaults on any problem."""

    def __init__(self, settings_file: Optional[str] = None):
        self._config_dir = Path(platformdirs.user_config_dir(APP_NAME, APP_AUTHOR))
        override = settings_file or os.environ.get(CONFIG_ENV_VAR)
        self._settings_file = Path(override) if override else self._config_dir / "settings.json"

    @property
    def settings_file(self) -> Path:
        return self._settings_file

    def _load_raw(self) -> Dict[str, Any]:
        """Read the settings file.

        Returns:
            The decoded object, or an empty dict if the file is missing,
            unreadable or not a JSON object.
        """
        if not self._settings_file.exists():
            return {}
        try:
            with open(self._settings_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Could not load settings from {self._settings_file}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning("Settings file has invalid format (not a dict), ignoring")
            return {}
        return data

    def load(self) -> PagerSettings:
        """Return settings from disk merged over the defaults.

        Unknown keys and values of the wrong type are logged and ignored.
        """
        raw = self._load_raw()
        known = {f.name for f in fields(PagerSettings)}
        changes: Dict[str, Any] = {}
        for key, value in raw.items():
            if key not in known:
                logger.warning(f"Unknown setting '{key}' in {self._settings_file}, ignoring")
            elif not _valid(key, value):
                logger.warning(f"Invalid value {value!r} for setting '{key}', using default")
            else:
                changes[key] = float(value) if key == 'tick_interval' else value
        return replace(PagerSettings(), **changes)
