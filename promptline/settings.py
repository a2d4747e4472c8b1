"""Persistent user settings for the prompt.

Prompt labels and the tab width can be overridden in a JSON file stored
in the OS-appropriate config directory.  Missing or invalid entries fall
back to the defaults in ``PromptConstants``.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .constants import PromptConstants
from .layout import PromptStyle

logger = logging.getLogger(__name__)

_STRING_KEYS = ('prompt', 'continuation', 'wrap')
_INT_KEYS = ('prompt_width', 'continuation_width', 'tab_width')


class SettingsPersistence:
    """Reads and validates the settings file."""

    def __init__(self):
        """Initialize settings persistence."""
        self._config_dir = Path(platformdirs.user_config_dir(PromptConstants.SETTINGS_APP_NAME))
        self._settings_file = self._config_dir / PromptConstants.SETTINGS_FILENAME
        self._settings_cache: Optional[Dict[str, Any]] = None

    @property
    def settings_file(self) -> Path:
        return self._settings_file

    def load(self) -> Dict[str, Any]:
        """Load settings from disk.

        Returns:
            Dictionary of settings. Empty dict if the file doesn't exist or
            can't be read.
        """
        if self._settings_cache is not None:
            return self._settings_cache.copy()

        if not self._settings_file.exists():
            self._settings_cache = {}
            return {}

        try:
            with open(self._settings_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError, PermissionError) as e:
            logger.warning(f"Could not load settings from {self._settings_file}: {e}")
            self._settings_cache = {}
            return {}

        if not isinstance(data, dict):
            logger.warning("Settings file has invalid format (not a dict), ignoring")
            data = {}

        valid = {}
        for key, value in data.items():
            if self.validate_setting(key, value):
                valid[key] = value
            else:
                logger.warning(f"Ignoring invalid setting {key}={value!r}")
        self._settings_cache = valid
        return valid.copy()

    def validate_setting(self, key: str, value: Any) -> bool:
        """Validate a setting value.

        Unknown keys are accepted for forward compatibility.
        """
        if key in _STRING_KEYS:
            return isinstance(value, str)
        if key in _INT_KEYS:
            # bool is an int subclass but never a width
            if isinstance(value, bool) or not isinstance(value, int):
                return False
            return value >= 0 if key != 'tab_width' else 1 <= value <= 16
        return True


def load_prompt_style(term=None, persistence: Optional[SettingsPersistence] = None) -> PromptStyle:
    """Build the prompt style from user settings.

    Args:
        term: Optional blessed.Terminal; when given, label widths are
            measured instead of read from settings
        persistence: Settings store (defaults to the user config file)

    Returns:
        PromptStyle with overrides applied
    """
    persistence = persistence or SettingsPersistence()
    settings = persistence.load()
    labels = {key: settings[key] for key in _STRING_KEYS if key in settings}
    tab_width = settings.get('tab_width', PromptConstants.TAB_WIDTH)

    if term is not None:
        try:
            return PromptStyle.measured(term, tab_width=tab_width, **labels)
        except ValueError as e:
            logger.warning(f"Ignoring prompt labels from settings: {e}")
            return PromptStyle.measured(term, tab_width=tab_width)

    widths = {key: settings[key] for key in ('prompt_width', 'continuation_width') if key in settings}
    return PromptStyle(tab_width=tab_width, **labels, **widths)
