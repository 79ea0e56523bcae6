"""Settings persistence for user preferences.

This module provides persistent storage for the flowed mode set, the
hard-newline glyph and the default fill column. Settings are stored in an
OS-appropriate location and survive application restarts.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .constants import FlowConstants
from .session import SessionKeys, SessionManager, get_session

logger = logging.getLogger(__name__)


class SettingsPersistence:
    """Manages persistent storage of user preferences.

    Preferences are stored in a JSON file in the user's config directory.
    """

    def __init__(self):
        """Initialize settings persistence."""
        # Get platform-appropriate config directory
        self._config_dir = Path(platformdirs.user_config_dir(
            FlowConstants.CONFIG_APP_NAME, FlowConstants.CONFIG_APP_AUTHOR))
        self._settings_file = self._config_dir / FlowConstants.SETTINGS_FILENAME
        self._settings_cache: Optional[Dict[str, Any]] = None

    def _ensure_config_dir(self) -> None:
        """Ensure the config directory exists."""
        try:
            self._config_dir.mkdir(parents=True, exist_ok=True)
        except (OSError, PermissionError) as e:
            logger.warning(f"Could not create config directory {self._config_dir}: {e}")

    def load_settings(self) -> Dict[str, Any]:
        """Load preferences from disk.

        Returns:
            Dictionary of valid settings. Empty if the file doesn't exist or
            can't be read; invalid entries are dropped.
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

        # Validate that it's a dict
        if not isinstance(data, dict):
            logger.warning("Settings file has invalid format (not a dict), ignoring")
            self._settings_cache = {}
            return {}

        settings = {}
        for key, value in data.items():
            if self.validate_setting(key, value):
                settings[key] = value
            else:
                logger.warning(f"Ignoring invalid setting {key}={value!r}")
        self._settings_cache = settings
        return settings.copy()

    def save_settings(self, settings: Dict[str, Any]) -> bool:
        """Save preferences to disk atomically.

        Args:
            settings: Dictionary of settings to save.

        Returns:
            True if save was successful, False otherwise.
        """
        self._ensure_config_dir()

        # Use atomic write pattern (temp file + rename)
        temp_file = self._settings_file.with_suffix('.tmp')

        try:
            # Write to temp file
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(settings, f, indent=2)

            # Atomic rename
            temp_file.replace(self._settings_file)

            # Update cache
            self._settings_cache = dict(settings)
            return True

        except (OSError, PermissionError, TypeError) as e:
            logger.warning(f"Could not save settings to {self._settings_file}: {e}")
            # Clean up temp file if it exists
            try:
                if temp_file.exists():
                    temp_file.unlink()
            except OSError:
                pass
            return False

    def validate_setting(self, key: str, value: Any) -> bool:
        """Validate a setting value.

        Args:
            key: Setting key name.
            value: Setting value to validate.

        Returns:
            True if setting is valid, False otherwise.
        """
        if value is None:
            return True  # None is valid (means "not set")

        # List of mode names
        if key == SessionKeys.FLOWED_MODES:
            return isinstance(value, list) and all(isinstance(m, str) and m for m in value)

        # A single printable character
        if key == SessionKeys.HARD_NEWLINE_GLYPH:
            return isinstance(value, str) and len(value) == 1 and value.isprintable()

        if key == SessionKeys.FILL_COLUMN:
            if not isinstance(value, int) or isinstance(value, bool):
                return False
            return FlowConstants.MIN_FILL_COLUMN <= value <= FlowConstants.MAX_FILL_COLUMN

        # Unknown settings are considered valid (forward compatibility)
        return True

    def apply_to_session(self, session: Optional[SessionManager] = None) -> None:
        """Copy stored preferences into the session."""
        session = session or get_session()
        settings = self.load_settings()
        if settings.get(SessionKeys.FLOWED_MODES) is not None:
            session.set(SessionKeys.FLOWED_MODES, frozenset(settings[SessionKeys.FLOWED_MODES]))
        for key in (SessionKeys.HARD_NEWLINE_GLYPH, SessionKeys.FILL_COLUMN):
            if settings.get(key) is not None:
                session.set(key, settings[key])

    def save_session(self, session: Optional[SessionManager] = None) -> bool:
        """Store the session's preferences for the next run."""
        session = session or get_session()
        settings = self.load_settings()
        modes = session.get(SessionKeys.FLOWED_MODES)
        if modes is not None:
            settings[SessionKeys.FLOWED_MODES] = sorted(modes)
        for key in (SessionKeys.HARD_NEWLINE_GLYPH, SessionKeys.FILL_COLUMN):
            if session.get(key) is not None:
                settings[key] = session.get(key)
        return self.save_settings(settings)

    def clear_cache(self) -> None:
        """Clear the in-memory cache of settings."""
        self._settings_cache = None


# Global instance
_persistence: Optional[SettingsPersistence] = None


def get_persistence() -> SettingsPersistence:
    """Get the global settings persistence instance.

    Returns:
        The singleton SettingsPersistence instance.
    """
    global _persistence
    if _persistence is None:
        _persistence = SettingsPersistence()
    return _persistence
