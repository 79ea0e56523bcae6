"""Session state management for flowmark.

This module provides a centralized, process-wide store for settings that
are read on every operation rather than captured once, such as the set
of modes that use flowed filling.
"""

from typing import Any, Dict, FrozenSet, Iterable, Optional


class SessionManager:
    """Manages session state across the application.

    This singleton class holds configuration that lives as long as the
    process: every dispatcher and view reads it at call time, so a change
    takes effect on the next break without reinstalling anything.
    """

    _instance: Optional['SessionManager'] = None

    def __new__(cls) -> 'SessionManager':
        """Ensure singleton pattern."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._state = {}
        return cls._instance

    def get(self, key: str, default: Any = None) -> Any:
        """Get a session value.

        Args:
            key: The session key
            default: Default value if key not found

        Returns:
            The session value or default
        """
        return self._state.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set a session value.

        Args:
            key: The session key
            value: The value to store
        """
        self._state[key] = value

    def clear(self) -> None:
        """Clear all session state."""
        self._state.clear()

    def clear_key(self, key: str) -> None:
        """Clear a specific session key.

        Args:
            key: The session key to clear
        """
        self._state.pop(key, None)

    @property
    def state(self) -> Dict[str, Any]:
        """Get a copy of the current state.

        Returns:
            Copy of the session state dictionary
        """
        return self._state.copy()


# Session keys used across the application
class SessionKeys:
    """Constants for session state keys."""

    # Reflow settings
    FLOWED_MODES = "flowed_modes"  # Modes whose fill inserts soft " \n" breaks
    FILL_COLUMN = "fill_column"

    # Display settings
    HARD_NEWLINE_GLYPH = "hard_newline_glyph"


# Convenience functions
def get_session() -> SessionManager:
    """Get the session manager instance.

    Returns:
        The singleton SessionManager instance
    """
    return SessionManager()


def get_flowed_modes() -> FrozenSet[str]:
    """Return the modes that use flowed filling (empty unless configured)."""
    return frozenset(get_session().get(SessionKeys.FLOWED_MODES, ()))


def set_flowed_modes(modes: Iterable[str]) -> None:
    get_session().set(SessionKeys.FLOWED_MODES, frozenset(modes))
