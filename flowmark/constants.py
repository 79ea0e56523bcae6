"""Constants and configuration for flowmark."""

class FlowConstants:
    """Central configuration constants."""

    # Line breaks
    NEWLINE = "\n"
    HORIZONTAL_WHITESPACE = " \t"  # Whitespace a break may replace
    HARD_NEWLINE_GLYPH = "⏎"  # Drawn before hard breaks

    # Filling
    DEFAULT_FILL_COLUMN = 70
    TAB_WIDTH = 8
    MIN_FILL_COLUMN = 10
    MAX_FILL_COLUMN = 200

    # Settings storage
    CONFIG_APP_NAME = "flowmark"
    CONFIG_APP_AUTHOR = "ljosa"
    SETTINGS_FILENAME = "settings.json"
