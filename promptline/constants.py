"""Constants and configuration defaults for the prompt."""

class PromptConstants:
    """Central configuration constants for the prompt."""

    # Prompt labels: a bold name followed by a plain marker
    PROMPT_NAME = "duckdb"  # First line
    PROMPT_ENDL_NAME = "   ..."  # Line after an explicit newline
    PROMPT_WRAP_NAME = "   .."  # Line after a soft wrap
    PROMPT_MARKER = "> "
    PROMPT_WRAP_MARKER = ">> "
    PROMPT_WIDTH = 8  # Printable width of every label above

    # Editing
    TAB_WIDTH = 2  # Spaces inserted by the tab key

    # Terminal
    DEFAULT_TERMINAL_WIDTH = 80  # Used until configure() is called

    # Settings
    SETTINGS_APP_NAME = "promptline"
    SETTINGS_FILENAME = "settings.json"

    # Demo shell
    STATEMENT_TERMINATOR = ";"
    LOG_ENV_VAR = "PROMPTLINE_LOG"  # Path of a debug log file, if set
