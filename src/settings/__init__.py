"""Settings package for the portfolio site.

- _paths.py: Path constants for settings, .env and output directories
- _types.py: Constants (log levels, environment variable names, default secret)
- _validation.py: Settings validation
- _backup.py: Backup and recovery of settings.json
- _settings.py: Main Settings dataclass
"""

from src.settings._paths import ENV_FILE, OUTPUT_DIR, SETTINGS_FILE
from src.settings._settings import Settings
from src.settings._types import (
    DEFAULT_EDIT_PASSWORD,
    ENV_GATEWAY_KEY,
    ENV_GATEWAY_URL,
    LOG_LEVELS,
)

__all__ = [
    "DEFAULT_EDIT_PASSWORD",
    "ENV_FILE",
    "ENV_GATEWAY_KEY",
    "ENV_GATEWAY_URL",
    "LOG_LEVELS",
    "OUTPUT_DIR",
    "SETTINGS_FILE",
    "Settings",
]
