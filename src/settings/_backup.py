"""Backup helpers for settings persistence.

Provides:
- Pre-save backup creation (.bak file)
- Recovery from backup when the primary file is missing or corrupt
"""

import json
import logging
import shutil
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def _create_settings_backup(settings_path: Path) -> bool:
    """Copy settings.json to settings.json.bak before writing.

    A missing, empty or non-object file is never copied over an existing
    backup. Failures are logged, never raised.

    Args:
        settings_path: Path to the primary settings file.

    Returns:
        True if a backup was created, False otherwise.
    """
    try:
        if not settings_path.exists() or settings_path.stat().st_size == 0:
            logger.debug("No settings content to back up at %s", settings_path)
            return False
        with open(settings_path) as f:
            data = json.load(f)
        if not isinstance(data, dict):
            logger.warning("Settings file is not a JSON object, skipping backup")
            return False
        backup_path = settings_path.with_suffix(".json.bak")
        shutil.copy2(settings_path, backup_path)
        logger.debug("Created settings backup at %s", backup_path)
        return True
    except json.JSONDecodeError:
        logger.warning("Settings file contains invalid JSON, skipping backup")
        return False
    except OSError as e:
        logger.warning("Failed to create settings backup: %s", e)
        return False


def _recover_from_backup(settings_path: Path) -> dict[str, Any] | None:
    """Load settings from the .bak file next to settings_path.

    Returns:
        Parsed settings dict if recovery succeeded, None otherwise.
    """
    backup_path = settings_path.with_suffix(".json.bak")
    if not backup_path.exists():
        return None
    try:
        with open(backup_path) as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.error("Cannot recover settings from %s: %s", backup_path, e)
        return None
    if not isinstance(data, dict) or not data:
        logger.warning("Backup file %s holds no settings object", backup_path)
        return None
    logger.info("Recovered %d settings from backup file %s", len(data), backup_path)
    return data
