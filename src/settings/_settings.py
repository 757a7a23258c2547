"""Main Settings dataclass for the portfolio site.

Settings are stored in settings.json. The gateway endpoint URL and API key
can also come from the environment (or a .env file), which always wins
over the JSON values and is never written back.
"""

from __future__ import annotations

import json
import logging
import os
import shutil
import tempfile
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, ClassVar

from dotenv import load_dotenv

from src.settings import _validation as _validation_mod
from src.settings._backup import _create_settings_backup, _recover_from_backup
from src.settings._paths import ENV_FILE, SETTINGS_FILE
from src.settings._types import DEFAULT_EDIT_PASSWORD, ENV_GATEWAY_KEY, ENV_GATEWAY_URL
from src.utils.exceptions import ConfigError

logger = logging.getLogger(__name__)


def _merge_with_defaults(data: dict[str, Any], settings_cls: type[Settings]) -> bool:
    """Merge loaded JSON data with dataclass defaults.

    Adds missing keys with their default values and removes keys that no
    longer exist in the dataclass. Modifies *data* in place.

    Returns:
        True if any changes were made, False otherwise.
    """
    default_dict = asdict(settings_cls())
    known_fields = {f.name for f in fields(settings_cls)}
    changed = False

    for key in list(data):
        if key not in known_fields:
            logger.info("Removing obsolete setting: %s", key)
            del data[key]
            changed = True

    for key in known_fields:
        if key not in data:
            logger.info("Adding new setting with default: %s", key)
            data[key] = default_dict[key]
            changed = True

    return changed


def _atomic_write_json(path: Path | str, data: dict[str, Any]) -> None:
    """Write JSON to *path* atomically via a temp file + rename."""
    path = Path(path)
    fd, tmp_path = tempfile.mkstemp(dir=str(path.parent), suffix=".tmp")
    try:
        with os.fdopen(fd, "w") as f:
            json.dump(data, f, indent=2)
        os.replace(tmp_path, str(path))
    except BaseException:
        try:
            os.unlink(tmp_path)
        except OSError as cleanup_err:
            logger.warning("Failed to remove temp settings file %s: %s", tmp_path, cleanup_err)
        raise


@dataclass
class Settings:
    """Application settings, stored as JSON."""

    # General
    site_title: str = "Life Portfolio"
    owner_name: str = ""
    log_level: str = "INFO"
    dark_mode: bool = True

    # Storage gateway (hosted row store). Empty values mean "not configured";
    # every data operation then degrades to an empty result.
    gateway_url: str = ""
    gateway_api_key: str = ""
    gateway_timeout: float | None = None  # None: wait indefinitely

    # Edit mode (client-side convenience gate, not authentication)
    edit_password: str = DEFAULT_EDIT_PASSWORD
    password_error_seconds: float = 2.0

    # Random placement band for thoughts without a stored position (percent)
    thought_position_min: float = 20.0
    thought_position_span: float = 60.0

    def save(self) -> None:
        """Save settings to JSON file."""
        self.validate()
        _create_settings_backup(SETTINGS_FILE)
        _atomic_write_json(SETTINGS_FILE, asdict(self))
        logger.info("Settings saved to %s", SETTINGS_FILE)

    def validate(self) -> bool:
        """Validate all settings fields. Delegates to _validation module.

        Returns:
            True if any settings were normalized during validation.

        Raises:
            ValueError: If any field contains an invalid value.
        """
        return _validation_mod.validate(self)

    def resolved_gateway_url(self) -> str:
        """Gateway URL from the environment, falling back to settings.json."""
        return (os.environ.get(ENV_GATEWAY_URL) or self.gateway_url).rstrip("/")

    def resolved_gateway_key(self) -> str:
        """Gateway API key from the environment, falling back to settings.json."""
        return os.environ.get(ENV_GATEWAY_KEY) or self.gateway_api_key

    @property
    def gateway_configured(self) -> bool:
        """True when both gateway URL and API key are available."""
        return bool(self.resolved_gateway_url() and self.resolved_gateway_key())

    # Class-level cache for settings (speeds up repeated load() calls)
    _cached_instance: ClassVar[Settings | None] = None

    @classmethod
    def load(cls, use_cache: bool = True) -> Settings:
        """Load settings from JSON file, or create defaults.

        New settings get default values and removed settings are cleaned up.
        A corrupt primary file is copied aside and the .bak file is tried.
        The .env file next to the project root is loaded into the
        environment (without overriding variables that are already set).

        Args:
            use_cache: If True, return cached instance if available. Set to False
                to force reload from disk (useful after save() or in tests).

        Returns:
            Settings instance.

        Raises:
            ConfigError: If a stored setting has an invalid type.
            ValueError: If a stored setting has an invalid value.
        """
        if use_cache and cls._cached_instance is not None:
            return cls._cached_instance

        if ENV_FILE.exists():
            load_dotenv(ENV_FILE, override=False)
            logger.debug("Loaded environment overrides from %s", ENV_FILE)

        data: dict[str, Any] = {}
        loaded_from_file = False
        if SETTINGS_FILE.exists():
            try:
                with open(SETTINGS_FILE) as f:
                    raw = json.load(f)
                if isinstance(raw, dict):
                    data = raw
                    loaded_from_file = bool(raw)
                else:
                    logger.error(
                        "Corrupted settings file (expected JSON object, got %s)",
                        type(raw).__name__,
                    )
                    cls._preserve_corrupt_file()
            except json.JSONDecodeError as e:
                logger.error("Corrupted settings file (invalid JSON): %s", e)
                cls._preserve_corrupt_file()
            except OSError as e:
                logger.error("Cannot read settings file: %s", e)

        if not data:
            recovered = _recover_from_backup(SETTINGS_FILE)
            if recovered is not None:
                data = recovered
                loaded_from_file = True
            else:
                logger.info("No stored settings found, using defaults")

        changed = _merge_with_defaults(data, cls)

        try:
            settings = cls(**data)
            changed = settings.validate() or changed
        except TypeError as e:
            raise ConfigError(f"A setting has an invalid type: {e}") from e

        if changed or not loaded_from_file:
            try:
                _atomic_write_json(SETTINGS_FILE, asdict(settings))
                logger.info("Settings written to %s", SETTINGS_FILE)
            except OSError as write_err:
                logger.warning("Could not persist settings to disk: %s", write_err)

        logger.info(
            "Settings loaded: gateway_configured=%s, log_level=%s",
            settings.gateway_configured,
            settings.log_level,
        )
        cls._cached_instance = settings
        return settings

    @staticmethod
    def _preserve_corrupt_file() -> None:
        """Copy an unreadable settings file aside so it can be inspected."""
        backup_path = SETTINGS_FILE.with_suffix(".json.corrupt")
        try:
            shutil.copy(SETTINGS_FILE, backup_path)
            logger.info("Backed up corrupted settings to %s", backup_path)
        except OSError as copy_err:
            logger.warning("Failed to backup corrupted settings: %s", copy_err)

    @classmethod
    def clear_cache(cls) -> None:
        """Clear the cached settings instance.

        Use this in tests that need to verify settings loading behavior,
        or after programmatically modifying settings files.
        """
        cls._cached_instance = None
