"""Validation functions for Settings."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from src.settings._types import LOG_LEVELS
from src.utils.validation import (
    validate_http_url,
    validate_in_range,
    validate_not_empty,
    validate_string_in_choices,
)

if TYPE_CHECKING:
    from src.settings._settings import Settings

logger = logging.getLogger(__name__)


def validate(settings: Settings) -> bool:
    """Validate all settings fields.

    Returns:
        True if any settings were normalized during validation, False otherwise.
        Callers can use this to decide whether to re-save the settings file.

    Raises:
        ValueError: If any field contains an invalid value.
    """
    _validate_log_level(settings)
    changed = _validate_gateway(settings)
    _validate_edit_mode(settings)
    _validate_thought_band(settings)
    return changed


def _validate_log_level(settings: Settings) -> None:
    """Validate log_level is a known logging level."""
    validate_string_in_choices(settings.log_level, "log_level", list(LOG_LEVELS))


def _validate_gateway(settings: Settings) -> bool:
    """Validate gateway URL and timeout; strip a trailing slash from the URL."""
    changed = False
    if settings.gateway_url.endswith("/"):
        settings.gateway_url = settings.gateway_url.rstrip("/")
        logger.info("Normalized gateway_url (removed trailing slash)")
        changed = True
    validate_http_url(settings.gateway_url, "gateway_url")
    if settings.gateway_timeout is not None and settings.gateway_timeout <= 0:
        raise ValueError(
            f"gateway_timeout must be positive or null, got {settings.gateway_timeout}"
        )
    return changed


def _validate_edit_mode(settings: Settings) -> None:
    """Validate the edit-mode secret and error indicator delay."""
    validate_not_empty(settings.edit_password, "edit_password")
    validate_in_range(settings.password_error_seconds, "password_error_seconds", 0.0, 60.0)


def _validate_thought_band(settings: Settings) -> None:
    """Validate that the random placement band stays inside 0-100."""
    validate_in_range(settings.thought_position_min, "thought_position_min", 0.0, 100.0)
    validate_in_range(settings.thought_position_span, "thought_position_span", 0.0, 100.0)
    upper = settings.thought_position_min + settings.thought_position_span
    if upper > 100.0:
        raise ValueError(
            "thought_position_min + thought_position_span must be <= 100, "
            f"got {settings.thought_position_min} + {settings.thought_position_span}"
        )
