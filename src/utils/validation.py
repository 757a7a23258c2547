"""Input validation utilities for services and settings.

Each helper raises ValidationError (a ValueError) with a clear message,
or TypeError when the value has the wrong type altogether.
"""

from urllib.parse import urlparse

from src.utils.exceptions import ValidationError


def validate_not_empty(value: str | None, param_name: str) -> None:
    """Validate that a string parameter is not None or empty.

    Args:
        value: The string value to validate
        param_name: Name of the parameter for error messages

    Raises:
        ValidationError: If value is None, empty string, or only whitespace
        TypeError: If value is not a string
    """
    if value is None:
        raise ValidationError(f"Parameter '{param_name}' cannot be None")
    if not isinstance(value, str):
        raise TypeError(f"Parameter '{param_name}' must be a string, got {type(value).__name__}")
    if not value.strip():
        raise ValidationError(f"Parameter '{param_name}' cannot be empty")


def validate_in_range(
    value: int | float | None,
    param_name: str,
    min_val: int | float | None = None,
    max_val: int | float | None = None,
) -> None:
    """Validate that a numeric parameter is within a specified range.

    Args:
        value: The numeric value to validate
        param_name: Name of the parameter for error messages
        min_val: Minimum allowed value (inclusive), None for no minimum
        max_val: Maximum allowed value (inclusive), None for no maximum

    Raises:
        ValidationError: If value is None or not in range
        TypeError: If value is not int or float
    """
    if value is None:
        raise ValidationError(f"Parameter '{param_name}' cannot be None")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"Parameter '{param_name}' must be numeric, got {type(value).__name__}")

    if min_val is not None and value < min_val:
        raise ValidationError(f"Parameter '{param_name}' must be >= {min_val}, got {value}")
    if max_val is not None and value > max_val:
        raise ValidationError(f"Parameter '{param_name}' must be <= {max_val}, got {value}")


def validate_string_in_choices(value: str | None, param_name: str, choices: list[str]) -> None:
    """Ensure the string parameter is one of the allowed choices.

    Raises:
        ValidationError: If value is empty or not one of choices.
    """
    validate_not_empty(value, param_name)
    if value not in choices:
        raise ValidationError(f"Parameter '{param_name}' must be one of {choices}, got '{value}'")


def validate_http_url(value: str | None, param_name: str) -> None:
    """Validate an absolute http(s) URL with a host.

    Empty values are allowed; they mean "not configured".

    Raises:
        ValidationError: If a non-empty value is not an http(s) URL.
    """
    if not value:
        return
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValidationError(f"Parameter '{param_name}' must be an http(s) URL, got '{value}'")


def validate_year_range(start_year: int, end_year: int | None) -> None:
    """Validate that an optional end year does not precede the start year.

    Raises:
        ValidationError: If end_year is earlier than start_year.
    """
    if end_year is not None and end_year < start_year:
        raise ValidationError(
            f"end_year ({end_year}) cannot be earlier than start_year ({start_year})"
        )
