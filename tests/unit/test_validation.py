"""Tests for utils/validation.py."""

import pytest

from src.utils.exceptions import PortfolioError, ValidationError
from src.utils.validation import (
    validate_http_url,
    validate_in_range,
    validate_not_empty,
    validate_string_in_choices,
    validate_year_range,
)


class TestValidateNotEmpty:
    """Tests for validate_not_empty()."""

    def test_accepts_text(self):
        """Non-blank strings pass."""
        validate_not_empty("hello", "content")

    @pytest.mark.parametrize("value", [None, "", "   ", "\n\t "])
    def test_rejects_blank(self, value):
        """None, empty and whitespace-only are rejected."""
        with pytest.raises(ValidationError, match="content"):
            validate_not_empty(value, "content")

    def test_rejects_non_string(self):
        """Wrong types raise TypeError."""
        with pytest.raises(TypeError):
            validate_not_empty(42, "content")  # type: ignore[arg-type]

    def test_validation_error_is_value_error(self):
        """ValidationError can be caught as ValueError or PortfolioError."""
        with pytest.raises(ValueError):
            validate_not_empty("", "content")
        with pytest.raises(PortfolioError):
            validate_not_empty("", "content")


class TestValidateInRange:
    """Tests for validate_in_range()."""

    def test_bounds_inclusive(self):
        """Both ends of the range are allowed."""
        validate_in_range(0, "x", 0, 100)
        validate_in_range(100.0, "x", 0, 100)

    @pytest.mark.parametrize("value", [-0.1, 100.5])
    def test_out_of_range(self, value):
        """Values outside the range are rejected."""
        with pytest.raises(ValidationError):
            validate_in_range(value, "x", 0, 100)

    def test_rejects_bool(self):
        """Booleans are not numbers here."""
        with pytest.raises(TypeError):
            validate_in_range(True, "x", 0, 1)

    def test_rejects_none(self):
        """None is not a value."""
        with pytest.raises(ValidationError):
            validate_in_range(None, "x")


class TestOtherValidators:
    """Tests for choice, URL and year-range validators."""

    def test_string_in_choices(self):
        """Only listed values pass."""
        validate_string_in_choices("INFO", "log_level", ["DEBUG", "INFO"])
        with pytest.raises(ValidationError):
            validate_string_in_choices("TRACE", "log_level", ["DEBUG", "INFO"])

    @pytest.mark.parametrize("url", ["", None, "http://localhost:54321", "https://x.supabase.co"])
    def test_http_url_accepts(self, url):
        """Empty means unconfigured; http(s) URLs with a host pass."""
        validate_http_url(url, "gateway_url")

    @pytest.mark.parametrize("url", ["ftp://x.org", "x.supabase.co", "https://"])
    def test_http_url_rejects(self, url):
        """Other schemes and host-less values are rejected."""
        with pytest.raises(ValidationError):
            validate_http_url(url, "gateway_url")

    def test_year_range(self):
        """An end year may equal but not precede the start year."""
        validate_year_range(2000, None)
        validate_year_range(2000, 2000)
        with pytest.raises(ValidationError):
            validate_year_range(2000, 1999)
