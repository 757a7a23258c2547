"""Centralized exception hierarchy for the portfolio site.

Exception Hierarchy:

    PortfolioError (base for all application errors)
    ├── GatewayError (storage gateway request failures)
    │   └── GatewayNotConfiguredError (endpoint URL or API key missing)
    ├── ValidationError (client-side input validation failures)
    └── ConfigError (configuration parsing/validation failures)

Usage:
    from src.utils.exceptions import GatewayError

    try:
        rows = await gateway.select("events", order_by="start_year")
    except GatewayError as e:
        logger.error("Error fetching events: %s", e)
        rows = []
"""

import logging

logger = logging.getLogger(__name__)


class PortfolioError(Exception):
    """Base exception for all portfolio errors.

    All custom exceptions should inherit from this class to allow
    catching all application-specific errors with a single except clause.
    """

    pass


class GatewayError(PortfolioError):
    """Raised when a storage gateway operation fails.

    Covers HTTP error statuses, transport failures and bodies that cannot
    be decoded. Services catch this and degrade to an empty list or a
    False/None result.

    Attributes:
        table: Table the operation targeted.
        operation: Operation name (insert, select, update, delete).
        status_code: HTTP status code, if a response was received.
    """

    def __init__(
        self,
        message: str,
        table: str | None = None,
        operation: str | None = None,
        status_code: int | None = None,
    ):
        """Initialize GatewayError with request context.

        Args:
            message: Human-readable error message.
            table: Table the operation targeted.
            operation: Operation name.
            status_code: HTTP status code, if any.
        """
        super().__init__(message)
        self.table = table
        self.operation = operation
        self.status_code = status_code
        logger.debug(
            "GatewayError initialized: table=%s, operation=%s, status=%s",
            table,
            operation,
            status_code,
        )


class GatewayNotConfiguredError(GatewayError):
    """Raised when the gateway endpoint URL or API key is missing.

    Every data operation fails this way until both values are supplied,
    which keeps the UI running with empty content.
    """

    pass


class ValidationError(PortfolioError, ValueError):
    """Raised when input validation fails before any network call.

    Also a ValueError, so callers written against plain argument checks
    keep working.
    """

    pass


class ConfigError(PortfolioError, ValueError):
    """Raised when configuration values are invalid or cannot be parsed."""

    pass
