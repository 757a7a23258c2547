"""Type definitions and constants for portfolio settings."""

# Log levels offered in settings (value is the display label)
LOG_LEVELS: dict[str, str] = {
    "DEBUG": "Debug",
    "INFO": "Info",
    "WARNING": "Warning",
    "ERROR": "Error",
}

# Environment variables that override the gateway credentials in settings.json
ENV_GATEWAY_URL = "PORTFOLIO_GATEWAY_URL"
ENV_GATEWAY_KEY = "PORTFOLIO_GATEWAY_KEY"

# Shared secret that unlocks edit mode unless settings override it
DEFAULT_EDIT_PASSWORD = "life2024"
