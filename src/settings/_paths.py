"""Path constants for portfolio settings and output directories."""

from pathlib import Path

SETTINGS_FILE = Path(__file__).parent.parent / "settings.json"

# Go up from src/settings to src/, then up to project root
PROJECT_ROOT = Path(__file__).parent.parent.parent
ENV_FILE = PROJECT_ROOT / ".env"
OUTPUT_DIR = PROJECT_ROOT / "output"

__all__ = [
    "ENV_FILE",
    "OUTPUT_DIR",
    "PROJECT_ROOT",
    "SETTINGS_FILE",
]
