"""UI module for the life portfolio.

NiceGUI-based single page with:
- Timeline section (surface)
- Value circles section (middle)
- Philosophy section (deep)
"""

from .app import PortfolioApp, create_app
from .state import AppState

__all__ = [
    "AppState",
    "PortfolioApp",
    "create_app",
]
