"""Reusable UI components for the life portfolio."""

from .confirm_dialog import confirm_delete
from .event_dialog import EventEditDialog, category_badge, show_event_detail
from .header import Header
from .layout import build_footer, build_hero
from .password_dialog import PasswordDialog

__all__ = [
    "EventEditDialog",
    "Header",
    "PasswordDialog",
    "build_footer",
    "build_hero",
    "category_badge",
    "confirm_delete",
    "show_event_detail",
]
