"""Header component with section navigation and the edit-mode toggle."""

import logging

from nicegui import ui
from nicegui.elements.button import Button

from src.ui.components.password_dialog import PasswordDialog
from src.ui.state import AppState

logger = logging.getLogger(__name__)

# Navigation items: (anchor, label, icon)
NAV_ITEMS = [
    ("surface", "Surface", "timeline"),
    ("middle", "Middle", "bubble_chart"),
    ("deep", "Deep", "psychology"),
]


class Header:
    """Fixed header: site title, in-page anchors and a lock/unlock button."""

    def __init__(self, state: AppState, title: str, password_dialog: PasswordDialog):
        """Initialize header."""
        self.state = state
        self.title = title
        self.password_dialog = password_dialog
        self._edit_button: Button | None = None

    def build(self) -> None:
        """Build the header UI."""
        bg_color = "#0f172a"
        with ui.header().classes("shadow-sm items-center").style(f"background-color: {bg_color}"):
            with ui.row().classes("w-full items-center gap-2 px-4 py-2"):
                ui.icon("auto_awesome", size="md").classes("text-violet-400")
                ui.label(self.title).classes("text-lg font-bold mr-2")

                ui.space()

                self._build_navigation()
                self._build_edit_toggle()

        self.state.on_edit_mode_change(lambda _: self._refresh_edit_toggle())

    def _build_navigation(self) -> None:
        """Build anchor links to the three page sections."""
        for anchor, label, icon in NAV_ITEMS:
            with ui.link(target=f"#{anchor}").classes(
                "flex items-center gap-1 px-3 py-1.5 rounded-md transition-colors "
                "text-gray-400 hover:text-gray-200 hover:bg-gray-700/50"
            ):
                ui.icon(icon, size="xs")
                ui.label(label).classes("text-sm")

    def _build_edit_toggle(self) -> None:
        self._edit_button = (
            ui.button(on_click=self._on_toggle).props("flat round").mark("edit-toggle")
        )
        self._edit_button.tooltip("Toggle edit mode")
        self._refresh_edit_toggle()

    def _refresh_edit_toggle(self) -> None:
        if self._edit_button is None:
            return
        if self.state.is_edit_mode:
            self._edit_button.props("icon=lock_open color=positive")
        else:
            self._edit_button.props("icon=lock color=grey")

    def _on_toggle(self) -> None:
        if self.state.is_edit_mode:
            self.state.exit_edit_mode()
            ui.notify("Edit mode disabled", type="info")
        else:
            self.password_dialog.open()
