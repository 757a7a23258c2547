"""Password dialog that unlocks edit mode."""

import logging
from collections.abc import Callable

from nicegui import ui
from nicegui.elements.input import Input
from nicegui.elements.label import Label

from src.ui.state import AppState

logger = logging.getLogger(__name__)


class PasswordDialog:
    """Modal prompt for the edit-mode secret.

    A wrong password shows an inline error that clears itself after
    ``state.password_error_seconds``. There is no lockout.
    """

    def __init__(self, state: AppState, on_unlocked: Callable[[], None] | None = None):
        """Initialize the dialog.

        Args:
            state: Application state holding the edit-mode gate.
            on_unlocked: Called after a correct password was entered.
        """
        self.state = state
        self.on_unlocked = on_unlocked
        self._dialog: ui.dialog | None = None
        self._input: Input | None = None
        self._error_label: Label | None = None
        self._error_timer: ui.timer | None = None

    def build(self) -> None:
        """Create the (closed) dialog element on the current page."""
        with ui.dialog() as self._dialog, ui.card().classes("w-full max-w-md"):
            with ui.row().classes("w-full items-center gap-3 mb-2"):
                ui.icon("lock", size="md").classes("text-gray-300")
                with ui.column().classes("gap-0"):
                    ui.label("Edit Mode").classes("text-lg font-medium")
                    ui.label("Enter the password to start editing").classes(
                        "text-sm text-gray-500"
                    )
                ui.space()
                ui.button(icon="close", on_click=self.close).props("flat round dense")

            self._input = (
                ui.input(
                    "Password",
                    password=True,
                    password_toggle_button=True,
                )
                .classes("w-full")
                .props("autofocus outlined")
                .on("keydown.enter", self.submit)
            )
            self._error_label = ui.label("Wrong password, please try again").classes(
                "text-sm text-red-400"
            )
            self._error_label.set_visibility(False)

            with ui.row().classes("w-full justify-end gap-2 mt-2"):
                ui.button("Cancel", on_click=self.close).props("flat")
                ui.button("Enter", on_click=self.submit).props("color=primary").mark(
                    "password-submit"
                )

        self._dialog.on("hide", self._on_hide)

    def open(self) -> None:
        """Show the dialog."""
        self.state.open_password_modal()
        if self._dialog:
            self._dialog.open()

    def close(self) -> None:
        """Hide the dialog, clearing the input and error."""
        self.state.close_password_modal()
        self._reset()
        if self._dialog:
            self._dialog.close()

    def submit(self) -> None:
        """Check the entered password against the gate."""
        candidate = self._input.value if self._input else ""
        if self.state.verify_password(candidate or ""):
            self._reset()
            if self._dialog:
                self._dialog.close()
            ui.notify("Edit mode enabled", type="positive")
            if self.on_unlocked:
                self.on_unlocked()
            return

        self._show_error()

    def _show_error(self) -> None:
        if self._error_label is None:
            return
        self._error_label.set_visibility(True)
        # A repeated failure restarts the countdown
        self._cancel_error_timer()
        self._error_timer = ui.timer(
            self.state.password_error_seconds, self._hide_error, once=True
        )

    def _cancel_error_timer(self) -> None:
        if self._error_timer is not None:
            self._error_timer.cancel()
            self._error_timer = None

    def _hide_error(self) -> None:
        self._error_timer = None
        if self._error_label is not None:
            self._error_label.set_visibility(False)

    def _reset(self) -> None:
        if self._input is not None:
            self._input.value = ""
        self._cancel_error_timer()
        self._hide_error()

    def _on_hide(self) -> None:
        # Closed by clicking outside the card
        if self.state.show_password_modal:
            self.state.close_password_modal()
            self._reset()
