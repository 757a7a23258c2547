"""Reusable delete confirmation dialog."""

import logging
from collections.abc import Awaitable, Callable

from nicegui import ui

logger = logging.getLogger(__name__)


def confirm_delete(title: str, message: str, on_confirm: Callable[[], Awaitable[None]]) -> None:
    """Ask before running a destructive action.

    Args:
        title: Dialog heading, e.g. "Delete Event?".
        message: Body text naming what will be removed.
        on_confirm: Coroutine function run when the user confirms.
    """
    with ui.dialog() as dialog, ui.card().classes("p-4 min-w-[400px]"):
        ui.label(title).classes("text-lg font-bold text-red-600")
        ui.label(message).classes("text-gray-400 whitespace-pre-line mt-2")

        async def confirm() -> None:
            dialog.close()
            await on_confirm()

        with ui.row().classes("w-full justify-end gap-2 mt-4"):
            ui.button("Cancel", on_click=dialog.close).props("flat")
            ui.button("Delete", icon="delete", on_click=confirm).props("color=negative").mark(
                "confirm-delete"
            )
    dialog.open()
