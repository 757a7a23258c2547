"""Event detail and edit dialogs shared by the timeline and value circles."""

import logging
from collections.abc import Callable
from typing import Any

from nicegui import ui

from src.memory.content import CATEGORY_INFO, Event, EventCategory, EventDraft, EventUpdate
from src.services import ServiceContainer
from src.services.event_service import format_year_range, new_event_draft
from src.ui.state import AppState

logger = logging.getLogger(__name__)

CATEGORY_OPTIONS = {category.value: info.label for category, info in CATEGORY_INFO.items()}


def category_badge(category: EventCategory) -> None:
    """Small coloured label with the category name."""
    info = CATEGORY_INFO[category]
    ui.label(info.label).classes("text-xs px-2 py-0.5 rounded-full border").style(
        f"color: {info.color}; border-color: {info.color}66"
    )


def show_event_detail(event: Event, on_close: Callable[[], None] | None = None) -> None:
    """Open a read-only dialog with an event's full details."""
    info = CATEGORY_INFO[event.category]
    with ui.dialog() as dialog, ui.card().classes("w-full max-w-2xl"):
        with ui.row().classes("w-full items-center gap-2"):
            ui.label(format_year_range(event.start_year, event.end_year)).classes(
                "text-sm font-medium px-3 py-1 rounded-full"
            ).style(f"color: {info.color}; background-color: {info.color}20")
            category_badge(event.category)
            ui.space()
            ui.button(icon="close", on_click=dialog.close).props("flat round dense")
        ui.label(event.title).classes("text-2xl font-bold")
        if event.summary:
            ui.label(event.summary).classes("text-gray-400 italic")
        ui.label(event.description).classes("whitespace-pre-line")
        if event.images:
            with ui.row().classes("w-full gap-2"):
                for url in event.images:
                    ui.image(url).classes("w-40 h-28 rounded")
        if event.pdf_url:
            with ui.link(target=event.pdf_url, new_tab=True).classes("flex items-center gap-1"):
                ui.icon("description", size="xs")
                ui.label("View document").classes("text-sm")
    if on_close:
        dialog.on("hide", lambda: on_close())
    dialog.open()


class EventEditDialog:
    """Add/edit form for an event.

    Adding inserts a new event (optionally under a parent); editing sends a
    full-field update of the mutable fields. The parent reference is shown
    but cannot be changed.
    """

    def __init__(
        self,
        state: AppState,
        services: ServiceContainer,
        on_saved: Callable[[], None] | None = None,
    ):
        """Initialize the dialog.

        Args:
            state: Application state (receives the saved event).
            services: Service container.
            on_saved: Called after a successful save so the caller can re-render.
        """
        self.state = state
        self.services = services
        self.on_saved = on_saved
        self._editing_id: str | None = None
        self._parent_id: str | None = None
        self._values: dict[str, Any] = {}
        self._dialog: ui.dialog | None = None

    def open_new(
        self,
        parent_id: str | None = None,
        category: EventCategory = EventCategory.EXPLORATION,
    ) -> None:
        """Open the form for a new event."""
        draft = new_event_draft(parent_id=parent_id, category=category)
        self._editing_id = None
        self._parent_id = draft.parent_id
        self._values = draft.model_dump(exclude={"parent_id"})
        self._show("Add Event")

    def open_edit(self, event: Event) -> None:
        """Open the form pre-filled with an existing event."""
        self._editing_id = event.id
        self._parent_id = event.parent_id
        self._values = event.model_dump(exclude={"id", "created_at", "parent_id"})
        self._values["images"] = list(event.images)
        self._show("Edit Event")

    def _show(self, title: str) -> None:
        with ui.dialog() as self._dialog, ui.card().classes("w-full max-w-2xl"):
            self._dialog.props("persistent")
            ui.label(title).classes("text-xl font-bold")
            if self._parent_id:
                parent = next((e for e in self.state.events if e.id == self._parent_id), None)
                ui.label(f"Sub-event of: {parent.title if parent else self._parent_id}").classes(
                    "text-sm text-gray-500"
                )
            self._build_fields()
            with ui.row().classes("w-full justify-end gap-2"):
                ui.button("Cancel", on_click=self._dialog.close).props("flat")
                ui.button("Save", icon="check", on_click=self._save).props("color=primary")
        self._dialog.open()

    def _build_fields(self) -> None:
        values = self._values
        ui.input("Title").bind_value(values, "title").classes("w-full")
        ui.input("Summary (one line)").bind_value(values, "summary").classes("w-full")
        ui.textarea("Description").bind_value(values, "description").classes("w-full")
        with ui.row().classes("w-full gap-4"):
            ui.number("Start year", precision=0, format="%d").bind_value(
                values, "start_year", forward=lambda v: int(v) if v is not None else None
            )
            ui.number("End year (optional)", precision=0, format="%d").bind_value(
                values, "end_year", forward=lambda v: int(v) if v is not None else None
            )
            ui.select(CATEGORY_OPTIONS, label="Category").bind_value(values, "category").classes(
                "w-48"
            )
        ui.input("Document URL (PDF)").bind_value(values, "pdf_url").classes("w-full")
        self._build_images()

    @ui.refreshable_method
    def _build_images(self) -> None:
        images: list[str] = self._values["images"]
        ui.label("Images").classes("text-sm text-gray-500")
        for index, url in enumerate(images):
            with ui.row().classes("w-full items-center gap-2"):
                ui.label(url).classes("text-xs truncate flex-grow")
                ui.button(icon="delete", on_click=lambda i=index: self._remove_image(i)).props(
                    "flat round dense size=sm"
                )
        with ui.row().classes("w-full items-center gap-2"):
            new_url = ui.input("Image URL").classes("flex-grow")
            ui.button(icon="add", on_click=lambda: self._add_image(new_url.value)).props(
                "flat round dense"
            )

    def _add_image(self, url: str | None) -> None:
        if url and url.strip():
            self._values["images"].append(url.strip())
            self._build_images.refresh()

    def _remove_image(self, index: int) -> None:
        images: list[str] = self._values["images"]
        if 0 <= index < len(images):
            images.pop(index)
            self._build_images.refresh()

    async def _save(self) -> None:
        values = dict(self._values)
        if values.get("start_year") is None:
            ui.notify("Start year is required", type="warning")
            return
        try:
            if self._editing_id is None:
                draft = EventDraft(**values, parent_id=self._parent_id)
                created = await self.services.events.create_event(draft)
                if created is None:
                    ui.notify("Could not create event", type="negative")
                    return
                self.state.apply_event_created(created)
            else:
                update = EventUpdate(**values)
                ok = await self.services.events.update_event(self._editing_id, update)
                if not ok:
                    ui.notify("Could not save event", type="negative")
                    return
                current = next((e for e in self.state.events if e.id == self._editing_id), None)
                if current is not None:
                    self.state.apply_event_updated(current.model_copy(update=update.to_fields()))
        except ValueError as e:
            logger.warning("Invalid event form: %s", e)
            ui.notify(f"Invalid event: {e}", type="warning")
            return

        if self._dialog:
            self._dialog.close()
        if self.on_saved:
            self.on_saved()
