"""Timeline section (surface) - life events in chronological order."""

import logging
from collections.abc import Callable

from nicegui import ui
from nicegui.elements.column import Column

from src.memory.content import CATEGORY_INFO, Event
from src.services import ServiceContainer
from src.services.event_service import format_year_range, group_top_level
from src.ui.components.confirm_dialog import confirm_delete
from src.ui.components.event_dialog import EventEditDialog, category_badge, show_event_detail
from src.ui.state import AppState

logger = logging.getLogger(__name__)


class TimelineSection:
    """Vertical timeline of top-level events, alternating left and right.

    Features:
    - Expandable sub-events under each main event
    - Detail dialog per event
    - Add/edit/delete in edit mode
    """

    def __init__(
        self,
        state: AppState,
        services: ServiceContainer,
        on_change: Callable[[], None] | None = None,
    ):
        """Initialize timeline section.

        Args:
            state: Application state.
            services: Service container.
            on_change: Called after events change; defaults to re-rendering this section.
        """
        self.state = state
        self.services = services
        self.on_change = on_change or self.refresh

        # UI references
        self._container: Column | None = None
        self._edit_dialog = EventEditDialog(state, services, on_saved=self.on_change)

    def build(self) -> None:
        """Build the timeline section UI."""
        with ui.element("section").props("id=surface").classes("w-full py-16"):
            with ui.column().classes("w-full max-w-5xl mx-auto gap-6 px-4"):
                ui.label("Surface").classes("text-sm uppercase tracking-widest text-violet-400")
                ui.label("The timeline").classes("text-3xl font-bold")
                self._container = ui.column().classes("w-full gap-6")
        self.refresh()

    def refresh(self) -> None:
        """Re-render the event list from state."""
        if self._container is None:
            return
        self._container.clear()
        with self._container:
            if not self.state.events_loaded:
                ui.spinner(size="lg").classes("mx-auto")
                return
            if self.state.is_edit_mode:
                ui.button(
                    "Add Event", icon="add", on_click=lambda: self._edit_dialog.open_new()
                ).props("outline color=primary").mark("add-event")
            groups = group_top_level(self.state.events)
            if not groups.main:
                self._build_empty_message()
                return
            for index, event in enumerate(groups.main):
                self._build_main_event(event, index, groups.children_of(event.id))

    def _build_empty_message(self) -> None:
        with ui.column().classes("w-full items-center gap-2 py-12"):
            ui.icon("timeline", size="xl").classes("text-gray-500")
            ui.label("No events yet").classes("text-gray-400")

    def _build_main_event(self, event: Event, index: int, children: list[Event]) -> None:
        """One main event card; even indexes on the left, odd on the right."""
        info = CATEGORY_INFO[event.category]
        align = "self-start" if index % 2 == 0 else "self-end"
        with ui.card().classes(f"w-full md:w-1/2 {align}").style(
            f"border-left: 3px solid {info.color}"
        ):
            with ui.row().classes("w-full items-center gap-2"):
                ui.label(format_year_range(event.start_year, event.end_year)).classes(
                    "text-sm font-medium"
                ).style(f"color: {info.color}")
                category_badge(event.category)
                ui.space()
                self._build_event_actions(event, allow_children=True)

            ui.label(event.title).classes("text-xl font-semibold cursor-pointer").on(
                "click", lambda e=event: self._open_detail(e)
            )
            if event.summary:
                ui.label(event.summary).classes("text-gray-400")

            if children:
                expanded = event.id in self.state.expanded_event_ids
                ui.button(
                    f"{'Hide' if expanded else 'Show'} {len(children)} sub-events",
                    icon="expand_less" if expanded else "expand_more",
                    on_click=lambda e=event: self._toggle(e.id),
                ).props("flat dense size=sm").mark("toggle-sub-events")
                if expanded:
                    with ui.column().classes("w-full gap-2 pl-4 border-l border-gray-700"):
                        for child in children:
                            self._build_sub_event(child)

    def _build_sub_event(self, event: Event) -> None:
        with ui.row().classes("w-full items-center gap-2"):
            ui.label(format_year_range(event.start_year, event.end_year)).classes(
                "text-xs text-gray-500 w-24"
            )
            ui.label(event.title).classes("text-sm cursor-pointer hover:underline").on(
                "click", lambda e=event: self._open_detail(e)
            )
            ui.space()
            self._build_event_actions(event, allow_children=False)

    def _build_event_actions(self, event: Event, allow_children: bool) -> None:
        if not self.state.is_edit_mode:
            return
        with ui.row().classes("gap-0"):
            if allow_children:
                ui.button(
                    icon="playlist_add",
                    on_click=lambda e=event: self._edit_dialog.open_new(
                        parent_id=e.id, category=e.category
                    ),
                ).props("flat round dense size=sm").mark("add-sub-event").tooltip("Add sub-event")
            ui.button(
                icon="edit", on_click=lambda e=event: self._edit_dialog.open_edit(e)
            ).props("flat round dense size=sm").mark("edit-event").tooltip("Edit")
            ui.button(
                icon="delete", on_click=lambda e=event: self._confirm_delete(e)
            ).props("flat round dense size=sm color=negative").mark(
                "delete-event"
            ).tooltip("Delete")

    def _toggle(self, event_id: str) -> None:
        self.state.toggle_expanded(event_id)
        self.refresh()

    def _open_detail(self, event: Event) -> None:
        self.state.selected_event_id = event.id
        show_event_detail(event, on_close=self._close_detail)

    def _close_detail(self) -> None:
        self.state.selected_event_id = None

    def _confirm_delete(self, event: Event) -> None:
        message = f'Delete "{event.title}"?\n\nSub-events are kept but no longer shown under it.'

        async def do_delete() -> None:
            if await self.services.events.delete_event(event.id):
                self.state.apply_event_deleted(event.id)
                ui.notify("Event deleted", type="positive")
                self.on_change()
            else:
                ui.notify("Could not delete event", type="negative")

        confirm_delete("Delete Event?", message, do_delete)
