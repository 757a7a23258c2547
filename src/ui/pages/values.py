"""Value circles section (middle) - events grouped by category."""

import logging

from nicegui import ui
from nicegui.elements.row import Row

from src.memory.content import CATEGORY_INFO, EventCategory
from src.services.event_service import count_by_category, events_by_category, format_year_range
from src.ui.components.event_dialog import show_event_detail
from src.ui.state import AppState

logger = logging.getLogger(__name__)


class ValueCirclesSection:
    """One circle per category showing its event count.

    Clicking a circle expands the category's events underneath; clicking it
    again collapses them.
    """

    def __init__(self, state: AppState):
        """Initialize value circles section.

        Args:
            state: Application state; circles count the events it holds.
        """
        self.state = state
        self._container: Row | None = None

    def build(self) -> None:
        """Build the value circles section UI."""
        with ui.element("section").props("id=middle").classes("w-full py-16"):
            with ui.column().classes("w-full max-w-5xl mx-auto gap-6 px-4"):
                ui.label("Middle").classes("text-sm uppercase tracking-widest text-sky-400")
                ui.label("What I value").classes("text-3xl font-bold")
                self._container = ui.row().classes("w-full justify-center gap-8 flex-wrap")
        self.refresh()

    def refresh(self) -> None:
        """Re-render circles and the expanded category from state."""
        if self._container is None:
            return
        self._container.clear()
        counts = count_by_category(self.state.events)
        with self._container:
            for category, info in CATEGORY_INFO.items():
                selected = self.state.selected_category == category.value
                with (
                    ui.column()
                    .classes("items-center gap-2 cursor-pointer w-56")
                    .on("click", lambda c=category: self._toggle(c))
                ):
                    with (
                        ui.element("div")
                        .classes("rounded-full w-40 h-40 flex flex-col items-center justify-center")
                        .style(
                            f"border: 2px solid {info.color}; "
                            f"background-color: {info.color}{'33' if selected else '14'}"
                        )
                    ):
                        ui.label(str(counts[category])).classes("text-4xl font-bold").style(
                            f"color: {info.color}"
                        )
                        ui.label(info.label).classes("text-sm")
                    ui.label(info.description).classes("text-sm text-gray-400 text-center")

            if self.state.selected_category:
                self._build_category_events(EventCategory(self.state.selected_category))

    def _build_category_events(self, category: EventCategory) -> None:
        info = CATEGORY_INFO[category]
        events = events_by_category(self.state.events, category)
        with ui.card().classes("w-full"):
            ui.label(info.description).classes("text-lg font-semibold").style(
                f"color: {info.color}"
            )
            if not events:
                ui.label("Nothing here yet").classes("text-gray-400")
                return
            for event in events:
                with (
                    ui.row()
                    .classes("w-full items-center gap-3 cursor-pointer hover:bg-gray-800/50 p-1")
                    .on("click", lambda e=event: show_event_detail(e))
                ):
                    ui.label(format_year_range(event.start_year, event.end_year)).classes(
                        "text-xs text-gray-500 w-24"
                    )
                    ui.label(event.title).classes("text-sm")

    def _toggle(self, category: EventCategory) -> None:
        self.state.toggle_category(category.value)
        self.refresh()
