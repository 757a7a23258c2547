"""Main NiceGUI application for the life portfolio."""

import logging
from typing import Protocol

from nicegui import app, ui

from src.services import ServiceContainer
from src.ui.components.header import Header
from src.ui.components.layout import build_footer, build_hero
from src.ui.components.password_dialog import PasswordDialog
from src.ui.pages.philosophy import PhilosophySection
from src.ui.pages.timeline import TimelineSection
from src.ui.pages.values import ValueCirclesSection
from src.ui.state import AppState
from src.utils.logging_config import log_context, log_performance

logger = logging.getLogger(__name__)


class Section(Protocol):
    """Protocol for page section classes."""

    def build(self) -> None:
        """Build the section UI."""
        ...

    def refresh(self) -> None:
        """Re-render the section from state."""
        ...


class PortfolioApp:
    """Main portfolio application.

    A single route renders the hero, the three depth sections and the
    footer. Each browser tab gets its own AppState, so edit mode unlocked in
    one tab does not leak into another.
    """

    def __init__(self, services: ServiceContainer):
        """Initialize the application."""
        self.services = services

    def new_state(self) -> AppState:
        """Fresh per-client state seeded from settings."""
        settings = self.services.settings
        return AppState(
            edit_password=settings.edit_password,
            password_error_seconds=settings.password_error_seconds,
        )

    async def load_content(self, state: AppState) -> None:
        """Fetch events and thoughts into state.

        Failed fetches leave the corresponding list empty (the services log
        the error), so the page still renders.
        """
        with log_performance(logger, "load content"):
            state.events = await self.services.events.list_events()
            state.events_loaded = True
            state.thoughts = await self.services.thoughts.list_thoughts()
            state.thoughts_loaded = True
        logger.info(
            "Loaded %d events and %d thoughts", len(state.events), len(state.thoughts)
        )

    def _apply_theme(self) -> None:
        """Apply theme settings to the page."""
        if self.services.settings.dark_mode:
            ui.dark_mode().enable()
        else:
            ui.dark_mode().disable()
        ui.add_head_html("<style>html { scroll-behavior: smooth; }</style>")

    def _setup_global_colors(self) -> None:
        """Set the application's global color palette."""
        colors = app.colors
        colors.primary = "#8B5CF6"
        colors.secondary = "#64748B"
        colors.positive = "#4CAF50"
        colors.negative = "#F44336"
        colors.warning = "#FF9800"
        colors.info = "#00BCD4"
        logger.debug("Global color palette configured")

    def _setup_exception_handler(self) -> None:
        """Set up global exception handler for unhandled UI errors.

        This catches exceptions that occur after the page is sent to the client,
        such as errors in async handlers.
        """

        def handle_exception(e: Exception) -> None:
            logger.exception("Unhandled UI exception")
            ui.notify(f"An error occurred: {e}", type="negative", timeout=10000)

        ui.on_exception(handle_exception)
        logger.debug("Global exception handler registered")

    def build_page(self, state: AppState) -> list[Section]:
        """Render the whole page for one client and return its sections."""
        self._apply_theme()
        sections: list[Section] = []

        def refresh_all() -> None:
            for section in sections:
                section.refresh()

        password_dialog = PasswordDialog(state)
        password_dialog.build()
        Header(state, self.services.settings.site_title, password_dialog).build()
        state.on_edit_mode_change(lambda _: refresh_all())

        with ui.column().classes("w-full flex-grow p-0 gap-0"):
            build_hero(self.services.settings)
            sections.extend(
                [
                    TimelineSection(state, self.services, on_change=refresh_all),
                    ValueCirclesSection(state),
                    PhilosophySection(state, self.services, on_change=refresh_all),
                ]
            )
            for section in sections:
                section.build()
            build_footer(self.services.settings)
        return sections

    def build(self) -> None:
        """Set up global UI configuration and register the page route."""
        self._setup_global_colors()
        self._setup_exception_handler()

        @ui.page("/")
        def index_page() -> None:
            """Render the portfolio page."""
            state = self.new_state()
            sections = self.build_page(state)

            async def load() -> None:
                with log_context():
                    await self.load_content(state)
                for section in sections:
                    section.refresh()

            ui.timer(0.1, load, once=True)

        app.on_shutdown(self._on_shutdown)
        logger.info("Portfolio app built")

    async def _on_shutdown(self) -> None:
        """Handle application shutdown."""
        logger.info("Portfolio shutting down")
        await self.services.aclose()

    def run(
        self,
        host: str = "127.0.0.1",
        port: int = 8080,
        title: str | None = None,
        reload: bool = False,
    ) -> None:
        """Run the application."""
        logger.info("Starting portfolio on http://%s:%d", host, port)
        ui.run(
            host=host,
            port=port,
            title=title or self.services.settings.site_title,
            reload=reload,
            favicon="✨",
            show=False,
        )


def create_app(services: ServiceContainer | None = None) -> PortfolioApp:
    """Create and configure the portfolio application."""
    if services is None:
        services = ServiceContainer()

    app_instance = PortfolioApp(services)
    app_instance.build()
    return app_instance
