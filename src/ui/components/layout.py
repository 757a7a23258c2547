"""Hero banner and footer framing the three page sections."""

from datetime import date

from nicegui import ui

from src.settings import Settings


def build_hero(settings: Settings) -> None:
    """Full-width intro with the owner's name and a hint to scroll down."""
    with ui.element("section").classes(
        "w-full min-h-[70vh] flex flex-col items-center justify-center gap-4 text-center px-4"
    ):
        ui.label(settings.owner_name or settings.site_title).classes("text-5xl font-bold")
        ui.label("Scroll down to go deeper.").classes(
            "text-lg text-gray-400 max-w-xl"
        )
        with ui.link(target="#surface").classes("mt-8 text-gray-500 hover:text-gray-300"):
            ui.icon("keyboard_double_arrow_down", size="lg")


def build_footer(settings: Settings) -> None:
    """Footer with the copyright line."""
    with ui.element("footer").classes("w-full py-8 border-t border-gray-800"):
        ui.label(f"© {date.today().year} {settings.owner_name or settings.site_title}").classes(
            "text-center text-sm text-gray-500 w-full"
        )
