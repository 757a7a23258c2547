#!/usr/bin/env python3
"""Life Portfolio - a personal site in three depths.

- Surface: a timeline of life events
- Middle: value circles grouping events by category
- Deep: free-floating thoughts with moderated visitor comments

Usage:
    python main.py                  # Launch NiceGUI web UI
    python main.py --list-events    # Print stored events and exit
    python main.py --list-thoughts  # Print stored thoughts and exit
"""

import argparse
import asyncio
import logging
import sys
import time
from typing import TYPE_CHECKING

from src.utils.logging_config import log_context, log_performance, setup_logging

if TYPE_CHECKING:
    from src.services import ServiceContainer

logger = logging.getLogger(__name__)


def run_web_ui(
    host: str = "127.0.0.1",
    port: int = 8080,
    reload: bool = False,
    startup_t0: float | None = None,
) -> None:
    """Launch the NiceGUI web interface.

    Args:
        host: Host to bind to.
        port: Port to listen on.
        reload: Enable auto-reload for development.
        startup_t0: Start time from main() for accurate startup timing.
    """
    from src.services import ServiceContainer
    from src.settings import Settings
    from src.ui import create_app

    logger.info("Starting portfolio web UI...")

    t0 = time.perf_counter()
    settings = Settings.load()
    logger.info("Settings loaded in %.2fs", time.perf_counter() - t0)

    services = ServiceContainer(settings)

    t2 = time.perf_counter()
    app = create_app(services)
    logger.info("App created in %.2fs", time.perf_counter() - t2)

    total_t0 = startup_t0 if startup_t0 is not None else t0
    logger.info("Startup complete in %.2fs, launching server...", time.perf_counter() - total_t0)
    app.run(host=host, port=port, reload=reload)


async def _print_events(services: "ServiceContainer") -> None:
    from src.services.event_service import format_year_range, group_top_level

    events = await services.events.list_events()
    if not events:
        print("No events found.")
    else:
        groups = group_top_level(events)
        print("Events:")
        print("-" * 40)
        for event in groups.main:
            years = format_year_range(event.start_year, event.end_year)
            print(f"{years:<12} {event.title} [{event.category}]")
            for child in groups.children_of(event.id):
                child_years = format_year_range(child.start_year, child.end_year)
                print(f"  {child_years:<10} {child.title}")
        for event in groups.orphans:
            print(f"{'?':<12} {event.title} (parent {event.parent_id} missing)")
    logger.info("Listed %d events", len(events))


async def _print_thoughts(services: "ServiceContainer") -> None:
    thoughts = await services.thoughts.list_thoughts()
    if not thoughts:
        print("No thoughts found.")
    else:
        print("Thoughts:")
        print("-" * 40)
        for thought in thoughts:
            public = await services.comments.list_public_comments(thought.id)
            print(f"- {thought.title} | ID: {thought.id} | {len(public)} public comments")
    logger.info("Listed %d thoughts", len(thoughts))


async def _list_content(list_events: bool, list_thoughts: bool) -> None:
    from src.services import ServiceContainer

    services = ServiceContainer()
    try:
        with log_context("cli"), log_performance(logger, "list content"):
            if list_events:
                await _print_events(services)
            if list_thoughts:
                await _print_thoughts(services)
    finally:
        await services.aclose()


def run_cli(list_events: bool = False, list_thoughts: bool = False) -> None:
    """Print stored content to stdout.

    Args:
        list_events: Print the event timeline.
        list_thoughts: Print the thoughts.
    """
    asyncio.run(_list_content(list_events, list_thoughts))


def main() -> None:
    """Main entry point."""
    t0 = time.perf_counter()
    parser = argparse.ArgumentParser(description="Life Portfolio - a personal site in three depths")
    parser.add_argument(
        "--list-events",
        action="store_true",
        help="Print stored events and exit",
    )
    parser.add_argument(
        "--list-thoughts",
        action="store_true",
        help="Print stored thoughts and exit",
    )
    parser.add_argument(
        "--host",
        type=str,
        default="127.0.0.1",
        help="Host for web UI (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8080,
        help="Port for web UI (default: 8080)",
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default="default",
        help="Log file path (default: output/logs/portfolio.log, use 'none' to disable)",
    )

    args = parser.parse_args()

    log_file = None if args.log_file.lower() == "none" else args.log_file
    setup_logging(level=args.log_level, log_file=log_file)

    # If no explicit --log-level on CLI, respect the persisted setting
    if not any(arg.startswith("--log-level") for arg in sys.argv):
        from src.settings import Settings

        try:
            settings = Settings.load()
            if settings.log_level != args.log_level:
                from src.utils.logging_config import set_log_level

                set_log_level(settings.log_level)
        except (OSError, ValueError) as e:
            logger.debug("Could not apply persisted log level: %s", e)

    if args.list_events or args.list_thoughts:
        run_cli(list_events=args.list_events, list_thoughts=args.list_thoughts)
    else:
        run_web_ui(host=args.host, port=args.port, reload=args.reload, startup_t0=t0)


if __name__ == "__main__":
    main()
