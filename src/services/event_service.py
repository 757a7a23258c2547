"""Event service - timeline events, their grouping and value categories."""

import logging
from collections import Counter
from collections.abc import Iterable
from datetime import date

from src.memory.content import Event, EventCategory, EventDraft, EventGroups, EventUpdate
from src.utils.exceptions import GatewayError
from src.utils.logging_config import log_performance

from ._content_base import ContentServiceBase

logger = logging.getLogger(__name__)


def format_year_range(start_year: int, end_year: int | None = None) -> str:
    """Render a year range for display.

    Returns "{start}" when the end is absent or equal to the start,
    otherwise "{start}-{end}".
    """
    if end_year is None or end_year == start_year:
        return f"{start_year}"
    return f"{start_year}-{end_year}"


def group_top_level(events: Iterable[Event]) -> EventGroups:
    """Partition events into top-level events and children by parent id.

    Pure and synchronous; works on whatever list was last fetched. Only
    direct children are looked up. An event whose parent is not in
    ``events`` is an orphan and belongs to no group.
    """
    events = list(events)
    known_ids = {e.id for e in events}
    groups = EventGroups()
    for event in events:
        if event.is_top_level:
            groups.main.append(event)
        elif event.parent_id in known_ids:
            groups.children.setdefault(event.parent_id, []).append(event)
        else:
            groups.orphans.append(event)
    if groups.orphans:
        logger.debug(
            "Grouped %d events: %d top-level, %d orphaned",
            len(events),
            len(groups.main),
            len(groups.orphans),
        )
    return groups


def events_by_category(events: Iterable[Event], category: EventCategory | str) -> list[Event]:
    """Events of one value category, in input order."""
    return [e for e in events if e.category == category]


def count_by_category(events: Iterable[Event]) -> dict[EventCategory, int]:
    """Number of events per category, zero-filled for all categories."""
    counts = Counter(e.category for e in events)
    return {category: counts.get(category, 0) for category in EventCategory}


def new_event_draft(
    parent_id: str | None = None,
    category: EventCategory = EventCategory.EXPLORATION,
    year: int | None = None,
) -> EventDraft:
    """Blank event used to seed the "Add Event" form."""
    return EventDraft(
        title="",
        description="",
        summary="",
        start_year=year if year is not None else date.today().year,
        end_year=None,
        category=category,
        images=[],
        pdf_url="",
        parent_id=parent_id or None,
    )


class EventService(ContentServiceBase):
    """Create, read, update and delete timeline events.

    Failures never reach the caller: reads degrade to an empty list,
    writes to None/False, and the gateway error is logged.
    """

    table = "events"

    async def list_events(self) -> list[Event]:
        """All events, ascending by start year."""
        with log_performance(logger, "fetch events"):
            try:
                rows = await self.gateway.select(
                    self.table, order_by="start_year", ascending=True
                )
            except GatewayError as e:
                logger.error("Error fetching events: %s", e)
                return []
            events = self._parse_rows(Event, rows)
        logger.debug("Fetched %d events", len(events))
        return events

    async def create_event(self, draft: EventDraft) -> Event | None:
        """Insert a new event.

        Returns:
            The stored event (with server-assigned id and timestamp), or None on failure.
        """
        logger.info("Creating event: %s (%s)", draft.title, draft.category)
        try:
            row = await self.gateway.insert(self.table, draft.to_row())
        except GatewayError as e:
            logger.error("Error creating event: %s", e)
            return None
        event = self._parse_row(Event, row)
        if event is not None:
            logger.debug("Created event %s", event.id)
        return event

    async def update_event(self, event_id: str, update: EventUpdate) -> bool:
        """Apply a partial update to an event's mutable fields.

        Returns:
            True on success, False on failure.
        """
        fields = update.to_fields()
        logger.info("Updating event %s (%s)", event_id, ", ".join(sorted(fields)) or "no fields")
        try:
            await self.gateway.update(self.table, event_id, fields)
        except GatewayError as e:
            logger.error("Error updating event %s: %s", event_id, e)
            return False
        return True

    async def delete_event(self, event_id: str) -> bool:
        """Delete an event. Its children are left in place, pointing at the deleted id.

        Returns:
            True on success, False on failure.
        """
        logger.info("Deleting event %s", event_id)
        try:
            await self.gateway.delete(self.table, event_id)
        except GatewayError as e:
            logger.error("Error deleting event %s: %s", event_id, e)
            return False
        return True
