"""Centralized UI state management.

Holds the edit-mode gate and the content lists shared by all sections.
The gate is a client-side convenience toggle: anyone with access to the
running process can read the secret or flip the flag. It is not an
authentication boundary.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from src.memory.content import Comment, Event, Thought
from src.settings import DEFAULT_EDIT_PASSWORD

logger = logging.getLogger(__name__)


@dataclass
class AppState:
    """Centralized UI state.

    Every section reads events and thoughts from here, so a mutation made in
    one section is visible to the others after the next render.

    Usage:
        state = AppState(edit_password=settings.edit_password)
        state.events = await services.events.list_events()
        if state.verify_password(candidate):
            ...
    """

    # ========== Edit-Mode Gate ==========
    is_edit_mode: bool = False
    show_password_modal: bool = False
    edit_password: str = field(default=DEFAULT_EDIT_PASSWORD, repr=False)
    password_error_seconds: float = 2.0

    # ========== Content ==========
    events: list[Event] = field(default_factory=list)
    thoughts: list[Thought] = field(default_factory=list)
    events_loaded: bool = False
    thoughts_loaded: bool = False

    # ========== Timeline (surface) ==========
    expanded_event_ids: set[str] = field(default_factory=set)
    selected_event_id: str | None = None

    # ========== Value circles (middle) ==========
    selected_category: str | None = None

    # ========== Philosophy space (deep) ==========
    selected_thought_id: str | None = None
    comments: list[Comment] = field(default_factory=list)

    # ========== Callbacks ==========
    _on_edit_mode_change: list[Callable[[bool], None]] = field(default_factory=list, repr=False)

    # ---------- Edit-mode gate ----------

    def open_password_modal(self) -> None:
        """Show the password prompt."""
        self.show_password_modal = True

    def close_password_modal(self) -> None:
        """Hide the password prompt without changing edit mode."""
        self.show_password_modal = False

    def verify_password(self, candidate: str) -> bool:
        """Compare candidate against the shared secret.

        On a match, edit mode turns on and the prompt closes. On a mismatch
        nothing changes; the prompt stays as it was.

        Returns:
            True if the candidate matched.
        """
        if candidate != self.edit_password:
            logger.info("Edit mode password rejected")
            return False
        self.show_password_modal = False
        self._set_edit_mode(True)
        logger.info("Edit mode unlocked")
        return True

    def exit_edit_mode(self) -> None:
        """Leave edit mode."""
        self._set_edit_mode(False)
        logger.info("Edit mode locked")

    def on_edit_mode_change(self, callback: Callable[[bool], None]) -> None:
        """Register a callback invoked with the new flag whenever edit mode flips."""
        self._on_edit_mode_change.append(callback)

    def _set_edit_mode(self, value: bool) -> None:
        if self.is_edit_mode == value:
            return
        self.is_edit_mode = value
        for callback in list(self._on_edit_mode_change):
            try:
                callback(value)
            except Exception:
                logger.exception("Edit mode callback failed")

    # ---------- Events ----------

    @property
    def selected_event(self) -> Event | None:
        """The event whose detail view is open, if it still exists."""
        return next((e for e in self.events if e.id == self.selected_event_id), None)

    def toggle_expanded(self, event_id: str) -> bool:
        """Expand or collapse an event's sub-events. Returns the new expanded flag."""
        if event_id in self.expanded_event_ids:
            self.expanded_event_ids.discard(event_id)
            return False
        self.expanded_event_ids.add(event_id)
        return True

    def toggle_category(self, category: str) -> None:
        """Select a value category, or clear the selection if it was selected."""
        self.selected_category = None if self.selected_category == category else category

    def apply_event_created(self, event: Event) -> None:
        """Append a newly stored event."""
        self.events.append(event)

    def apply_event_updated(self, event: Event) -> None:
        """Replace an event after a successful update."""
        self.events = [event if e.id == event.id else e for e in self.events]

    def apply_event_deleted(self, event_id: str) -> None:
        """Drop a deleted event and any selection pointing at it.

        Children keep their parent_id; they simply stop appearing under a group.
        """
        self.events = [e for e in self.events if e.id != event_id]
        self.expanded_event_ids.discard(event_id)
        if self.selected_event_id == event_id:
            self.selected_event_id = None

    # ---------- Thoughts & comments ----------

    @property
    def selected_thought(self) -> Thought | None:
        """The thought whose detail view is open, if it still exists."""
        return next((t for t in self.thoughts if t.id == self.selected_thought_id), None)

    def select_thought(self, thought_id: str | None) -> None:
        """Open (or with None, close) a thought's detail view."""
        if thought_id != self.selected_thought_id:
            self.comments = []
        self.selected_thought_id = thought_id

    def apply_thought_created(self, thought: Thought) -> None:
        """Append a newly stored thought."""
        self.thoughts.append(thought)

    def apply_thought_updated(self, thought_id: str, title: str, content: str) -> None:
        """Apply a successful title/content update."""
        self.thoughts = [
            t.model_copy(update={"title": title, "content": content}) if t.id == thought_id else t
            for t in self.thoughts
        ]

    def apply_thought_deleted(self, thought_id: str) -> None:
        """Drop a deleted thought, closing its detail view and comment list."""
        self.thoughts = [t for t in self.thoughts if t.id != thought_id]
        if self.selected_thought_id == thought_id:
            self.selected_thought_id = None
            self.comments = []

    def apply_comments(self, thought_id: str, comments: list[Comment]) -> None:
        """Store a fetched comment thread.

        In-flight fetches are not cancelled, so a response can land after the
        detail view closed or switched; it is applied anyway.
        """
        if thought_id != self.selected_thought_id:
            logger.debug(
                "Applying comments for %s while %s is selected",
                thought_id,
                self.selected_thought_id,
            )
        self.comments = comments
