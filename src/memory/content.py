"""Content models for the portfolio: timeline events, thoughts and comments.

Rows read from the storage gateway are parsed leniently: unknown columns are
ignored, null lists and text become empty and null flags become false.
Drafts and updates are validated because they cross the write boundary.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from src.utils.validation import validate_year_range

ANONYMOUS_AUTHOR = "Anonymous"


class EventCategory(StrEnum):
    """Value category an event belongs to."""

    EXPLORATION = "exploration"
    CONNECTION = "connection"
    CREATIVE = "creative"


class CommentState(StrEnum):
    """Moderation state of a comment. There is no way back from PUBLIC."""

    PENDING = "pending"
    PUBLIC = "public"


@dataclass(frozen=True)
class CategoryInfo:
    """Display metadata for an event category."""

    label: str
    description: str
    color: str


CATEGORY_INFO: dict[EventCategory, CategoryInfo] = {
    EventCategory.EXPLORATION: CategoryInfo("Exploration", "Journeys & Discoveries", "#a78bfa"),
    EventCategory.CONNECTION: CategoryInfo("Connection", "People & Communities", "#60a5fa"),
    EventCategory.CREATIVE: CategoryInfo("Creative", "Projects & Creations", "#f472b6"),
}


def _none_to_empty_list(value: Any) -> Any:
    return [] if value is None else value


def _none_to_empty_str(value: Any) -> Any:
    return "" if value is None else value


def _none_to_false(value: Any) -> Any:
    return False if value is None else value


class Event(BaseModel):
    """A timeline entry, optionally nested under a parent event."""

    model_config = ConfigDict(extra="ignore")

    id: str
    title: str
    description: str = ""
    summary: str | None = None
    start_year: int
    end_year: int | None = None
    category: EventCategory
    images: list[str] = Field(default_factory=list)
    pdf_url: str | None = None
    parent_id: str | None = None
    created_at: datetime | None = None

    _coerce_images = field_validator("images", mode="before")(_none_to_empty_list)
    _coerce_description = field_validator("description", mode="before")(_none_to_empty_str)

    @property
    def is_top_level(self) -> bool:
        """True when the event has no parent reference."""
        return not self.parent_id


class _EventFields(BaseModel):
    """Shared validation for event drafts and updates."""

    @model_validator(mode="after")
    def _check_year_range(self) -> "_EventFields":
        start = getattr(self, "start_year", None)
        if start is not None:
            validate_year_range(start, getattr(self, "end_year", None))
        return self


class EventDraft(_EventFields):
    """Fields supplied when creating an event (id and created_at are server-assigned)."""

    title: str
    description: str = ""
    summary: str | None = None
    start_year: int
    end_year: int | None = None
    category: EventCategory = EventCategory.EXPLORATION
    images: list[str] = Field(default_factory=list)
    pdf_url: str | None = None
    parent_id: str | None = None

    def to_row(self) -> dict[str, Any]:
        """Serialize for insertion, omitting absent optional columns."""
        return self.model_dump(mode="json", exclude_none=True)


class EventUpdate(_EventFields):
    """Partial update of an event's mutable fields.

    parent_id is absent: the parent reference cannot change
    after creation. Only fields that were explicitly set are sent, so
    passing ``end_year=None`` clears the end year.
    """

    title: str | None = None
    description: str | None = None
    summary: str | None = None
    start_year: int | None = None
    end_year: int | None = None
    category: EventCategory | None = None
    images: list[str] | None = None
    pdf_url: str | None = None

    @classmethod
    def from_event(cls, event: Event) -> "EventUpdate":
        """Build a full-field update from an edited event."""
        return cls(
            title=event.title,
            description=event.description,
            summary=event.summary,
            start_year=event.start_year,
            end_year=event.end_year,
            category=event.category,
            images=list(event.images),
            pdf_url=event.pdf_url,
        )

    def to_fields(self) -> dict[str, Any]:
        """Serialize only the fields that were explicitly set."""
        return self.model_dump(mode="json", exclude_unset=True)


class Thought(BaseModel):
    """A node in the philosophy space, placed at percentage coordinates."""

    model_config = ConfigDict(extra="ignore")

    id: str
    title: str
    content: str = ""
    x: float | None = None
    y: float | None = None
    created_at: datetime | None = None

    _coerce_content = field_validator("content", mode="before")(_none_to_empty_str)

    @property
    def has_position(self) -> bool:
        """True when both coordinates are stored."""
        return self.x is not None and self.y is not None


class ThoughtDraft(BaseModel):
    """Fields supplied when creating a thought."""

    title: str
    content: str = ""
    x: float | None = Field(default=None, ge=0, le=100)
    y: float | None = Field(default=None, ge=0, le=100)

    def to_row(self) -> dict[str, Any]:
        """Serialize for insertion, omitting absent coordinates."""
        return self.model_dump(mode="json", exclude_none=True)


class Comment(BaseModel):
    """A visitor reply attached to one thought."""

    model_config = ConfigDict(extra="ignore")

    id: str
    thought_id: str
    content: str
    author: str | None = None
    is_public: bool = False
    created_at: datetime | None = None

    _coerce_is_public = field_validator("is_public", mode="before")(_none_to_false)

    @property
    def state(self) -> CommentState:
        """Moderation state derived from the is_public flag."""
        return CommentState.PUBLIC if self.is_public else CommentState.PENDING

    @property
    def display_author(self) -> str:
        """Author name for display, "Anonymous" when blank."""
        if self.author and self.author.strip():
            return self.author.strip()
        return ANONYMOUS_AUTHOR


@dataclass
class EventGroups:
    """Top-level events and a lookup of direct children by parent id.

    Events whose parent is not among the grouped events land in ``orphans``;
    they belong to no group and are not rendered on the timeline.
    """

    main: list[Event] = field(default_factory=list)
    children: dict[str, list[Event]] = field(default_factory=dict)
    orphans: list[Event] = field(default_factory=list)

    def children_of(self, event_id: str) -> list[Event]:
        """Direct children of an event, in input order."""
        return list(self.children.get(event_id, []))

    def has_children(self, event_id: str) -> bool:
        """True when at least one event names event_id as its parent."""
        return bool(self.children.get(event_id))
