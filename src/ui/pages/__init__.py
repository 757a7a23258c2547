"""Page sections for the life portfolio."""

from .philosophy import PhilosophySection
from .timeline import TimelineSection
from .values import ValueCirclesSection

__all__ = [
    "PhilosophySection",
    "TimelineSection",
    "ValueCirclesSection",
]
