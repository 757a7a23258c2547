"""Thought service - nodes of the philosophy space."""

import logging
import random

from src.memory.content import Thought, ThoughtDraft
from src.services.storage_gateway import StorageGateway
from src.settings import Settings
from src.utils.exceptions import GatewayError

from ._content_base import ContentServiceBase

logger = logging.getLogger(__name__)


class ThoughtService(ContentServiceBase):
    """Create, read, update and delete thoughts.

    Thoughts created without a position get a random one inside the
    visible band (20-80% by default) so they never sit on the canvas edge.
    """

    table = "thoughts"

    def __init__(
        self,
        settings: Settings,
        gateway: StorageGateway,
        rng: random.Random | None = None,
    ):
        """Initialize the service.

        Args:
            settings: Application settings (placement band).
            gateway: Storage gateway.
            rng: Random source for placement; a fresh Random() if omitted.
        """
        super().__init__(settings, gateway)
        self.rng = rng or random.Random()

    def random_coordinate(self, rng: random.Random | None = None) -> float:
        """One coordinate drawn uniformly from the placement band."""
        source = rng or self.rng
        band_min = self.settings.thought_position_min
        return band_min + source.random() * self.settings.thought_position_span

    def placement_for(
        self, thought: Thought, rng: random.Random | None = None
    ) -> tuple[float, float]:
        """Position to render a thought at.

        A stored coordinate is used as is. A missing one is drawn fresh
        from the band on every call and never persisted.
        """
        x = thought.x if thought.x is not None else self.random_coordinate(rng)
        y = thought.y if thought.y is not None else self.random_coordinate(rng)
        return x, y

    async def list_thoughts(self) -> list[Thought]:
        """All thoughts, in store order."""
        try:
            rows = await self.gateway.select(self.table)
        except GatewayError as e:
            logger.error("Error fetching thoughts: %s", e)
            return []
        thoughts = self._parse_rows(Thought, rows)
        logger.debug("Fetched %d thoughts", len(thoughts))
        return thoughts

    async def create_thought(self, draft: ThoughtDraft) -> Thought | None:
        """Insert a new thought, filling any omitted coordinate from the band.

        Returns:
            The stored thought, or None on failure.
        """
        placed = draft.model_copy(
            update={
                "x": draft.x if draft.x is not None else self.random_coordinate(),
                "y": draft.y if draft.y is not None else self.random_coordinate(),
            }
        )
        logger.info("Creating thought: %s at (%.1f, %.1f)", placed.title, placed.x, placed.y)
        try:
            row = await self.gateway.insert(self.table, placed.to_row())
        except GatewayError as e:
            logger.error("Error creating thought: %s", e)
            return None
        return self._parse_row(Thought, row)

    async def update_thought(self, thought_id: str, title: str, content: str) -> bool:
        """Update a thought's title and content. Position is never changed here.

        Returns:
            True on success, False on failure.
        """
        logger.info("Updating thought %s", thought_id)
        try:
            await self.gateway.update(self.table, thought_id, {"title": title, "content": content})
        except GatewayError as e:
            logger.error("Error updating thought %s: %s", thought_id, e)
            return False
        return True

    async def delete_thought(self, thought_id: str) -> bool:
        """Delete a thought. Its comments are not removed.

        Returns:
            True on success, False on failure.
        """
        logger.info("Deleting thought %s", thought_id)
        try:
            await self.gateway.delete(self.table, thought_id)
        except GatewayError as e:
            logger.error("Error deleting thought %s: %s", thought_id, e)
            return False
        return True
