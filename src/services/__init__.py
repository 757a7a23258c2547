"""Services layer - content logic separated from UI.

This module provides a clean interface between the UI and the hosted
row store that holds events, thoughts and comments.
"""

import logging
import time
from dataclasses import dataclass

from src.settings import Settings

from .comment_service import CommentService
from .event_service import EventService
from .storage_gateway import StorageGateway
from .thought_service import ThoughtService

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """Dependency injection container for all services.

    Usage:
        settings = Settings.load()
        services = ServiceContainer(settings)

        events = await services.events.list_events()
        await services.comments.approve_comment(comment_id)
    """

    settings: Settings
    gateway: StorageGateway
    events: EventService
    thoughts: ThoughtService
    comments: CommentService

    def __init__(self, settings: Settings | None = None, gateway: StorageGateway | None = None):
        """Create and wire service instances that share one Settings object and gateway.

        Args:
            settings: Application settings. Loaded via Settings.load() if omitted.
            gateway: Storage gateway. Built from the resolved settings if omitted.
        """
        t0 = time.perf_counter()
        logger.info("Initializing ServiceContainer...")
        self.settings = settings or Settings.load()
        self.gateway = gateway or StorageGateway(
            self.settings.resolved_gateway_url(),
            self.settings.resolved_gateway_key(),
            timeout=self.settings.gateway_timeout,
        )
        if not self.gateway.is_configured:
            logger.warning(
                "Storage gateway is not configured; content will be empty and edits will fail"
            )
        self.events = EventService(self.settings, self.gateway)
        self.thoughts = ThoughtService(self.settings, self.gateway)
        self.comments = CommentService(self.settings, self.gateway)
        service_count = len(self.__class__.__annotations__) - 2  # exclude 'settings' and 'gateway'
        logger.info(
            "ServiceContainer initialized: %d services in %.2fs",
            service_count,
            time.perf_counter() - t0,
        )

    async def aclose(self) -> None:
        """Release the gateway's HTTP connections."""
        await self.gateway.aclose()


__all__ = [
    "CommentService",
    "EventService",
    "ServiceContainer",
    "StorageGateway",
    "ThoughtService",
]
