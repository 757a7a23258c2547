"""Shared plumbing for the content services."""

import logging
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from src.services.storage_gateway import StorageGateway
from src.settings import Settings

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class ContentServiceBase:
    """Base for services that read and write one table through the gateway.

    Services hold no cache. Callers own the in-memory lists and apply the
    results of completed mutations themselves.
    """

    table: str = ""

    def __init__(self, settings: Settings, gateway: StorageGateway):
        """Initialize the service.

        Args:
            settings: Application settings.
            gateway: Storage gateway shared by all content services.
        """
        self.settings = settings
        self.gateway = gateway

    def _parse_rows(self, model: type[M], rows: list[dict[str, Any]]) -> list[M]:
        """Parse store rows into models, skipping (and logging) malformed ones."""
        parsed: list[M] = []
        for row in rows:
            try:
                parsed.append(model.model_validate(row))
            except ValidationError as e:
                first = e.errors()[0] if e.error_count() else {}
                logger.error(
                    "Skipping malformed %s row %s: %d error(s), first: %s at %s",
                    self.table,
                    row.get("id", "<no id>"),
                    e.error_count(),
                    first.get("msg"),
                    first.get("loc"),
                )
        return parsed

    def _parse_row(self, model: type[M], row: dict[str, Any]) -> M | None:
        """Parse one store row, returning None (logged) when it is malformed."""
        parsed = self._parse_rows(model, [row])
        return parsed[0] if parsed else None
