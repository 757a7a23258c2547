"""Comment service - visitor replies to thoughts and their moderation.

Moderation is a one-way state machine:

    submit  -> PENDING   (always, whoever submits)
    approve -> PUBLIC    (PENDING or PUBLIC; approving twice is a no-op)
    delete  -> removed   (from either state)

There is no operation that moves a comment from PUBLIC back to PENDING.
"""

import logging

from src.memory.content import ANONYMOUS_AUTHOR, Comment
from src.utils.exceptions import GatewayError
from src.utils.validation import validate_not_empty

from ._content_base import ContentServiceBase

logger = logging.getLogger(__name__)


def can_submit(content: str | None) -> bool:
    """True when the comment text has something besides whitespace."""
    return bool(content and content.strip())


def count_public(comments: list[Comment]) -> int:
    """Number of approved comments in a thread."""
    return sum(1 for c in comments if c.is_public)


class CommentService(ContentServiceBase):
    """Read, submit and moderate comments."""

    table = "comments"

    async def _list(self, thought_id: str, public_only: bool) -> list[Comment]:
        filters: dict[str, object] = {"thought_id": thought_id}
        if public_only:
            filters["is_public"] = True
        try:
            rows = await self.gateway.select(
                self.table, filters=filters, order_by="created_at", ascending=False
            )
        except GatewayError as e:
            label = "comments" if public_only else "all comments"
            logger.error("Error fetching %s for thought %s: %s", label, thought_id, e)
            return []
        return self._parse_rows(Comment, rows)

    async def list_public_comments(self, thought_id: str) -> list[Comment]:
        """Approved comments of a thought, newest first. What visitors see."""
        return await self._list(thought_id, public_only=True)

    async def list_all_comments(self, thought_id: str) -> list[Comment]:
        """All comments of a thought including pending ones, newest first."""
        return await self._list(thought_id, public_only=False)

    async def list_comments(self, thought_id: str, include_pending: bool) -> list[Comment]:
        """The thread as seen by an editor (include_pending) or a visitor."""
        if include_pending:
            return await self.list_all_comments(thought_id)
        return await self.list_public_comments(thought_id)

    async def submit_comment(
        self, thought_id: str, content: str, author: str | None = None
    ) -> Comment | None:
        """Submit a new comment. It always starts pending.

        Args:
            thought_id: Thought the comment replies to.
            content: Comment text; surrounding whitespace is stripped.
            author: Optional name; blank names are stored as "Anonymous".

        Returns:
            The stored comment, or None if the gateway failed.

        Raises:
            ValidationError: If content is empty or whitespace, before any network call.
        """
        validate_not_empty(content, "content")
        row = {
            "thought_id": thought_id,
            "content": content.strip(),
            "author": (author or "").strip() or ANONYMOUS_AUTHOR,
            "is_public": False,
        }
        logger.info("Submitting comment on thought %s by %s", thought_id, row["author"])
        try:
            stored = await self.gateway.insert(self.table, row)
        except GatewayError as e:
            logger.error("Error creating comment: %s", e)
            return None
        return self._parse_row(Comment, stored)

    async def approve_comment(self, comment_id: str) -> bool:
        """Make a comment public. Approving a public comment succeeds unchanged.

        Returns:
            True on success, False on failure.
        """
        logger.info("Approving comment %s", comment_id)
        try:
            await self.gateway.update(self.table, comment_id, {"is_public": True})
        except GatewayError as e:
            logger.error("Error approving comment %s: %s", comment_id, e)
            return False
        return True

    async def delete_comment(self, comment_id: str) -> bool:
        """Remove a comment whatever its state.

        Returns:
            True on success, False on failure.
        """
        logger.info("Deleting comment %s", comment_id)
        try:
            await self.gateway.delete(self.table, comment_id)
        except GatewayError as e:
            logger.error("Error deleting comment %s: %s", comment_id, e)
            return False
        return True
