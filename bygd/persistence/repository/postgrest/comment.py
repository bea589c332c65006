"""PostgREST implementation of Comment repository."""

from typing import List, Optional

from bygd.adapter.postgrest import eq
from bygd.domain.error import DataAccessError
from bygd.domain.model import Comment
from bygd.domain.repository import CommentRepository
from bygd.domain.value import CommentId, PostId, UserId
from bygd.persistence.mappers import comment_insert_row, row_to_comment

from .base import PostgrestRepository


class PostgrestCommentRepository(PostgrestRepository, CommentRepository):
    """Comments stored in the hosted backend.

    Replies are removed by the backend's ``ON DELETE CASCADE`` on
    ``parent_comment_id`` when their parent is deleted.
    """

    async def list_comments(self, post_id: PostId) -> List[Comment]:
        with self.translate("list_comments"):
            rows = await self.client.select(
                self.tables.comments,
                filters={"post_id": eq(post_id)},
                order="created_at.asc",
            )
        return [row_to_comment(row) for row in rows]

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        with self.translate("find_comment"):
            rows = await self.client.select(
                self.tables.comments, filters={"id": eq(comment_id)}
            )
        return row_to_comment(rows[0]) if rows else None

    async def create_comment(
        self,
        post_id: PostId,
        author_id: UserId,
        content: str,
        parent_id: CommentId | None = None,
    ) -> Comment:
        with self.translate("create_comment"):
            rows = await self.client.insert(
                self.tables.comments,
                comment_insert_row(post_id, author_id, content, parent_id),
            )
        if not rows:
            raise DataAccessError("create_comment", "backend returned no row")
        return row_to_comment(rows[0])

    async def delete_comment(
        self, comment_id: CommentId, author_id: UserId | None = None
    ) -> None:
        filters = {"id": eq(comment_id)}
        if author_id is not None:
            filters["user_id"] = eq(author_id)
        with self.translate("delete_comment"):
            await self.client.delete(self.tables.comments, filters)
