"""PostgREST implementation of CommentLike repository."""

from typing import Iterable, List

from bygd.adapter.postgrest import eq, in_
from bygd.domain.model import CommentLike
from bygd.domain.repository import CommentLikeRepository
from bygd.domain.value import CommentId, UserId
from bygd.persistence.mappers import row_to_like

from .base import PostgrestRepository


class PostgrestCommentLikeRepository(PostgrestRepository, CommentLikeRepository):
    """Comment likes stored in the hosted backend."""

    async def list_likes(self, comment_ids: Iterable[CommentId]) -> List[CommentLike]:
        ids = list(comment_ids)
        if not ids:
            return []
        with self.translate("list_likes"):
            rows = await self.client.select(
                self.tables.comment_likes,
                columns="comment_id,user_id",
                filters={"comment_id": in_(ids)},
            )
        return [row_to_like(row) for row in rows]

    async def add_like(self, comment_id: CommentId, user_id: UserId) -> None:
        with self.translate("add_like"):
            await self.client.insert(
                self.tables.comment_likes,
                {"comment_id": str(comment_id), "user_id": str(user_id)},
            )

    async def remove_like(self, comment_id: CommentId, user_id: UserId) -> None:
        with self.translate("remove_like"):
            await self.client.delete(
                self.tables.comment_likes,
                {"comment_id": eq(comment_id), "user_id": eq(user_id)},
            )
