"""In-memory comment like repository for testing."""

from typing import Iterable, List

from bygd.domain.error import DataAccessError
from bygd.domain.model import CommentLike
from bygd.domain.repository import CommentLikeRepository
from bygd.domain.value import CommentId, UserId


class InMemoryCommentLikeRepository(CommentLikeRepository):
    """In-memory implementation of CommentLikeRepository for testing."""

    def __init__(self) -> None:
        self._likes: list[CommentLike] = []

    async def list_likes(self, comment_ids: Iterable[CommentId]) -> List[CommentLike]:
        ids = set(comment_ids)
        return [like for like in self._likes if like.comment_id in ids]

    async def add_like(self, comment_id: CommentId, user_id: UserId) -> None:
        like = CommentLike(comment_id=comment_id, user_id=user_id)
        if like in self._likes:
            raise DataAccessError("add_like", "duplicate key value")
        self._likes.append(like)

    async def remove_like(self, comment_id: CommentId, user_id: UserId) -> None:
        like = CommentLike(comment_id=comment_id, user_id=user_id)
        self._likes = [existing for existing in self._likes if existing != like]
