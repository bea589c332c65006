"""Comment like store interface."""

from abc import ABC, abstractmethod
from typing import Iterable, List

from bygd.domain.model.comment import CommentLike
from bygd.domain.value import CommentId, UserId


class CommentLikeRepository(ABC):
    """Store for likes on comments."""

    @abstractmethod
    async def list_likes(self, comment_ids: Iterable[CommentId]) -> List[CommentLike]:
        """List all likes on the given comments."""
        pass

    @abstractmethod
    async def add_like(self, comment_id: CommentId, user_id: UserId) -> None:
        """Record a like."""
        pass

    @abstractmethod
    async def remove_like(self, comment_id: CommentId, user_id: UserId) -> None:
        """Remove a like if present."""
        pass
