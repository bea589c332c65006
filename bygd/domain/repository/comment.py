"""Comment store interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from bygd.domain.model.comment import Comment
from bygd.domain.value import CommentId, PostId, UserId


class CommentRepository(ABC):
    """Store for Comment entities.

    Every method raises DataAccessError when the backend call fails.
    """

    @abstractmethod
    async def list_comments(self, post_id: PostId) -> List[Comment]:
        """List all comments on a post, oldest first.

        Args:
            post_id: The post ID

        Returns:
            Comments ordered by creation time
        """
        pass

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def create_comment(
        self,
        post_id: PostId,
        author_id: UserId,
        content: str,
        parent_id: CommentId | None = None,
    ) -> Comment:
        """Insert a comment and return the stored row.

        Args:
            post_id: Post being commented on
            author_id: Author user ID
            content: Comment text
            parent_id: Thread root for replies (None for a new thread)

        Returns:
            The created comment with backend-assigned id and timestamp
        """
        pass

    @abstractmethod
    async def delete_comment(
        self, comment_id: CommentId, author_id: UserId | None = None
    ) -> None:
        """Delete a comment together with every reply beneath it.

        Args:
            comment_id: The comment to delete
            author_id: When given, only delete if the comment was written
                by this user
        """
        pass
