"""In-memory comment repository for testing."""

from datetime import datetime
from typing import List, Optional
from uuid import uuid4

from bygd.domain.model import Comment
from bygd.domain.repository import CommentRepository
from bygd.domain.value import CommentId, PostId, UserId


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}

    async def save(self, comment: Comment) -> Comment:
        """Store a comment as-is (test seeding)."""
        self._comments[comment.id] = comment
        return comment

    async def list_comments(self, post_id: PostId) -> List[Comment]:
        comments = [c for c in self._comments.values() if c.post_id == post_id]
        comments.sort(key=lambda c: c.created_at)
        return comments

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        return self._comments.get(comment_id)

    async def create_comment(
        self,
        post_id: PostId,
        author_id: UserId,
        content: str,
        parent_id: CommentId | None = None,
    ) -> Comment:
        comment = Comment(
            id=CommentId(uuid4()),
            post_id=post_id,
            author_id=author_id,
            content=content,
            parent_id=parent_id,
            created_at=datetime.now(),
        )
        self._comments[comment.id] = comment
        return comment

    async def delete_comment(
        self, comment_id: CommentId, author_id: UserId | None = None
    ) -> None:
        """Delete a comment and, like the backend's cascade, its replies."""
        comment = self._comments.get(comment_id)
        if comment is None:
            return
        if author_id is not None and comment.author_id != author_id:
            return

        doomed = {comment_id}
        changed = True
        while changed:
            changed = False
            for c in self._comments.values():
                if c.id not in doomed and c.parent_id in doomed:
                    doomed.add(c.id)
                    changed = True
        for cid in doomed:
            del self._comments[cid]
