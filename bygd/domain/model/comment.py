"""Comment entity and its thread view.

Comments point at their parent through ``parent_id``. The display tree is
deliberately shallow: every descendant of a thread root is rendered one
level beneath it, whatever its original depth.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from bygd.domain.model.common import DomainModel
from bygd.domain.value import CommentId, PostId, Profile, UserId


class Comment(DomainModel):
    """Comment on a post, or a reply to another comment.

    ``parent_id`` keeps the original parent even when the display tree
    flattens the comment under its thread root.
    """

    id: CommentId
    post_id: PostId
    author_id: UserId
    content: str = Field(max_length=10000)
    parent_id: Optional[CommentId] = None
    created_at: datetime = Field(default_factory=datetime.now)
    profile: Optional[Profile] = None


class ThreadNode(DomainModel):
    """A thread root together with all of its descendants.

    ``children`` holds plain comments, so the view never nests deeper
    than one level below the root.
    """

    comment: Comment
    children: list[Comment] = Field(default_factory=list)

    @property
    def id(self) -> CommentId:
        return self.comment.id


class CommentLike(DomainModel):
    """A user's like on a comment. Unique per (comment, user)."""

    comment_id: CommentId
    user_id: UserId


class LikeSummary(DomainModel):
    """Like counts for a set of comments, plus the viewer's own likes."""

    counts: dict[CommentId, int] = Field(default_factory=dict)
    liked: frozenset[CommentId] = frozenset()

    def count_for(self, comment_id: CommentId) -> int:
        return self.counts.get(comment_id, 0)

    def is_liked(self, comment_id: CommentId) -> bool:
        return comment_id in self.liked
