"""Discussion view state.

A single immutable snapshot holds everything the comment view renders.
Each action replaces the snapshot as a whole, so like counts and the
comment list can never be observed half-updated.
"""

from typing import Optional

from pydantic import Field

from bygd.application.action import ActionState
from bygd.domain.model.comment import Comment, ThreadNode
from bygd.domain.model.common import DomainModel
from bygd.domain.service.comment_tree import build_comment_tree, count_roots
from bygd.domain.service.pagination import RootPagination
from bygd.domain.value import CommentId, PostId


class ReplyTarget(DomainModel):
    """Thread a reply will be attached to, plus the name being answered."""

    root_id: CommentId
    display_name: str


class DiscussionSnapshot(DomainModel):
    """Everything the comment view of one post shows."""

    post_id: PostId
    comments: tuple[Comment, ...] = ()
    like_counts: dict[CommentId, int] = Field(default_factory=dict)
    liked_by_me: frozenset[CommentId] = frozenset()
    actions: dict[str, ActionState] = Field(default_factory=dict)
    pagination: RootPagination = RootPagination()
    reply_target: Optional[ReplyTarget] = None
    draft: str = ""

    @property
    def tree(self) -> list[ThreadNode]:
        return build_comment_tree(self.comments)

    @property
    def root_count(self) -> int:
        return count_roots(self.comments)

    @property
    def visible_threads(self) -> list[ThreadNode]:
        return self.pagination.visible_roots(self.tree)

    @property
    def busy_ids(self) -> frozenset[str]:
        """Keys of actions currently pending."""
        return frozenset(key for key, state in self.actions.items() if state.is_pending)

    def action(self, key: str) -> ActionState:
        return self.actions.get(key, ActionState())

    def like_count(self, comment_id: CommentId) -> int:
        return self.like_counts.get(comment_id, 0)

    def is_liked(self, comment_id: CommentId) -> bool:
        return comment_id in self.liked_by_me

    def find(self, comment_id: CommentId) -> Comment | None:
        return next((c for c in self.comments if c.id == comment_id), None)
