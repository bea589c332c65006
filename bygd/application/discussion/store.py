"""Snapshot holder for one discussion.

All mutation goes through this class, and each method swaps in a complete
new snapshot. Store writes are fire-and-confirm: the session applies an
optimistic patch here, then reconciles with a fresh fetch.
"""

from itertools import count
from typing import Iterable

from pydantic import Field

from bygd.application.action import ActionState
from bygd.domain.model.comment import Comment, LikeSummary
from bygd.domain.model.common import DomainModel
from bygd.domain.service.comment_tree import count_roots
from bygd.domain.service.pagination import RootPagination
from bygd.domain.value import CommentId, CommunityId, PostId

from .state import DiscussionSnapshot, ReplyTarget


class FetchToken(DomainModel):
    """Identifies one fetch for one entity. Later tokens supersede earlier."""

    entity_id: str
    sequence: int = Field(ge=1)


class DiscussionStore:
    """Holds the current DiscussionSnapshot and applies patches atomically."""

    def __init__(
        self,
        post_id: PostId,
        pagination: RootPagination | None = None,
        community_id: CommunityId | None = None,
    ) -> None:
        """Initialize store.

        Args:
            post_id: Post whose comments are held
            pagination: Initial root window
            community_id: Community the post belongs to, fixed for the
                lifetime of the store; None for posts outside any community
        """
        self.community_id = community_id
        self._snapshot = DiscussionSnapshot(
            post_id=post_id, pagination=pagination or RootPagination.initial()
        )
        self._sequence = count(1)
        self._latest: dict[str, int] = {}

    @property
    def snapshot(self) -> DiscussionSnapshot:
        return self._snapshot

    def _replace(self, **update) -> DiscussionSnapshot:
        self._snapshot = self._snapshot.model_copy(update=update)
        return self._snapshot

    # Stale fetch handling

    def begin_fetch(self, entity_id: object) -> FetchToken:
        """Register a new fetch; any earlier fetch for the entity goes stale."""
        token = FetchToken(entity_id=str(entity_id), sequence=next(self._sequence))
        self._latest[token.entity_id] = token.sequence
        return token

    def is_current(self, token: FetchToken) -> bool:
        return self._latest.get(token.entity_id) == token.sequence

    def apply_fetch(
        self, token: FetchToken, comments: Iterable[Comment], likes: LikeSummary
    ) -> bool:
        """Replace comments and likes from an authoritative read.

        Results of a fetch superseded by a newer one are discarded.

        Returns:
            Whether the result was applied
        """
        if not self.is_current(token):
            return False
        comments = tuple(comments)
        self._replace(
            comments=comments,
            like_counts=dict(likes.counts),
            liked_by_me=likes.liked,
            pagination=self._snapshot.pagination.after_removal(count_roots(comments)),
        )
        return True

    def apply_likes(self, token: FetchToken, likes: LikeSummary) -> bool:
        """Replace like state only, discarding stale results."""
        if not self.is_current(token):
            return False
        self._replace(like_counts=dict(likes.counts), liked_by_me=likes.liked)
        return True

    # Per-entity action state

    def begin_action(self, key: str) -> None:
        """Mark an action pending.

        Raises:
            InvariantViolation: If the same action is already pending
        """
        state = self._snapshot.action(key).start()
        self._replace(actions={**self._snapshot.actions, key: state})

    def finish_action(self, key: str) -> None:
        state = self._snapshot.action(key).succeed()
        self._replace(actions={**self._snapshot.actions, key: state})

    def fail_action(self, key: str, message: str) -> None:
        state = self._snapshot.action(key).fail(message)
        self._replace(actions={**self._snapshot.actions, key: state})

    # Optimistic patches

    def add_comment(self, comment: Comment) -> None:
        """Append a freshly created comment with zero likes."""
        snapshot = self._snapshot
        comments = snapshot.comments + (comment,)
        pagination = snapshot.pagination
        if comment.parent_id is None:
            pagination = pagination.after_root_added(count_roots(comments))
        self._replace(
            comments=comments,
            like_counts={**snapshot.like_counts, comment.id: 0},
            liked_by_me=snapshot.liked_by_me - {comment.id},
            pagination=pagination,
            reply_target=None,
            draft="",
        )

    def remove_comments(self, ids: Iterable[CommentId]) -> None:
        """Drop comments together with their likes and reply disclosures."""
        removed = set(ids)
        snapshot = self._snapshot
        remaining = tuple(c for c in snapshot.comments if c.id not in removed)
        reply_target = snapshot.reply_target
        if reply_target is not None and reply_target.root_id in removed:
            reply_target = None
        self._replace(
            comments=remaining,
            like_counts={
                k: v for k, v in snapshot.like_counts.items() if k not in removed
            },
            liked_by_me=snapshot.liked_by_me - removed,
            pagination=snapshot.pagination.after_removal(
                count_roots(remaining), removed
            ),
            reply_target=reply_target,
        )

    def set_liked(self, comment_id: CommentId, liked: bool) -> None:
        """Flip the viewer's like and adjust the count by one."""
        snapshot = self._snapshot
        was_liked = comment_id in snapshot.liked_by_me
        if was_liked == liked:
            return
        current = snapshot.like_counts.get(comment_id, 0)
        new_count = current + 1 if liked else max(0, current - 1)
        liked_by_me = (
            snapshot.liked_by_me | {comment_id}
            if liked
            else snapshot.liked_by_me - {comment_id}
        )
        self._replace(
            like_counts={**snapshot.like_counts, comment_id: new_count},
            liked_by_me=liked_by_me,
        )

    # Display state

    def set_pagination(self, pagination: RootPagination) -> None:
        self._replace(pagination=pagination)

    def set_reply(self, target: ReplyTarget | None, draft: str) -> None:
        self._replace(reply_target=target, draft=draft)

    def action_state(self, key: str) -> ActionState:
        return self._snapshot.action(key)
