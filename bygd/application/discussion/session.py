"""Discussion session for one post.

Orchestrates the comment service against a DiscussionStore: every action
is tracked per entity (idle -> pending -> done | failed), applied
optimistically, then reconciled with a fresh read. A failing action only
marks its own state as failed; unrelated local state is left untouched.
"""

from typing import Optional

import logfire

from bygd.application.action import action_key
from bygd.domain.error import (
    AuthorizationDenied,
    DataAccessError,
    NotFoundError,
)
from bygd.domain.model.comment import Comment
from bygd.domain.service import CommentService
from bygd.domain.service.authorization import can_delete_content
from bygd.domain.service.comment_tree import (
    collect_descendant_ids,
    find_root,
    index_by_id,
)
from bygd.domain.service.role import can_moderate
from bygd.domain.value import CommentId, ModerationAction, PostId, Role, UserId

from .state import DiscussionSnapshot, ReplyTarget
from .store import DiscussionStore

LOAD = "load"
SUBMIT = "submit"


class DiscussionSession:
    """Comment thread of one post as seen by one viewer."""

    def __init__(
        self,
        comment_service: CommentService,
        store: DiscussionStore,
        viewer_id: Optional[UserId],
        viewer_role: Role = Role.GUEST,
    ) -> None:
        """Initialize discussion session.

        Args:
            comment_service: Comment domain service
            store: Snapshot store for the post
            viewer_id: Signed-in user, None for anonymous viewers
            viewer_role: Viewer's effective role in the post's community
        """
        self.comment_service = comment_service
        self.store = store
        self.viewer_id = viewer_id
        self.viewer_role = viewer_role

    @property
    def post_id(self) -> PostId:
        return self.store.snapshot.post_id

    @property
    def snapshot(self) -> DiscussionSnapshot:
        return self.store.snapshot

    @property
    def can_moderate(self) -> bool:
        return can_moderate(self.viewer_role)

    def can_delete(self, comment: Comment) -> bool:
        if self.viewer_id is None:
            return False
        return can_delete_content(self.viewer_role, self.viewer_id, comment.author_id)

    async def refresh(self) -> bool:
        """Fetch comments and likes and replace the snapshot.

        Returns:
            Whether the result was applied (False if a newer fetch
            superseded it while it was in flight)

        Raises:
            DataAccessError: If the comments or likes cannot be fetched
        """
        token = self.store.begin_fetch(self.post_id)
        # Overlapping fetches share one load state; only the newest settles it
        if not self.snapshot.action(LOAD).is_pending:
            self.store.begin_action(LOAD)
        try:
            comments = await self.comment_service.get_comments_for_post(self.post_id)
            likes = await self.comment_service.get_like_summary(
                [c.id for c in comments], self.viewer_id
            )
        except Exception as e:
            if self.store.is_current(token):
                self.store.fail_action(LOAD, f"Could not load comments: {e}")
            raise

        applied = self.store.apply_fetch(token, comments, likes)
        if applied:
            self.store.finish_action(LOAD)
        else:
            logfire.info("Discarded stale comment fetch", post_id=str(self.post_id))
        return applied

    async def _reconcile(self) -> None:
        try:
            await self.refresh()
        except DataAccessError as e:
            logfire.warn(
                "Reconciliation fetch failed", post_id=str(self.post_id), error=str(e)
            )

    async def _refresh_likes(self) -> None:
        token = self.store.begin_fetch(f"likes:{self.post_id}")
        try:
            likes = await self.comment_service.get_like_summary(
                [c.id for c in self.snapshot.comments], self.viewer_id
            )
        except DataAccessError as e:
            logfire.warn("Like refresh failed", post_id=str(self.post_id), error=str(e))
            return
        self.store.apply_likes(token, likes)

    # Writing

    def set_draft(self, text: str) -> None:
        self.store.set_reply(self.snapshot.reply_target, text)

    def start_reply(self, comment_id: CommentId) -> ReplyTarget:
        """Target the thread of a comment and prefill an @mention.

        Raises:
            NotFoundError: If the comment is not in the current snapshot
        """
        comment = self._require(comment_id)
        root = find_root(comment, index_by_id(self.snapshot.comments))
        profile = comment.profile
        name = (
            profile.display_name
            if profile and profile.display_name
            else self.comment_service.settings.mention_fallback_name
        )
        target = ReplyTarget(root_id=root.id, display_name=name)
        draft = self.comment_service.reply_mention(name, self.snapshot.draft)
        self.store.set_reply(target, draft)
        return target

    def cancel_reply(self) -> None:
        self.store.set_reply(None, "")

    async def submit(self, content: Optional[str] = None) -> Optional[Comment]:
        """Post the draft (or the given text) as a new thread or a reply.

        Returns:
            The created comment, or None if nothing was submitted because
            the text was blank or a submit is already in flight

        Raises:
            AuthorizationDenied: If there is no signed-in viewer
            DomainError: If the store rejects the comment
        """
        text = self.snapshot.draft if content is None else content
        if not text.strip() or self.snapshot.action(SUBMIT).is_pending:
            return None
        if self.viewer_id is None:
            raise AuthorizationDenied("comment", "Sign in to comment.")

        target = self.snapshot.reply_target
        reply_to = self.snapshot.find(target.root_id) if target else None

        self.store.begin_action(SUBMIT)
        try:
            created = await self.comment_service.reply(
                post_id=self.post_id,
                author_id=self.viewer_id,
                content=text,
                reply_to=reply_to,
                existing=self.snapshot.comments,
            )
        except Exception as e:
            self.store.fail_action(SUBMIT, f"Could not add comment: {e}")
            raise

        self.store.add_comment(created)
        self.store.finish_action(SUBMIT)
        return created

    async def delete(self, comment_id: CommentId) -> set[CommentId]:
        """Delete a comment and all replies beneath it.

        Returns:
            Ids removed from the snapshot (empty if a delete of this comment
            is already in flight)

        Raises:
            NotFoundError: If the comment is not in the current snapshot
            AuthorizationDenied: If the viewer may not delete it
            DataAccessError: If the store call fails
        """
        comment = self._require(comment_id)
        key = action_key("delete", comment_id)
        if self.snapshot.action(key).is_pending:
            return set()
        if self.viewer_id is None:
            raise AuthorizationDenied(
                ModerationAction.DELETE_CONTENT.value, "Sign in to delete comments."
            )

        self.store.begin_action(key)
        try:
            removed = await self.comment_service.delete_comment(
                actor_id=self.viewer_id,
                actor_role=self.viewer_role,
                comment=comment,
                existing=self.snapshot.comments,
            )
        except Exception as e:
            self.store.fail_action(key, f"Could not delete comment: {e}")
            raise

        # Replies may have arrived while the delete was in flight
        removed |= collect_descendant_ids(comment_id, self.snapshot.comments)
        self.store.remove_comments(removed)
        self.store.finish_action(key)
        await self._reconcile()
        return removed

    async def toggle_like(self, comment_id: CommentId) -> Optional[bool]:
        """Like or unlike a comment as the viewer.

        Returns:
            The new liked state, or None if there is no viewer or a toggle
            on this comment is already in flight

        Raises:
            DataAccessError: If the store call fails
        """
        key = action_key("like", comment_id)
        if self.viewer_id is None or self.snapshot.action(key).is_pending:
            return None

        self.store.begin_action(key)
        try:
            liked = await self.comment_service.toggle_like(
                comment_id, self.viewer_id, self.snapshot.is_liked(comment_id)
            )
        except Exception as e:
            self.store.fail_action(key, f"Could not update like: {e}")
            raise

        self.store.set_liked(comment_id, liked)
        self.store.finish_action(key)
        await self._refresh_likes()
        return liked

    # Pagination

    def show_more(self) -> None:
        snapshot = self.snapshot
        self.store.set_pagination(snapshot.pagination.show_more(snapshot.root_count))

    def show_less(self) -> None:
        self.store.set_pagination(self.snapshot.pagination.show_less())

    def toggle_replies(self, root_id: CommentId) -> None:
        self.store.set_pagination(self.snapshot.pagination.toggle_replies(root_id))

    def _require(self, comment_id: CommentId) -> Comment:
        comment = self.snapshot.find(comment_id)
        if comment is None:
            raise NotFoundError("Comment", str(comment_id))
        return comment
