"""Comment domain service."""

import re
from typing import Iterable, Sequence

import logfire

from bygd.config import CommentSettings
from bygd.domain.error import DataAccessError, NotFoundError, ValidationError
from bygd.domain.model.comment import Comment, LikeSummary
from bygd.domain.repository import (
    CommentLikeRepository,
    CommentRepository,
    ProfileRepository,
)
from bygd.domain.value import (
    CommentContent,
    CommentId,
    ModerationAction,
    PostId,
    Role,
    UserId,
)

from .authorization import ModerationContext, ensure
from .base import Service
from .comment_tree import collect_descendant_ids, find_root, index_by_id

_LEADING_MENTION = re.compile(r"^@\S+\s*")


class CommentService(Service):
    """Domain service for comment operations."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        like_repository: CommentLikeRepository,
        profile_repository: ProfileRepository,
        settings: CommentSettings | None = None,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment store
            like_repository: Comment like store
            profile_repository: Profile lookup for decoration
            settings: Comment display settings
        """
        self.comment_repository = comment_repository
        self.like_repository = like_repository
        self.profile_repository = profile_repository
        self.settings = settings or CommentSettings()

    async def get_comments_for_post(self, post_id: PostId) -> list[Comment]:
        """Get all comments on a post, decorated with author profiles.

        Profile decoration is best-effort. If the lookup fails the comments
        are returned undecorated.

        Args:
            post_id: Post ID

        Returns:
            Comments ordered by creation time

        Raises:
            DataAccessError: If the comments themselves cannot be fetched
        """
        with logfire.span("comment_service.get_comments_for_post", post_id=str(post_id)):
            comments = await self.comment_repository.list_comments(post_id)
            decorated = await self.decorate(comments)
            logfire.info(
                "Comments retrieved for post",
                post_id=str(post_id),
                count=len(decorated),
            )
            return decorated

    async def decorate(self, comments: Sequence[Comment]) -> list[Comment]:
        """Attach author profiles to comments that lack one."""
        author_ids = {c.author_id for c in comments if c.profile is None}
        if not author_ids:
            return list(comments)

        try:
            profiles = await self.profile_repository.get_profiles(author_ids)
        except DataAccessError as e:
            logfire.warn("Could not load comment profiles", error=str(e))
            return list(comments)

        return [
            c.model_copy(update={"profile": profiles.get(c.author_id)})
            if c.profile is None
            else c
            for c in comments
        ]

    async def reply(
        self,
        post_id: PostId,
        author_id: UserId,
        content: str,
        reply_to: Comment | None = None,
        existing: Sequence[Comment] = (),
    ) -> Comment:
        """Create a new thread or a reply.

        Replies always attach to the root of the thread containing the
        comment being replied to, never to the comment itself, so a thread
        stays one level deep no matter where the reply was started.

        Args:
            post_id: Post ID
            author_id: Author user ID
            content: Comment text (trimmed before storing)
            reply_to: Comment the user clicked reply on, if any
            existing: Comments currently known for the post, used to find
                the thread root

        Returns:
            Created comment, decorated with the author's profile when
            available

        Raises:
            ValidationError: If the content is empty after trimming
            DataAccessError: If the store call fails
        """
        try:
            text = CommentContent(content).root
        except ValueError as e:
            raise ValidationError(str(e)) from e

        parent_id: CommentId | None = None
        if reply_to is not None:
            if reply_to.post_id != post_id:
                raise ValidationError("Parent comment does not belong to this post")
            index = index_by_id(existing)
            index.setdefault(reply_to.id, reply_to)
            parent_id = find_root(reply_to, index).id

        with logfire.span(
            "comment_service.reply",
            post_id=str(post_id),
            author_id=str(author_id),
            parent_id=str(parent_id) if parent_id else None,
        ):
            created = await self.comment_repository.create_comment(
                post_id=post_id,
                author_id=author_id,
                content=text,
                parent_id=parent_id,
            )
            logfire.info(
                "Comment created",
                comment_id=str(created.id),
                post_id=str(post_id),
                is_reply=parent_id is not None,
            )
            decorated = await self.decorate([created])
            return decorated[0]

    def reply_mention(self, display_name: str | None, draft: str = "") -> str:
        """Prefill the reply box with an @mention of the comment's author.

        An existing leading mention in the draft is replaced, and a draft
        that already starts with this mention is left alone.
        """
        mention = f"@{display_name or self.settings.mention_fallback_name}"
        if draft.startswith(f"{mention} "):
            return draft
        rest = _LEADING_MENTION.sub("", draft)
        return f"{mention} {rest}".strip() + " "

    async def delete_comment(
        self,
        actor_id: UserId,
        actor_role: Role,
        comment: Comment,
        existing: Sequence[Comment] = (),
    ) -> set[CommentId]:
        """Delete a comment and its whole reply subtree.

        Authorization is checked before the store is called. Authors can
        always delete their own comments; owners and moderators can delete
        anyone's. Deleting one's own comment is additionally scoped to the
        actor's rows in the store.

        Args:
            actor_id: User performing the delete
            actor_role: Actor's effective role in the community
            comment: Comment to delete
            existing: Comments currently known for the post

        Returns:
            Ids of the comment and every descendant, to remove locally

        Raises:
            AuthorizationDenied: If the actor may not delete the comment
            DataAccessError: If the store call fails
        """
        ensure(
            ModerationAction.DELETE_CONTENT,
            ModerationContext(
                actor_role=actor_role,
                actor_id=actor_id,
                target_user_id=comment.author_id,
                target_role=Role.MEMBER,
            ),
        )

        own = comment.author_id == actor_id
        with logfire.span(
            "comment_service.delete_comment",
            comment_id=str(comment.id),
            actor_id=str(actor_id),
            own=own,
        ):
            await self.comment_repository.delete_comment(
                comment.id, author_id=actor_id if own else None
            )
            removed = collect_descendant_ids(comment.id, existing)
            logfire.info(
                "Comment deleted",
                comment_id=str(comment.id),
                removed=len(removed),
            )
            return removed

    async def get_comment_by_id(self, comment_id: CommentId) -> Comment:
        """Get a comment by ID.

        Raises:
            NotFoundError: If the comment does not exist
        """
        comment = await self.comment_repository.find_by_id(comment_id)
        if comment is None:
            logfire.warn("Comment not found", comment_id=str(comment_id))
            raise NotFoundError("Comment", str(comment_id))
        return comment

    async def get_like_summary(
        self, comment_ids: Iterable[CommentId], viewer_id: UserId | None
    ) -> LikeSummary:
        """Count likes per comment and collect the viewer's own likes."""
        ids = list(comment_ids)
        if not ids:
            return LikeSummary()

        with logfire.span("comment_service.get_like_summary", count=len(ids)):
            likes = await self.like_repository.list_likes(ids)
            counts: dict[CommentId, int] = {}
            liked: set[CommentId] = set()
            for like in likes:
                counts[like.comment_id] = counts.get(like.comment_id, 0) + 1
                if viewer_id is not None and like.user_id == viewer_id:
                    liked.add(like.comment_id)
            return LikeSummary(counts=counts, liked=frozenset(liked))

    async def toggle_like(
        self, comment_id: CommentId, user_id: UserId, currently_liked: bool
    ) -> bool:
        """Like or unlike a comment.

        Returns:
            Whether the comment is liked by the user afterwards
        """
        with logfire.span(
            "comment_service.toggle_like",
            comment_id=str(comment_id),
            user_id=str(user_id),
            unlike=currently_liked,
        ):
            if currently_liked:
                await self.like_repository.remove_like(comment_id, user_id)
                return False
            await self.like_repository.add_like(comment_id, user_id)
            return True
