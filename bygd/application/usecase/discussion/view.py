"""Discussion view models shared by the discussion use cases."""

from datetime import datetime

from pydantic import BaseModel

from bygd.application.action import action_key
from bygd.application.discussion import DiscussionSession
from bygd.application.discussion.session import LOAD, SUBMIT
from bygd.domain.model.comment import Comment
from bygd.domain.value import ActionStatus, Role


class CommentItem(BaseModel):
    """A comment as rendered in the thread."""

    comment_id: str
    author_id: str
    content: str
    parent_id: str | None
    created_at: datetime
    display_name: str | None
    avatar_url: str | None
    like_count: int
    liked_by_me: bool
    can_delete: bool
    busy: bool


class ThreadItem(BaseModel):
    """A thread root and its flattened replies."""

    comment: CommentItem
    replies: list[CommentItem]
    reply_count: int
    replies_expanded: bool


class DiscussionView(BaseModel):
    """Everything needed to render one post's comments for one viewer."""

    post_id: str
    viewer_role: Role
    can_moderate: bool
    threads: list[ThreadItem]
    total_roots: int
    total_comments: int
    can_show_more: bool
    can_show_less: bool
    load_status: ActionStatus
    submit_status: ActionStatus
    reply_to_id: str | None
    reply_to_name: str | None
    draft: str
    errors: dict[str, str]  # Action key -> failure message


def _item(session: DiscussionSession, comment: Comment) -> CommentItem:
    snapshot = session.snapshot
    busy = snapshot.busy_ids
    profile = comment.profile
    return CommentItem(
        comment_id=str(comment.id),
        author_id=str(comment.author_id),
        content=comment.content,
        parent_id=str(comment.parent_id) if comment.parent_id else None,
        created_at=comment.created_at,
        display_name=profile.display_name if profile else None,
        avatar_url=profile.avatar_url if profile else None,
        like_count=snapshot.like_count(comment.id),
        liked_by_me=snapshot.is_liked(comment.id),
        can_delete=session.can_delete(comment),
        busy=(
            action_key("delete", comment.id) in busy
            or action_key("like", comment.id) in busy
        ),
    )


def build_view(session: DiscussionSession) -> DiscussionView:
    """Render the session's current snapshot."""
    snapshot = session.snapshot
    pagination = snapshot.pagination
    total = snapshot.root_count
    target = snapshot.reply_target

    threads = [
        ThreadItem(
            comment=_item(session, node.comment),
            replies=[_item(session, reply) for reply in node.children],
            reply_count=len(node.children),
            replies_expanded=pagination.is_expanded(node.id, total),
        )
        for node in snapshot.visible_threads
    ]

    return DiscussionView(
        post_id=str(snapshot.post_id),
        viewer_role=session.viewer_role,
        can_moderate=session.can_moderate,
        threads=threads,
        total_roots=total,
        total_comments=len(snapshot.comments),
        can_show_more=pagination.can_show_more(total),
        can_show_less=pagination.can_show_less(total),
        load_status=snapshot.action(LOAD).status,
        submit_status=snapshot.action(SUBMIT).status,
        reply_to_id=str(target.root_id) if target else None,
        reply_to_name=target.display_name if target else None,
        draft=snapshot.draft,
        errors={
            key: state.message
            for key, state in snapshot.actions.items()
            if state.status == ActionStatus.FAILED and state.message
        },
    )
