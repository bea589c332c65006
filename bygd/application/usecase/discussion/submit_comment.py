"""Submit comment use case."""

from uuid import UUID

from pydantic import BaseModel

from bygd.domain.value import CommentId

from .common import DiscussionUseCase
from .view import DiscussionView, build_view


class SubmitCommentRequest(BaseModel):
    """Submit comment request."""

    post_id: str  # UUID string
    viewer_id: str  # Author, from authenticated user
    content: str
    community_id: str | None = None
    reply_to_id: str | None = None  # Any comment in the thread being answered


class SubmitCommentResponse(BaseModel):
    """Submit comment response."""

    comment_id: str | None  # None if nothing was submitted
    parent_id: str | None
    view: DiscussionView


class SubmitCommentUseCase(
    DiscussionUseCase[SubmitCommentRequest, SubmitCommentResponse]
):
    """Use case for posting a new thread or a reply."""

    async def execute(self, request: SubmitCommentRequest) -> SubmitCommentResponse:
        """Execute submit flow.

        Replies always attach to the root of the answered comment's thread.

        Raises:
            NotFoundError: If the discussion was not loaded or the answered
                comment is not part of it
            ValidationError: If the content is invalid
            DataAccessError: If the store rejects the insert
        """
        session = await self.session(
            request.post_id, request.community_id, request.viewer_id
        )
        if request.reply_to_id:
            session.start_reply(CommentId(UUID(request.reply_to_id)))
        else:
            session.cancel_reply()

        created = await session.submit(request.content)

        return SubmitCommentResponse(
            comment_id=str(created.id) if created else None,
            parent_id=str(created.parent_id) if created and created.parent_id else None,
            view=build_view(session),
        )
