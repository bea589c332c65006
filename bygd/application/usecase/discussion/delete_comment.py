"""Delete comment use case."""

from uuid import UUID

from pydantic import BaseModel

from bygd.domain.value import CommentId

from .common import DiscussionUseCase
from .view import DiscussionView, build_view


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    post_id: str  # UUID string
    comment_id: str  # UUID string
    viewer_id: str  # Author or moderator
    community_id: str | None = None


class DeleteCommentResponse(BaseModel):
    """Delete comment response."""

    removed_ids: list[str]
    view: DiscussionView


class DeleteCommentUseCase(
    DiscussionUseCase[DeleteCommentRequest, DeleteCommentResponse]
):
    """Use case for deleting a comment and its replies."""

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        """Execute delete flow.

        Raises:
            NotFoundError: If the discussion or comment is unknown
            AuthorizationDenied: If the viewer is neither author nor moderator
            DataAccessError: If the store call fails
        """
        session = await self.session(
            request.post_id, request.community_id, request.viewer_id
        )
        removed = await session.delete(CommentId(UUID(request.comment_id)))
        return DeleteCommentResponse(
            removed_ids=sorted(str(i) for i in removed),
            view=build_view(session),
        )
