"""Toggle comment like use case."""

from uuid import UUID

from pydantic import BaseModel

from bygd.domain.value import CommentId

from .common import DiscussionUseCase
from .view import DiscussionView, build_view


class ToggleCommentLikeRequest(BaseModel):
    """Toggle comment like request."""

    post_id: str  # UUID string
    comment_id: str  # UUID string
    viewer_id: str | None = None  # Anonymous viewers cannot like


class ToggleCommentLikeResponse(BaseModel):
    """Toggle comment like response."""

    liked: bool | None  # None if nothing changed
    like_count: int
    view: DiscussionView


class ToggleCommentLikeUseCase(
    DiscussionUseCase[ToggleCommentLikeRequest, ToggleCommentLikeResponse]
):
    """Use case for liking or unliking a comment."""

    async def execute(
        self, request: ToggleCommentLikeRequest
    ) -> ToggleCommentLikeResponse:
        """Execute like toggle.

        Raises:
            NotFoundError: If the discussion was not loaded
            DataAccessError: If the store call fails
        """
        session = await self.session(request.post_id, None, request.viewer_id)
        comment_id = CommentId(UUID(request.comment_id))
        liked = await session.toggle_like(comment_id)
        return ToggleCommentLikeResponse(
            liked=liked,
            like_count=session.snapshot.like_count(comment_id),
            view=build_view(session),
        )
