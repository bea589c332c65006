"""Load discussion use case."""

import logfire
from pydantic import BaseModel

from .common import DiscussionUseCase
from .view import DiscussionView, build_view


class LoadDiscussionRequest(BaseModel):
    """Load discussion request."""

    post_id: str  # UUID string
    community_id: str | None = None  # Community the post belongs to
    viewer_id: str | None = None  # Current user ID (if signed in)


class LoadDiscussionResponse(BaseModel):
    """Load discussion response."""

    applied: bool  # False if a newer load superseded this one
    view: DiscussionView


class LoadDiscussionUseCase(
    DiscussionUseCase[LoadDiscussionRequest, LoadDiscussionResponse]
):
    """Use case for (re)loading a post's comments."""

    async def execute(self, request: LoadDiscussionRequest) -> LoadDiscussionResponse:
        """Execute load flow.

        Opens the viewer's discussion if needed, resolves their role and
        replaces comments and likes with a fresh read.

        Raises:
            NotFoundError: If the community does not exist
            DataAccessError: If the comments cannot be fetched; the load
                state is marked failed first
        """
        session = await self.session(
            request.post_id, request.community_id, request.viewer_id, create=True
        )
        applied = await session.refresh()
        logfire.info(
            "Discussion loaded",
            post_id=request.post_id,
            comments=len(session.snapshot.comments),
            applied=applied,
        )
        return LoadDiscussionResponse(applied=applied, view=build_view(session))
