"""Change discussion view use case."""

from enum import Enum
from uuid import UUID

from pydantic import BaseModel

from bygd.domain.value import CommentId

from .common import DiscussionUseCase
from .view import DiscussionView, build_view


class ViewChange(str, Enum):
    SHOW_MORE = "show_more"
    SHOW_LESS = "show_less"
    TOGGLE_REPLIES = "toggle_replies"


class ChangeDiscussionViewRequest(BaseModel):
    """Change discussion view request."""

    post_id: str
    change: ViewChange
    viewer_id: str | None = None
    root_id: str | None = None  # Required for toggle_replies


class ChangeDiscussionViewResponse(BaseModel):
    """Change discussion view response."""

    view: DiscussionView


class ChangeDiscussionViewUseCase(
    DiscussionUseCase[ChangeDiscussionViewRequest, ChangeDiscussionViewResponse]
):
    """Use case for paging thread roots and opening reply lists."""

    async def execute(
        self, request: ChangeDiscussionViewRequest
    ) -> ChangeDiscussionViewResponse:
        """Apply a display change. Comments are not refetched.

        Raises:
            NotFoundError: If the discussion was not loaded
            ValueError: If toggle_replies is requested without a root
        """
        session = await self.session(request.post_id, None, request.viewer_id)
        if request.change == ViewChange.SHOW_MORE:
            session.show_more()
        elif request.change == ViewChange.SHOW_LESS:
            session.show_less()
        else:
            if request.root_id is None:
                raise ValueError("root_id is required to toggle replies")
            session.toggle_replies(CommentId(UUID(request.root_id)))
        return ChangeDiscussionViewResponse(view=build_view(session))
