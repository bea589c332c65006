"""Discussion use cases."""

from .change_view import (
    ChangeDiscussionViewRequest,
    ChangeDiscussionViewResponse,
    ChangeDiscussionViewUseCase,
    ViewChange,
)
from .delete_comment import (
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
)
from .load_discussion import (
    LoadDiscussionRequest,
    LoadDiscussionResponse,
    LoadDiscussionUseCase,
)
from .submit_comment import (
    SubmitCommentRequest,
    SubmitCommentResponse,
    SubmitCommentUseCase,
)
from .toggle_like import (
    ToggleCommentLikeRequest,
    ToggleCommentLikeResponse,
    ToggleCommentLikeUseCase,
)
from .view import CommentItem, DiscussionView, ThreadItem

__all__ = [
    "ChangeDiscussionViewRequest",
    "ChangeDiscussionViewResponse",
    "ChangeDiscussionViewUseCase",
    "CommentItem",
    "DeleteCommentRequest",
    "DeleteCommentResponse",
    "DeleteCommentUseCase",
    "DiscussionView",
    "LoadDiscussionRequest",
    "LoadDiscussionResponse",
    "LoadDiscussionUseCase",
    "SubmitCommentRequest",
    "SubmitCommentResponse",
    "SubmitCommentUseCase",
    "ThreadItem",
    "ToggleCommentLikeRequest",
    "ToggleCommentLikeResponse",
    "ToggleCommentLikeUseCase",
    "ViewChange",
]
