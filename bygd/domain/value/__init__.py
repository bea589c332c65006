"""Domain value objects for bygd."""

from bygd.domain.value.identifiers import (
    CommentId,
    CommunityId,
    PostId,
    UserId,
)
from bygd.domain.value.types import (
    ActionStatus,
    CommentContent,
    MembershipEvent,
    ModerationAction,
    Profile,
    Role,
)

__all__ = [
    # Identifiers
    "CommentId",
    "CommunityId",
    "PostId",
    "UserId",
    # Types
    "ActionStatus",
    "CommentContent",
    "MembershipEvent",
    "ModerationAction",
    "Profile",
    "Role",
]
