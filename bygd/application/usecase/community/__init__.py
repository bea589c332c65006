"""Community use cases."""

from .get_member_roster import (
    GetMemberRosterRequest,
    GetMemberRosterResponse,
    GetMemberRosterUseCase,
    RosterItem,
)
from .membership import (
    JoinCommunityUseCase,
    LeaveCommunityUseCase,
    MembershipRequest,
    MembershipResponse,
)
from .moderate_member import (
    ModerateMemberRequest,
    ModerateMemberResponse,
    ModerateMemberUseCase,
    member_action_key,
)
from .resolve_viewer_role import (
    ResolveViewerRoleRequest,
    ResolveViewerRoleResponse,
    ResolveViewerRoleUseCase,
)

__all__ = [
    "GetMemberRosterRequest",
    "GetMemberRosterResponse",
    "GetMemberRosterUseCase",
    "JoinCommunityUseCase",
    "LeaveCommunityUseCase",
    "MembershipRequest",
    "MembershipResponse",
    "ModerateMemberRequest",
    "ModerateMemberResponse",
    "ModerateMemberUseCase",
    "ResolveViewerRoleRequest",
    "ResolveViewerRoleResponse",
    "ResolveViewerRoleUseCase",
    "RosterItem",
    "member_action_key",
]
