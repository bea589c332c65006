"""Get member roster use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from bygd.domain.error import AuthorizationDenied
from bygd.domain.service import (
    MembershipService,
    RoleService,
    can_demote,
    can_moderate,
    can_promote,
    can_remove_member,
)
from bygd.domain.value import CommunityId, Role, UserId


class RosterItem(BaseModel):
    """Member row in the moderation panel."""

    user_id: str
    display_name: str | None
    avatar_url: str | None
    joined_at: datetime
    role: Role
    is_me: bool
    can_promote: bool
    can_demote: bool
    can_remove: bool


class GetMemberRosterRequest(BaseModel):
    """Get member roster request."""

    community_id: str  # UUID string
    actor_id: str  # Moderator opening the panel


class GetMemberRosterResponse(BaseModel):
    """Get member roster response."""

    community_id: str
    community_name: str
    actor_role: Role
    members: list[RosterItem]
    total: int
    moderators: int
    owners: int


class GetMemberRosterUseCase:
    """Use case for the moderation panel's member list."""

    def __init__(self, role_service: RoleService) -> None:
        """Initialize get member roster use case.

        Args:
            role_service: Role domain service
        """
        self.role_service = role_service

    async def execute(self, request: GetMemberRosterRequest) -> GetMemberRosterResponse:
        """Execute roster listing.

        Each member row carries which moderation actions the actor may
        take on it, decided by the authorization gate.

        Raises:
            NotFoundError: If the community does not exist
            AuthorizationDenied: If the actor cannot moderate
            DataAccessError: If the member list cannot be fetched
        """
        community = await self.role_service.get_community(
            CommunityId(UUID(request.community_id))
        )
        actor_id = UserId(UUID(request.actor_id))
        actor_role = await self.role_service.resolve(community, actor_id)
        if not can_moderate(actor_role):
            raise AuthorizationDenied(
                "view_roster", "Only owners and moderators can manage members."
            )

        roster = await self.role_service.list_roster(community)

        items = []
        for member in roster.members:
            ctx = MembershipService.context(community, actor_id, actor_role, member)
            items.append(
                RosterItem(
                    user_id=str(member.user_id),
                    display_name=member.profile.display_name if member.profile else None,
                    avatar_url=member.profile.avatar_url if member.profile else None,
                    joined_at=member.joined_at,
                    role=member.role,
                    is_me=member.user_id == actor_id,
                    can_promote=can_promote(ctx),
                    can_demote=can_demote(ctx),
                    can_remove=can_remove_member(ctx),
                )
            )

        return GetMemberRosterResponse(
            community_id=str(community.id),
            community_name=community.name,
            actor_role=actor_role,
            members=items,
            total=roster.summary.total,
            moderators=roster.summary.moderators,
            owners=roster.summary.owners,
        )
