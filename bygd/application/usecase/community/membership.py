"""Join and leave community use cases."""

from uuid import UUID

from pydantic import BaseModel

from bygd.domain.service import MembershipService, RoleService
from bygd.domain.value import CommunityId, Role, UserId


class MembershipRequest(BaseModel):
    """Join or leave request."""

    community_id: str  # UUID string
    user_id: str  # User from authenticated session


class MembershipResponse(BaseModel):
    """Join or leave response."""

    community_id: str
    user_id: str
    role: Role
    member_count: int


class JoinCommunityUseCase:
    """Use case for joining a community."""

    def __init__(
        self, role_service: RoleService, membership_service: MembershipService
    ) -> None:
        self.role_service = role_service
        self.membership_service = membership_service

    async def execute(self, request: MembershipRequest) -> MembershipResponse:
        """Join the community.

        Raises:
            NotFoundError: If the community does not exist
            InvariantViolation: If the user is already a member
            DataAccessError: If a store call fails
        """
        community = await self.role_service.get_community(
            CommunityId(UUID(request.community_id))
        )
        user_id = UserId(UUID(request.user_id))
        current = await self.role_service.resolve(community, user_id)
        role = await self.membership_service.join(community, user_id, current)
        refreshed = await self.role_service.get_community(community.id)
        return MembershipResponse(
            community_id=request.community_id,
            user_id=request.user_id,
            role=role,
            member_count=refreshed.member_count,
        )


class LeaveCommunityUseCase:
    """Use case for leaving a community."""

    def __init__(
        self, role_service: RoleService, membership_service: MembershipService
    ) -> None:
        self.role_service = role_service
        self.membership_service = membership_service

    async def execute(self, request: MembershipRequest) -> MembershipResponse:
        """Leave the community.

        Raises:
            NotFoundError: If the community does not exist
            InvariantViolation: If the user is not a member
            DataAccessError: If a store call fails
        """
        community = await self.role_service.get_community(
            CommunityId(UUID(request.community_id))
        )
        user_id = UserId(UUID(request.user_id))
        current = await self.role_service.resolve(community, user_id)
        role = await self.membership_service.leave(community, user_id, current)
        refreshed = await self.role_service.get_community(community.id)
        return MembershipResponse(
            community_id=request.community_id,
            user_id=request.user_id,
            role=role,
            member_count=refreshed.member_count,
        )
