"""Resolve viewer role use case."""

from uuid import UUID

from pydantic import BaseModel

from bygd.application.usecase.base import BaseUseCase
from bygd.domain.service import RoleService, can_moderate
from bygd.domain.value import CommunityId, Role, UserId


class ResolveViewerRoleRequest(BaseModel):
    """Resolve viewer role request."""

    community_id: str  # UUID string
    user_id: str | None = None  # None for anonymous viewers


class ResolveViewerRoleResponse(BaseModel):
    """Resolve viewer role response."""

    community_id: str
    user_id: str | None
    role: Role
    can_moderate: bool
    is_owner: bool


class ResolveViewerRoleUseCase(
    BaseUseCase[ResolveViewerRoleRequest, ResolveViewerRoleResponse]
):
    """Use case for working out what the viewer may do in a community."""

    def __init__(self, role_service: RoleService) -> None:
        """Initialize resolve viewer role use case.

        Args:
            role_service: Role domain service
        """
        self.role_service = role_service

    async def execute(
        self, request: ResolveViewerRoleRequest
    ) -> ResolveViewerRoleResponse:
        """Execute role resolution.

        Args:
            request: Community and viewer

        Returns:
            The viewer's effective role and derived capabilities

        Raises:
            NotFoundError: If the community does not exist
            DataAccessError: If membership cannot be determined
        """
        community = await self.role_service.get_community(
            CommunityId(UUID(request.community_id))
        )
        user_id = UserId(UUID(request.user_id)) if request.user_id else None
        role = await self.role_service.resolve(community, user_id)

        return ResolveViewerRoleResponse(
            community_id=request.community_id,
            user_id=request.user_id,
            role=role,
            can_moderate=can_moderate(role),
            is_owner=role == Role.OWNER,
        )
