"""Domain layer DI providers."""

from dishka import Scope, provide

from bygd.config import CommentSettings
from bygd.domain.repository import (
    CommentLikeRepository,
    CommentRepository,
    CommunityRepository,
    MembershipRepository,
    ProfileRepository,
    RoleRepository,
)
from bygd.domain.service import CommentService, MembershipService, RoleService
from bygd.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with the repository lifecycle.
    """

    scope = Scope.REQUEST

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        like_repository: CommentLikeRepository,
        profile_repository: ProfileRepository,
        settings: CommentSettings,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            like_repository=like_repository,
            profile_repository=profile_repository,
            settings=settings,
        )

    @provide
    def get_role_service(
        self,
        community_repository: CommunityRepository,
        membership_repository: MembershipRepository,
        role_repository: RoleRepository,
        profile_repository: ProfileRepository,
    ) -> RoleService:
        """Provide role domain service."""
        return RoleService(
            community_repository=community_repository,
            membership_repository=membership_repository,
            role_repository=role_repository,
            profile_repository=profile_repository,
        )

    @provide
    def get_membership_service(
        self,
        membership_repository: MembershipRepository,
        role_repository: RoleRepository,
    ) -> MembershipService:
        """Provide membership domain service."""
        return MembershipService(
            membership_repository=membership_repository,
            role_repository=role_repository,
        )
