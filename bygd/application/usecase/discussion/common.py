"""Shared plumbing for the discussion use cases."""

from typing import Optional
from uuid import UUID

from bygd.application.discussion import DiscussionRegistry, DiscussionSession
from bygd.application.usecase.base import BaseUseCase, RequestT, ResponseT
from bygd.domain.service import CommentService, RoleService
from bygd.domain.value import CommunityId, PostId, Role, UserId


def parse_user(user_id: str | None) -> Optional[UserId]:
    return UserId(UUID(user_id)) if user_id else None


class DiscussionUseCase(BaseUseCase[RequestT, ResponseT]):
    """Base for use cases acting on one viewer's discussion of a post."""

    def __init__(
        self,
        comment_service: CommentService,
        role_service: RoleService,
        registry: DiscussionRegistry,
    ) -> None:
        """Initialize discussion use case.

        Args:
            comment_service: Comment domain service
            role_service: Role domain service, for the viewer's role
            registry: Open discussion stores
        """
        self.comment_service = comment_service
        self.role_service = role_service
        self.registry = registry

    async def viewer_role(
        self, community_id: Optional[CommunityId], viewer_id: Optional[UserId]
    ) -> Role:
        """Resolve the viewer's role in the post's community.

        Posts outside any community are seen by everyone as guests.
        """
        if community_id is None:
            return Role.GUEST
        community = await self.role_service.get_community(community_id)
        return await self.role_service.resolve(community, viewer_id)

    async def session(
        self,
        post_id: str,
        community_id: str | None,
        viewer_id: str | None,
        create: bool = False,
    ) -> DiscussionSession:
        """Bind the viewer's discussion store to this request's services.

        The viewer's role is resolved in the community the store was first
        opened for, never in one named by a later request.

        Raises:
            NotFoundError: If the discussion was never loaded (unless
                ``create``) or the community does not exist
            AuthorizationDenied: If ``community_id`` is not the post's
                community
        """
        pid = PostId(UUID(post_id))
        uid = parse_user(viewer_id)
        cid = CommunityId(UUID(community_id)) if community_id else None
        if create:
            if cid is not None:
                # Unknown communities must not leave a bound store behind
                await self.role_service.get_community(cid)
            store = self.registry.open(pid, uid, cid)
        else:
            store = self.registry.get(pid, uid, cid)
        role = await self.viewer_role(store.community_id, uid)
        return DiscussionSession(self.comment_service, store, uid, role)
