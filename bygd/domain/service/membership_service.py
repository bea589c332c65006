"""Membership and moderation domain service."""

import logfire

from bygd.domain.error import DataAccessError
from bygd.domain.model.community import Community, MemberEntry
from bygd.domain.repository import MembershipRepository, RoleRepository
from bygd.domain.value import MembershipEvent, ModerationAction, Role, UserId

from .authorization import ModerationContext, ensure
from .base import Service
from .role import transition


class MembershipService(Service):
    """Joins, leaves and moderation changes to community membership.

    Every moderation method checks the authorization gate before the first
    store call, so a denied action never reaches the backend.
    """

    def __init__(
        self,
        membership_repository: MembershipRepository,
        role_repository: RoleRepository,
    ) -> None:
        """Initialize membership service.

        Args:
            membership_repository: Membership store
            role_repository: Explicit role store
        """
        self.membership_repository = membership_repository
        self.role_repository = role_repository

    @staticmethod
    def context(
        community: Community,
        actor_id: UserId,
        actor_role: Role,
        target: MemberEntry,
    ) -> ModerationContext:
        """Build the gate input for an action by actor on target."""
        return ModerationContext(
            actor_role=actor_role,
            actor_id=actor_id,
            target_user_id=target.user_id,
            target_role=target.role,
            target_is_owner=community.created_by == target.user_id,
        )

    async def promote(
        self,
        community: Community,
        actor_id: UserId,
        actor_role: Role,
        target: MemberEntry,
    ) -> Role:
        """Make a member a moderator. Owner only.

        Returns:
            The target's new role

        Raises:
            AuthorizationDenied: If the gate rejects the action
            DataAccessError: If the store call fails
        """
        ctx = self.context(community, actor_id, actor_role, target)
        ensure(ModerationAction.PROMOTE, ctx)
        new_role = transition(target.role, MembershipEvent.PROMOTE)

        with logfire.span(
            "membership_service.promote",
            community_id=str(community.id),
            target_user_id=str(target.user_id),
        ):
            await self.role_repository.upsert_moderator_role(
                community.id, target.user_id
            )
            logfire.info(
                "Member promoted to moderator",
                community_id=str(community.id),
                target_user_id=str(target.user_id),
            )
            return new_role

    async def demote(
        self,
        community: Community,
        actor_id: UserId,
        actor_role: Role,
        target: MemberEntry,
    ) -> Role:
        """Turn a moderator back into a plain member. Owner only.

        Returns:
            The target's new role

        Raises:
            AuthorizationDenied: If the gate rejects the action
            DataAccessError: If the store call fails
        """
        ctx = self.context(community, actor_id, actor_role, target)
        ensure(ModerationAction.DEMOTE, ctx)
        new_role = transition(target.role, MembershipEvent.DEMOTE)

        with logfire.span(
            "membership_service.demote",
            community_id=str(community.id),
            target_user_id=str(target.user_id),
        ):
            await self.role_repository.remove_role(community.id, target.user_id)
            logfire.info(
                "Moderator demoted",
                community_id=str(community.id),
                target_user_id=str(target.user_id),
            )
            return new_role

    async def remove_member(
        self,
        community: Community,
        actor_id: UserId,
        actor_role: Role,
        target: MemberEntry,
    ) -> Role:
        """Remove a member from the community.

        The membership row is deleted first. The role row is cleaned up
        afterwards; if that cleanup fails the removal still stands, since a
        role row without membership resolves to guest.

        Returns:
            The target's new role (always guest)

        Raises:
            AuthorizationDenied: If the gate rejects the action
            DataAccessError: If the membership delete fails
        """
        ctx = self.context(community, actor_id, actor_role, target)
        ensure(ModerationAction.REMOVE_MEMBER, ctx)
        new_role = transition(target.role, MembershipEvent.REMOVE)

        with logfire.span(
            "membership_service.remove_member",
            community_id=str(community.id),
            target_user_id=str(target.user_id),
        ):
            await self.membership_repository.remove_membership(
                community.id, target.user_id
            )
            await self._clear_role(community, target.user_id)
            logfire.info(
                "Member removed",
                community_id=str(community.id),
                target_user_id=str(target.user_id),
                by=str(actor_id),
            )
            return new_role

    async def join(self, community: Community, user_id: UserId, current: Role) -> Role:
        """Join a community.

        Raises:
            InvariantViolation: If the user is already a member
            DataAccessError: If the store call fails
        """
        new_role = transition(current, MembershipEvent.JOIN)
        with logfire.span(
            "membership_service.join",
            community_id=str(community.id),
            user_id=str(user_id),
        ):
            await self.membership_repository.add_membership(community.id, user_id)
            logfire.info(
                "Joined community", community_id=str(community.id), user_id=str(user_id)
            )
            return new_role

    async def leave(self, community: Community, user_id: UserId, current: Role) -> Role:
        """Leave a community.

        The owner may leave too, but stays the owner since ownership is
        derived from the community itself.

        Raises:
            InvariantViolation: If the user is not a member
            DataAccessError: If the store call fails
        """
        new_role = transition(current, MembershipEvent.LEAVE)
        with logfire.span(
            "membership_service.leave",
            community_id=str(community.id),
            user_id=str(user_id),
        ):
            await self.membership_repository.remove_membership(community.id, user_id)
            await self._clear_role(community, user_id)
            logfire.info(
                "Left community", community_id=str(community.id), user_id=str(user_id)
            )
            return new_role

    async def _clear_role(self, community: Community, user_id: UserId) -> None:
        try:
            await self.role_repository.remove_role(community.id, user_id)
        except DataAccessError as e:
            logfire.warn(
                "Could not clear role after membership removal",
                community_id=str(community.id),
                user_id=str(user_id),
                error=str(e),
            )
