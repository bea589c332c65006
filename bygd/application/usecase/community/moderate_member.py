"""Moderate member use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from bygd.application.action import ActionTracker, action_key
from bygd.domain.error import NotFoundError
from bygd.domain.service import (
    MembershipService,
    ModerationContext,
    RoleService,
    ensure,
)
from bygd.domain.value import ActionStatus, CommunityId, ModerationAction, Role, UserId

MEMBER_ACTIONS = (
    ModerationAction.PROMOTE,
    ModerationAction.DEMOTE,
    ModerationAction.REMOVE_MEMBER,
)


def member_action_key(
    action: ModerationAction, community_id: CommunityId, target_id: UserId
) -> str:
    """Tracker key for one moderation action on one member of one community."""
    return action_key(action.value, f"{community_id}:{target_id}")


class ModerateMemberRequest(BaseModel):
    """Moderate member request."""

    community_id: str  # UUID string
    actor_id: str  # Owner or moderator acting
    target_user_id: str  # Member being acted on
    action: ModerationAction  # promote, demote or remove_member


class ModerateMemberResponse(BaseModel):
    """Moderate member response."""

    community_id: str
    target_user_id: str
    action: ModerationAction
    previous_role: Role
    new_role: Role
    status: ActionStatus


class ModerateMemberUseCase:
    """Use case for promoting, demoting and removing members."""

    def __init__(
        self,
        role_service: RoleService,
        membership_service: MembershipService,
        tracker: ActionTracker,
    ) -> None:
        """Initialize moderate member use case.

        Args:
            role_service: Role domain service
            membership_service: Membership domain service
            tracker: Per-member action state shared with the moderation panel
        """
        self.role_service = role_service
        self.membership_service = membership_service
        self.tracker = tracker

    async def execute(self, request: ModerateMemberRequest) -> ModerateMemberResponse:
        """Execute a moderation action.

        The action's state is tracked under the key from ``member_action_key``.
        Ids are parsed before the action starts, and any failure after that
        leaves it failed rather than pending. A second request for the same
        community, target and action while the first is pending is rejected.

        Raises:
            ValueError: If the action is not a member action or an id is
                malformed
            NotFoundError: If the community does not exist
            AuthorizationDenied: If the gate rejects the action
            InvariantViolation: If the same action is already pending
            DataAccessError: If a store call fails
        """
        if request.action not in MEMBER_ACTIONS:
            raise ValueError(f"Not a member action: {request.action.value}")

        community_id = CommunityId(UUID(request.community_id))
        actor_id = UserId(UUID(request.actor_id))
        target_id = UserId(UUID(request.target_user_id))

        key = member_action_key(request.action, community_id, target_id)
        self.tracker.begin(key)
        try:
            response = await self._run(request, community_id, actor_id, target_id)
        except Exception as e:
            self.tracker.fail(key, str(e))
            raise
        self.tracker.succeed(key)
        return response

    async def _run(
        self,
        request: ModerateMemberRequest,
        community_id: CommunityId,
        actor_id: UserId,
        target_id: UserId,
    ) -> ModerateMemberResponse:
        community = await self.role_service.get_community(community_id)
        actor_role = await self.role_service.resolve(community, actor_id)

        roster = await self.role_service.list_roster(community)
        target = roster.find(target_id)
        if target is None:
            # Not a member: the gate denies every member action on guests
            ensure(
                request.action,
                ModerationContext(
                    actor_role=actor_role,
                    actor_id=actor_id,
                    target_user_id=target_id,
                    target_role=Role.GUEST,
                    target_is_owner=community.created_by == target_id,
                ),
            )
            raise NotFoundError("Member", request.target_user_id)

        with logfire.span(
            "moderate_member.execute",
            action=request.action.value,
            community_id=request.community_id,
        ):
            if request.action == ModerationAction.PROMOTE:
                new_role = await self.membership_service.promote(
                    community, actor_id, actor_role, target
                )
            elif request.action == ModerationAction.DEMOTE:
                new_role = await self.membership_service.demote(
                    community, actor_id, actor_role, target
                )
            else:
                new_role = await self.membership_service.remove_member(
                    community, actor_id, actor_role, target
                )

        return ModerateMemberResponse(
            community_id=request.community_id,
            target_user_id=request.target_user_id,
            action=request.action,
            previous_role=target.role,
            new_role=new_role,
            status=ActionStatus.DONE,
        )
