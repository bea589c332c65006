"""Role domain service."""

from typing import Optional

import logfire

from bygd.domain.error import DataAccessError, NotFoundError
from bygd.domain.model.community import (
    Community,
    MemberEntry,
    MemberRoster,
    MemberSummary,
)
from bygd.domain.repository import (
    CommunityRepository,
    MembershipRepository,
    ProfileRepository,
    RoleRepository,
)
from bygd.domain.value import CommunityId, Profile, Role, UserId

from .base import Service
from .role import resolve_role


class RoleService(Service):
    """Resolves effective roles against the membership and role stores."""

    def __init__(
        self,
        community_repository: CommunityRepository,
        membership_repository: MembershipRepository,
        role_repository: RoleRepository,
        profile_repository: ProfileRepository,
    ) -> None:
        """Initialize role service.

        Args:
            community_repository: Community store
            membership_repository: Membership store
            role_repository: Explicit role store
            profile_repository: Profile lookup for roster decoration
        """
        self.community_repository = community_repository
        self.membership_repository = membership_repository
        self.role_repository = role_repository
        self.profile_repository = profile_repository

    async def get_community(self, community_id: CommunityId) -> Community:
        """Get a community by ID.

        Raises:
            NotFoundError: If the community does not exist
        """
        community = await self.community_repository.find_by_id(community_id)
        if community is None:
            logfire.warn("Community not found", community_id=str(community_id))
            raise NotFoundError("Community", str(community_id))
        return community

    async def resolve(self, community: Community, user_id: UserId | None) -> Role:
        """Resolve a user's effective role in a community.

        A failing membership lookup propagates; a failing role lookup
        degrades the member to ``member``.

        Args:
            community: Community being viewed
            user_id: User to resolve, None for an anonymous viewer

        Returns:
            The user's effective role

        Raises:
            DataAccessError: If membership cannot be determined
        """
        with logfire.span(
            "role_service.resolve",
            community_id=str(community.id),
            user_id=str(user_id) if user_id else None,
        ):
            if user_id is None:
                return resolve_role(community, None, False, _no_roles)

            is_member = await self.membership_repository.is_member(
                community.id, user_id
            )

            explicit: Optional[Role] = None
            failure: DataAccessError | None = None
            if is_member:
                try:
                    explicit = await self.role_repository.get_explicit_role(
                        community.id, user_id
                    )
                except DataAccessError as e:
                    failure = e

            def lookup(community_id: CommunityId, uid: UserId) -> Optional[Role]:
                if failure is not None:
                    raise failure
                return explicit

            role = resolve_role(community, user_id, is_member, lookup)
            logfire.info(
                "Role resolved",
                community_id=str(community.id),
                user_id=str(user_id),
                role=role.value,
            )
            return role

    async def list_roster(self, community: Community) -> MemberRoster:
        """Build the moderation roster for a community.

        Every member's role is derived through resolve_role. If the role
        rows cannot be loaded everyone except the owner shows as a plain
        member; if profiles cannot be loaded members show undecorated.

        Args:
            community: Community to list

        Returns:
            Members in join order with their effective roles

        Raises:
            DataAccessError: If the membership list cannot be fetched
        """
        with logfire.span("role_service.list_roster", community_id=str(community.id)):
            memberships = await self.membership_repository.list_members(community.id)

            roles: dict[UserId, Role] = {}
            failure: DataAccessError | None = None
            try:
                assignments = await self.role_repository.list_roles(community.id)
                roles = {a.user_id: a.role for a in assignments}
            except DataAccessError as e:
                failure = e

            def lookup(community_id: CommunityId, uid: UserId) -> Optional[Role]:
                if failure is not None:
                    raise failure
                return roles.get(uid)

            profiles: dict[UserId, Profile] = {}
            user_ids = {m.user_id for m in memberships if m.profile is None}
            if user_ids:
                try:
                    profiles = await self.profile_repository.get_profiles(user_ids)
                except DataAccessError as e:
                    logfire.warn("Could not load member profiles", error=str(e))

            members = [
                MemberEntry(
                    user_id=m.user_id,
                    joined_at=m.joined_at,
                    role=resolve_role(community, m.user_id, True, lookup),
                    profile=m.profile or profiles.get(m.user_id),
                )
                for m in memberships
            ]
            summary = MemberSummary(
                total=len(members),
                moderators=sum(1 for m in members if m.role == Role.MODERATOR),
                owners=sum(1 for m in members if m.role == Role.OWNER),
            )
            logfire.info(
                "Roster built",
                community_id=str(community.id),
                total=summary.total,
                moderators=summary.moderators,
            )
            return MemberRoster(
                community_id=community.id, members=members, summary=summary
            )


def _no_roles(community_id: CommunityId, user_id: UserId) -> Optional[Role]:
    return None
