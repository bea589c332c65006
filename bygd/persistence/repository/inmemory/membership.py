"""In-memory membership repository for testing."""

from datetime import datetime
from typing import List

from bygd.domain.error import DataAccessError
from bygd.domain.model import Membership
from bygd.domain.repository import MembershipRepository
from bygd.domain.value import CommunityId, UserId


class InMemoryMembershipRepository(MembershipRepository):
    """In-memory implementation of MembershipRepository for testing."""

    def __init__(self) -> None:
        self._members: dict[tuple[CommunityId, UserId], Membership] = {}

    async def save(self, membership: Membership) -> Membership:
        """Store a membership as-is (test seeding)."""
        self._members[(membership.community_id, membership.user_id)] = membership
        return membership

    async def list_members(self, community_id: CommunityId) -> List[Membership]:
        members = [m for m in self._members.values() if m.community_id == community_id]
        members.sort(key=lambda m: m.joined_at)
        return members

    async def is_member(self, community_id: CommunityId, user_id: UserId) -> bool:
        return (community_id, user_id) in self._members

    async def add_membership(
        self, community_id: CommunityId, user_id: UserId
    ) -> Membership:
        key = (community_id, user_id)
        if key in self._members:
            raise DataAccessError("add_membership", "duplicate key value")
        membership = Membership(
            community_id=community_id, user_id=user_id, joined_at=datetime.now()
        )
        self._members[key] = membership
        return membership

    async def remove_membership(
        self, community_id: CommunityId, user_id: UserId
    ) -> None:
        self._members.pop((community_id, user_id), None)
