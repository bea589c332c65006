"""Membership store interface."""

from abc import ABC, abstractmethod
from typing import List

from bygd.domain.model.community import Membership
from bygd.domain.value import CommunityId, UserId


class MembershipRepository(ABC):
    """Store for community memberships."""

    @abstractmethod
    async def list_members(self, community_id: CommunityId) -> List[Membership]:
        """List members of a community ordered by join time."""
        pass

    @abstractmethod
    async def is_member(self, community_id: CommunityId, user_id: UserId) -> bool:
        """Check whether a membership row exists."""
        pass

    @abstractmethod
    async def add_membership(
        self, community_id: CommunityId, user_id: UserId
    ) -> Membership:
        """Create a membership row (join)."""
        pass

    @abstractmethod
    async def remove_membership(
        self, community_id: CommunityId, user_id: UserId
    ) -> None:
        """Delete a membership row (leave or removal)."""
        pass
