"""In-memory community repository for testing."""

from typing import Optional

from bygd.domain.model import Community
from bygd.domain.repository import CommunityRepository, MembershipRepository
from bygd.domain.value import CommunityId


class InMemoryCommunityRepository(CommunityRepository):
    """In-memory implementation of CommunityRepository for testing.

    Member counts are read from the membership repository, as the backend
    counts membership rows.
    """

    def __init__(self, membership_repository: MembershipRepository) -> None:
        self._communities: dict[CommunityId, Community] = {}
        self.membership_repository = membership_repository

    async def save(self, community: Community) -> Community:
        """Store a community as-is (test seeding)."""
        self._communities[community.id] = community
        return community

    async def find_by_id(self, community_id: CommunityId) -> Optional[Community]:
        community = self._communities.get(community_id)
        if community is None:
            return None
        count = await self.count_members(community_id)
        return community.model_copy(update={"member_count": count})

    async def count_members(self, community_id: CommunityId) -> int:
        return len(await self.membership_repository.list_members(community_id))
