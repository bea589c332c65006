"""PostgREST implementation of Community repository."""

from typing import Optional

from bygd.adapter.postgrest import eq
from bygd.domain.model import Community
from bygd.domain.repository import CommunityRepository
from bygd.domain.value import CommunityId
from bygd.persistence.mappers import row_to_community

from .base import PostgrestRepository


class PostgrestCommunityRepository(PostgrestRepository, CommunityRepository):
    """Communities (bygder) stored in the hosted backend."""

    async def find_by_id(self, community_id: CommunityId) -> Optional[Community]:
        with self.translate("find_community"):
            rows = await self.client.select(
                self.tables.communities, filters={"id": eq(community_id)}
            )
        if not rows:
            return None
        community = row_to_community(rows[0])
        count = await self.count_members(community_id)
        return community.model_copy(update={"member_count": count})

    async def count_members(self, community_id: CommunityId) -> int:
        with self.translate("count_members"):
            return await self.client.count(
                self.tables.members, filters={"bygd_id": eq(community_id)}
            )
