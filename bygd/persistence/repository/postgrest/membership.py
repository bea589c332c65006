"""PostgREST implementation of Membership repository."""

from typing import List

from bygd.adapter.postgrest import eq
from bygd.domain.error import DataAccessError
from bygd.domain.model import Membership
from bygd.domain.repository import MembershipRepository
from bygd.domain.value import CommunityId, UserId
from bygd.persistence.mappers import row_to_membership

from .base import PostgrestRepository


class PostgrestMembershipRepository(PostgrestRepository, MembershipRepository):
    """Community memberships stored in the hosted backend."""

    async def list_members(self, community_id: CommunityId) -> List[Membership]:
        with self.translate("list_members"):
            rows = await self.client.select(
                self.tables.members,
                columns="user_id,joined_at",
                filters={"bygd_id": eq(community_id)},
                order="joined_at.asc",
            )
        return [row_to_membership(row, community_id) for row in rows]

    async def is_member(self, community_id: CommunityId, user_id: UserId) -> bool:
        with self.translate("is_member"):
            rows = await self.client.select(
                self.tables.members,
                columns="user_id",
                filters={"bygd_id": eq(community_id), "user_id": eq(user_id)},
            )
        return bool(rows)

    async def add_membership(
        self, community_id: CommunityId, user_id: UserId
    ) -> Membership:
        with self.translate("add_membership"):
            rows = await self.client.insert(
                self.tables.members,
                {"bygd_id": str(community_id), "user_id": str(user_id)},
            )
        if not rows:
            raise DataAccessError("add_membership", "backend returned no row")
        return row_to_membership(rows[0], community_id)

    async def remove_membership(
        self, community_id: CommunityId, user_id: UserId
    ) -> None:
        with self.translate("remove_membership"):
            await self.client.delete(
                self.tables.members,
                {"bygd_id": eq(community_id), "user_id": eq(user_id)},
            )
