"""PostgREST implementation of Role repository."""

from typing import List, Optional

from bygd.adapter.postgrest import eq
from bygd.domain.model import RoleAssignment
from bygd.domain.repository import RoleRepository
from bygd.domain.value import CommunityId, Role, UserId
from bygd.persistence.mappers import row_to_role, stored_role

from .base import PostgrestRepository


class PostgrestRoleRepository(PostgrestRepository, RoleRepository):
    """Explicit community roles stored in the hosted backend."""

    async def get_explicit_role(
        self, community_id: CommunityId, user_id: UserId
    ) -> Optional[Role]:
        with self.translate("get_role"):
            rows = await self.client.select(
                self.tables.roles,
                columns="role",
                filters={"bygd_id": eq(community_id), "user_id": eq(user_id)},
            )
        return stored_role(rows[0]["role"]) if rows else None

    async def list_roles(self, community_id: CommunityId) -> List[RoleAssignment]:
        with self.translate("list_roles"):
            rows = await self.client.select(
                self.tables.roles,
                columns="user_id,role",
                filters={"bygd_id": eq(community_id)},
            )
        return [row_to_role(row, community_id) for row in rows]

    async def upsert_moderator_role(
        self, community_id: CommunityId, user_id: UserId
    ) -> None:
        with self.translate("upsert_role"):
            await self.client.upsert(
                self.tables.roles,
                {
                    "bygd_id": str(community_id),
                    "user_id": str(user_id),
                    "role": Role.MODERATOR.value,
                },
                on_conflict="bygd_id,user_id",
            )

    async def remove_role(self, community_id: CommunityId, user_id: UserId) -> None:
        with self.translate("remove_role"):
            await self.client.delete(
                self.tables.roles,
                {"bygd_id": eq(community_id), "user_id": eq(user_id)},
            )
