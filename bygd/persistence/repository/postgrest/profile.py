"""PostgREST implementation of Profile repository."""

from typing import Dict, Iterable
from uuid import UUID

from bygd.adapter.postgrest import in_
from bygd.domain.repository import ProfileRepository
from bygd.domain.value import Profile, UserId
from bygd.persistence.mappers import row_to_profile

from .base import PostgrestRepository


class PostgrestProfileRepository(PostgrestRepository, ProfileRepository):
    """User profiles from the hosted backend."""

    async def get_profiles(self, user_ids: Iterable[UserId]) -> Dict[UserId, Profile]:
        ids = sorted({str(u) for u in user_ids})
        if not ids:
            return {}
        with self.translate("get_profiles"):
            rows = await self.client.select(
                self.tables.profiles,
                columns="id,display_name,avatar_url",
                filters={"id": in_(ids)},
            )
        return {UserId(UUID(str(row["id"]))): row_to_profile(row) for row in rows}
