"""In-memory profile repository for testing."""

from typing import Dict, Iterable

from bygd.domain.repository import ProfileRepository
from bygd.domain.value import Profile, UserId


class InMemoryProfileRepository(ProfileRepository):
    """In-memory implementation of ProfileRepository for testing."""

    def __init__(self) -> None:
        self._profiles: dict[UserId, Profile] = {}

    async def save(self, user_id: UserId, profile: Profile) -> Profile:
        """Store a profile (test seeding)."""
        self._profiles[user_id] = profile
        return profile

    async def get_profiles(self, user_ids: Iterable[UserId]) -> Dict[UserId, Profile]:
        return {u: self._profiles[u] for u in user_ids if u in self._profiles}
