"""Profile lookup interface."""

from abc import ABC, abstractmethod
from typing import Dict, Iterable

from bygd.domain.value import Profile, UserId


class ProfileRepository(ABC):
    """Lookup of display profiles used to decorate comments and members."""

    @abstractmethod
    async def get_profiles(self, user_ids: Iterable[UserId]) -> Dict[UserId, Profile]:
        """Fetch profiles for the given users.

        Users without a profile are simply absent from the result.
        """
        pass
