"""Community store interface."""

from abc import ABC, abstractmethod
from typing import Optional

from bygd.domain.model.community import Community
from bygd.domain.value import CommunityId


class CommunityRepository(ABC):
    """Store for Community entities."""

    @abstractmethod
    async def find_by_id(self, community_id: CommunityId) -> Optional[Community]:
        """Find a community by ID.

        Args:
            community_id: The community's unique identifier

        Returns:
            The community if found, None otherwise
        """
        pass

    @abstractmethod
    async def count_members(self, community_id: CommunityId) -> int:
        """Count membership rows for a community."""
        pass
