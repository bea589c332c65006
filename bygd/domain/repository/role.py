"""Explicit role store interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from bygd.domain.model.community import RoleAssignment
from bygd.domain.value import CommunityId, Role, UserId


class RoleRepository(ABC):
    """Store for explicitly assigned community roles.

    Only moderator rows are ever written. Ownership is derived from the
    community itself and never stored here.
    """

    @abstractmethod
    async def get_explicit_role(
        self, community_id: CommunityId, user_id: UserId
    ) -> Optional[Role]:
        """Return the stored role for a user, or None if no row exists."""
        pass

    @abstractmethod
    async def list_roles(self, community_id: CommunityId) -> List[RoleAssignment]:
        """List every stored role row for a community."""
        pass

    @abstractmethod
    async def upsert_moderator_role(
        self, community_id: CommunityId, user_id: UserId
    ) -> None:
        """Insert or overwrite the user's row with the moderator role."""
        pass

    @abstractmethod
    async def remove_role(self, community_id: CommunityId, user_id: UserId) -> None:
        """Delete the user's role row if present."""
        pass
