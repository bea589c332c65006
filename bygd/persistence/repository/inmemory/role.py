"""In-memory role repository for testing."""

from typing import List, Optional

from bygd.domain.model import RoleAssignment
from bygd.domain.repository import RoleRepository
from bygd.domain.value import CommunityId, Role, UserId


class InMemoryRoleRepository(RoleRepository):
    """In-memory implementation of RoleRepository for testing."""

    def __init__(self) -> None:
        self._roles: dict[tuple[CommunityId, UserId], RoleAssignment] = {}

    async def save(self, assignment: RoleAssignment) -> RoleAssignment:
        """Store a role row as-is (test seeding)."""
        self._roles[(assignment.community_id, assignment.user_id)] = assignment
        return assignment

    async def get_explicit_role(
        self, community_id: CommunityId, user_id: UserId
    ) -> Optional[Role]:
        assignment = self._roles.get((community_id, user_id))
        return assignment.role if assignment else None

    async def list_roles(self, community_id: CommunityId) -> List[RoleAssignment]:
        return [a for a in self._roles.values() if a.community_id == community_id]

    async def upsert_moderator_role(
        self, community_id: CommunityId, user_id: UserId
    ) -> None:
        self._roles[(community_id, user_id)] = RoleAssignment(
            community_id=community_id, user_id=user_id, role=Role.MODERATOR
        )

    async def remove_role(self, community_id: CommunityId, user_id: UserId) -> None:
        self._roles.pop((community_id, user_id), None)
