"""Community (bygd) aggregate with memberships and stored roles."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from bygd.domain.model.common import DomainModel
from bygd.domain.value import CommunityId, Profile, Role, UserId


class Community(DomainModel):
    """A local community feed.

    Exactly one owner, fixed at creation: whoever ``created_by`` names.
    """

    id: CommunityId
    name: str = Field(min_length=1, max_length=200)
    created_by: UserId
    description: Optional[str] = None
    member_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=datetime.now)


class Membership(DomainModel):
    """A user's membership of a community. Unique per (community, user)."""

    community_id: CommunityId
    user_id: UserId
    joined_at: datetime = Field(default_factory=datetime.now)
    profile: Optional[Profile] = None


class RoleAssignment(DomainModel):
    """Explicitly stored role row. Only moderators are ever stored."""

    community_id: CommunityId
    user_id: UserId
    role: Role = Role.MODERATOR


class MemberEntry(DomainModel):
    """A member as shown in the moderation roster, with its effective role."""

    user_id: UserId
    joined_at: datetime
    role: Role
    profile: Optional[Profile] = None


class MemberSummary(DomainModel):
    """Head counts for the moderation roster."""

    total: int = 0
    moderators: int = 0
    owners: int = 0


class MemberRoster(DomainModel):
    """Members of one community in join order, with summary counts."""

    community_id: CommunityId
    members: list[MemberEntry] = Field(default_factory=list)
    summary: MemberSummary = MemberSummary()

    def find(self, user_id: UserId) -> MemberEntry | None:
        return next((m for m in self.members if m.user_id == user_id), None)
