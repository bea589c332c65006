"""Domain value objects for bygd.

Value objects are immutable and defined by their values, not identity.
"""

from enum import Enum

from pydantic import field_validator

from bygd.domain.value.common import RootValueObject, ValueObject


class Role(str, Enum):
    """Effective role of a user within one community.

    Only ``moderator`` is ever stored. ``owner`` is derived from the
    community's creator, ``member`` from a membership row and ``guest``
    from its absence.
    """

    OWNER = "owner"
    MODERATOR = "moderator"
    MEMBER = "member"
    GUEST = "guest"


class ModerationAction(str, Enum):
    """Actions checked by the authorization gate."""

    PROMOTE = "promote"
    DEMOTE = "demote"
    REMOVE_MEMBER = "remove_member"
    DELETE_CONTENT = "delete_content"


class MembershipEvent(str, Enum):
    """Events that move a user through the community membership states."""

    JOIN = "join"
    LEAVE = "leave"
    PROMOTE = "promote"
    DEMOTE = "demote"
    REMOVE = "remove"


class ActionStatus(str, Enum):
    """Lifecycle of a single user-triggered action on one entity."""

    IDLE = "idle"
    PENDING = "pending"
    DONE = "done"
    FAILED = "failed"


class CommentContent(RootValueObject[str]):
    """Trimmed, non-empty comment text."""

    @field_validator("root")
    @classmethod
    def validate_content(cls, v: str) -> str:
        """Strip surrounding whitespace and reject empty text."""
        v = v.strip()
        if not v:
            raise ValueError("Comment content cannot be empty")
        if len(v) > 10000:
            raise ValueError("Comment content must be at most 10000 characters")
        return v


class Profile(ValueObject):
    """Display metadata for a user.

    Purely decorative: comments and members render without it.
    """

    display_name: str | None = None
    avatar_url: str | None = None
