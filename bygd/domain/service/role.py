"""Effective role resolution.

The single place where a user's role in a community is derived. Callers
that need to know whether someone may moderate go through resolve_role and
can_moderate; nothing else inspects ``created_by`` or role rows directly.
"""

from typing import Callable, Optional

import logfire

from bygd.domain.error import DataAccessError, InvariantViolation
from bygd.domain.model.community import Community
from bygd.domain.value import CommunityId, MembershipEvent, Role, UserId

ExplicitRoleLookup = Callable[[CommunityId, UserId], Optional[Role]]

MODERATING_ROLES = frozenset({Role.OWNER, Role.MODERATOR})


def resolve_role(
    community: Community,
    user_id: UserId | None,
    is_member: bool,
    explicit_role_lookup: ExplicitRoleLookup,
) -> Role:
    """Resolve a user's effective role in a community.

    Precedence:
    1. The community's creator is the owner, member or not
    2. Anyone without a membership row is a guest
    3. A member with a stored moderator row is a moderator
    4. Every other member is a plain member

    If the role lookup fails the member degrades to ``member``. A failure
    never grants moderator or owner, and a stored row can only ever
    grant moderator.

    Args:
        community: Community being viewed
        user_id: User to resolve, None for an anonymous viewer
        is_member: Whether the user has a membership row
        explicit_role_lookup: Returns the stored role row, or None

    Returns:
        The user's effective role
    """
    if user_id is None:
        return Role.GUEST
    if community.created_by == user_id:
        return Role.OWNER
    if not is_member:
        return Role.GUEST

    try:
        explicit = explicit_role_lookup(community.id, user_id)
    except DataAccessError as e:
        logfire.warn(
            "Could not load explicit role, falling back to member",
            community_id=str(community.id),
            user_id=str(user_id),
            error=str(e),
        )
        return Role.MEMBER

    if explicit == Role.MODERATOR:
        return Role.MODERATOR
    return Role.MEMBER


def can_moderate(role: Role) -> bool:
    """Owners and moderators may moderate; members and guests may not."""
    return role in MODERATING_ROLES


_TRANSITIONS: dict[tuple[Role, MembershipEvent], Role] = {
    (Role.GUEST, MembershipEvent.JOIN): Role.MEMBER,
    (Role.MEMBER, MembershipEvent.PROMOTE): Role.MODERATOR,
    (Role.MODERATOR, MembershipEvent.DEMOTE): Role.MEMBER,
    (Role.MEMBER, MembershipEvent.LEAVE): Role.GUEST,
    (Role.MODERATOR, MembershipEvent.LEAVE): Role.GUEST,
    (Role.MEMBER, MembershipEvent.REMOVE): Role.GUEST,
    (Role.MODERATOR, MembershipEvent.REMOVE): Role.GUEST,
    # Ownership is derived from the community, so joining or leaving
    # never changes it.
    (Role.OWNER, MembershipEvent.JOIN): Role.OWNER,
    (Role.OWNER, MembershipEvent.LEAVE): Role.OWNER,
}


def transition(current: Role, event: MembershipEvent) -> Role:
    """Apply a membership event to a role.

    Raises:
        InvariantViolation: If the event is not valid from the current
            role. No event ever leads to owner.
    """
    try:
        return _TRANSITIONS[(current, event)]
    except KeyError:
        raise InvariantViolation(
            f"Cannot {event.value} a user whose role is {current.value}"
        ) from None
