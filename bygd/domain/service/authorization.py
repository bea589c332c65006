"""Authorization gate for moderation actions.

Every moderation mutation is checked here before any store call is made.
The backend may enforce the same rules again; this layer never relies on
that.

| Action         | Allowed when                                              |
|----------------|-----------------------------------------------------------|
| promote        | actor is owner and target is a member                     |
| demote         | actor is owner and target is a moderator                  |
| remove member  | actor is owner, or moderator removing a plain member;     |
|                | never the owner, never yourself                           |
| delete content | author deleting own content, or actor can moderate        |
"""

from typing import Callable

import logfire

from bygd.domain.error import AuthorizationDenied
from bygd.domain.value import ModerationAction, Role, UserId
from bygd.domain.value.common import ValueObject

from .role import can_moderate


class ModerationContext(ValueObject):
    """Who is acting on whom.

    ``target_is_owner`` comes from the community's creator, not from the
    target's resolved role, so the owner is protected even when a stale
    roster reports another role.
    """

    actor_role: Role
    actor_id: UserId
    target_user_id: UserId
    target_role: Role
    target_is_owner: bool = False

    @property
    def targets_owner(self) -> bool:
        return self.target_is_owner or self.target_role == Role.OWNER

    @property
    def targets_self(self) -> bool:
        return self.actor_id == self.target_user_id


def _promote_denial(ctx: ModerationContext) -> str | None:
    if ctx.targets_owner:
        return "The owner's role cannot be changed."
    if ctx.actor_role != Role.OWNER:
        return "Only the owner can appoint moderators."
    if ctx.target_role != Role.MEMBER:
        return "Only members can be promoted to moderator."
    return None


def _demote_denial(ctx: ModerationContext) -> str | None:
    if ctx.targets_owner:
        return "The owner's role cannot be changed."
    if ctx.actor_role != Role.OWNER:
        return "Only the owner can remove moderators."
    if ctx.target_role != Role.MODERATOR:
        return "Only moderators can be demoted."
    return None


def _remove_denial(ctx: ModerationContext) -> str | None:
    if ctx.targets_owner:
        return "The owner of the community cannot be removed."
    if ctx.targets_self:
        return "You cannot remove yourself; leave the community instead."
    if ctx.target_role == Role.GUEST:
        return "The user is not a member of this community."
    if ctx.actor_role == Role.OWNER:
        return None
    if ctx.actor_role == Role.MODERATOR:
        if ctx.target_role == Role.MEMBER:
            return None
        return "Only the owner can remove other moderators."
    return "You do not have permission to remove members."


def _delete_denial(ctx: ModerationContext) -> str | None:
    if can_delete_content(ctx.actor_role, ctx.actor_id, ctx.target_user_id):
        return None
    return "You can only delete your own posts and comments."


_RULES: dict[ModerationAction, Callable[[ModerationContext], str | None]] = {
    ModerationAction.PROMOTE: _promote_denial,
    ModerationAction.DEMOTE: _demote_denial,
    ModerationAction.REMOVE_MEMBER: _remove_denial,
    ModerationAction.DELETE_CONTENT: _delete_denial,
}


def denial_reason(action: ModerationAction, ctx: ModerationContext) -> str | None:
    """Return why the action is denied, or None if it is allowed."""
    return _RULES[action](ctx)


def allowed(action: ModerationAction, ctx: ModerationContext) -> bool:
    return denial_reason(action, ctx) is None


def ensure(action: ModerationAction, ctx: ModerationContext) -> None:
    """Raise if the action is not allowed.

    Raises:
        AuthorizationDenied: With a human-readable reason
    """
    reason = denial_reason(action, ctx)
    if reason is not None:
        logfire.warn(
            "Moderation action denied",
            action=action.value,
            actor_id=str(ctx.actor_id),
            actor_role=ctx.actor_role.value,
            target_user_id=str(ctx.target_user_id),
            target_role=ctx.target_role.value,
            reason=reason,
        )
        raise AuthorizationDenied(action.value, reason)


def can_promote(ctx: ModerationContext) -> bool:
    return allowed(ModerationAction.PROMOTE, ctx)


def can_demote(ctx: ModerationContext) -> bool:
    return allowed(ModerationAction.DEMOTE, ctx)


def can_remove_member(ctx: ModerationContext) -> bool:
    return allowed(ModerationAction.REMOVE_MEMBER, ctx)


def can_delete_content(actor_role: Role, actor_id: UserId, author_id: UserId) -> bool:
    """Authors may always delete their own content; moderators anyone's."""
    return actor_id == author_id or can_moderate(actor_role)
