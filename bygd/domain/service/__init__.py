"""Domain services."""

from .authorization import (
    ModerationContext,
    allowed,
    can_delete_content,
    can_demote,
    can_promote,
    can_remove_member,
    denial_reason,
    ensure,
)
from .base import Service
from .comment_service import CommentService
from .comment_tree import (
    build_comment_tree,
    collect_descendant_ids,
    count_roots,
    find_root,
    index_by_id,
)
from .membership_service import MembershipService
from .pagination import DEFAULT_VISIBLE_ROOTS, RootPagination
from .role import can_moderate, resolve_role, transition
from .role_service import RoleService

__all__ = [
    "CommentService",
    "DEFAULT_VISIBLE_ROOTS",
    "MembershipService",
    "ModerationContext",
    "RoleService",
    "RootPagination",
    "Service",
    "allowed",
    "build_comment_tree",
    "can_delete_content",
    "can_demote",
    "can_moderate",
    "can_promote",
    "can_remove_member",
    "collect_descendant_ids",
    "count_roots",
    "denial_reason",
    "ensure",
    "find_root",
    "index_by_id",
    "resolve_role",
    "transition",
]
