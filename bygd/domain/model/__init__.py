"""Domain model entities for bygd."""

from bygd.domain.model.comment import Comment, CommentLike, LikeSummary, ThreadNode
from bygd.domain.model.community import (
    Community,
    MemberEntry,
    MemberRoster,
    MemberSummary,
    Membership,
    RoleAssignment,
)

__all__ = [
    "Comment",
    "CommentLike",
    "Community",
    "LikeSummary",
    "MemberEntry",
    "MemberRoster",
    "MemberSummary",
    "Membership",
    "RoleAssignment",
    "ThreadNode",
]
