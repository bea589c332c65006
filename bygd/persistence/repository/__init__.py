"""Hosted backend repository implementations."""

from bygd.persistence.repository.postgrest import (
    PostgrestCommentLikeRepository,
    PostgrestCommentRepository,
    PostgrestCommunityRepository,
    PostgrestMembershipRepository,
    PostgrestProfileRepository,
    PostgrestRoleRepository,
)

__all__ = [
    "PostgrestCommentLikeRepository",
    "PostgrestCommentRepository",
    "PostgrestCommunityRepository",
    "PostgrestMembershipRepository",
    "PostgrestProfileRepository",
    "PostgrestRoleRepository",
]
