"""PostgREST repository implementations."""

from .comment import PostgrestCommentRepository
from .comment_like import PostgrestCommentLikeRepository
from .community import PostgrestCommunityRepository
from .membership import PostgrestMembershipRepository
from .profile import PostgrestProfileRepository
from .role import PostgrestRoleRepository

__all__ = [
    "PostgrestCommentLikeRepository",
    "PostgrestCommentRepository",
    "PostgrestCommunityRepository",
    "PostgrestMembershipRepository",
    "PostgrestProfileRepository",
    "PostgrestRoleRepository",
]
