"""In-memory repository implementations for testing."""

from .comment import InMemoryCommentRepository
from .comment_like import InMemoryCommentLikeRepository
from .community import InMemoryCommunityRepository
from .membership import InMemoryMembershipRepository
from .profile import InMemoryProfileRepository
from .role import InMemoryRoleRepository

__all__ = [
    "InMemoryCommentLikeRepository",
    "InMemoryCommentRepository",
    "InMemoryCommunityRepository",
    "InMemoryMembershipRepository",
    "InMemoryProfileRepository",
    "InMemoryRoleRepository",
]
