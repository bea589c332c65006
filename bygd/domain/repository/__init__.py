"""Store interfaces for the bygd domain.

Interfaces live in the domain layer; implementations live in the
persistence layer and are injected.
"""

from bygd.domain.repository.comment import CommentRepository
from bygd.domain.repository.comment_like import CommentLikeRepository
from bygd.domain.repository.community import CommunityRepository
from bygd.domain.repository.membership import MembershipRepository
from bygd.domain.repository.profile import ProfileRepository
from bygd.domain.repository.role import RoleRepository

__all__ = [
    "CommentLikeRepository",
    "CommentRepository",
    "CommunityRepository",
    "MembershipRepository",
    "ProfileRepository",
    "RoleRepository",
]
