"""Strongly typed identifiers for bygd entities.

Using NewType keeps comment, post, user and community ids from being mixed
up while staying plain UUIDs at runtime.
"""

from typing import NewType
from uuid import UUID

CommentId = NewType("CommentId", UUID)
PostId = NewType("PostId", UUID)
UserId = NewType("UserId", UUID)
CommunityId = NewType("CommunityId", UUID)
