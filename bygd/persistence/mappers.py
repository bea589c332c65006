"""Mappers for converting between backend rows and domain models.

The hosted schema uses its own column names (``user_id`` for the comment
author, ``parent_comment_id``, ``bygd_id``); this module is the only place
that knows them.
"""

from typing import Any, Dict
from uuid import UUID

from bygd.domain.model import Comment, CommentLike, Community, Membership, RoleAssignment
from bygd.domain.value import CommentId, CommunityId, PostId, Profile, Role, UserId


def _uuid(value: Any) -> UUID:
    return value if isinstance(value, UUID) else UUID(str(value))


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert a comments row to a Comment domain model."""
    parent = row.get("parent_comment_id")
    return Comment(
        id=CommentId(_uuid(row["id"])),
        post_id=PostId(_uuid(row["post_id"])),
        author_id=UserId(_uuid(row["user_id"])),
        content=row["content"],
        parent_id=CommentId(_uuid(parent)) if parent else None,
        created_at=row["created_at"],
    )


def comment_insert_row(
    post_id: PostId, author_id: UserId, content: str, parent_id: CommentId | None
) -> Dict[str, Any]:
    return {
        "post_id": str(post_id),
        "user_id": str(author_id),
        "content": content,
        "parent_comment_id": str(parent_id) if parent_id else None,
    }


def row_to_like(row: Dict[str, Any]) -> CommentLike:
    return CommentLike(
        comment_id=CommentId(_uuid(row["comment_id"])),
        user_id=UserId(_uuid(row["user_id"])),
    )


def row_to_community(row: Dict[str, Any]) -> Community:
    """Convert a bygder row to a Community domain model."""
    data = {
        "id": CommunityId(_uuid(row["id"])),
        "name": row["name"],
        "created_by": UserId(_uuid(row["created_by"])),
        "description": row.get("description"),
        "member_count": row.get("member_count") or 0,
    }
    if row.get("created_at"):
        data["created_at"] = row["created_at"]
    return Community(**data)


def row_to_membership(row: Dict[str, Any], community_id: CommunityId) -> Membership:
    data = {"community_id": community_id, "user_id": UserId(_uuid(row["user_id"]))}
    if row.get("joined_at"):
        data["joined_at"] = row["joined_at"]
    return Membership(**data)


def stored_role(value: Any) -> Role:
    """Role named by a bygd_roles row. Unknown values count as plain members."""
    try:
        return Role(value)
    except ValueError:
        return Role.MEMBER


def row_to_role(row: Dict[str, Any], community_id: CommunityId) -> RoleAssignment:
    return RoleAssignment(
        community_id=community_id,
        user_id=UserId(_uuid(row["user_id"])),
        role=stored_role(row["role"]),
    )


def row_to_profile(row: Dict[str, Any]) -> Profile:
    return Profile(
        display_name=row.get("display_name"),
        avatar_url=row.get("avatar_url"),
    )
