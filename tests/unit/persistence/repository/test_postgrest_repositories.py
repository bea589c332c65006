"""Unit tests for PostgREST repositories against a mocked transport."""

from uuid import uuid4

import httpx
import pytest

from bygd.adapter.postgrest import PostgrestClient
from bygd.config import TableSettings
from bygd.domain.error import DataAccessError
from bygd.domain.value import CommentId, CommunityId, PostId, Role, UserId
from bygd.persistence.repository import (
    PostgrestCommentRepository,
    PostgrestCommunityRepository,
    PostgrestRoleRepository,
)


def _client(handler):
    return PostgrestClient(
        "https://bygd.example/rest/v1",
        api_key="anon-key",
        transport=httpx.MockTransport(handler),
    )


def _comment_row(**overrides):
    row = {
        "id": str(uuid4()),
        "post_id": str(uuid4()),
        "user_id": str(uuid4()),
        "content": "Hei",
        "parent_comment_id": None,
        "created_at": "2024-05-01T12:00:00+00:00",
    }
    row.update(overrides)
    return row


class TestCommentRepository:
    """Tests for PostgrestCommentRepository."""

    @pytest.mark.asyncio
    async def test_lists_comments_in_creation_order(self):
        parent = _comment_row()
        reply = _comment_row(post_id=parent["post_id"], parent_comment_id=parent["id"])
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json=[parent, reply])

        repo = PostgrestCommentRepository(_client(handler), TableSettings())

        comments = await repo.list_comments(PostId(uuid4()))

        assert seen[0].url.params["order"] == "created_at.asc"
        assert comments[1].parent_id == comments[0].id
        assert str(comments[0].author_id) == parent["user_id"]

    @pytest.mark.asyncio
    async def test_own_delete_is_scoped_to_author(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(204)

        repo = PostgrestCommentRepository(_client(handler), TableSettings())
        comment_id, author_id = CommentId(uuid4()), UserId(uuid4())

        await repo.delete_comment(comment_id, author_id=author_id)
        await repo.delete_comment(comment_id)

        assert seen[0].url.params["user_id"] == f"eq.{author_id}"
        assert "user_id" not in seen[1].url.params

    @pytest.mark.asyncio
    async def test_backend_rejection_becomes_data_access_error(self):
        def handler(request):
            return httpx.Response(401, json={"message": "JWT expired"})

        repo = PostgrestCommentRepository(_client(handler), TableSettings())

        with pytest.raises(DataAccessError) as exc_info:
            await repo.create_comment(PostId(uuid4()), UserId(uuid4()), "Hei")

        assert exc_info.value.operation == "create_comment"
        assert "JWT expired" in str(exc_info.value)


class TestCommunityRepository:
    """Tests for PostgrestCommunityRepository."""

    @pytest.mark.asyncio
    async def test_member_count_from_exact_count(self):
        community_id = uuid4()
        row = {"id": str(community_id), "name": "Bygda", "created_by": str(uuid4())}

        def handler(request):
            if request.method == "HEAD":
                assert request.url.path.endswith("/bygd_members")
                assert request.url.params["bygd_id"] == f"eq.{community_id}"
                return httpx.Response(200, headers={"Content-Range": "0-6/7"})
            return httpx.Response(200, json=[row])

        repo = PostgrestCommunityRepository(_client(handler), TableSettings())

        community = await repo.find_by_id(CommunityId(community_id))

        assert community.name == "Bygda"
        assert community.member_count == 7

    @pytest.mark.asyncio
    async def test_missing_community(self):
        repo = PostgrestCommunityRepository(
            _client(lambda request: httpx.Response(200, json=[])), TableSettings()
        )

        assert await repo.find_by_id(CommunityId(uuid4())) is None


class TestRoleRepository:
    """Tests for PostgrestRoleRepository."""

    @pytest.mark.asyncio
    async def test_unknown_stored_role_reads_as_member(self):
        repo = PostgrestRoleRepository(
            _client(lambda request: httpx.Response(200, json=[{"role": "admin"}])),
            TableSettings(),
        )

        role = await repo.get_explicit_role(CommunityId(uuid4()), UserId(uuid4()))

        assert role == Role.MEMBER

    @pytest.mark.asyncio
    async def test_upsert_moderator(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(201)

        repo = PostgrestRoleRepository(_client(handler), TableSettings())

        await repo.upsert_moderator_role(CommunityId(uuid4()), UserId(uuid4()))

        assert seen[0].url.path.endswith("/bygd_roles")
        assert seen[0].url.params["on_conflict"] == "bygd_id,user_id"
        assert b'"role":"moderator"' in seen[0].content.replace(b" ", b"")
