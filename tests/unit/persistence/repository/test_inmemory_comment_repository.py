"""Unit tests for the in-memory comment repository."""

import pytest

from bygd.persistence.repository.inmemory import InMemoryCommentRepository
from tests.factories import make_comment


@pytest.mark.asyncio
async def test_delete_cascades_to_replies():
    repo = InMemoryCommentRepository()
    root = make_comment(1)
    reply = make_comment(2, parent=root)
    nested = make_comment(3, parent=reply)
    other = make_comment(4, post_id=root.post_id)
    for comment in (root, reply, nested, other):
        await repo.save(comment)

    await repo.delete_comment(root.id)

    assert await repo.list_comments(root.post_id) == [other]


@pytest.mark.asyncio
async def test_scoped_delete_ignores_other_authors():
    repo = InMemoryCommentRepository()
    comment = make_comment(1)
    await repo.save(comment)

    await repo.delete_comment(comment.id, author_id=make_comment().author_id)

    assert await repo.find_by_id(comment.id) == comment
