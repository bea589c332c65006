"""Unit tests for comment thread construction."""

import random
from uuid import uuid4

from bygd.domain.model.comment import Comment
from bygd.domain.service.comment_tree import (
    build_comment_tree,
    collect_descendant_ids,
    count_roots,
    find_root,
    index_by_id,
)
from bygd.domain.value import CommentId
from tests.factories import make_comment


def _scenario():
    a = make_comment(1)
    b = make_comment(2, parent=a)
    c = make_comment(3, parent=b)
    d = make_comment(4, post_id=a.post_id)
    return a, b, c, d


class TestBuildCommentTree:
    """Tests for build_comment_tree."""

    def test_scenario_flattens_thread_under_root(self):
        """Nested replies are listed directly under their root."""
        a, b, c, d = _scenario()

        tree = build_comment_tree([c, d, a, b])

        assert [node.id for node in tree] == [a.id, d.id]
        assert [child.id for child in tree[0].children] == [b.id, c.id]
        assert tree[1].children == []

    def test_every_comment_appears_exactly_once(self):
        """Roots plus flattened children cover the input with no duplicates."""
        post = make_comment(0)
        comments = [post]
        rng = random.Random(7)
        for minute in range(1, 40):
            parent = rng.choice(comments + [None])
            comments.append(
                make_comment(minute, parent=parent, post_id=post.post_id)
            )
        rng.shuffle(comments)

        tree = build_comment_tree(comments)

        seen = [node.id for node in tree]
        for node in tree:
            seen.extend(child.id for child in node.children)
        assert len(seen) == len(set(seen))
        assert set(seen) == {c.id for c in comments}

    def test_children_are_plain_comments(self):
        """Flattening is exactly one level deep."""
        a, b, c, d = _scenario()

        tree = build_comment_tree([a, b, c, d])

        for node in tree:
            assert all(isinstance(child, Comment) for child in node.children)

    def test_roots_and_children_sorted_by_creation_time(self):
        root_late = make_comment(10)
        root_early = make_comment(1, post_id=root_late.post_id)
        reply_late = make_comment(9, parent=root_early)
        reply_early = make_comment(3, parent=reply_late)

        tree = build_comment_tree([root_late, reply_late, root_early, reply_early])

        assert [node.id for node in tree] == [root_early.id, root_late.id]
        created = [child.created_at for child in tree[0].children]
        assert created == sorted(created)

    def test_equal_timestamps_keep_input_order(self):
        first = make_comment(5)
        second = make_comment(5, post_id=first.post_id)

        tree = build_comment_tree([first, second])

        assert [node.id for node in tree] == [first.id, second.id]

    def test_reply_to_missing_parent_is_root(self):
        """A reply whose parent is absent starts its own thread."""
        parent = make_comment(1)
        orphan = make_comment(2, parent=parent)

        tree = build_comment_tree([orphan])

        assert [node.id for node in tree] == [orphan.id]

    def test_build_is_idempotent(self):
        a, b, c, d = _scenario()
        comments = [d, c, b, a]

        assert build_comment_tree(comments) == build_comment_tree(comments)

    def test_input_is_not_mutated(self):
        a, b, c, d = _scenario()
        comments = [a, b, c, d]
        before = [c.model_copy() for c in comments]

        build_comment_tree(comments)

        assert comments == before

    def test_duplicate_ids_keep_first_occurrence(self):
        a = make_comment(1, content="first")
        duplicate = a.model_copy(update={"content": "second"})

        tree = build_comment_tree([a, duplicate])

        assert len(tree) == 1
        assert tree[0].comment.content == "first"

    def test_empty_input(self):
        assert build_comment_tree([]) == []


class TestParentCycles:
    """Malformed parent chains must not hang or drop comments."""

    def test_two_comment_cycle_is_promoted(self):
        first_id, second_id = CommentId(uuid4()), CommentId(uuid4())
        first = make_comment(1, comment_id=first_id)
        first = first.model_copy(update={"parent_id": second_id})
        second = make_comment(2, comment_id=second_id, post_id=first.post_id)
        second = second.model_copy(update={"parent_id": first_id})

        tree = build_comment_tree([first, second])

        assert [node.id for node in tree] == [first_id]
        assert [child.id for child in tree[0].children] == [second_id]

    def test_self_parent_is_promoted(self):
        loop = make_comment(1)
        loop = loop.model_copy(update={"parent_id": loop.id})

        tree = build_comment_tree([loop])

        assert [node.id for node in tree] == [loop.id]
        assert tree[0].children == []

    def test_tail_into_cycle_stays_in_cycle_thread(self):
        x_id, y_id = CommentId(uuid4()), CommentId(uuid4())
        x = make_comment(1, comment_id=x_id).model_copy(update={"parent_id": y_id})
        y = make_comment(2, comment_id=y_id, post_id=x.post_id).model_copy(
            update={"parent_id": x_id}
        )
        tail = make_comment(3, parent=y)
        healthy = make_comment(0, post_id=x.post_id)

        tree = build_comment_tree([tail, healthy, y, x])

        # y comes first in the input, so it heads the promoted thread
        assert [node.id for node in tree] == [healthy.id, y_id]
        assert [child.id for child in tree[1].children] == [x_id, tail.id]

    def test_find_root_terminates_on_cycle(self):
        x_id, y_id = CommentId(uuid4()), CommentId(uuid4())
        x = make_comment(1, comment_id=x_id).model_copy(update={"parent_id": y_id})
        y = make_comment(2, comment_id=y_id).model_copy(update={"parent_id": x_id})

        index = index_by_id([x, y])

        assert find_root(x, index).id == x_id
        assert find_root(y, index).id == x_id


class TestCountRoots:
    """Tests for count_roots."""

    def test_counts_top_level_comments(self):
        a, b, c, d = _scenario()
        assert count_roots([a, b, c, d]) == 2

    def test_reply_with_removed_parent_counts_as_root(self):
        a, b, c, d = _scenario()
        assert count_roots([b, c, d]) == 2

    def test_removing_a_subtree_never_increases_roots(self):
        a, b, c, d = _scenario()
        comments = [a, b, c, d]

        for target in comments:
            removed = collect_descendant_ids(target.id, comments)
            remaining = [x for x in comments if x.id not in removed]
            assert count_roots(remaining) <= count_roots(comments)

    def test_empty(self):
        assert count_roots([]) == 0


class TestCollectDescendantIds:
    """Tests for collect_descendant_ids."""

    def test_collects_whole_subtree(self):
        a, b, c, d = _scenario()

        assert collect_descendant_ids(a.id, [a, b, c, d]) == {a.id, b.id, c.id}

    def test_descendants_listed_before_parents(self):
        a, b, c, d = _scenario()

        assert collect_descendant_ids(a.id, [c, b, d, a]) == {a.id, b.id, c.id}

    def test_leaf_returns_itself(self):
        a, b, c, d = _scenario()

        assert collect_descendant_ids(c.id, [a, b, c, d]) == {c.id}

    def test_deleting_everything_leaves_no_roots(self):
        a = make_comment(1)
        b = make_comment(2, parent=a)
        c = make_comment(3, parent=b)
        comments = [a, b, c]

        removed = collect_descendant_ids(a.id, comments)

        assert removed == {a.id, b.id, c.id}
        assert count_roots([x for x in comments if x.id not in removed]) == 0

    def test_scenario_delete_leaves_single_root(self):
        a, b, c, d = _scenario()
        comments = [a, b, c, d]

        removed = collect_descendant_ids(a.id, comments)
        remaining = [x for x in comments if x.id not in removed]

        assert [node.id for node in build_comment_tree(remaining)] == [d.id]
        assert count_roots(remaining) == 1


class TestFindRoot:
    """Tests for find_root."""

    def test_same_root_from_any_comment_in_thread(self):
        a = make_comment(1)
        b = make_comment(2, parent=a)
        c = make_comment(3, parent=b)
        index = index_by_id([a, b, c])

        assert find_root(c, index).id == a.id
        assert find_root(b, index).id == a.id
        assert find_root(a, index).id == a.id

    def test_stops_at_missing_parent(self):
        a = make_comment(1)
        b = make_comment(2, parent=a)
        c = make_comment(3, parent=b)

        assert find_root(c, index_by_id([b, c])).id == b.id

    def test_cycle_root_matches_promoted_thread_root(self):
        x_id, y_id = CommentId(uuid4()), CommentId(uuid4())
        x = make_comment(1, comment_id=x_id).model_copy(update={"parent_id": y_id})
        y = make_comment(2, comment_id=y_id, post_id=x.post_id).model_copy(
            update={"parent_id": x_id}
        )
        tail = make_comment(3, parent=y)
        comments = [tail, y, x]
        index = index_by_id(comments)

        promoted = build_comment_tree(comments)[0].id

        assert promoted == y_id
        for comment in comments:
            assert find_root(comment, index).id == promoted
