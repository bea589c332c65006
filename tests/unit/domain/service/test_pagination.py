"""Unit tests for RootPagination."""

from uuid import uuid4

from bygd.domain.service.pagination import DEFAULT_VISIBLE_ROOTS, RootPagination
from bygd.domain.value import CommentId


class TestWindow:
    """Tests for the visible root window."""

    def test_initial_shows_default_roots(self):
        pagination = RootPagination.initial()

        assert pagination.visible_count == DEFAULT_VISIBLE_ROOTS
        assert pagination.visible_roots(list("abcde")) == ["a", "b"]

    def test_fewer_roots_than_window(self):
        pagination = RootPagination.initial(3)

        assert pagination.effective_count(2) == 2
        assert not pagination.has_overflow(2)
        assert not pagination.can_show_more(2)
        assert not pagination.can_show_less(2)

    def test_show_more_reveals_everything(self):
        pagination = RootPagination.initial().show_more(5)

        assert pagination.effective_count(5) == 5
        assert pagination.can_show_less(5)
        assert not pagination.can_show_more(5)
        assert pagination.shows_all_replies(5)

    def test_show_less_resets_and_collapses(self):
        root = CommentId(uuid4())
        pagination = RootPagination.initial().show_more(5).toggle_replies(root)

        collapsed = pagination.show_less()

        assert collapsed.visible_count == DEFAULT_VISIBLE_ROOTS
        assert collapsed.expanded == frozenset()
        assert collapsed.can_show_more(5)

    def test_zero_roots(self):
        pagination = RootPagination.initial()

        assert pagination.effective_count(0) == 0
        assert pagination.visible_roots([]) == []


class TestReplyDisclosure:
    """Tests for per-thread reply expansion."""

    def test_toggle_replies(self):
        root = CommentId(uuid4())
        pagination = RootPagination.initial()

        opened = pagination.toggle_replies(root)
        closed = opened.toggle_replies(root)

        assert opened.is_expanded(root, 1)
        assert not closed.is_expanded(root, 1)

    def test_full_expansion_opens_every_thread(self):
        pagination = RootPagination.initial().show_more(4)

        assert pagination.is_expanded(CommentId(uuid4()), 4)


class TestAfterChanges:
    """Window adjustments after posting or deleting."""

    def test_new_root_stays_visible(self):
        pagination = RootPagination.initial()

        grown = pagination.after_root_added(3)

        assert grown.visible_count == 3

    def test_first_root_does_not_exceed_total(self):
        grown = RootPagination.initial().after_root_added(1)

        assert grown.effective_count(1) == 1

    def test_removal_clamps_window(self):
        pagination = RootPagination.initial().show_more(5)

        shrunk = pagination.after_removal(3)

        assert shrunk.visible_count == 3

    def test_removal_of_everything_resets_to_default(self):
        shrunk = RootPagination.initial().show_more(5).after_removal(0)

        assert shrunk.visible_count == DEFAULT_VISIBLE_ROOTS

    def test_removal_drops_expanded_ids(self):
        root = CommentId(uuid4())
        pagination = RootPagination.initial().toggle_replies(root)

        shrunk = pagination.after_removal(2, {root})

        assert root not in shrunk.expanded

    def test_operations_return_new_instances(self):
        pagination = RootPagination.initial()

        pagination.show_more(5)

        assert pagination.visible_count == DEFAULT_VISIBLE_ROOTS
