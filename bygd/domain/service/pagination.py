"""Root pagination for a comment thread view.

Only the first few thread roots are shown until the viewer asks for more.
This is display state layered on top of the tree; it never changes which
comments exist.
"""

from typing import Iterable, Sequence, TypeVar

from pydantic import Field

from bygd.domain.model.common import DomainModel
from bygd.domain.value import CommentId

DEFAULT_VISIBLE_ROOTS = 2

T = TypeVar("T")


class RootPagination(DomainModel):
    """How many thread roots are visible, and which have replies expanded.

    Immutable: every operation returns a new instance.
    """

    default_visible: int = Field(default=DEFAULT_VISIBLE_ROOTS, ge=1)
    visible_count: int = Field(default=DEFAULT_VISIBLE_ROOTS, ge=0)
    expanded: frozenset[CommentId] = frozenset()

    @classmethod
    def initial(cls, default_visible: int = DEFAULT_VISIBLE_ROOTS) -> "RootPagination":
        return cls(default_visible=default_visible, visible_count=default_visible)

    def effective_count(self, total: int) -> int:
        """Number of roots actually shown given the current total."""
        if total == 0:
            return 0
        return min(self.visible_count, total) or total

    def visible_roots(self, roots: Sequence[T]) -> list[T]:
        return list(roots[: self.effective_count(len(roots))])

    def has_overflow(self, total: int) -> bool:
        """Whether show-more / show-less controls are offered at all."""
        return total > self.default_visible

    def can_show_more(self, total: int) -> bool:
        return self.has_overflow(total) and self.effective_count(total) < total

    def can_show_less(self, total: int) -> bool:
        return self.has_overflow(total) and self.effective_count(total) == total

    def shows_all_replies(self, total: int) -> bool:
        """Fully expanded view: every root visible and every reply list open."""
        return self.has_overflow(total) and self.visible_count == total

    def is_expanded(self, root_id: CommentId, total: int) -> bool:
        return self.shows_all_replies(total) or root_id in self.expanded

    def show_more(self, total: int) -> "RootPagination":
        return self.model_copy(update={"visible_count": total or self.default_visible})

    def show_less(self) -> "RootPagination":
        """Reset to the default window and collapse every reply disclosure."""
        return self.model_copy(
            update={"visible_count": self.default_visible, "expanded": frozenset()}
        )

    def toggle_replies(self, root_id: CommentId) -> "RootPagination":
        expanded = set(self.expanded)
        if root_id in expanded:
            expanded.discard(root_id)
        else:
            expanded.add(root_id)
        return self.model_copy(update={"expanded": frozenset(expanded)})

    def after_root_added(self, total: int) -> "RootPagination":
        """Keep a newly posted thread visible without hiding existing ones."""
        grown = min(total, max(self.visible_count + 1, self.default_visible))
        return self.model_copy(update={"visible_count": grown})

    def after_removal(
        self, total: int, removed_ids: Iterable[CommentId] = ()
    ) -> "RootPagination":
        """Clamp the window to the surviving roots after a delete."""
        removed = set(removed_ids)
        if total == 0:
            visible = self.default_visible
        else:
            visible = min(self.visible_count, total)
        return self.model_copy(
            update={
                "visible_count": visible,
                "expanded": frozenset(self.expanded - removed),
            }
        )
