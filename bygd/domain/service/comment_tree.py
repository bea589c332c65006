"""Comment thread construction.

Turns the flat list of comments on a post into the display tree: thread
roots, each followed by every descendant flattened to a single level.

All functions here are pure. Input comments are never mutated and every
call rebuilds its indexes from scratch.

Threads are identified through parent pointers only:
- A comment is a root if it has no parent, or its parent is not in the set
- Every other comment belongs to the thread of the root its parent chain
  reaches

Parent chains that loop back on themselves never reach a root. Such
comments are treated as orphans and promoted to roots instead of failing.
"""

from collections import defaultdict, deque
from typing import Iterable, Mapping, Sequence

import logfire

from bygd.domain.model.comment import Comment, ThreadNode
from bygd.domain.value import CommentId


def index_by_id(comments: Iterable[Comment]) -> dict[CommentId, Comment]:
    """Map comment id to comment."""
    return {comment.id: comment for comment in comments}


def is_root(comment: Comment, ids: Mapping[CommentId, object] | set[CommentId]) -> bool:
    """Whether a comment starts a thread within the given id set."""
    return comment.parent_id is None or comment.parent_id not in ids


def count_roots(comments: Sequence[Comment]) -> int:
    """Count comments with no parent present in the collection.

    Must be called on the surviving collection after a delete, so that a
    reply whose parent was removed counts as a root of its own.
    """
    ids = {comment.id for comment in comments}
    return sum(1 for comment in comments if is_root(comment, ids))


def build_comment_tree(comments: Sequence[Comment]) -> list[ThreadNode]:
    """Build the one-level display tree for a post's comments.

    Algorithm:
    1. Index comments by position and id
    2. Build adjacency map of parent_id -> [child positions]
    3. Identify roots (no parent, or parent missing from the input)
    4. Collect every transitive descendant of each root into a flat list
    5. Promote comments stuck in parent cycles to roots
    6. Sort children and roots by created_at, input order breaking ties

    Args:
        comments: All comments for one post, in any order

    Returns:
        Thread nodes sorted by root creation time. Each node's children
        are all descendants of the root, oldest first.
    """
    position: dict[CommentId, int] = {}
    for i, comment in enumerate(comments):
        # First occurrence wins on duplicate ids
        position.setdefault(comment.id, i)

    arena = [comments[i] for i in sorted(position.values())]
    position = {comment.id: i for i, comment in enumerate(arena)}

    adjacency: dict[int, list[int]] = defaultdict(list)
    for i, comment in enumerate(arena):
        if not is_root(comment, position):
            adjacency[position[comment.parent_id]].append(i)

    covered: set[int] = set()

    def collect(root: int) -> list[int]:
        covered.add(root)
        found: list[int] = []
        queue = deque(adjacency.get(root, []))
        while queue:
            i = queue.popleft()
            if i in covered:
                continue
            covered.add(i)
            found.append(i)
            queue.extend(adjacency.get(i, []))
        return found

    threads: list[tuple[int, list[int]]] = []
    for i, comment in enumerate(arena):
        if is_root(comment, position):
            threads.append((i, collect(i)))

    if len(covered) < len(arena):
        for i in range(len(arena)):
            if i in covered:
                continue
            root = _cycle_entry(i, arena, position)
            logfire.warn(
                "Comment parent cycle detected, promoting to root",
                comment_id=str(arena[root].id),
            )
            threads.append((root, collect(root)))

    def sort_key(i: int):
        return (arena[i].created_at, i)

    threads.sort(key=lambda thread: sort_key(thread[0]))
    return [
        ThreadNode(
            comment=arena[root],
            children=[arena[i] for i in sorted(children, key=sort_key)],
        )
        for root, children in threads
    ]


def _cycle_entry(
    start: int, arena: Sequence[Comment], position: Mapping[CommentId, int]
) -> int:
    """Find the cycle a parent chain ends in and pick its earliest member.

    Only called for comments whose chain never reaches a root, so every
    step up has a resolvable parent and the walk must revisit a node.
    """
    path: list[int] = []
    seen: dict[int, int] = {}
    current = start
    while current not in seen:
        seen[current] = len(path)
        path.append(current)
        current = position[arena[current].parent_id]
    return min(path[seen[current] :])


def collect_descendant_ids(
    target_id: CommentId, comments: Sequence[Comment]
) -> set[CommentId]:
    """Collect a comment's id together with the ids of all its descendants.

    Repeatedly scans the collection for comments whose parent is already in
    the result, until a full pass adds nothing. Discovery order does not
    matter, so descendants listed before their parents are still found.
    Quadratic in the worst case, which is fine at thread scale.

    Args:
        target_id: Comment being deleted
        comments: The current local collection

    Returns:
        Set containing target_id and every transitive descendant
    """
    ids: set[CommentId] = {target_id}
    changed = True
    while changed:
        changed = False
        for comment in comments:
            if (
                comment.id not in ids
                and comment.parent_id is not None
                and comment.parent_id in ids
            ):
                ids.add(comment.id)
                changed = True
    return ids


def find_root(comment: Comment, index: Mapping[CommentId, Comment]) -> Comment:
    """Walk parent pointers up to the comment that starts the thread.

    Replies are always attached to the thread root, so replying to any
    comment in a thread targets the id returned here.

    If the chain ends in a parent cycle, the cycle member listed first in
    ``index`` is returned, the same comment ``build_comment_tree`` promotes
    to root when given the comments in that order.
    """
    path: list[Comment] = [comment]
    seen: dict[CommentId, int] = {comment.id: 0}
    current = comment
    while current.parent_id is not None and current.parent_id in index:
        if current.parent_id in seen:
            order = {cid: i for i, cid in enumerate(index)}
            cycle = path[seen[current.parent_id] :]
            return index[min((c.id for c in cycle), key=order.__getitem__)]
        current = index[current.parent_id]
        seen[current.id] = len(path)
        path.append(current)
    return current
