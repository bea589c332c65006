"""Open discussions, one store per post and viewer."""

from typing import Optional

import logfire

from bygd.config import CommentSettings
from bygd.domain.error import AuthorizationDenied, NotFoundError
from bygd.domain.service.pagination import RootPagination
from bygd.domain.value import CommunityId, PostId, UserId

from .store import DiscussionStore

StoreKey = tuple[PostId, Optional[UserId]]


class DiscussionRegistry:
    """Keeps each viewer's discussion state alive between requests.

    A store is bound to the community named when it was first opened.
    Later requests may omit the community, but may not name another one,
    so the viewer's role is always resolved in the post's own community.
    """

    def __init__(self, settings: CommentSettings) -> None:
        self.settings = settings
        self._stores: dict[StoreKey, DiscussionStore] = {}

    def open(
        self,
        post_id: PostId,
        viewer_id: Optional[UserId],
        community_id: Optional[CommunityId] = None,
    ) -> DiscussionStore:
        """Get the store for a post, creating it with the default window.

        Raises:
            AuthorizationDenied: If the post's store is bound to another
                community
        """
        key = (post_id, viewer_id)
        store = self._stores.get(key)
        if store is None:
            store = DiscussionStore(
                post_id,
                RootPagination.initial(self.settings.default_visible_roots),
                community_id=community_id,
            )
            self._stores[key] = store
            return store
        _check_community(store, community_id)
        return store

    def get(
        self,
        post_id: PostId,
        viewer_id: Optional[UserId],
        community_id: Optional[CommunityId] = None,
    ) -> DiscussionStore:
        """Get the store of a discussion that was already loaded.

        Raises:
            NotFoundError: If the discussion was never opened
            AuthorizationDenied: If a community other than the post's is named
        """
        store = self._stores.get((post_id, viewer_id))
        if store is None:
            raise NotFoundError("Discussion", str(post_id))
        _check_community(store, community_id)
        return store

    def close(self, post_id: PostId, viewer_id: Optional[UserId]) -> None:
        self._stores.pop((post_id, viewer_id), None)

    def __len__(self) -> int:
        return len(self._stores)


def _check_community(
    store: DiscussionStore, community_id: Optional[CommunityId]
) -> None:
    if community_id is None or community_id == store.community_id:
        return
    logfire.warn(
        "Community does not match discussion",
        post_id=str(store.snapshot.post_id),
        bound=str(store.community_id) if store.community_id else None,
        requested=str(community_id) if community_id else None,
    )
    raise AuthorizationDenied(
        "discussion", "This post does not belong to that community."
    )
