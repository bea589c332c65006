"""Client-side discussion state for one post."""

from bygd.application.action import ActionState, action_key

from .registry import DiscussionRegistry
from .session import DiscussionSession
from .state import DiscussionSnapshot, ReplyTarget
from .store import DiscussionStore, FetchToken

__all__ = [
    "ActionState",
    "DiscussionRegistry",
    "DiscussionSession",
    "DiscussionSnapshot",
    "DiscussionStore",
    "FetchToken",
    "ReplyTarget",
    "action_key",
]
