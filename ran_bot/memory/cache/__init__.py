"""
Post cache package.

Modules
=======

``store``
    Defines :class:`~ran_bot.memory.cache.store.PostStore`, the keyed post
    collection with rebuild-then-swap refreshes, coalesced concurrent
    refreshes, and moderator overrides.
``post``
    The :class:`~ran_bot.memory.cache.post.Post` record plus timestamp parsing
    and the JSON projections served over HTTP.
``slug``
    :func:`~ran_bot.memory.cache.slug.normalize_slug`, the canonical key
    function shared by the store, URLs, and lookups.
"""

from .post import Post
from .slug import normalize_slug
from .store import PostStore

__all__ = ["Post", "PostStore", "normalize_slug"]
