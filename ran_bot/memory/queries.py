"""
Read-only projections over the post cache.

Every projection works on a fresh :meth:`PostStore.snapshot`, drops hidden
posts, and checks its feature toggle before touching the cache.
"""

from __future__ import annotations

import math
import re
from datetime import datetime, timezone
from typing import Any, List

from ran_bot.errors import PostNotFound

from .cache.post import Post
from .cache.store import PostStore
from .toggles import Feature, FeatureToggles

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_page(raw: Any) -> int:
    """
    Coerce a ``page`` query value to a 1-indexed page number (default 1).

    Only the leading integer counts, so ``"2.5"`` is page 2 and ``"3abc"`` is
    page 3.
    """
    if raw is None:
        return 1
    match = _LEADING_INT.match(str(raw))
    if not match:
        return 1
    page = int(match.group(1))
    return page if page > 0 else 1


class PostQueries:
    def __init__(
        self,
        store: PostStore,
        toggles: FeatureToggles,
        *,
        pin_aware: bool = False,
        latest_count: int = 3,
        page_size: int = 10,
    ) -> None:
        self._store = store
        self._toggles = toggles
        self.pin_aware = pin_aware
        self.latest_count = latest_count
        self.page_size = page_size

    def _ordered_visible(self) -> List[Post]:
        visible = [post for post in self._store.snapshot() if post.visible is not False]

        def _sort_key(post: Post):
            ts = post.timestamp or _OLDEST
            if self.pin_aware:
                return (post.is_pinned, ts)
            return ts

        return sorted(visible, key=_sort_key, reverse=True)

    def latest(self) -> List[dict]:
        """Newest visible posts as ``{id, title, summary, date, url}`` cards."""
        self._toggles.require(Feature.API)
        return [post.to_summary() for post in self._ordered_visible()[: self.latest_count]]

    def page(self, raw_page: Any = None) -> dict:
        """One page of visible posts plus pagination metadata."""
        self._toggles.require(Feature.RAN)
        page = parse_page(raw_page)
        posts = self._ordered_visible()

        total_posts = len(posts)
        total_pages = math.ceil(total_posts / self.page_size)
        start = (page - 1) * self.page_size
        window = posts[start : start + self.page_size]

        return {
            "posts": [post.to_dict() for post in window],
            "pagination": {
                "currentPage": page,
                "totalPages": total_pages,
                "totalPosts": total_posts,
            },
        }

    def post(self, slug: str) -> dict:
        """The full post under ``slug``; hidden posts are reported as missing."""
        self._toggles.require(Feature.RAN_SLUG)
        post = self._store.get(slug)
        if post.visible is False:
            raise PostNotFound(slug)
        return post.to_dict()


__all__ = ["PostQueries", "parse_page"]
