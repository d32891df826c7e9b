"""
Keyed post cache rebuilt from the upstream source.

The store owns a ``dict`` mapping normalized slug -> :class:`Post`. A refresh
builds a complete replacement collection off to the side and installs it with
a single reference assignment, so readers on the event loop only ever see the
previous generation or the next one. Concurrent refresh requests coalesce onto
the one already in flight.
"""

from __future__ import annotations

import asyncio
import dataclasses
import logging
from datetime import datetime, timezone
from typing import Protocol, Sequence

from ran_bot.errors import PostNotFound, UpstreamFetchError

from .post import Post
from .slug import normalize_slug

logger = logging.getLogger(__name__)


class PostFetcher(Protocol):
    async def fetch_all_posts(self) -> Sequence[Post]: ...


class PostStore:
    """In-memory post cache with moderator overrides."""

    def __init__(
        self,
        fetcher: PostFetcher,
        *,
        refresh_interval: float = 600.0,
        preserve_overrides: bool = False,
    ) -> None:
        self._fetcher = fetcher
        self._posts: dict[str, Post] = {}
        self._last_updated: datetime | None = None
        self._inflight: asyncio.Task[bool] | None = None
        self.preserve_overrides = preserve_overrides
        self.refresh_interval = refresh_interval

    # ------------------------------------------------------------------ #
    # STATE
    # ------------------------------------------------------------------ #

    @property
    def last_updated(self) -> datetime | None:
        return self._last_updated

    @property
    def refresh_interval(self) -> float:
        return self._refresh_interval

    @refresh_interval.setter
    def refresh_interval(self, seconds: float) -> None:
        if seconds <= 0:
            raise ValueError("refresh_interval must be > 0")
        self._refresh_interval = float(seconds)

    @property
    def refreshing(self) -> bool:
        return self._inflight is not None and not self._inflight.done()

    def __len__(self) -> int:
        return len(self._posts)

    def __contains__(self, slug: str) -> bool:
        return normalize_slug(slug) in self._posts

    # ------------------------------------------------------------------ #
    # REFRESH
    # ------------------------------------------------------------------ #

    async def refresh(self) -> bool:
        """
        Rebuild the cache from upstream.

        Returns ``True`` when a new collection was installed and ``False`` when
        the fetch failed (the previous collection stays in place). A call made
        while another refresh is running waits for that refresh and shares its
        result rather than fetching again.
        """
        if self._inflight is None or self._inflight.done():
            self._inflight = asyncio.create_task(self._run_refresh())
        else:
            logger.info("Refresh already in progress; joining it")
        # Cancelling a waiter must not abort the shared refresh
        return await asyncio.shield(self._inflight)

    async def _run_refresh(self) -> bool:
        logger.info("Refreshing posts cache...")
        try:
            posts = await self._fetcher.fetch_all_posts()
        except UpstreamFetchError as exc:
            logger.error("Error refreshing posts cache: %s", exc)
            return False
        except Exception:
            logger.exception("Unexpected error refreshing posts cache")
            return False

        rebuilt = self._build(posts)
        # Single assignment: readers see either the old or the new generation
        self._posts = rebuilt
        self._last_updated = datetime.now(timezone.utc)
        logger.info("Posts cache refreshed (%d posts).", len(rebuilt))
        return True

    def _build(self, posts: Sequence[Post]) -> dict[str, Post]:
        previous = self._posts
        rebuilt: dict[str, Post] = {}
        for post in posts:
            key = post.key
            if not key:
                logger.warning("Skipping post %s: slug %r has no usable characters", post.id, post.slug)
                continue
            if key in rebuilt:
                logger.debug("Duplicate slug key %s; keeping the later post %s", key, post.id)
            if self.preserve_overrides and key in previous:
                old = previous[key]
                post.visible = old.visible
                post.is_pinned = old.is_pinned
            rebuilt[key] = post
        return rebuilt

    # ------------------------------------------------------------------ #
    # OVERRIDES
    # ------------------------------------------------------------------ #

    def _live(self, slug: str) -> Post:
        try:
            return self._posts[normalize_slug(slug)]
        except KeyError as exc:
            raise PostNotFound(slug) from exc

    def set_visibility(self, slug: str, visible: bool) -> None:
        """Show or hide the cached post under ``slug``."""
        post = self._live(slug)
        post.visible = visible
        logger.info("Post %s visibility set to %s", post.key, visible)

    def set_pinned(self, slug: str, pinned: bool = True) -> None:
        """Mark the cached post under ``slug`` as pinned."""
        post = self._live(slug)
        post.is_pinned = pinned
        logger.info("Post %s pinned=%s", post.key, pinned)

    # ------------------------------------------------------------------ #
    # READ helpers
    # ------------------------------------------------------------------ #

    def get(self, slug: str) -> Post:
        """Return a copy of the post under ``slug`` regardless of visibility."""
        return dataclasses.replace(self._live(slug))

    def snapshot(self) -> list[Post]:
        """Return copies of every cached post from a single generation."""
        posts = self._posts
        return [dataclasses.replace(post) for post in posts.values()]


__all__ = ["PostStore", "PostFetcher"]
