"""Object graph shared by the bot, the command cogs, and the web app."""

from __future__ import annotations

from dataclasses import dataclass

from ran_bot.admin import AdminConsole
from ran_bot.commands.auth import Authorizer, role_gate
from ran_bot.memory.cache.store import PostFetcher, PostStore
from ran_bot.memory.queries import PostQueries
from ran_bot.memory.toggles import FeatureToggles
from ran_bot.scheduler import RefreshScheduler


@dataclass
class Runtime:
    store: PostStore
    scheduler: RefreshScheduler
    toggles: FeatureToggles
    queries: PostQueries
    console: AdminConsole
    authorize: Authorizer


def build_runtime(
    fetcher: PostFetcher | None = None,
    authorize: Authorizer | None = None,
) -> Runtime:
    """
    Assemble the runtime from configuration.

    ``fetcher`` defaults to a :class:`HashnodeClient` for the configured user
    and ``authorize`` to a role gate on ``ALLOWED_ROLE_ID``; tests pass their
    own.
    """
    from ran_bot.config import cache, core, features, hashnode

    if fetcher is None:
        from ran_bot.clients.hashnode import HashnodeClient

        fetcher = HashnodeClient(
            hashnode.ENDPOINT,
            hashnode.USERNAME,
            hashnode.API_KEY,
            page_size=hashnode.PAGE_SIZE,
            timeout=hashnode.TIMEOUT,
        )

    store = PostStore(
        fetcher,
        refresh_interval=cache.REFRESH_INTERVAL,
        preserve_overrides=cache.PRESERVE_OVERRIDES,
    )
    toggles = FeatureToggles(
        api=features.API_ENABLED,
        ran=features.RAN_ENABLED,
        ran_slug=features.RAN_SLUG_ENABLED,
    )
    scheduler = RefreshScheduler(store)
    queries = PostQueries(
        store,
        toggles,
        pin_aware=cache.PIN_AWARE_ORDERING,
        latest_count=cache.LATEST_COUNT,
        page_size=cache.PAGE_SIZE,
    )
    return Runtime(
        store=store,
        scheduler=scheduler,
        toggles=toggles,
        queries=queries,
        console=AdminConsole(store, scheduler, toggles),
        authorize=authorize or role_gate(core.ALLOWED_ROLE_ID),
    )


__all__ = ["Runtime", "build_runtime"]
