"""
Moderator operations behind the slash commands.

Each method performs one admin action and returns the reply text for the
caller. Expected failures (unknown post, bad arguments) become rejection
replies; nothing here raises for user error.
"""

from __future__ import annotations

import logging

from ran_bot.errors import InvalidInput
from ran_bot.memory.cache.store import PostStore
from ran_bot.memory.toggles import Feature, FeatureToggles
from ran_bot.scheduler import RefreshScheduler

logger = logging.getLogger(__name__)

POST_ACTIONS = ("show", "hide", "keep")

_FEATURE_REPLIES = {
    (Feature.API, True): "API access has been enabled.",
    (Feature.API, False): "API access has been disabled.",
    (Feature.RAN, True): "The /ran page and its routes are now enabled.",
    (Feature.RAN, False): "The /ran page and its routes are now disabled.",
    (Feature.RAN_SLUG, True): "The /ran/{slug} page is now enabled.",
    (Feature.RAN_SLUG, False): "The /ran/{slug} page is now disabled.",
}


class AdminConsole:
    def __init__(
        self,
        store: PostStore,
        scheduler: RefreshScheduler,
        toggles: FeatureToggles,
    ) -> None:
        self._store = store
        self._scheduler = scheduler
        self._toggles = toggles

    async def refresh(self, interval_ms: int | None = None) -> str:
        """Reconfigure the refresh period, or refresh right away when no period is given."""
        if interval_ms is not None:
            try:
                self._scheduler.reconfigure(interval_ms / 1000)
            except InvalidInput as exc:
                logger.info("refresh rejected: %s", exc)
                return f"Invalid interval: {exc}"
            return f"Refresh interval set to {interval_ms}ms."

        if await self._scheduler.trigger():
            return "Posts cache has been manually refreshed."
        return "Refresh failed; the previous posts cache is still being served."

    def set_feature(self, feature: Feature, enabled: bool) -> str:
        feature = Feature(feature)
        self._toggles.set(feature, enabled)
        return _FEATURE_REPLIES[(feature, enabled)]

    def control_post(self, action: str, slug: str) -> str:
        """Apply ``show``, ``hide`` or ``keep`` to the cached post under ``slug``."""
        action = (action or "").strip().lower()
        if slug not in self._store:
            logger.info("control-posts rejected: no cached post %r", slug)
            return "Post not found."

        if action == "hide":
            self._store.set_visibility(slug, False)
        elif action == "show":
            self._store.set_visibility(slug, True)
        elif action == "keep":
            self._store.set_pinned(slug)
        else:
            return "Invalid action. Use show, hide, or keep."

        return f"Post with slug {slug} has been updated: {action}."

    def status(self) -> str:
        last = self._store.last_updated
        last_text = last.strftime("%Y-%m-%d %H:%M:%S UTC") if last else "never"
        flags = ", ".join(
            f"{name}={'on' if enabled else 'off'}" for name, enabled in self._toggles.as_dict().items()
        )
        return (
            f"Cached posts: {len(self._store)} | Last refresh: {last_text} | "
            f"Interval: {int(self._scheduler.interval * 1000)}ms | "
            f"Scheduler: {self._scheduler.state} | Features: {flags}"
        )


__all__ = ["AdminConsole", "POST_ACTIONS"]
