"""Exception hierarchy shared by the cache, query, and command layers."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .memory.toggles import Feature


class RanBotError(Exception):
    """Base class for application errors."""


class UpstreamFetchError(RanBotError):
    """Talking to the content source failed (network, status, or payload)."""


class PostNotFound(RanBotError):
    """No visible post is cached under the requested slug."""

    def __init__(self, slug: str) -> None:
        super().__init__(f"Post {slug!r} not found")
        self.slug = slug


class FeatureDisabled(RanBotError):
    """A feature toggle gating the requested projection is switched off."""

    def __init__(self, feature: "Feature", message: str) -> None:
        super().__init__(message)
        self.feature = feature
        self.message = message


class InvalidInput(RanBotError):
    """Malformed admin command arguments."""


__all__ = [
    "RanBotError",
    "UpstreamFetchError",
    "PostNotFound",
    "FeatureDisabled",
    "InvalidInput",
]
