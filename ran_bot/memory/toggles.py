"""Process-wide feature switches flipped by moderators."""

from __future__ import annotations

import logging
from enum import Enum

from ran_bot.errors import FeatureDisabled

logger = logging.getLogger(__name__)


class Feature(str, Enum):
    API = "api"
    RAN = "ran"
    RAN_SLUG = "ran-slug"


# Text returned to HTTP callers when the feature is switched off
DISABLED_MESSAGES = {
    Feature.API: "API access is disabled.",
    Feature.RAN: "The /ran page is disabled.",
    Feature.RAN_SLUG: "The /ran/{slug} page is disabled.",
}


class FeatureToggles:
    """Independent on/off flags; not persisted, defaults restored on restart."""

    def __init__(self, *, api: bool = True, ran: bool = True, ran_slug: bool = True) -> None:
        self._flags = {
            Feature.API: api,
            Feature.RAN: ran,
            Feature.RAN_SLUG: ran_slug,
        }

    def is_enabled(self, feature: Feature) -> bool:
        return self._flags[Feature(feature)]

    def set(self, feature: Feature, enabled: bool) -> None:
        feature = Feature(feature)
        self._flags[feature] = enabled
        logger.info("Feature %s %s", feature.value, "enabled" if enabled else "disabled")

    def enable(self, feature: Feature) -> None:
        self.set(feature, True)

    def disable(self, feature: Feature) -> None:
        self.set(feature, False)

    def require(self, feature: Feature) -> None:
        """Raise :class:`FeatureDisabled` unless ``feature`` is on."""
        feature = Feature(feature)
        if not self._flags[feature]:
            raise FeatureDisabled(feature, DISABLED_MESSAGES[feature])

    def as_dict(self) -> dict[str, bool]:
        return {feature.value: enabled for feature, enabled in self._flags.items()}


__all__ = ["Feature", "FeatureToggles", "DISABLED_MESSAGES"]
