"""
Cached post record.

Identity and content fields come from the upstream source and are replaced on
every refresh. ``visible`` and ``is_pinned`` are cache-local moderator
overrides layered on top.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from .slug import normalize_slug

logger = logging.getLogger(__name__)

NO_DATE = "No date"


def parse_timestamp(raw: str | None) -> datetime | None:
    """Parse an ISO-8601 timestamp, returning ``None`` when absent or malformed."""
    if not raw:
        return None
    try:
        parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except (TypeError, ValueError):
        logger.debug("Unparseable post timestamp %r", raw)
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass
class Post:
    id: str
    slug: str
    title: str
    brief: str
    updated_at: str | None = None
    created_at: str | None = None
    visible: bool = True
    is_pinned: bool = False

    @classmethod
    def from_node(cls, node: dict) -> "Post":
        """Build a post from an upstream GraphQL ``Post`` node."""
        return cls(
            id=str(node["id"]),
            slug=str(node["slug"] or ""),
            title=node.get("title") or "",
            brief=node.get("brief") or "",
            updated_at=node.get("updatedAt"),
            created_at=node.get("createdAt"),
        )

    @property
    def key(self) -> str:
        return normalize_slug(self.slug)

    @property
    def url(self) -> str:
        return f"/ran/{self.key}"

    @property
    def date_label(self) -> str:
        return self.updated_at or self.created_at or NO_DATE

    @property
    def timestamp(self) -> datetime | None:
        return parse_timestamp(self.updated_at or self.created_at)

    def to_dict(self) -> dict:
        """Full JSON representation served by ``/ran`` and ``/ran/{slug}``."""
        payload = {
            "id": self.id,
            "slug": self.slug,
            "title": self.title,
            "brief": self.brief,
            "updatedAt": self.updated_at,
        }
        if self.created_at is not None:
            payload["createdAt"] = self.created_at
        payload["visible"] = self.visible
        payload["isPinned"] = self.is_pinned
        return payload

    def to_summary(self) -> dict:
        """Compact card used by the latest-posts projection."""
        return {
            "id": self.id,
            "title": self.title,
            "summary": self.brief,
            "date": self.date_label,
            "url": self.url,
        }


__all__ = ["Post", "parse_timestamp", "NO_DATE"]
