"""Canonical URL-safe keys for posts."""

from __future__ import annotations

import re

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def normalize_slug(raw: str | None) -> str:
    """
    Map a title-like string to its canonical slug.

    Lower-cases ``raw``, collapses each run of characters outside ``[a-z0-9]``
    into a single dash and trims dashes from both ends. Empty or all-symbol
    input yields ``""``. Idempotent.
    """
    if not raw:
        return ""
    return _NON_ALNUM.sub("-", raw.lower()).strip("-")


__all__ = ["normalize_slug"]
