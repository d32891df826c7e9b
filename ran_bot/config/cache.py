import os

from .loader import env_flag


class Cache:
    def __init__(self, config: dict | None = None) -> None:
        cache_cfg = (config or {}).get("ranbot", {}).get("cache", {})

        # Seconds between scheduled refreshes (10 minutes by default)
        self.REFRESH_INTERVAL: float = float(
            cache_cfg.get("refresh_interval", os.getenv("REFRESH_INTERVAL", "600"))
        )

        # Carry visible/pinned flags across refreshes instead of wiping them
        self.PRESERVE_OVERRIDES: bool = bool(
            cache_cfg.get("preserve_overrides", env_flag("PRESERVE_OVERRIDES"))
        )

        # Sort pinned posts ahead of the rest in the latest/list projections
        self.PIN_AWARE_ORDERING: bool = bool(
            cache_cfg.get("pin_aware_ordering", env_flag("PIN_AWARE_ORDERING"))
        )

        self.LATEST_COUNT: int = int(cache_cfg.get("latest_count", os.getenv("LATEST_COUNT", "3")))
        self.PAGE_SIZE: int = int(cache_cfg.get("page_size", os.getenv("PAGE_SIZE", "10")))
