from .loader import env_flag


class Features:
    def __init__(self, config: dict | None = None) -> None:
        feat_cfg = (config or {}).get("ranbot", {}).get("features", {})

        self.API_ENABLED: bool = bool(feat_cfg.get("api_enabled", env_flag("API_ENABLED", "1")))
        self.RAN_ENABLED: bool = bool(feat_cfg.get("ran_enabled", env_flag("RAN_ENABLED", "1")))
        self.RAN_SLUG_ENABLED: bool = bool(
            feat_cfg.get("ran_slug_enabled", env_flag("RAN_SLUG_ENABLED", "1"))
        )
