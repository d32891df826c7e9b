import logging
import os

logger = logging.getLogger(__name__)


class Core:
    def __init__(self, config: dict | None = None) -> None:
        cfg = (config or {}).get("ranbot", {})
        discord_cfg = cfg.get("discord", {})

        token_env = str(discord_cfg.get("token_env", "DISCORD_TOKEN"))
        self.DISCORD_TOKEN: str | None = os.getenv(token_env)

        # Members holding this role may run admin commands; 0 locks everyone out.
        self.ALLOWED_ROLE_ID: int = int(
            discord_cfg.get("allowed_role_id") or os.getenv("ALLOWED_ROLE_ID", "0")
        )
        if not self.ALLOWED_ROLE_ID:
            logger.warning("ALLOWED_ROLE_ID is not set; admin commands will reject every caller.")

        required = [
            ("DISCORD_TOKEN", self.DISCORD_TOKEN),
        ]
        missing = [name for name, val in required if not val]
        if missing:
            raise ValueError(f"Missing environment variables: {', '.join(missing)}")
