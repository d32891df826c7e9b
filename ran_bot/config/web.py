import os
from typing import List


def _split_origins(raw: str) -> List[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


class Web:
    def __init__(self, config: dict | None = None) -> None:
        web_cfg = (config or {}).get("ranbot", {}).get("http", {})

        self.HOST: str = str(web_cfg.get("host", os.getenv("HOST", "0.0.0.0")))
        self.PORT: int = int(web_cfg.get("port", os.getenv("PORT", "3000")))

        # Browser origins allowed to call the API; "*" allows any origin.
        # Requests without an Origin header are always served.
        origins_cfg = web_cfg.get("allowed_origins")
        if origins_cfg is not None:
            self.ALLOWED_ORIGINS: List[str] = [str(o) for o in origins_cfg]
        else:
            self.ALLOWED_ORIGINS = _split_origins(os.getenv("ALLOWED_ORIGINS", ""))
