import os


class Hashnode:
    def __init__(self, config: dict | None = None) -> None:
        hn_cfg = (config or {}).get("ranbot", {}).get("hashnode", {})

        api_key_env = str(hn_cfg.get("api_key_env", "HASHNODE_API_KEY"))
        self.API_KEY: str | None = os.getenv(api_key_env)

        self.ENDPOINT: str = str(
            hn_cfg.get("endpoint", os.getenv("HASHNODE_ENDPOINT", "https://gql.hashnode.com"))
        )
        self.USERNAME: str | None = hn_cfg.get("username") or os.getenv("HASHNODE_USERNAME")

        # Hashnode caps connection pages at 50 items
        self.PAGE_SIZE: int = int(hn_cfg.get("page_size", os.getenv("HASHNODE_PAGE_SIZE", "50")))

        # Upper bound (seconds) for a single page request
        self.TIMEOUT: float = float(hn_cfg.get("timeout", os.getenv("HASHNODE_TIMEOUT", "30")))

        if not self.USERNAME:
            raise ValueError("Missing environment variables: HASHNODE_USERNAME")
