import asyncio
import dataclasses
import os, sys
import warnings
from pathlib import Path

import pytest

# Add project root to sys.path for imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

# Ensure required environment variables for config validation
os.environ.setdefault("DISCORD_TOKEN", "test-token")
os.environ.setdefault("HASHNODE_USERNAME", "tester")
os.environ.setdefault("HASHNODE_API_KEY", "test-hashnode")
os.environ.setdefault("ALLOWED_ROLE_ID", "555")

# Silence deprecation warnings surfaced from third-party dependencies during tests
warnings.filterwarnings(
    "ignore", category=DeprecationWarning, module=r"^discord\\.player$"
)
warnings.filterwarnings("ignore", "'audioop' is deprecated", DeprecationWarning)

from ran_bot.memory.cache.post import Post


def pytest_configure(config):
    warnings.filterwarnings(
        "ignore", category=DeprecationWarning, module=r"^discord\\.player$"
    )
    warnings.filterwarnings("ignore", "'audioop' is deprecated", DeprecationWarning)


def make_post(slug: str, updated_at: str | None = None, **overrides) -> Post:
    fields = dict(
        id=f"id-{slug}",
        slug=slug,
        title=slug.replace("-", " ").title(),
        brief=f"About {slug}",
        updated_at=updated_at,
    )
    fields.update(overrides)
    return Post(**fields)


class FakeFetcher:
    """Upstream stand-in returning copies of ``posts``.

    Set ``gate`` to an :class:`asyncio.Event` to hold the fetch open until the
    test releases it, or ``error`` to make the fetch fail.
    """

    def __init__(self, posts=None) -> None:
        self.posts = list(posts or [])
        self.error: BaseException | None = None
        self.gate: asyncio.Event | None = None
        self.started = asyncio.Event()
        self.calls = 0

    async def fetch_all_posts(self):
        self.calls += 1
        self.started.set()
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return [dataclasses.replace(p) for p in self.posts]


async def settle(rounds: int = 10) -> None:
    """Let pending tasks on the loop run."""
    for _ in range(rounds):
        await asyncio.sleep(0)


@pytest.fixture
def post_factory():
    return make_post


@pytest.fixture
def fetcher():
    return FakeFetcher(
        [
            make_post("first-post", "2024-03-01T10:00:00.000Z"),
            make_post("Second Post!", "2024-02-01T10:00:00.000Z"),
        ]
    )


@pytest.fixture
def make_fetcher():
    return FakeFetcher


@pytest.fixture(name="settle")
def settle_fixture():
    return settle
