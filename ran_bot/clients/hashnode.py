"""
Hashnode GraphQL client.

Pipeline
========
1. POST the posts query for the configured user with ``first=<page size>``
   and, after the first page, ``after=<endCursor>``.
2. Convert each ``edges[].node`` into a :class:`Post`.
3. Repeat until ``pageInfo.hasNextPage`` is false, then return every post in
   upstream order.

Any failure along the way aborts the whole fetch with
:class:`~ran_bot.errors.UpstreamFetchError`; callers never see a partial list.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, List, Tuple

import aiohttp

from ran_bot.errors import UpstreamFetchError
from ran_bot.memory.cache.post import Post

logger = logging.getLogger(__name__)

POSTS_QUERY = """
query UserPosts($username: String!, $first: Int!, $after: String) {
  user(username: $username) {
    publications(first: 1) {
      edges {
        node {
          posts(first: $first, after: $after) {
            edges {
              node {
                id
                title
                brief
                slug
                updatedAt
              }
            }
            pageInfo {
              hasNextPage
              endCursor
            }
          }
        }
      }
    }
  }
}
"""


def parse_posts_page(payload: dict) -> Tuple[List[Post], bool, str | None]:
    """
    Extract ``(posts, has_next_page, end_cursor)`` from one GraphQL response.

    :raises UpstreamFetchError: if the payload carries GraphQL errors or does
        not have the expected shape.
    """
    if not isinstance(payload, dict):
        raise UpstreamFetchError(f"Malformed Hashnode response: {type(payload).__name__}")
    errors = payload.get("errors")
    if errors:
        if not isinstance(errors, list):
            errors = [errors]
        messages = "; ".join(
            str(err.get("message", err) if isinstance(err, dict) else err) for err in errors
        )
        raise UpstreamFetchError(f"Hashnode returned errors: {messages}")

    try:
        user = payload["data"]["user"]
        if user is None:
            raise UpstreamFetchError("Hashnode user not found")
        publications = user["publications"]["edges"]
        if not publications:
            raise UpstreamFetchError("Hashnode user has no publication")
        connection = publications[0]["node"]["posts"]
        posts = [Post.from_node(edge["node"]) for edge in connection["edges"]]
        page_info = connection["pageInfo"]
        return posts, bool(page_info["hasNextPage"]), page_info.get("endCursor")
    except (KeyError, IndexError, TypeError, AttributeError) as exc:
        raise UpstreamFetchError(f"Malformed Hashnode response: {exc!r}") from exc


class HashnodeClient:
    """Fetch every post of one Hashnode user, page by page."""

    def __init__(
        self,
        endpoint: str,
        username: str,
        api_key: str | None = None,
        *,
        page_size: int = 50,
        timeout: float = 30.0,
    ) -> None:
        self.endpoint = endpoint
        self.username = username
        self.page_size = page_size
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._headers = {"Content-Type": "application/json"}
        if api_key:
            self._headers["Authorization"] = f"Bearer {api_key}"

    async def _request_page(
        self, session: aiohttp.ClientSession, cursor: str | None
    ) -> dict:
        variables: dict[str, Any] = {"username": self.username, "first": self.page_size}
        if cursor:
            variables["after"] = cursor

        async with session.post(
            self.endpoint,
            json={"query": POSTS_QUERY, "variables": variables},
            headers=self._headers,
        ) as resp:
            resp.raise_for_status()
            return await resp.json()

    async def fetch_all_posts(self) -> List[Post]:
        """
        Collect the complete post list.

        :raises UpstreamFetchError: on network errors, timeouts, HTTP errors,
            or malformed payloads.
        """
        all_posts: List[Post] = []
        cursor: str | None = None
        seen_cursors: set[str] = set()

        try:
            async with aiohttp.ClientSession(timeout=self._timeout) as session:
                while True:
                    payload = await self._request_page(session, cursor)
                    posts, has_next, next_cursor = parse_posts_page(payload)
                    all_posts.extend(posts)
                    logger.debug(
                        "Fetched %d posts (cursor=%s, has_next=%s)", len(posts), cursor, has_next
                    )
                    if not has_next:
                        break
                    if not next_cursor or next_cursor in seen_cursors:
                        raise UpstreamFetchError(
                            f"Hashnode reported more pages without a new cursor (got {next_cursor!r})"
                        )
                    seen_cursors.add(next_cursor)
                    cursor = next_cursor
        except UpstreamFetchError:
            raise
        except asyncio.TimeoutError as exc:
            raise UpstreamFetchError("Timed out fetching posts from Hashnode") from exc
        except (aiohttp.ClientError, ValueError) as exc:
            raise UpstreamFetchError(f"Error fetching data from Hashnode: {exc}") from exc

        logger.info("Fetched %d posts from Hashnode", len(all_posts))
        return all_posts


__all__ = ["HashnodeClient", "parse_posts_page", "POSTS_QUERY"]
