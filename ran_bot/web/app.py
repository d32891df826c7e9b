"""
aiohttp application serving the cached posts.

Routes
======
``GET /``             latest posts (API toggle)
``GET /ran``          paginated list, ``?page=N`` (ran toggle)
``GET /ran/{slug}``   single post (ran-slug toggle)

Disabled features answer ``403`` with a plain-text body; unexpected errors are
logged and degrade to ``500`` with a generic message.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Iterable

from aiohttp import web

from ran_bot.errors import FeatureDisabled, PostNotFound
from ran_bot.memory.queries import PostQueries

logger = logging.getLogger(__name__)

QUERIES_KEY = web.AppKey("queries", PostQueries)
ORIGINS_KEY = web.AppKey("allowed_origins", frozenset)

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]

_CORS_HEADERS = {
    "Access-Control-Allow-Methods": "GET, POST",
    "Access-Control-Allow-Headers": "Content-Type",
}


# ----------------------------- Middleware ----------------------------- #


@web.middleware
async def cors_middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
    """Serve requests without an Origin or from an allow-listed origin only."""
    origin = request.headers.get("Origin")
    allowed = request.app[ORIGINS_KEY]

    if origin and "*" not in allowed and origin not in allowed:
        logger.warning("Blocked request from origin %s to %s", origin, request.path)
        return web.Response(status=403, text="Access denied.")

    if request.method == "OPTIONS":
        response: web.StreamResponse = web.Response(status=204)
    else:
        response = await handler(request)

    if origin:
        response.headers["Access-Control-Allow-Origin"] = origin
        response.headers["Vary"] = "Origin"
        response.headers.update(_CORS_HEADERS)
    return response


# ----------------------------- Handlers ----------------------------- #


async def latest_posts(request: web.Request) -> web.StreamResponse:
    queries = request.app[QUERIES_KEY]
    try:
        return web.json_response(queries.latest())
    except FeatureDisabled as exc:
        return web.Response(status=403, text=exc.message)
    except Exception as exc:
        logger.exception("Error fetching data from cache: %s", exc)
        return web.json_response(
            {"error": "Failed to load latest news. Please try again later."}, status=500
        )


async def list_posts(request: web.Request) -> web.StreamResponse:
    queries = request.app[QUERIES_KEY]
    try:
        return web.json_response(queries.page(request.query.get("page")))
    except FeatureDisabled as exc:
        return web.Response(status=403, text=exc.message)
    except Exception as exc:
        logger.exception("Error fetching data from cache: %s", exc)
        return web.json_response(
            {"error": "Failed to load news. Please try again later."}, status=500
        )


async def get_post(request: web.Request) -> web.StreamResponse:
    queries = request.app[QUERIES_KEY]
    slug = request.match_info["slug"]
    try:
        return web.json_response(queries.post(slug))
    except FeatureDisabled as exc:
        return web.Response(status=403, text=exc.message)
    except PostNotFound:
        return web.json_response({"error": "Post not found or is hidden."}, status=404)
    except Exception as exc:
        logger.exception("Error fetching individual post: %s", exc)
        return web.json_response(
            {"error": "Failed to load post. Please try again later."}, status=500
        )


# ----------------------------- Wiring ----------------------------- #


def create_app(queries: PostQueries, allowed_origins: Iterable[str] = ()) -> web.Application:
    app = web.Application(middlewares=[cors_middleware])
    app[QUERIES_KEY] = queries
    app[ORIGINS_KEY] = frozenset(allowed_origins)

    app.router.add_get("/", latest_posts)
    app.router.add_get("/ran", list_posts)
    app.router.add_get("/ran/{slug}", get_post)
    return app


async def start_server(app: web.Application, host: str, port: int) -> web.AppRunner:
    """Start serving ``app`` on the running event loop."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, host, port)
    await site.start()
    logger.info("Server is running on %s:%d", host, port)
    return runner


async def stop_server(runner: web.AppRunner | None) -> None:
    if not runner:
        return
    await runner.cleanup()


__all__ = ["create_app", "start_server", "stop_server", "QUERIES_KEY"]
