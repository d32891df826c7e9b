"""Discord bot bootstrap utilities."""

from __future__ import annotations

import logging

import discord
from aiohttp import web
from discord.ext import commands as discord_commands

from ran_bot import commands as rb_commands
from ran_bot.config import core, web as web_cfg
from ran_bot.event_hooks import ready_hook
from ran_bot.runtime import Runtime, build_runtime
from ran_bot.web import create_app, start_server, stop_server

logger = logging.getLogger(__name__)

# --- Intents --------------------------------------------------------------- #
# Slash commands only; no message content or member intents required
intents = discord.Intents.default()


class RanBot(discord_commands.Bot):
    """Moderator bot that owns the posts cache and the HTTP read API."""

    def __init__(self, runtime: Runtime) -> None:
        super().__init__(command_prefix=discord_commands.when_mentioned, intents=intents)
        self.runtime = runtime
        self._web_runner: web.AppRunner | None = None

    async def setup_hook(self) -> None:
        """Register slash commands, synchronise with Discord, and start serving HTTP."""

        await rb_commands.setup(self)

        try:
            synced = await self.tree.sync()
            logger.info("Synced %d application command(s)", len(synced))
        except Exception:
            logger.exception("Failed to sync application commands")

        app = create_app(self.runtime.queries, web_cfg.ALLOWED_ORIGINS)
        self._web_runner = await start_server(app, web_cfg.HOST, web_cfg.PORT)

    async def on_ready(self) -> None:
        await ready_hook.handle(self, self.runtime)

    async def close(self) -> None:
        await self.runtime.scheduler.stop()
        await stop_server(self._web_runner)
        self._web_runner = None
        await super().close()


def run() -> None:
    """Start the Discord bot using configuration from the environment."""

    if not core.DISCORD_TOKEN:
        logger.error("No DISCORD_TOKEN configured. Cannot run client.")
        return

    bot = RanBot(build_runtime())
    try:
        bot.run(core.DISCORD_TOKEN, log_handler=None)
    except discord.LoginFailure as exc:
        logger.error("Login failed: %s", exc)
    except Exception as exc:  # pragma: no cover
        logger.exception("Unexpected error while running client: %s", exc)
