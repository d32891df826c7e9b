import logging

import discord

from ran_bot.runtime import Runtime

logger = logging.getLogger(__name__)


async def handle(client: discord.Client, runtime: Runtime):
    """Warm the posts cache and start periodic refreshes once logged in."""
    logger.info(f"Logged in as {client.user.name} (ID: {client.user.id})")

    if runtime.scheduler.running:
        logger.info("Refresh scheduler already running (reconnect); nothing to do")
        return

    # Initial refresh failures are logged by the store; the loop retries on the next tick
    await runtime.scheduler.start(run_immediately=True)
