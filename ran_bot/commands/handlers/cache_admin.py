from __future__ import annotations

import logging
from typing import Optional

import discord
from discord import app_commands
from discord.ext import commands

from .. import register_cog
from ..auth import ensure_authorized
from ...admin import POST_ACTIONS

logger = logging.getLogger(__name__)


@register_cog
class CacheAdmin(commands.Cog):
    """
    Moderator commands for the posts cache.

    Covers manual refreshes, the refresh period, per-post visibility and
    pinning, and a status readout. Every command is gated by the runtime's
    authorization predicate.
    """

    def __init__(self, bot: commands.Bot):
        self.bot = bot

    @property
    def runtime(self):
        return self.bot.runtime

    @app_commands.command(name="refresh", description="Manually refresh the posts cache")
    @app_commands.describe(interval="Set the refresh interval in milliseconds")
    async def refresh(
        self, interaction: discord.Interaction, interval: Optional[int] = None
    ) -> None:
        """Refresh now, or change the refresh period when ``interval`` is given."""

        if not await ensure_authorized(interaction, self.runtime.authorize):
            return

        if interval is not None:
            reply = await self.runtime.console.refresh(interval)
            await interaction.response.send_message(reply)
            return

        # Fetching every page can outlast the 3s interaction deadline
        await interaction.response.defer(thinking=True)
        reply = await self.runtime.console.refresh()
        await interaction.followup.send(reply)

    @app_commands.command(
        name="control-posts", description="Control which posts are shown or hidden"
    )
    @app_commands.describe(
        action="Action to perform (show, hide, keep)",
        slug="Slug of the post",
    )
    async def control_posts(
        self, interaction: discord.Interaction, action: str, slug: str
    ) -> None:
        """Show, hide, or pin one cached post."""

        if not await ensure_authorized(interaction, self.runtime.authorize):
            return

        reply = self.runtime.console.control_post(action, slug)
        await interaction.response.send_message(reply)

    @control_posts.autocomplete("action")
    async def _action_autocomplete(
        self, interaction: discord.Interaction, current: str
    ) -> list[app_commands.Choice[str]]:
        return [
            app_commands.Choice(name=action, value=action)
            for action in POST_ACTIONS
            if action.startswith(current.lower())
        ]

    @app_commands.command(
        name="cache-status", description="Show posts cache size, refresh timing, and feature flags"
    )
    async def cache_status(self, interaction: discord.Interaction) -> None:
        if not await ensure_authorized(interaction, self.runtime.authorize):
            return

        await interaction.response.send_message(self.runtime.console.status(), ephemeral=True)
