from __future__ import annotations

import discord
from discord import app_commands
from discord.ext import commands

from .. import register_cog
from ..auth import ensure_authorized
from ...memory.toggles import Feature


@register_cog
class FeatureSwitches(commands.Cog):
    """Slash commands that switch the public HTTP routes on and off."""

    def __init__(self, bot: commands.Bot):
        self.bot = bot

    async def _switch(
        self, interaction: discord.Interaction, feature: Feature, enabled: bool
    ) -> None:
        runtime = self.bot.runtime
        if not await ensure_authorized(interaction, runtime.authorize):
            return
        await interaction.response.send_message(runtime.console.set_feature(feature, enabled))

    @app_commands.command(
        name="disable-api", description="Disable the API connection between site and the server"
    )
    async def disable_api(self, interaction: discord.Interaction) -> None:
        await self._switch(interaction, Feature.API, False)

    @app_commands.command(
        name="enable-api", description="Enable the API connection between site and the server"
    )
    async def enable_api(self, interaction: discord.Interaction) -> None:
        await self._switch(interaction, Feature.API, True)

    @app_commands.command(name="disable-ran", description="Disable the /ran page and its routes")
    async def disable_ran(self, interaction: discord.Interaction) -> None:
        await self._switch(interaction, Feature.RAN, False)

    @app_commands.command(name="enable-ran", description="Enable the /ran page and its routes")
    async def enable_ran(self, interaction: discord.Interaction) -> None:
        await self._switch(interaction, Feature.RAN, True)

    @app_commands.command(name="disable-ran-slug", description="Disable the /ran/{slug} page")
    async def disable_ran_slug(self, interaction: discord.Interaction) -> None:
        await self._switch(interaction, Feature.RAN_SLUG, False)

    @app_commands.command(name="enable-ran-slug", description="Enable the /ran/{slug} page")
    async def enable_ran_slug(self, interaction: discord.Interaction) -> None:
        await self._switch(interaction, Feature.RAN_SLUG, True)
