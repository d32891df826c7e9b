from __future__ import annotations

import discord
from discord import app_commands
from discord.ext import commands

from .. import register_cog


@register_cog
class Help(commands.Cog):
    """List the moderator slash commands."""

    def __init__(self, bot: commands.Bot):
        self.bot = bot

    @app_commands.command(name="help", description="List available slash commands.")
    async def help(self, interaction: discord.Interaction) -> None:
        """
        Send each registered slash command with its description to the caller.
        """

        commands_ = sorted(self.bot.tree.get_commands(), key=lambda cmd: cmd.name)
        if not commands_:
            listing = "None registered"
        else:
            listing = "\n".join(
                f"/{cmd.name}: {getattr(cmd, 'description', '')}" for cmd in commands_
            )
        await interaction.response.send_message(
            f"Available commands:\n{listing}", ephemeral=True
        )
