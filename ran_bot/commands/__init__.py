"""
Slash command cogs for moderating the post cache.

Handler modules under ``commands/handlers`` (cache admin, feature switches,
help) decorate their cog with :func:`register_cog` and are imported below.
:func:`setup` attaches them to the bot together with :func:`on_tree_error`.
"""

from __future__ import annotations

import logging
from importlib import import_module
from pathlib import Path
from pkgutil import iter_modules
from typing import List, Optional, Type

import discord
from discord import app_commands
from discord.ext import commands as commands_ext

logger = logging.getLogger(__name__)

_COG_CLASSES: List[Type[commands_ext.Cog]] = []

COMMAND_FAILED_MESSAGE = "Something went wrong while running that command."


def register_cog(cls: Optional[Type[commands_ext.Cog]] = None):
    """Queue an admin cog class for :func:`setup`."""

    def _register(cog_cls: Type[commands_ext.Cog]):
        if not issubclass(cog_cls, commands_ext.Cog):
            raise TypeError("register_cog expects a discord.ext.commands.Cog subclass")

        _COG_CLASSES.append(cog_cls)
        return cog_cls

    if cls is None:
        return _register
    return _register(cls)


async def on_tree_error(
    interaction: discord.Interaction, error: app_commands.AppCommandError
) -> None:
    """Log a failed slash command and tell the caller it did not go through."""

    logger.error(
        "Command /%s failed",
        getattr(interaction.command, "name", "?"),
        exc_info=error,
    )
    if interaction.response.is_done():
        await interaction.followup.send(COMMAND_FAILED_MESSAGE, ephemeral=True)
    else:
        await interaction.response.send_message(COMMAND_FAILED_MESSAGE, ephemeral=True)


async def setup(bot: commands_ext.Bot) -> None:
    """
    Attach registered cogs to ``bot``.

    Cogs expect ``bot.runtime`` (a :class:`ran_bot.runtime.Runtime`) to be set.
    This must be invoked during the bot setup phase (typically inside
    ``commands.Bot.setup_hook``).
    """

    bot.tree.error(on_tree_error)

    for cog_cls in _COG_CLASSES:
        if bot.get_cog(cog_cls.__name__):
            continue
        await bot.add_cog(cog_cls(bot))

    if _COG_CLASSES:
        logger.info("Registered %d command cog(s)", len(_COG_CLASSES))
    else:
        logger.warning("No command cogs discovered; command tree is empty")


_pkg_path = Path(__file__).resolve().parent / "handlers"
for _, modname, _ in iter_modules([str(_pkg_path)]):
    if modname.startswith("_"):
        continue
    import_module(f"{__name__}.handlers.{modname}")


__all__ = [
    "register_cog",
    "setup",
    "on_tree_error",
]
