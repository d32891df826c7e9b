"""Authorization predicates for admin slash commands."""

from __future__ import annotations

import logging
from typing import Callable

import discord

logger = logging.getLogger(__name__)

Authorizer = Callable[[discord.Interaction], bool]

DENIED_MESSAGE = "You do not have permission to use this command."


def role_gate(role_id: int) -> Authorizer:
    """Allow callers holding ``role_id``; a zero/unset role denies everyone."""

    def _check(interaction: discord.Interaction) -> bool:
        if not role_id:
            return False
        roles = getattr(interaction.user, "roles", None) or []
        return any(role.id == role_id for role in roles)

    return _check


async def ensure_authorized(interaction: discord.Interaction, authorize: Authorizer) -> bool:
    """Reply with the denial notice and return ``False`` if the caller is not allowed."""
    if authorize(interaction):
        return True

    logger.warning(
        "Denied /%s for user %s",
        getattr(interaction.command, "name", "?"),
        getattr(interaction.user, "id", "unknown"),
    )
    await interaction.response.send_message(DENIED_MESSAGE, ephemeral=True)
    return False


__all__ = ["Authorizer", "role_gate", "ensure_authorized", "DENIED_MESSAGE"]
