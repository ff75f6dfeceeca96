"""
Help command for the Memoji bot.
"""
import logging

import discord

from common.config import ROUND_DURATION_SECONDS
from common.utils.game_utils import GAME_IDS

logger = logging.getLogger("memoji_bot")


class HelpView(discord.ui.View):
    def __init__(self, ctx, command_prefix):
        super().__init__(timeout=60)
        self.ctx = ctx
        self.command_prefix = command_prefix
        self.message = None

    @discord.ui.select(
        placeholder="Select a topic",
        options=[
            discord.SelectOption(label="Overview", value="overview", description="General bot overview", default=True),
            discord.SelectOption(label="Memoji", value="1001", description="Memoji rules and commands"),
        ]
    )
    async def help_select(self, interaction: discord.Interaction, select: discord.ui.Select):
        """Handle selection of help topic."""
        selection = select.values[0]
        if selection == "overview":
            embed = create_overview_embed(self.command_prefix)
        else:
            embed = create_game_help_embed(selection, self.command_prefix)
        await interaction.response.edit_message(embed=embed, view=self)

    async def on_timeout(self):
        """Disable the view when it times out."""
        for item in self.children:
            item.disabled = True
        if self.message is None:
            return
        try:
            await self.message.edit(view=self)
        except discord.HTTPException as e:
            logger.warning(f"Could not disable help menu: {e}")


def create_overview_embed(command_prefix):
    """Create an overview embed for the bot."""
    embed = discord.Embed(
        title="Memoji Help",
        description="Flip cards, remember the emojis and find every pair before the clock runs out.",
        color=discord.Color.blue()
    )
    embed.add_field(
        name="Quick Start",
        value=(
            f"Start a round with `{command_prefix}memoji`.\n"
            f"Select **Memoji** from the dropdown for the rules."
        ),
        inline=False
    )
    embed.set_footer(text="Select a topic from the dropdown for more information")
    return embed


def create_game_help_embed(game_id, command_prefix):
    """Create a help embed for a specific game."""
    game_name = GAME_IDS.get(game_id, "Unknown Game")

    embed = discord.Embed(
        title=f"{game_name} Help",
        color=discord.Color.blue()
    )
    embed.description = "Match all pairs of emojis before the time runs out."
    embed.add_field(
        name="How to Play",
        value=(
            "1. Click a card to turn it over. The first click starts the clock\n"
            "2. Click a second card: if both show the same emoji they stay open\n"
            "3. A wrong pair is shown in red until your next click turns it back\n"
            f"4. Find every pair within {ROUND_DURATION_SECONDS} seconds to win"
        ),
        inline=False
    )
    embed.add_field(
        name="Commands",
        value=(
            f"`{command_prefix}memoji` - Start a round in this channel\n"
            f"`{command_prefix}memoji_restart` - Deal a new board\n"
            f"`{command_prefix}memoji_end` - End the current round\n"
            f"`{command_prefix}help` - Show this help menu"
        ),
        inline=False
    )
    return embed


async def setup_help_command(bot):
    """Set up the help command."""

    @bot.hybrid_command(name="help", description="Show how to play Memoji")
    async def help_cmd(ctx):
        """Show help information about Memoji."""
        try:
            view = HelpView(ctx, bot.command_prefix)
            embed = create_overview_embed(bot.command_prefix)
            view.message = await ctx.send(embed=embed, view=view)
        except Exception as e:
            logger.error(f"Error showing help: {e}")
            await ctx.send("Error showing help. Please try again.")

    return {"help": help_cmd}
