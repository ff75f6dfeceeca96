"""
UI components for the Memoji memory game (ID: 1001).
"""
import asyncio
import logging
import traceback

import discord

from common.config import (
    BOARD_COLUMNS, CARD_BACK, EPHEMERAL_MESSAGE_DURATION,
    WIN_TEXT, LOSE_TEXT, WIN_BUTTON_TEXT, LOSE_BUTTON_TEXT
)
from games.game_1001_memoji.game_1001 import NullRenderer, RoundOutcome

logger = logging.getLogger("memoji_bot")

CARD_STYLES = {
    "hidden": discord.ButtonStyle.secondary,
    "revealed": discord.ButtonStyle.primary,
    "matched": discord.ButtonStyle.success,
    "mismatched": discord.ButtonStyle.danger,
}


def get_card_style(card):
    """Maps the card state to a button colour."""
    return CARD_STYLES[card.state]


def get_popup_text(win):
    """Returns the spaced-out result title shown in the popup."""
    text = WIN_TEXT if win else LOSE_TEXT
    return " ".join(f"**{char}**" for char in text)


def get_popup_button_text(win):
    return WIN_BUTTON_TEXT if win else LOSE_BUTTON_TEXT


def get_board_embed(game, player=None):
    """Get an embed describing the current round."""
    if game.is_won:
        color = discord.Color.green()
    elif game.is_lost:
        color = discord.Color.red()
    else:
        color = discord.Color.blue()

    embed = discord.Embed(title="Memoji", color=color)
    embed.description = "Find all pairs before the time runs out!"
    embed.add_field(name="⏱️ Time", value=f"`{game.timer.format_remaining()}`", inline=True)
    embed.add_field(name="🎯 Pairs", value=f"{game.matched_pairs}/{game.pair_count}", inline=True)
    if player is not None:
        embed.set_footer(text=f"Round {game.round_number} | Player: {player.display_name}")
    else:
        embed.set_footer(text=f"Round {game.round_number}")
    return embed


class CardButton(discord.ui.Button):
    """A button representing a card on the board."""
    def __init__(self, card, disabled=False):
        super().__init__(
            style=get_card_style(card),
            label=card.get_display(CARD_BACK),
            disabled=disabled or card.matched,
            row=card.index // BOARD_COLUMNS
        )
        self.card_index = card.index

    async def callback(self, interaction):
        view = self.view
        try:
            if view.player is not None and interaction.user.id != view.player.id:
                await interaction.response.send_message("This is not your round!", ephemeral=True)
                return

            await interaction.response.defer()
            view.game.select_card(self.card_index)

        except discord.errors.NotFound:
            logger.warning(f"Interaction or message not found during CardButton callback. User: {interaction.user.id}")
        except Exception as e:
            logger.error(f"Error in card button callback: {e}\n{traceback.format_exc()}")
            if interaction.response.is_done():
                await interaction.followup.send(
                    f"Error processing card: {type(e).__name__}. Please try again.",
                    ephemeral=True
                )


class GameView(discord.ui.View):
    """View that displays one button per card."""
    def __init__(self, game, player=None):
        super().__init__(timeout=None)
        self.game = game
        self.player = player
        for card in game.cards:
            self.add_item(CardButton(card, disabled=game.is_over))

    async def on_error(self, interaction: discord.Interaction, error: Exception, item: discord.ui.Item):
        logger.error(f"Error in GameView item {item}: {error}\n{traceback.format_exc()}")
        if interaction.response.is_done():
            await interaction.followup.send(f"An error occurred with the board: {type(error).__name__}", ephemeral=True)
        else:
            await interaction.response.send_message(f"An error occurred with the board: {type(error).__name__}", ephemeral=True)


class PlayAgainButton(discord.ui.Button):
    """Button on the result popup that deals a new round."""
    def __init__(self, renderer, win):
        super().__init__(
            style=discord.ButtonStyle.success if win else discord.ButtonStyle.primary,
            label=get_popup_button_text(win),
            emoji="🔄"
        )
        self.renderer = renderer

    async def callback(self, interaction):
        try:
            player = self.renderer.player
            if player is not None and interaction.user.id != player.id:
                await interaction.response.send_message(
                    "Only the player of this round can start a new one.",
                    ephemeral=True
                )
                return

            await interaction.response.defer()
            await self.renderer.reset_popup()
            self.renderer.game.request_restart()

        except Exception as e:
            logger.error(f"Error in PlayAgainButton callback: {e}\n{traceback.format_exc()}")
            await interaction.followup.send(
                f"Error starting new round: {type(e).__name__}. Please use the memoji_restart command instead.",
                ephemeral=True
            )


class DiscordRenderer(NullRenderer):
    """Draws a Memoji round as a Discord message with card buttons.

    The game calls the render methods synchronously; message edits are
    scheduled on the event loop and coalesced so at most one edit is in
    flight at a time.
    """
    def __init__(self, channel, player=None):
        self.channel = channel
        self.player = player
        self.game = None
        self.board_message = None
        self.popup_message = None
        self._refresh_task = None
        self._dirty = False
        self._closed = False
        self._popup_task = None

    def render_board(self, game):
        self.game = game
        self.schedule_refresh()

    def render_timer(self, text):
        self.schedule_refresh()

    def render_outcome(self, outcome):
        if self._closed:
            return
        self._popup_task = asyncio.create_task(
            self.show_popup(outcome is RoundOutcome.WON, self.game.round_number)
        )

    def schedule_refresh(self):
        """Marks the board message as stale and makes sure an edit is on its way."""
        if self._closed or self.board_message is None or self.game is None:
            return
        self._dirty = True
        if self._refresh_task is None or self._refresh_task.done():
            self._refresh_task = asyncio.create_task(self._refresh_loop())

    async def _refresh_loop(self):
        while self._dirty:
            self._dirty = False
            await self.update_board()

    async def update_board(self):
        """Edits the board message to match the current game state."""
        try:
            await self.board_message.edit(
                embed=get_board_embed(self.game, self.player),
                view=GameView(self.game, self.player)
            )
        except discord.NotFound:
            logger.warning("Board message not found, creating new one")
            await self.send_initial_messages()
        except Exception as e:
            logger.error(f"Error updating board message: {e}\n{traceback.format_exc()}")

    async def send_initial_messages(self):
        """Send the board message for the current round."""
        try:
            self.board_message = await self.channel.send(
                embed=get_board_embed(self.game, self.player),
                view=GameView(self.game, self.player)
            )
            logger.info(f"Memoji board sent in channel {self.channel.id}")
            return self.board_message
        except Exception as e:
            logger.error(f"Error sending initial messages: {e}\n{traceback.format_exc()}")
            raise

    async def show_popup(self, win, round_number=None):
        """Sends the win/lose popup with a restart button."""
        if round_number is None:
            round_number = self.game.round_number
        try:
            await self.update_board()
            await self.close_popup()
            if self._closed or self.game.round_number != round_number:
                logger.info(f"Skipping popup for round {round_number}, the round is gone")
                return

            view = discord.ui.View(timeout=None)
            view.add_item(PlayAgainButton(self, win))
            embed = discord.Embed(
                title=get_popup_text(win),
                description=f"Pairs found: {self.game.matched_pairs}/{self.game.pair_count}",
                color=discord.Color.green() if win else discord.Color.red()
            )
            self.popup_message = await self.channel.send(embed=embed, view=view)
        except Exception as e:
            logger.error(f"Error showing popup: {e}\n{traceback.format_exc()}")

    async def close_popup(self):
        if self.popup_message is None:
            return
        message, self.popup_message = self.popup_message, None
        try:
            await message.delete()
        except discord.NotFound:
            pass

    async def reset_popup(self):
        """Drops a popup that is still on its way and deletes the one on screen."""
        if self._popup_task is not None and not self._popup_task.done():
            self._popup_task.cancel()
        self._popup_task = None
        await self.close_popup()

    async def close(self, reason=None):
        """Removes the buttons from the board message and closes the popup."""
        self._closed = True
        self._dirty = False
        if self._refresh_task is not None and not self._refresh_task.done():
            self._refresh_task.cancel()
        await self.reset_popup()
        if self.board_message is None:
            return
        try:
            await self.board_message.edit(view=None)
            if reason:
                await self.channel.send(reason, delete_after=EPHEMERAL_MESSAGE_DURATION)
        except discord.NotFound:
            pass
        except Exception as e:
            logger.error(f"Error closing board message: {e}\n{traceback.format_exc()}")
