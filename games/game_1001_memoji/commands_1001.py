"""
Command handlers for the Memoji memory game (ID: 1001).
"""
import logging
import traceback

from common.config import EPHEMERAL_MESSAGE_DURATION, InvalidConfiguration, load_round_settings
from games.game_1001_memoji.game_1001 import GAME_ID, MemojiGame
from games.game_1001_memoji.ui_1001 import DiscordRenderer

logger = logging.getLogger("memoji_bot")


def create_round(channel, player):
    """Builds a Memoji game wired to a Discord renderer for the given channel.

    Raises:
        InvalidConfiguration: the configured board or duration is unusable.
    """
    alphabet, board_size, round_duration = load_round_settings()
    renderer = DiscordRenderer(channel, player)
    game = MemojiGame(alphabet, board_size, round_duration, renderer=renderer)
    renderer.game = game
    return renderer


async def end_memoji_game_internal(active_games, channel, reason="Round ended."):
    """Stop the round in a channel and clean up its messages.

    Returns:
        bool: True if there was a round to end.
    """
    renderer = active_games.remove(GAME_ID, channel.id)
    if renderer is None:
        return False
    try:
        renderer.game.stop()
        await renderer.close(reason)
        logger.info(f"Memoji round ended in channel {channel.id}: {reason}")
    except Exception as e:
        logger.error(f"Error ending Memoji round: {e}\n{traceback.format_exc()}")
    return True


async def setup_memoji_commands(bot, active_games):
    """Set up the Memoji commands."""
    @bot.hybrid_command(name="memoji", description="Start a Memoji memory round in this channel")
    async def start_round(ctx):
        """Start a Memoji round in this channel."""
        try:
            existing = active_games.get(GAME_ID, ctx.channel.id)
            if existing is not None and not existing.game.is_over:
                await ctx.send("There's already a Memoji round running in this channel. Finish or end it first.")
                return
            if existing is not None:
                await end_memoji_game_internal(active_games, ctx.channel)

            try:
                renderer = create_round(ctx.channel, ctx.author)
            except InvalidConfiguration as e:
                logger.error(f"Invalid Memoji configuration: {e}")
                await ctx.send(f"Memoji is misconfigured: {e}")
                return

            active_games.add(GAME_ID, ctx.channel.id, renderer)
            game = renderer.game
            await ctx.send(
                f"🧠 Memoji round started for {ctx.author.mention}: find {game.pair_count} pairs in "
                f"{game.timer.format_remaining()}! The clock starts on your first card."
            )

            try:
                await renderer.send_initial_messages()
            except Exception as e:
                logger.error(f"Error sending initial game messages: {e}")
                await ctx.channel.send("Error displaying the board. Please try starting a new round.")
                active_games.remove(GAME_ID, ctx.channel.id)
                game.stop()
                return

            logger.info(f"Memoji round started in channel {ctx.channel.id} by {ctx.author.display_name}")

        except Exception as e:
            logger.error(f"Error starting Memoji round: {e}\n{traceback.format_exc()}")
            await ctx.send("Error starting the round. Please try again.")

    @bot.hybrid_command(name="memoji_restart", description="Deal a new board for the Memoji round in this channel")
    async def restart_round(ctx):
        """Deal a new board for the current Memoji round."""
        try:
            renderer = active_games.get(GAME_ID, ctx.channel.id)
            if renderer is None:
                await ctx.send("There's no Memoji round in this channel. Start one with `memoji`.")
                return
            if renderer.player is not None and ctx.author.id != renderer.player.id:
                await ctx.send("Only the player of this round can restart it.")
                return

            await renderer.reset_popup()
            renderer.game.request_restart()
            await ctx.send("🔄 New board dealt!", delete_after=EPHEMERAL_MESSAGE_DURATION)

        except Exception as e:
            logger.error(f"Error restarting Memoji round: {e}\n{traceback.format_exc()}")
            await ctx.send("Error restarting the round. Please try again.")

    @bot.hybrid_command(name="memoji_end", description="End the Memoji round in this channel")
    async def end_round(ctx):
        """End the current Memoji round in this channel."""
        try:
            renderer = active_games.get(GAME_ID, ctx.channel.id)
            if renderer is None:
                await ctx.send("There's no Memoji round in this channel.")
                return
            if renderer.player is not None and ctx.author.id != renderer.player.id:
                await ctx.send("Only the player of this round can end it.")
                return

            await end_memoji_game_internal(active_games, ctx.channel, f"Memoji round ended by {ctx.author.display_name}.")

        except Exception as e:
            logger.error(f"Error ending Memoji round: {e}\n{traceback.format_exc()}")
            await ctx.send("Error ending the round. Please try again.")

    return {
        "memoji": start_round,
        "memoji_restart": restart_round,
        "memoji_end": end_round
    }
