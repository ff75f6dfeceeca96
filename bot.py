"""
Discord bot hosting Memoji memory rounds.
"""
import os
import asyncio
import discord
import logging
import traceback
import sys
from discord.ext import commands
from dotenv import load_dotenv

# Custom log formatter that safely handles emojis
class SafeFormatter(logging.Formatter):
    def format(self, record):
        try:
            return super().format(record)
        except UnicodeEncodeError:
            record.msg = str(record.msg).encode('utf-8', 'replace').decode('utf-8')
            if hasattr(record, 'args') and record.args:
                record.args = tuple(
                    str(arg).encode('utf-8', 'replace').decode('utf-8')
                    if isinstance(arg, str) else arg
                    for arg in record.args
                )
            return super().format(record)

from common.config import COMMAND_PREFIX
from common.utils.game_utils import ActiveGames, GAME_IDS
from common.commands.help import setup_help_command
from games.game_1001_memoji.commands_1001 import setup_memoji_commands

# Setup logging
file_handler = logging.FileHandler("memoji_bot.log", encoding='utf-8')
console_handler = logging.StreamHandler(sys.stdout)

formatter = SafeFormatter('%(asctime)s [%(levelname)s] %(message)s')
file_handler.setFormatter(formatter)
console_handler.setFormatter(formatter)

logging.basicConfig(
    level=os.getenv("MEMOJI_LOG_LEVEL", "INFO").upper(),
    format='%(asctime)s [%(levelname)s] %(message)s',
    handlers=[
        file_handler,
        console_handler
    ]
)
logger = logging.getLogger("memoji_bot")

# Load environment variables
load_dotenv()
TOKEN = os.getenv("DISCORD_BOT_TOKEN")

# Setup intents
intents = discord.Intents.default()
intents.message_content = True

# Create bot
bot = commands.Bot(command_prefix=COMMAND_PREFIX, intents=intents, help_command=None)

# Rounds owned by this bot, one per channel
active_games = ActiveGames()

# Error handler
@bot.event
async def on_error(event, *args, **kwargs):
    error_type, error_value, error_traceback = sys.exc_info()

    error_msg = f"Error in {event}: {error_type.__name__}: {error_value}\n"
    error_msg += "".join(traceback.format_tb(error_traceback))

    logger.error(error_msg)

@bot.event
async def on_command_error(ctx, error):
    error_msg = f"Command '{ctx.command}' error for {ctx.author} in {ctx.channel}: {error}"
    logger.error(error_msg)

    try:
        if isinstance(error, commands.CommandNotFound):
            return
        if isinstance(error, commands.CommandInvokeError):
            await ctx.send(f"Error executing command: {error.original.__class__.__name__}. Check logs for details.", delete_after=5.0)
        else:
            await ctx.send(f"Command error: {error.__class__.__name__}. Check logs for details.", delete_after=5.0)
    except discord.HTTPException as e:
        logger.warning(f"Could not report command error: {e}")

@bot.event
async def on_ready():
    """When the bot is ready."""
    logger.info(f"Logged in as {bot.user.name} (ID: {bot.user.id})")
    logger.info(f"Discord.py version: {discord.__version__}")

    await bot.change_presence(activity=discord.Game(name=" & ".join(GAME_IDS.values())))

@bot.command(name="sync", description="Sync slash commands with Discord")
@commands.is_owner()
async def sync(ctx):
    """Sync slash commands with Discord."""
    try:
        logger.info("Syncing slash commands...")
        await bot.tree.sync()
        await ctx.send("Slash commands synced successfully!", delete_after=1.0)
        await ctx.message.delete(delay=1.0)
        logger.info("Slash commands synced successfully")
    except Exception as e:
        logger.error(f"Error syncing slash commands: {e}")
        await ctx.send(f"Error syncing slash commands: {e}", delete_after=1.0)

async def setup_all_games():
    """Register all commands."""
    help_commands = await setup_help_command(bot)
    memoji_commands = await setup_memoji_commands(bot, active_games)

    logger.info(f"Registered commands: {', '.join(list(help_commands.keys()) + list(memoji_commands.keys()))}")

# Run the bot
async def main():
    """Main entry point."""
    if not TOKEN:
        logger.error("DISCORD_BOT_TOKEN is not set")
        return
    try:
        await setup_all_games()
        await bot.start(TOKEN)
    finally:
        for game_id in GAME_IDS:
            for channel_id in active_games.channels(game_id):
                active_games.remove(game_id, channel_id).game.stop()
        if not bot.is_closed():
            await bot.close()
        logger.info("Bot has been shutdown")

def run():
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("Bot shutdown initiated by user (KeyboardInterrupt)")

if __name__ == "__main__":
    run()
