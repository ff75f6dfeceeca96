"""
Configuration settings for the Discord Memoji memory game.
"""
import os

from dotenv import load_dotenv

load_dotenv()

# --- Bot Configuration ---
COMMAND_PREFIX = '!'

# --- Game Configuration ---
CARD_BACK = "❓"  # The emoji shown for face-down cards

# Emojis the board symbols are drawn from
EMOJIES = [
    "🐶", "🐱", "🐭", "🐹", "🐰", "🐻", "🐼", "🐨", "🐯", "🦁", "🐮",
    "🐷", "🐸", "🐙", "🐵", "🦄", "🐞", "🦀", "🐟", "🐊", "🐓", "🦃",
]

# Number of cards on the board (must be even)
BOARD_SIZE = 12

# Cards per row of buttons
BOARD_COLUMNS = 4

# Discord allows 5 rows of 5 components; the last row is kept free
MAX_BOARD_SIZE = 20

# Round duration in seconds
ROUND_DURATION_SECONDS = 60

# Seconds between two countdown ticks
TICK_INTERVAL_SECONDS = 1.0

# Popup texts
WIN_TEXT = "Win"
LOSE_TEXT = "Lose"
WIN_BUTTON_TEXT = "Play again"
LOSE_BUTTON_TEXT = "Try again"

# Time (in seconds) to auto-dismiss short-lived messages
EPHEMERAL_MESSAGE_DURATION = 5.0


class InvalidConfiguration(ValueError):
    """Raised when a round cannot be set up with the given settings."""


class InsufficientAlphabet(InvalidConfiguration):
    """Raised when the alphabet has fewer distinct symbols than required pairs."""


def validate_round_config(alphabet, board_size, round_duration_seconds):
    """Check a round configuration and return the number of pairs it needs.

    Raises:
        InvalidConfiguration: board size is not a positive even number or
            the duration is not positive.
        InsufficientAlphabet: the alphabet cannot fill the board with pairs.
    """
    if not isinstance(board_size, int) or board_size <= 0 or board_size % 2 != 0:
        raise InvalidConfiguration(f"Board size must be a positive even number, got {board_size!r}")
    if round_duration_seconds <= 0:
        raise InvalidConfiguration(f"Round duration must be positive, got {round_duration_seconds!r}")

    pair_count = board_size // 2
    distinct = len(set(alphabet))
    if distinct < pair_count:
        raise InsufficientAlphabet(
            f"Alphabet has {distinct} distinct symbols but {pair_count} pairs are needed"
        )
    return pair_count


def _env_int(name, default):
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        raise InvalidConfiguration(f"{name} must be an integer, got {value!r}")


def load_round_settings():
    """Return (alphabet, board_size, round_duration_seconds) with environment overrides applied."""
    board_size = _env_int("MEMOJI_BOARD_SIZE", BOARD_SIZE)
    round_duration = _env_int("MEMOJI_ROUND_SECONDS", ROUND_DURATION_SECONDS)

    if board_size > MAX_BOARD_SIZE:
        raise InvalidConfiguration(f"Board size can be at most {MAX_BOARD_SIZE}, got {board_size}")
    validate_round_config(EMOJIES, board_size, round_duration)
    return list(EMOJIES), board_size, round_duration
