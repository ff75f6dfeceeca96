"""
Utility functions shared by the bot's commands.
"""
import logging

logger = logging.getLogger("memoji_bot")

# Game IDs and display names
GAME_IDS = {
    "1001": "Memoji",
}


class ActiveGames:
    """Tracks running games per game id and channel: {game_id: {channel_id: session}}."""
    def __init__(self):
        self._games = {game_id: {} for game_id in GAME_IDS}

    def get(self, game_id, channel_id):
        return self._games.get(game_id, {}).get(channel_id)

    def add(self, game_id, channel_id, session):
        self._games.setdefault(game_id, {})[channel_id] = session
        logger.info(f"Registered game {game_id} in channel {channel_id}")

    def remove(self, game_id, channel_id):
        """Removes and returns the session for a channel, or None if there is none."""
        session = self._games.get(game_id, {}).pop(channel_id, None)
        if session is not None:
            logger.info(f"Removed game {game_id} from channel {channel_id}")
        return session

    def channels(self, game_id):
        return list(self._games.get(game_id, {}).keys())

    def __len__(self):
        return sum(len(games) for games in self._games.values())
