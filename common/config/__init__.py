from common.config.game_config import *  # noqa: F401,F403
