"""
Single place for default game/setup configuration.
Change DEFAULT_SETUP_ID to switch which board is used when creating a new game (when no setup_id is provided).
"""
# Setup id from data/setups/<id>/territories.json. This is the default board for new games.
DEFAULT_SETUP_ID = "classic"

# Reinforcements granted to every player when a game is created.
# Flat allowance, independent of player count and board size.
DEFAULT_STARTING_UNITS = 35

# Finished games (phase "playing") the HTTP adapter keeps in memory.
# The oldest finished games are dropped when a new game is created past this count.
MAX_FINISHED_GAMES = 100
