"""
Constants for the Americano scheduler.
"""

# Court layout
PLAYERS_PER_COURT = 4
PLAYERS_PER_TEAM = 2

# Pair keys join two player ids with this separator (ids are uuid strings)
PAIR_KEY_SEPARATOR = "__"

# Cost weights for the fair-round search.
# A single partner repeat must outweigh any opponent or playtime terms.
PARTNER_WEIGHT = 14.0
OPPONENT_WEIGHT = 3.0
PLAYTIME_WEIGHT = 0.25

# Team sides
SIDE_A = "A"
SIDE_B = "B"
SIDES = (SIDE_A, SIDE_B)

# Setup defaults
DEFAULT_TOURNAMENT_NAME = "Mein Americano"
DEFAULT_PLAYER_COUNT = 8
DEFAULT_COURTS = 2
MIN_TOURNAMENT_NAME_LENGTH = 2

# Simulation
DEFAULT_POINTS_PER_MATCH = 24
