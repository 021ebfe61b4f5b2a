"""
Utilities module for the Americano scheduler.
"""
import logging
import os

from americano.utils.constants import (
    PLAYERS_PER_COURT, PLAYERS_PER_TEAM, PAIR_KEY_SEPARATOR,
    PARTNER_WEIGHT, OPPONENT_WEIGHT, PLAYTIME_WEIGHT,
    SIDE_A, SIDE_B, SIDES,
)

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logger(name: str) -> logging.Logger:
    """
    Return a module logger.

    The level comes from the AMERICANO_LOG_LEVEL environment variable
    (default WARNING). A stream handler is attached to the package root
    logger once so every module logger shares it.
    """
    root = logging.getLogger("americano")
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        root.setLevel(os.environ.get("AMERICANO_LOG_LEVEL", "WARNING").upper())
    return logging.getLogger(name)


__all__ = [
    'PLAYERS_PER_COURT', 'PLAYERS_PER_TEAM', 'PAIR_KEY_SEPARATOR',
    'PARTNER_WEIGHT', 'OPPONENT_WEIGHT', 'PLAYTIME_WEIGHT',
    'SIDE_A', 'SIDE_B', 'SIDES',
    'setup_logger',
]
