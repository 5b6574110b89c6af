"""
Player package.

Provides the Player Adapter around an embeddable video player, the
capability interface such a player must offer, and a headless simulation.
"""

from .base import EmbeddedPlayer, PlayerEvents, PlayerFactory
from .adapter import PlayerAdapter, player_error_from_code
from .simulated import SimulatedPlayer

__all__ = [
    "EmbeddedPlayer",
    "PlayerEvents",
    "PlayerFactory",
    "PlayerAdapter",
    "player_error_from_code",
    "SimulatedPlayer",
]
