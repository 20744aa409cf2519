"""
Data Models Package

Contains all data models, enums and errors used throughout the application.
"""

from .game import GamePhase, GameState, LetterStatus, Tile
from .errors import (
    GameError, GameNotOver, GuessRejected, InvalidLength, NotInDictionary, WordSourceUnavailable
)

__all__ = [
    'GamePhase', 'GameState', 'LetterStatus', 'Tile',
    'GameError', 'GameNotOver', 'GuessRejected', 'InvalidLength', 'NotInDictionary',
    'WordSourceUnavailable'
]
