"""
Utilities Package

Contains utility functions, decorators, and helper modules.
"""

from .decorators import require_game, websocket_game_required
from .game_logger import game_logger

__all__ = ['require_game', 'websocket_game_required', 'game_logger']
