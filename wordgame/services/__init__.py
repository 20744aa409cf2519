"""
Services Package

Contains all business logic and service classes.
"""

from .game_service import GameService, GameSession, get_game_service, initialize_game_service
from .scoring import classify, classify_standard, keyboard_status
from .timer_service import TimerRegistry
from .word_source import WordSource, load_word_list

__all__ = [
    'GameService', 'GameSession', 'get_game_service', 'initialize_game_service',
    'classify', 'classify_standard', 'keyboard_status',
    'TimerRegistry',
    'WordSource', 'load_word_list'
]
