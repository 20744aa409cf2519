"""
Game Configuration Constants Module

This module defines the fixed rules of the game: board dimensions, keyboard
layout, player-facing messages and the celebration script. Anything an
operator may want to change per deployment lives in app_config instead.
"""

from typing import List, Final

# Core Game Configuration Constants
WORD_LENGTH: Final[int] = 5
"""Number of letters in every solution and guess."""

MAX_ROUNDS: Final[int] = 6
"""
Maximum number of guess attempts allowed per game.
Type: Final[int] - Immutable to prevent accidental modification
"""

ALPHABET: Final[str] = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
LETTERS: Final[frozenset] = frozenset(ALPHABET)

# On-screen keyboard, including the two command keys
ENTER_KEY: Final[str] = "ENTER"
DELETE_KEY: Final[str] = "DELETE"

KEYBOARD_ROWS: Final[List[List[str]]] = [
    ['Q', 'W', 'E', 'R', 'T', 'Y', 'U', 'I', 'O', 'P'],
    ['A', 'S', 'D', 'F', 'G', 'H', 'J', 'K', 'L'],
    [ENTER_KEY, 'Z', 'X', 'C', 'V', 'B', 'N', 'M', DELETE_KEY]
]

# Player-facing messages
MSG_INVALID_LENGTH: Final[str] = f"Word must be {WORD_LENGTH} letters"
MSG_NOT_IN_WORD_LIST: Final[str] = "Not in word list"
MSG_WON: Final[str] = "🎉 You won!"
MSG_LOST: Final[str] = "Game Over! The word was {solution}"

# Celebration reveal: 60 tiles shown in rows of 10
CELEBRATION_ROW_WIDTH: Final[int] = 10
CELEBRATION_LINES: Final[List[str]] = [
    "EVERY WORD",
    " I GUESSED",
    "LED ME TO ",
    "   YOU    ",
    " WILL YOU ",
    "MARRY ME? ",
]
CELEBRATION_TEXT: Final[str] = "".join(CELEBRATION_LINES)
PROPOSAL_QUESTION: Final[str] = "Will you marry me?"


def validate_word_list_integrity(word_list: List[str]) -> bool:
    """
    Validates the integrity and consistency of a loaded word list.

    This function performs validation to ensure:
    1. Length validation: All words must be exactly WORD_LENGTH characters
    2. Character validation: Only A-Z characters allowed
    3. Format validation: Consistent uppercase formatting

    Returns:
        bool: True if word list passes all validation checks

    Raises:
        ValueError: If any validation check fails with detailed error message
    """
    if not word_list:
        raise ValueError("Word list cannot be empty")

    for index, word in enumerate(word_list):
        if len(word) != WORD_LENGTH:
            raise ValueError(f"Word at index {index} '{word}' is not {WORD_LENGTH} characters long")

        if not all(char in ALPHABET for char in word):
            raise ValueError(f"Word at index {index} '{word}' contains characters outside A-Z")

    return True


def is_valid_word(word: str) -> bool:
    """True if ``word`` could be a solution: five uppercase A-Z letters."""
    return len(word) == WORD_LENGTH and all(char in ALPHABET for char in word)
