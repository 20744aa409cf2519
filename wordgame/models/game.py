"""
Game Data Models

Contains all game-related data structures and enums.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class LetterStatus(Enum):
    """Per-letter feedback for a submitted guess."""
    CORRECT = "correct"
    PRESENT = "present"
    ABSENT = "absent"

    @property
    def rank(self) -> int:
        """Precedence used when several guesses disagree about a letter."""
        return _STATUS_RANK[self]


_STATUS_RANK = {
    LetterStatus.ABSENT: 1,
    LetterStatus.PRESENT: 2,
    LetterStatus.CORRECT: 3,
}


class GamePhase(Enum):
    """Lifecycle of a single game session."""
    LOADING = "loading"
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"

    @property
    def is_over(self) -> bool:
        return self in (GamePhase.WON, GamePhase.LOST)


@dataclass
class Tile:
    """One board cell as the browser renders it."""
    letter: str = ""
    status: Optional[str] = None  # LetterStatus value once the row is submitted


@dataclass
class GameState:
    """Serializable snapshot of a game session."""
    game_id: str
    phase: str
    current_row: int
    max_rounds: int
    current_guess: str
    game_over: bool
    won: bool
    guesses: List[Optional[str]]
    board: List[List[Tile]]
    keyboard: Dict[str, str]
    message: str = ""
    answer: Optional[str] = None  # Only included when game is over
    celebration: bool = False
    revealed: List[str] = field(default_factory=list)  # celebration tiles shown so far
