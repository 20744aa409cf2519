"""
Celebration Service

In celebration mode the end of a game is followed by a scripted message that
replaces the board one tile at a time, then a proposal dialog. None of this
touches the game session itself; it only emits presentation events.
"""

from typing import Callable, Dict, List, Set

from ..config.game_settings import CELEBRATION_TEXT, PROPOSAL_QUESTION
from ..utils.game_logger import game_logger

Notifier = Callable[[str, str, Dict], None]


class CelebrationService:
    """Runs the tile-by-tile reveal for finished games."""

    def __init__(self, timers, notify: Notifier,
                 tile_delay: float = 0.15,
                 text: str = CELEBRATION_TEXT,
                 question: str = PROPOSAL_QUESTION):
        self.timers = timers
        self.notify = notify
        self.tile_delay = tile_delay
        self.text = text
        self.question = question
        self.revealed: Dict[str, List[str]] = {}  # game_id -> tiles shown so far
        self.proposed: Set[str] = set()  # games whose proposal dialog is open

    @staticmethod
    def _key(game_id: str):
        return (game_id, 'reveal')

    def start(self, game_id: str) -> None:
        """Begin revealing the message for ``game_id``, restarting any reveal in progress."""
        self.revealed[game_id] = []
        self.proposed.discard(game_id)

        def reveal_tile(index: int) -> None:
            tiles = self.revealed.get(game_id)
            if tiles is None:
                # Cancelled between the generation check and this step
                return
            letter = self.text[index]
            tiles.append(letter)
            self.notify(game_id, 'tile_revealed', {'index': index, 'letter': letter})

        def finish() -> None:
            if game_id not in self.revealed:
                return
            self.proposed.add(game_id)
            game_logger.log_game_event(game_id, 'celebration_revealed', tiles=len(self.text))
            self.notify(game_id, 'proposal', {'question': self.question})

        self.timers.schedule_sequence(
            self._key(game_id), len(self.text), self.tile_delay, reveal_tile, finish
        )

    def cancel(self, game_id: str) -> None:
        self.timers.cancel(self._key(game_id))
        self.revealed.pop(game_id, None)
        self.proposed.discard(game_id)

    def get_revealed(self, game_id: str) -> List[str]:
        return list(self.revealed.get(game_id, []))

    def is_proposed(self, game_id: str) -> bool:
        return game_id in self.proposed

    def answer(self, game_id: str, answer) -> bool:
        """Record the player's answer to the proposal and announce the result."""
        accepted = str(answer).strip().lower() in ('yes', 'y', 'true', '1')
        game_logger.log_game_event(game_id, 'proposal_answered', accepted=accepted)
        self.notify(game_id, 'celebration', {'accepted': accepted})
        return accepted
