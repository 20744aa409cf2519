"""
Game Service

Contains the core game logic: the per-game state machine (GameSession) and the
service that keeps every open session, the shared word list, transient
message timers and the celebration reveal.
"""

import random
import threading
import uuid
from typing import Callable, Dict, List, Optional

from ..config.game_settings import (
    DELETE_KEY, ENTER_KEY, LETTERS, MAX_ROUNDS, MSG_INVALID_LENGTH, MSG_LOST,
    MSG_NOT_IN_WORD_LIST, MSG_WON, WORD_LENGTH, validate_word_list_integrity
)
from ..models.errors import GameNotOver, GuessRejected, InvalidLength, NotInDictionary
from ..models.game import GamePhase, GameState, Tile
from ..utils.game_logger import game_logger
from .celebration_service import CelebrationService
from .scoring import Classifier, classify, get_classifier, keyboard_status
from .timer_service import TimerRegistry
from .word_source import load_word_list

DELETE_KEYS = ('BACKSPACE', DELETE_KEY)


class GameSession:
    """
    State machine for a single game.

    A session created without a word list sits in LOADING and ignores all
    input until ``start`` is called. Letter, delete and submit are only
    accepted while PLAYING; once the game is WON or LOST they are ignored
    until ``reset``.
    """

    def __init__(self,
                 game_id: str,
                 word_list: Optional[List[str]] = None,
                 rng: Optional[random.Random] = None,
                 classifier: Classifier = classify):
        self.game_id = game_id
        self.rng = rng or random.Random()
        self.classifier = classifier
        self.lock = threading.Lock()

        self.word_list: Optional[List[str]] = None
        self._dictionary = frozenset()
        self.solution: Optional[str] = None
        self.guesses: List[Optional[str]] = [None] * MAX_ROUNDS
        self.current_row = 0
        self.current_guess = ""
        self.game_over = False
        self.won = False
        self.message = ""

        if word_list is not None:
            self.start(word_list)

    @property
    def phase(self) -> GamePhase:
        if self.solution is None:
            return GamePhase.LOADING
        if self.game_over:
            return GamePhase.WON if self.won else GamePhase.LOST
        return GamePhase.PLAYING

    def start(self, word_list: List[str]) -> None:
        """Leave LOADING: adopt the word list and draw the solution."""
        if not word_list:
            raise ValueError("Word list cannot be empty")

        self.word_list = list(word_list)
        self._dictionary = frozenset(self.word_list)
        self.solution = self.rng.choice(self.word_list)

    def input_letter(self, letter: str) -> bool:
        """Append a letter to the guess being typed. Returns True if it was added."""
        if self.phase is not GamePhase.PLAYING:
            return False
        if not isinstance(letter, str) or len(letter) != 1:
            return False

        letter = letter.upper()
        # Some characters uppercase to several letters (e.g. "ß" -> "SS")
        if letter not in LETTERS or len(self.current_guess) >= WORD_LENGTH:
            return False

        self.current_guess += letter
        return True

    def delete_letter(self) -> bool:
        """Remove the last typed letter. Returns True if one was removed."""
        if self.phase is not GamePhase.PLAYING or not self.current_guess:
            return False

        self.current_guess = self.current_guess[:-1]
        return True

    def submit(self, word: Optional[str] = None) -> bool:
        """
        Submits the typed guess, or ``word`` when given.

        Args:
            word: Whole-word guess from the HTTP API. Rejections never touch
                the typed buffer.

        Returns:
            bool: True if a guess was recorded, False if the game is not
            accepting input

        Raises:
            InvalidLength: If the guess is not exactly WORD_LENGTH letters
            NotInDictionary: If the guess is not in the word list
        """
        if self.phase is not GamePhase.PLAYING:
            return False

        guess = self.current_guess if word is None else str(word).strip().upper()

        if len(guess) != WORD_LENGTH:
            self.message = MSG_INVALID_LENGTH
            raise InvalidLength(MSG_INVALID_LENGTH, guess)

        if guess not in self._dictionary:
            self.message = MSG_NOT_IN_WORD_LIST
            raise NotInDictionary(MSG_NOT_IN_WORD_LIST, guess)

        self.guesses[self.current_row] = guess

        if guess == self.solution:
            self.current_guess = guess
            self.message = MSG_WON
            self.won = True
            self.game_over = True
        elif self.current_row == MAX_ROUNDS - 1:
            self.current_guess = guess
            self.message = MSG_LOST.format(solution=self.solution)
            self.game_over = True
        else:
            self.current_row += 1
            self.current_guess = ""
            self.message = ""

        return True

    def handle_key(self, key: str) -> bool:
        """
        Maps a keyboard or on-screen key to a transition.

        "Enter"/"ENTER" submits, "Backspace"/"DELETE" deletes, a single letter
        is typed, and every other key is ignored.
        """
        if not isinstance(key, str) or not key:
            return False

        name = key.upper()
        if name == ENTER_KEY:
            return self.submit()
        if name in DELETE_KEYS:
            return self.delete_letter()
        if len(key) == 1:
            return self.input_letter(key)
        return False

    def reset(self) -> None:
        """Start a new game with a fresh solution. Only allowed once the game is over."""
        if not self.phase.is_over:
            raise GameNotOver("Game is still in progress")

        self.solution = self.rng.choice(self.word_list)
        self.guesses = [None] * MAX_ROUNDS
        self.current_row = 0
        self.current_guess = ""
        self.game_over = False
        self.won = False
        self.message = ""

    def keyboard(self) -> Dict[str, str]:
        if self.solution is None:
            return {}
        status = keyboard_status(self.guesses, self.current_row, self.solution, self.classifier)
        return {letter: letter_status.value for letter, letter_status in sorted(status.items())}

    def board(self) -> List[List[Tile]]:
        rows = []
        for index, guess in enumerate(self.guesses):
            if guess is not None:
                statuses = self.classifier(guess, self.solution)
                rows.append([Tile(letter, status.value) for letter, status in zip(guess, statuses)])
            else:
                typed = self.current_guess if index == self.current_row else ""
                rows.append([Tile(typed[i] if i < len(typed) else "") for i in range(WORD_LENGTH)])
        return rows

    def to_state(self, celebration: bool = False, revealed: Optional[List[str]] = None) -> GameState:
        """Snapshot of the session; the solution is only included once the game is over."""
        return GameState(
            game_id=self.game_id,
            phase=self.phase.value,
            current_row=self.current_row,
            max_rounds=MAX_ROUNDS,
            current_guess=self.current_guess,
            game_over=self.game_over,
            won=self.won,
            guesses=list(self.guesses),
            board=self.board(),
            keyboard=self.keyboard(),
            message=self.message,
            answer=self.solution if self.game_over else None,
            celebration=celebration,
            revealed=list(revealed or [])
        )


class GameService:
    """
    Core game service managing multiple game sessions.

    This class handles:
    - Session management with unique game IDs
    - The shared word list, including sessions waiting for it to load
    - Auto-clearing of rejection messages
    - The celebration reveal when a game ends in celebration mode
    """

    def __init__(self,
                 word_list: Optional[List[str]] = None,
                 timers: Optional[TimerRegistry] = None,
                 scoring_rule: str = 'simple',
                 message_timeout: float = 2,
                 celebration_mode: bool = False,
                 tile_delay: float = 0.15,
                 rng: Optional[random.Random] = None):
        self.games: Dict[str, GameSession] = {}  # Store active games by game_id
        self.word_list: Optional[List[str]] = None
        if word_list:
            validate_word_list_integrity(word_list)
            self.word_list = list(word_list)
        self.timers = timers or TimerRegistry()
        self.classifier = get_classifier(scoring_rule)
        self.message_timeout = message_timeout
        self.celebration_mode = celebration_mode
        self.celebration = CelebrationService(self.timers, self._notify, tile_delay)
        self.rng = rng or random.Random()
        self._listeners: List[Callable[[str, str, Dict], None]] = []
        self._lock = threading.Lock()

    @property
    def is_loaded(self) -> bool:
        return self.word_list is not None

    def load_words(self, location: str, fallback_word: str = "REACT") -> List[str]:
        """Load the word list (falling back on failure) and start waiting sessions."""
        words = load_word_list(location, fallback_word)
        self.set_word_list(words)
        return words

    def set_word_list(self, words: List[str]) -> None:
        validate_word_list_integrity(words)
        with self._lock:
            self.word_list = list(words)
            waiting = [s for s in self.games.values() if s.phase is GamePhase.LOADING]

        for session in waiting:
            with session.lock:
                if session.phase is not GamePhase.LOADING:
                    continue
                session.start(self.word_list)
            self._notify(session.game_id, 'game_state_update', {
                'success': True, 'state': self._state(session)
            })

    def add_listener(self, listener: Callable[[str, str, Dict], None]) -> None:
        """Register ``listener(game_id, event, payload)`` for timer-driven events."""
        self._listeners.append(listener)

    def _notify(self, game_id: str, event: str, payload: Dict) -> None:
        for listener in self._listeners:
            listener(game_id, event, payload)

    def create_new_game(self) -> str:
        """
        Creates a new game session with a randomly selected word.

        Returns:
            str: Unique game ID for this session
        """
        game_id = str(uuid.uuid4())
        session = GameSession(game_id, self.word_list, rng=self.rng, classifier=self.classifier)

        with self._lock:
            self.games[game_id] = session
            # The word list may have arrived while the session was being built
            word_list = self.word_list

        if word_list and session.phase is GamePhase.LOADING:
            with session.lock:
                if session.phase is GamePhase.LOADING:
                    session.start(word_list)

        game_logger.log_game_event(game_id, 'game_created', phase=session.phase.value)
        return game_id

    def get_session(self, game_id: str) -> Optional[GameSession]:
        return self.games.get(game_id)

    def _state(self, session: GameSession) -> GameState:
        return session.to_state(
            celebration=self.celebration_mode,
            revealed=self.celebration.get_revealed(session.game_id)
        )

    def get_game_state(self, game_id: str) -> Optional[GameState]:
        """
        Returns the current game state for a session (without revealing the answer).

        Returns:
            GameState object or None if game not found
        """
        session = self.get_session(game_id)
        if session is None:
            return None

        with session.lock:
            return self._state(session)

    def press_key(self, game_id: str, key: str) -> Optional[GameState]:
        """
        Applies a key press to a session.

        Returns:
            Updated GameState or None if the game does not exist

        Raises:
            GuessRejected: If Enter submitted an invalid guess
        """
        return self._apply(game_id, lambda session: session.handle_key(key))

    def make_guess(self, game_id: str, guess: str) -> Optional[GameState]:
        """Submits a whole word; same rules as typing it and pressing Enter."""
        return self._apply(game_id, lambda session: session.submit(guess))

    def _apply(self, game_id: str, transition) -> Optional[GameState]:
        session = self.get_session(game_id)
        if session is None:
            return None

        rejection = None
        with session.lock:
            was_over = session.game_over
            empty_slots = session.guesses.count(None)
            try:
                transition(session)
            except GuessRejected as e:
                rejection = e
            else:
                if session.guesses.count(None) != empty_slots:
                    # A recorded guess replaces any pending rejection message
                    self.timers.cancel(self._message_key(game_id))
            state = self._state(session)

        if rejection is not None:
            self._schedule_message_clear(session, rejection.message)
            raise rejection

        if session.game_over and not was_over:
            self._on_game_over(session)
            state = self.get_game_state(game_id)

        return state

    def _on_game_over(self, session: GameSession) -> None:
        game_logger.log_game_event(
            session.game_id, 'game_won' if session.won else 'game_lost',
            rounds_used=session.current_row + 1, target_word=session.solution
        )
        if self.celebration_mode:
            self.celebration.start(session.game_id)

    @staticmethod
    def _message_key(game_id: str):
        return (game_id, 'message')

    def _schedule_message_clear(self, session: GameSession, message: str) -> None:
        game_id = session.game_id

        def clear() -> None:
            with session.lock:
                if session.message != message:
                    return
                session.message = ""
            self._notify(game_id, 'message_cleared', {'game_id': game_id})

        self.timers.schedule(self._message_key(game_id), self.message_timeout, clear)

    def reset_game(self, game_id: str) -> Optional[GameState]:
        """
        Starts a new round in an existing session.

        Raises:
            GameNotOver: If the current game is still being played
        """
        session = self.get_session(game_id)
        if session is None:
            return None

        with session.lock:
            session.reset()
            self.timers.cancel(self._message_key(game_id))
            self.celebration.cancel(game_id)
            state = self._state(session)

        game_logger.log_game_event(game_id, 'game_reset')
        return state

    def answer_proposal(self, game_id: str, answer) -> Optional[bool]:
        """Celebration mode only: record the answer to the proposal dialog."""
        session = self.get_session(game_id)
        if session is None or not self.celebration_mode or not session.game_over:
            return None
        if not self.celebration.is_proposed(game_id):
            return None
        return self.celebration.answer(game_id, answer)

    def delete_game(self, game_id: str) -> bool:
        """
        Removes a game session from memory.

        Returns:
            bool: True if game was deleted, False if not found
        """
        with self._lock:
            session = self.games.pop(game_id, None)

        if session is None:
            return False

        self.timers.cancel(self._message_key(game_id))
        self.celebration.cancel(game_id)
        return True


# Global service instance
_game_service = None


def get_game_service() -> Optional[GameService]:
    """Get the global game service instance."""
    return _game_service


def initialize_game_service(**kwargs) -> GameService:
    """Initialize the global game service instance."""
    global _game_service
    _game_service = GameService(**kwargs)
    return _game_service
