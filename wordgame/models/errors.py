"""
Game Errors

Exceptions raised by the game services. Controllers translate them into
JSON error responses; none of them are fatal to the server.
"""


class GameError(Exception):
    """Base class for every error raised by the game services."""


class WordSourceUnavailable(GameError):
    """The word list could not be read or contained no usable words."""


class GuessRejected(GameError):
    """A submission was refused; the message is shown to the player."""

    def __init__(self, message: str, guess: str = ""):
        super().__init__(message)
        self.message = message
        self.guess = guess


class InvalidLength(GuessRejected):
    """The submitted word does not have exactly WORD_LENGTH letters."""


class NotInDictionary(GuessRejected):
    """The submitted word is not in the loaded word list."""


class GameNotOver(GameError):
    """A reset was requested while the game is still being played."""
