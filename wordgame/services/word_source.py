"""
Word Source

Loads the newline-delimited word list that supplies both the solutions and
the dictionary of accepted guesses. The list is read once at startup from a
local file or an http(s) URL; any failure falls back to a single word.
"""

from typing import List
from urllib.parse import urlparse

import requests

from ..config.game_settings import is_valid_word
from ..models.errors import WordSourceUnavailable
from ..utils.game_logger import game_logger

REQUEST_TIMEOUT_SECONDS = 10


def parse_word_list(text: str) -> List[str]:
    """
    Splits a plain-text word list into uppercase words.

    Every line is trimmed and uppercased; blank lines and lines that are not
    five A-Z letters are skipped. Order is preserved.
    """
    words = []
    skipped = 0

    for line in text.splitlines():
        word = line.strip().upper()
        if not word:
            continue
        if not is_valid_word(word):
            skipped += 1
            continue
        words.append(word)

    if skipped:
        game_logger.logger.warning(f"Word source: skipped {skipped} malformed line(s)")

    return words


class WordSource:
    """A word list location: a filesystem path or an http(s) URL."""

    def __init__(self, location: str):
        self.location = location

    @property
    def is_remote(self) -> bool:
        return urlparse(self.location).scheme in ('http', 'https')

    def _read_text(self) -> str:
        if self.is_remote:
            response = requests.get(self.location, timeout=REQUEST_TIMEOUT_SECONDS)
            response.raise_for_status()
            return response.text

        with open(self.location, 'r', encoding='utf-8') as f:
            return f.read()

    def fetch(self) -> List[str]:
        """
        Reads and parses the word list.

        Returns:
            List[str]: Uppercase words in source order

        Raises:
            WordSourceUnavailable: If the source cannot be read or holds no words
        """
        if not self.location:
            raise WordSourceUnavailable("No word source configured")

        try:
            text = self._read_text()
        except (OSError, UnicodeDecodeError, requests.RequestException) as e:
            raise WordSourceUnavailable(f"Could not read word list from {self.location}: {e}") from e

        words = parse_word_list(text)
        if not words:
            raise WordSourceUnavailable(f"Word list at {self.location} is empty")

        return words


def load_word_list(location: str, fallback_word: str = "REACT") -> List[str]:
    """
    Loads the word list, never failing.

    On any WordSourceUnavailable the error is logged and a one-word list
    containing ``fallback_word`` is returned, so the game always has a
    solution and a dictionary to check guesses against.
    """
    try:
        words = WordSource(location).fetch()
    except WordSourceUnavailable as e:
        game_logger.logger.warning(f"{e}; falling back to '{fallback_word}'")
        return [fallback_word.upper()]

    game_logger.logger.info(f"Loaded {len(words)} words from {location}")
    return words
