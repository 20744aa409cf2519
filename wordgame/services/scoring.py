"""
Scoring

Pure functions that turn a guess and the solution into letter feedback, and
fold all submitted guesses into the status shown on the on-screen keyboard.
"""

from typing import Callable, Dict, List, Optional, Sequence

from ..models.game import LetterStatus

Classifier = Callable[[str, str], List[LetterStatus]]


def classify(guess: str, solution: str) -> List[LetterStatus]:
    """
    Classifies every position of ``guess`` independently.

    A letter in the right spot is CORRECT, a letter found anywhere else in
    the solution is PRESENT, anything else is ABSENT. Repeated letters are not
    counted against the solution, so "EERIE" against "CRANE" marks every E.
    """
    result = []
    for index, letter in enumerate(guess):
        if index < len(solution) and solution[index] == letter:
            result.append(LetterStatus.CORRECT)
        elif letter in solution:
            result.append(LetterStatus.PRESENT)
        else:
            result.append(LetterStatus.ABSENT)
    return result


def classify_standard(guess: str, solution: str) -> List[LetterStatus]:
    """
    Frequency-aware classification used by the published game.

    Exact matches consume their solution letter first; the remaining letters
    are then marked PRESENT only while unconsumed copies are left.
    """
    result: List[Optional[LetterStatus]] = []
    remaining: List[Optional[str]] = list(solution)

    # First pass: exact position matches
    for index, letter in enumerate(guess):
        if index < len(solution) and solution[index] == letter:
            result.append(LetterStatus.CORRECT)
            remaining[index] = None
        else:
            result.append(None)

    # Second pass: present letters and misses
    for index, letter in enumerate(guess):
        if result[index] is not None:
            continue
        if letter in remaining:
            result[index] = LetterStatus.PRESENT
            remaining[remaining.index(letter)] = None
        else:
            result[index] = LetterStatus.ABSENT

    return [status for status in result if status is not None]


SCORING_RULES: Dict[str, Classifier] = {
    'simple': classify,
    'standard': classify_standard,
}


def get_classifier(rule: str) -> Classifier:
    """Look up a scoring rule by its configured name."""
    try:
        return SCORING_RULES[rule.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown scoring rule '{rule}'. Must be one of: {', '.join(sorted(SCORING_RULES))}"
        ) from None


def keyboard_status(guesses: Sequence[Optional[str]],
                    current_row: int,
                    solution: str,
                    classifier: Classifier = classify) -> Dict[str, LetterStatus]:
    """
    Best-known status of every guessed letter.

    Only slots before ``current_row`` are considered; the row being typed is
    never scored. A letter keeps the highest ranked status it has been given
    in any position of any of those guesses.
    """
    status: Dict[str, LetterStatus] = {}

    for guess in guesses[:current_row]:
        if not guess:
            continue
        for letter, letter_status in zip(guess, classifier(guess, solution)):
            known = status.get(letter)
            if known is None or letter_status.rank > known.rank:
                status[letter] = letter_status

    return status
