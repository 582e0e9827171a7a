from enum import Enum
from typing import Optional

STONE = 'stone'
PAPER = 'paper'
SCISSOR = 'scissor'

SYMBOLS = (STONE, PAPER, SCISSOR)

# Each symbol beats exactly the one it maps to
BEATS = {
    STONE: SCISSOR,
    SCISSOR: PAPER,
    PAPER: STONE,
}

# Played on behalf of a participant whose submission is missing or unrecognised
DEFAULT_CHOICE = STONE


class Outcome(Enum):
    DRAW = 'draw'
    FIRST = 'first'
    SECOND = 'second'


def normalize_choice(value) -> Optional[str]:
    """Map a submitted value onto a known symbol, or None if it is not one."""
    if not isinstance(value, str):
        return None
    symbol = value.strip().lower()
    return symbol if symbol in BEATS else None


def effective_choice(value, default: str = DEFAULT_CHOICE) -> str:
    symbol = normalize_choice(value)
    if symbol is None:
        return default
    return symbol


def resolve(first: str, second: str) -> Outcome:
    """Compare two symbols from the point of view of the first one."""
    if first == second:
        return Outcome.DRAW
    if BEATS[first] == second:
        return Outcome.FIRST
    return Outcome.SECOND


def describe(outcome: Outcome, first_name: str, second_name: str, first: str, second: str) -> str:
    if outcome is Outcome.DRAW:
        return f"Draw - both chose {first}"
    if outcome is Outcome.FIRST:
        return f"{first_name} wins - {first} beats {second}"
    return f"{second_name} wins - {second} beats {first}"
