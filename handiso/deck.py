"""Card encoding for a standard 52-card deck.

A card is an integer ``rank * 4 + suit``. Ranks run from deuce (0) to ace (12)
and suits are numbered 0 to 3.
"""

SUITS = 4
RANKS = 13
CARDS = 52

RANK_TO_CHAR = "23456789TJQKA"
SUIT_TO_CHAR = "shdc"


def _check_card(card: int) -> None:
    if not 0 <= card < CARDS:
        raise ValueError(f"card must be in [0, {CARDS}), got {card}")


def get_suit(card: int) -> int:
    """Return the suit of ``card``."""
    _check_card(card)
    return card & 3


def get_rank(card: int) -> int:
    """Return the rank of ``card``."""
    _check_card(card)
    return card >> 2


def make_card(suit: int, rank: int) -> int:
    """Build the card with the given ``suit`` and ``rank``."""
    if not 0 <= suit < SUITS:
        raise ValueError(f"suit must be in [0, {SUITS}), got {suit}")
    if not 0 <= rank < RANKS:
        raise ValueError(f"rank must be in [0, {RANKS}), got {rank}")
    return int(rank) << 2 | int(suit)