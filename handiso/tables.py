"""Lookup tables shared by the hand indexer.

Rank sets are bit masks over the thirteen ranks. Sets of a given size are
numbered with the colexicographic combinatorial number system.
"""

from math import comb

from handiso.deck import RANKS, SUITS

MAX_GROUP_INDEX = 0x100000
RANK_MASK = (1 << RANKS) - 1


def _build_rank_set_tables() -> tuple[tuple[int, ...], tuple[tuple[int, ...], ...]]:
    to_index = [0] * (1 << RANKS)
    by_size: list[list[int]] = [[0] * comb(RANKS, k) for k in range(RANKS + 1)]
    for rank_set in range(1 << RANKS):
        index = 0
        remaining = rank_set
        position = 1
        while remaining:
            low_bit = (remaining & -remaining).bit_length() - 1
            index += comb(low_bit, position)
            remaining &= remaining - 1
            position += 1
        to_index[rank_set] = index
        by_size[rank_set.bit_count()][index] = rank_set
    return tuple(to_index), tuple(tuple(row) for row in by_size)


_RANK_SET_TO_INDEX, _INDEX_TO_RANK_SET = _build_rank_set_tables()


def nth_unset(used: int, n: int) -> int:
    """Return the position of the ``n``-th zero bit (from 0) among the low RANKS bits of ``used``."""
    if not 0 <= used <= RANK_MASK:
        raise ValueError(f"used must be a {RANKS}-bit mask, got {used}")
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")
    free = ~used & RANK_MASK
    for _ in range(n):
        free &= free - 1
    if not free:
        raise IndexError(f"mask {used:#x} has fewer than {n + 1} unset bits")
    return (free & -free).bit_length() - 1


def rank_set_to_index(rank_set: int) -> int:
    """Return the index of ``rank_set`` among rank sets of the same size."""
    if not 0 <= rank_set <= RANK_MASK:
        raise ValueError(f"rank set must be a {RANKS}-bit mask, got {rank_set}")
    return _RANK_SET_TO_INDEX[rank_set]


def index_to_rank_set(size: int, index: int) -> int:
    """Return the rank set of ``size`` ranks whose index is ``index``."""
    if not 0 <= size <= RANKS:
        raise ValueError(f"size must be in [0, {RANKS}], got {size}")
    row = _INDEX_TO_RANK_SET[size]
    if not 0 <= index < len(row):
        raise IndexError(f"index {index} out of range for rank sets of size {size}")
    return row[index]


def _build_suit_permutations() -> tuple[tuple[int, ...], ...]:
    count = 1
    for i in range(2, SUITS + 1):
        count *= i
    permutations = []
    for code in range(count):
        used = 0
        perm = []
        for j in range(SUITS):
            code, suit = divmod(code, SUITS - j)
            shifted = nth_unset(used, suit)
            perm.append(shifted)
            used |= 1 << shifted
        permutations.append(tuple(perm))
    return tuple(permutations)


SUIT_PERMUTATIONS = _build_suit_permutations()


def suit_permutation(index: int) -> tuple[int, ...]:
    """Return the suit permutation with the given mixed-radix ``index``."""
    if not 0 <= index < len(SUIT_PERMUTATIONS):
        raise IndexError(f"permutation index {index} out of range")
    return SUIT_PERMUTATIONS[index]


def group_choose(n: int, k: int) -> int:
    """Binomial coefficient C(n, k) for group sizes up to SUITS."""
    if not 0 <= k <= SUITS:
        raise ValueError(f"k must be in [0, {SUITS}], got {k}")
    if not 0 <= n < MAX_GROUP_INDEX:
        raise ValueError(f"n must be in [0, {MAX_GROUP_INDEX}), got {n}")
    return comb(n, k)