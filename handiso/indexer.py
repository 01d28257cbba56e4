"""Map poker hands to indices shared by all suit-isomorphic hands, and back.

A hand is dealt over several rounds. Two hands are isomorphic when one turns
into the other by renaming suits and reordering cards within a round. Every
isomorphism class on a round gets an index in ``[0, size(round))``, and each
index can be turned back into a canonical hand of its class.
"""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, field
from itertools import groupby
from math import comb
from typing import Iterable, Iterator, Sequence

from handiso.deck import CARDS, RANKS, SUITS, get_rank, get_suit, make_card
from handiso.tables import group_choose, index_to_rank_set, nth_unset, rank_set_to_index

MAX_ROUNDS = 8

# For each suit, the number of cards of that suit dealt on each round.
Counts = tuple[tuple[int, ...], ...]


@dataclass
class HandIndexerState:
    """Progress of a hand being indexed one round at a time."""

    suit_index: list[int] = field(default_factory=lambda: [0] * SUITS)
    suit_multiplier: list[int] = field(default_factory=lambda: [1] * SUITS)
    round: int = 0
    permutation_index: int = 0
    permutation_multiplier: int = 1
    used_ranks: list[int] = field(default_factory=lambda: [0] * SUITS)


@dataclass(frozen=True)
class _Configuration:
    counts: Counts
    groups: tuple[int, ...]
    suit_sizes: tuple[int, ...]
    offset: int


@dataclass(frozen=True)
class _RoundTables:
    configurations: tuple[_Configuration, ...]
    offsets: tuple[int, ...]
    permutations: dict[int, tuple[int, tuple[int, ...]]]
    size: int


def _enumerate_counts(cards_per_round: Sequence[int], canonical: bool) -> Iterator[tuple[int, Counts]]:
    """Yield ``(round, counts)`` for every way of spreading each round's cards over the suits.

    With ``canonical`` set, only suit distributions that are non-increasing in
    suit order are produced.
    """
    rounds = len(cards_per_round)
    empty = tuple((0,) * rounds for _ in range(SUITS))

    def walk(rnd: int, remaining: int, suit: int, equal: int,
             used: tuple[int, ...], counts: Counts) -> Iterator[tuple[int, Counts]]:
        if suit == SUITS:
            yield rnd, counts
            if rnd + 1 < rounds:
                yield from walk(rnd + 1, cards_per_round[rnd + 1], 0, equal, used, counts)
            return

        low = remaining if suit == SUITS - 1 else 0
        high = min(RANKS - used[suit], remaining)
        was_equal = canonical and bool(equal & 1 << suit)
        previous = RANKS + 1
        if was_equal:
            previous = counts[suit - 1][rnd]
            high = min(high, previous)

        for taken in range(low, high + 1):
            still_equal = was_equal and taken == previous
            new_equal = (equal & ~(1 << suit)) | (int(still_equal) << suit)
            row = counts[suit]
            new_row = row[:rnd] + (taken,) + row[rnd + 1:]
            new_counts = counts[:suit] + (new_row,) + counts[suit + 1:]
            new_used = used[:suit] + (used[suit] + taken,) + used[suit + 1:]
            yield from walk(rnd, remaining - taken, suit + 1, new_equal, new_used, new_counts)

    initial_equal = (1 << SUITS) - 2
    yield from walk(0, cards_per_round[0], 0, initial_equal, (0,) * SUITS, empty)


def _largest_below(group_index: int, m: int, limit: int) -> int:
    """Largest x in [0, limit) with C(x + m - 1, m) <= group_index."""
    best, low, high = 0, 0, limit
    while low < high:
        mid = (low + high) // 2
        if group_choose(mid + m - 1, m) <= group_index:
            best = mid
            low = mid + 1
        else:
            high = mid
    return best


def _decode_group(group_index: int, length: int, suit_size: int) -> list[int]:
    """Split a multiset index into ``length`` suit indices, largest first."""
    values = []
    for m in range(length, 1, -1):
        value = _largest_below(group_index, m, suit_size)
        values.append(value)
        group_index -= group_choose(value + m - 1, m)
    values.append(group_index)
    return values


class HandIndexer:
    """Indexes hands dealt over rounds with the given number of cards per round."""

    def __init__(self, cards_per_round: Iterable[int]) -> None:
        per_round = tuple(int(n) for n in cards_per_round)
        if not per_round:
            raise ValueError("at least one round is required")
        if len(per_round) > MAX_ROUNDS:
            raise ValueError(f"at most {MAX_ROUNDS} rounds are supported, got {len(per_round)}")
        if any(n < 0 for n in per_round):
            raise ValueError("cards per round must be non-negative")
        if sum(per_round) > CARDS:
            raise ValueError(f"a hand cannot hold more than {CARDS} cards")

        self.cards_per_round = per_round
        starts = []
        total = 0
        for n in per_round:
            starts.append(total)
            total += n
        self.round_start = tuple(starts)
        self.total_cards = total

        configs_by_round: list[set[Counts]] = [set() for _ in per_round]
        for rnd, counts in _enumerate_counts(per_round, canonical=True):
            configs_by_round[rnd].add(counts)

        perms_by_round: list[list[Counts]] = [[] for _ in per_round]
        for rnd, counts in _enumerate_counts(per_round, canonical=False):
            perms_by_round[rnd].append(counts)

        self._rounds = tuple(
            self._build_round(rnd, configs_by_round[rnd], perms_by_round[rnd])
            for rnd in range(len(per_round))
        )
        self.round_sizes = tuple(t.size for t in self._rounds)
        self.configuration_counts = tuple(len(t.configurations) for t in self._rounds)
        self.permutation_counts = tuple(max(t.permutations) + 1 for t in self._rounds)

    @property
    def rounds(self) -> int:
        """Number of rounds."""
        return len(self.cards_per_round)

    def _build_round(self, rnd: int, configs: set[Counts], perms: list[Counts]) -> _RoundTables:
        built = []
        accum = 0
        for counts in sorted(configs):
            suit_sizes = []
            for row in counts:
                size = 1
                remaining = RANKS
                for n in row:
                    size *= comb(remaining, n)
                    remaining -= n
                suit_sizes.append(size)
            groups = tuple(len(list(run)) for _, run in groupby(counts))
            weight = 1
            start = 0
            for length in groups:
                weight *= group_choose(suit_sizes[start] + length - 1, length)
                start += length
            built.append(_Configuration(counts, groups, tuple(suit_sizes), accum))
            accum += weight

        lookup = {config.counts: config_id for config_id, config in enumerate(built)}
        permutations = {}
        for counts in perms:
            pi = tuple(sorted(range(SUITS), key=lambda s: counts[s], reverse=True))
            canonical = tuple(counts[p] for p in pi)
            permutations[self._permutation_index(rnd, counts)] = (lookup[canonical], pi)

        return _RoundTables(
            configurations=tuple(built),
            offsets=tuple(c.offset for c in built),
            permutations=permutations,
            size=accum,
        )

    def _permutation_index(self, rnd: int, counts: Counts) -> int:
        index, multiplier = 0, 1
        for r in range(rnd + 1):
            remaining = self.cards_per_round[r]
            for suit in range(SUITS - 1):
                size = counts[suit][r]
                index += multiplier * size
                multiplier *= remaining + 1
                remaining -= size
        return index

    def size(self, round: int) -> int:
        """Number of isomorphism classes of hands on ``round``."""
        if not 0 <= round < self.rounds:
            raise IndexError(f"round must be in [0, {self.rounds}), got {round}")
        return self.round_sizes[round]

    def new_state(self) -> HandIndexerState:
        """Fresh state for indexing a hand round by round."""
        return HandIndexerState()

    def index_all(self, cards: Iterable[int]) -> list[int]:
        """Index a whole hand, returning its index on every round."""
        cards = list(cards)
        if len(cards) != self.total_cards:
            raise ValueError(f"expected {self.total_cards} cards, got {len(cards)}")
        state = self.new_state()
        return [
            self.index_next_round(cards[start:start + n], state)
            for start, n in zip(self.round_start, self.cards_per_round)
        ]

    def index_last(self, cards: Iterable[int]) -> int:
        """Index a whole hand on its last round."""
        return self.index_all(cards)[-1]

    def index_next_round(self, cards: Iterable[int], state: HandIndexerState) -> int:
        """Add the next round's cards to ``state`` and return the hand's index so far."""
        rnd = state.round
        if rnd >= self.rounds:
            raise ValueError("every round of this hand has already been indexed")
        cards = list(cards)
        expected = self.cards_per_round[rnd]
        if len(cards) != expected:
            raise ValueError(f"round {rnd} takes {expected} cards, got {len(cards)}")

        ranks = [0] * SUITS
        shifted = [0] * SUITS
        for card in cards:
            rank, suit = get_rank(card), get_suit(card)
            bit = 1 << rank
            if ranks[suit] & bit or state.used_ranks[suit] & bit:
                raise ValueError(f"card {card} is dealt twice")
            ranks[suit] |= bit
            shifted[suit] |= bit >> ((bit - 1) & state.used_ranks[suit]).bit_count()

        for suit in range(SUITS):
            used_size = state.used_ranks[suit].bit_count()
            this_size = ranks[suit].bit_count()
            state.suit_index[suit] += state.suit_multiplier[suit] * rank_set_to_index(shifted[suit])
            state.suit_multiplier[suit] *= comb(RANKS - used_size, this_size)
            state.used_ranks[suit] |= ranks[suit]

        remaining = expected
        for suit in range(SUITS - 1):
            size = ranks[suit].bit_count()
            state.permutation_index += state.permutation_multiplier * size
            state.permutation_multiplier *= remaining + 1
            remaining -= size
        state.round += 1

        tables = self._rounds[rnd]
        config_id, pi = tables.permutations[state.permutation_index]
        config = tables.configurations[config_id]
        suit_index = [state.suit_index[p] for p in pi]
        suit_multiplier = [state.suit_multiplier[p] for p in pi]

        index = config.offset
        multiplier = 1
        start = 0
        for length in config.groups:
            values = sorted(suit_index[start:start + length])
            part = sum(group_choose(value + t, t + 1) for t, value in enumerate(values))
            index += multiplier * part
            multiplier *= group_choose(suit_multiplier[start] + length - 1, length)
            start += length
        return index

    def unindex(self, round: int, index: int) -> list[int]:
        """Return the canonical hand, through ``round``, whose index is ``index``."""
        if not 0 <= round < self.rounds:
            raise IndexError(f"round must be in [0, {self.rounds}), got {round}")
        if not 0 <= index < self.round_sizes[round]:
            raise IndexError(f"index must be in [0, {self.round_sizes[round]}), got {index}")

        tables = self._rounds[round]
        config = tables.configurations[bisect_right(tables.offsets, index) - 1]
        index -= config.offset

        suit_index: list[int] = []
        start = 0
        for length in config.groups:
            suit_size = config.suit_sizes[start]
            index, group_index = divmod(index, group_choose(suit_size + length - 1, length))
            suit_index.extend(_decode_group(group_index, length, suit_size))
            start += length

        cards = [0] * (self.round_start[round] + self.cards_per_round[round])
        location = list(self.round_start)
        for suit, (per_round, code) in enumerate(zip(config.counts, suit_index)):
            used = 0
            taken = 0
            for rnd, n in enumerate(per_round):
                code, round_index = divmod(code, comb(RANKS - taken, n))
                taken += n
                shifted = index_to_rank_set(n, round_index)
                rank_set = 0
                while shifted:
                    low = shifted & -shifted
                    shifted ^= low
                    rank = nth_unset(used, low.bit_length() - 1)
                    rank_set |= 1 << rank
                    cards[location[rnd]] = make_card(suit, rank)
                    location[rnd] += 1
                used |= rank_set
        return cards