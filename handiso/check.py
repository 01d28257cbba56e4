"""Self-check for the hand indexer: table sizes, exhaustive and random round trips."""

from __future__ import annotations

import argparse
import random
import sys
from itertools import permutations
from typing import Sequence

from handiso.deck import CARDS, RANK_TO_CHAR, RANKS, SUITS, get_rank, get_suit, make_card
from handiso.indexer import HandIndexer

DEFAULT_ITERATIONS = 10_000_000

_EXPECTED_SIZES = {
    (2,): (169,),
    (2, 3): (169, 1286792),
    (2, 3, 1): (169, 1286792, 55190538),
    (2, 3, 1, 1): (169, 1286792, 55190538, 2428287420),
}


class CheckError(Exception):
    """Raised when the indexer fails one of its consistency checks."""


def preflop_table(indexer: HandIndexer) -> list[list[int]]:
    """Index of every two-card starting hand, ranks from ace down.

    Entries above the diagonal are suited hands, the diagonal and below are
    offsuit hands and pairs.
    """
    table = []
    for i in range(RANKS):
        row = []
        for j in range(RANKS):
            first = make_card(0, RANKS - 1 - j)
            second = make_card(1 if j <= i else 0, RANKS - 1 - i)
            row.append(indexer.index_last([first, second]))
        table.append(row)
    return table


def _format_preflop_table(table: list[list[int]]) -> list[str]:
    header = " " + "".join(f"  {RANK_TO_CHAR[RANKS - 1 - i]} " for i in range(RANKS))
    lines = [header]
    for i, row in enumerate(table):
        lines.append(RANK_TO_CHAR[RANKS - 1 - i] + "".join(f" {value:3d}" for value in row))
    return lines


def full_check(indexer: HandIndexer) -> list[int]:
    """Index every ordered hand and unindex every index on the last round.

    Returns how many ordered hands fell on each index.
    """
    last = indexer.rounds - 1
    size = indexer.size(last)
    seen = [0] * size
    for cards in permutations(range(CARDS), indexer.total_cards):
        index = indexer.index_last(cards)
        if not 0 <= index < size:
            raise CheckError(f"hand {list(cards)} indexed to {index}, outside [0, {size})")
        seen[index] += 1

    for index in range(size):
        cards = indexer.unindex(last, index)
        again = indexer.index_last(cards)
        if again != index:
            raise CheckError(f"index {index} unindexed to {cards}, which indexes to {again}")
    return seen


def random_check(indexer: HandIndexer, iterations: int = DEFAULT_ITERATIONS,
                 rng: random.Random | None = None) -> int:
    """Check random hands against suit-renamed, reordered copies of themselves.

    Returns the number of hands checked.
    """
    if iterations < 0:
        raise ValueError(f"iterations must be non-negative, got {iterations}")
    rng = rng if rng is not None else random.Random()
    last = indexer.rounds - 1
    size = indexer.size(last)
    suits = list(range(SUITS))

    for _ in range(iterations):
        hand = rng.sample(range(CARDS), indexer.total_cards)
        rng.shuffle(suits)
        renamed = [make_card(suits[get_suit(card)], get_rank(card)) for card in hand]
        for start, n in zip(indexer.round_start, indexer.cards_per_round):
            segment = renamed[start:start + n]
            rng.shuffle(segment)
            renamed[start:start + n] = segment

        index = indexer.index_last(hand)
        other = indexer.index_last(renamed)
        if not 0 <= index < size:
            raise CheckError(f"hand {hand} indexed to {index}, outside [0, {size})")
        if index != other:
            raise CheckError(f"isomorphic hands {hand} and {renamed} indexed to {index} and {other}")

        canonical = indexer.unindex(last, index)
        again = indexer.index_last(canonical)
        if again != index:
            raise CheckError(f"index {index} unindexed to {canonical}, which indexes to {again}")
    return iterations


def _run(iterations: int, skip_full_flop: bool) -> None:
    print("testing hand-isomorphism...")
    preflop = HandIndexer([2])
    flop = HandIndexer([2, 3])
    turn = HandIndexer([2, 3, 1])
    river = HandIndexer([2, 3, 1, 1])

    print("sizes: " + " ".join(str(n) for n in river.round_sizes))
    print("configurations: " + " ".join(str(n) for n in river.configuration_counts))
    print("permutations: " + " ".join(str(n) for n in river.permutation_counts))

    for indexer in (preflop, flop, turn, river):
        expected = _EXPECTED_SIZES[indexer.cards_per_round]
        if indexer.round_sizes != expected:
            raise CheckError(
                f"sizes for {list(indexer.cards_per_round)} are {list(indexer.round_sizes)}, "
                f"expected {list(expected)}"
            )

    print("preflop table:")
    for line in _format_preflop_table(preflop_table(preflop)):
        print(line)

    print("full preflop...")
    full_check(preflop)

    if not skip_full_flop:
        print("full flop...")
        full_check(flop)

    print("random turn...")
    random_check(turn, iterations)

    print("random river...")
    random_check(river, iterations)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the self-check and return an exit status."""
    parser = argparse.ArgumentParser(description="Check the hand indexer for consistency.")
    parser.add_argument("--iterations", type=int, default=DEFAULT_ITERATIONS,
                        help="random hands to check on the turn and on the river")
    parser.add_argument("--skip-full-flop", action="store_true",
                        help="skip the exhaustive check of every flop hand")
    args = parser.parse_args(argv)
    if args.iterations < 0:
        parser.error("--iterations must be non-negative")
    try:
        _run(args.iterations, args.skip_full_flop)
    except CheckError as error:
        print(f"check failed: {error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())