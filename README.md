# handiso

`handiso` maps poker hands to a dense index. Every hand that turns into
another by renaming suits gets the same index as that hand. It also recovers a
canonical hand from any such index.

Hands may be dealt over several rounds, for example hole cards, then the flop,
the turn and the river. The order of cards within a round does not matter. The
round in which each card arrives does matter.

## Cards

`handiso.deck` encodes a card as an integer from 0 to 51, equal to
`rank * 4 + suit`. Ranks run over `23456789TJQKA` (0–12) and suits over
`shdc` (0–3). `get_rank`, `get_suit` and `make_card` raise `ValueError` for
values out of range.

```python
from handiso.deck import make_card, get_rank, get_suit

ace_of_spades = make_card(0, 12)
assert get_rank(ace_of_spades) == 12
assert get_suit(ace_of_spades) == 0
```

## Indexing hands

Build a `HandIndexer` from the number of cards dealt in each round. Building it
computes lookup tables. That costs far more than indexing a single hand, so
build an indexer once and reuse it.

```python
from handiso.indexer import HandIndexer

preflop = HandIndexer([2])
assert preflop.size(0) == 169

river = HandIndexer([2, 3, 1, 1])
print(river.size(3))            # 2428287420
print(river.round_sizes)        # (169, 1286792, 55190538, 2428287420)

cards = [51, 47, 0, 4, 8, 12, 16]
last = river.index_last(cards)  # index on the final round
every = river.index_all(cards)  # list of indices, one per round
```

You can also index a hand one round at a time as the cards are dealt.
`new_state()` returns a fresh `HandIndexerState`. Each call to
`index_next_round` takes only that round's cards and returns the index so far:

```python
state = river.new_state()
river.index_next_round([51, 47], state)
river.index_next_round([0, 4, 8], state)
```

`unindex(round, index)` returns the canonical hand for an index, covering all
rounds up to and including `round`. Indexing that hand gives the same index
back:

```python
canonical = river.unindex(3, last)
assert river.index_last(canonical) == last
```

Errors:

- `HandIndexer` raises `ValueError` for these configurations:
  - no rounds;
  - more than 8 rounds;
  - a negative card count;
  - more than 52 cards in total.
- Indexing raises `ValueError` when:
  - a card is dealt twice;
  - a round has the wrong number of cards;
  - every round has already been indexed.
- `size` and `unindex` raise `IndexError` for an out-of-range round or index.

## Self-check

The `handiso-check` command runs a consistency check:

1. It builds indexers for the preflop, flop, turn and river.
2. It prints their sizes, configuration counts and permutation counts, and checks the sizes against known values.
3. It prints the preflop index table.
4. It checks every preflop hand exhaustively, and every flop hand exhaustively.
5. It checks random turn and river hands.

```
handiso-check
handiso-check --iterations 10000 --skip-full-flop
```

- `--iterations` sets how many random hands are checked on the turn and on the river. The default is 10,000,000.
- `--skip-full-flop` leaves out the exhaustive flop check, which visits every ordered five-card hand.

Both defaults take a long time. The command exits with status 1, and reports the failure on standard error, when a check fails.

The same checks are available from Python in `handiso.check`:

- `preflop_table(indexer)` returns the 13×13 table of preflop indices.
- `full_check(indexer)` indexes every ordered hand and round-trips every index. It returns how many ordered hands fell on each index.
- `random_check(indexer, iterations, rng)` compares random hands with suit-renamed, reordered copies of themselves. It returns the number of hands it checked.

`full_check` and `random_check` raise `handiso.check.CheckError` on a failure.