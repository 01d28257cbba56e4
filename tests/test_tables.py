from math import comb

import pytest

from handiso.deck import RANKS, SUITS
from handiso.tables import (
    MAX_GROUP_INDEX,
    RANK_MASK,
    SUIT_PERMUTATIONS,
    group_choose,
    index_to_rank_set,
    nth_unset,
    rank_set_to_index,
    suit_permutation,
)


def test_nth_unset_on_empty_mask_is_identity():
    for n in range(RANKS):
        assert nth_unset(0, n) == n


def test_nth_unset_skips_used_bits():
    used = 0b1011
    free_positions = [b for b in range(RANKS) if not used >> b & 1]
    for n, expected in enumerate(free_positions):
        assert nth_unset(used, n) == expected


def test_nth_unset_result_is_unset():
    for used in (0b1, 0b1010101, RANK_MASK ^ (1 << 7)):
        for n in range((~used & RANK_MASK).bit_count()):
            position = nth_unset(used, n)
            assert not used >> position & 1
            assert (~used & ((1 << position) - 1) & RANK_MASK).bit_count() == n


def test_nth_unset_raises_when_exhausted():
    with pytest.raises(IndexError):
        nth_unset(RANK_MASK, 0)
    with pytest.raises(IndexError):
        nth_unset(0, RANKS)


def test_nth_unset_rejects_bad_mask():
    with pytest.raises(ValueError):
        nth_unset(1 << RANKS, 0)


def test_rank_set_index_of_empty_and_singletons():
    assert rank_set_to_index(0) == 0
    for rank in range(RANKS):
        assert rank_set_to_index(1 << rank) == rank


def test_rank_set_index_is_bijection_per_size():
    by_size = {}
    for rank_set in range(1 << RANKS):
        by_size.setdefault(rank_set.bit_count(), []).append(rank_set_to_index(rank_set))
    for size, indices in by_size.items():
        assert sorted(indices) == list(range(comb(RANKS, size)))


def test_rank_set_round_trip():
    for rank_set in range(0, 1 << RANKS, 7):
        size = rank_set.bit_count()
        assert index_to_rank_set(size, rank_set_to_index(rank_set)) == rank_set


def test_largest_rank_set_has_largest_index():
    for size in range(RANKS + 1):
        top = ((1 << size) - 1) << (RANKS - size)
        assert rank_set_to_index(top) == comb(RANKS, size) - 1
        assert index_to_rank_set(size, comb(RANKS, size) - 1) == top


def test_rank_set_errors():
    with pytest.raises(ValueError):
        rank_set_to_index(-1)
    with pytest.raises(ValueError):
        index_to_rank_set(RANKS + 1, 0)
    with pytest.raises(IndexError):
        index_to_rank_set(2, comb(RANKS, 2))


def test_suit_permutations_are_distinct_permutations():
    perms = [suit_permutation(i) for i in range(24)]
    assert len(set(perms)) == 24
    for i, perm in enumerate(perms):
        assert sorted(perm) == list(range(SUITS))
        assert tuple(perm) == tuple(SUIT_PERMUTATIONS[i])


def test_first_suit_permutation_is_identity():
    assert suit_permutation(0) == tuple(range(SUITS))


def test_suit_permutation_out_of_range():
    with pytest.raises(IndexError):
        suit_permutation(len(SUIT_PERMUTATIONS))
    with pytest.raises(IndexError):
        suit_permutation(-1)


@pytest.mark.parametrize("n", [1, 2, 5, 13, 286, 1000])
def test_group_choose_pascal_rule(n):
    for k in range(1, SUITS + 1):
        assert group_choose(n, k) == group_choose(n - 1, k - 1) + group_choose(n - 1, k)


@pytest.mark.parametrize("n", [0, 3, 100, MAX_GROUP_INDEX - 1])
def test_group_choose_edges(n):
    assert group_choose(n, 0) == 1
    assert group_choose(n, 1) == n


def test_group_choose_small_n_above_k_is_zero():
    assert group_choose(2, 3) == 0
    assert group_choose(0, SUITS) == 0


def test_group_choose_errors():
    with pytest.raises(ValueError):
        group_choose(10, SUITS + 1)
    with pytest.raises(ValueError):
        group_choose(MAX_GROUP_INDEX, 1)
    with pytest.raises(ValueError):
        group_choose(-1, 0)