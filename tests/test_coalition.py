from __future__ import annotations

import itertools

import pytest

from sparse_shapley.model.coalition import Coalition
from sparse_shapley.utils.coalition_encoding import normalize_coalition


def test_coalition_creation() -> None:
    c = Coalition([1, 2, 3])
    assert c.size() == 3
    assert len(c) == 3
    assert list(c) == [1, 2, 3]


def test_permutations_are_equal_and_hash_identically() -> None:
    base = Coalition([1, 2, 3])
    for perm in itertools.permutations([1, 2, 3]):
        c = Coalition(perm)
        assert c == base
        assert hash(c) == hash(base)
    assert len({Coalition(p) for p in itertools.permutations([4, 5, 6, 7])}) == 1


def test_duplicates_collapse() -> None:
    assert Coalition([2, 2, 1, 1]) == Coalition([1, 2])
    assert Coalition([2, 2, 1, 1]).size() == 2


def test_empty_coalition() -> None:
    empty = Coalition()
    assert empty.size() == 0
    assert empty == Coalition([])
    assert not empty
    assert str(empty) == "{}"


def test_contains() -> None:
    c = Coalition([3, 1])
    assert c.contains(1)
    assert 3 in c
    assert not c.contains(2)


def test_subtract() -> None:
    c = Coalition([1, 2, 3])
    assert c.subtract(2) == Coalition([1, 3])
    assert c == Coalition([1, 2, 3])
    assert c.subtract(9) == c
    assert Coalition([5]).subtract(5) == Coalition()


def test_negative_player_rejected() -> None:
    with pytest.raises(ValueError):
        Coalition([-1, 2])


def test_str() -> None:
    assert str(Coalition([3, 1, 2])) == "{1,2,3}"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("{1,2}", [1, 2]),
        ("{}", []),
        ("(2, 1)", [1, 2]),
        ("('0','1')", [0, 1]),
        ("[3, 1]", [1, 3]),
        ("4,5", [4, 5]),
        ("7", [7]),
        ("0b0110", [1, 2]),
        ("10", [10]),
        ("11", [11]),
        ("100", [100]),
        ("", []),
        (0b101, [0, 2]),
        (frozenset({1, 2}), [1, 2]),
        ((2, 1, 2), [1, 2]),
        (float("nan"), []),
    ],
)
def test_normalize_coalition(raw, expected) -> None:  # type: ignore[no-untyped-def]
    assert normalize_coalition(raw) == Coalition(expected)


def test_bitstring_requires_prefix_and_binary_digits() -> None:
    assert normalize_coalition("0B101") == Coalition([0, 2])
    with pytest.raises(ValueError):
        normalize_coalition("0b012")
    with pytest.raises(ValueError):
        normalize_coalition("0b")


def test_normalize_coalition_rejects_unknown_types() -> None:
    with pytest.raises(ValueError):
        normalize_coalition(1.5)
    with pytest.raises(ValueError):
        normalize_coalition(True)
