"""Unit tests for edit distance"""

import pytest
from motofin_gateway.domain.matching import levenshtein_distance


def test_levenshtein_classic_example():
    """kitten -> sitting: two substitutions and one insertion"""
    assert levenshtein_distance("kitten", "sitting") == 3


@pytest.mark.parametrize("word", ["", "a", "deportiva", "señoritera", "URBANA Y/O TRABAJO"])
def test_levenshtein_identity(word):
    assert levenshtein_distance(word, word) == 0


@pytest.mark.parametrize(
    "a, b",
    [
        ("kitten", "sitting"),
        ("pistera", "pisteras"),
        ("", "trocha"),
        ("scoter", "scooter"),
        ("electrica", "ecologica"),
    ],
)
def test_levenshtein_symmetric(a, b):
    assert levenshtein_distance(a, b) == levenshtein_distance(b, a)


def test_levenshtein_against_empty_is_length():
    assert levenshtein_distance("", "enduro") == 6
    assert levenshtein_distance("moped", "") == 5


def test_levenshtein_single_edits():
    assert levenshtein_distance("cross", "cros") == 1  # deletion
    assert levenshtein_distance("nmax", "nmaxx") == 1  # insertion
    assert levenshtein_distance("pcx", "pcz") == 1  # substitution


