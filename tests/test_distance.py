from __future__ import annotations

from itertools import product
from typing import List, Optional

import pytest

from utf8_levenshtein import distance as distance_module
from utf8_levenshtein.distance import AllocationFailure, levenshtein
from utf8_levenshtein.utils.codepoints import count_code_points, iter_code_points


def reference_distance(a: bytes, b: bytes) -> int:
    """Full-matrix edit distance over decoded code points."""

    left: List[int] = list(iter_code_points(a))
    right: List[int] = list(iter_code_points(b))
    matrix = [[0] * (len(right) + 1) for _ in range(len(left) + 1)]
    for i in range(len(left) + 1):
        matrix[i][0] = i
    for j in range(len(right) + 1):
        matrix[0][j] = j
    for i in range(1, len(left) + 1):
        for j in range(1, len(right) + 1):
            cost = 0 if left[i - 1] == right[j - 1] else 1
            matrix[i][j] = min(
                matrix[i - 1][j] + 1,
                matrix[i][j - 1] + 1,
                matrix[i - 1][j - 1] + cost,
            )
    return matrix[len(left)][len(right)]


CORPUS = [
    b"",
    b"a",
    b"ab",
    b"xab",
    b"abc",
    b"kitten",
    b"sitting",
    "café".encode("utf-8"),
    b"cafe",
    "因為我是中國人".encode("utf-8"),
    "😊😢".encode("utf-8"),
    b"a\x80b",
    b"\xffab\xc3",
    b"xabxcdxxefxgx",
    b"abcdefg",
]


@pytest.mark.parametrize(
    "a, b, max, expected",
    [
        ("test", "test", None, 0),
        ("a", "b", None, 1),
        ("kitten", "sitting", None, 3),
        ("", "", None, 0),
        ("", "abc", None, 3),
        ("abc", "", None, 3),
        ("kitten", "sitting", 2, 2),
        ("same", "same", 5, 0),
        ("😊", "😢", None, 1),
        ("café", "cafe", None, 1),
        ("你好", "你坏", None, 1),
        ("因為我是中國人所以我會說中文", "因為我是英國人所以我會說英文", None, 2),
        ("xabxcdxxefxgx", "abcdefg", None, 6),
    ],
)
def test_known_distances(a: str, b: str, max: Optional[int], expected: int) -> None:
    assert levenshtein(a.encode("utf-8"), b.encode("utf-8"), max) == expected


def test_accepts_str_and_buffers() -> None:
    assert levenshtein("kitten", "sitting") == 3
    assert levenshtein(bytearray(b"kitten"), memoryview(b"sitting")) == 3


def test_rejects_unsupported_types() -> None:
    with pytest.raises(TypeError):
        levenshtein(["a"], b"a")  # type: ignore[arg-type]


@pytest.mark.parametrize("bad_max", [-1, 1.5, True])
def test_rejects_invalid_cutoff(bad_max: object) -> None:
    with pytest.raises(ValueError):
        levenshtein(b"a", b"b", bad_max)  # type: ignore[arg-type]


def test_symmetry_identity_and_bound() -> None:
    for a, b in product(CORPUS, repeat=2):
        forward = levenshtein(a, b)
        assert forward == levenshtein(b, a)
        assert forward == reference_distance(a, b)
        assert forward <= max(count_code_points(a), count_code_points(b))
    for a in CORPUS:
        assert levenshtein(a, a) == 0


def test_empty_input_returns_code_point_count() -> None:
    for text in CORPUS:
        assert levenshtein(b"", text) == count_code_points(text)


def test_cutoff_clamps_true_distance() -> None:
    non_empty = [text for text in CORPUS if count_code_points(text)]
    for a, b in product(non_empty, repeat=2):
        exact = reference_distance(a, b)
        for cutoff in range(0, 8):
            assert levenshtein(a, b, cutoff) == min(exact, cutoff)


def test_cutoff_does_not_stop_on_corner_cell_alone() -> None:
    # After the first row the corner cell is 2 although the answer is 1.
    assert levenshtein(b"ab", b"xab", 2) == 1


def test_cutoff_not_applied_to_empty_input() -> None:
    assert levenshtein(b"", b"abc", 2) == 3
    assert levenshtein(b"abc", b"", 0) == 3


def test_zero_cutoff_boundary() -> None:
    assert levenshtein(b"abc", b"abc", 0) == 0
    assert levenshtein(b"abc", b"abd", 0) == 0
    assert levenshtein(b"a", b"abc", 0) == 0


def test_malformed_bytes_are_ignored() -> None:
    assert levenshtein(b"a\x80bc", b"abc") == 0
    assert levenshtein(b"\xffkitten", b"sitting") == 3


def test_allocation_failure_is_reported(monkeypatch: pytest.MonkeyPatch) -> None:
    def exhausted(*_args: object) -> None:
        raise MemoryError

    monkeypatch.setattr(distance_module, "range", exhausted, raising=False)
    with pytest.raises(AllocationFailure) as excinfo:
        levenshtein(b"kitten", b"sitting")
    assert isinstance(excinfo.value.__cause__, MemoryError)
