from __future__ import annotations

"""UTF-8 aware Levenshtein distance with an optional cutoff."""

import logging
from typing import List, Optional, Union

from .utils.codepoints import BytesLike, count_code_points, iter_code_points

logger = logging.getLogger(__name__)

TextLike = Union[BytesLike, str]


class AllocationFailure(MemoryError):
    """Raised when the working row cannot be allocated."""


def _as_bytes(value: TextLike, name: str) -> BytesLike:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return value
    if isinstance(value, str):
        # Lone surrogates survive as malformed sequences the decoder skips.
        return value.encode("utf-8", "surrogatepass")
    raise TypeError(
        f"{name} must be bytes-like or str, not {type(value).__name__}"
    )


def _check_cutoff(max: Optional[int]) -> None:
    if max is None:
        return
    if isinstance(max, bool) or not isinstance(max, int):
        raise ValueError(f"max must be a non-negative integer, got {max!r}")
    if max < 0:
        raise ValueError(f"max must be non-negative, got {max}")


def _allocate_row(length: int) -> List[int]:
    try:
        return list(range(length))
    except MemoryError as exc:
        logger.warning("Could not allocate working row of %d entries", length)
        raise AllocationFailure(
            f"unable to allocate working row of {length} entries"
        ) from exc


def levenshtein(a: TextLike, b: TextLike, max: Optional[int] = None) -> int:
    """Return the edit distance between the code points of *a* and *b*.

    Insertions, deletions and substitutions each cost 1. Malformed UTF-8 is
    skipped rather than reported. When *max* is given the result is
    ``min(distance, max)`` and the sweep stops as soon as the distance is
    known to reach *max*. If either input decodes to nothing, the length of
    the other is returned as-is, without the cutoff applied.
    """

    a_bytes = _as_bytes(a, "a")
    b_bytes = _as_bytes(b, "b")
    _check_cutoff(max)

    if a_bytes == b_bytes:
        return 0

    a_len = count_code_points(a_bytes)
    b_len = count_code_points(b_bytes)
    if a_len == 0:
        return b_len
    if b_len == 0:
        return a_len

    left, right = a_bytes, b_bytes
    ll, rl = a_len, b_len
    if ll > rl:
        left, right = right, left
        ll, rl = rl, ll

    if max is not None and rl - ll >= max:
        logger.debug("Length difference %d meets cutoff %d", rl - ll, max)
        return max

    row_values = _allocate_row(ll + 1)

    for row, right_char in enumerate(iter_code_points(right), start=1):
        prev_diag = row_values[0]
        row_values[0] = row
        remaining = rl - row
        # Cheapest way any cell of this row can still reach the corner.
        bound = row + abs(remaining - ll)

        for col, left_char in enumerate(iter_code_points(left), start=1):
            cost = 0 if left_char == right_char else 1
            temp = row_values[col]
            value = min(
                temp + 1,  # deletion
                row_values[col - 1] + 1,  # insertion
                prev_diag + cost,  # substitution
            )
            row_values[col] = value
            prev_diag = temp
            reach = value + abs(remaining - (ll - col))
            if reach < bound:
                bound = reach

        if max is not None and bound >= max:
            logger.debug("Cutoff %d reached after row %d of %d", max, row, rl)
            return max

    return row_values[ll]


__all__ = ["AllocationFailure", "TextLike", "levenshtein"]
