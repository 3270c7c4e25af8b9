from __future__ import annotations

"""Lazy UTF-8 decoding into Unicode code points.

Malformed input never raises: a bad leading byte or an invalid sequence is
stepped over one byte at a time, and a sequence that is cut short by the end
of the buffer ends the iteration.
"""

from typing import Iterator, Optional, Union

BytesLike = Union[bytes, bytearray, memoryview]

_MAX_CODE_POINT = 0x10FFFF
_SURROGATES = range(0xD800, 0xE000)

# Smallest code point that may legitimately use an n-byte sequence.
_OVERLONG_FLOOR = {2: 0x80, 3: 0x800, 4: 0x10000}


def sequence_length(lead: int) -> Optional[int]:
    """Return the byte length announced by *lead*, or ``None`` if invalid."""

    if lead < 0x80:
        return 1
    if lead & 0xE0 == 0xC0:
        return 2
    if lead & 0xF0 == 0xE0:
        return 3
    if lead & 0xF8 == 0xF0:
        return 4
    return None


def decode_sequence(data: BytesLike, start: int, length: int) -> Optional[int]:
    """Decode ``data[start:start + length]`` into a code point.

    Returns ``None`` for bad continuation bytes, overlong encodings,
    surrogates and values beyond U+10FFFF.
    """

    lead = data[start]
    if length == 1:
        return lead
    value = lead & (0x7F >> length)
    for offset in range(1, length):
        byte = data[start + offset]
        if byte & 0xC0 != 0x80:
            return None
        value = (value << 6) | (byte & 0x3F)
    if value < _OVERLONG_FLOOR[length]:
        return None
    if value in _SURROGATES or value > _MAX_CODE_POINT:
        return None
    return value


class CodePointDecoder:
    """Single-pass iterator yielding the code points of a UTF-8 buffer."""

    __slots__ = ("_data", "_cursor")

    def __init__(self, data: BytesLike) -> None:
        self._data = data
        self._cursor = 0

    @property
    def cursor(self) -> int:
        return self._cursor

    def __iter__(self) -> Iterator[int]:
        return self

    def __next__(self) -> int:
        data = self._data
        end = len(data)
        while self._cursor < end:
            start = self._cursor
            length = sequence_length(data[start])
            if length is None:
                self._cursor += 1
                continue
            if start + length > end:
                # Truncated tail: drop it and stay exhausted.
                self._cursor = end
                break
            code_point = decode_sequence(data, start, length)
            if code_point is None:
                self._cursor += 1
                continue
            self._cursor = start + length
            return code_point
        raise StopIteration


def iter_code_points(data: BytesLike) -> CodePointDecoder:
    """Return a fresh decoder over *data*."""

    return CodePointDecoder(data)


def count_code_points(data: BytesLike) -> int:
    """Count the code points decoded from *data*, skipping malformed bytes."""

    count = 0
    for _ in CodePointDecoder(data):
        count += 1
    return count


__all__ = [
    "BytesLike",
    "CodePointDecoder",
    "count_code_points",
    "decode_sequence",
    "iter_code_points",
    "sequence_length",
]
