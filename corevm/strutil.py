"""Small string helpers: splitting, trimming, bounded comparison and line reading."""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator
from typing import AnyStr

_TRIM_CHARS = " ,\n\t"
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1


def split(text: str, sep: str) -> list[str]:
    """Split `text` on the single character `sep`, dropping empty fields."""
    if len(sep) != 1:
        raise ValueError("separator must be a single character")
    return [part for part in text.split(sep) if part]


def trim(text: str) -> str:
    """Remove spaces, commas, newlines and tabs from both ends of `text`."""
    return text.strip(_TRIM_CHARS)


def exact_sqrt(number: int) -> int:
    """Integer square root of `number` if it is a perfect square, otherwise 0."""
    if number <= 0:
        return 0
    root = math.isqrt(number)
    return root if root * root == number else 0


def find_within(haystack: str, needle: str, limit: int) -> int | None:
    """Index of the first `needle` lying wholly in the first `limit` characters.

    An empty needle is found at index 0; None means no match.
    """
    if not needle:
        return 0
    for index in range(min(len(haystack), max(limit, 0))):
        if haystack.startswith(needle, index) and limit - index >= len(needle):
            return index
    return None


def _code(text: str, index: int) -> int:
    return ord(text[index]) if index < len(text) else 0


def compare(first: str, second: str) -> int:
    """Difference of the first differing characters; 0 when the strings are equal.

    The end of a string compares as a character with code 0.
    """
    for index, (left, right) in enumerate(zip(first, second)):
        if left != right:
            return ord(left) - ord(right)
    common = min(len(first), len(second))
    return _code(first, common) - _code(second, common)


def compare_n(first: str, second: str, count: int) -> int:
    """Like compare, looking at no more than `count` characters."""
    if count <= 0:
        return 0
    return compare(first[:count], second[:count])


def equal_n(first: str, second: str, count: int) -> bool:
    """True when the first `count` characters of both strings agree."""
    if count <= 0:
        return True
    return first[:count] == second[:count]


def bounded_concat(dst: str, src: str, size: int) -> tuple[str, int]:
    """Append `src` to `dst` as if into a buffer of `size` bytes.

    Returns the resulting string and the length the full result would have had.
    If `dst` is already longer than `size` it is left as is and the returned
    length is ``len(src) + size``.
    """
    if len(dst) > size:
        return dst, len(src) + size
    room = size - len(dst)
    return dst + src[: max(room - 1, 0)], len(dst) + len(src)


def read_lines(stream: Iterable[AnyStr]) -> Iterator[AnyStr]:
    """Yield the lines of a text or binary stream without their newline.

    A last line without a newline is yielded too, unless it is empty.
    """
    for line in stream:
        newline = "\n" if isinstance(line, str) else b"\n"
        if line.endswith(newline):
            yield line[:-1]
        elif line:
            yield line


def format_int(number: int) -> str:
    """Decimal text of a 32-bit signed integer."""
    if not _INT_MIN <= number <= _INT_MAX:
        raise OverflowError(f"{number} does not fit in 32 bits")
    return f"{number:d}"