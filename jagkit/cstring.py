"""NUL-terminated string helpers with 8-bit signed character collation."""

from __future__ import annotations

from itertools import zip_longest
from typing import Optional, Union

from jagkit.ctype import isspace

LONG_MAX = 2147483647
LONG_MIN = -LONG_MAX - 1


def _terminated(s: str) -> str:
    """Return ``s`` up to (not including) its first NUL character."""
    return s.split("\0", 1)[0]


def _signed(ch: str) -> int:
    code = ord(ch) & 0xFF
    return code - 0x100 if code >= 0x80 else code


def _pairs(s1: str, s2: str):
    first = [_signed(c) for c in _terminated(s1)] + [0]
    second = [_signed(c) for c in _terminated(s2)] + [0]
    return zip_longest(first, second, fillvalue=0)


def _collate(c1: int, c2: int) -> int:
    # characters that look negative sort low against normal characters
    # but high against the terminating NUL
    if c1 == c2:
        return 0
    if c1 == 0:
        return -1
    if c2 == 0:
        return 1
    return c1 - c2


def strcmp(s1: Optional[str], s2: Optional[str]) -> int:
    """Compare two strings; negative, zero or positive. ``None`` sorts first."""
    if s1 is None:
        return -1 if s2 is not None else 0
    if s2 is None:
        return 1
    c1 = c2 = 0
    for c1, c2 in _pairs(s1, s2):
        if not c1 or c1 != c2:
            break
    return _collate(c1, c2)


def strncmp(s1: Optional[str], s2: Optional[str], n: int) -> int:
    """Compare at most ``n`` characters of two strings."""
    if s1 is None:
        return -1 if s2 is not None else 0
    if s2 is None:
        return 1
    count = n
    c1 = c2 = 0
    for c1, c2 in _pairs(s1, s2):
        count -= 1
        if not (count >= 0 and c1 and c1 == c2):
            break
    if count < 0:
        return 0
    return _collate(c1, c2)


def strrchr(s: str, ch: Union[int, str]) -> Optional[int]:
    """Index of the last occurrence of ``ch`` in ``s``, or ``None``.

    Searching for NUL yields the index of the terminator, i.e. the length.
    """
    wanted = (ord(ch) if isinstance(ch, str) else int(ch)) & 0xFF
    text = _terminated(s)
    if wanted == 0:
        return len(text)
    place = None
    for index, c in enumerate(text):
        if ord(c) & 0xFF == wanted:
            place = index
    return place


def strlen(s: Optional[str]) -> int:
    """Length of ``s`` up to its first NUL; ``None`` has length 0."""
    if s is None:
        return 0
    return len(_terminated(s))


def strcat(dst: str, src: Optional[str]) -> str:
    """Return ``dst`` with ``src`` appended; a ``None`` source appends nothing."""
    if src is None:
        return dst
    return _terminated(dst) + _terminated(src)


def strcpy(src: Optional[str]) -> str:
    """Return a copy of ``src``; ``None`` copies as the empty string."""
    return "" if src is None else _terminated(src)


def strdup(s: Optional[str]) -> str:
    """Return a duplicate of ``s``."""
    return strcpy(s)


def _strtol10(s: str) -> int:
    text = _terminated(s)
    pos = 0
    while pos < len(text) and isspace(text[pos]):
        pos += 1
    negative = False
    if pos < len(text) and text[pos] in "+-":
        negative = text[pos] == "-"
        pos += 1
    digits = []
    for c in text[pos:]:
        if not ("0" <= c <= "9"):
            break
        digits.append(c)
    value = int("".join(digits)) if digits else 0
    if negative:
        value = -value
    return max(LONG_MIN, min(LONG_MAX, value))


def atoi(s: str) -> int:
    """Parse a decimal integer prefix of ``s``; 0 if there is none."""
    return _strtol10(s)


def atol(s: str) -> int:
    """Parse a decimal long prefix of ``s``, clamped to the 32-bit range."""
    return _strtol10(s)