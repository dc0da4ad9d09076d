"""Character classification and conversion on 8-bit character codes."""

from __future__ import annotations

from enum import IntFlag
from typing import Union

CharLike = Union[int, str]


class CharClass(IntFlag):
    """Classes a character code may belong to."""

    CONTROL = 0x01
    DIGIT = 0x02
    UPPER = 0x04
    LOWER = 0x08
    SPACE = 0x10
    PUNCT = 0x20
    HEX = 0x40


def _build_table() -> tuple[CharClass, ...]:
    none = CharClass(0)
    table = [none] * 256
    for code in range(0x20):
        table[code] = CharClass.CONTROL
    for code in range(0x09, 0x0E):
        table[code] |= CharClass.SPACE
    table[0x20] = CharClass.SPACE
    for code in range(0x21, 0x7F):
        table[code] = CharClass.PUNCT
    for code in range(ord("0"), ord("9") + 1):
        table[code] = CharClass.DIGIT | CharClass.HEX
    for code in range(ord("A"), ord("Z") + 1):
        table[code] = CharClass.UPPER
    for code in range(ord("a"), ord("z") + 1):
        table[code] = CharClass.LOWER
    for code in range(ord("A"), ord("F") + 1):
        table[code] |= CharClass.HEX
    for code in range(ord("a"), ord("f") + 1):
        table[code] |= CharClass.HEX
    table[0x7F] = CharClass.CONTROL
    return tuple(table)


_TABLE = _build_table()


def _code(c: CharLike) -> int:
    return ord(c) if isinstance(c, str) else int(c)


def _same_kind(original: CharLike, code: int) -> CharLike:
    return chr(code) if isinstance(original, str) else code


def classify(c: CharLike) -> CharClass:
    """Return the classes of the low byte of ``c``."""
    return _TABLE[_code(c) & 0xFF]


def _has(c: CharLike, mask: CharClass) -> bool:
    return bool(classify(c) & mask)


def isalnum(c: CharLike) -> bool:
    return _has(c, CharClass.UPPER | CharClass.LOWER | CharClass.DIGIT)


def isalpha(c: CharLike) -> bool:
    return _has(c, CharClass.UPPER | CharClass.LOWER)


def isascii(c: CharLike) -> bool:
    return not (_code(c) & ~0x7F)


def iscntrl(c: CharLike) -> bool:
    return _has(c, CharClass.CONTROL)


def isdigit(c: CharLike) -> bool:
    return _has(c, CharClass.DIGIT)


def isgraph(c: CharLike) -> bool:
    classes = classify(c)
    return not (classes & (CharClass.CONTROL | CharClass.SPACE)) and bool(classes)


def islower(c: CharLike) -> bool:
    return _has(c, CharClass.LOWER)


def isprint(c: CharLike) -> bool:
    classes = classify(c)
    return not (classes & CharClass.CONTROL) and bool(classes)


def ispunct(c: CharLike) -> bool:
    return _has(c, CharClass.PUNCT)


def isspace(c: CharLike) -> bool:
    return _has(c, CharClass.SPACE)


def isupper(c: CharLike) -> bool:
    return _has(c, CharClass.UPPER)


def isxdigit(c: CharLike) -> bool:
    return _has(c, CharClass.HEX)


def toascii(c: CharLike) -> CharLike:
    """Keep the low seven bits of ``c``."""
    return _same_kind(c, _code(c) & 0x7F)


def toupper(c: CharLike) -> CharLike:
    """Upper-case a lower-case letter; other codes are returned unchanged."""
    code = _code(c)
    return _same_kind(c, code ^ 0x20) if islower(code) else c


def tolower(c: CharLike) -> CharLike:
    """Lower-case an upper-case letter; other codes are returned unchanged."""
    code = _code(c)
    return _same_kind(c, code ^ 0x20) if isupper(code) else c


def toint(c: CharLike) -> int:
    """Digit value of ``c``: ``'0'``-``'9'`` count from 0, letters from ``'A'``."""
    code = _code(c)
    if code <= ord("9"):
        return code - ord("0")
    return _code(toupper(code)) - ord("A")


def isodigit(c: CharLike) -> bool:
    code = _code(c)
    return ord("0") <= code <= ord("7")


def iscymf(c: CharLike) -> bool:
    """True if ``c`` may start an identifier."""
    return isalpha(c) or _code(c) == ord("_")


def iscym(c: CharLike) -> bool:
    """True if ``c`` may appear inside an identifier."""
    return isalnum(c) or _code(c) == ord("_")