"""A small ``sprintf`` supporting ``%c %s %d %o %x %u %%`` with width and ``0`` fill."""

from __future__ import annotations

SPRINTF_MAX = 255

_DIGITS = "0123456789ABCDEF"
_DECIMAL = "0123456789"


class _Output:
    def __init__(self, room: int) -> None:
        self._parts: list[str] = []
        self._room = room

    def put(self, text: str) -> None:
        if self._room <= 0:
            return
        text = text[: self._room]
        self._parts.append(text)
        self._room -= len(text)

    def put_char(self, ch: str, width: int) -> None:
        self.put(ch + " " * max(width - 1, 0))

    def put_string(self, s: str, width: int) -> None:
        self.put(s + " " * max(width - len(s), 0))

    def put_number(self, value: int, base: int, width: int, fill: str) -> None:
        digits = []
        while True:
            value, digit = divmod(value, base)
            digits.append(_DIGITS[digit])
            if value == 0:
                break
        text = "".join(reversed(digits))
        self.put(fill * max(width - len(text), 0) + text)

    def text(self) -> str:
        return "".join(self._parts)


def _take(values, conversion: str):
    try:
        return next(values)
    except StopIteration:
        raise TypeError(f"not enough arguments for %{conversion}") from None


def sprintf(fmt: str, *args) -> str:
    """Format ``args`` according to ``fmt``; output is capped at SPRINTF_MAX - 1 characters.

    Fields are left-justified with spaces for ``%c``, ``%s`` and ``%%``, and
    right-justified for numbers. Hexadecimal digits are upper case. Unknown
    conversions produce nothing and consume no argument.
    """
    out = _Output(SPRINTF_MAX - 1)
    values = iter(args)
    chars = iter(fmt.split("\0", 1)[0])
    for c in chars:
        if c != "%":
            out.put(c)
            continue
        c = next(chars, "")
        width = 0
        fill = "0" if c == "0" else " "
        while c and c in _DECIMAL:
            width = 10 * width + int(c)
            c = next(chars, "")
        if c in ("l", "L") and c:
            c = next(chars, "")
        if not c:
            break

        if c == "%":
            out.put_char("%", width)
        elif c == "c":
            arg = _take(values, c)
            ch = arg[0] if isinstance(arg, str) else chr(int(arg) & 0xFF)
            out.put_char(ch, width)
        elif c == "s":
            arg = _take(values, c)
            text = "(null)" if arg is None else str(arg).split("\0", 1)[0]
            out.put_string(text, width)
        elif c == "d":
            value = ((int(_take(values, c)) + 0x80000000) & 0xFFFFFFFF) - 0x80000000
            if value < 0:
                out.put_char("-", 1)
                width -= 1
                value = -value
            out.put_number(value & 0xFFFFFFFF, 10, width, fill)
        elif c in "oxu":
            value = int(_take(values, c)) & 0xFFFFFFFF
            base = {"o": 8, "x": 16, "u": 10}[c]
            out.put_number(value, base, width, fill)
    return out.text()