"""Joypad button bits and a stream that tracks newly pressed buttons."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntFlag
from typing import Callable


class Button(IntFlag):
    """Bits of a joypad reading."""

    JOY_UP = 1 << 20
    JOY_DOWN = 1 << 21
    JOY_LEFT = 1 << 22
    JOY_RIGHT = 1 << 23

    FIRE_A = 1 << 29
    FIRE_B = 1 << 25
    FIRE_C = 1 << 13
    OPTION = 1 << 9
    PAUSE = 1 << 28

    KEY_S = 1 << 16
    KEY_7 = 1 << 17
    KEY_4 = 1 << 18
    KEY_1 = 1 << 19

    KEY_0 = 1 << 4
    KEY_8 = 1 << 5
    KEY_5 = 1 << 6
    KEY_2 = 1 << 7

    KEY_H = 1 << 0
    KEY_9 = 1 << 1
    KEY_6 = 1 << 2
    KEY_3 = 1 << 3


@dataclass
class JoyStream:
    """Successive readings from one joypad, supplied by ``reader``."""

    reader: Callable[[], int]
    lastval: int = 0
    curval: int = 0

    def get(self) -> int:
        """Take a new reading and return the buttons currently pressed."""
        self.lastval = self.curval
        self.curval = int(self.reader()) & 0xFFFFFFFF
        return self.curval

    def edge(self) -> int:
        """Buttons pressed in the latest reading but not in the one before."""
        return (self.lastval ^ self.curval) & self.curval