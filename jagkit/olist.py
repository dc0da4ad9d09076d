"""Object processor lists: unpacked object descriptions and their packed form."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Sequence, Union

_WORD_MASK = 0xFFFFFFFF
_HEADER_BYTES = 32  # the first four phrases of the store hold stops and branches

# bitmap flags
REFLECT = 0x1
RMW = 0x2
TRANS = 0x4
RELEASE = 0x8

# branch conditions
CC_EQ = 0x1
CC_GT = 0x2
CC_LT = 0x4
CC_FLAG = 0x8
CC_SECOND = 0x10

# stop object interrupt flag
INT = 1

# scaling factors
SCALE_NONE = 0x20
SCALE_HALF = 0x10
SCALE_DOUBLE = 0x40
SCALE_TRIPLE = 0x60


class ObjectType(IntEnum):
    """Type codes of list objects."""

    BITMAP = 0
    SCALEBITMAP = 1
    GPU = 2
    BRANCH = 3
    STOP = 4
    SKIP = 0xFE


@dataclass
class BitmapObject:
    """A bitmap object; ``scaled`` makes it a scaled bitmap.

    ``link`` is 0 to fall through to the next object, otherwise the 1-based
    position of the object to continue with.
    """

    xpos: int = 0
    ypos: int = 0
    link: int = 0
    data: int = 0
    height: int = 0
    dwidth: int = 0
    iwidth: int = 0
    depth: int = 0
    pitch: int = 0
    index: int = 0
    flags: int = 0
    firstpix: int = 0
    hscale: int = 0
    vscale: int = 0
    remainder: int = 0
    scaled: bool = False

    @property
    def type(self) -> ObjectType:
        return ObjectType.SCALEBITMAP if self.scaled else ObjectType.BITMAP


@dataclass
class GpuObject:
    """An object that interrupts the GPU, carrying two data words."""

    ypos: int = 0
    data: tuple[int, int] = (0, 0)

    @property
    def type(self) -> ObjectType:
        return ObjectType.GPU


@dataclass
class BranchObject:
    """A conditional branch to the object at 0-based position ``link``."""

    condition: int = 0
    ypos: int = 0
    link: int = 0

    @property
    def type(self) -> ObjectType:
        return ObjectType.BRANCH


@dataclass
class StopObject:
    """The end of a list, optionally raising an interrupt."""

    intflag: int = 0
    data: tuple[int, int] = (0, 0)

    @property
    def type(self) -> ObjectType:
        return ObjectType.STOP


ListObject = Union[BitmapObject, GpuObject, BranchObject, StopObject]


def _through_stop(objects: Iterable[ListObject]) -> list[ListObject]:
    result: list[ListObject] = []
    for obj in objects:
        result.append(obj)
        if obj.type == ObjectType.STOP:
            return result
    raise ValueError("object list has no stop object")


def packed_size(objects: Iterable[ListObject]) -> int:
    """Number of bytes the packed list needs, including alignment padding."""
    size = 0
    for obj in _through_stop(objects):
        kind = obj.type
        if kind == ObjectType.BITMAP:
            if size & 15:
                size += 8
            size += 16
        elif kind == ObjectType.SCALEBITMAP:
            while size & 31:
                size += 8
            size += 24
        elif kind in (ObjectType.GPU, ObjectType.BRANCH, ObjectType.STOP):
            size += 8
    return size


def _hilink(link: int) -> int:
    return (link & 0x07FF00) >> 8


def _lolink(link: int) -> int:
    return link & 0xFF


def _hiiwidth(width: int) -> int:
    return (width & 0x3F0) >> 4


def _loiwidth(width: int) -> int:
    return width & 0x0F


def _link_addresses(objects: Sequence[ListObject], start: int) -> list[int]:
    links = []
    current = start
    for obj in objects:
        kind = obj.type
        if kind == ObjectType.BITMAP:
            current = (current + 1) & ~1
            phrases = 2
        elif kind == ObjectType.SCALEBITMAP:
            current = (current + 3) & ~3
            phrases = 3
        else:
            phrases = 1
        links.append(current)
        current += phrases
    return links


def _target(links: list[int], position: int) -> int:
    if not 0 <= position < len(links):
        raise ValueError(f"link to object {position} is outside the list")
    return links[position]


def pack(objects: Iterable[ListObject], store_address: int) -> list[int]:
    """Pack a list into 32-bit words, two per phrase, for a store at ``store_address``.

    Object links become phrase addresses relative to the store; bitmaps are
    aligned by inserting branches to the following phrase.
    """
    objs = _through_stop(objects)
    start = (store_address + _HEADER_BYTES) // 8
    links = _link_addresses(objs, start)
    words: list[int] = []

    def emit(high: int, low: int) -> None:
        words.append(high & _WORD_MASK)
        words.append(low & _WORD_MASK)

    current = start
    for position, obj in enumerate(objs):
        kind = obj.type
        nextlink = links[position + 1] if position + 1 < len(links) else current
        if isinstance(obj, BitmapObject):
            align = 3 if obj.scaled else 1
            while current & align:
                current += 1
                emit(_hilink(current), (_lolink(current) << 24) | ObjectType.BRANCH)
            if obj.link != 0:
                nextlink = _target(links, obj.link - 1)
            emit(
                ((obj.data & 0x00FFFFF8) << 8) | _hilink(nextlink),
                (_lolink(nextlink) << 24) | (obj.height << 14) | (obj.ypos << 3) | kind,
            )
            current += 1
            emit(
                (obj.firstpix << 17)
                | (obj.flags << 13)
                | ((obj.index >> 1) << 6)
                | _hiiwidth(obj.iwidth),
                (_loiwidth(obj.iwidth) << 28)
                | (obj.dwidth << 18)
                | (obj.pitch << 15)
                | (obj.depth << 12)
                | (obj.xpos & 0xFFF),
            )
            current += 1
            if obj.scaled:
                emit(0, (obj.remainder << 16) | (obj.vscale << 8) | obj.hscale)
                current += 1
        elif isinstance(obj, GpuObject):
            emit(obj.data[0], (obj.data[1] << 14) | (obj.ypos << 3) | kind)
            current += 1
        elif isinstance(obj, BranchObject):
            target = _target(links, obj.link)
            emit(
                _hilink(target),
                (_lolink(target) << 24) | (obj.condition << 14) | (obj.ypos << 3) | kind,
            )
        elif isinstance(obj, StopObject):
            emit(obj.data[0], (obj.data[1] << 4) | ((obj.intflag & 1) << 3) | kind)
            current += 1
    return words


def pack_bytes(objects: Iterable[ListObject], store_address: int) -> bytes:
    """Pack a list as big-endian bytes, ready to copy into the list store."""
    words = pack(objects, store_address)
    return struct.pack(f">{len(words)}I", *words)