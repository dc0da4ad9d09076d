"""A first-fit free-list allocator over a simulated address space."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

HEADER_SIZE = 8
NALLOC = 256
MAGIC = 0x0A110C
DEFAULT_LIMIT = 2048 * 1024 - 4096

_BASE = -HEADER_SIZE


class HeapCorruptionError(RuntimeError):
    """Raised when a block handed to :meth:`Heap.free` was not allocated."""


@dataclass
class _Header:
    ptr: int = 0  # next free block; holds MAGIC while the block is in use
    size: int = 0  # in header-sized units


class Heap:
    """Allocator whose blocks carry an 8-byte header and a magic check on free.

    Memory is obtained from a break pointer that starts at ``bss_end``
    rounded up to 8 and may not pass ``limit``. Addresses are plain integers.
    """

    def __init__(self, bss_end: int = 0, limit: int = DEFAULT_LIMIT) -> None:
        if bss_end < 0:
            raise ValueError("bss_end must not be negative")
        self._bss_end = bss_end
        self._limit = limit
        self._memptr: Optional[int] = None
        self._allocp: Optional[int] = None
        self._headers: dict[int, _Header] = {_BASE: _Header()}

    def sbrk(self, nbytes: int) -> int:
        """Reserve ``nbytes`` at the break and return their start address."""
        if self._memptr is None:
            self._memptr = (self._bss_end + 7) & ~7
        if self._memptr + nbytes > self._limit:
            raise MemoryError(f"cannot extend heap by {nbytes} bytes")
        start = self._memptr
        self._memptr += nbytes
        return start

    def _morecore(self, nunits: int) -> int:
        units = NALLOC * ((nunits + NALLOC - 1) // NALLOC)
        start = self.sbrk(units * HEADER_SIZE)
        self._headers[start] = _Header(ptr=MAGIC, size=units)
        self.free(start + HEADER_SIZE)
        assert self._allocp is not None
        return self._allocp

    def malloc(self, nbytes: int) -> int:
        """Allocate at least ``nbytes`` and return the block's address."""
        nbytes += 8  # always allow a little slop
        nunits = 1 + (nbytes + HEADER_SIZE - 1) // HEADER_SIZE
        headers = self._headers
        q = self._allocp
        if q is None:
            base = headers[_BASE]
            base.ptr = _BASE
            base.size = 0
            self._allocp = q = _BASE
        p = headers[q].ptr
        while True:
            block = headers[p]
            if block.size >= nunits:
                if block.size == nunits:
                    headers[q].ptr = block.ptr
                else:
                    block.size -= nunits
                    p += block.size * HEADER_SIZE
                    headers[p] = _Header(size=nunits)
                self._allocp = q
                headers[p].ptr = MAGIC
                return p + HEADER_SIZE
            if p == self._allocp:
                p = self._morecore(nunits)
            q, p = p, headers[p].ptr

    def free(self, address: Optional[int]) -> None:
        """Return a block to the free list, merging it with free neighbours."""
        if not address:
            return
        p = address - HEADER_SIZE
        headers = self._headers
        block = headers.get(p)
        if block is None or block.ptr != MAGIC or self._allocp is None:
            raise HeapCorruptionError(f"address {address:#x} is not an allocated block")
        block.ptr = 0

        q = self._allocp
        while not (q < p < headers[q].ptr):
            following = headers[q].ptr
            if q >= following and (p > q or p < following):
                break
            q = following

        lower = headers[q]
        upper_addr = lower.ptr
        if p + block.size * HEADER_SIZE == upper_addr:
            upper = headers.pop(upper_addr)
            block.size += upper.size
            block.ptr = upper.ptr
        else:
            block.ptr = upper_addr
        if q + lower.size * HEADER_SIZE == p:
            lower.size += block.size
            lower.ptr = block.ptr
            del headers[p]
        else:
            lower.ptr = p
        self._allocp = q