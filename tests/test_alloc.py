import itertools

import pytest

from jagkit.alloc import Heap, HeapCorruptionError


def test_sbrk_aligns_and_advances():
    heap = Heap(bss_end=13)
    first = heap.sbrk(16)
    assert first % 8 == 0
    assert first >= 13
    assert heap.sbrk(24) == first + 16


def test_sbrk_limit():
    heap = Heap(limit=64)
    heap.sbrk(64)
    with pytest.raises(MemoryError):
        heap.sbrk(1)


def test_allocations_are_aligned_and_disjoint():
    heap = Heap()
    sizes = [10, 1, 100, 37, 8, 200]
    blocks = [(heap.malloc(n), n) for n in sizes]
    for addr, _ in blocks:
        assert addr % 8 == 0
    spans = sorted((addr, addr + n) for addr, n in blocks)
    for (_, end), (start, _) in zip(spans, spans[1:]):
        assert end <= start


def test_freed_block_is_reused():
    heap = Heap()
    addr = heap.malloc(40)
    heap.free(addr)
    assert heap.malloc(40) == addr


def test_double_free_raises():
    heap = Heap()
    addr = heap.malloc(16)
    heap.free(addr)
    with pytest.raises(HeapCorruptionError):
        heap.free(addr)


def test_free_of_foreign_address_raises():
    heap = Heap()
    addr = heap.malloc(16)
    with pytest.raises(HeapCorruptionError):
        heap.free(addr + 8)


def test_exhaustion_raises_memory_error():
    heap = Heap(limit=2048)
    with pytest.raises(MemoryError):
        heap.malloc(5000)


@pytest.mark.parametrize("order", list(itertools.permutations(range(3))))
def test_freed_blocks_coalesce(order):
    heap = Heap(limit=2048)
    blocks = [heap.malloc(100) for _ in range(3)]
    with pytest.raises(MemoryError):
        heap.malloc(2032)
    for index in order:
        heap.free(blocks[index])
    whole = heap.malloc(2032)
    assert whole % 8 == 0
    assert whole + 2032 <= 2048