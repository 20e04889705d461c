import pytest

from memory.allocator import ContiguousAllocator


def assert_partition_valid(alloc: ContiguousAllocator):
    blocks = alloc.snapshot()
    assert blocks, "partition is never empty"
    assert blocks[0].start == 0
    assert blocks[-1].end == alloc.capacity
    assert sum(b.size for b in blocks) == alloc.capacity
    for prev, cur in zip(blocks, blocks[1:]):
        assert prev.end == cur.start
        assert not (prev.is_free and cur.is_free), f"unmerged free neighbours {prev} {cur}"
    assert all(b.size > 0 for b in blocks)


@pytest.fixture
def check():
    return assert_partition_valid


def make_holes(sizes, gap=5):
    """Allocator whose only free blocks are `sizes`, in address order, each followed by a `gap`-byte allocation."""
    alloc = ContiguousAllocator(sum(sizes) + gap * len(sizes))
    for n, size in enumerate(sizes):
        alloc.request(f"h{n}", size)
        alloc.request(f"p{n}", gap)
    for n in range(len(sizes)):
        alloc.release(f"h{n}")
    return alloc


@pytest.fixture
def holes():
    return make_holes
