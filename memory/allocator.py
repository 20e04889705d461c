from __future__ import annotations
import logging
from dataclasses import dataclass, replace
from typing import List, Optional, Tuple, Union

from memory.errors import InsufficientSpace, InvalidRequest, InvalidSize, ProcessNotFound
from policy.placement import Strategy, select_block

logger = logging.getLogger(__name__)

MAX_CAPACITY = 4 * 1024 * 1024
MAX_PROCESS_ID_LENGTH = 99


@dataclass(frozen=True)
class Block:
    start: int
    size: int
    owner: Optional[str] = None   # None means free

    @property
    def end(self) -> int:
        return self.start + self.size

    @property
    def is_free(self) -> bool:
        return self.owner is None


class ContiguousAllocator:
    """Partition of [0, capacity) into address-ordered free/allocated blocks.

    Invariants after every public call:
    - blocks cover the space with no gaps or overlaps, sorted by start
    - no two neighbouring blocks are both free
    Failed calls raise before touching the partition.
    """
    def __init__(self, capacity: int, max_capacity: int=MAX_CAPACITY,
                 max_process_id_length: int=MAX_PROCESS_ID_LENGTH):
        if isinstance(capacity, bool) or not isinstance(capacity, int):
            raise InvalidSize(f"memory size must be an integer, got {capacity!r}")
        if capacity <= 0 or capacity > max_capacity:
            raise InvalidSize(f"Invalid memory size. Must be > 0 and <= {max_capacity}")
        self.capacity = capacity
        self.max_process_id_length = max_process_id_length
        self._blocks: List[Block] = [Block(0, capacity)]
        logger.debug("initialized %d bytes", capacity)

    def request(self, process_id: str, size: int,
                strategy: Union[Strategy, str]=Strategy.FIRST_FIT) -> Block:
        self._check_process_id(process_id)
        if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
            raise InvalidRequest(f"request size must be a positive integer, got {size!r}")
        try:
            strategy = Strategy.parse(strategy)
        except ValueError as e:
            raise InvalidRequest(str(e)) from None

        i = select_block(self._blocks, size, strategy)
        if i is None:
            logger.debug("%s: no fit for %d bytes (%s)", process_id, size, strategy.name)
            raise InsufficientSpace(size, self.largest_free_extent())

        hole = self._blocks[i]
        allocated = Block(hole.start, size, process_id)
        if hole.size > size:
            self._blocks[i:i+1] = [allocated, Block(hole.start+size, hole.size-size)]
        else:
            self._blocks[i] = allocated
        logger.info("allocated %d bytes to %s at %d (%s)", size, process_id, allocated.start, strategy.name)
        return allocated

    def release(self, process_id: str) -> Block:
        """Free the lowest-address block owned by `process_id` and merge it with free neighbours.

        Only the first match is released; a process holding several blocks
        needs one call per block. Returns the resulting free block.
        """
        i = self._index_of(process_id)
        if i is None:
            raise ProcessNotFound(process_id)
        released = self._blocks[i].size

        freed = Block(self._blocks[i].start, released)
        self._blocks[i] = freed
        if i > 0 and self._blocks[i-1].is_free:
            prev = self._blocks[i-1]
            freed = Block(prev.start, prev.size + freed.size)
            self._blocks[i-1:i+1] = [freed]
            i -= 1
        if i + 1 < len(self._blocks) and self._blocks[i+1].is_free:
            nxt = self._blocks[i+1]
            freed = Block(freed.start, freed.size + nxt.size)
            self._blocks[i:i+2] = [freed]
        logger.info("released %d bytes from %s, free extent now [%d:%d)", released, process_id, freed.start, freed.end)
        return freed

    def compact(self) -> int:
        """Slide allocated blocks to address 0 in order; return bytes moved."""
        moved = 0
        cursor = 0
        compacted: List[Block] = []
        for b in self._blocks:
            if b.is_free:
                continue
            if b.start != cursor:
                moved += b.size
                b = replace(b, start=cursor)
            compacted.append(b)
            cursor += b.size
        if cursor < self.capacity:
            compacted.append(Block(cursor, self.capacity - cursor))
        self._blocks = compacted
        logger.info("compaction moved %d bytes, %d bytes free from %d", moved, self.capacity - cursor, cursor)
        return moved

    def snapshot(self) -> Tuple[Block, ...]:
        return tuple(self._blocks)

    def holds(self, process_id: str) -> bool:
        return self._index_of(process_id) is not None

    def blocks_of(self, process_id: str) -> List[Block]:
        return [b for b in self._blocks if b.owner == process_id]

    def used(self) -> int:
        return sum(b.size for b in self._blocks if not b.is_free)

    def free_bytes(self) -> int:
        return self.capacity - self.used()

    def extents_free(self) -> List[Tuple[int,int]]:
        return [(b.start, b.size) for b in self._blocks if b.is_free]

    def largest_free_extent(self) -> int:
        return max((s for _,s in self.extents_free()), default=0)

    def _index_of(self, process_id: str) -> Optional[int]:
        for i, b in enumerate(self._blocks):
            if not b.is_free and b.owner == process_id:
                return i
        return None

    def _check_process_id(self, process_id: str):
        if not isinstance(process_id, str) or not process_id:
            raise InvalidRequest(f"process id must be a non-empty string, got {process_id!r}")
        if len(process_id) > self.max_process_id_length:
            raise InvalidRequest(
                f"process id {process_id[:16]!r}... is {len(process_id)} characters, limit is {self.max_process_id_length}")
