from __future__ import annotations
from enum import Enum
from typing import TYPE_CHECKING, Callable, Dict, Optional, Sequence, Union

if TYPE_CHECKING:
    from memory.allocator import Block


class Strategy(str, Enum):
    FIRST_FIT = 'F'
    BEST_FIT = 'B'
    WORST_FIT = 'W'

    @classmethod
    def parse(cls, value: Union[str, 'Strategy']) -> 'Strategy':
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            raise ValueError(f"unknown placement strategy {value!r} (expected F, B or W)") from None


def first_fit(blocks: Sequence[Block], size: int) -> Optional[int]:
    for i, b in enumerate(blocks):
        if b.is_free and b.size >= size:
            return i
    return None


def best_fit(blocks: Sequence[Block], size: int) -> Optional[int]:
    best = None
    for i, b in enumerate(blocks):
        if b.is_free and b.size >= size and (best is None or b.size < blocks[best].size):
            best = i
    return best


def worst_fit(blocks: Sequence[Block], size: int) -> Optional[int]:
    worst = None
    for i, b in enumerate(blocks):
        if b.is_free and b.size >= size and (worst is None or b.size > blocks[worst].size):
            worst = i
    return worst


SELECTORS: Dict[Strategy, Callable[[Sequence[Block], int], Optional[int]]] = {
    Strategy.FIRST_FIT: first_fit,
    Strategy.BEST_FIT: best_fit,
    Strategy.WORST_FIT: worst_fit,
}


def select_block(blocks: Sequence[Block], size: int, strategy: Strategy) -> Optional[int]:
    """Index of the free block the strategy would carve `size` bytes from, or None.

    Strict comparisons keep the lowest-address candidate on ties.
    """
    return SELECTORS[strategy](blocks, size)
