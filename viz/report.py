from __future__ import annotations
from typing import List, Sequence

from memory.allocator import Block

UNUSED = 'Unused'

def status_line(b: Block) -> str:
    # last address is inclusive
    return f"Addresses [{b.start}: {b.end - 1}] {UNUSED if b.is_free else b.owner}"

def format_status(blocks: Sequence[Block]) -> List[str]:
    return [status_line(b) for b in blocks]
