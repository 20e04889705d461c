from __future__ import annotations
from typing import Sequence

from memory.allocator import Block

def render_map(blocks: Sequence[Block], capacity: int, width: int=80) -> str:
    """One character per address bin: '.' free, otherwise the owner's initial."""
    buf=['.']*width
    for b in blocks:
        if b.is_free:
            continue
        s=int((b.start/capacity)*width)
        e=int((b.end/capacity)*width)
        ch=b.owner[0].upper()
        for i in range(max(0,s), min(width, max(s+1,e))):
            buf[i]=ch
    return ''.join(buf)
