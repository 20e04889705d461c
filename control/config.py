from __future__ import annotations
from dataclasses import dataclass

from memory.allocator import MAX_CAPACITY, MAX_PROCESS_ID_LENGTH
from memory.errors import InvalidSize

@dataclass
class AllocatorConfig:
    max_capacity: int = MAX_CAPACITY
    max_process_id_length: int = MAX_PROCESS_ID_LENGTH
    prompt: str = 'allocator> '
    banner: str = 'Contiguous Memory Allocator Project'

def parse_capacity(text: str, max_capacity: int=MAX_CAPACITY) -> int:
    """Validate the startup size argument: decimal digits only, 0 < size <= max_capacity."""
    digits = len(text) - len(text.lstrip('0123456789'))
    if digits == 0:
        raise InvalidSize("No digits were found")
    if digits < len(text):
        raise InvalidSize(f"Further characters after number: {text[digits:]}")
    size = int(text)
    if size == 0 or size > max_capacity:
        raise InvalidSize(f"Invalid memory size. Must be > 0 and <= {max_capacity}")
    return size
