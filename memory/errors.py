"""Exception hierarchy for the contiguous allocator.

    AllocatorError
    ├── InvalidSize        - address space size rejected at startup (fatal)
    ├── InvalidRequest     - bad request arguments (size, process id, strategy)
    ├── InsufficientSpace  - no free block large enough
    ├── ProcessNotFound    - release of a process holding no block
    └── MalformedCommand   - command line could not be parsed

Only InvalidSize is fatal. Every other error leaves the partition as it was.
"""

from __future__ import annotations


class AllocatorError(Exception):
    pass


class InvalidSize(AllocatorError):
    pass


class InvalidRequest(AllocatorError, ValueError):
    pass


class InsufficientSpace(AllocatorError):
    def __init__(self, requested: int, largest_free: int):
        super().__init__(f"no free block of {requested} bytes (largest free extent is {largest_free})")
        self.requested = requested
        self.largest_free = largest_free


class ProcessNotFound(AllocatorError, LookupError):
    def __init__(self, process_id: str):
        super().__init__(f"no block allocated to {process_id!r}")
        self.process_id = process_id


class MalformedCommand(AllocatorError):
    def __init__(self, command: str, reason: str):
        super().__init__(f"{command}: {reason}")
        self.command = command
        self.reason = reason
