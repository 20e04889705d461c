"""Text command front end for ContiguousAllocator.

Each command maps onto one allocator call:

    RQ <process_id> <size> <F|B|W>   request
    RL <process_id>                  release (first matching block only)
    C                                compact
    STAT                             status report of the current partition
    X                                end the session

Parsing problems raise MalformedCommand before the allocator is touched;
execute() turns those and the allocator's recoverable errors into the
console messages the session prints.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from memory.allocator import ContiguousAllocator
from memory.errors import InsufficientSpace, InvalidRequest, MalformedCommand, ProcessNotFound
from policy.placement import Strategy
from viz.report import format_status

logger = logging.getLogger(__name__)

ARITY = {'RQ': 3, 'RL': 1, 'C': 0, 'STAT': 0, 'X': 0}


@dataclass
class Command:
    name: str
    process_id: Optional[str] = None
    size: Optional[int] = None
    strategy: Optional[Strategy] = None


@dataclass
class CommandResult:
    lines: List[str] = field(default_factory=list)
    terminate: bool = False


def parse_command(line: str) -> Optional[Command]:
    """Parse one command line. Blank lines and '#' comments give None."""
    tokens = line.split()
    if not tokens or tokens[0].startswith('#'):
        return None
    name = tokens[0].upper()
    args = tokens[1:]
    if name not in ARITY:
        raise MalformedCommand(tokens[0], 'unknown command')
    if len(args) != ARITY[name]:
        raise MalformedCommand(name, f'expected {ARITY[name]} argument(s), got {len(args)}')

    if name == 'RQ':
        pid, size_str, strategy_str = args
        if not (size_str.isascii() and size_str.isdigit()) or int(size_str) <= 0:
            raise MalformedCommand(name, f'size must be a positive integer, got {size_str!r}')
        try:
            strategy = Strategy.parse(strategy_str)
        except ValueError as e:
            raise MalformedCommand(name, str(e)) from None
        return Command(name, pid, int(size_str), strategy)
    if name == 'RL':
        return Command(name, args[0])
    return Command(name)


class CommandInterpreter:
    def __init__(self, allocator: ContiguousAllocator, strategy_override: Optional[Strategy]=None):
        self.allocator = allocator
        self.strategy_override = strategy_override
        self.stats: Dict[str, int] = {
            'requests': 0, 'request_failures': 0,
            'releases': 0, 'release_failures': 0,
            'compactions': 0, 'bytes_moved': 0,
            'malformed': 0,
        }

    def execute(self, line: str) -> CommandResult:
        try:
            cmd = parse_command(line)
        except MalformedCommand as e:
            self.stats['malformed'] += 1
            logger.debug("rejected command %r: %s", line.strip(), e.reason)
            if e.command in ARITY:
                return CommandResult([f"Invalid {e.command} command format."])
            return CommandResult(["Invalid command."])
        if cmd is None:
            return CommandResult()

        if cmd.name == 'RQ':
            return self._request(cmd)
        if cmd.name == 'RL':
            return self._release(cmd.process_id)
        if cmd.name == 'C':
            moved = self.allocator.compact()
            self.stats['compactions'] += 1
            self.stats['bytes_moved'] += moved
            return CommandResult(["Memory compaction completed."])
        if cmd.name == 'STAT':
            return CommandResult(format_status(self.allocator.snapshot()))
        return CommandResult(terminate=True)

    def _request(self, cmd: Command) -> CommandResult:
        strategy = self.strategy_override or cmd.strategy
        try:
            block = self.allocator.request(cmd.process_id, cmd.size, strategy)
        except InsufficientSpace:
            self.stats['request_failures'] += 1
            return CommandResult(["Failed to allocate memory: insufficient space"])
        except InvalidRequest as e:
            self.stats['request_failures'] += 1
            return CommandResult([f"Invalid request: {e}"])
        self.stats['requests'] += 1
        return CommandResult([f"Allocated {block.size} bytes to {block.owner} starting at address {block.start}"])

    def _release(self, process_id: str) -> CommandResult:
        try:
            self.allocator.release(process_id)
        except ProcessNotFound:
            self.stats['release_failures'] += 1
            return CommandResult([f"No process with ID {process_id} found."])
        self.stats['releases'] += 1
        return CommandResult([f"Released memory from process {process_id}"])
