from __future__ import annotations
import argparse, logging, sys
from typing import Iterator, List, Optional
from control.config import AllocatorConfig, parse_capacity
from control.interpreter import CommandInterpreter
from memory.allocator import ContiguousAllocator
from memory.errors import InvalidSize
from memory.fragmentation import compute_metrics
from policy.placement import Strategy
from viz.ascii_map import render_map

def load_script(path: str) -> Iterator[str]:
    with open(path,'r',encoding='utf-8') as f:
        for line in f:
            yield line.rstrip('\n')

def read_console(prompt: str) -> Iterator[str]:
    while True:
        try:
            yield input(prompt)
        except EOFError:
            print()
            return

def print_summary(interp: CommandInterpreter, show_map: bool=False):
    alloc=interp.allocator
    stats=interp.stats
    m=compute_metrics(alloc.snapshot())
    strategy=interp.strategy_override.name if interp.strategy_override else 'per-command'
    print("="*72)
    print("Contiguous Allocator - Session Summary")
    print("="*72)
    print(f"Capacity: {alloc.capacity}  Used: {alloc.used()}  Free: {alloc.free_bytes()}  Strategy: {strategy}")
    print(f"Requests: ok={stats['requests']} failed={stats['request_failures']}  "
          f"Releases: ok={stats['releases']} failed={stats['release_failures']}  Malformed: {stats['malformed']}")
    print(f"Compactions: {stats['compactions']}  Bytes moved: {stats['bytes_moved']}")
    print("-"*72)
    print(f"Fragmentation: LFE={m.lfe} holes={m.hole_count} external_frag={m.external_frag:.3f} entropy={m.entropy:.3f}")
    if show_map:
        print("-"*72)
        print("Memory map (ASCII):")
        print(render_map(alloc.snapshot(), alloc.capacity))
    print("="*72)

def main(argv: Optional[List[str]]=None) -> int:
    cfg=AllocatorConfig()
    ap=argparse.ArgumentParser(description=cfg.banner)
    ap.add_argument('size', help='total address space in bytes')
    ap.add_argument('--max-size', type=int, default=cfg.max_capacity,
                    help='largest accepted address space (default: 4 MiB)')
    ap.add_argument('--script', help='replay commands from this file instead of reading the console')
    ap.add_argument('--strategy', type=str.upper, choices=[s.value for s in Strategy],
                    help='force one placement strategy for every RQ, ignoring the one given on the command')
    ap.add_argument('--summary', action='store_true', help='print session statistics and fragmentation at exit')
    ap.add_argument('--show-map', action='store_true', help='include the ASCII memory map in the summary')
    ap.add_argument('--log-level', default='WARNING', choices=['DEBUG','INFO','WARNING','ERROR'])
    args=ap.parse_args(argv)

    logging.basicConfig(level=args.log_level, stream=sys.stderr,
                        format='%(levelname)s %(name)s: %(message)s')

    print(cfg.banner)
    try:
        capacity=parse_capacity(args.size, args.max_size)
        alloc=ContiguousAllocator(capacity, max_capacity=args.max_size,
                                  max_process_id_length=cfg.max_process_id_length)
    except InvalidSize as e:
        print(e, file=sys.stderr)
        return 1

    override=Strategy.parse(args.strategy) if args.strategy else None
    interp=CommandInterpreter(alloc, strategy_override=override)

    if args.script:
        try:
            lines=load_script(args.script)
            for line in lines:
                print(f"{cfg.prompt}{line}")
                res=interp.execute(line)
                for out in res.lines:
                    print(out)
                if res.terminate:
                    break
        except OSError as e:
            print(f"Cannot read script: {e}", file=sys.stderr)
            return 1
    else:
        for line in read_console(cfg.prompt):
            res=interp.execute(line)
            for out in res.lines:
                print(out)
            if res.terminate:
                break

    if args.summary or args.show_map:
        print_summary(interp, show_map=args.show_map)
    return 0

if __name__=='__main__':
    sys.exit(main())
