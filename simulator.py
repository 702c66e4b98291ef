from collections import namedtuple
import argparse
import sys
import threading
import time

from page_table import PageTable
from memory_manager import (AllocationFailure, FrameSetLocator, GlobalClock,
                            InvalidProcessError, PhysicalMemory, Statistics)
from replacement import ALGORITHMS, get_policy

REFERENCE_SEQUENCE = [2, 3, 2, 1, 5, 2, 4, 5, 3, 2, 5, 2]


class AccessEvent(namedtuple('AccessEvent',
                             ['process_id', 'page', 'hit', 'frame', 'clock', 'evicted_page'])):
    __slots__ = ()

    @property
    def outcome(self):
        return 'hit' if self.hit else 'fault'

    def __str__(self):
        if self.hit:
            return f"[P{self.process_id}] page {self.page} -> HIT (frame {self.frame}, clock {self.clock})"
        evicted = 'none' if self.evicted_page is None else self.evicted_page
        return (f"[P{self.process_id}] page {self.page} -> FAULT "
                f"(frame {self.frame}, evicted {evicted}, clock {self.clock})")


class VirtualMemorySimulator:

    def __init__(self, algorithm='FIFO', num_processes=3, frames_per_process=3,
                 max_pages=20, num_frames=None, delay=0.0, verbose=True, output=print):
        self.policy = get_policy(algorithm)
        self.algorithm = self.policy.name
        self.delay = delay
        self.verbose = verbose
        self.output = output

        self.frame_sets = FrameSetLocator.contiguous(num_processes, frames_per_process, num_frames)
        self.physical_memory = PhysicalMemory(num_frames=self.frame_sets.num_frames)
        self.log(f"Physical memory initialized ({self.physical_memory.num_frames} frames)")

        self.page_tables = {}  # process_id -> PageTable
        for process_id in self.frame_sets.process_ids():
            frame_count = len(self.frame_sets.frames_for(process_id))
            self.page_tables[process_id] = PageTable(process_id, max_pages, frame_count)
            self.log(f"Process {process_id} initialized")

        self.clock = GlobalClock()
        self.stats = Statistics()
        self.events = []
        self._lock = threading.Lock()

    def log(self, message):
        if self.verbose:
            self.output(message)

    def get_page_table(self, process_id):
        if isinstance(process_id, bool):
            raise InvalidProcessError(f"unknown process {process_id!r}")
        try:
            return self.page_tables[process_id]
        except KeyError:
            raise InvalidProcessError(f"unknown process {process_id!r}") from None

    def access(self, process_id, address):
        with self._lock:
            page_table = self.get_page_table(process_id)
            # Addresses are page numbers; no offset bits
            page_num = address
            entry = page_table.get_entry(page_num)

            if entry.is_valid():
                self.policy.on_hit(entry, self.clock)
                event = AccessEvent(process_id, page_num, True, entry.frame, self.clock.now(), None)
            else:
                event = self.handle_page_fault(process_id, page_num)

            self.stats.record_access()
            self.events.append(event)
            self.log(str(event))
            return event

    def handle_page_fault(self, process_id, page_num):
        # Caller holds self._lock
        page_table = self.get_page_table(process_id)
        frame_set = self.frame_sets.frames_for(process_id)
        evicted_page = None

        frame_num = self.physical_memory.find_free_frame(frame_set)

        if frame_num is None:
            frame_num = self.policy.select_victim(page_table, frame_set, self.physical_memory)
            evicted_page = self.physical_memory.get_frame_info(frame_num).resident_page
            if evicted_page is not None:
                page_table.set_absent(evicted_page)
            self.physical_memory.evict(frame_num)

        self.physical_memory.assign(frame_num, process_id, page_num)
        entry = page_table.set_present(page_num, frame_num)
        entry.reference = True
        entry.last_access = self.clock.tick()

        self.stats.record_page_fault()
        return AccessEvent(process_id, page_num, False, frame_num, entry.last_access, evicted_page)

    def run_process(self, process_id, trace):
        for address in trace:
            self.access(process_id, address)
            if self.delay:
                time.sleep(self.delay)

    def run_simulation(self, traces=None):
        if traces is None:
            traces = {pid: list(REFERENCE_SEQUENCE) for pid in self.frame_sets.process_ids()}

        self.log(f"\n{'='*60}")
        self.log(f"Running {self.algorithm} with {len(traces)} processes")
        self.log(f"{'='*60}")

        errors = []

        def worker(process_id, trace):
            try:
                self.run_process(process_id, trace)
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=worker, args=(pid, trace), name=f"P{pid}")
                   for pid, trace in traces.items()]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        if errors:
            raise errors[0]

        self.log(f"\nResults ({self.algorithm}):")
        self.log(str(self.stats))
        self.log(f"{'='*60}\n")

        return self.stats

    def check_invariants(self):
        with self._lock:
            seen = set()
            for frame_num, frame in enumerate(self.physical_memory.frames):
                has_contents = frame.owner is not None and frame.resident_page is not None
                _require(frame.occupied == has_contents, f"frame {frame_num} is half-populated: {frame!r}")
                if not frame.occupied:
                    continue
                _require(frame.owner == self.frame_sets.owner_of(frame_num),
                         f"frame {frame_num} held by P{frame.owner} outside its frame set")
                key = (frame.owner, frame.resident_page)
                _require(key not in seen, f"page {frame.resident_page} of P{frame.owner} resident twice")
                seen.add(key)
                entry = self.page_tables[frame.owner].get_entry(frame.resident_page)
                _require(entry.present and entry.frame == frame_num,
                         f"frame {frame_num} not referenced by its page table entry")

            for process_id, page_table in self.page_tables.items():
                frame_set = self.frame_sets.frames_for(process_id)
                for entry in page_table.resident_pages():
                    frame = self.physical_memory.get_frame_info(entry.frame)
                    _require(frame.owner == process_id and frame.resident_page == entry.virtual_page_num,
                             f"P{process_id} page {entry.virtual_page_num} points at {frame!r}")
                _require(0 <= page_table.fifo_cursor < len(frame_set),
                         f"P{process_id} FIFO cursor {page_table.fifo_cursor} out of range")
                _require(0 <= page_table.clock_cursor < len(frame_set),
                         f"P{process_id} clock cursor {page_table.clock_cursor} out of range")
                _require(len(self.physical_memory.occupied_frames(frame_set)) <= len(frame_set),
                         f"P{process_id} holds more frames than its frame set")

            _require(self.stats.page_faults <= self.stats.total_accesses,
                     f"{self.stats.page_faults} faults for {self.stats.total_accesses} accesses")


def _require(condition, message):
    # Explicit raise so the checks also run under python -O
    if not condition:
        raise AssertionError(message)


def load_trace_file(filename):
    traces = {}
    with open(filename, 'r') as f:
        for line in f:
            parts = line.strip().split()
            if len(parts) != 2 or parts[0].startswith('#'):
                continue
            try:
                process_id = int(parts[0])
                page_num = int(parts[1])
            except ValueError:
                continue
            traces.setdefault(process_id, []).append(page_num)
    return traces


def build_parser():
    parser = argparse.ArgumentParser(
        description="Fixed-partition virtual memory simulator with local page replacement")
    parser.add_argument('-a', '--algorithm', type=str.upper, default='FIFO',
                        help=f"replacement algorithm ({', '.join(ALGORITHMS)})")
    parser.add_argument('-p', '--processes', type=int, default=3, help="number of processes")
    parser.add_argument('-f', '--frames', type=int, default=3, help="frames per process")
    parser.add_argument('-m', '--max-pages', type=int, default=20, help="virtual pages per process")
    parser.add_argument('-d', '--delay', type=float, default=0.0,
                        help="seconds to pause between a process's accesses")
    parser.add_argument('-q', '--quiet', action='store_true', help="only print the final results")
    parser.add_argument('tracefile', nargs='?', help="file of '<pid> <page>' lines")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    try:
        traces = load_trace_file(args.tracefile) if args.tracefile else None
    except OSError as e:
        print(f"Error: could not read trace file: {e}", file=sys.stderr)
        return 1

    try:
        simulator = VirtualMemorySimulator(algorithm=args.algorithm,
                                           num_processes=args.processes,
                                           frames_per_process=args.frames,
                                           max_pages=args.max_pages,
                                           delay=args.delay,
                                           verbose=not args.quiet)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except AllocationFailure as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    stats = simulator.run_simulation(traces)

    if args.quiet:
        print(f"Algorithm: {simulator.algorithm}")
        print(stats)
    return 0


if __name__ == '__main__':
    sys.exit(main())
