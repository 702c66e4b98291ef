class AllocationFailure(MemoryError):
    pass


class InvalidProcessError(KeyError):
    def __str__(self):
        return str(self.args[0]) if self.args else "unknown process"


class Frame:
    def __init__(self):
        self.occupied = False
        self.owner = None
        self.resident_page = None

    def __repr__(self):
        if not self.occupied:
            return "Frame(free)"
        return f"Frame(P{self.owner}, page={self.resident_page})"


class PhysicalMemory:
    # No locking here; callers hold the simulator lock.

    def __init__(self, num_frames=9):
        if num_frames < 1:
            raise AllocationFailure(f"could not allocate physical memory ({num_frames} frames)")
        self.num_frames = num_frames
        self.frames = [Frame() for _ in range(num_frames)]

    def is_free(self, frame_num):
        return not self.frames[frame_num].occupied

    def find_free_frame(self, frame_set):
        for frame_num in frame_set:
            if self.is_free(frame_num):
                return frame_num
        return None

    def assign(self, frame_num, owner, virtual_page_num):
        frame = self.frames[frame_num]
        if frame.occupied:
            raise RuntimeError(
                f"frame {frame_num} already holds page {frame.resident_page} of P{frame.owner}")
        frame.occupied = True
        frame.owner = owner
        frame.resident_page = virtual_page_num

    def evict(self, frame_num):
        frame = self.frames[frame_num]
        frame.occupied = False
        frame.owner = None
        frame.resident_page = None

    def get_frame_info(self, frame_num):
        return self.frames[frame_num]

    def occupied_frames(self, frame_set):
        return [frame_num for frame_num in frame_set if not self.is_free(frame_num)]


class FrameSetLocator:
    """
    Static mapping from process id to the tuple of frame numbers that process
    may use. Sets must be disjoint and lie inside the pool; they may leave
    frames unassigned.
    """

    def __init__(self, assignments, num_frames):
        seen = {}
        for process_id, frame_set in assignments.items():
            if not frame_set:
                raise AllocationFailure(f"empty frame set for process {process_id}")
            for frame_num in frame_set:
                if not 0 <= frame_num < num_frames:
                    raise AllocationFailure(
                        f"frame {frame_num} for process {process_id} is outside "
                        f"physical memory ({num_frames} frames)")
                if frame_num in seen:
                    raise AllocationFailure(
                        f"frame {frame_num} assigned to both P{seen[frame_num]} and P{process_id}")
                seen[frame_num] = process_id
        self.num_frames = num_frames
        self._sets = {pid: tuple(frames) for pid, frames in assignments.items()}
        self._owners = seen

    @classmethod
    def contiguous(cls, num_processes, frames_per_process, num_frames=None):
        if num_frames is None:
            num_frames = num_processes * frames_per_process
        if num_processes < 1 or frames_per_process < 1:
            raise AllocationFailure(
                f"cannot partition memory into {num_processes} x {frames_per_process} frames")
        if num_processes * frames_per_process > num_frames:
            raise AllocationFailure(
                f"{num_processes} processes x {frames_per_process} frames "
                f"do not fit in {num_frames} frames")
        assignments = {}
        for pid in range(num_processes):
            start = pid * frames_per_process
            assignments[pid] = range(start, start + frames_per_process)
        return cls(assignments, num_frames)

    def frames_for(self, process_id):
        if isinstance(process_id, bool):
            raise InvalidProcessError(f"unknown process {process_id!r}")
        try:
            return self._sets[process_id]
        except KeyError:
            raise InvalidProcessError(f"unknown process {process_id!r}") from None

    def owner_of(self, frame_num):
        return self._owners.get(frame_num)

    def process_ids(self):
        return sorted(self._sets)

    def __contains__(self, process_id):
        return process_id in self._sets


class GlobalClock:
    def __init__(self):
        self.time = 0

    def tick(self):
        self.time += 1
        return self.time

    def now(self):
        return self.time


class Statistics:
    def __init__(self):
        self.total_accesses = 0
        self.page_faults = 0

    def record_access(self):
        self.total_accesses += 1

    def record_page_fault(self):
        self.page_faults += 1

    @property
    def hits(self):
        return self.total_accesses - self.page_faults

    def fault_rate(self):
        if self.total_accesses == 0:
            return 0.0
        return self.page_faults / self.total_accesses * 100

    def __str__(self):
        return (f"Total Accesses: {self.total_accesses}\n"
                f"Page Faults: {self.page_faults}\n"
                f"Fault Rate: {self.fault_rate():.1f}%")
