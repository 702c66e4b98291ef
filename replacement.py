class ReplacementPolicy:
    """
    Local replacement: a policy only ever looks at the frames of the faulting
    process. select_victim() is called only when none of them is free.
    """

    name = "BASE"

    def select_victim(self, page_table, frame_set, physical_memory):
        raise NotImplementedError

    def on_hit(self, entry, clock):
        return

    def __repr__(self):
        return f"{type(self).__name__}()"


class FIFOPolicy(ReplacementPolicy):
    name = "FIFO"

    def select_victim(self, page_table, frame_set, physical_memory):
        return frame_set[page_table.advance_fifo()]


class ClockPolicy(ReplacementPolicy):
    name = "CLOCK"

    def select_victim(self, page_table, frame_set, physical_memory):
        max_sweeps = 2 * len(frame_set)
        sweeps = 0

        while sweeps < max_sweeps:
            frame_num = frame_set[page_table.clock_cursor]
            page = physical_memory.get_frame_info(frame_num).resident_page
            entry = page_table.get_entry(page)
            page_table.advance_clock()

            if not entry.reference:
                return frame_num

            # Second chance
            entry.reference = False
            sweeps += 1

        # Every bit was set on both passes; take whatever is under the hand
        return frame_set[page_table.advance_clock()]

    def on_hit(self, entry, clock):
        entry.reference = True


class LRUApproxPolicy(ReplacementPolicy):
    name = "LRU"

    def select_victim(self, page_table, frame_set, physical_memory):
        victim_frame = None
        oldest_time = None

        for frame_num in frame_set:
            page = physical_memory.get_frame_info(frame_num).resident_page
            entry = page_table.get_entry(page)
            if oldest_time is None or entry.last_access < oldest_time:
                oldest_time = entry.last_access
                victim_frame = frame_num

        return victim_frame

    def on_hit(self, entry, clock):
        entry.last_access = clock.tick()


POLICIES = {
    'FIFO': FIFOPolicy,
    'CLOCK': ClockPolicy,
    'SECOND_CHANCE': ClockPolicy,
    'SC': ClockPolicy,
    'LRU': LRUApproxPolicy,
    'LRU_APPROX': LRUApproxPolicy,
    'LRUAPPROX': LRUApproxPolicy,
}

ALGORITHMS = ['FIFO', 'CLOCK', 'LRU']


def get_policy(algorithm):
    if isinstance(algorithm, ReplacementPolicy):
        return algorithm
    key = str(algorithm).strip().upper().replace('-', '_')
    if key not in POLICIES:
        raise ValueError(f"Unknown algorithm: {algorithm} (expected one of {', '.join(ALGORITHMS)})")
    return POLICIES[key]()
