from memory_manager import AllocationFailure


class PageOutOfRangeError(IndexError):
    pass


class PageTableEntry:
    def __init__(self, virtual_page_num):
        self.virtual_page_num = virtual_page_num
        self.present = False
        self.frame = None  # None means not in memory
        self.reference = False  # For Clock
        self.last_access = 0  # For LRU-approx

    def is_valid(self):
        return self.present

    def __repr__(self):
        return (f"PageTableEntry(page={self.virtual_page_num}, present={self.present}, "
                f"frame={self.frame}, ref={int(self.reference)}, last={self.last_access})")


class PageTable:
    """
    Per-process page table plus the replacement cursors that index into the
    process's frame set (positions, not physical frame numbers).
    """

    def __init__(self, process_id, num_pages=20, frame_count=3):
        if num_pages < 1:
            raise AllocationFailure(
                f"could not allocate page table for process {process_id} ({num_pages} pages)")
        if frame_count < 1:
            raise AllocationFailure(
                f"could not allocate page table for process {process_id} ({frame_count} frames)")
        self.process_id = process_id
        self.num_pages = num_pages
        self.frame_count = frame_count
        self.entries = [PageTableEntry(i) for i in range(num_pages)]
        self.fifo_cursor = 0
        self.clock_cursor = 0

    def get_entry(self, virtual_page_num):
        if not 0 <= virtual_page_num < self.num_pages:
            raise PageOutOfRangeError(
                f"page {virtual_page_num} out of range for process {self.process_id} "
                f"(0..{self.num_pages - 1})")
        return self.entries[virtual_page_num]

    def set_present(self, virtual_page_num, frame_num):
        entry = self.get_entry(virtual_page_num)
        entry.present = True
        entry.frame = frame_num
        return entry

    def set_absent(self, virtual_page_num):
        entry = self.get_entry(virtual_page_num)
        entry.present = False
        entry.frame = None
        entry.reference = False
        entry.last_access = 0
        return entry

    def resident_pages(self):
        return [entry for entry in self.entries if entry.present]

    def advance_fifo(self):
        position = self.fifo_cursor
        self.fifo_cursor = (self.fifo_cursor + 1) % self.frame_count
        return position

    def advance_clock(self):
        position = self.clock_cursor
        self.clock_cursor = (self.clock_cursor + 1) % self.frame_count
        return position
