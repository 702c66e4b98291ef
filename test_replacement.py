import pytest

from memory_manager import GlobalClock, PhysicalMemory
from page_table import PageTable
from replacement import (ClockPolicy, FIFOPolicy, LRUApproxPolicy,
                         ReplacementPolicy, get_policy)

FRAME_SET = (3, 4, 5)


def load(pages, process_id=1):
    """Fill FRAME_SET with pages in order; returns (page_table, memory)."""
    memory = PhysicalMemory(num_frames=9)
    page_table = PageTable(process_id, num_pages=20, frame_count=len(FRAME_SET))
    for frame_num, page in zip(FRAME_SET, pages):
        memory.assign(frame_num, process_id, page)
        page_table.set_present(page, frame_num)
    return page_table, memory


@pytest.mark.parametrize('name,expected', [
    ('FIFO', FIFOPolicy),
    ('fifo', FIFOPolicy),
    ('Clock', ClockPolicy),
    ('second-chance', ClockPolicy),
    ('LRU', LRUApproxPolicy),
    ('LRUApprox', LRUApproxPolicy),
    ('lru_approx', LRUApproxPolicy),
])
def test_get_policy(name, expected):
    assert isinstance(get_policy(name), expected)


def test_get_policy_passes_instances_through():
    policy = ClockPolicy()
    assert get_policy(policy) is policy


def test_get_policy_unknown():
    with pytest.raises(ValueError, match='Unknown algorithm'):
        get_policy('OPT')


def test_base_policy_is_abstract():
    page_table, memory = load([1, 2, 3])
    with pytest.raises(NotImplementedError):
        ReplacementPolicy().select_victim(page_table, FRAME_SET, memory)


class TestFIFO:

    def test_evicts_in_cursor_order_ignoring_bookkeeping(self):
        page_table, memory = load([1, 2, 3])
        for page in (1, 2, 3):
            page_table.get_entry(page).reference = True
        page_table.get_entry(1).last_access = 99

        policy = FIFOPolicy()
        assert [policy.select_victim(page_table, FRAME_SET, memory) for _ in range(4)] == [3, 4, 5, 3]
        assert page_table.fifo_cursor == 1

    def test_hit_changes_nothing(self):
        page_table, _ = load([1, 2, 3])
        entry = page_table.get_entry(2)
        clock = GlobalClock()
        FIFOPolicy().on_hit(entry, clock)
        assert clock.now() == 0
        assert entry.reference is False and entry.last_access == 0


class TestClock:

    def test_first_unreferenced_frame_wins(self):
        page_table, memory = load([1, 2, 3])
        page_table.get_entry(1).reference = True
        page_table.get_entry(2).reference = False
        page_table.get_entry(3).reference = True

        victim = ClockPolicy().select_victim(page_table, FRAME_SET, memory)
        assert victim == 4
        assert page_table.get_entry(1).reference is False
        # Not reached by the sweep
        assert page_table.get_entry(3).reference is True
        assert page_table.clock_cursor == 2

    def test_all_referenced_clears_each_bit_once(self):
        page_table, memory = load([1, 2, 3])
        for page in (1, 2, 3):
            page_table.get_entry(page).reference = True

        victim = ClockPolicy().select_victim(page_table, FRAME_SET, memory)
        assert victim == 3
        assert page_table.clock_cursor == 1
        assert all(not page_table.get_entry(p).reference for p in (1, 2, 3))

    def test_sweep_starts_at_cursor(self):
        page_table, memory = load([1, 2, 3])
        page_table.clock_cursor = 2
        page_table.get_entry(3).reference = True

        victim = ClockPolicy().select_victim(page_table, FRAME_SET, memory)
        assert victim == 3
        assert page_table.clock_cursor == 1
        assert page_table.get_entry(3).reference is False

    def test_hit_sets_reference_bit_only(self):
        page_table, _ = load([1, 2, 3])
        entry = page_table.get_entry(1)
        clock = GlobalClock()
        ClockPolicy().on_hit(entry, clock)
        assert entry.reference is True
        assert clock.now() == 0


class TestLRUApprox:

    def test_smallest_timestamp_wins(self):
        page_table, memory = load([1, 2, 3])
        page_table.get_entry(1).last_access = 6
        page_table.get_entry(2).last_access = 5
        page_table.get_entry(3).last_access = 8
        assert LRUApproxPolicy().select_victim(page_table, FRAME_SET, memory) == 4

    def test_ties_go_to_first_frame(self):
        page_table, memory = load([1, 2, 3])
        for page in (1, 2, 3):
            page_table.get_entry(page).last_access = 4
        assert LRUApproxPolicy().select_victim(page_table, FRAME_SET, memory) == 3

    def test_hit_refreshes_timestamp(self):
        page_table, _ = load([1, 2, 3])
        entry = page_table.get_entry(3)
        clock = GlobalClock()
        clock.tick()
        LRUApproxPolicy().on_hit(entry, clock)
        assert entry.last_access == 2
        assert clock.now() == 2
