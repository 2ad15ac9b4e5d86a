"""
Page Replacement Tests

Tests FIFO, LRU and Optimal on the classic reference string, frame
snapshots, counters and validation.
"""

import sys
from pathlib import Path

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from algorithms.page_replacement import simulate
from models.policies import ReplacementPolicy
from utils.validation import InvalidInput

REFERENCE_STRING = [7, 0, 1, 2, 0, 3, 0, 4, 2, 3, 0, 3, 2]


def test_fault_counts_on_classic_string():
    """FIFO 10, LRU 9, Optimal 7 with three frames."""
    print("\n" + "="*60)
    print("TEST: Page faults (3 frames)")
    print("="*60)

    expected = {
        ReplacementPolicy.FIFO: 10,
        ReplacementPolicy.LRU: 9,
        ReplacementPolicy.OPTIMAL: 7,
    }
    for policy, faults in expected.items():
        result = simulate(REFERENCE_STRING, 3, policy)
        assert result.page_faults == faults, policy
        assert sum(1 for state in result.history if state.fault) == faults
        print(f"  ✓ {policy.name}: {result.page_faults} faults")


def test_fifo_evicts_oldest_page():
    result = simulate(REFERENCE_STRING, 3, "fifo")

    assert [s.frames for s in result.history[:4]] == [
        (7, None, None), (7, 0, None), (7, 0, 1), (2, 0, 1)
    ]
    fourth = result.history[3]
    assert fourth.fault
    assert fourth.replaced_frame == 0
    assert fourth.evicted_page == 7

    fifth = result.history[4]
    assert fifth.hit
    assert fifth.frames == (2, 0, 1)
    assert fifth.replaced_frame is None

    # Page 3 replaces 0, the next oldest
    assert result.history[5].evicted_page == 0
    assert result.history[5].frames == (2, 3, 1)


def test_lru_evicts_least_recently_used():
    result = simulate(REFERENCE_STRING, 3, "lru")

    # At page 3, page 0 was just used, so 1 is the LRU victim
    sixth = result.history[5]
    assert sixth.evicted_page == 1
    assert sixth.frames == (2, 0, 3)


def test_optimal_evicts_page_used_farthest_ahead():
    result = simulate(REFERENCE_STRING, 3, "optimal")

    # 7 is never used again; it is evicted first
    assert result.history[3].evicted_page == 7
    assert result.history[3].frames == (2, 0, 1)
    assert result.history[5].evicted_page == 1


def test_optimal_never_worse_than_other_policies():
    strings = [
        REFERENCE_STRING,
        [1, 2, 3, 4, 1, 2, 5, 1, 2, 3, 4, 5],
        [0, 1, 2, 0, 1, 3, 0, 3, 1, 2, 1],
    ]
    for pages in strings:
        for frames in (1, 2, 3, 4):
            optimal = simulate(pages, frames, "optimal").page_faults
            assert optimal <= simulate(pages, frames, "fifo").page_faults
            assert optimal <= simulate(pages, frames, "lru").page_faults


def test_fifo_beladys_anomaly():
    pages = [1, 2, 3, 4, 1, 2, 5, 1, 2, 3, 4, 5]
    assert simulate(pages, 3, "fifo").page_faults == 9
    assert simulate(pages, 4, "fifo").page_faults == 10


def test_counters_and_ratios():
    stats = simulate(REFERENCE_STRING, 3, "fifo").statistics

    assert stats.references == 13
    assert stats.page_hits == 3
    assert stats.hit_ratio == pytest.approx(3 / 13 * 100)
    assert stats.fault_ratio == pytest.approx(10 / 13 * 100)


def test_frame_invariants_hold_every_step():
    for policy in ReplacementPolicy:
        result = simulate(REFERENCE_STRING, 3, policy)
        for state in result.history:
            resident = [page for page in state.frames if page is not None]
            assert len(resident) == len(set(resident))
            assert state.page in state.frames
            assert state.frames[state.frame_index] == state.page


def test_more_frames_than_distinct_pages():
    for policy in ReplacementPolicy:
        result = simulate(REFERENCE_STRING, 10, policy)
        assert result.page_faults == len(set(REFERENCE_STRING))
        assert all(s.evicted_page is None for s in result.history)


def test_repeated_runs_are_identical():
    for policy in ReplacementPolicy:
        first = simulate(REFERENCE_STRING, 3, policy)
        second = simulate(REFERENCE_STRING, 3, policy)
        assert first == second, policy


def test_empty_reference_string():
    result = simulate([], 3, "lru")
    assert result.history == ()
    assert result.page_faults == 0
    assert result.statistics.hit_ratio == 0.0


def test_validation():
    with pytest.raises(InvalidInput) as excinfo:
        simulate(REFERENCE_STRING, 0, "fifo")
    assert excinfo.value.field == "frame_count"

    with pytest.raises(InvalidInput) as excinfo:
        simulate([-1, 2], 3, "fifo")
    assert excinfo.value.field == "reference_string[0]"

    with pytest.raises(InvalidInput) as excinfo:
        simulate(REFERENCE_STRING, 3, "clock")
    assert excinfo.value.field == "policy"


def main():
    """Run the headline tests without pytest."""
    test_fault_counts_on_classic_string()
    test_fifo_evicts_oldest_page()
    test_fifo_beladys_anomaly()
    print("\n✅ Page Replacement Tests PASSED")
    return 0


if __name__ == '__main__':
    sys.exit(main())
