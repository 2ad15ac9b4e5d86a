"""
Disk Scheduling Tests

Tests FCFS, SSTF, SCAN, C-SCAN, LOOK and C-LOOK on the textbook queue
(head 53, 200 cylinders) in both directions, plus edge cases.
"""

import sys
from pathlib import Path

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from algorithms.disk_scheduling import simulate
from models.disk import Direction
from models.policies import DiskPolicy
from utils.validation import InvalidInput

REQUESTS = [98, 183, 37, 122, 14, 124, 65, 67]
HEAD = 53


def test_total_seek_toward_end():
    """Seek totals for every policy with the head moving toward the end."""
    print("\n" + "="*60)
    print("TEST: Disk scheduling (head 53, toward end)")
    print("="*60)

    expected = {
        DiskPolicy.FCFS: 640,
        DiskPolicy.SSTF: 236,
        DiskPolicy.SCAN: 331,
        DiskPolicy.C_SCAN: 382,
        DiskPolicy.LOOK: 299,
        DiskPolicy.C_LOOK: 322,
    }
    for policy, total in expected.items():
        result = simulate(REQUESTS, HEAD, policy)
        assert result.total_seek_distance == total, policy
        print(f"  ✓ {policy.name}: {result.total_seek_distance}")


def test_total_seek_toward_zero():
    expected = {
        DiskPolicy.FCFS: 640,
        DiskPolicy.SSTF: 236,
        DiskPolicy.SCAN: 236,
        DiskPolicy.C_SCAN: 386,
        DiskPolicy.LOOK: 208,
        DiskPolicy.C_LOOK: 326,
    }
    for policy, total in expected.items():
        result = simulate(REQUESTS, HEAD, policy, direction=Direction.TOWARD_ZERO)
        assert result.total_seek_distance == total, policy


def test_fcfs_keeps_arrival_order():
    result = simulate(REQUESTS, HEAD, "fcfs")
    assert result.serviced == tuple(REQUESTS)
    assert result.statistics.average_seek_distance == pytest.approx(80.0)


def test_sstf_order():
    result = simulate(REQUESTS, HEAD, "sstf")
    assert result.serviced == (65, 67, 37, 14, 98, 122, 124, 183)


def test_scan_walk_includes_edge():
    result = simulate(REQUESTS, HEAD, "scan")
    assert result.sequence == (65, 67, 98, 122, 124, 183, 199, 37, 14)
    edge = result.steps[6]
    assert not edge.is_request
    assert edge.distance == 16

    left = simulate(REQUESTS, HEAD, "scan", direction="left")
    assert left.sequence == (37, 14, 0, 65, 67, 98, 122, 124, 183)


def test_c_scan_wraps_and_keeps_direction():
    result = simulate(REQUESTS, HEAD, "cscan")
    assert result.sequence == (65, 67, 98, 122, 124, 183, 199, 0, 14, 37)
    # The return jump is counted as head movement
    assert result.steps[7].distance == 199

    left = simulate(REQUESTS, HEAD, "cscan", direction=Direction.TOWARD_ZERO)
    assert left.sequence == (37, 14, 0, 199, 183, 124, 122, 98, 67, 65)


def test_look_reverses_at_last_request():
    result = simulate(REQUESTS, HEAD, "look")
    assert result.sequence == (65, 67, 98, 122, 124, 183, 37, 14)
    assert all(step.is_request for step in result.steps)


def test_c_look_jumps_to_far_request():
    result = simulate(REQUESTS, HEAD, "clook")
    assert result.sequence == (65, 67, 98, 122, 124, 183, 14, 37)

    left = simulate(REQUESTS, HEAD, "clook", direction="toward_zero")
    assert left.serviced == (37, 14, 183, 124, 122, 98, 67, 65)


def test_every_request_serviced_once():
    for policy in DiskPolicy:
        for direction in Direction:
            result = simulate(REQUESTS, HEAD, policy, direction=direction)
            assert sorted(result.serviced) == sorted(REQUESTS)
            assert result.statistics.requests_serviced == len(REQUESTS)
            assert result.total_seek_distance == sum(step.distance for step in result.steps)


def test_repeated_runs_are_identical():
    for policy in DiskPolicy:
        for direction in Direction:
            first = simulate(REQUESTS, HEAD, policy, direction=direction)
            second = simulate(REQUESTS, HEAD, policy, direction=direction)
            assert first == second, (policy, direction)


def test_empty_queue():
    for policy in DiskPolicy:
        result = simulate([], HEAD, policy)
        assert result.steps == ()
        assert result.total_seek_distance == 0
        assert result.statistics.average_seek_distance == 0.0


def test_scan_skips_edge_when_nothing_behind():
    result = simulate([60, 70], 50, "scan")
    assert result.sequence == (60, 70)
    assert result.total_seek_distance == 20


def test_request_at_edge_is_not_doubled():
    result = simulate([199, 10], 100, "scan")
    assert result.sequence == (199, 10)
    assert result.total_seek_distance == 99 + 189


def test_request_at_head_costs_nothing():
    result = simulate([53, 60], HEAD, "look", direction="left")
    assert result.serviced == (53, 60)
    assert result.steps[0].distance == 0


def test_custom_disk_size():
    result = simulate([10, 90], 50, "cscan", disk_size=100)
    assert result.sequence == (90, 99, 0, 10)
    assert result.total_seek_distance == 40 + 9 + 99 + 10


def test_validation():
    with pytest.raises(InvalidInput) as excinfo:
        simulate(REQUESTS, 200, "fcfs")
    assert excinfo.value.field == "head"

    with pytest.raises(InvalidInput) as excinfo:
        simulate([10, 200], HEAD, "fcfs")
    assert excinfo.value.field == "requests[1]"

    with pytest.raises(InvalidInput) as excinfo:
        simulate([10, -5], HEAD, "fcfs")
    assert excinfo.value.field == "requests[1]"

    with pytest.raises(InvalidInput) as excinfo:
        simulate(REQUESTS, HEAD, "scan", direction="sideways")
    assert excinfo.value.field == "direction"

    with pytest.raises(InvalidInput) as excinfo:
        simulate(REQUESTS, HEAD, "elevator")
    assert excinfo.value.field == "policy"


def main():
    """Run the headline tests without pytest."""
    test_total_seek_toward_end()
    test_scan_walk_includes_edge()
    test_c_scan_wraps_and_keeps_direction()
    print("\n✅ Disk Scheduling Tests PASSED")
    return 0


if __name__ == '__main__':
    sys.exit(main())
