"""
Banker's Safety Check Tests

Tests the safety algorithm on the classic five-process instance, unsafe
states, input validation and resource request evaluation.
"""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from algorithms.safety import check_safety, request_resources, simulate
from models.resource_state import ResourceState
from utils.validation import InvalidInput

AVAILABLE = [3, 3, 2]
ALLOCATION = [[0, 1, 0], [2, 0, 0], [3, 0, 2], [2, 1, 1], [0, 0, 2]]
MAXIMUM = [[7, 5, 3], [3, 2, 2], [9, 0, 2], [2, 2, 2], [4, 3, 3]]


def _classic_state():
    return ResourceState.from_lists(AVAILABLE, ALLOCATION, MAXIMUM)


def test_classic_instance_is_safe():
    """Silberschatz example: safe sequence P1, P3, P4, P0, P2."""
    print("\n" + "="*60)
    print("TEST: Banker's classic instance")
    print("="*60)

    result = simulate(AVAILABLE, ALLOCATION, MAXIMUM)

    assert result.is_safe
    assert result.safe_sequence == (1, 3, 4, 0, 2)
    assert result.labels == ("P1", "P3", "P4", "P0", "P2")
    assert [step.work for step in result.steps] == [
        (5, 3, 2), (7, 4, 3), (7, 4, 5), (7, 5, 5), (10, 5, 7)
    ]
    assert result.steps[2].safe_sequence == (1, 3, 4)
    assert result.final_work == (10, 5, 7)
    print(f"  ✓ Safe sequence: {' -> '.join(result.labels)}")


def test_final_work_equals_total_resources_when_safe():
    result = simulate(AVAILABLE, ALLOCATION, MAXIMUM)
    assert list(result.final_work) == [int(x) for x in result.state.total]


def test_need_matrix():
    state = _classic_state()
    assert state.need.tolist() == [[7, 4, 3], [1, 2, 2], [6, 0, 0], [0, 1, 1], [4, 3, 1]]
    assert state.num_processes == 5
    assert state.num_resources == 3


def test_unsafe_state_has_empty_sequence():
    result = simulate([0, 0, 1], ALLOCATION[:3], MAXIMUM[:3])

    assert not result.is_safe
    assert result.safe_sequence == ()
    assert result.steps == ()
    assert result.final_work == (0, 0, 1)


def test_unsafe_state_keeps_partial_trace():
    result = simulate([1, 0, 0], [[1, 0, 0], [0, 0, 0]], [[2, 0, 0], [5, 0, 0]])

    assert not result.is_safe
    assert result.safe_sequence == ()
    assert len(result.steps) == 1
    assert result.steps[0].process == 0
    assert result.final_work == (2, 0, 0)


def test_no_processes_is_trivially_safe():
    result = simulate([1, 2], [], [])
    assert result.is_safe
    assert result.safe_sequence == ()


def test_inputs_are_not_mutated():
    available = list(AVAILABLE)
    allocation = [list(row) for row in ALLOCATION]
    maximum = [list(row) for row in MAXIMUM]

    simulate(available, allocation, maximum)

    assert available == AVAILABLE
    assert allocation == ALLOCATION
    assert maximum == MAXIMUM


def test_state_arrays_are_read_only():
    state = _classic_state()
    with pytest.raises(ValueError):
        state.available[0] = 99
    check_safety(state)
    assert state.available.tolist() == AVAILABLE


def test_repeated_checks_agree():
    state = _classic_state()
    assert check_safety(state) == check_safety(state)


@pytest.mark.parametrize("available, allocation, maximum, field", [
    ([3, 3, 2], [[8, 0, 0]], [[7, 5, 3]], "allocation[0][0]"),
    ([-1, 3, 2], [[0, 1, 0]], [[7, 5, 3]], "available[0]"),
    ([3, 3, 2], [[0, 1, 0], [2, 0, 0]], [[7, 5, 3]], "maximum"),
    ([3, 3, 2], [[0, 1]], [[7, 5, 3]], "allocation[0]"),
    ([3, 3, 2], [[0, 1, 0]], [[7, 5, 3.5]], "maximum[0][2]"),
])
def test_invalid_states_are_rejected(available, allocation, maximum, field):
    with pytest.raises(InvalidInput) as excinfo:
        simulate(available, allocation, maximum)
    assert excinfo.value.field == field


def test_request_granted_when_state_stays_safe():
    """P1 requests (1, 0, 2): granted, new state still safe."""
    state = _classic_state()
    decision = request_resources(state, 1, [1, 0, 2])

    assert decision.granted
    assert decision.safety.safe_sequence == (1, 3, 4, 0, 2)
    assert decision.state.available.tolist() == [2, 3, 0]
    assert decision.state.to_lists()["allocation"][1] == [3, 0, 2]
    assert decision.state.to_lists()["need"][1] == [0, 2, 0]
    # Original state untouched
    assert state.available.tolist() == AVAILABLE


def test_request_denied_when_state_would_be_unsafe():
    """P4 requests (3, 3, 0): available but leaves no safe sequence."""
    state = _classic_state()
    decision = request_resources(state, 4, [3, 3, 0])

    assert not decision.granted
    assert "Unsafe" in decision.reason
    assert not decision.safety.is_safe
    assert decision.state == state


def test_request_exceeding_need_is_rejected():
    decision = request_resources(_classic_state(), 1, [2, 0, 0])
    assert not decision.granted
    assert "exceeds need" in decision.reason
    assert decision.safety is None


def test_request_exceeding_available_must_wait():
    decision = request_resources(_classic_state(), 0, [4, 0, 0])
    assert not decision.granted
    assert "Insufficient" in decision.reason
    assert decision.safety is None


def test_request_validation():
    state = _classic_state()
    with pytest.raises(InvalidInput) as excinfo:
        request_resources(state, 7, [0, 0, 0])
    assert excinfo.value.field == "process"

    with pytest.raises(InvalidInput) as excinfo:
        request_resources(state, 0, [0, 0])
    assert excinfo.value.field == "request"


def test_numpy_inputs_are_accepted():
    result = simulate(np.array(AVAILABLE), np.array(ALLOCATION), np.array(MAXIMUM))
    assert result.safe_sequence == (1, 3, 4, 0, 2)


def main():
    """Run the headline tests without pytest."""
    test_classic_instance_is_safe()
    test_unsafe_state_has_empty_sequence()
    test_request_granted_when_state_stays_safe()
    test_request_denied_when_state_would_be_unsafe()
    print("\n✅ Safety Tests PASSED")
    return 0


if __name__ == '__main__':
    sys.exit(main())
