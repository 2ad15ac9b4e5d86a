"""
Deadlock Avoidance Algorithm (Banker's Algorithm) for the OS Resource Policy Simulator.

Determines whether a resource state is safe, builds the safe sequence, and
evaluates resource requests against the safety check.
"""

import numpy as np
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from models.resource_state import ResourceState
from utils.validation import InvalidInput, require_int_list


@dataclass(frozen=True)
class SafetyStep:
    """
    One admission of the safety algorithm.

    Attributes:
        process: Index of the process admitted this round
        work: Work vector after adding the process's allocation
        safe_sequence: Sequence accumulated so far
    """
    process: int
    work: Tuple[int, ...]
    safe_sequence: Tuple[int, ...]

    def __str__(self) -> str:
        seq_str = " -> ".join(f"P{i}" for i in self.safe_sequence)
        return f"P{self.process} admitted, Work = {list(self.work)} (sequence: {seq_str})"


@dataclass(frozen=True)
class SafetyResult:
    """
    Outcome of the safety algorithm.

    Attributes:
        is_safe: True if every process can finish
        safe_sequence: Process indices in admission order (empty when unsafe)
        steps: Admission trace (kept for unsafe results up to the stall)
        state: Resource state that was checked
    """
    is_safe: bool
    safe_sequence: Tuple[int, ...]
    steps: Tuple[SafetyStep, ...]
    state: ResourceState

    @property
    def final_work(self) -> Tuple[int, ...]:
        """Work vector after the last admission (available when none)."""
        if self.steps:
            return self.steps[-1].work
        return tuple(int(x) for x in self.state.available)

    @property
    def labels(self) -> Tuple[str, ...]:
        """Safe sequence as "P<i>" labels."""
        return tuple(f"P{i}" for i in self.safe_sequence)


@dataclass(frozen=True)
class RequestDecision:
    """
    Outcome of a Banker's resource request.

    Attributes:
        granted: True if the request was granted
        reason: Human-readable explanation
        state: Resulting state (the tentative state when granted, else the original)
        safety: Safety result of the tentative state (None when rejected before the check)
    """
    granted: bool
    reason: str
    state: ResourceState
    safety: Optional[SafetyResult] = None


def check_safety(state: ResourceState) -> SafetyResult:
    """
    Check if a state is safe using Banker's Algorithm.

    Algorithm:
    1. Initialize Work = Available, Finish = [False] * P
    2. Scan unfinished processes in index order; each one whose
       Need[i] <= Work is admitted as it is reached:
       Finish[i] = True, Work += Allocation[i], append i to the sequence
    3. Repeat the scan (at most P rounds) until all processes finish (SAFE)
       or a full scan admits nobody (UNSAFE)

    Time Complexity: O(P²×R)

    Args:
        state: Resource state to check

    Returns:
        SafetyResult (unsafe results carry an empty sequence)

    References:
        Silberschatz, A., Galvin, P. B., & Gagne, G. (2018).
        Operating System Concepts (10th ed.). Chapter 8.6: Deadlock Avoidance.
    """
    # Step 1: Initialize Work and Finish vectors
    # Work = copy of Available (the state arrays are read-only)
    work = np.array(state.available, dtype=int, copy=True)
    finish = np.zeros(state.num_processes, dtype=bool)
    need = state.need
    safe_sequence = []
    steps = []

    # Step 2-3: at most P rounds, each a full index-order scan
    for _ in range(state.num_processes):
        if finish.all():
            break

        admitted = False
        for i in range(state.num_processes):
            if finish[i]:
                continue

            # Need[i] <= Work for every resource type
            if np.all(need[i] <= work):
                work += state.allocation[i]
                finish[i] = True
                safe_sequence.append(i)
                admitted = True
                steps.append(SafetyStep(
                    process=i,
                    work=tuple(int(x) for x in work),
                    safe_sequence=tuple(safe_sequence)
                ))

        if not admitted:
            break

    if finish.all():
        return SafetyResult(True, tuple(safe_sequence), tuple(steps), state)
    return SafetyResult(False, (), tuple(steps), state)


def simulate(
    available: Sequence[int],
    allocation: Sequence[Sequence[int]],
    maximum: Sequence[Sequence[int]]
) -> SafetyResult:
    """
    Validate a Banker's workload and run the safety check.

    Args:
        available: [R] free instances per resource type
        allocation: [P][R] instances held per process
        maximum: [P][R] maximum demand per process

    Returns:
        SafetyResult

    Raises:
        InvalidInput: On shape mismatch, negative values or allocation above maximum
    """
    state = ResourceState.from_lists(available, allocation, maximum)
    return check_safety(state)


def request_resources(state: ResourceState, process: int, request: Sequence[int]) -> RequestDecision:
    """
    Evaluate a resource request using Banker's Algorithm.

    Steps:
    1. Validate: request <= need (otherwise rejected)
    2. Check: request <= available (otherwise the process must wait)
    3. Tentatively allocate on a copy of the state
    4. Run the safety algorithm on the tentative state
    5. Safe: grant and return the tentative state
       Unsafe: deny and return the original state

    Args:
        state: Current resource state (never modified)
        process: Index of the requesting process
        request: [R] instances requested per resource type

    Returns:
        RequestDecision

    Raises:
        InvalidInput: On an unknown process index or malformed request vector
    """
    if isinstance(process, bool) or not isinstance(process, int) or not 0 <= process < state.num_processes:
        raise InvalidInput("process", f"no process with index {process!r}")

    request_list = require_int_list("request", request)
    if len(request_list) != state.num_resources:
        raise InvalidInput(
            "request",
            f"expected {state.num_resources} resource types, got {len(request_list)}"
        )
    request_vector = np.array(request_list, dtype=int)

    # Step 1: Validate request doesn't exceed need
    need = state.need[process]
    if np.any(request_vector > need):
        return RequestDecision(
            granted=False,
            reason=f"Request exceeds need (requested: {request_list}, need: {[int(x) for x in need]})",
            state=state
        )

    # Step 2: Check if resources are available
    if np.any(request_vector > state.available):
        return RequestDecision(
            granted=False,
            reason=(
                f"Insufficient resources (requested: {request_list}, "
                f"available: {[int(x) for x in state.available]}) - P{process} must wait"
            ),
            state=state
        )

    # Step 3-4: Tentative allocation and safety check
    tentative = state.with_grant(process, request_list)
    safety = check_safety(tentative)

    # Step 5: Decide
    if safety.is_safe:
        seq_str = " -> ".join(safety.labels)
        return RequestDecision(
            granted=True,
            reason=f"GRANTED (Safe state maintained, sequence: {seq_str})",
            state=tentative,
            safety=safety
        )

    return RequestDecision(
        granted=False,
        reason="DENIED (Unsafe state detected) - request would leave no safe sequence",
        state=state,
        safety=safety
    )
