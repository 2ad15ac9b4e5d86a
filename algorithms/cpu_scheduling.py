"""
CPU Scheduling Algorithms for the OS Resource Policy Simulator.

Implements FCFS, non-preemptive SJF, Round Robin and non-preemptive Priority
scheduling. Every policy produces the full Gantt trace eagerly.
"""

from collections import deque
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

from models.process import ExecutionSegment, Process, ProcessOutcome
from models.policies import SchedulingPolicy
from analysis.metrics import SchedulingStatistics
from utils.validation import (
    InvalidInput,
    require_int,
    require_member,
    require_non_negative,
    require_positive,
)


@dataclass(frozen=True)
class SchedulingResult:
    """
    Outcome of one scheduling run.

    Attributes:
        policy: Policy that produced the trace
        segments: Ordered Gantt trace
        processes: Frozen per-process times, in input order
        statistics: Aggregate metrics
        quantum: Time quantum (Round Robin only)
    """
    policy: SchedulingPolicy
    segments: Tuple[ExecutionSegment, ...]
    processes: Tuple[ProcessOutcome, ...]
    statistics: SchedulingStatistics
    quantum: Optional[int] = None

    @property
    def completion_order(self) -> List[str]:
        """PIDs ordered by completion time."""
        return [p.pid for p in sorted(self.processes, key=lambda p: p.completion_time)]


def _prepare(processes: Sequence[Process]) -> List[Process]:
    """
    Validate processes and return fresh working copies in input order.

    Raises:
        InvalidInput: On duplicate PIDs, negative arrival or non-positive burst
    """
    seen = set()
    prepared = []
    for index, process in enumerate(processes):
        if process.pid in seen:
            raise InvalidInput(f"processes[{index}].pid", f"duplicate process id {process.pid!r}")
        seen.add(process.pid)

        require_non_negative(f"processes[{index}].arrival_time", process.arrival_time)
        require_positive(f"processes[{index}].burst_time", process.burst_time)
        require_int(f"processes[{index}].priority", process.priority)

        prepared.append(process.fresh_copy())
    return prepared


def _run_to_completion(process: Process, start: int, segments: List[ExecutionSegment]) -> int:
    """Run a process for its whole burst and return the new clock value."""
    end = start + process.remaining_time
    segments.append(ExecutionSegment(process.pid, start, end))
    process.run(process.remaining_time)
    process.complete(end)
    return end


def _schedule_fcfs(processes: List[Process], quantum: Optional[int]) -> List[ExecutionSegment]:
    """
    First Come First Served.

    Processes run in arrival order; sorted() is stable so simultaneous
    arrivals keep their input order.
    """
    segments: List[ExecutionSegment] = []
    current_time = 0

    for process in sorted(processes, key=lambda p: p.arrival_time):
        # CPU idles until the next arrival
        if current_time < process.arrival_time:
            current_time = process.arrival_time
        current_time = _run_to_completion(process, current_time, segments)

    return segments


def _schedule_non_preemptive(
    processes: List[Process],
    selection_key: Callable[[Process], tuple]
) -> List[ExecutionSegment]:
    """
    Shared loop for SJF and Priority.

    Among arrived, unfinished processes the one with the smallest
    selection_key runs to completion. min() keeps the first of equal keys,
    so remaining input order breaks any tie left by the key.
    """
    segments: List[ExecutionSegment] = []
    remaining = list(processes)
    current_time = 0

    while remaining:
        arrived = [p for p in remaining if p.arrival_time <= current_time]

        if not arrived:
            # Jump the clock to the earliest pending arrival
            current_time = min(p.arrival_time for p in remaining)
            continue

        process = min(arrived, key=selection_key)
        current_time = _run_to_completion(process, current_time, segments)
        remaining.remove(process)

    return segments


def _schedule_sjf(processes: List[Process], quantum: Optional[int]) -> List[ExecutionSegment]:
    """Shortest Job First (non-preemptive): minimum burst, then earliest arrival."""
    return _schedule_non_preemptive(processes, lambda p: (p.burst_time, p.arrival_time))


def _schedule_priority(processes: List[Process], quantum: Optional[int]) -> List[ExecutionSegment]:
    """Priority (non-preemptive): lower value wins, then earliest arrival."""
    return _schedule_non_preemptive(processes, lambda p: (p.priority, p.arrival_time))


def _schedule_round_robin(processes: List[Process], quantum: Optional[int]) -> List[ExecutionSegment]:
    """
    Round Robin with a fixed time quantum.

    Ordering rule: when a slice ends, every process that arrived during the
    slice (arrival <= slice end) joins the ready queue before the preempted
    process is re-queued.
    """
    segments: List[ExecutionSegment] = []
    pending = deque(sorted(processes, key=lambda p: p.arrival_time))
    ready: deque = deque()
    current_time = 0

    def admit_arrivals(until: int) -> None:
        while pending and pending[0].arrival_time <= until:
            ready.append(pending.popleft())

    while pending or ready:
        admit_arrivals(current_time)

        if not ready:
            current_time = pending[0].arrival_time
            continue

        process = ready.popleft()
        time_slice = min(quantum, process.remaining_time)

        segments.append(ExecutionSegment(process.pid, current_time, current_time + time_slice))
        current_time += time_slice
        process.run(time_slice)

        # Arrivals during the slice go ahead of the preempted process
        admit_arrivals(current_time)

        if process.remaining_time > 0:
            ready.append(process)
        else:
            process.complete(current_time)

    return segments


_SCHEDULERS: Dict[SchedulingPolicy, Callable[[List[Process], Optional[int]], List[ExecutionSegment]]] = {
    SchedulingPolicy.FCFS: _schedule_fcfs,
    SchedulingPolicy.SJF: _schedule_sjf,
    SchedulingPolicy.ROUND_ROBIN: _schedule_round_robin,
    SchedulingPolicy.PRIORITY: _schedule_priority,
}


def simulate(
    processes: Sequence[Process],
    policy: Union[SchedulingPolicy, str],
    quantum: Optional[int] = None
) -> SchedulingResult:
    """
    Schedule a process set under the selected policy.

    The caller's Process objects are not modified; the result carries a
    frozen ProcessOutcome per process with completion, turnaround and
    waiting times filled in.

    Args:
        processes: Workload (arrival, burst, priority per process)
        policy: SchedulingPolicy member, value or name
        quantum: Time quantum, required for Round Robin

    Returns:
        SchedulingResult with Gantt trace and statistics

    Raises:
        InvalidInput: On invalid processes, policy or quantum
    """
    policy = require_member("policy", policy, SchedulingPolicy)

    if policy == SchedulingPolicy.ROUND_ROBIN:
        if quantum is None:
            raise InvalidInput("quantum", "Round Robin requires a time quantum")
        quantum = require_positive("quantum", quantum)
    else:
        quantum = None

    working = _prepare(processes)
    segments = _SCHEDULERS[policy](working, quantum)
    outcomes = tuple(p.outcome() for p in working)

    return SchedulingResult(
        policy=policy,
        segments=tuple(segments),
        processes=outcomes,
        statistics=SchedulingStatistics.from_run(outcomes, segments),
        quantum=quantum
    )
