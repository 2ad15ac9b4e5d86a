"""
Process model for the OS Resource Policy Simulator.

Represents a schedulable process and the Gantt segments it runs in.
"""

from dataclasses import dataclass, replace
from typing import Optional


@dataclass
class Process:
    """
    Represents a process in the CPU scheduling simulation.

    Attributes:
        pid: Process identifier (unique, stable)
        arrival_time: Time the process enters the ready set (>= 0)
        burst_time: Total CPU time required (> 0)
        priority: Priority level (lower value = higher priority)
        remaining_time: CPU time still required, initialised to burst_time
        completion_time: Time the process finished (set once on completion)
        turnaround_time: completion_time - arrival_time
        waiting_time: turnaround_time - burst_time
    """
    pid: str
    arrival_time: int
    burst_time: int
    priority: int = 0
    remaining_time: Optional[int] = None
    completion_time: Optional[int] = None
    turnaround_time: Optional[int] = None
    waiting_time: Optional[int] = None

    def __post_init__(self):
        """Initialise remaining time from the burst if not provided."""
        if self.remaining_time is None:
            self.remaining_time = self.burst_time

    def fresh_copy(self) -> "Process":
        """
        Copy this process with all run-time fields reset.

        Engines work on fresh copies so the caller's objects are never mutated.
        """
        return replace(
            self,
            remaining_time=self.burst_time,
            completion_time=None,
            turnaround_time=None,
            waiting_time=None
        )

    def run(self, amount: int) -> None:
        """
        Consume CPU time.

        Raises:
            ValueError: If amount exceeds the remaining time
        """
        if amount <= 0 or amount > self.remaining_time:
            raise ValueError(
                f"{self.pid}: cannot run for {amount} "
                f"(remaining {self.remaining_time})"
            )
        self.remaining_time -= amount

    def complete(self, time: int) -> None:
        """
        Record completion and derive turnaround and waiting time.

        Raises:
            ValueError: If the process was already completed
        """
        if self.completion_time is not None:
            raise ValueError(f"{self.pid}: completion already recorded at {self.completion_time}")

        self.remaining_time = 0
        self.completion_time = time
        self.turnaround_time = self.completion_time - self.arrival_time
        self.waiting_time = self.turnaround_time - self.burst_time

    def is_finished(self) -> bool:
        """Check if process has completed execution."""
        return self.completion_time is not None

    def outcome(self) -> "ProcessOutcome":
        """
        Freeze the finished run into a read-only record.

        Raises:
            ValueError: If the process has not completed
        """
        if not self.is_finished():
            raise ValueError(f"{self.pid}: has not completed")
        return ProcessOutcome(
            pid=self.pid,
            arrival_time=self.arrival_time,
            burst_time=self.burst_time,
            priority=self.priority,
            completion_time=self.completion_time,
            turnaround_time=self.turnaround_time,
            waiting_time=self.waiting_time
        )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"Process(pid={self.pid}, arrival={self.arrival_time}, "
            f"burst={self.burst_time}, priority={self.priority}, "
            f"completion={self.completion_time})"
        )


@dataclass(frozen=True)
class ExecutionSegment:
    """
    One contiguous run of a process on the CPU (a Gantt chart bar).

    Attributes:
        pid: Process that ran
        start: Segment start time
        end: Segment end time (end > start)
    """
    pid: str
    start: int
    end: int

    @property
    def duration(self) -> int:
        return self.end - self.start

    def __str__(self) -> str:
        return f"{self.pid} [{self.start}-{self.end})"


@dataclass(frozen=True)
class ProcessOutcome:
    """
    Per-process times of a finished scheduling run.

    Attributes:
        pid: Process identifier
        arrival_time: Arrival time
        burst_time: CPU time used
        priority: Priority level
        completion_time: Time the process finished
        turnaround_time: completion_time - arrival_time
        waiting_time: turnaround_time - burst_time
    """
    pid: str
    arrival_time: int
    burst_time: int
    priority: int
    completion_time: int
    turnaround_time: int
    waiting_time: int
