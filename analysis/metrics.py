"""
Metrics for the OS Resource Policy Simulator.

Summary statistics for each policy family and the text reports printed at
the end of a simulation.
"""

from dataclasses import dataclass
from typing import Sequence, Tuple
import statistics


@dataclass(frozen=True)
class SchedulingStatistics:
    """
    Aggregate CPU scheduling metrics.

    1. Average Waiting Time: mean of (turnaround - burst)
    2. Average Turnaround Time: mean of (completion - arrival)
    3. Total Completion Time: end time of the last Gantt segment
    4. CPU Utilization %: total burst / total completion x 100
    """
    avg_waiting_time: float = 0.0
    avg_turnaround_time: float = 0.0
    total_completion_time: int = 0
    cpu_utilization: float = 0.0

    @classmethod
    def from_run(cls, processes: Sequence, segments: Sequence) -> "SchedulingStatistics":
        """
        Compute statistics from completed processes and the Gantt trace.

        Args:
            processes: Completed processes
            segments: Ordered execution segments

        Returns:
            SchedulingStatistics (all zero for an empty run)
        """
        if not processes or not segments:
            return cls()

        total_completion = segments[-1].end
        total_burst = sum(p.burst_time for p in processes)

        return cls(
            avg_waiting_time=float(statistics.mean(p.waiting_time for p in processes)),
            avg_turnaround_time=float(statistics.mean(p.turnaround_time for p in processes)),
            total_completion_time=total_completion,
            cpu_utilization=(total_burst / total_completion) * 100 if total_completion > 0 else 0.0
        )


@dataclass(frozen=True)
class PagingStatistics:
    """Page replacement counters."""
    references: int = 0
    page_faults: int = 0

    @property
    def page_hits(self) -> int:
        return self.references - self.page_faults

    @property
    def fault_ratio(self) -> float:
        """Page faults / references x 100."""
        if self.references == 0:
            return 0.0
        return (self.page_faults / self.references) * 100

    @property
    def hit_ratio(self) -> float:
        """Page hits / references x 100."""
        if self.references == 0:
            return 0.0
        return (self.page_hits / self.references) * 100


@dataclass(frozen=True)
class SeekStatistics:
    """Disk seek totals."""
    total_seek_distance: int = 0
    requests_serviced: int = 0

    @property
    def average_seek_distance(self) -> float:
        """Total seek distance / number of serviced requests."""
        if self.requests_serviced == 0:
            return 0.0
        return self.total_seek_distance / self.requests_serviced


@dataclass(frozen=True)
class AllocationStatistics:
    """Contiguous allocation outcome."""
    total_memory: int = 0
    allocated_memory: int = 0
    internal_fragmentation: int = 0
    allocated_processes: Tuple[int, ...] = ()
    unallocated_processes: Tuple[int, ...] = ()

    @classmethod
    def from_blocks(cls, blocks: Sequence, requests: Sequence) -> "AllocationStatistics":
        """Aggregate the final block and request snapshots."""
        return cls(
            total_memory=sum(b.size for b in blocks),
            allocated_memory=sum(b.process_size for b in blocks if b.allocated),
            internal_fragmentation=sum(b.internal_fragmentation for b in blocks),
            allocated_processes=tuple(r.process_id for r in requests if r.allocated),
            unallocated_processes=tuple(r.process_id for r in requests if not r.allocated)
        )

    @property
    def utilization(self) -> float:
        """Memory actually used by processes / total memory x 100."""
        if self.total_memory == 0:
            return 0.0
        return (self.allocated_memory / self.total_memory) * 100

    @property
    def fragmentation_ratio(self) -> float:
        """Internal fragmentation / total memory x 100."""
        if self.total_memory == 0:
            return 0.0
        return (self.internal_fragmentation / self.total_memory) * 100


def _banner(title: str) -> list:
    return ["\n" + "="*60, title, "="*60]


def format_scheduling_report(result, verbose: bool = False) -> str:
    """
    Format CPU scheduling statistics for display at end of simulation.

    Args:
        result: SchedulingResult
        verbose: If True, include the metric formulas

    Returns:
        Formatted report string
    """
    stats = result.statistics
    lines = _banner("CPU SCHEDULING METRICS")
    lines.append(f"Policy: {result.policy.name}")
    if result.quantum is not None:
        lines.append(f"Quantum: {result.quantum}")
    lines.append("")

    lines.append("PER-PROCESS SUMMARY:")
    lines.append("-" * 60)
    lines.append(f"  {'PID':<6} {'Arr':>4} {'Burst':>5} {'Prio':>4} {'Done':>5} {'TAT':>5} {'Wait':>5}")
    for p in result.processes:
        lines.append(
            f"  {p.pid:<6} {p.arrival_time:>4} {p.burst_time:>5} {p.priority:>4} "
            f"{p.completion_time:>5} {p.turnaround_time:>5} {p.waiting_time:>5}"
        )
    lines.append("")

    lines.append("KEY PERFORMANCE METRICS:")
    lines.append("-" * 60)
    lines.append(f"1. Average Waiting Time: {stats.avg_waiting_time:.2f}")
    lines.append(f"2. Average Turnaround Time: {stats.avg_turnaround_time:.2f}")
    lines.append(f"3. Total Completion Time: {stats.total_completion_time}")
    lines.append(f"4. CPU Utilization: {stats.cpu_utilization:.1f}%")

    if verbose:
        lines.append("")
        lines.append("METRIC FORMULAS:")
        lines.append("-" * 60)
        lines.append("1. Waiting Time: Turnaround - Burst, averaged over processes")
        lines.append("2. Turnaround Time: Completion - Arrival, averaged over processes")
        lines.append("3. Total Completion Time: End of the last Gantt segment")
        lines.append("4. CPU Utilization: (SUM burst / total completion) x 100")

    lines.append("="*60)
    return "\n".join(lines)


def format_safety_report(result) -> str:
    """Format a Banker's safety result."""
    lines = _banner("SAFETY CHECK RESULT")
    if result.is_safe:
        sequence = " -> ".join(f"P{i}" for i in result.safe_sequence) or "(no processes)"
        lines.append("System is in a SAFE state")
        lines.append(f"Safe Sequence: {sequence}")
    else:
        admitted = ", ".join(f"P{step.process}" for step in result.steps) or "none"
        lines.append("System is in an UNSAFE state (no safe sequence exists)")
        lines.append(f"Processes admitted before stalling: {admitted}")
    lines.append(f"Work after last admission: {list(result.final_work)}")
    lines.append("="*60)
    return "\n".join(lines)


def format_paging_report(result) -> str:
    """Format page replacement statistics."""
    stats = result.statistics
    lines = _banner("PAGE REPLACEMENT METRICS")
    lines.append(f"Policy: {result.policy.name}")
    lines.append(f"Frames: {result.frame_count}")
    lines.append("")
    lines.append(f"1. References: {stats.references}")
    lines.append(f"2. Page Faults: {stats.page_faults} ({stats.fault_ratio:.1f}%)")
    lines.append(f"3. Page Hits: {stats.page_hits} ({stats.hit_ratio:.1f}%)")
    lines.append("="*60)
    return "\n".join(lines)


def format_seek_report(result) -> str:
    """Format disk scheduling statistics."""
    stats = result.statistics
    lines = _banner("DISK SCHEDULING METRICS")
    lines.append(f"Policy: {result.policy.name}")
    lines.append(f"Initial Head: {result.head}  Disk Size: {result.disk_size}  Direction: {result.direction.value}")
    lines.append("")
    sequence = " -> ".join(str(p) for p in (result.head,) + result.sequence)
    lines.append(f"Seek Sequence: {sequence}")
    lines.append(f"1. Total Seek Distance: {stats.total_seek_distance}")
    lines.append(f"2. Average Seek Distance: {stats.average_seek_distance:.1f}")
    lines.append(f"3. Requests Serviced: {stats.requests_serviced}")
    lines.append("="*60)
    return "\n".join(lines)


def format_allocation_report(result) -> str:
    """Format contiguous allocation statistics."""
    stats = result.statistics
    lines = _banner("MEMORY ALLOCATION METRICS")
    lines.append(f"Policy: {result.policy.name}")
    lines.append("")

    lines.append("FINAL BLOCKS:")
    lines.append("-" * 60)
    for block in result.blocks:
        if block.allocated:
            lines.append(
                f"  Block {block.block_id}: {block.size:>5} <- Process {block.process_id} "
                f"({block.process_size}), fragment {block.internal_fragmentation}"
            )
        else:
            lines.append(f"  Block {block.block_id}: {block.size:>5}    free")
    lines.append("")

    unallocated = ", ".join(str(pid) for pid in stats.unallocated_processes) or "none"
    lines.append(f"1. Total Memory: {stats.total_memory}")
    lines.append(f"2. Allocated Memory: {stats.allocated_memory} ({stats.utilization:.1f}%)")
    lines.append(
        f"3. Internal Fragmentation: {stats.internal_fragmentation} "
        f"({stats.fragmentation_ratio:.1f}%)"
    )
    lines.append(f"4. Unallocated Processes: {unallocated}")
    lines.append("="*60)
    return "\n".join(lines)
