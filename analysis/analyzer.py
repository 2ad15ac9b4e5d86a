"""
Policy Comparison Library for the OS Resource Policy Simulator.

Called by simulator.py --compare-policies to run every policy of a family on
the same workload and rank them.
This is a library module, not a standalone CLI tool.
"""

from typing import Callable, Dict, List, NamedTuple
from dataclasses import dataclass, field

from algorithms import cpu_scheduling, disk_scheduling, memory_allocation, page_replacement
from models.policies import AllocationPolicy, DiskPolicy, ReplacementPolicy, SchedulingPolicy


class UnsupportedComparison(ValueError):
    """Raised when a module has no set of policies to compare."""
    pass


class MetricSpec(NamedTuple):
    """How to extract, format and rank one comparison metric."""
    name: str
    extract: Callable[[object], float]
    fmt: Callable[[float], str]
    higher_is_better: bool


@dataclass
class PolicyComparisonResult:
    """Metrics of one policy run on the shared workload."""
    policy_name: str
    metrics: Dict[str, float] = field(default_factory=dict)
    formatted: Dict[str, str] = field(default_factory=dict)

    def display(self) -> str:
        """Format results for display."""
        result = f"\nPolicy: {self.policy_name.upper()}\n"
        result += "\n".join(f"  {name}: {value}" for name, value in self.formatted.items())
        return result


_FAMILIES = {
    'cpu': (
        SchedulingPolicy,
        cpu_scheduling.simulate,
        [
            MetricSpec("Average Waiting Time", lambda r: r.statistics.avg_waiting_time,
                       lambda v: f"{v:.2f}", False),
            MetricSpec("Average Turnaround Time", lambda r: r.statistics.avg_turnaround_time,
                       lambda v: f"{v:.2f}", False),
            MetricSpec("Total Completion Time", lambda r: r.statistics.total_completion_time,
                       lambda v: f"{v}", False),
            MetricSpec("CPU Utilization", lambda r: r.statistics.cpu_utilization,
                       lambda v: f"{v:.1f}%", True),
        ],
    ),
    'paging': (
        ReplacementPolicy,
        page_replacement.simulate,
        [
            MetricSpec("Page Faults", lambda r: r.statistics.page_faults,
                       lambda v: f"{v}", False),
            MetricSpec("Hit Ratio", lambda r: r.statistics.hit_ratio,
                       lambda v: f"{v:.1f}%", True),
        ],
    ),
    'disk': (
        DiskPolicy,
        disk_scheduling.simulate,
        [
            MetricSpec("Total Seek Distance", lambda r: r.statistics.total_seek_distance,
                       lambda v: f"{v}", False),
            MetricSpec("Average Seek Distance", lambda r: r.statistics.average_seek_distance,
                       lambda v: f"{v:.1f}", False),
        ],
    ),
    'memory': (
        AllocationPolicy,
        memory_allocation.simulate,
        [
            MetricSpec("Unallocated Processes", lambda r: len(r.statistics.unallocated_processes),
                       lambda v: f"{v}", False),
            MetricSpec("Internal Fragmentation", lambda r: r.statistics.internal_fragmentation,
                       lambda v: f"{v}", False),
            MetricSpec("Memory Utilization", lambda r: r.statistics.utilization,
                       lambda v: f"{v:.1f}%", True),
        ],
    ),
}

COMPARABLE_MODULES = tuple(_FAMILIES)


def compare_policies(module: str, workload: Dict) -> List[PolicyComparisonResult]:
    """
    Run every policy of a family on the same workload.

    Args:
        module: One of COMPARABLE_MODULES
        workload: Keyword arguments for the family's simulate(), without policy

    Returns:
        One PolicyComparisonResult per policy, in enum order

    Raises:
        UnsupportedComparison: If the module has a single policy or is unknown
        InvalidInput: If the workload is invalid
    """
    if module not in _FAMILIES:
        raise UnsupportedComparison(
            f"Module {module!r} cannot be compared "
            f"(choose from: {', '.join(COMPARABLE_MODULES)})"
        )

    policy_enum, run, metric_specs = _FAMILIES[module]
    results = []

    for policy in policy_enum:
        outcome = run(policy=policy, **workload)
        comparison = PolicyComparisonResult(policy_name=policy.name)
        for metric in metric_specs:
            value = metric.extract(outcome)
            comparison.metrics[metric.name] = value
            comparison.formatted[metric.name] = metric.fmt(value)
        results.append(comparison)

    return results


def format_best(
    metric_name: str,
    results_list: List[PolicyComparisonResult],
    fmt: Callable[[float], str],
    higher_is_better: bool = True
) -> str:
    """Format best metric, handling ties. Returns empty string if all policies tied."""
    values = [r.metrics[metric_name] for r in results_list]
    target_value = max(values) if higher_is_better else min(values)

    winners = [r for r in results_list if r.metrics[metric_name] == target_value]

    # Skip if all policies are tied (meaningless comparison)
    if len(winners) == len(results_list):
        return ""

    label = f"Best {metric_name}" if higher_is_better else f"Lowest {metric_name}"
    if len(winners) == 1:
        return f"  {label}: {winners[0].policy_name.upper()} ({fmt(target_value)})\n"
    names = ", ".join(w.policy_name.upper() for w in winners)
    return f"  {label}: {names} (tie at {fmt(target_value)})\n"


def generate_comparison_report(module: str, results: List[PolicyComparisonResult], scenario_path: str = None) -> str:
    """
    Generate formatted comparison report.

    Args:
        module: Family the results belong to
        results: Output of compare_policies()
        scenario_path: Scenario file the workload came from (optional)

    Returns:
        Formatted string report
    """
    report = "\n" + "="*70 + "\n"
    report += f"POLICY COMPARISON REPORT ({module.upper()})\n"
    report += "="*70 + "\n"
    if scenario_path:
        report += f"Scenario: {scenario_path}\n"
    report += f"Policies compared: {len(results)}\n"
    report += "="*70 + "\n"

    for result in results:
        report += result.display()
        report += "\n" + "-"*70

    report += "\n\nKEY INSIGHTS:\n"
    report += "-"*70 + "\n"

    if len(results) > 1:
        _, _, metric_specs = _FAMILIES[module]
        insights = [
            format_best(metric.name, results, metric.fmt, metric.higher_is_better)
            for metric in metric_specs
        ]
        insights = [i for i in insights if i]

        if insights:
            for insight in insights:
                report += insight
        else:
            report += "  All policies showed identical performance (complete tie across all metrics).\n"

    report += "\n" + "="*70 + "\n"
    return report
