#!/usr/bin/env python3
"""
OS Resource Policy Simulator
Main entry point for the simulation system.

Runs a JSON scenario through one of the five policy families (CPU
scheduling, Banker's safety check, page replacement, disk scheduling,
contiguous allocation), prints the full step trace and the statistics, or
compares every policy of a family on the same workload.
"""

import argparse
import sys
from typing import Optional

from algorithms import cpu_scheduling, disk_scheduling, memory_allocation, page_replacement, safety
from analysis.analyzer import (
    COMPARABLE_MODULES,
    UnsupportedComparison,
    compare_policies,
    generate_comparison_report,
)
from analysis.metrics import (
    format_allocation_report,
    format_paging_report,
    format_safety_report,
    format_scheduling_report,
    format_seek_report,
)
from utils.logger import SimulatorLogger
from utils.scenario_loader import MODULES, ScenarioLoadError, load_scenario
from utils.validation import InvalidInput


def _run_cpu(workload: dict, policy: str, logger: SimulatorLogger):
    result = cpu_scheduling.simulate(policy=policy, **workload)
    logger.log("\nGantt Trace:")
    logger.log_trace(result.segments)
    logger.log(format_scheduling_report(result, logger.verbose))
    return result


def _run_banker(workload: dict, policy: str, logger: SimulatorLogger):
    result = safety.simulate(**workload)
    logger.log_state(result.state.display())
    logger.log("\nSafety Algorithm Trace:")
    logger.log_trace(result.steps)
    logger.log(format_safety_report(result))
    return result


def _run_paging(workload: dict, policy: str, logger: SimulatorLogger):
    result = page_replacement.simulate(policy=policy, **workload)
    logger.log("\nReference Trace:")
    logger.log_trace(result.history)
    logger.log(format_paging_report(result))
    return result


def _run_disk(workload: dict, policy: str, logger: SimulatorLogger):
    result = disk_scheduling.simulate(policy=policy, **workload)
    logger.log(f"\nHead Walk (start at {result.head}):")
    logger.log_trace(result.steps)
    logger.log(format_seek_report(result))
    return result


def _run_memory(workload: dict, policy: str, logger: SimulatorLogger):
    result = memory_allocation.simulate(policy=policy, **workload)
    logger.log("\nAllocation Trace:")
    logger.log_trace(result.steps)
    logger.log(format_allocation_report(result))
    return result


_RUNNERS = {
    'cpu': _run_cpu,
    'banker': _run_banker,
    'paging': _run_paging,
    'disk': _run_disk,
    'memory': _run_memory,
}


def run_simulation(
    module: Optional[str],
    policy: Optional[str],
    scenario_path: str,
    verbose: bool = False,
    logger: Optional[SimulatorLogger] = None
):
    """
    Run one scenario under one policy.

    Args:
        module: Policy family (None = use the scenario's "module" field)
        policy: Policy name within the family (ignored for banker)
        scenario_path: Path to scenario JSON file
        verbose: Enable verbose logging
        logger: Logger to use (a console logger is created if omitted)

    Returns:
        The family's result object

    Raises:
        ScenarioLoadError: If the scenario cannot be loaded
        InvalidInput: If the workload or policy is invalid
    """
    logger = logger or SimulatorLogger(verbose=verbose)
    scenario = load_scenario(scenario_path, module)
    module = scenario['module']

    if policy is None and module != 'banker':
        raise InvalidInput("policy", f"a policy is required for module '{module}'")

    title = f"SIMULATION START: {module.upper()}"
    if module != 'banker':
        title += f" / {str(policy).upper()}"
    logger.log_section(title)
    logger.log(f"Scenario: {scenario_path}")

    return _RUNNERS[module](scenario['workload'], policy, logger)


def run_comparison(
    module: Optional[str],
    scenario_path: str,
    verbose: bool = False,
    logger: Optional[SimulatorLogger] = None
):
    """
    Run every policy of a family on one scenario and log the comparison report.

    Returns:
        List of PolicyComparisonResult

    Raises:
        ScenarioLoadError: If the scenario cannot be loaded
        UnsupportedComparison: If the module has a single policy
        InvalidInput: If the workload is invalid
    """
    logger = logger or SimulatorLogger(verbose=verbose)
    scenario = load_scenario(scenario_path, module)

    results = compare_policies(scenario['module'], scenario['workload'])
    logger.log(generate_comparison_report(scenario['module'], results, scenario_path))
    return results


def main(argv=None):
    """Main entry point for the simulator."""
    parser = argparse.ArgumentParser(
        description='OS Resource Policy Simulator'
    )
    parser.add_argument(
        '--module',
        choices=MODULES,
        default=None,
        help="Policy family to run (default: the scenario's 'module' field)"
    )
    parser.add_argument(
        '--policy',
        type=str,
        default=None,
        help='Policy within the family, e.g. fcfs, rr, lru, cscan, best_fit'
    )
    parser.add_argument(
        '--scenario',
        type=str,
        required=True,
        help='Path to scenario JSON file'
    )
    parser.add_argument(
        '--compare-policies',
        action='store_true',
        help=f"Compare all policies of the family ({', '.join(COMPARABLE_MODULES)})"
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose logging'
    )
    parser.add_argument(
        '--log-file',
        type=str,
        default=None,
        help='Also write the log to this file'
    )

    args = parser.parse_args(argv)

    if args.compare_policies and args.module == 'banker':
        parser.error("--compare-policies is not available for the banker module")
    if args.compare_policies and args.policy is not None:
        parser.error("--policy cannot be combined with --compare-policies")

    with SimulatorLogger(verbose=args.verbose, log_file=args.log_file) as logger:
        try:
            if args.compare_policies:
                run_comparison(args.module, args.scenario, args.verbose, logger)
            else:
                run_simulation(args.module, args.policy, args.scenario, args.verbose, logger)
        except (ScenarioLoadError, InvalidInput, UnsupportedComparison) as e:
            logger.log(str(e), "error")
            return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
