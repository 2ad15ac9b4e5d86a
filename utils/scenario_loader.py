"""
Scenario Loader for the OS Resource Policy Simulator.

Loads JSON scenario files into keyword arguments for the engine's
simulate() functions. Structural problems (missing fields, bad JSON,
unparsable numbers) raise ScenarioLoadError; value checks are left to the
engine, which raises InvalidInput.
"""

import json
from typing import Any, Dict, List, Optional

from models.disk import DEFAULT_DISK_SIZE, Direction
from models.process import Process

MODULES = ('cpu', 'banker', 'paging', 'disk', 'memory')

DEFAULT_QUANTUM = 2


class ScenarioLoadError(Exception):
    """Exception raised when scenario file cannot be loaded or is invalid."""
    pass


def load_scenario(file_path: str, module: Optional[str] = None) -> Dict[str, Any]:
    """
    Load scenario from JSON file.

    Args:
        file_path: Path to scenario JSON file
        module: Policy family; defaults to the scenario's own "module" field

    Returns:
        Dict: {'module': name, 'workload': simulate() keyword arguments}

    Raises:
        ScenarioLoadError: If file cannot be loaded or is invalid
    """
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except FileNotFoundError:
        raise ScenarioLoadError(f"Scenario file not found: {file_path}")
    except json.JSONDecodeError as e:
        raise ScenarioLoadError(f"Invalid JSON in scenario file: {e}")

    if not isinstance(data, dict):
        raise ScenarioLoadError("Scenario must be a JSON object")

    declared = data.get('module')
    if module is None:
        module = declared
    elif declared is not None and declared != module:
        raise ScenarioLoadError(
            f"Scenario is for module '{declared}' but '{module}' was requested"
        )

    if module not in MODULES:
        raise ScenarioLoadError(
            f"Unknown or missing module {module!r} (choose from: {', '.join(MODULES)})"
        )

    return {'module': module, 'workload': _LOADERS[module](data)}


def parse_int_list(value: Any, field: str) -> List[int]:
    """
    Parse a list of integers given as a JSON array or a space-separated string.

    Args:
        value: e.g. "98 183 37" or [98, 183, 37]
        field: Field name for error messages

    Returns:
        List of ints

    Raises:
        ScenarioLoadError: If an entry is not an integer
    """
    if isinstance(value, str):
        tokens = value.replace(',', ' ').split()
    elif isinstance(value, list):
        tokens = value
    else:
        raise ScenarioLoadError(f"'{field}' must be a list or a space-separated string")

    result = []
    for token in tokens:
        if isinstance(token, bool):
            raise ScenarioLoadError(f"'{field}' contains a non-integer value: {token!r}")
        if isinstance(token, int):
            result.append(token)
            continue
        try:
            result.append(int(str(token).strip()))
        except ValueError:
            raise ScenarioLoadError(f"'{field}' contains a non-integer value: {token!r}")
    return result


def _require(data: Dict, *fields: str) -> None:
    for name in fields:
        if name not in data:
            raise ScenarioLoadError(f"Scenario missing '{name}' field")


def _load_cpu(data: Dict) -> Dict[str, Any]:
    """
    Load a CPU scheduling workload.

    Each process needs 'arrival_time' and 'burst_time'; 'pid' defaults to
    P<n> (1-based) and 'priority' to 0.
    """
    _require(data, 'processes')
    if not isinstance(data['processes'], list):
        raise ScenarioLoadError("'processes' must be a list")

    processes = []
    for index, proc_data in enumerate(data['processes']):
        if not isinstance(proc_data, dict):
            raise ScenarioLoadError(f"Process {index}: expected an object")
        for name in ('arrival_time', 'burst_time'):
            if name not in proc_data:
                raise ScenarioLoadError(f"Process {index}: missing required field: {name}")

        processes.append(Process(
            pid=str(proc_data.get('pid', f"P{index + 1}")),
            arrival_time=proc_data['arrival_time'],
            burst_time=proc_data['burst_time'],
            priority=proc_data.get('priority', 0)
        ))

    return {
        'processes': processes,
        'quantum': data.get('quantum', DEFAULT_QUANTUM),
    }


def _load_banker(data: Dict) -> Dict[str, Any]:
    """Load a Banker's workload (available vector, allocation and maximum matrices)."""
    _require(data, 'available', 'allocation', 'maximum')
    for name in ('allocation', 'maximum'):
        if not isinstance(data[name], list):
            raise ScenarioLoadError(f"'{name}' must be a list of rows")

    return {
        'available': parse_int_list(data['available'], 'available'),
        'allocation': [
            parse_int_list(row, f"allocation[{i}]") for i, row in enumerate(data['allocation'])
        ],
        'maximum': [
            parse_int_list(row, f"maximum[{i}]") for i, row in enumerate(data['maximum'])
        ],
    }


def _load_paging(data: Dict) -> Dict[str, Any]:
    """Load a page replacement workload."""
    _require(data, 'reference_string', 'frames')

    return {
        'reference_string': parse_int_list(data['reference_string'], 'reference_string'),
        'frame_count': data['frames'],
    }


def _load_disk(data: Dict) -> Dict[str, Any]:
    """Load a disk scheduling workload."""
    _require(data, 'requests', 'head')

    try:
        direction = Direction.parse(data.get('direction', Direction.TOWARD_END.value))
    except ValueError as e:
        raise ScenarioLoadError(str(e))

    return {
        'requests': parse_int_list(data['requests'], 'requests'),
        'head': data['head'],
        'disk_size': data.get('disk_size', DEFAULT_DISK_SIZE),
        'direction': direction,
    }


def _load_memory(data: Dict) -> Dict[str, Any]:
    """Load a contiguous allocation workload."""
    _require(data, 'blocks', 'processes')

    return {
        'block_sizes': parse_int_list(data['blocks'], 'blocks'),
        'process_sizes': parse_int_list(data['processes'], 'processes'),
    }


_LOADERS = {
    'cpu': _load_cpu,
    'banker': _load_banker,
    'paging': _load_paging,
    'disk': _load_disk,
    'memory': _load_memory,
}
