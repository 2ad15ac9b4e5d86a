"""
Disk Scheduling Algorithms for the OS Resource Policy Simulator.

Implements FCFS, SSTF, SCAN, C-SCAN, LOOK and C-LOOK head scheduling.

Every policy produces a walk: the ordered positions the head visits,
including disk-edge waypoints for SCAN/C-SCAN. Seek distance is the sum of
absolute differences along the walk, starting at the initial head position,
so edge traversal and the circular return jump are always paid for.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Sequence, Tuple, Union

from models.disk import DEFAULT_DISK_SIZE, Direction, SeekStep
from models.policies import DiskPolicy
from analysis.metrics import SeekStatistics
from utils.validation import (
    InvalidInput,
    require_int_list,
    require_member,
    require_non_negative,
    require_positive,
)

# (position, is_request)
Stop = Tuple[int, bool]


@dataclass(frozen=True)
class SeekResult:
    """
    Outcome of one disk scheduling run.

    Attributes:
        policy: Policy used
        head: Initial head position
        disk_size: Number of cylinders
        direction: Initial direction (direction-sensitive policies)
        requests: Pending requests in arrival order
        steps: Head walk, one SeekStep per movement
        statistics: Total and average seek distance
    """
    policy: DiskPolicy
    head: int
    disk_size: int
    direction: Direction
    requests: Tuple[int, ...]
    steps: Tuple[SeekStep, ...]
    statistics: SeekStatistics

    @property
    def sequence(self) -> Tuple[int, ...]:
        """Every position visited, edge waypoints included."""
        return tuple(step.position for step in self.steps)

    @property
    def serviced(self) -> Tuple[int, ...]:
        """Requests in service order."""
        return tuple(step.position for step in self.steps if step.is_request)

    @property
    def total_seek_distance(self) -> int:
        return self.statistics.total_seek_distance


def _split(requests: Sequence[int], head: int, direction: Direction) -> Tuple[List[int], List[int]]:
    """
    Partition requests into (ahead, behind), each sorted nearest-first.

    Requests at the head position count as ahead.
    """
    if direction == Direction.TOWARD_END:
        ahead = sorted(r for r in requests if r >= head)
        behind = sorted((r for r in requests if r < head), reverse=True)
    else:
        ahead = sorted((r for r in requests if r <= head), reverse=True)
        behind = sorted(r for r in requests if r > head)
    return ahead, behind


def _edges(disk_size: int, direction: Direction) -> Tuple[int, int]:
    """(edge in the travel direction, opposite edge)."""
    if direction == Direction.TOWARD_END:
        return disk_size - 1, 0
    return 0, disk_size - 1


def _waypoint(stops: List[Stop], head: int, position: int) -> None:
    """Append an edge waypoint unless the head already sits there."""
    current = stops[-1][0] if stops else head
    if current != position:
        stops.append((position, False))


def _requests(positions: Sequence[int]) -> List[Stop]:
    return [(p, True) for p in positions]


def _fcfs(requests: Sequence[int], head: int, disk_size: int, direction: Direction) -> List[Stop]:
    """Service in arrival order."""
    return _requests(requests)


def _sstf(requests: Sequence[int], head: int, disk_size: int, direction: Direction) -> List[Stop]:
    """Greedy nearest request; ties go to the earliest pending request."""
    remaining = list(requests)
    order = []
    current = head
    while remaining:
        nearest = min(remaining, key=lambda r: abs(r - current))
        order.append(nearest)
        remaining.remove(nearest)
        current = nearest
    return _requests(order)


def _scan(requests: Sequence[int], head: int, disk_size: int, direction: Direction) -> List[Stop]:
    """Sweep to the edge, reverse, sweep back (elevator)."""
    ahead, behind = _split(requests, head, direction)
    edge, _ = _edges(disk_size, direction)

    stops = _requests(ahead)
    if behind:
        _waypoint(stops, head, edge)
        stops.extend(_requests(behind))
    return stops


def _c_scan(requests: Sequence[int], head: int, disk_size: int, direction: Direction) -> List[Stop]:
    """Sweep to the edge, jump to the opposite edge, keep the same direction."""
    ahead, behind = _split(requests, head, direction)
    edge, opposite = _edges(disk_size, direction)

    stops = _requests(ahead)
    if behind:
        _waypoint(stops, head, edge)
        _waypoint(stops, head, opposite)
        # Same travel direction: the request nearest the opposite edge comes first
        stops.extend(_requests(reversed(behind)))
    return stops


def _look(requests: Sequence[int], head: int, disk_size: int, direction: Direction) -> List[Stop]:
    """As SCAN, reversing at the last request instead of the edge."""
    ahead, behind = _split(requests, head, direction)
    return _requests(ahead + behind)


def _c_look(requests: Sequence[int], head: int, disk_size: int, direction: Direction) -> List[Stop]:
    """As C-SCAN, jumping to the far-side request nearest the opposite edge."""
    ahead, behind = _split(requests, head, direction)
    return _requests(ahead + list(reversed(behind)))


_POLICIES: Dict[DiskPolicy, Callable[[Sequence[int], int, int, Direction], List[Stop]]] = {
    DiskPolicy.FCFS: _fcfs,
    DiskPolicy.SSTF: _sstf,
    DiskPolicy.SCAN: _scan,
    DiskPolicy.C_SCAN: _c_scan,
    DiskPolicy.LOOK: _look,
    DiskPolicy.C_LOOK: _c_look,
}


def simulate(
    requests: Sequence[int],
    head: int,
    policy: Union[DiskPolicy, str],
    disk_size: int = DEFAULT_DISK_SIZE,
    direction: Union[Direction, str] = Direction.TOWARD_END
) -> SeekResult:
    """
    Schedule pending disk requests.

    Args:
        requests: Cylinder numbers in arrival order
        head: Initial head position
        policy: DiskPolicy member, value or name
        disk_size: Number of cylinders (positions 0 .. disk_size - 1)
        direction: Initial direction for SCAN/C-SCAN/LOOK/C-LOOK

    Returns:
        SeekResult with the head walk and seek statistics

    Raises:
        InvalidInput: On positions outside the disk or an unknown policy/direction
    """
    policy = require_member("policy", policy, DiskPolicy)
    disk_size = require_positive("disk_size", disk_size)
    head = require_non_negative("head", head)
    if head >= disk_size:
        raise InvalidInput("head", f"position {head} is outside the disk (0-{disk_size - 1})")

    try:
        direction = Direction.parse(direction)
    except ValueError as e:
        raise InvalidInput("direction", str(e)) from e

    pending = tuple(require_int_list("requests", requests))
    for index, cylinder in enumerate(pending):
        if cylinder >= disk_size:
            raise InvalidInput(
                f"requests[{index}]",
                f"cylinder {cylinder} is outside the disk (0-{disk_size - 1})"
            )

    stops = _POLICIES[policy](pending, head, disk_size, direction)

    steps = []
    current = head
    for position, is_request in stops:
        steps.append(SeekStep(position=position, distance=abs(position - current), is_request=is_request))
        current = position

    return SeekResult(
        policy=policy,
        head=head,
        disk_size=disk_size,
        direction=direction,
        requests=pending,
        steps=tuple(steps),
        statistics=SeekStatistics(
            total_seek_distance=sum(step.distance for step in steps),
            requests_serviced=len(pending)
        )
    )
