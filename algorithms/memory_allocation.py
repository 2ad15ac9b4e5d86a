"""
Contiguous Memory Allocation Algorithms for the OS Resource Policy Simulator.

Implements First-Fit and Best-Fit placement of processes into fixed-size
blocks. Each block holds at most one process; blocks are never split.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

from models.memory import AllocationStep, MemoryBlock, MemoryRequest
from models.policies import AllocationPolicy
from analysis.metrics import AllocationStatistics
from utils.validation import InvalidInput, require_int_list, require_member


@dataclass(frozen=True)
class AllocationResult:
    """
    Outcome of one allocation run.

    Attributes:
        policy: Placement policy used
        steps: One snapshot per process, in process order
        blocks: Final block states
        processes: Final request states
        statistics: Memory usage and fragmentation
    """
    policy: AllocationPolicy
    steps: Tuple[AllocationStep, ...]
    blocks: Tuple[MemoryBlock, ...]
    processes: Tuple[MemoryRequest, ...]
    statistics: AllocationStatistics


def _first_fit(blocks: Sequence[MemoryBlock], size: int) -> Optional[int]:
    """First free block, in list order, large enough for the request."""
    for block in blocks:
        if not block.allocated and block.size >= size:
            return block.block_id
    return None


def _best_fit(blocks: Sequence[MemoryBlock], size: int) -> Optional[int]:
    """Free block minimizing leftover space; ties go to the earliest block."""
    best_block = None
    min_waste = None

    for block in blocks:
        if not block.allocated and block.size >= size:
            waste = block.size - size
            # Strict comparison keeps the earliest block on ties
            if min_waste is None or waste < min_waste:
                min_waste = waste
                best_block = block.block_id

    return best_block


_PLACEMENT: Dict[AllocationPolicy, Callable[[Sequence[MemoryBlock], int], Optional[int]]] = {
    AllocationPolicy.FIRST_FIT: _first_fit,
    AllocationPolicy.BEST_FIT: _best_fit,
}


def _validate_sizes(field: str, sizes: Sequence[int]) -> List[int]:
    values = require_int_list(field, sizes)
    for index, size in enumerate(values):
        if size <= 0:
            raise InvalidInput(f"{field}[{index}]", f"size must be positive (got {size})")
    return values


def simulate(
    block_sizes: Sequence[int],
    process_sizes: Sequence[int],
    policy: Union[AllocationPolicy, str]
) -> AllocationResult:
    """
    Place processes into memory blocks, one process at a time.

    A process that finds no suitable block stays unallocated and the
    remaining processes are still considered.

    Args:
        block_sizes: Block sizes in block-list order (block ids are positions)
        process_sizes: Requested sizes in process order (process ids are positions)
        policy: AllocationPolicy member, value or name

    Returns:
        AllocationResult with one AllocationStep per process

    Raises:
        InvalidInput: On non-positive sizes or an unknown policy
    """
    policy = require_member("policy", policy, AllocationPolicy)
    blocks = [
        MemoryBlock(block_id=i, size=size)
        for i, size in enumerate(_validate_sizes("blocks", block_sizes))
    ]
    requests = [
        MemoryRequest(process_id=i, size=size)
        for i, size in enumerate(_validate_sizes("processes", process_sizes))
    ]

    choose_block = _PLACEMENT[policy]
    steps: List[AllocationStep] = []

    for request in list(requests):
        block_id = choose_block(blocks, request.size)

        if block_id is not None:
            blocks[block_id] = blocks[block_id].occupy(request.process_id, request.size)
            requests[request.process_id] = request.place(block_id)

        steps.append(AllocationStep(
            process_id=request.process_id,
            placed=block_id is not None,
            block_id=block_id,
            blocks=tuple(blocks),
            processes=tuple(requests)
        ))

    return AllocationResult(
        policy=policy,
        steps=tuple(steps),
        blocks=tuple(blocks),
        processes=tuple(requests),
        statistics=AllocationStatistics.from_blocks(blocks, requests)
    )
