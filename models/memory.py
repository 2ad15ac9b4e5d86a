"""
Memory model for the OS Resource Policy Simulator.

Represents fixed-size memory blocks, the processes requesting them, and the
per-process allocation snapshots.
"""

from dataclasses import dataclass, replace
from typing import Optional, Tuple


@dataclass(frozen=True)
class MemoryBlock:
    """
    A fixed-size contiguous memory block.

    Attributes:
        block_id: Position of the block in the block list
        size: Block size
        allocated: True once a process occupies the block
        process_id: Occupying process (if allocated)
        process_size: Size requested by the occupying process (if allocated)
    """
    block_id: int
    size: int
    allocated: bool = False
    process_id: Optional[int] = None
    process_size: Optional[int] = None

    def occupy(self, process_id: int, process_size: int) -> "MemoryBlock":
        """Return an occupied copy of this block."""
        return replace(self, allocated=True, process_id=process_id, process_size=process_size)

    @property
    def internal_fragmentation(self) -> int:
        """Unused space inside an allocated block (0 when free)."""
        if not self.allocated:
            return 0
        return self.size - self.process_size


@dataclass(frozen=True)
class MemoryRequest:
    """
    A process requesting a contiguous block.

    Attributes:
        process_id: Position of the process in the request list
        size: Requested size
        allocated: True once placed
        block_id: Block the process was placed in (if allocated)
    """
    process_id: int
    size: int
    allocated: bool = False
    block_id: Optional[int] = None

    def place(self, block_id: int) -> "MemoryRequest":
        """Return a placed copy of this request."""
        return replace(self, allocated=True, block_id=block_id)


@dataclass(frozen=True)
class AllocationStep:
    """
    Snapshot taken after one process has been considered.

    Attributes:
        process_id: Process considered in this step
        placed: Whether a block was found
        block_id: Chosen block (None when not placed)
        blocks: All blocks after this step
        processes: All requests after this step
    """
    process_id: int
    placed: bool
    block_id: Optional[int]
    blocks: Tuple[MemoryBlock, ...]
    processes: Tuple[MemoryRequest, ...]

    def __str__(self) -> str:
        request = self.processes[self.process_id]
        if not self.placed:
            return f"Process {self.process_id} ({request.size}) - NOT ALLOCATED (no block fits)"
        block = self.blocks[self.block_id]
        return (
            f"Process {self.process_id} ({request.size}) -> Block {self.block_id} "
            f"({block.size}), leftover {block.internal_fragmentation}"
        )
