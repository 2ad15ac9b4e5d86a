"""
Resource State model for the OS Resource Policy Simulator.

Holds the vectors and matrices required by the Banker's safety check.
"""

import numpy as np
from typing import List, Sequence
from dataclasses import dataclass

from utils.validation import InvalidInput, require_int_list, require_matrix


def _frozen(array: np.ndarray) -> np.ndarray:
    """Return a read-only integer copy of array."""
    array = np.array(array, dtype=int, copy=True)
    array.setflags(write=False)
    return array


@dataclass(frozen=True, eq=False)
class ResourceState:
    """
    Banker's algorithm resource state.

    Attributes:
        available: [R] Free resource instances by type
        allocation: [P][R] Resources currently held by each process
        maximum: [P][R] Maximum resource demand declared by each process

    Invariant:
        need = maximum - allocation >= 0 elementwise
    """
    available: np.ndarray
    allocation: np.ndarray
    maximum: np.ndarray

    @classmethod
    def from_lists(
        cls,
        available: Sequence[int],
        allocation: Sequence[Sequence[int]],
        maximum: Sequence[Sequence[int]]
    ) -> "ResourceState":
        """
        Build a validated state from plain nested lists.

        Raises:
            InvalidInput: On negative values, mismatched shapes or allocation above maximum
        """
        available_list = require_int_list("available", available)
        num_resources = len(available_list)

        if allocation is None or isinstance(allocation, (str, bytes)):
            raise InvalidInput("allocation", "expected a matrix (sequence of rows)")
        num_processes = len(allocation)

        allocation_rows = require_matrix("allocation", allocation, num_processes, num_resources)
        maximum_rows = require_matrix("maximum", maximum, num_processes, num_resources)

        for i in range(num_processes):
            for j in range(num_resources):
                if allocation_rows[i][j] > maximum_rows[i][j]:
                    raise InvalidInput(
                        f"allocation[{i}][{j}]",
                        f"allocation ({allocation_rows[i][j]}) exceeds maximum ({maximum_rows[i][j]})"
                    )

        return cls(
            available=_frozen(np.array(available_list, dtype=int)),
            allocation=_frozen(np.array(allocation_rows, dtype=int).reshape(num_processes, num_resources)),
            maximum=_frozen(np.array(maximum_rows, dtype=int).reshape(num_processes, num_resources))
        )

    @property
    def num_processes(self) -> int:
        """Number of processes (P)."""
        return int(self.allocation.shape[0])

    @property
    def num_resources(self) -> int:
        """Number of resource types (R)."""
        return int(self.available.shape[0])

    @property
    def need(self) -> np.ndarray:
        """
        Get need matrix [P][R].
        Computed as: Need = Max - Allocation
        """
        return _frozen(self.maximum - self.allocation)

    @property
    def total(self) -> np.ndarray:
        """Total instances per resource type: available + sum of allocations."""
        return _frozen(self.available + self.allocation.sum(axis=0))

    def with_grant(self, process: int, request: Sequence[int]) -> "ResourceState":
        """
        Return a new state with request moved from available to process's allocation.

        The receiver is left untouched.
        """
        request_vector = np.array(request, dtype=int)
        allocation = np.array(self.allocation, copy=True)
        allocation[process] += request_vector
        return ResourceState(
            available=_frozen(self.available - request_vector),
            allocation=_frozen(allocation),
            maximum=self.maximum
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, ResourceState):
            return NotImplemented
        return (
            np.array_equal(self.available, other.available)
            and np.array_equal(self.allocation, other.allocation)
            and np.array_equal(self.maximum, other.maximum)
        )

    __hash__ = None

    def to_lists(self) -> dict:
        """Plain Python view of the state (ints, not numpy scalars)."""
        return {
            'available': [int(x) for x in self.available],
            'allocation': [[int(x) for x in row] for row in self.allocation],
            'maximum': [[int(x) for x in row] for row in self.maximum],
            'need': [[int(x) for x in row] for row in self.need],
        }

    def display(self) -> str:
        """
        Generate readable string representation of the state.

        Returns:
            Formatted string showing the available vector and all matrices
        """
        output: List[str] = []
        output.append("\n" + "="*60)
        output.append("RESOURCE STATE")
        output.append("="*60)

        output.append("\nAvailable Resources:")
        output.append("  [" + ", ".join(
            f"R{j}:{self.available[j]:2}" for j in range(self.num_resources)
        ) + "]")

        header = "      " + " ".join(f"R{j:<2}" for j in range(self.num_resources))
        for title, matrix in (
            ("Allocation Matrix:", self.allocation),
            ("Maximum Matrix:", self.maximum),
            ("Need Matrix (Max - Allocation):", self.need),
        ):
            output.append(f"\n{title}")
            output.append(header)
            for i in range(self.num_processes):
                row = f"  P{i}: "
                row += " ".join(f"{matrix[i][j]:3}" for j in range(self.num_resources))
                output.append(row)

        output.append("\n" + "="*60)
        return "\n".join(output)
