"""
Policy selectors for the OS Resource Policy Simulator.

Each policy family is a closed enum; engine modules dispatch on the member
through a single selection table.
"""

from enum import Enum


class SchedulingPolicy(Enum):
    """CPU scheduling policies."""
    FCFS = "fcfs"
    SJF = "sjf"
    ROUND_ROBIN = "rr"
    PRIORITY = "priority"


class ReplacementPolicy(Enum):
    """Page replacement policies."""
    FIFO = "fifo"
    LRU = "lru"
    OPTIMAL = "optimal"


class DiskPolicy(Enum):
    """Disk-head scheduling policies."""
    FCFS = "fcfs"
    SSTF = "sstf"
    SCAN = "scan"
    C_SCAN = "cscan"
    LOOK = "look"
    C_LOOK = "clook"


class AllocationPolicy(Enum):
    """Contiguous memory allocation policies."""
    FIRST_FIT = "first_fit"
    BEST_FIT = "best_fit"
