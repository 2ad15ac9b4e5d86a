"""
Disk model for the OS Resource Policy Simulator.
"""

from dataclasses import dataclass
from enum import Enum

DEFAULT_DISK_SIZE = 200


class Direction(Enum):
    """Initial head direction for direction-sensitive disk policies."""
    TOWARD_ZERO = "toward_zero"
    TOWARD_END = "toward_end"

    @classmethod
    def parse(cls, value) -> "Direction":
        """Accept members, values, names, or the aliases "left"/"right"."""
        if isinstance(value, cls):
            return value
        aliases = {
            'left': cls.TOWARD_ZERO,
            'down': cls.TOWARD_ZERO,
            'right': cls.TOWARD_END,
            'up': cls.TOWARD_END,
        }
        token = str(value).strip().lower()
        if token in aliases:
            return aliases[token]
        for member in cls:
            if token in (member.value, member.name.lower()):
                return member
        raise ValueError(f"Unknown direction: {value!r}")


@dataclass(frozen=True)
class SeekStep:
    """
    One head movement of the disk walk.

    Attributes:
        position: Cylinder reached
        distance: Cylinders travelled from the previous position
        is_request: False for edge/jump waypoints that service no request
    """
    position: int
    distance: int
    is_request: bool = True

    def __str__(self) -> str:
        label = "" if self.is_request else " (edge)"
        return f"-> {self.position}{label} [+{self.distance}]"
