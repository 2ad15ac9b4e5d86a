"""
Frame model for the OS Resource Policy Simulator.

A FrameState is the snapshot recorded after each page reference.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class FrameState:
    """
    Frame occupancy after one reference of the reference string.

    Attributes:
        step: Index of the reference in the reference string
        page: Page just referenced
        frames: Occupancy per frame slot (None = empty)
        fault: True if the page was not resident
        frame_index: Slot holding the referenced page after this step
        replaced_frame: Slot whose page was evicted (None when no eviction)
        evicted_page: Page that was evicted (None when no eviction)
    """
    step: int
    page: int
    frames: Tuple[Optional[int], ...]
    fault: bool
    frame_index: int
    replaced_frame: Optional[int] = None
    evicted_page: Optional[int] = None

    @property
    def hit(self) -> bool:
        return not self.fault

    def __str__(self) -> str:
        slots = " ".join("-" if page is None else str(page) for page in self.frames)
        if not self.fault:
            outcome = "HIT"
        elif self.evicted_page is None:
            outcome = f"FAULT (loaded into frame {self.frame_index})"
        else:
            outcome = f"FAULT (evicted {self.evicted_page} from frame {self.replaced_frame})"
        return f"ref {self.page:>3} -> [{slots}] {outcome}"
