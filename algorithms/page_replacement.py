"""
Page Replacement Algorithms for the OS Resource Policy Simulator.

Implements FIFO, LRU and Optimal replacement over a reference string,
recording a FrameState after every reference.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

from models.frames import FrameState
from models.policies import ReplacementPolicy
from analysis.metrics import PagingStatistics
from utils.validation import require_int_list, require_member, require_positive


@dataclass(frozen=True)
class PagingResult:
    """
    Outcome of one page replacement run.

    Attributes:
        policy: Replacement policy used
        frame_count: Number of frames
        reference_string: Pages referenced, in order
        history: FrameState per reference
        statistics: Fault and hit counters
    """
    policy: ReplacementPolicy
    frame_count: int
    reference_string: Tuple[int, ...]
    history: Tuple[FrameState, ...]
    statistics: PagingStatistics

    @property
    def page_faults(self) -> int:
        return self.statistics.page_faults


class _Victims:
    """
    Victim selection strategies.

    Each strategy receives the frame slots, the reference string, the
    current step and per-policy bookkeeping, and returns a slot index.
    """

    @staticmethod
    def fifo(frames: List[int], pages: Sequence[int], step: int, book: dict) -> int:
        # Circular insertion pointer: the slot after the last eviction holds the oldest page
        victim = book['pointer']
        book['pointer'] = (victim + 1) % len(frames)
        return victim

    @staticmethod
    def lru(frames: List[int], pages: Sequence[int], step: int, book: dict) -> int:
        last_used = book['last_used']
        return min(range(len(frames)), key=lambda slot: last_used[frames[slot]])

    @staticmethod
    def optimal(frames: List[int], pages: Sequence[int], step: int, book: dict) -> int:
        def next_use(page: int) -> float:
            for k in range(step + 1, len(pages)):
                if pages[k] == page:
                    return k
            # Never referenced again
            return float('inf')

        # max() keeps the lowest slot among equally distant pages
        return max(range(len(frames)), key=lambda slot: next_use(frames[slot]))


_VICTIM_SELECTORS: Dict[ReplacementPolicy, Callable[[List[int], Sequence[int], int, dict], int]] = {
    ReplacementPolicy.FIFO: _Victims.fifo,
    ReplacementPolicy.LRU: _Victims.lru,
    ReplacementPolicy.OPTIMAL: _Victims.optimal,
}


def simulate(
    reference_string: Sequence[int],
    frame_count: int,
    policy: Union[ReplacementPolicy, str]
) -> PagingResult:
    """
    Simulate page replacement over a reference string.

    A resident reference is a hit and changes nothing but LRU recency.
    On a fault the lowest-index empty frame is filled first; only when no
    frame is empty does the policy choose a victim.

    Args:
        reference_string: Page numbers in reference order
        frame_count: Number of physical frames (>= 1)
        policy: ReplacementPolicy member, value or name

    Returns:
        PagingResult with per-reference history and fault count

    Raises:
        InvalidInput: On a negative page, non-positive frame count or unknown policy
    """
    policy = require_member("policy", policy, ReplacementPolicy)
    frame_count = require_positive("frame_count", frame_count)
    pages = tuple(require_int_list("reference_string", reference_string))

    select_victim = _VICTIM_SELECTORS[policy]
    frames: List[Optional[int]] = [None] * frame_count
    book = {'pointer': 0, 'last_used': {}}
    history: List[FrameState] = []
    page_faults = 0

    for step, page in enumerate(pages):
        replaced_frame = None
        evicted_page = None

        if page in frames:
            fault = False
            frame_index = frames.index(page)
        else:
            fault = True
            page_faults += 1

            if None in frames:
                frame_index = frames.index(None)
            else:
                frame_index = select_victim(frames, pages, step, book)
                replaced_frame = frame_index
                evicted_page = frames[frame_index]

            frames[frame_index] = page

        book['last_used'][page] = step

        history.append(FrameState(
            step=step,
            page=page,
            frames=tuple(frames),
            fault=fault,
            frame_index=frame_index,
            replaced_frame=replaced_frame,
            evicted_page=evicted_page
        ))

    return PagingResult(
        policy=policy,
        frame_count=frame_count,
        reference_string=pages,
        history=tuple(history),
        statistics=PagingStatistics(references=len(pages), page_faults=page_faults)
    )
