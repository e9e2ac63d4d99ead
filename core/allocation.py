from enum import Enum
import logging
from typing import List

logger = logging.getLogger(__name__)

"""
This module contains the slot budget policies that split the slots of a cycle across its priorities.
Priority 0 is the highest priority.
"""


class SlotArrangementMode(str, Enum):
    AGGRESSIVE_DESCENT = "AGGRESSIVE_DESCENT"
    EQUAL_DISTRIBUTION = "EQUAL_DISTRIBUTION"
    MAX_CAPACITY = "MAX_CAPACITY"

    @classmethod
    def parse(cls, mode: "SlotArrangementMode | str") -> "SlotArrangementMode":
        """Accept an enum member or its name in any case (e.g. "equal_distribution")."""
        if isinstance(mode, cls):
            return mode
        try:
            return cls[str(mode).strip().upper()]
        except KeyError:
            raise ValueError(
                f"Invalid slot arrangement mode '{mode}'. Expected one of: "
                f"{', '.join(m.name for m in cls)}."
            )


def allocate_slots(
    total_slots: int,
    num_priorities: int,
    mode: SlotArrangementMode | str = SlotArrangementMode.AGGRESSIVE_DESCENT,
) -> List[int]:
    """
    Split a slot budget into one slot count per priority.

    - AGGRESSIVE_DESCENT: priority 0 gets the whole budget, every following priority
      half of the previous count (integer division), never less than 1. A budget
      of 0 therefore leaves only priority 0 unused.
    - EQUAL_DISTRIBUTION: every priority gets total_slots // num_priorities. The
      remainder is dropped and a count of 0 means the priority is unused.
    - MAX_CAPACITY: every priority gets the whole budget.

    Args:
        total_slots (int): Slot budget of the cycle.
        num_priorities (int): Number of priority levels.
        mode (SlotArrangementMode | str): Arrangement policy.

    Returns:
        List[int]: Slot count per priority, of length num_priorities.

    Raises:
        ValueError: If a count is negative or the mode is unknown.
    """
    if total_slots < 0:
        raise ValueError(f"Slot budget must not be negative, got {total_slots}.")
    if num_priorities < 0:
        raise ValueError(
            f"Number of priorities must not be negative, got {num_priorities}."
        )

    mode = SlotArrangementMode.parse(mode)
    match mode:
        case SlotArrangementMode.AGGRESSIVE_DESCENT:
            counts = []
            current = total_slots
            for _ in range(num_priorities):
                counts.append(current)
                current = max(current // 2, 1)
        case SlotArrangementMode.EQUAL_DISTRIBUTION:
            share = total_slots // num_priorities if num_priorities else 0
            remainder = total_slots - share * num_priorities
            if remainder:
                logger.debug(
                    f"Equal distribution drops {remainder} of {total_slots} slots "
                    f"across {num_priorities} priorities"
                )
            counts = [share] * num_priorities
        case SlotArrangementMode.MAX_CAPACITY:
            counts = [total_slots] * num_priorities

    return counts
