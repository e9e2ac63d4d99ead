from dataclasses import dataclass, field
import logging
from typing import Dict, Iterator, List, Sequence, Tuple
from exceptions.custom_errors import UnrecordedPriorityError

logger = logging.getLogger(__name__)


@dataclass
class SlotRecord:
    """Solved slot instances of one priority, in slot index order."""

    starts: List[float]
    """Start time of each slot instance."""
    durations: List[float]
    """Duration of each slot instance."""


@dataclass
class SolutionStore:
    """
    Solved slots of a cycle, keyed by priority.

    Only priorities that were actually reported are stored, in the order they
    were first reported. Unused priorities never get a placeholder entry, so
    guard band and capacity constraints built from the store only see real slots.
    """

    records: Dict[int, SlotRecord] = field(default_factory=dict)
    """Ordered mapping of priority to its solved slots."""

    def record_slot(
        self, prt: int, starts: Sequence[float], durations: Sequence[float]
    ) -> bool:
        """
        Record the solved slots of a priority. The first write wins.

        Returns:
            bool: True if the priority was recorded by this call, False if it was already present.
        """
        if prt in self.records:
            logger.debug(f"Priority {prt} already recorded; ignoring new slots")
            return False
        if len(starts) != len(durations):
            raise ValueError(
                f"Priority {prt} has {len(starts)} slot starts but {len(durations)} slot durations."
            )
        self.records[prt] = SlotRecord(list(starts), list(durations))
        return True

    def _get(self, prt: int) -> SlotRecord:
        try:
            return self.records[prt]
        except KeyError:
            raise UnrecordedPriorityError(
                f"No solved slots recorded for priority {prt}. Recorded: {self.slots_used}"
            )

    @property
    def slots_used(self) -> List[int]:
        return list(self.records)

    def slot_starts(self, prt: int) -> List[float]:
        return list(self._get(prt).starts)

    def slot_durations(self, prt: int) -> List[float]:
        return list(self._get(prt).durations)

    def slot_start(self, prt: int, index: int) -> float:
        return self._get(prt).starts[index]

    def slot_duration(self, prt: int, index: int) -> float:
        return self._get(prt).durations[index]

    def items(self) -> Iterator[Tuple[int, SlotRecord]]:
        return iter(self.records.items())

    def __contains__(self, prt: object) -> bool:
        return prt in self.records

    def __len__(self) -> int:
        return len(self.records)
