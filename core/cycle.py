import itertools
import logging
from typing import List, Optional, Sequence
from core.allocation import SlotArrangementMode, allocate_slots
from core.solution_store import SolutionStore
from exceptions.custom_errors import InvalidCycleBoundsError, InvalidSlotDurationError
from schemas.cycle import CycleConfig, CycleRecord
from utils.constants import (
    DEFAULT_NUM_OF_PRTS,
    DEFAULT_NUM_OF_SLOTS,
    DEFAULT_SLOT_ARRANGEMENT_MODE,
)

logger = logging.getLogger(__name__)


class CycleIdGenerator:
    """
    Hands out monotonically increasing cycle instance ids.

    Owned by the caller that creates the cycles of one run. Names of symbolic
    unknowns are derived from these ids, so every cycle solved in the same
    session must come from the same generator.
    """

    def __init__(self, start: int = 1):
        self._counter = itertools.count(start)

    def next_id(self) -> int:
        return next(self._counter)


class Cycle:
    """
    Timing structure of one repeating TSN cycle.

    A cycle holds the bounds its duration must respect, the maximum duration of a
    priority slot and the slot budget split across priorities. After a solve it
    also holds the chosen duration and start, and the solved slots per priority
    (``slots``).

    There is no direct reference from a cycle to the symbolic unknowns of its
    slots; those are created per solver context by a SymbolicVariableBinder.
    """

    def __init__(
        self,
        ids: CycleIdGenerator,
        upper_bound_cycle_time: float,
        lower_bound_cycle_time: float,
        first_cycle_start: float,
        maximum_slot_duration: float,
    ):
        """
        Args:
            ids (CycleIdGenerator): Source of the instance id of this cycle.
            upper_bound_cycle_time (float): Maximum duration of the cycle.
            lower_bound_cycle_time (float): Minimum duration of the cycle.
            first_cycle_start (float): Offset of the first repetition.
            maximum_slot_duration (float): Upper bound of every priority slot.

        Raises:
            InvalidCycleBoundsError: If the lower bound exceeds the upper bound.
            InvalidSlotDurationError: If the maximum slot duration is not positive.
        """
        self.instance = ids.next_id()
        self.name = f"cycle{self.instance}"
        self.port_name = ""

        self.upper_bound_cycle_time = upper_bound_cycle_time
        self.lower_bound_cycle_time = lower_bound_cycle_time
        self.first_cycle_start = first_cycle_start
        self.maximum_slot_duration = maximum_slot_duration

        # Solved values
        self.cycle_duration: Optional[float] = None
        self.cycle_start: Optional[float] = None

        self.wrap_transmission = False
        self.num_of_prts = DEFAULT_NUM_OF_PRTS
        self.num_of_slots = DEFAULT_NUM_OF_SLOTS
        self.slot_arrangement_mode = SlotArrangementMode.parse(
            DEFAULT_SLOT_ARRANGEMENT_MODE
        )
        self.slots = SolutionStore()

        self.validate()

    @classmethod
    def from_slot_duration(
        cls, ids: CycleIdGenerator, maximum_slot_duration: float
    ) -> "Cycle":
        """Create a cycle with zero bounds. The bounds must be set before solving."""
        return cls(ids, 0.0, 0.0, 0.0, maximum_slot_duration)

    @classmethod
    def from_config(cls, ids: CycleIdGenerator, config: CycleConfig) -> "Cycle":
        """Create a cycle from a validated CycleConfig."""
        cycle = cls(
            ids,
            config.upperBoundCycleTime,
            config.lowerBoundCycleTime,
            config.firstCycleStart,
            config.maximumSlotDuration,
        )
        cycle.num_of_prts = config.numOfPrts
        cycle.num_of_slots = config.numOfSlots
        cycle.slot_arrangement_mode = config.slotArrangementMode
        cycle.wrap_transmission = config.wrapTransmission
        cycle.port_name = config.portName
        return cycle

    def validate(self):
        """Check the cycle invariants. Run before binding the cycle to a solver."""
        if self.lower_bound_cycle_time > self.upper_bound_cycle_time:
            raise InvalidCycleBoundsError(
                f"❌ {self.name}: lower bound {self.lower_bound_cycle_time} exceeds "
                f"upper bound {self.upper_bound_cycle_time}."
            )
        if self.maximum_slot_duration <= 0:
            raise InvalidSlotDurationError(
                f"❌ {self.name}: maximum slot duration must be positive, "
                f"got {self.maximum_slot_duration}."
            )

    # == Slot budget ==
    @property
    def num_of_slots_per_prt(self) -> List[int]:
        return allocate_slots(
            self.num_of_slots, self.num_of_prts, self.slot_arrangement_mode
        )

    def get_num_of_slots(self, prt: int) -> int:
        return self.num_of_slots_per_prt[prt]

    def use_transmission_wrapping(self):
        self.wrap_transmission = True

    # == Solved slots ==
    def add_slot_used(
        self, prt: int, slot_start: Sequence[float], slot_duration: Sequence[float]
    ) -> bool:
        return self.slots.record_slot(prt, slot_start, slot_duration)

    @property
    def slots_used(self) -> List[int]:
        return self.slots.slots_used

    def get_slot_start(self, prt: int, index: int) -> float:
        return self.slots.slot_start(prt, index)

    def get_slot_duration(self, prt: int, index: int) -> float:
        return self.slots.slot_duration(prt, index)

    def get_slot_start_list(self, prt: int) -> List[float]:
        return self.slots.slot_starts(prt)

    def get_slot_duration_list(self, prt: int) -> List[float]:
        return self.slots.slot_durations(prt)

    # == Persistence ==
    def to_record(self) -> CycleRecord:
        """Snapshot the numeric state of the cycle. Symbolic unknowns are not included."""
        return CycleRecord(
            instance=self.instance,
            name=self.name,
            portName=self.port_name,
            upperBoundCycleTime=self.upper_bound_cycle_time,
            lowerBoundCycleTime=self.lower_bound_cycle_time,
            firstCycleStart=self.first_cycle_start,
            maximumSlotDuration=self.maximum_slot_duration,
            numOfPrts=self.num_of_prts,
            numOfSlots=self.num_of_slots,
            slotArrangementMode=self.slot_arrangement_mode,
            wrapTransmission=self.wrap_transmission,
            cycleDuration=self.cycle_duration,
            cycleStart=self.cycle_start,
            slotsUsed=self.slots.slots_used,
            slotStart=[r.starts for _, r in self.slots.items()],
            slotDuration=[r.durations for _, r in self.slots.items()],
        )

    @classmethod
    def from_record(cls, record: CycleRecord) -> "Cycle":
        """Rebuild a cycle from a record, keeping its original instance id and name."""
        cycle = cls.from_config(CycleIdGenerator(record.instance), record)
        cycle.name = record.name
        cycle.cycle_duration = record.cycleDuration
        cycle.cycle_start = record.cycleStart
        for prt, starts, durations in zip(
            record.slotsUsed, record.slotStart, record.slotDuration
        ):
            cycle.add_slot_used(prt, starts, durations)
        logger.debug(f"Loaded {cycle.name} with {len(cycle.slots)} recorded priorities")
        return cycle

    def __repr__(self) -> str:
        return (
            f"Cycle(name={self.name!r}, bounds=[{self.lower_bound_cycle_time}, "
            f"{self.upper_bound_cycle_time}], duration={self.cycle_duration}, "
            f"start={self.cycle_start})"
        )
