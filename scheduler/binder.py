import logging
from typing import Any, List, Optional
from core.cycle import Cycle
from exceptions.custom_errors import DuplicateUnknownError, SlotIndexError
from scheduler.contract import SolverContext

logger = logging.getLogger(__name__)


class SymbolicVariableBinder:
    """
    Exposes the timing of a cycle as unknowns of one solver context.

    After ``bind()`` the binder owns one duration and one first-start unknown for
    the cycle, a literal for the maximum slot duration and a start and a duration
    unknown for every (priority, slot index) pair in the
    ``num_of_prts x num_of_slots`` rectangle. The unknowns are only valid in the
    context that created them; a new context needs a new binder.
    """

    def __init__(self, context: SolverContext, cycle: Cycle):
        self.context = context
        self.cycle = cycle
        self._cycle_duration: Optional[Any] = None
        self._first_cycle_start: Optional[Any] = None
        self._maximum_slot_duration: Optional[Any] = None
        self._slot_start: List[List[Any]] = []
        self._slot_duration: List[List[Any]] = []
        self._num_of_prts = 0
        self._num_of_slots = 0

    def bind(self) -> "SymbolicVariableBinder":
        """
        Create the unknowns of the cycle in the solver context.

        Raises:
            DuplicateUnknownError: If the cycle was already bound, or any of its
                unknown names already exists in the context.
            InvalidCycleBoundsError, InvalidSlotDurationError: If the cycle is invalid.
        """
        if self.is_bound:
            raise DuplicateUnknownError(
                f"❌ {self.cycle.name} is already bound to this solver context."
            )
        self.cycle.validate()

        ctx = self.context
        name = self.cycle.name
        instance = self.cycle.instance

        # nothing is kept on self until every unknown was created
        cycle_duration = ctx.real_var(f"{name}_{instance}_duration")
        first_cycle_start = ctx.real_var(f"{name}_{instance}_start")
        maximum_slot_duration = ctx.real_val(self.cycle.maximum_slot_duration)

        num_of_prts = self.cycle.num_of_prts
        # an empty budget still leaves one slot per lower priority under AGGRESSIVE_DESCENT
        num_of_slots = max([self.cycle.num_of_slots, *self.cycle.num_of_slots_per_prt])
        slot_start = [
            [ctx.real_var(f"{name}_prt{p}_slot{s}_start") for s in range(num_of_slots)]
            for p in range(num_of_prts)
        ]
        slot_duration = [
            [ctx.real_var(f"{name}_prt{p}_slot{s}_duration") for s in range(num_of_slots)]
            for p in range(num_of_prts)
        ]

        self._num_of_prts = num_of_prts
        self._num_of_slots = num_of_slots
        self._slot_start = slot_start
        self._slot_duration = slot_duration
        self._maximum_slot_duration = maximum_slot_duration
        self._first_cycle_start = first_cycle_start
        self._cycle_duration = cycle_duration

        logger.info(
            f"🔗 Bound {name}: {num_of_prts} priorities x {num_of_slots} slots"
        )
        return self

    @property
    def is_bound(self) -> bool:
        return self._cycle_duration is not None

    @property
    def cycle_duration(self) -> Any:
        return self._cycle_duration

    @property
    def first_cycle_start(self) -> Any:
        return self._first_cycle_start

    @property
    def maximum_slot_duration(self) -> Any:
        return self._maximum_slot_duration

    def nth_cycle_start(self, index: Any) -> Any:
        """
        Start of the cycle repetition ``index``.

        Repetition 0, and any negative index, starts at the first cycle start; every
        later repetition is offset by ``index`` cycle durations. ``index`` is either
        an int or an expression of the solver context.
        """
        ctx = self.context
        if isinstance(index, int):
            if index < 1:
                return self._first_cycle_start
            return ctx.add(
                self._first_cycle_start,
                ctx.mul(self._cycle_duration, ctx.real_val(index)),
            )

        return ctx.ite(
            ctx.ge(index, ctx.real_val(1)),
            ctx.add(self._first_cycle_start, ctx.mul(self._cycle_duration, index)),
            self._first_cycle_start,
        )

    def _check_coordinate(self, prt: int, slot_index: int):
        if not self.is_bound:
            raise SlotIndexError(
                f"❌ {self.cycle.name} has no slot unknowns: bind() was not called."
            )
        if not (0 <= prt < self._num_of_prts and 0 <= slot_index < self._num_of_slots):
            raise SlotIndexError(
                f"❌ Slot (priority {prt}, index {slot_index}) is outside the bound "
                f"{self._num_of_prts} x {self._num_of_slots} slots of {self.cycle.name}."
            )

    def slot_start_variable(self, prt: int, slot_index: int) -> Any:
        self._check_coordinate(prt, slot_index)
        return self._slot_start[prt][slot_index]

    def slot_duration_variable(self, prt: int, slot_index: int) -> Any:
        self._check_coordinate(prt, slot_index)
        return self._slot_duration[prt][slot_index]
