import logging
from core.cycle import Cycle
from core.solution_store import SolutionStore
from exceptions.custom_errors import (
    ReloadOrderError,
    StaleSlotRecordError,
    UnsolvedCycleError,
)
from scheduler.binder import SymbolicVariableBinder
from scheduler.contract import SolverSession

logger = logging.getLogger(__name__)


class ConstraintLoader:
    """
    Pins the solved timing of a cycle in a later solving pass.

    Used when schedules are built incrementally: a cycle solved in an earlier pass
    is bound again in a fresh context and its previous results are asserted as
    equalities, so the new solve only places what is still open.
    """

    def reload(
        self,
        cycle: Cycle,
        binder: SymbolicVariableBinder,
        store: SolutionStore,
        session: SolverSession,
    ) -> int:
        """
        Assert the stored cycle duration, first start and slot starts of ``cycle``.

        Slot durations are not pinned: the new solve derives them again. Callers that
        need fixed durations must assert them on their own.

        Args:
            cycle (Cycle): The solved cycle.
            binder (SymbolicVariableBinder): Binder of the cycle in the session's context.
            store (SolutionStore): Solved slots to pin.
            session (SolverSession): Session receiving the equalities.

        Returns:
            int: The number of equalities asserted.

        Raises:
            ReloadOrderError: If the binder is unbound, belongs to another cycle, or
                to another context than the session.
            UnsolvedCycleError: If the cycle has no solved duration.
            StaleSlotRecordError: If a stored priority or its slot count no longer
                matches the cycle.
        """
        if binder.cycle is not cycle:
            raise ReloadOrderError(
                f"❌ Binder of {binder.cycle.name} cannot reload {cycle.name}."
            )
        if not binder.is_bound:
            raise ReloadOrderError(
                f"❌ {cycle.name} must be bound before its results are reloaded."
            )
        if binder.context is not session.context:
            raise ReloadOrderError(
                f"❌ {cycle.name} is bound to a different solver context than the session."
            )
        if cycle.cycle_duration is None:
            raise UnsolvedCycleError(
                f"❌ {cycle.name} has no solved cycle duration to reload."
            )

        # checked up front so a stale record leaves the session untouched
        slots_per_prt = cycle.num_of_slots_per_prt
        for prt, record in store.items():
            if not 0 <= prt < cycle.num_of_prts:
                raise StaleSlotRecordError(
                    f"❌ Stored priority {prt} is outside the {cycle.num_of_prts} priorities of {cycle.name}."
                )
            if len(record.starts) < slots_per_prt[prt]:
                raise StaleSlotRecordError(
                    f"❌ Priority {prt} of {cycle.name} has {len(record.starts)} stored slots "
                    f"but {slots_per_prt[prt]} are allocated."
                )

        ctx = binder.context
        first_start = (
            cycle.cycle_start if cycle.cycle_start is not None else cycle.first_cycle_start
        )
        session.add(ctx.eq(binder.cycle_duration, ctx.real_val(cycle.cycle_duration)))
        session.add(ctx.eq(binder.first_cycle_start, ctx.real_val(first_start)))
        asserted = 2

        for prt, record in store.items():
            for slot_index in range(slots_per_prt[prt]):
                session.add(
                    ctx.eq(
                        binder.slot_start_variable(prt, slot_index),
                        ctx.real_val(record.starts[slot_index]),
                    )
                )
                asserted += 1

        logger.info(
            f"📥 Reloaded {cycle.name}: {asserted} equalities over priorities {store.slots_used}"
        )
        return asserted
