import pandas as pd
import logging
from typing import Iterable
from core.cycle import Cycle
from exceptions.custom_errors import SlotIndexError
from scheduler.binder import SymbolicVariableBinder
from scheduler.contract import SolverModel

logger = logging.getLogger(__name__)


def materialize_cycle(
    cycle: Cycle,
    binder: SymbolicVariableBinder,
    model: SolverModel,
    priorities: Iterable[int],
) -> Cycle:
    """
    Copy the solved timing of a cycle out of a solver model.

    Sets the cycle duration and start, and records the start and duration of every
    allocated slot of each given priority. Priorities with no allocated slots are
    skipped, and priorities already recorded keep their first result.

    Args:
        cycle (Cycle): The cycle that was solved.
        binder (SymbolicVariableBinder): Binder of the cycle in the solved context.
        model (SolverModel): Model produced by the solve.
        priorities (Iterable[int]): Priorities used by the flows on this cycle.

    Returns:
        Cycle: The same cycle, updated.

    Raises:
        SlotIndexError: If a priority is outside the priorities of the cycle.
    """
    priorities = list(priorities)
    for prt in priorities:
        if not 0 <= prt < cycle.num_of_prts:
            raise SlotIndexError(
                f"❌ Priority {prt} is outside the {cycle.num_of_prts} priorities of {cycle.name}."
            )

    cycle.cycle_duration = model.value(binder.cycle_duration)
    cycle.cycle_start = model.value(binder.first_cycle_start)

    slots_per_prt = cycle.num_of_slots_per_prt
    for prt in priorities:
        num_slots = slots_per_prt[prt]
        if num_slots == 0:
            logger.info(f"⏭️ Priority {prt} has no slots on {cycle.name}")
            continue
        starts = [
            model.value(binder.slot_start_variable(prt, s)) for s in range(num_slots)
        ]
        durations = [
            model.value(binder.slot_duration_variable(prt, s)) for s in range(num_slots)
        ]
        cycle.add_slot_used(prt, starts, durations)

    logger.info(
        f"📁 {cycle.name}: duration = {cycle.cycle_duration}, start = {cycle.cycle_start}, "
        f"priorities = {cycle.slots_used}"
    )
    return cycle


def slots_to_dataframe(cycle: Cycle) -> pd.DataFrame:
    """Flatten the recorded slots of a cycle into one row per slot instance."""
    rows = []
    for prt, record in cycle.slots.items():
        for s, (start, duration) in enumerate(zip(record.starts, record.durations)):
            rows.append(
                {
                    "cycle": cycle.name,
                    "port": cycle.port_name,
                    "priority": prt,
                    "slot": s,
                    "start": start,
                    "duration": duration,
                    "end": start + duration,
                }
            )
    columns = ["cycle", "port", "priority", "slot", "start", "duration", "end"]
    return pd.DataFrame(rows, columns=columns)
