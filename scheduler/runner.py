from typing import Iterable
from core.cycle import Cycle
from scheduler.binder import SymbolicVariableBinder
from scheduler.contract import SolverSession, SAT
from .extractor import materialize_cycle
import logging

logger = logging.getLogger(__name__)


def solve_cycle(
    cycle: Cycle,
    binder: SymbolicVariableBinder,
    session: SolverSession,
    priorities: Iterable[int],
) -> str:
    """
    Solve the session and, if it is satisfiable, copy the cycle's results out of the model.

    An unsatisfiable or unknown outcome is returned unchanged and the cycle is left untouched.

    Returns:
        str: The solver outcome (SAT, UNSAT or UNKNOWN).
    """
    logger.info(f"🚀 Solving {cycle.name}...")
    outcome = session.check()
    if outcome != SAT:
        logger.info(f"⚠️ No schedule for {cycle.name}: solver returned {outcome}")
        return outcome

    materialize_cycle(cycle, binder, session.model(), priorities)
    logger.info("✅ Done!")
    return outcome
