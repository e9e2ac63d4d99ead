from ortools.sat.python import cp_model
import logging
from typing import Any, Optional, Tuple
from exceptions.custom_errors import DuplicateUnknownError, NoFeasibleSolutionError
from scheduler.contract import SAT, UNSAT, UNKNOWN
from utils.constants import (
    FIXED_POINT_SCALE,
    TIME_HORIZON,
    SOLVER_TIMEOUT,
    SOLVER_SEED,
    SOLVER_NUM_WORKERS,
)

logger = logging.getLogger(__name__)

"""
CP-SAT backend for the solver capabilities in scheduler.contract.

CP-SAT only knows integers, so every real-valued unknown is an integer variable
counting 1/scale time units. Literals are rounded to that resolution and a product
is divided back by the scale. Constant expressions stay plain Python ints.
"""


def configure_solver(
    timeout: float = SOLVER_TIMEOUT,
    seed: int = SOLVER_SEED,
    num_workers: int = SOLVER_NUM_WORKERS,
) -> cp_model.CpSolver:
    """Configure the CP solver."""
    solver = cp_model.CpSolver()
    solver.parameters.max_time_in_seconds = timeout
    solver.parameters.random_seed = seed
    solver.parameters.num_workers = num_workers
    solver.parameters.log_search_progress = False
    return solver


def get_model_size(model: cp_model.CpModel) -> Tuple[int, int]:
    """Get the number of constraints and variables in the model."""
    proto = model.Proto()
    num_constraints = len(proto.constraints)
    num_vars = len(proto.variables)
    return num_constraints, num_vars


def _is_const(expr: Any) -> bool:
    return isinstance(expr, int)


class CpSatContext:
    """Creates fixed-point real unknowns and expressions on one CpModel."""

    def __init__(
        self,
        scale: int = FIXED_POINT_SCALE,
        horizon: float = TIME_HORIZON,
        model: Optional[cp_model.CpModel] = None,
    ):
        self.model = model if model is not None else cp_model.CpModel()
        self.scale = scale
        self.bound = int(horizon * scale)
        # products of two unknowns before they are scaled back
        self.product_bound = self.bound * self.bound
        self._names: set[str] = set()
        self._aux = 0

    def _aux_var(self, prefix: str, bound: Optional[int] = None) -> cp_model.IntVar:
        self._aux += 1
        bound = self.product_bound if bound is None else bound
        return self.model.NewIntVar(-bound, bound, f"_{prefix}{self._aux}")

    def _as_var(self, expr: Any) -> cp_model.IntVar:
        if isinstance(expr, cp_model.IntVar):
            return expr
        var = self._aux_var("term", self.bound)
        self.model.Add(var == expr)
        return var

    def real_var(self, name: str) -> cp_model.IntVar:
        if name in self._names:
            raise DuplicateUnknownError(
                f"❌ Unknown '{name}' already exists in this solver context."
            )
        self._names.add(name)
        return self.model.NewIntVar(-self.bound, self.bound, name)

    def real_val(self, value: float) -> int:
        return int(round(value * self.scale))

    def add(self, *terms: Any) -> Any:
        return sum(terms)

    def mul(self, a: Any, b: Any) -> Any:
        if _is_const(a) and _is_const(b):
            return int(round(a * b / self.scale))
        if _is_const(a):
            a, b = b, a
        if _is_const(b):
            if b % self.scale == 0:
                return a * (b // self.scale)
            product = self._aux_var("prod")
            self.model.Add(product == a * b)
        else:
            product = self._aux_var("prod")
            self.model.AddMultiplicationEquality(
                product, [self._as_var(a), self._as_var(b)]
            )
        result = self._aux_var("mul")
        self.model.AddDivisionEquality(result, product, self.scale)
        return result

    def ge(self, a: Any, b: Any) -> Any:
        if _is_const(a) and _is_const(b):
            return a >= b
        self._aux += 1
        literal = self.model.NewBoolVar(f"_ge{self._aux}")
        self.model.Add(a >= b).OnlyEnforceIf(literal)
        self.model.Add(a < b).OnlyEnforceIf(literal.Not())
        return literal

    def ite(self, condition: Any, then_expr: Any, else_expr: Any) -> Any:
        if isinstance(condition, bool):
            return then_expr if condition else else_expr
        result = self._aux_var("ite")
        self.model.Add(result == then_expr).OnlyEnforceIf(condition)
        self.model.Add(result == else_expr).OnlyEnforceIf(condition.Not())
        return result

    def eq(self, a: Any, b: Any) -> Any:
        return a == b


class CpSatModel:
    """Values of one CP-SAT solution, converted back to time units."""

    def __init__(self, solver: cp_model.CpSolver, scale: int):
        self.solver = solver
        self.scale = scale

    def value(self, expr: Any) -> float:
        if _is_const(expr):
            return expr / self.scale
        return self.solver.Value(expr) / self.scale


class CpSatSession:
    """Collects constraints on the context's CpModel and solves it."""

    def __init__(
        self, context: CpSatContext, solver: Optional[cp_model.CpSolver] = None
    ):
        self.context = context
        self.solver = solver if solver is not None else configure_solver()
        self.status: Optional[int] = None
        self.outcome: Optional[str] = None

    def add(self, constraint: Any) -> None:
        if isinstance(constraint, bool):
            # both sides were constants
            if not constraint:
                self.context.model.Add(self.context.model.NewConstant(0) == 1)
            return
        self.context.model.Add(constraint)

    def check(self) -> str:
        num_constraints, num_vars = get_model_size(self.context.model)
        logger.info(f"→ #constraints = {num_constraints},  #vars = {num_vars}")

        self.status = self.solver.Solve(self.context.model)
        logger.info(f"⏱ Solve time: {self.solver.WallTime():.2f} seconds")

        if self.status in (cp_model.OPTIMAL, cp_model.FEASIBLE):
            self.outcome = SAT
        elif self.status == cp_model.INFEASIBLE:
            self.outcome = UNSAT
        else:
            self.outcome = UNKNOWN
            logger.info(f"Solver status: {self.solver.StatusName(self.status)}")
        return self.outcome

    def model(self) -> CpSatModel:
        if self.outcome != SAT:
            raise NoFeasibleSolutionError(
                f"❌ No model available: solver outcome is {self.outcome or 'not checked'}."
            )
        return CpSatModel(self.solver, self.context.scale)
