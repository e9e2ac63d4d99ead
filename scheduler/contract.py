from typing import Any, Protocol

"""
This module describes the capabilities the cycle core needs from a constraint solver.

Expressions and constraints are opaque values owned by the backend; the core only
passes them back to the context that created them.
"""

# Outcomes returned by SolverSession.check()
SAT = "sat"
UNSAT = "unsat"
UNKNOWN = "unknown"


class SolverContext(Protocol):
    """Builds named real-valued unknowns, literals and expressions."""

    def real_var(self, name: str) -> Any:
        """Create a named real-valued unknown. Names are unique within a context."""
        ...

    def real_val(self, value: float) -> Any:
        """Create a real-valued literal."""
        ...

    def add(self, *terms: Any) -> Any: ...

    def mul(self, a: Any, b: Any) -> Any: ...

    def ge(self, a: Any, b: Any) -> Any: ...

    def ite(self, condition: Any, then_expr: Any, else_expr: Any) -> Any:
        """Select then_expr when condition holds, else_expr otherwise."""
        ...

    def eq(self, a: Any, b: Any) -> Any:
        """Build (without asserting) the equality a == b."""
        ...


class SolverModel(Protocol):
    def value(self, expr: Any) -> float:
        """Concrete value of an unknown or expression in this model."""
        ...


class SolverSession(Protocol):
    """A solving session over one SolverContext."""

    context: SolverContext

    def add(self, constraint: Any) -> None: ...

    def check(self) -> str:
        """Solve and return SAT, UNSAT or UNKNOWN."""
        ...

    def model(self) -> SolverModel: ...
