"""
scheduler
---------

Solver-facing side of a cycle. Initializes key components:

- `contract`: Capabilities required from a constraint solver.
- `solver`: OR-tools CP-SAT implementation of those capabilities.
- `binder`: Symbolic unknowns of a cycle in one solver context.
- `loader`: Re-asserts solved results in a later solving pass.
- `extractor`: Copies solved values back into a cycle.
- `runner`: Solving and result handling logic.
"""
from . import binder, extractor, loader, runner, solver
