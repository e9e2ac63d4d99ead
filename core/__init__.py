"""
core
----

Timing structure of a TSN cycle:

- Cycle & CycleIdGenerator:
  Bounds, solved duration/start and slot budget of one repeating cycle.

- allocate_slots & SlotArrangementMode:
  Split the slot budget of a cycle across its priorities.

- SolutionStore:
  Solved (start, duration) slots per used priority, decoupled from priority numbers.
"""
