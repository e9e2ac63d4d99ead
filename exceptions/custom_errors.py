class CycleConfigurationError(Exception):
    """Raised when a cycle, its bindings or its reload sequence violate the caller contract."""

    pass


class InvalidCycleBoundsError(CycleConfigurationError):
    """Raised when the lower cycle time bound is greater than the upper bound."""

    pass


class InvalidSlotDurationError(CycleConfigurationError):
    """Raised when the maximum slot duration is not strictly positive."""

    pass


class DuplicateUnknownError(CycleConfigurationError):
    """Raised when a symbolic unknown name is created twice in one solver context."""

    pass


class SlotIndexError(CycleConfigurationError, IndexError):
    """Raised when a (priority, slot) coordinate falls outside the bound rectangle."""

    pass


class ReloadOrderError(CycleConfigurationError):
    """Raised when previous results are reloaded before the cycle was bound in the same context."""


class UnsolvedCycleError(CycleConfigurationError):
    """Raised when solved values are required but the cycle was never solved."""


class UnrecordedPriorityError(LookupError):
    """Raised when the solved slots of a priority are requested before they were recorded."""

    pass


class NoFeasibleSolutionError(Exception):
    """Raised when a model is requested from a solve that did not produce one."""

    pass


class StaleSlotRecordError(CycleConfigurationError):
    """Raised when stored slots no longer fit the priorities or slot budget of their cycle."""
