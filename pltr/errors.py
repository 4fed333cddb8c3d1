"""Exception types raised by the PLTR engine.

``InfeasibleInstanceError`` is the only outcome a caller is expected to
handle; everything deriving from ``InvariantViolationError`` means the engine
itself is broken.
"""


class PltrError(Exception):
    """Base class for all engine failures."""


class InfeasibleInstanceError(PltrError):
    """The instance admits no schedule on ``m`` machines."""


class InvariantViolationError(PltrError):
    """An identity the sweep relies on does not hold."""


class MaxFlowExceedsBoundError(InvariantViolationError):
    """A recomputed maximum flow is larger than the total processing volume."""


class ScheduleValidationError(InvariantViolationError):
    """The extracted schedule does not satisfy the instance."""
