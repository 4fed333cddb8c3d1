"""Feasible parallel-machine scheduling with time windows (PLTR).

Exports the data model, the engine entry point and its error types.
"""

from pltr.algorithm import pltr  # noqa: F401
from pltr.errors import (  # noqa: F401
    InfeasibleInstanceError,
    InvariantViolationError,
    MaxFlowExceedsBoundError,
    PltrError,
    ScheduleValidationError,
)
from pltr.graph import is_schedulable  # noqa: F401
from pltr.models import Instance, Job, JobIdGenerator, Schedule  # noqa: F401

__all__ = [
    "InfeasibleInstanceError",
    "Instance",
    "InvariantViolationError",
    "Job",
    "JobIdGenerator",
    "MaxFlowExceedsBoundError",
    "PltrError",
    "Schedule",
    "ScheduleValidationError",
    "is_schedulable",
    "pltr",
]
