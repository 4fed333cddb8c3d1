"""Core data structures for time-window scheduling instances.

This module defines:
    Job            -- one job with release time, deadline and processing volume.
    JobIdGenerator -- explicit, caller-owned source of fresh job ids.
    Instance       -- immutable container with all jobs plus machine count.
    Schedule       -- per-slot job assignment produced by the PLTR engine.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import Iterable, Iterator

from pltr.errors import ScheduleValidationError


@dataclass(frozen=True)
class Job:
    """Single job with an integral time window.

    Attributes:
        id: Identifier, unique inside an instance.
        r: Release time (first slot the job may use, inclusive).
        d: Deadline (exclusive).
        p: Processing volume, i.e. number of unit slots the job occupies.
    """

    id: int
    r: int
    d: int
    p: int

    def __post_init__(self) -> None:
        if self.r < 0:
            raise ValueError(f"job {self.id}: negative release time {self.r}")
        if not self.r < self.d:
            raise ValueError(f"job {self.id}: empty window [{self.r}, {self.d})")
        if not 0 < self.p <= self.d - self.r:
            raise ValueError(
                f"job {self.id}: processing volume {self.p} does not fit "
                f"window [{self.r}, {self.d})"
            )

    @property
    def window(self) -> range:
        return range(self.r, self.d)


class JobIdGenerator:
    """Hands out increasing job ids.

    One generator is created by whoever builds instances (parser, generator,
    tests) and passed along explicitly, so ids never depend on hidden state.
    """

    def __init__(self, start: int = 0) -> None:
        self._counter: Iterator[int] = itertools.count(start)

    def next_id(self) -> int:
        return next(self._counter)

    def job(self, r: int, d: int, p: int) -> Job:
        """Create a job with the next free id."""
        return Job(id=self.next_id(), r=r, d=d, p=p)


@dataclass(frozen=True)
class Instance:
    """Immutable problem instance.

    Attributes:
        jobs: Jobs in caller order (the order also fixes flow network nodes).
        m: Number of identical machines available in every slot.
        q: Lower bound of busy machines per slot. Only used when the engine
            is asked to enforce it.
        d_max: Largest deadline; the time horizon is ``[0, d_max)``.
        p_total: Sum of all processing volumes.
    """

    jobs: tuple[Job, ...]
    m: int
    q: int = 1
    d_max: int = field(init=False)
    p_total: int = field(init=False)

    def __post_init__(self) -> None:
        jobs = tuple(self.jobs)
        if self.m < 1:
            raise ValueError(f"machine count must be positive, got {self.m}")
        if self.q < 0:
            raise ValueError(f"lower bound q must be non-negative, got {self.q}")
        seen: set[int] = set()
        for job in jobs:
            if job.id in seen:
                raise ValueError(f"duplicate job id {job.id}")
            seen.add(job.id)
        object.__setattr__(self, "jobs", jobs)
        object.__setattr__(self, "d_max", max((job.d for job in jobs), default=0))
        object.__setattr__(self, "p_total", sum(job.p for job in jobs))

    @property
    def n(self) -> int:
        return len(self.jobs)


@dataclass(frozen=True)
class Schedule:
    """Assignment of job ids to unit time slots.

    Fields:
        slots: ``slots[t]`` holds the ids of the jobs processed in slot ``t``.
        m: Machine count of the instance the schedule was built for.
    """

    slots: tuple[tuple[int, ...], ...]
    m: int

    @classmethod
    def from_lists(cls, slots: Iterable[Iterable[int]], m: int) -> Schedule:
        return cls(slots=tuple(tuple(slot) for slot in slots), m=m)

    def __len__(self) -> int:
        return len(self.slots)

    def timeslots_of(self, job: Job) -> list[int]:
        return [t for t, ids in enumerate(self.slots) if job.id in ids]

    def validate(self, instance: Instance) -> bool:
        """Check the schedule against an instance.

        Args:
            instance: Instance the schedule claims to solve.

        Returns:
            True if the schedule is valid.

        Raises:
            ScheduleValidationError: If a slot holds more than ``m`` jobs or
                an unknown/duplicated id, or if a job does not get exactly
                ``p`` slots inside its window.
        """
        known = {job.id for job in instance.jobs}
        for t, ids in enumerate(self.slots):
            if len(ids) > instance.m:
                raise ScheduleValidationError(
                    f"slot {t} holds {len(ids)} jobs on {instance.m} machines"
                )
            if len(set(ids)) != len(ids):
                raise ScheduleValidationError(f"slot {t} lists a job twice: {ids}")
            unknown = set(ids) - known
            if unknown:
                raise ScheduleValidationError(f"slot {t} holds unknown jobs {sorted(unknown)}")
        for job in instance.jobs:
            slots = self.timeslots_of(job)
            if len(slots) != job.p:
                raise ScheduleValidationError(
                    f"job {job.id} not feasibly scheduled: "
                    f"for {len(slots)} of {job.p} units scheduled"
                )
            for t in slots:
                if t < job.r or t >= job.d:
                    raise ScheduleValidationError(
                        f"job {job.id} scheduled in slot {t} outside [{job.r}, {job.d})"
                    )
        return True

    def is_valid_for(self, instance: Instance) -> bool:
        try:
            return self.validate(instance)
        except ScheduleValidationError:
            return False
